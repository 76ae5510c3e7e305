"""
Command-line interface for Novel Translator.

Provides commands for:
- Translating text or files (two-pass context mode or a single call)
- Managing novels, chapters and per-novel glossaries
- Reading translated chapters
- Managing API keys

Usage:
    noveltrans translate --text "张三与李四同行" --term 张三=Zhang\\ San
    noveltrans novel create "Coiling Dragon"
    noveltrans chapter add "Coiling Dragon" 1 --file ch1.txt
    noveltrans glossary add "Coiling Dragon" 林雷 Linley
    noveltrans chapter translate "Coiling Dragon" 1 --backend gemini
    noveltrans read "Coiling Dragon" 1
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from novel_translator import __version__, config
from novel_translator.errors import NovelTranslatorError
from novel_translator.library import Chapter, JsonLibraryStore, LibraryStore, Novel
from novel_translator.pipeline import MODES, PipelineConfig, TranslationOutcome, TranslationPipeline
from novel_translator.reader import ReadingView
from novel_translator.translate.base import BACKENDS
from novel_translator.translate.glossary import Glossary, load_glossary_csv, save_glossary_csv
from novel_translator.workflow import translate_chapter

app = typer.Typer(
    name="noveltrans",
    help="Novel Translator: glossary-aware translation of serialized fiction",
    add_completion=False,
)
novel_app = typer.Typer(help="Create, list and rename novels.")
chapter_app = typer.Typer(help="Add, inspect and translate chapters.")
glossary_app = typer.Typer(help="Manage a novel's glossary.")
app.add_typer(novel_app, name="novel")
app.add_typer(chapter_app, name="chapter")
app.add_typer(glossary_app, name="glossary")

console = Console()
logger = logging.getLogger("novel_translator")


def version_callback(value: bool):
    if value:
        console.print(f"Novel Translator v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Show debug logging",
    ),
    library: Optional[Path] = typer.Option(
        None, "--library",
        envvar="NOVELTRANS_LIBRARY",
        help="Library JSON file (default: ~/.noveltrans/library.json)",
    ),
):
    """Novel Translator: manage and translate web novel chapters."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    ctx.obj = {"library": library}


# ============================================================================
# Helpers
# ============================================================================

def _fail(message: str) -> None:
    console.print(f"[red]Error:[/] {escape(message)}", style="bold")
    raise typer.Exit(1)


def _store(ctx: typer.Context) -> LibraryStore:
    path = (ctx.obj or {}).get("library")
    if path is None:
        config.ensure_data_dir()
        path = config.LIBRARY_FILE
    return JsonLibraryStore(path)


def _resolve_novel(store: LibraryStore, ref: str) -> Novel:
    """Find a novel by id, unique id prefix, or title (case-insensitive)."""
    novels = store.list_novels()
    for novel in novels:
        if novel.id == ref:
            return novel
    by_prefix = [n for n in novels if n.id.startswith(ref)]
    if len(by_prefix) == 1:
        return by_prefix[0]
    by_title = [n for n in novels if n.title.lower() == ref.lower()]
    if len(by_title) == 1:
        return by_title[0]
    if len(by_title) > 1 or len(by_prefix) > 1:
        _fail(f"'{ref}' matches more than one novel; use its id")
    _fail(f"No novel matches '{ref}'")


def _resolve_chapter(store: LibraryStore, novel_ref: str, number: int) -> Chapter:
    novel = _resolve_novel(store, novel_ref)
    for chapter in store.list_chapters(novel.id):
        if chapter.number == number:
            return chapter
    _fail(f"{novel.title} has no chapter {number}")


def _parse_terms(terms: list[str]) -> Glossary:
    glossary = Glossary(name="command-line")
    for term in terms:
        if "=" not in term:
            _fail(f"Glossary term must look like SOURCE=TARGET, got '{term}'")
        source, target = term.split("=", 1)
        try:
            glossary.add_entry(source, target)
        except ValueError as e:
            _fail(str(e))
    return glossary


def _build_pipeline(
    backend: str,
    mode: str,
    style: str,
    notes: bool,
    model: Optional[str],
    source_lang: str = config.DEFAULT_SOURCE_LANG,
    target_lang: str = config.DEFAULT_TARGET_LANG,
    progress=None,
) -> TranslationPipeline:
    if mode not in MODES:
        _fail(f"Unknown mode '{mode}'. Use one of: {', '.join(MODES)}")
    translator_kwargs = {"model": model} if model else {}
    pipeline_config = PipelineConfig(
        backend=backend,
        mode=mode,
        style_hint=style,
        want_notes=notes,
        source_lang=source_lang,
        target_lang=target_lang,
        translator_kwargs=translator_kwargs,
    )
    return TranslationPipeline(pipeline_config, progress_callback=progress)


def _print_outcome_details(outcome: TranslationOutcome, show_context: bool) -> None:
    if outcome.notes:
        console.print("\n[bold]Translator notes:[/]")
        for note in outcome.notes:
            console.print(f"  • {escape(note)}")

    if outcome.degraded:
        console.print("[yellow]Note:[/] context analysis failed; translated without extracted context")

    if outcome.dropped_terms:
        console.print(
            "[yellow]Warning:[/] the provider did not keep the glossary marker for: "
            + escape(", ".join(outcome.dropped_terms))
        )
    if outcome.leaked_tokens:
        console.print("[yellow]Warning:[/] unrestored markers in output: " + escape(", ".join(outcome.leaked_tokens)))

    if show_context and outcome.context is not None:
        ctx = outcome.context
        table = Table(title=f"Extracted context: {escape(ctx.work_title)}")
        table.add_column("Name", style="cyan")
        table.add_column("Rendering", style="green")
        table.add_column("Gender", style="dim")
        table.add_column("Description")
        for character in ctx.characters:
            table.add_row(
                escape(character.source_name),
                escape(character.target_name),
                escape(character.gender),
                escape(character.description),
            )
        console.print(table)
        for term in ctx.terminology:
            console.print(f"  [cyan]{escape(term.term)}[/] = {escape(term.meaning)}")
        if ctx.recurring_themes:
            console.print("[dim]Themes:[/] " + escape("; ".join(ctx.recurring_themes)))


# ============================================================================
# Translation
# ============================================================================

@app.command()
def translate(
    input_text: Optional[str] = typer.Option(
        None, "--text", "-t",
        help="Text to translate (for quick tests)",
    ),
    input_file: Optional[Path] = typer.Option(
        None, "--input", "-i",
        help="Input text file",
    ),
    output_file: Optional[Path] = typer.Option(
        None, "--output", "-o",
        help="Output file path",
    ),
    backend: str = typer.Option(
        config.DEFAULT_BACKEND, "--backend", "-b",
        help=f"Translation backend ({', '.join(BACKENDS)})",
    ),
    model: Optional[str] = typer.Option(
        None, "--model", "-m",
        help="Model name for LLM backends",
    ),
    mode: str = typer.Option(
        "context", "--mode",
        help="context (analyze, then translate) or direct (single call)",
    ),
    style: str = typer.Option(
        config.DEFAULT_STYLE_HINT, "--style", "-s",
        help="Tone/style hint",
    ),
    source_lang: str = typer.Option(config.DEFAULT_SOURCE_LANG, "--source", help="Source language code"),
    target_lang: str = typer.Option(config.DEFAULT_TARGET_LANG, "--target", help="Target language code"),
    glossary_file: Optional[Path] = typer.Option(
        None, "--glossary", "-g",
        help="Glossary CSV file (source,target[,notes])",
    ),
    terms: list[str] = typer.Option(
        [], "--term",
        help="Glossary term as SOURCE=TARGET (repeatable)",
    ),
    notes: bool = typer.Option(
        False, "--notes",
        help="Ask for translator notes (direct mode, LLM backends)",
    ),
    show_context: bool = typer.Option(
        False, "--show-context",
        help="Print the extracted characters and terms",
    ),
):
    """Translate text or a text file."""
    if not input_text and not input_file:
        _fail("Provide either --text or --input")

    if input_file:
        if not input_file.exists():
            _fail(f"File not found: {input_file}")
        text = input_file.read_text(encoding="utf-8")
    else:
        text = input_text

    glossary = Glossary(name="command-line")
    if glossary_file:
        if not glossary_file.exists():
            _fail(f"Glossary file not found: {glossary_file}")
        glossary = load_glossary_csv(glossary_file)
        console.print(f"[green]Loaded glossary:[/] {len(glossary)} terms from {glossary_file}")
    for entry in _parse_terms(terms):
        glossary.add_entry(entry.source, entry.target)

    try:
        pipeline = _build_pipeline(backend, mode, style, notes, model, source_lang, target_lang)
        console.print(f"[dim]Translating {len(text)} chars with {pipeline.translator.name} ({mode})...[/]")
        outcome = pipeline.translate(text, glossary=glossary)
    except (NovelTranslatorError, ValueError) as e:
        _fail(str(e))

    if output_file:
        output_file.write_text(outcome.text, encoding="utf-8")
        console.print(f"[green]✓[/] Saved translation to {output_file}")
    else:
        console.print(Panel(escape(outcome.text), title="Translation"))

    _print_outcome_details(outcome, show_context)


@app.command()
def backends():
    """List available translation backends."""
    table = Table(title="Translation Backends")
    table.add_column("Backend", style="cyan")
    table.add_column("Description")
    for name, description in BACKENDS.items():
        table.add_row(name, description)
    console.print(table)


# ============================================================================
# Novels
# ============================================================================

@novel_app.command("create")
def novel_create(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Novel title"),
    private: bool = typer.Option(False, "--private", help="Mark the novel as private"),
):
    """Create a novel."""
    store = _store(ctx)
    try:
        novel = store.create_novel(title, is_public=not private)
    except ValueError as e:
        _fail(str(e))
    console.print(f"[green]✓[/] Created novel [bold]{escape(novel.title)}[/] ({novel.id[:8]})")


@novel_app.command("list")
def novel_list(ctx: typer.Context):
    """List novels, newest first."""
    store = _store(ctx)
    novels = store.list_novels()
    if not novels:
        console.print("[yellow]No novels yet.[/] Create one with: [cyan]noveltrans novel create <title>[/]")
        return

    table = Table(title=f"Novels ({len(novels)})")
    table.add_column("Id", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Chapters", justify="right")
    table.add_column("Visibility")
    for novel in novels:
        table.add_row(
            novel.id[:8],
            escape(novel.title),
            str(len(store.list_chapters(novel.id))),
            "Public" if novel.is_public else "Private",
        )
    console.print(table)


@novel_app.command("rename")
def novel_rename(
    ctx: typer.Context,
    novel: str = typer.Argument(..., help="Novel id or title"),
    title: str = typer.Argument(..., help="New title"),
):
    """Rename a novel."""
    store = _store(ctx)
    found = _resolve_novel(store, novel)
    try:
        updated = store.rename_novel(found.id, title)
    except ValueError as e:
        _fail(str(e))
    console.print(f"[green]✓[/] Updated novel title: {escape(updated.title)}")


# ============================================================================
# Chapters
# ============================================================================

def _read_source(text: Optional[str], file: Optional[Path]) -> str:
    if file:
        if not file.exists():
            _fail(f"File not found: {file}")
        return file.read_text(encoding="utf-8")
    return text or ""


@chapter_app.command("add")
def chapter_add(
    ctx: typer.Context,
    novel: str = typer.Argument(..., help="Novel id or title"),
    number: int = typer.Argument(..., help="Chapter number"),
    title: str = typer.Option("", "--title", help="Chapter title"),
    text: Optional[str] = typer.Option(None, "--text", "-t", help="Source text"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Source text file"),
):
    """Add a chapter with its source text."""
    store = _store(ctx)
    found = _resolve_novel(store, novel)
    content = _read_source(text, file)
    try:
        chapter = store.add_chapter(found.id, number, title, content)
    except ValueError as e:
        _fail(str(e))
    console.print(
        f"[green]✓[/] Added chapter {chapter.number}: {escape(chapter.display_title)} "
        f"({len(chapter.content)} chars)"
    )


@chapter_app.command("list")
def chapter_list(
    ctx: typer.Context,
    novel: str = typer.Argument(..., help="Novel id or title"),
):
    """List the chapters of a novel."""
    store = _store(ctx)
    found = _resolve_novel(store, novel)
    chapters = store.list_chapters(found.id)
    if not chapters:
        console.print(f"[yellow]{escape(found.title)} has no chapters yet.[/]")
        return

    table = Table(title=f"{escape(found.title)}: {len(chapters)} chapters")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Title")
    table.add_column("Source", justify="right")
    table.add_column("Translated")
    for chapter in chapters:
        translated = store.get_translation(chapter.id) is not None
        table.add_row(
            str(chapter.number),
            escape(chapter.display_title),
            f"{len(chapter.content)} chars",
            "[green]✓[/]" if translated else "[dim]-[/]",
        )
    console.print(table)


@chapter_app.command("rename")
def chapter_rename(
    ctx: typer.Context,
    novel: str = typer.Argument(..., help="Novel id or title"),
    number: int = typer.Argument(..., help="Chapter number"),
    title: str = typer.Argument(..., help="New title"),
):
    """Rename a chapter."""
    store = _store(ctx)
    chapter = _resolve_chapter(store, novel, number)
    try:
        chapter = store.rename_chapter(chapter.id, title)
    except ValueError as e:
        _fail(str(e))
    console.print(f"[green]✓[/] Updated chapter title: {escape(chapter.title)}")


@chapter_app.command("source")
def chapter_source(
    ctx: typer.Context,
    novel: str = typer.Argument(..., help="Novel id or title"),
    number: int = typer.Argument(..., help="Chapter number"),
    text: Optional[str] = typer.Option(None, "--text", "-t", help="Source text"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Source text file"),
):
    """Replace a chapter's source text."""
    if not text and not file:
        _fail("Provide either --text or --file")
    store = _store(ctx)
    chapter = _resolve_chapter(store, novel, number)
    chapter = store.update_chapter_content(chapter.id, _read_source(text, file))
    console.print(f"[green]✓[/] Saved source ({len(chapter.content)} chars)")


@chapter_app.command("show")
def chapter_show(
    ctx: typer.Context,
    novel: str = typer.Argument(..., help="Novel id or title"),
    number: int = typer.Argument(..., help="Chapter number"),
):
    """Show a chapter's source text and translation side by side."""
    store = _store(ctx)
    chapter = _resolve_chapter(store, novel, number)
    translation = store.get_translation(chapter.id)

    body = escape(chapter.content) if chapter.content else "[dim](empty)[/]"
    console.print(Panel(body, title=f"Chapter {chapter.number}: {escape(chapter.display_title)}"))
    if translation:
        console.print(Panel(escape(translation.text), title="Translation"))
        for note in translation.notes:
            console.print(f"  • {escape(note)}")
    else:
        console.print("[dim]No translation yet.[/]")


@chapter_app.command("translate")
def chapter_translate(
    ctx: typer.Context,
    novel: str = typer.Argument(..., help="Novel id or title"),
    number: int = typer.Argument(..., help="Chapter number"),
    backend: str = typer.Option(config.DEFAULT_BACKEND, "--backend", "-b", help="Translation backend"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Model name for LLM backends"),
    mode: str = typer.Option("context", "--mode", help="context or direct"),
    style: str = typer.Option(config.DEFAULT_STYLE_HINT, "--style", "-s", help="Tone/style hint"),
    notes: bool = typer.Option(False, "--notes", help="Ask for translator notes"),
    show_context: bool = typer.Option(False, "--show-context", help="Print the extracted context"),
):
    """Translate a stored chapter and save the result."""
    store = _store(ctx)
    chapter = _resolve_chapter(store, novel, number)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Starting...", total=None)

        def update_progress(msg: str, pct: float):
            progress.update(task, description=msg)

        try:
            pipeline = _build_pipeline(backend, mode, style, notes, model, progress=update_progress)
            result = translate_chapter(store, chapter.id, pipeline)
        except (NovelTranslatorError, ValueError) as e:
            progress.stop()
            _fail(str(e))

    if result.title_updated:
        console.print(f"[green]✓[/] Chapter title set to: {escape(result.chapter.title)}")
    console.print(
        f"[green]✓[/] Saved translation of chapter {result.chapter.number} "
        f"({len(result.translation.text)} chars)"
    )
    _print_outcome_details(result.outcome, show_context)


# ============================================================================
# Glossary
# ============================================================================

@glossary_app.command("add")
def glossary_add(
    ctx: typer.Context,
    novel: str = typer.Argument(..., help="Novel id or title"),
    source: str = typer.Argument(..., help="Source term"),
    target: str = typer.Argument(..., help="Preferred rendering"),
    notes: str = typer.Option("", "--notes", help="Usage notes"),
):
    """Add or update a glossary term."""
    store = _store(ctx)
    found = _resolve_novel(store, novel)
    try:
        glossary = store.add_glossary_term(found.id, source, target, notes)
    except ValueError as e:
        _fail(str(e))
    console.print(f"[green]✓[/] {escape(source)} → {escape(target)} ({len(glossary)} terms)")


@glossary_app.command("remove")
def glossary_remove(
    ctx: typer.Context,
    novel: str = typer.Argument(..., help="Novel id or title"),
    source: str = typer.Argument(..., help="Source term"),
):
    """Remove a glossary term."""
    store = _store(ctx)
    found = _resolve_novel(store, novel)
    if store.remove_glossary_term(found.id, source):
        console.print(f"[green]✓[/] Removed {escape(source)}")
    else:
        console.print(f"[yellow]Term not found:[/] {escape(source)}")


@glossary_app.command("list")
def glossary_list(
    ctx: typer.Context,
    novel: str = typer.Argument(..., help="Novel id or title"),
):
    """List a novel's glossary."""
    store = _store(ctx)
    found = _resolve_novel(store, novel)
    gloss = store.get_glossary(found.id)
    if not len(gloss):
        console.print(f"[yellow]{escape(found.title)} has no glossary terms.[/]")
        return

    table = Table(title=f"Glossary: {gloss.name} ({len(gloss)} terms)")
    table.add_column("Source", style="cyan")
    table.add_column("Target", style="green")
    table.add_column("Notes", style="dim")
    for entry in gloss:
        table.add_row(escape(entry.source), escape(entry.target), escape(entry.notes))
    console.print(table)


@glossary_app.command("import")
def glossary_import(
    ctx: typer.Context,
    novel: str = typer.Argument(..., help="Novel id or title"),
    path: Path = typer.Argument(..., help="CSV file (source,target[,notes]) with header"),
):
    """Import glossary terms from CSV."""
    if not path.exists():
        _fail(f"File not found: {path}")
    store = _store(ctx)
    found = _resolve_novel(store, novel)
    imported = load_glossary_csv(path)
    glossary = store.import_glossary(found.id, imported)
    console.print(f"[green]✓[/] Imported {len(imported)} terms ({len(glossary)} total)")


@glossary_app.command("export")
def glossary_export(
    ctx: typer.Context,
    novel: str = typer.Argument(..., help="Novel id or title"),
    path: Path = typer.Argument(..., help="Destination CSV file"),
):
    """Export a novel's glossary to CSV."""
    store = _store(ctx)
    found = _resolve_novel(store, novel)
    glossary = store.get_glossary(found.id)
    save_glossary_csv(glossary, path)
    console.print(f"[green]✓[/] Wrote {len(glossary)} terms to {path}")


# ============================================================================
# Reading mode
# ============================================================================

def _render_view(view: ReadingView) -> None:
    console.rule(f"[bold]{escape(view.heading)}")
    console.print(f"[dim]{view.position}[/]", justify="center")
    console.print()
    console.print(f"[bold]{escape(view.chapter_heading)}[/]\n")
    if view.has_translation:
        for paragraph in view.paragraphs:
            console.print(escape(paragraph) + "\n")
    else:
        console.print(f"[dim]{view.body}[/]")
    console.rule()


@app.command()
def read(
    ctx: typer.Context,
    novel: str = typer.Argument(..., help="Novel id or title"),
    number: Optional[int] = typer.Argument(None, help="Chapter number (default: first)"),
    interactive: bool = typer.Option(
        False, "--interactive",
        help="Page through chapters with n/p/q",
    ),
):
    """Read translated chapters."""
    store = _store(ctx)
    found = _resolve_novel(store, novel)
    chapters = store.list_chapters(found.id)
    if not chapters:
        _fail(f"{found.title} has no chapters yet")

    chapter = chapters[0] if number is None else _resolve_chapter(store, found.id, number)
    view = ReadingView.for_chapter(store, chapter.id)
    _render_view(view)

    while interactive:
        choice = typer.prompt("[n]ext, [p]revious or [q]uit", default="q").strip().lower()
        if choice.startswith("n") and view.has_next:
            view = ReadingView.for_chapter(store, view.next_chapter_id)
        elif choice.startswith("p") and view.has_previous:
            view = ReadingView.for_chapter(store, view.previous_chapter_id)
        elif choice.startswith("q"):
            break
        else:
            console.print("[yellow]No chapter in that direction.[/]")
            continue
        _render_view(view)


# ============================================================================
# API keys
# ============================================================================

@app.command()
def keys(
    action: str = typer.Argument(..., help="Action: list, set, delete, status"),
    service: Optional[str] = typer.Argument(None, help="Service name (gemini, openai, deepseek, ...)"),
):
    """Manage API keys.

    Examples:
        noveltrans keys list              # List all keys
        noveltrans keys set gemini        # Set Gemini key
        noveltrans keys status gemini     # Check Gemini key status
        noveltrans keys delete gemini     # Delete Gemini key
    """
    from novel_translator.keys import SERVICES, KeyManager, env_var_for

    km = KeyManager()

    if action == "list":
        table = Table(title="API Keys Status")
        table.add_column("Service", style="cyan")
        table.add_column("Status", style="green")
        table.add_column("Source", style="yellow")
        table.add_column("Value", style="dim")

        for key_info in km.list_keys():
            status = "✓ Set" if key_info.is_set else "✗ Not set"
            status_color = "green" if key_info.is_set else "red"
            table.add_row(
                key_info.service,
                f"[{status_color}]{status}[/]",
                key_info.source,
                key_info.masked_value if key_info.is_set else "-",
            )

        console.print(table)
        console.print("\n[dim]Priority: env > keychain > config file[/]")
        return

    if action not in ("set", "delete", "status"):
        console.print(f"[red]Error:[/] Unknown action '{action}'")
        console.print("Available actions: list, set, delete, status")
        raise typer.Exit(1)

    if not service:
        console.print("[red]Error:[/] Service name required")
        console.print(f"Available services: {', '.join(SERVICES)}")
        raise typer.Exit(1)

    if action == "set":
        key = typer.prompt(f"Enter API key for {service}", hide_input=True)
        if not key.strip():
            _fail("Key cannot be empty")

        storage = km.set_key(service, key.strip())
        console.print(f"[green]✓[/] API key for {service} saved to {storage}")
        if storage == "config":
            console.print(f"[yellow]Note:[/] Key stored in local file ({km.config_file})")
            console.print("       For better security, use environment variables")

    elif action == "delete":
        if km.delete_key(service):
            console.print(f"[green]✓[/] API key for {service} deleted")
        else:
            console.print(f"[yellow]⚠[/] No key found to delete for {service}")

    else:
        key_info = km.get_key_info(service)
        if key_info.is_set:
            console.print(f"[green]✓[/] API key for {service} is set")
            console.print(f"    Source: {key_info.source}")
            console.print(f"    Value: {key_info.masked_value}")
        else:
            console.print(f"[red]✗[/] No API key found for {service}")
            console.print("\nTo set the key:")
            console.print(f"  Option 1: [cyan]noveltrans keys set {service}[/]")
            console.print(f"  Option 2: [cyan]export {env_var_for(service)}='your-key-here'[/]")


if __name__ == "__main__":
    app()
