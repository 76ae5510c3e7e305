"""
Glossary module for terminology control.

This module handles:
- The per-novel mapping from source terms (character names, places,
  cultivation ranks...) to their preferred target-language rendering
- Loading and saving glossaries as CSV
- Formatting the glossary as a hint block for LLM prompts

Design Philosophy:
- Source terms are unique keys; re-adding a term updates it in place
- Entries keep insertion order, which is the order the substitution
  engine applies them in
- Blank terms are rejected on entry, never silently stored
"""

from __future__ import annotations

import csv
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, Mapping


@dataclass(frozen=True)
class GlossaryEntry:
    """A single glossary entry mapping source term to target term.

    Attributes:
        source: Source language term (e.g. "张三")
        target: Preferred target rendering (e.g. "Zhang San")
        notes: Optional usage notes
    """
    source: str
    target: str
    notes: str = ""


@dataclass
class Glossary:
    """An ordered bilingual glossary for one novel."""
    entries: list[GlossaryEntry] = field(default_factory=list)
    name: str = "default"

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[GlossaryEntry]:
        return iter(self.entries)

    def __contains__(self, source: object) -> bool:
        return any(e.source == source for e in self.entries)

    def add_entry(self, source: str, target: str, notes: str = "") -> None:
        """Add an entry, or replace the target of an existing source term.

        Raises:
            ValueError: if the source or target term is blank
        """
        source = source.strip() if source else ""
        target = target.strip() if target else ""
        if not source or not target:
            raise ValueError("Glossary terms must be non-empty strings")

        entry = GlossaryEntry(source, target, notes)
        for i, existing in enumerate(self.entries):
            if existing.source == source:
                self.entries[i] = entry
                return
        self.entries.append(entry)

    def remove_entry(self, source: str) -> bool:
        """Remove a source term. Returns False if it was not present."""
        before = len(self.entries)
        self.entries = [e for e in self.entries if e.source != source]
        return len(self.entries) != before

    def get_target(self, source: str) -> str | None:
        """Look up the target term for a source term."""
        for entry in self.entries:
            if entry.source == source:
                return entry.target
        return None

    def to_dict(self) -> dict[str, str]:
        """Convert to simple dict (source → target)."""
        return {e.source: e.target for e in self.entries}

    def to_prompt_string(self, max_entries: int = 50) -> str:
        """Format glossary for inclusion in LLM prompts."""
        lines = ["Terminology glossary (use these exact translations):"]
        for entry in self.entries[:max_entries]:
            lines.append(f"  • {entry.source} → {entry.target}")
        if len(self.entries) > max_entries:
            lines.append(f"  ... and {len(self.entries) - max_entries} more terms")
        return "\n".join(lines)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]], name: str = "default") -> Glossary:
        glossary = cls(name=name)
        for source, target in pairs:
            glossary.add_entry(source, target)
        return glossary

    @classmethod
    def from_dict(cls, mapping: Mapping[str, str], name: str = "default") -> Glossary:
        return cls.from_pairs(mapping.items(), name=name)


# ============================================================================
# CSV Loading / Saving
# ============================================================================

def load_glossary_csv(path: str | Path, has_header: bool = True) -> Glossary:
    """Load a glossary from a CSV file.

    Expected format:
        source_term,target_term[,notes]

    Rows with fewer than two columns or a blank term are skipped.
    """
    path = Path(path)
    glossary = Glossary(name=path.stem)

    with open(path, "r", encoding="utf-8", newline="") as f:
        reader = csv.reader(f)
        if has_header:
            next(reader, None)

        for row in reader:
            if len(row) < 2:
                continue
            source = row[0].strip()
            target = row[1].strip()
            if not source or not target:
                continue
            notes = row[2].strip() if len(row) > 2 else ""
            glossary.add_entry(source, target, notes)

    return glossary


def save_glossary_csv(glossary: Glossary, path: str | Path) -> None:
    """Write a glossary as CSV with a source,target,notes header."""
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["source", "target", "notes"])
        for entry in glossary:
            writer.writerow([entry.source, entry.target, entry.notes])
