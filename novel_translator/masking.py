"""
Glossary substitution: pin proper nouns and terminology across a provider call.

Translation providers are free-text generators, so a glossary alone does not
guarantee that "张三" comes back as "Zhang San" in every chapter. Before the
call, every glossary source term is swapped for a marker token; after the
call, each token is replaced by the preferred target term.

Design:
- Tokens look like «0», «1», ... (guillemet-wrapped indices). If the text or a
  target term already contains such a token, a salt is added («0~1») until
  nothing collides.
- One marker is recorded per glossary entry, whether or not the term occurs,
  so restoration needs nothing but the marker list.
- A term is never substituted inside a token inserted earlier in the same
  call (a source term "1" leaves «1» alone).
- Restoration is literal and done in one pass; a provider that mangles a
  token leaves the mangled text in the output. find_leaked_tokens() reports
  token-shaped residue and find_dropped_markers() the markers that did not
  come back.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Mapping, Sequence, Union

from novel_translator.translate.glossary import Glossary

GlossaryLike = Union[Glossary, Mapping[str, str], None]

TOKEN_OPEN = "«"
TOKEN_CLOSE = "»"

# Any token this module can produce, salted or not
TOKEN_PATTERN = re.compile(r"«\d+(?:~\d+)?»")


@dataclass(frozen=True)
class SubstitutionMarker:
    """One placeholder issued by map_terms().

    Attributes:
        token: Placeholder that replaced the source term
        source_term: Glossary source term
        target_term: Preferred rendering restored in place of the token
    """
    token: str
    source_term: str
    target_term: str


def _glossary_pairs(glossary: GlossaryLike) -> list[tuple[str, str]]:
    """Non-blank (source, target) pairs in insertion order."""
    if glossary is None:
        return []
    if isinstance(glossary, Glossary):
        pairs = [(e.source, e.target) for e in glossary]
    else:
        pairs = list(glossary.items())
    return [(s, t) for s, t in pairs if s and s.strip() and t and t.strip()]


def _make_token(index: int, salt: int) -> str:
    if salt:
        return f"{TOKEN_OPEN}{index}~{salt}{TOKEN_CLOSE}"
    return f"{TOKEN_OPEN}{index}{TOKEN_CLOSE}"


def _allocate_tokens(count: int, haystacks: Sequence[str]) -> list[str]:
    """Allocate count tokens, none of which occurs in any haystack."""
    salt = 0
    while True:
        tokens = [_make_token(i, salt) for i in range(count)]
        if not any(tok in hay for hay in haystacks for tok in tokens):
            return tokens
        salt += 1


def _replace_outside_tokens(
    text: str,
    pattern: re.Pattern,
    token: str,
    issued: list[str],
) -> str:
    """Replace pattern matches with token, skipping tokens already issued."""
    def replacer(match: re.Match) -> str:
        return token

    if not issued:
        return pattern.sub(replacer, text)

    guard = re.compile("(" + "|".join(re.escape(t) for t in issued) + ")")
    parts = guard.split(text)
    # re.split with a capture group alternates: outside, token, outside, ...
    for i in range(0, len(parts), 2):
        parts[i] = pattern.sub(replacer, parts[i])
    return "".join(parts)


def map_terms(text: str, glossary: GlossaryLike) -> tuple[str, list[SubstitutionMarker]]:
    """Swap glossary source terms for marker tokens.

    Args:
        text: Source text (may be empty)
        glossary: Glossary or plain mapping; None or empty means no-op

    Returns:
        (mapped_text, markers), markers in glossary order
    """
    text = text or ""
    pairs = _glossary_pairs(glossary)
    if not pairs:
        return text, []

    tokens = _allocate_tokens(len(pairs), [text] + [t for _, t in pairs])

    markers: list[SubstitutionMarker] = []
    issued: list[str] = []
    result = text
    for token, (source, target) in zip(tokens, pairs):
        pattern = re.compile(re.escape(source))
        result = _replace_outside_tokens(result, pattern, token, issued)
        issued.append(token)
        markers.append(SubstitutionMarker(token=token, source_term=source, target_term=target))

    return result, markers


def restore_terms(text: str, markers: Sequence[SubstitutionMarker]) -> str:
    """Replace each marker token with its target term.

    All tokens are replaced in a single pass, so a restored target term never
    joins with neighbouring text to form another token. Markers whose token is
    absent are a no-op, so calling this twice on the same text changes nothing
    the second time.
    """
    mapping = {m.token: m.target_term for m in markers}
    if not mapping:
        return text or ""
    pattern = re.compile("|".join(re.escape(token) for token in sorted(mapping, key=len, reverse=True)))
    return pattern.sub(lambda m: mapping[m.group(0)], text or "")


# ============================================================================
# Leak detection
# ============================================================================

def find_leaked_tokens(
    text: str,
    source_text: str = "",
    markers: Sequence[SubstitutionMarker] = (),
) -> list[str]:
    """Token-shaped fragments in restored text that the source did not contain.

    A provider that rewrites «1» as «01» leaves such residue behind. Fragments
    that are part of a marker's target term were put there by restoration and
    are not reported.
    """
    targets = [m.target_term for m in markers]
    leaked = []
    for fragment in TOKEN_PATTERN.findall(text or ""):
        if fragment in (source_text or "") or fragment in leaked:
            continue
        if any(fragment in target for target in targets):
            continue
        leaked.append(fragment)
    return leaked


def find_dropped_markers(
    translated: str,
    mapped: str,
    markers: Sequence[SubstitutionMarker],
) -> list[SubstitutionMarker]:
    """Markers present in the mapped text but missing from the provider reply."""
    return [m for m in markers if m.token in mapped and m.token not in (translated or "")]


def count_tokens(text: str) -> int:
    """Count anything in text that looks like a marker token."""
    return len(TOKEN_PATTERN.findall(text or ""))


@dataclass
class SubstitutionSession:
    """One map → translate → restore round trip.

    Usage:
        session = SubstitutionSession(glossary)
        mapped = session.map(chapter_text)
        translated = provider.translate(...).text
        final = session.restore(translated)
        if session.leaked(final) or session.dropped(translated): ...
    """
    glossary: GlossaryLike = None
    markers: list[SubstitutionMarker] = field(default_factory=list)
    terms_found: list[str] = field(default_factory=list)
    source_text: str = field(default="", repr=False)
    mapped_text: str = field(default="", repr=False)
    _used: bool = field(default=False, repr=False)

    def map(self, text: str) -> str:
        if self._used:
            raise RuntimeError("SubstitutionSession is single-use; create a new one")
        self._used = True
        mapped, self.markers = map_terms(text, self.glossary)
        self.source_text = text or ""
        self.mapped_text = mapped
        self.terms_found = [m.source_term for m in self.markers if m.token in mapped]
        return mapped

    def restore(self, text: str) -> str:
        return restore_terms(text, self.markers)

    def leaked(self, text: str) -> list[str]:
        return find_leaked_tokens(text, self.source_text, self.markers)

    def dropped(self, translated: str) -> list[SubstitutionMarker]:
        return find_dropped_markers(translated, self.mapped_text, self.markers)

