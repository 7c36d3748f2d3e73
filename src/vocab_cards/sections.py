"""Tagged-section parsing of a card's back text.

Back text is free-form, optionally annotated with bracketed tags:

    【中文】貓
    【搭配詞】pet cat, stray cat
    【例句】I have a cat.
    【詞性變化】catty (adj.)

Recognized tags start a new section; text before the first tag becomes an
untitled definition. Text with no tag bracket at all is a single definition.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple


class SectionKind(str, Enum):
    DEFINITION = "definition"
    COLLOCATION = "collocation"
    EXAMPLE = "example"
    WORD_FAMILY = "word_family"
    OTHER = "other"


TAG_OPEN = "【"
TAG_CLOSE = "】"

# Tag title -> section kind. Any other bracketed title maps to OTHER.
TAG_KINDS: Dict[str, SectionKind] = {
    "中文": SectionKind.DEFINITION,
    "搭配詞": SectionKind.COLLOCATION,
    "例句": SectionKind.EXAMPLE,
    "詞性變化": SectionKind.WORD_FAMILY,
}

POS_ABBREVIATIONS: Tuple[str, ...] = (
    "n.",
    "v.",
    "adj.",
    "adv.",
    "vt.",
    "vi.",
    "prep.",
    "conj.",
    "interj.",
    "pron.",
)

POS_WORDS: Tuple[str, ...] = (
    "noun",
    "verb",
    "adjective",
    "adverb",
    "preposition",
    "conjunction",
    "interjection",
    "pronoun",
)


def _build_pos_re() -> re.Pattern:
    abbrevs = "|".join(re.escape(a[:-1]) for a in POS_ABBREVIATIONS)
    words = "|".join(POS_WORDS)
    return re.compile(rf"(?<![A-Za-z])(?:(?:{abbrevs})\.|(?:{words})\b)", re.IGNORECASE)


_POS_RE = _build_pos_re()
_PAREN_RE = re.compile(r"\([^)]*\)")
_SPLIT_RE = re.compile(
    "(?=" + re.escape(TAG_OPEN) + "(?:" + "|".join(map(re.escape, TAG_KINDS)) + ")" + re.escape(TAG_CLOSE) + ")"
)
_SEGMENT_RE = re.compile(re.escape(TAG_OPEN) + "(.*?)" + re.escape(TAG_CLOSE) + r"([\s\S]*)")


@dataclass(frozen=True)
class Section:
    kind: SectionKind
    title: str
    content: str


@dataclass(frozen=True)
class ParsedBack:
    parts_of_speech: Tuple[str, ...] = ()
    sections: Tuple[Section, ...] = ()


def kind_for_tag(title: str) -> SectionKind:
    return TAG_KINDS.get(title, SectionKind.OTHER)


def normalize_newlines(text: str) -> str:
    """Convert CRLF and lone CR to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def extract_parts_of_speech(front: str) -> List[str]:
    """Return the front's parenthetical POS marker, parentheses included.

    Only the first parenthetical is considered, and only if it names a
    recognized part of speech.
    """
    if not front:
        return []
    m = _PAREN_RE.search(front)
    if m and _POS_RE.search(m.group(0)[1:-1]):
        return [m.group(0)]
    return []


def split_segments(text: str) -> List[str]:
    """Split before every recognized tag; leading untagged text is kept."""
    return _SPLIT_RE.split(text)


def parse_segment(segment: str) -> Section | None:
    trimmed = segment.strip()
    if not trimmed:
        return None
    m = _SEGMENT_RE.match(trimmed)
    if m:
        title = m.group(1).strip()
        return Section(kind=kind_for_tag(title), title=title, content=m.group(2).strip())
    return Section(kind=SectionKind.DEFINITION, title="", content=trimmed)


def parse_back(back: str, front: str) -> ParsedBack:
    """Parse back text into parts of speech and ordered sections.

    Args:
        back: Raw back-field text
        front: Front text of the owning card (source of the POS marker)

    Returns:
        ParsedBack; empty when back is empty
    """
    if not back:
        return ParsedBack()

    text = normalize_newlines(back)
    pos = tuple(extract_parts_of_speech(front or ""))

    if TAG_OPEN not in text:
        return ParsedBack(
            parts_of_speech=pos,
            sections=(Section(kind=SectionKind.DEFINITION, title="", content=text.strip()),),
        )

    sections = []
    for segment in split_segments(text):
        section = parse_segment(segment)
        if section is not None:
            sections.append(section)
    return ParsedBack(parts_of_speech=pos, sections=tuple(sections))
