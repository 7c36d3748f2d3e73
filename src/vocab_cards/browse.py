"""Read-only views over built cards for browsing front ends.

Nothing here mutates a card; edits go back through the ingestion pipeline.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .builder import Card
from .sections import Section, SectionKind

UNCATEGORIZED = "Uncategorized"

_FRONT_POS_RE = re.compile(r"^(.*?)(\s*[\(\[（].*?[\)\]）])$", re.DOTALL)
_CJK_RE = re.compile(r"[\u4e00-\u9fa5\u3000-\u303f\uff01-\uff5e]")
_CJK_IDEOGRAPH_RE = re.compile(r"[\u4e00-\u9fa5]")
_CAPTION_PARENS_RE = re.compile(r"^(.*?)\s*[（(](.*)[)）]$", re.DOTALL)
_LINE_BREAK_RE = re.compile(r"\r?\n")

# Section kind -> item separator used when listing section content.
_ITEM_SPLIT: Dict[SectionKind, re.Pattern] = {
    SectionKind.COLLOCATION: re.compile(r"[\n,]+"),
    SectionKind.EXAMPLE: re.compile(r"\n"),
    SectionKind.WORD_FAMILY: re.compile(r"\n+"),
}


@dataclass
class CategoryGroup:
    name: str
    cards: List[Card] = field(default_factory=list)


def group_by_category(cards: Sequence[Card], uncategorized_label: str = UNCATEGORIZED) -> List[CategoryGroup]:
    """Group cards by category.

    Groups are sorted by name with the uncategorized group last; cards keep
    their input order inside a group.
    """
    groups: Dict[str, CategoryGroup] = {}
    for card in cards:
        name = card.category or uncategorized_label
        groups.setdefault(name, CategoryGroup(name)).cards.append(card)
    names = sorted(groups, key=lambda n: (n == uncategorized_label, n))
    return [groups[n] for n in names]


def card_matches(card: Card, term: str) -> bool:
    needle = term.lower()
    return needle in card.front.lower() or needle in card.back_original.lower()


def search_cards(cards: Sequence[Card], term: str) -> List[Card]:
    """Cards whose front or raw back text contains term (case-insensitive)."""
    if not term:
        return list(cards)
    return [c for c in cards if card_matches(c, term)]


def filter_groups(groups: Sequence[CategoryGroup], term: str) -> List[CategoryGroup]:
    if not term:
        return list(groups)
    out = []
    for g in groups:
        matched = search_cards(g.cards, term)
        if matched:
            out.append(CategoryGroup(g.name, matched))
    return out


def split_front(front: str) -> Tuple[str, Optional[str]]:
    """Split a trailing bracketed marker off the front text.

    "apple (n.)" -> ("apple", "(n.)"); full-width and square brackets work too.
    """
    m = _FRONT_POS_RE.match(front)
    if m:
        return m.group(1).strip(), m.group(2).strip()
    return front, None


def section_items(section: Section) -> List[str]:
    """Individual display items of a section."""
    pattern = _ITEM_SPLIT.get(section.kind)
    if pattern is None:
        return [section.content] if section.content.strip() else []
    return [s.strip() for s in pattern.split(section.content) if s.strip()]


def english_only(text: str) -> str:
    """Drop CJK ideographs, CJK punctuation and full-width forms."""
    return _CJK_RE.sub("", text or "").strip()


def category_caption(name: str) -> Tuple[str, str]:
    """Split a category label into a main title and a subtitle.

    Tried in order: "Animals (動物)", a label spanning two lines, then a
    split before the first CJK ideograph ("Animals 動物"). A label matching
    none of these is all title.
    """
    m = _CAPTION_PARENS_RE.match(name)
    if m:
        return m.group(1).strip(), m.group(2).strip()
    if _LINE_BREAK_RE.search(name):
        first, *rest = _LINE_BREAK_RE.split(name)
        return first.strip(), " ".join(rest).strip()
    m = _CJK_IDEOGRAPH_RE.search(name)
    if m and m.start() > 0:
        return name[: m.start()].strip(), name[m.start():].strip()
    return name, ""


def neighbours(cards: Sequence[Card], card_id: str) -> Tuple[Optional[str], Optional[str]]:
    """Ids of the cards before and after card_id (None at either end or if absent)."""
    ids = [c.id for c in cards]
    if card_id not in ids:
        return None, None
    i = ids.index(card_id)
    prev_id = ids[i - 1] if i > 0 else None
    next_id = ids[i + 1] if i + 1 < len(ids) else None
    return prev_id, next_id
