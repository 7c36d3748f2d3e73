"""Row normalization: decide what one input row contributes.

Policy:
- First row that looks like an exported header is skipped.
- Rows with no non-empty field are skipped.
- A single-field row that looks like back text continues the previous card.
- Otherwise fields map to (category, front, back) by column count; rows
  without a front are dropped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence, Tuple, Union

from .sections import TAG_OPEN

# Any pair present in the lowercased first row marks it as a header.
HEADER_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    ("class", "word"),
    ("category", "front"),
    ("category", "word"),
)

CONTINUATION_PREFIXES: Tuple[str, ...] = (TAG_OPEN, "-", "(")

BACK_JOINER = ", "

_ASCII_LETTER_RE = re.compile(r"[A-Za-z]")


@dataclass(frozen=True)
class Skip:
    reason: str


@dataclass(frozen=True)
class ContinueLast:
    text: str


@dataclass(frozen=True)
class NewCard:
    category: str
    front: str
    back: str


RowDecision = Union[Skip, ContinueLast, NewCard]


def is_header_row(fields: Sequence[str]) -> bool:
    joined = " ".join(fields).lower()
    return any(a in joined and b in joined for a, b in HEADER_KEYWORDS)


def is_blank_row(fields: Sequence[str]) -> bool:
    return not any(f.strip() for f in fields)


def is_continuation(text: str) -> bool:
    """True if a lone field reads as more back text for the previous card."""
    return text.startswith(CONTINUATION_PREFIXES) or bool(_ASCII_LETTER_RE.match(text))


def map_fields(fields: Sequence[str]) -> Tuple[str, str, str]:
    """Map fields to (category, front, back) by column count."""
    if len(fields) >= 3:
        return fields[0].strip(), fields[1].strip(), BACK_JOINER.join(fields[2:])
    if len(fields) == 2:
        return "", fields[0].strip(), fields[1]
    if len(fields) == 1:
        return "", fields[0].strip(), ""
    return "", "", ""


def decide_row(fields: Sequence[str], has_last_card: bool, ordinal: int) -> RowDecision:
    """Classify one row.

    Args:
        fields: Tokenized (or coerced) field values
        has_last_card: Whether a card has already been emitted in this run
        ordinal: Zero-based position of the row in the input

    Returns:
        Skip, ContinueLast, or NewCard
    """
    if is_blank_row(fields):
        return Skip("blank")
    if ordinal == 0 and is_header_row(fields):
        return Skip("header")

    if len(fields) == 1 and has_last_card:
        content = fields[0].strip()
        if is_continuation(content):
            return ContinueLast(content)

    category, front, back = map_fields(fields)
    if not front:
        return Skip("no-front")
    return NewCard(category=category, front=front, back=back)
