"""Card assembly: run rows through normalization and section parsing.

Rows are processed strictly in order; a continuation row rewrites the most
recent card, so reordering input changes output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .ingest import DEFAULT_ENCODINGS, is_spreadsheet, read_spreadsheet_rows, read_text_lines
from .normalize import ContinueLast, NewCard, Skip, decide_row
from .sections import ParsedBack, parse_back
from .tokenizer import coerce_cells, tokenize_line

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Card:
    id: str
    category: str
    front: str
    back_original: str
    parsed: ParsedBack

    @classmethod
    def create(cls, card_id: str, category: str, front: str, back: str) -> "Card":
        return cls(
            id=card_id,
            category=category,
            front=front,
            back_original=back,
            parsed=parse_back(back, front),
        )

    def with_continuation(self, text: str) -> "Card":
        """Return this card with a line appended to its back text."""
        back = f"{self.back_original}\n{text}"
        return replace(self, back_original=back, parsed=parse_back(back, self.front))


@dataclass
class BuildResult:
    cards: List[Card] = field(default_factory=list)
    rows_read: int = 0
    skipped: int = 0
    merged: int = 0

    @property
    def is_empty_input(self) -> bool:
        return self.rows_read == 0

    @property
    def no_cards_found(self) -> bool:
        return not self.cards


def card_id_for(ordinal: int) -> str:
    return f"card-{ordinal}"


def build_cards(field_rows: Iterable[Sequence[str]], offset: int = 0) -> BuildResult:
    """Fold field rows into cards.

    Args:
        field_rows: Field values per input row, in input order
        offset: Added to each row ordinal when assigning card ids

    Returns:
        BuildResult with cards in input order and row counters
    """
    result = BuildResult()
    last: Optional[Card] = None

    for ordinal, fields in enumerate(field_rows):
        result.rows_read += 1
        decision = decide_row(fields, last is not None, ordinal)

        if isinstance(decision, Skip):
            LOGGER.debug("Row %d skipped (%s)", ordinal, decision.reason)
            result.skipped += 1
        elif isinstance(decision, ContinueLast):
            last = last.with_continuation(decision.text)
            result.cards[-1] = last
            result.merged += 1
            LOGGER.debug("Row %d merged into %s", ordinal, last.id)
        elif isinstance(decision, NewCard):
            last = Card.create(
                card_id_for(offset + ordinal), decision.category, decision.front, decision.back
            )
            result.cards.append(last)

    LOGGER.info(
        "Built %d cards from %d rows (%d merged, %d skipped)",
        len(result.cards),
        result.rows_read,
        result.merged,
        result.skipped,
    )
    return result


def cards_from_lines(lines: Iterable[str], delimiter: str = ",", offset: int = 0) -> BuildResult:
    return build_cards((tokenize_line(line, delimiter) for line in lines), offset=offset)


def cards_from_rows(rows: Iterable[Iterable], offset: int = 0) -> BuildResult:
    return build_cards((coerce_cells(row) for row in rows), offset=offset)


def load_cards(
    path: str | Path,
    delimiter: str = ",",
    encodings: Sequence[str] = DEFAULT_ENCODINGS,
    offset: int = 0,
) -> BuildResult:
    """Read a vocabulary file and build its cards.

    Workbooks (.xlsx/.xlsm/.xls) are read from their first sheet; every
    other file is decoded as delimited text.
    """
    path = Path(path)
    if is_spreadsheet(path):
        return cards_from_rows(read_spreadsheet_rows(path), offset=offset)
    return cards_from_lines(read_text_lines(path, encodings), delimiter=delimiter, offset=offset)
