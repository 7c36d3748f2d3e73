"""Reporting utilities for built cards."""

from __future__ import annotations

import json
from collections import Counter
from pathlib import Path
from typing import Iterable, List

from .browse import UNCATEGORIZED, group_by_category
from .builder import BuildResult, Card
from .ingest import write_csv


def card_to_dict(card: Card) -> dict:
    return {
        "id": card.id,
        "category": card.category,
        "front": card.front,
        "back_original": card.back_original,
        "parts_of_speech": list(card.parsed.parts_of_speech),
        "sections": [
            {"kind": s.kind.value, "title": s.title, "content": s.content}
            for s in card.parsed.sections
        ],
    }


CARD_COLUMNS = (
    "id",
    "category",
    "front",
    "back_original",
    "parts_of_speech",
    "section_kinds",
    "sections",
)


def cards_to_rows(cards: Iterable[Card]) -> List[dict]:
    """Flatten cards to one CSV row each; sections are JSON-encoded."""
    rows = []
    for card in cards:
        d = card_to_dict(card)
        rows.append(
            {
                "id": d["id"],
                "category": d["category"],
                "front": d["front"],
                "back_original": d["back_original"],
                "parts_of_speech": " ".join(d["parts_of_speech"]),
                "section_kinds": " ".join(s["kind"] for s in d["sections"]),
                "sections": json.dumps(d["sections"], ensure_ascii=False),
            }
        )
    return rows


def write_cards_csv(path: str | Path, cards: Iterable[Card]) -> None:
    write_csv(path, cards_to_rows(cards), fieldnames=CARD_COLUMNS)


def write_cards_json(path: str | Path, cards: Iterable[Card]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [card_to_dict(c) for c in cards]
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


def write_cards(path: str | Path, cards: Iterable[Card]) -> None:
    """Write cards as JSON when path ends in .json, otherwise as CSV."""
    if Path(path).suffix.lower() == ".json":
        write_cards_json(path, cards)
    else:
        write_cards_csv(path, cards)


def print_summary(result: BuildResult, uncategorized_label: str = UNCATEGORIZED) -> None:
    """Print summary of an ingestion run.

    Args:
        result: Build result to summarize
        uncategorized_label: Group name shown for cards without a category
    """
    groups = group_by_category(result.cards, uncategorized_label)
    kinds = Counter(s.kind.value for c in result.cards for s in c.parsed.sections)

    print("Ingestion Summary:")
    print(f"  Rows read:       {result.rows_read}")
    print(f"  Cards built:     {len(result.cards)}")
    print(f"  Rows merged:     {result.merged}")
    print(f"  Rows skipped:    {result.skipped}")
    print(f"  Categories:      {len(groups)}")
    print()

    print("Section Summary:")
    for kind in ("definition", "collocation", "example", "word_family", "other"):
        print(f"  {kind:>11}: {kinds.get(kind, 0)}")
    print(f"  {'total':>11}: {sum(kinds.values())}")
