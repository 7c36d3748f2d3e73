"""CLI entrypoint for vocab-cards.

Usage:
  python -m vocab_cards.cli parse --input words.csv --out out/cards.json
  python -m vocab_cards.cli categories --input words.xlsx
  python -m vocab_cards.cli search --input words.csv --term cat
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List

from .browse import category_caption, filter_groups, group_by_category, split_front
from .builder import BuildResult, load_cards
from .ingest import SpreadsheetReadError
from .report import print_summary, write_cards

DEFAULT_CONFIG = {
    "delimiter": ",",
    "encodings": ["utf-8", "big5"],
    "id_offset": 0,
    "uncategorized_label": "Uncategorized",
}


def load_config(path: str | Path) -> dict:
    path = Path(path)
    cfg = dict(DEFAULT_CONFIG)
    if not path.exists():
        return cfg
    try:
        cfg.update(json.loads(path.read_text(encoding="utf-8")))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {path}: {e}")
    return cfg


def _load(args: argparse.Namespace, cfg: dict) -> BuildResult:
    return load_cards(
        args.input,
        delimiter=args.delimiter or cfg["delimiter"],
        encodings=cfg["encodings"],
        offset=cfg["id_offset"],
    )


def _run(args: argparse.Namespace):
    """Load config and cards. A None result means the command exits with status 1."""
    try:
        cfg = load_config(args.config)
        result = _load(args, cfg)
    except (FileNotFoundError, ValueError, SpreadsheetReadError) as e:
        print(f"Error: {e}")
        return None, None
    if result.no_cards_found:
        if result.is_empty_input:
            print(f"Input file is empty: {args.input}")
        print("No valid cards found in file.")
        return cfg, None
    return cfg, result


def cmd_parse(args: argparse.Namespace) -> int:
    cfg, result = _run(args)
    if result is None:
        return 1

    if args.out:
        write_cards(args.out, result.cards)
    print_summary(result, cfg["uncategorized_label"])
    if args.out:
        print(f"Wrote cards: {args.out}")
    return 0


def cmd_categories(args: argparse.Namespace) -> int:
    cfg, result = _run(args)
    if result is None:
        return 1

    for group in group_by_category(result.cards, cfg["uncategorized_label"]):
        title, subtitle = category_caption(group.name)
        label = f"{title} / {subtitle}" if subtitle else title
        print(f"{len(group.cards):>5}  {label}")
    return 0


def cmd_search(args: argparse.Namespace) -> int:
    cfg, result = _run(args)
    if result is None:
        return 1

    groups = filter_groups(group_by_category(result.cards, cfg["uncategorized_label"]), args.term)
    if not groups:
        print("No words found.")
        return 0
    for group in groups:
        print(f"{group.name}:")
        for card in group.cards:
            word, pos = split_front(card.front)
            print(f"  {card.id}  {word}" + (f"  {pos}" if pos else ""))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="vocabcards", description="Vocabulary card ingestion CLI")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_input_args(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("--input", required=True, help="Path to vocabulary file (.csv, .txt, .xlsx, .xls)")
        sp.add_argument(
            "--config",
            default="resources/config.json",
            help="Path to config.json (optional; defaults will be used if missing)",
        )
        sp.add_argument("--delimiter", help="Field delimiter for text input (overrides config)")

    parse = sub.add_parser("parse", help="Parse a vocabulary file into cards")
    add_input_args(parse)
    parse.add_argument("--out", help="Write cards to this path (.json for JSON, otherwise CSV)")
    parse.set_defaults(func=cmd_parse)

    categories = sub.add_parser("categories", help="List categories with card counts")
    add_input_args(categories)
    categories.set_defaults(func=cmd_categories)

    search = sub.add_parser("search", help="Find cards whose word or back text contains a term")
    add_input_args(search)
    search.add_argument("--term", required=True, help="Case-insensitive search term")
    search.set_defaults(func=cmd_search)

    return p


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(message)s")
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
