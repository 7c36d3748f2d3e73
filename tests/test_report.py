"""Tests for card export and summaries."""

import csv
import json

from vocab_cards.builder import cards_from_lines
from vocab_cards.report import CARD_COLUMNS, card_to_dict, cards_to_rows, print_summary, write_cards


def _result():
    return cards_from_lines(
        [
            "Category,Front,Back",
            "Animals,cat (n.),【中文】貓",
            "【例句】I have a cat.",
            ",run,to move fast",
            "X,,dropped",
        ]
    )


class TestCardToDict:
    """Test card serialization."""

    def test_fields(self):
        d = card_to_dict(_result().cards[0])
        assert d["id"] == "card-1"
        assert d["parts_of_speech"] == ["(n.)"]
        assert d["sections"] == [
            {"kind": "definition", "title": "中文", "content": "貓"},
            {"kind": "example", "title": "例句", "content": "I have a cat."},
        ]

    def test_rows(self):
        rows = cards_to_rows(_result().cards)
        assert [r["front"] for r in rows] == ["cat (n.)", "run"]
        assert rows[0]["section_kinds"] == "definition example"
        assert json.loads(rows[1]["sections"]) == [
            {"kind": "definition", "title": "", "content": "to move fast"}
        ]


class TestWriteCards:
    """Test writing cards to disk."""

    def test_json(self, tmp_path):
        path = tmp_path / "out" / "cards.json"
        write_cards(path, _result().cards)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert [d["front"] for d in data] == ["cat (n.)", "run"]
        assert data[1]["category"] == ""

    def test_csv(self, tmp_path):
        path = tmp_path / "cards.csv"
        write_cards(path, _result().cards)
        with path.open("r", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert rows[0]["back_original"] == "【中文】貓\n【例句】I have a cat."

    def test_csv_columns(self, tmp_path):
        path = tmp_path / "cards.csv"
        write_cards(path, _result().cards)
        with path.open("r", encoding="utf-8") as f:
            assert tuple(csv.DictReader(f).fieldnames) == CARD_COLUMNS

    def test_csv_no_cards_keeps_header(self, tmp_path):
        path = tmp_path / "cards.csv"
        write_cards(path, [])
        assert path.read_text(encoding="utf-8").splitlines() == [",".join(CARD_COLUMNS)]


class TestPrintSummary:
    """Test summary output."""

    def test_counts(self, capsys):
        print_summary(_result())
        out = capsys.readouterr().out
        assert "Rows read:       5" in out
        assert "Cards built:     2" in out
        assert "Rows merged:     1" in out
        assert "Rows skipped:    2" in out
        assert "Categories:      2" in out
        assert " definition: 2" in out
        assert "    example: 1" in out
