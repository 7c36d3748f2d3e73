"""Tests for back-text section parsing."""

import pytest
from vocab_cards.sections import (
    ParsedBack,
    Section,
    SectionKind,
    extract_parts_of_speech,
    kind_for_tag,
    normalize_newlines,
    parse_back,
)


class TestUntaggedText:
    """Test fallback for text without tag brackets."""

    def test_single_definition(self):
        result = parse_back("a four-legged creature", "animal")
        assert result.sections == (Section(SectionKind.DEFINITION, "", "a four-legged creature"),)

    def test_content_trimmed(self):
        result = parse_back("  feline \n", "cat")
        assert result.sections[0].content == "feline"

    def test_empty_back(self):
        assert parse_back("", "cat (n.)") == ParsedBack()
        assert parse_back(None, "cat") == ParsedBack(parts_of_speech=(), sections=())


class TestTaggedText:
    """Test splitting on the recognized tags."""

    def test_two_tags_in_order(self):
        result = parse_back("【中文】貓\n【例句】I have a cat.", "cat")
        assert result.sections == (
            Section(SectionKind.DEFINITION, "中文", "貓"),
            Section(SectionKind.EXAMPLE, "例句", "I have a cat."),
        )

    def test_source_order_preserved(self):
        result = parse_back("【例句】I have a cat.\n【中文】貓", "cat")
        assert [s.kind for s in result.sections] == [SectionKind.EXAMPLE, SectionKind.DEFINITION]

    def test_all_four_tags(self):
        text = "【中文】貓\n【搭配詞】pet cat, stray cat\n【例句】I have a cat.\n【詞性變化】catty (adj.)"
        result = parse_back(text, "cat")
        assert [s.kind for s in result.sections] == [
            SectionKind.DEFINITION,
            SectionKind.COLLOCATION,
            SectionKind.EXAMPLE,
            SectionKind.WORD_FAMILY,
        ]
        assert result.sections[1].content == "pet cat, stray cat"

    def test_leading_untagged_text(self):
        result = parse_back("n. 動物\n【中文】動物", "animal")
        assert result.sections == (
            Section(SectionKind.DEFINITION, "", "n. 動物"),
            Section(SectionKind.DEFINITION, "中文", "動物"),
        )

    def test_unknown_tag_is_other(self):
        result = parse_back("【備註】rare usage", "cat")
        assert result.sections == (Section(SectionKind.OTHER, "備註", "rare usage"),)

    def test_unknown_tag_does_not_split(self):
        """Test that only recognized tags start a new section."""
        result = parse_back("【中文】貓【備註】x", "cat")
        assert result.sections == (Section(SectionKind.DEFINITION, "中文", "貓【備註】x"),)

    def test_bracket_not_at_segment_start(self):
        result = parse_back("see 【note】 below", "cat")
        assert result.sections == (Section(SectionKind.DEFINITION, "", "see 【note】 below"),)

    def test_tag_title_cannot_span_lines(self):
        """Test that a bracket closed on a later line is not a tag."""
        result = parse_back("【note\nmore】tail", "x")
        assert result.sections == (Section(SectionKind.DEFINITION, "", "【note\nmore】tail"),)

    def test_unclosed_bracket_before_tag(self):
        result = parse_back("【draft\n【中文】貓", "cat")
        assert result.sections == (
            Section(SectionKind.DEFINITION, "", "【draft"),
            Section(SectionKind.DEFINITION, "中文", "貓"),
        )

    def test_multiline_content(self):
        result = parse_back("【例句】I have a cat.\nThe cat sleeps.", "cat")
        assert result.sections[0].content == "I have a cat.\nThe cat sleeps."

    def test_empty_tag_content(self):
        result = parse_back("【中文】\n【例句】x", "cat")
        assert result.sections[0] == Section(SectionKind.DEFINITION, "中文", "")


class TestNewlines:
    """Test newline normalization."""

    def test_normalize_newlines(self):
        assert normalize_newlines("a\r\nb\rc\nd") == "a\nb\nc\nd"

    def test_crlf_in_sections(self):
        result = parse_back("【中文】貓\r\n【例句】A\rB", "cat")
        assert result.sections[1].content == "A\nB"


class TestPartsOfSpeech:
    """Test part-of-speech extraction from the front."""

    @pytest.mark.parametrize(
        "front, expected",
        [
            ("animal (n.)", ["(n.)"]),
            ("run (V.)", ["(V.)"]),
            ("go (verb)", ["(verb)"]),
            ("quick (adj.)", ["(adj.)"]),
            ("eat (vt.)", ["(vt.)"]),
            ("under (prep.)", ["(prep.)"]),
            ("he (pronoun)", ["(pronoun)"]),
            ("take off (a noun phrase)", ["(a noun phrase)"]),
        ],
    )
    def test_recognized(self, front, expected):
        assert extract_parts_of_speech(front) == expected

    @pytest.mark.parametrize("front", ["cat (pet)", "apple", "cat (nouns)", "cat (n)", "cat (in.)", ""])
    def test_not_recognized(self, front):
        assert extract_parts_of_speech(front) == []

    def test_only_first_parenthetical(self):
        assert extract_parts_of_speech("cat (pet) (n.)") == []

    def test_pos_in_parsed_back(self):
        result = parse_back("feline", "cat (n.)")
        assert result.parts_of_speech == ("(n.)",)


class TestPurity:
    """Test that parsing is deterministic."""

    def test_same_input_same_output(self):
        text = "n. 動物\n【中文】動物\n【例句】An animal."
        assert parse_back(text, "animal (n.)") == parse_back(text, "animal (n.)")

    def test_kind_lookup(self):
        assert kind_for_tag("搭配詞") is SectionKind.COLLOCATION
        assert kind_for_tag("anything") is SectionKind.OTHER
