"""Tests for the ingest module."""

import pytest

from cidian.exceptions import MalformedRecord, ParserStateError
from cidian.ingest import cedict
from cidian.ingest.cedict import CedictParser, parse_definition, parse_line
from cidian.schema import Sense

from conftest import SAMPLE_RECORD_LINES


class TestParseLine:
    """Tests for single-line record parsing."""

    def test_basic_record(self):
        """Test headwords, Pinyin and senses are split out."""
        entry = parse_line("憂鬱 忧郁 [you1 yu4] /sad/depressed; melancholy/", 4)

        assert entry.traditional == "憂鬱"
        assert entry.simplified == "忧郁"
        assert entry.pronunciation == ("you1", "yu4")
        assert entry.senses == (
            Sense(glosses=("sad",)),
            Sense(glosses=("depressed", "melancholy")),
        )
        assert entry.line_number == 4

    def test_tokens_round_trip(self):
        """Test re-serializing headwords and Pinyin gives the source tokens."""
        text = "  中國   中国 [ Zhong1   guo2 ]  /China/  "
        entry = parse_line(text, 1)
        rebuilt = f"{entry.traditional} {entry.simplified} [{entry.pinyin}]"
        assert rebuilt == "中國 中国 [Zhong1 guo2]"

    def test_semicolon_and_whitespace_collapse(self):
        """Test stray semicolons and blanks inside senses are collapsed."""
        entry = parse_line("甲 乙 [a1] / ;sad ;; blue; /  /happy/", 1)
        assert entry.senses == (
            Sense(glosses=("sad", "blue")),
            Sense(glosses=("happy",)),
        )

    def test_empty_sense_dropped(self):
        """Test empty components are dropped when others remain."""
        entry = parse_line("甲 乙 [a1] /one//two/", 1)
        assert [s.glosses for s in entry.senses] == [("one",), ("two",)]

    def test_slash_inside_brackets_of_gloss(self):
        """Test the definition runs to the last slash."""
        entry = parse_line("甲 乙 [a1] /CL:個|个[ge4]/", 3)
        assert entry.glosses == ["CL:個|个[ge4]"]

    def test_empty_pinyin(self):
        """Test empty Pinyin is fatal."""
        with pytest.raises(MalformedRecord) as exc_info:
            parse_line("甲 乙 [  ] /x/", 7)
        assert exc_info.value.line == 7
        assert "Empty pinyin" in str(exc_info.value)

    def test_empty_definition(self):
        """Test blank definition is fatal."""
        with pytest.raises(MalformedRecord) as exc_info:
            parse_line("甲 乙 [a1] / /", 8)
        assert exc_info.value.line == 8

    def test_only_semicolons(self):
        """Test a definition that trims to zero senses is fatal."""
        with pytest.raises(MalformedRecord):
            parse_line("甲 乙 [a1] /;/ ; /", 2)

    def test_missing_brackets(self):
        """Test records without Pinyin brackets are rejected."""
        with pytest.raises(MalformedRecord) as exc_info:
            parse_line("甲 乙 /x/", 9)
        assert "line 9" in str(exc_info.value)

    def test_missing_simplified(self):
        """Test records with a single headword are rejected."""
        with pytest.raises(MalformedRecord):
            parse_line("甲 [a1] /x/", 1)

    def test_missing_trailing_slash(self):
        """Test records without a closing slash are rejected."""
        with pytest.raises(MalformedRecord):
            parse_line("甲 乙 [a1] /x", 1)

    def test_parse_definition(self):
        """Test definition splitting on its own."""
        senses = parse_definition("/a; b/c/", 1)
        assert senses == (Sense(glosses=("a", "b")), Sense(glosses=("c",)))


class TestCedictParser:
    """Tests for CedictParser file iteration."""

    def test_skips_comments_blanks_and_bom(self, sample_dict):
        """Test only record lines are returned."""
        with CedictParser(sample_dict) as parser:
            lines = [entry.line_number for entry in parser]
        assert lines == SAMPLE_RECORD_LINES

    def test_initial_state(self, sample_dict):
        """Test no record is loaded before the first advance."""
        with CedictParser(sample_dict) as parser:
            assert parser.line_number == 0
            with pytest.raises(ParserStateError):
                parser.entry

    def test_advance_and_entry(self, sample_dict):
        """Test advance loads a record."""
        with CedictParser(sample_dict) as parser:
            entry = parser.advance()
            assert entry is parser.entry
            assert entry.traditional == "憂鬱"
            assert parser.line_number == 4

    def test_eof_is_sticky(self, sample_dict, sample_lines):
        """Test advance keeps returning None after EOF."""
        with CedictParser(sample_dict) as parser:
            while parser.advance() is not None:
                pass
            assert parser.advance() is None
            assert parser.line_number == len(sample_lines)
            with pytest.raises(ParserStateError):
                parser.entry

    def test_rewind(self, sample_dict):
        """Test rewind returns to the first record."""
        with CedictParser(sample_dict) as parser:
            parser.advance()
            parser.advance()
            parser.rewind()
            assert parser.line_number == 0
            assert parser.advance().line_number == 4

    def test_iteration_is_restartable(self, sample_dict):
        """Test iterating twice yields the same records."""
        with CedictParser(sample_dict) as parser:
            first = list(parser)
            second = list(parser)
        assert first == second

    @pytest.mark.parametrize("n", range(1, 15))
    def test_seek_matches_manual_advance(self, sample_dict, n):
        """Test seek(n) agrees with rewinding and advancing by hand."""
        with CedictParser(sample_dict) as parser:
            parser.seek(n)
            sought = parser.advance()

            parser.rewind()
            expected = None
            while True:
                entry = parser.advance()
                if entry is None or entry.line_number >= n:
                    expected = entry
                    break

        assert sought == expected
        if sought is not None:
            assert sought.line_number >= n

    def test_seek_exact_record(self, sample_dict):
        """Test seeking to a record line loads that record."""
        with CedictParser(sample_dict) as parser:
            parser.seek(9)
            assert parser.advance().traditional == "垃圾"

    def test_seek_past_end(self, sample_dict):
        """Test seeking beyond EOF is not an error."""
        with CedictParser(sample_dict) as parser:
            parser.seek(1000)
            assert parser.advance() is None

    def test_seek_one_equals_rewind(self, sample_dict):
        """Test seek(1) behaves like rewind."""
        with CedictParser(sample_dict) as parser:
            parser.advance()
            parser.seek(1)
            assert parser.line_number == 0
            assert parser.advance().line_number == 4

    @pytest.mark.parametrize("n", [0, -3, 1.5, "2", True])
    def test_seek_invalid(self, sample_dict, n):
        """Test seek rejects non-positive or non-integer values."""
        with CedictParser(sample_dict) as parser:
            with pytest.raises(ValueError):
                parser.seek(n)

    def test_malformed_line_aborts(self, make_dict):
        """Test a bad line raises with its line number."""
        path = make_dict([
            "甲 甲 [jia3] /first/",
            "# comment",
            "this is not a record",
        ])
        with CedictParser(path) as parser:
            assert parser.advance() is not None
            with pytest.raises(MalformedRecord) as exc_info:
                parser.advance()
        assert exc_info.value.line == 3

    def test_crlf_line_endings(self, make_dict):
        """Test CR+LF sources parse cleanly."""
        path = make_dict(
            ["甲 甲 [jia3] /first/", "乙 乙 [yi3] /second/"], newline="\r\n"
        )
        entries = cedict.read_entries(path)
        assert [e.glosses for e in entries] == [["first"], ["second"]]

    def test_lone_carriage_return_is_not_a_line_break(self, tmp_path):
        """Test a CR inside a record keeps later line numbers intact."""
        path = tmp_path / "cr.u8"
        path.write_bytes(
            "甲 甲 [jia3] /first\rpart/\n乙 乙 [yi3] /second/\n".encode("utf-8")
        )
        entries = cedict.read_entries(path)
        assert [e.line_number for e in entries] == [1, 2]
        assert entries[0].glosses == ["first\rpart"]

    def test_invalid_utf8(self, tmp_path):
        """Test undecodable bytes report the offending line."""
        path = tmp_path / "bad.u8"
        path.write_bytes(
            "甲 甲 [jia3] /x/\n".encode("utf-8") + b"\xff\xfe bad [a1] /x/\n"
        )
        with CedictParser(path) as parser:
            assert parser.advance().line_number == 1
            with pytest.raises(MalformedRecord) as exc_info:
                parser.advance()
        assert exc_info.value.line == 2
        assert exc_info.value.reason == "Invalid UTF-8"

    def test_indented_comment(self, make_dict):
        """Test comments may be indented."""
        path = make_dict(["  \t# indented", "甲 甲 [jia3] /x/"])
        assert [e.line_number for e in cedict.read_entries(path)] == [2]

    def test_missing_file(self, tmp_path):
        """Test opening a nonexistent file."""
        with pytest.raises(FileNotFoundError):
            CedictParser(tmp_path / "missing.u8")

    def test_load(self, sample_dict):
        """Test load convenience constructor."""
        parser = cedict.load(sample_dict)
        try:
            assert isinstance(parser, CedictParser)
        finally:
            parser.close()
