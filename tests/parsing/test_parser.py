"""Tests for the tabular parser."""

import pytest

from namaste_bridge.parsing import Delimiter, detect_delimiter, parse, split_line


@pytest.mark.parametrize("content", ["", "\n\n", "   \n\t\n", "code,term", "code,term\n\n"])
def test_parse_empty_or_header_only_returns_no_rows(content):
    assert parse(content) == []


def test_detect_delimiter_prefers_semicolon_when_it_outnumbers_commas():
    assert detect_delimiter("a,b,c;d;e;f") == Delimiter.SEMICOLON


def test_detect_delimiter_defaults_to_comma_on_tie():
    assert detect_delimiter("a,b;c") == Delimiter.COMMA


def test_detect_delimiter_tab():
    assert detect_delimiter("code\tterm\tsystem") == Delimiter.TAB


def test_detect_delimiter_semicolon_tab_tie_falls_back_to_comma():
    assert detect_delimiter("a;b\tc") == Delimiter.COMMA


def test_split_line_keeps_delimiter_inside_quotes():
    assert split_line('NAM001,"a,b",x', Delimiter.COMMA) == ["NAM001", "a,b", "x"]


def test_split_line_unescapes_doubled_quotes():
    assert split_line('"He said ""hi""",x') == ['He said "hi"', "x"]


def test_split_line_trims_cells():
    assert split_line("  NAM001 ;  Vata  ", Delimiter.SEMICOLON) == ["NAM001", "Vata"]


def test_parse_single_data_row():
    rows = parse("code,term\nNAM001,Vata Dosha Imbalance")

    assert len(rows) == 1
    assert rows[0].source_code == "NAM001"
    assert rows[0].source_term == "Vata Dosha Imbalance"
    assert rows[0].extra_fields == {}


def test_parse_quoted_term_with_comma():
    rows = parse('code,term\nNAM007,"Fever, Pitta type"')

    assert rows[0].source_term == "Fever, Pitta type"


def test_parse_semicolon_file_uses_delimiter_for_all_lines():
    rows = parse("code;term;system\nNAM002;Pitta, excess;ayurveda\n")

    assert rows[0].source_code == "NAM002"
    assert rows[0].source_term == "Pitta, excess"
    assert rows[0].extra_fields == {"system": "ayurveda"}


def test_parse_tab_file():
    rows = parse("code\tterm\nSID001\tVali Humour Derangement\n")

    assert rows[0].source_code == "SID001"
    assert rows[0].source_term == "Vali Humour Derangement"


def test_parse_fills_placeholders_for_missing_code_and_term():
    rows = parse("code,term\n,Foo\nNAM009,\n")

    assert [(row.source_code, row.source_term) for row in rows] == [
        ("NAM001", "Foo"),
        ("NAM009", "Term 2"),
    ]


def test_parse_skips_all_empty_rows_but_keeps_positional_index():
    rows = parse("code,term\n , ,\n,Bar\n")

    assert len(rows) == 1
    assert rows[0].source_code == "NAM002"
    assert rows[0].source_term == "Bar"


def test_parse_drops_single_cell_rows():
    rows = parse("code,term\nNAM001\nNAM002,Pitta Dosha Imbalance\n")

    assert [row.source_code for row in rows] == ["NAM002"]


def test_parse_extra_fields_need_header_and_value():
    content = "code,term,system,,notes\nNAM001,Vata,ayurveda,ignored,\nNAM002,Pitta,,x,chronic,overflow\n"

    rows = parse(content)

    assert rows[0].extra_fields == {"system": "ayurveda"}
    assert rows[1].extra_fields == {"notes": "chronic"}


def test_parse_header_values_are_not_data():
    rows = parse('"code","term"\nNAM003,Kapha Dosha Imbalance')

    assert len(rows) == 1
    assert rows[0].source_code == "NAM003"


def test_parse_accepts_bytes_with_bom_and_crlf():
    rows = parse("\ufeffcode,term\r\nNAM004,Digestive Fire Weakness\r\n".encode("utf-8"))

    assert len(rows) == 1
    assert rows[0].source_code == "NAM004"
    assert rows[0].source_term == "Digestive Fire Weakness"


def test_parse_unterminated_quote_does_not_raise():
    rows = parse('code,term\nNAM001,"unterminated, term\nNAM002,Pitta')

    assert [row.source_code for row in rows] == ["NAM001", "NAM002"]
    assert rows[0].source_term == "unterminated, term"


@pytest.mark.parametrize("separator", ["\u2028", "\u2029", "\x0c", "\x0b", "\x85"])
def test_parse_breaks_lines_on_newline_only(separator):
    term = f"Vata{separator}Dosha"
    rows = parse(f'code,term\nNAM050,"{term}"\nNAM051,Pitta{separator}Excess\n')

    assert [row.source_code for row in rows] == ["NAM050", "NAM051"]
    assert rows[0].source_term == term
    assert rows[1].source_term == f"Pitta{separator}Excess"
