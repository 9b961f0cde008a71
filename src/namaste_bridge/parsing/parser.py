"""Tabular parser for NAMASTE code files.

Turns raw CSV/TSV/semicolon-separated text into ``NormalizedRow`` records.
The parser is total: malformed input only affects which fields get populated,
it never raises.
"""

from __future__ import annotations

from enum import Enum

from namaste_bridge.schema import NormalizedRow

_QUOTE = '"'


class Delimiter(str, Enum):
    COMMA = ","
    SEMICOLON = ";"
    TAB = "\t"


def detect_delimiter(line: str) -> Delimiter:
    """Pick the field delimiter from the first line of a file.

    Semicolon or tab only win when they strictly outnumber both other
    candidates; comma is the default.
    """
    commas = line.count(Delimiter.COMMA.value)
    semicolons = line.count(Delimiter.SEMICOLON.value)
    tabs = line.count(Delimiter.TAB.value)

    if semicolons > commas and semicolons > tabs:
        return Delimiter.SEMICOLON
    if tabs > commas and tabs > semicolons:
        return Delimiter.TAB
    return Delimiter.COMMA


def split_line(line: str, delimiter: Delimiter = Delimiter.COMMA) -> list[str]:
    """Split one line into trimmed cells, honouring double-quoted fields."""
    cells: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0

    while i < len(line):
        char = line[i]
        if char == _QUOTE:
            # "" inside a quoted field is a literal quote.
            if in_quotes and i + 1 < len(line) and line[i + 1] == _QUOTE:
                current.append(_QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == delimiter.value and not in_quotes:
            cells.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    cells.append("".join(current).strip())
    return cells


def parse(content: str | bytes) -> list[NormalizedRow]:
    """Parse delimited text into normalized rows.

    The first non-empty line is the header. Each later line with at least two
    cells and at least one non-empty cell becomes a row; an empty code or term
    is replaced by a positional placeholder.
    """
    text = _decode(content)
    lines = [line for line in text.split("\n") if line.strip()]
    if not lines:
        return []

    delimiter = detect_delimiter(lines[0])
    headers = split_line(lines[0], delimiter)
    rows: list[NormalizedRow] = []

    for index, line in enumerate(lines[1:], start=1):
        values = split_line(line, delimiter)
        if len(values) < 2 or not any(values):
            continue

        extra_fields: dict[str, str] = {}
        for position in range(2, min(len(values), len(headers))):
            header = headers[position]
            value = values[position]
            if header and value:
                extra_fields[header] = value

        rows.append(
            NormalizedRow(
                source_code=values[0] or f"NAM{index:03d}",
                source_term=values[1] or f"Term {index}",
                extra_fields=extra_fields,
            )
        )

    return rows


def _decode(content: str | bytes) -> str:
    if isinstance(content, bytes):
        return content.decode("utf-8-sig", errors="replace")
    return content.lstrip("\ufeff")
