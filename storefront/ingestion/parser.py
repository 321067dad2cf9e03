"""
Delimited Text Parser

Turns a spreadsheet export (comma or semicolon separated, optional BOM,
optional header row) into a list of string-keyed rows.

The separator is guessed once per document from the first line, and
fields are split with a quote-aware pattern rather than the csv module,
so a quoted cell may contain the separator while stray quotes elsewhere
never abort the parse.

Each field is trimmed before its surrounding quotes are removed, and
trimmed again afterwards, so a padded cell like `  "Candle A"  ` reads as
`Candle A` rather than keeping its quotes.
"""

import re
from typing import Dict, List, Sequence

from ..common.constants import CANONICAL_FIELDS

BOM = "\ufeff"

# Split on the separator only when an even number of quotes follows it,
# i.e. when the separator is not inside a quoted segment
_SPLIT_PATTERNS = {
    ",": re.compile(r',(?=(?:[^"]*"[^"]*")*[^"]*$)'),
    ";": re.compile(r';(?=(?:[^"]*"[^"]*")*[^"]*$)'),
}

_LINE_BREAK = re.compile(r"\r?\n")


def pick_delimiter(line: str) -> str:
    """
    Guess the separator from a header line.

    Semicolon wins only when strictly more frequent than comma.
    """
    if line.count(";") > line.count(","):
        return ";"
    return ","


def _strip_quotes(value: str) -> str:
    value = value.strip()
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value.strip()


def split_line(line: str, delimiter: str) -> List[str]:
    """
    Split one line into trimmed fields, honoring double-quoted segments.

    Args:
        line: Raw text line
        delimiter: "," or ";"

    Returns:
        List of fields with one surrounding quote pair removed
    """
    pattern = _SPLIT_PATTERNS.get(delimiter)
    if pattern is None:
        raise ValueError(f"Unsupported delimiter: {delimiter!r}")
    return [_strip_quotes(item) for item in pattern.split(line)]


def resolve_headers(
    first_line_cells: Sequence[str],
    known_headers: Sequence[str] = CANONICAL_FIELDS,
) -> tuple[List[str], bool]:
    """
    Decide whether the first line is a header row.

    Returns:
        (headers, has_header_row). Without a recognizable header the
        canonical field names are assigned by position.
    """
    lowered = [cell.lower() for cell in first_line_cells]
    if any(header in known_headers for header in lowered):
        return lowered, True
    return list(known_headers), False


def parse_delimited(text: str) -> List[Dict[str, str]]:
    """
    Parse delimited text into rows.

    Args:
        text: Whole document, e.g. a published Google Sheets CSV

    Returns:
        One dict per data line, keyed by lower-cased header. Headers
        without a matching field map to "".
    """
    if text and text.startswith(BOM):
        text = text[len(BOM):]
    cleaned = text.strip() if text else ""
    if not cleaned:
        return []

    lines = [line for line in _LINE_BREAK.split(cleaned) if line.strip()]
    header_line = lines[0]
    delimiter = pick_delimiter(header_line)
    headers, has_header_row = resolve_headers(split_line(header_line, delimiter))
    data_lines = lines[1:] if has_header_row else lines

    rows = []
    for line in data_lines:
        values = split_line(line, delimiter)
        rows.append({
            header: values[index] if index < len(values) else ""
            for index, header in enumerate(headers)
        })
    return rows
