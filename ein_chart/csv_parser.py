"""Stage 1 — Turn exported CSV text into raw row dicts."""

import logging

from ein_chart.config import DATE_COLUMN, ESTIMATE_COLUMN

_LOGGER = logging.getLogger(__name__)


class ParseError(ValueError):
    """Raised when the text has no header plus at least one data line."""


def parse_line(line: str) -> list[str]:
    """
    Split one CSV line into trimmed field values.

    Commas inside a quoted span do not end a field, and a doubled quote
    inside a quoted span is a literal ``"``.  A lone quote anywhere toggles
    the quoted state, so ``a"b,c"d`` yields ``['ab,cd']``.
    """
    values: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    n = len(line)
    while i < n:
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < n and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            values.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1
    values.append("".join(current).strip())
    return values


def _parse_header(line: str) -> list[str]:
    return [cell.strip().replace('"', "") for cell in line.split(",")]


def parse(text: str) -> list[dict[str, str]]:
    """
    Parse CSV *text* into ``[{column: value, ...}, ...]``.

    Blank lines are ignored.  Missing trailing values become ``""`` and
    extra values beyond the header are dropped.  Rows without a ``Date`` or
    ``Estimate`` value are skipped.

    A leading UTF-8 byte-order mark is ignored.

    Raises ``ParseError`` if fewer than two non-blank lines are present.
    """
    text = text.removeprefix("\ufeff")
    lines = [line.strip() for line in text.split("\n") if line.strip()]
    if len(lines) < 2:
        raise ParseError("CSV data appears to be empty or invalid")

    headers = _parse_header(lines[0])
    rows: list[dict[str, str]] = []
    for line in lines[1:]:
        values = parse_line(line)
        row = {
            header: values[i] if i < len(values) else ""
            for i, header in enumerate(headers)
        }
        if not row.get(DATE_COLUMN) or not row.get(ESTIMATE_COLUMN):
            _LOGGER.debug("Skipping row without date/estimate: %r", line)
            continue
        rows.append(row)
    return rows
