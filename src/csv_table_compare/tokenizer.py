"""CSV tokenizer - turns raw delimited text into a Table.

The tokenizer is deliberately forgiving: blank lines are skipped, short data
lines are padded with empty strings and extra fields are dropped. It never
raises on irregular input.
"""

import logging

from .models import Row, Table

logger = logging.getLogger(__name__)


def _finish_field(raw: str) -> str:
    value = raw.strip()
    # Strip at most one quote from each end
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def split_line(line: str) -> list[str]:
    """Split one line into fields.

    Args:
        line: A single line of text without its newline

    Returns:
        List of field values, trimmed of surrounding whitespace

    Quoting semantics:
        - A double quote toggles quoted mode and is not kept
        - Commas inside quotes are kept as part of the field
        - Doubled quotes ("") are not unescaped; they toggle twice and vanish

    Example:
        >>> split_line('"hello, world",2')
        ['hello, world', '2']
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append(_finish_field("".join(current)))
            current = []
        else:
            current.append(char)

    fields.append(_finish_field("".join(current)))
    return fields


def _build_row(headers: list[str], values: list[str]) -> Row:
    row: Row = {}
    for idx, header in enumerate(headers):
        value = values[idx] if idx < len(values) else ""
        # Duplicate header names collapse, last assignment wins
        row[header] = value.strip()
    return row


def parse_csv(text: str) -> Table:
    """Parse delimited text into a Table.

    Args:
        text: Full text of the source, already decoded

    Returns:
        Table whose headers come from the first non-blank line and whose rows
        come from every following non-blank line. Empty Table if the text has
        no non-blank lines.
    """
    lines = [line for line in text.replace("\r\n", "\n").split("\n") if line.strip()]
    if not lines:
        logger.debug("No non-blank lines found, returning empty table")
        return Table.empty()

    headers = split_line(lines[0])
    rows = tuple(_build_row(headers, split_line(line)) for line in lines[1:])

    logger.debug(f"Parsed {len(headers)} headers and {len(rows)} rows")
    return Table(headers=tuple(headers), rows=rows)
