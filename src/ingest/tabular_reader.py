"""CSV payload reader.

This module splits raw bytes into a header row and data rows.
Any structural defect rejects the whole payload.
"""

from __future__ import annotations

import csv
import io
from typing import Any

from core.constants import PAYLOAD_ENCODING, TIMESTAMP_COLUMN_NAME
from core.errors import SluiceParseError
from core.types import ParsedTable


def read_table(payload: bytes) -> ParsedTable:
    """Parse a CSV payload into headers and rows.

    Blank lines are ignored. Every data row must have exactly as many
    cells as the header.

    Args:
        payload: UTF-8 CSV bytes.

    Returns:
        Structurally valid table.

    Raises:
        SluiceParseError: If the header or any row is unreadable, the
            table holds no data, or column 0 is not ``time``.
    """
    try:
        text = payload.decode(PAYLOAD_ENCODING)
    except UnicodeDecodeError as error:
        raise SluiceParseError(f"failed to read header: payload is not UTF-8 ({error})") from error
    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    bare_quote_line = _find_bare_quote(text)
    headers = _read_header(reader, bare_quote_line)
    rows = _read_rows(reader, len(headers), bare_quote_line)
    if len(headers) <= 1 or not rows:
        raise SluiceParseError("no data")
    if headers[0] != TIMESTAMP_COLUMN_NAME:
        raise SluiceParseError(f"first column must be '{TIMESTAMP_COLUMN_NAME}'")
    return ParsedTable(headers=headers, rows=rows)


def _read_header(reader: Any, bare_quote_line: int | None) -> tuple[str, ...]:
    try:
        for record in reader:
            if not record:
                continue
            if bare_quote_line is not None and bare_quote_line <= reader.line_num:
                raise SluiceParseError(
                    f"failed to read header: bare '\"' in unquoted field on line {bare_quote_line}"
                )
            return tuple(record)
    except csv.Error as error:
        raise SluiceParseError(f"failed to read header: {error}") from error
    raise SluiceParseError("failed to read header: payload is empty")


def _read_rows(
    reader: Any,
    column_count: int,
    bare_quote_line: int | None,
) -> tuple[tuple[str, ...], ...]:
    """Read remaining rows, enforcing the header's column count."""
    rows: list[tuple[str, ...]] = []
    try:
        for record in reader:
            if bare_quote_line is not None and bare_quote_line <= reader.line_num:
                raise SluiceParseError(
                    f"failed to read lines: bare '\"' in unquoted field on line {bare_quote_line}"
                )
            if not record:
                continue
            if len(record) != column_count:
                raise SluiceParseError(
                    f"failed to read lines: line {reader.line_num} has {len(record)} "
                    f"fields, expected {column_count}"
                )
            rows.append(tuple(record))
    except csv.Error as error:
        raise SluiceParseError(f"failed to read lines: {error}") from error
    return tuple(rows)


def _find_bare_quote(text: str) -> int | None:
    """Return the line of the first quote inside an unquoted field.

    The stdlib reader keeps such quotes as literal text even in strict
    mode, so they are located with a separate scan.

    Args:
        text: Decoded payload.

    Returns:
        One-based physical line number, or ``None`` when quoting is clean.
    """
    line_number = 1
    field_start = True
    in_quotes = False
    index = 0
    while index < len(text):
        char = text[index]
        if char == "\n":
            line_number += 1
        if in_quotes:
            if char == '"':
                if text[index + 1 : index + 2] == '"':
                    index += 1
                else:
                    in_quotes = False
        elif char == '"':
            if not field_start:
                return line_number
            in_quotes = True
            field_start = False
        elif char in ",\r\n":
            field_start = True
        else:
            field_start = False
        index += 1
    return None
