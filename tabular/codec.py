"""
CSV encoding and decoding for tabular values.

Encoding accepts any indexed, column-based or row-based value. Decoding is
deliberately lenient: when a header line is used, rows whose field count
differs from the header count are dropped without error.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Union

from .cells import cell_to_str
from .errors import ArgumentError
from .models import DecodedCsv
from .rules import DEFAULT_DELIMITER, DEFAULT_ESCAPE, DEFAULT_QUOTE
from .shapes import IndexedTable, to_table

logger = logging.getLogger(__name__)

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class CsvDialect:
    """Delimiter, quote and escape characters. An empty escape disables escaping."""

    delimiter: str = DEFAULT_DELIMITER
    quote: str = DEFAULT_QUOTE
    escape: str = DEFAULT_ESCAPE

    def __post_init__(self) -> None:
        validate_dialect(self.delimiter, self.quote, self.escape)


def validate_dialect(delimiter: str, quote: str, escape: str) -> None:
    if not isinstance(delimiter, str) or len(delimiter) != 1:
        raise ArgumentError(f"Delimiter must be a single character, got {delimiter!r}.")
    if not isinstance(quote, str) or len(quote) != 1:
        raise ArgumentError(f"Quote must be a single character, got {quote!r}.")
    if not isinstance(escape, str) or len(escape) > 1:
        raise ArgumentError(f"Escape must be a single character or empty, got {escape!r}.")
    if delimiter in ("\r", "\n") or quote in ("\r", "\n"):
        raise ArgumentError("Line terminators cannot be used as delimiter or quote.")
    if delimiter == quote:
        raise ArgumentError("Delimiter and quote must differ.")


# --- encoding ---


def _needs_quoting(field: str, dialect: CsvDialect) -> bool:
    return (
        dialect.delimiter in field
        or dialect.quote in field
        or "\n" in field
        or "\r" in field
    )


def quote_field(field: str, dialect: CsvDialect) -> str:
    """
    Quote a field if it contains the delimiter, the quote char or a line break.

    Embedded quotes are doubled, except when the escape char already precedes
    them.
    """
    if not _needs_quoting(field, dialect):
        return field

    out: List[str] = []
    previous = ""
    for ch in field:
        if ch == dialect.quote and not (dialect.escape and previous == dialect.escape):
            out.append(dialect.quote)
        out.append(ch)
        previous = ch

    return f"{dialect.quote}{''.join(out)}{dialect.quote}"


def _encode_line(cells: Iterable[Any], dialect: CsvDialect) -> str:
    return dialect.delimiter.join(quote_field(cell_to_str(c), dialect) for c in cells) + "\n"


def encode_csv(
    value: Any,
    delimiter: str = DEFAULT_DELIMITER,
    quote: str = DEFAULT_QUOTE,
    escape: str = DEFAULT_ESCAPE,
    include_header: bool = True,
) -> str:
    """
    Serialize a tabular value to CSV text. Every line ends with LF.

    Indexed values become one headerless line. Column- and row-based values
    get an optional header line followed by one line per row.

    Raises StructureError (before producing any text) for invalid shapes or
    non-scalar cells.
    """
    dialect = CsvDialect(delimiter=delimiter, quote=quote, escape=escape)
    table = to_table(value)

    if isinstance(table, IndexedTable):
        if not table.values:
            return ""
        return _encode_line(table.values, dialect)

    lines: List[str] = []
    if include_header:
        lines.append(_encode_line(table.headers, dialect))
    for row in table.row_values():
        lines.append(_encode_line(row, dialect))

    return "".join(lines)


# --- decoding ---


def split_lines(text: str) -> List[str]:
    """
    Split on CRLF, CR or LF (mixed is fine). Blank lines at either end are
    ignored; leading spaces inside a real line are kept.
    """
    lines = _LINE_BREAK_RE.split(text) if text else []
    while lines and not lines[-1].strip():
        lines.pop()
    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1
    return lines[start:]


def parse_line(line: str, dialect: CsvDialect) -> List[str]:
    """
    Split one line into fields.

    Inside a quoted field a doubled quote is a literal quote, and the escape
    char protects the character after it (both are kept). Text between a
    closing quote and the next delimiter is kept as is. An unterminated quote
    runs to the end of the line. An empty line is a single empty field.
    """
    delimiter, quote, escape = dialect.delimiter, dialect.quote, dialect.escape
    fields: List[str] = []
    field: List[str] = []
    i = 0
    n = len(line)

    while True:
        field.clear()
        if i < n and line[i] == quote:
            i += 1
            while i < n:
                ch = line[i]
                if escape and ch == escape and i + 1 < n and escape != quote:
                    field.append(ch)
                    field.append(line[i + 1])
                    i += 2
                    continue
                if ch == quote:
                    if i + 1 < n and line[i + 1] == quote:
                        field.append(quote)
                        i += 2
                        continue
                    i += 1
                    break
                field.append(ch)
                i += 1

        while i < n and line[i] != delimiter:
            field.append(line[i])
            i += 1

        fields.append("".join(field))
        if i >= n:
            return fields
        # skip the delimiter
        i += 1


def decode_csv(
    text: str,
    delimiter: str = DEFAULT_DELIMITER,
    with_headers: bool = True,
    quote: str = DEFAULT_QUOTE,
    escape: str = DEFAULT_ESCAPE,
) -> Union[DecodedCsv, List[List[str]]]:
    """
    Parse CSV text.

    with_headers=True returns a DecodedCsv: header names plus one single-key
    column fragment per header. Lines whose field count differs from the
    header count are skipped.

    with_headers=False returns every line as a list of fields, unfiltered.
    """
    dialect = CsvDialect(delimiter=delimiter, quote=quote, escape=escape)
    lines = split_lines(text)

    if not with_headers:
        return [parse_line(line, dialect) for line in lines]

    if not lines:
        return DecodedCsv()

    headers = parse_line(lines[0], dialect)
    expected = len(headers)
    columns: List[List[str]] = [[] for _ in headers]

    dropped = 0
    for number, line in enumerate(lines[1:], start=2):
        fields = parse_line(line, dialect)
        if len(fields) != expected:
            dropped += 1
            logger.debug(
                "dropping line %d: %d fields, expected %d", number, len(fields), expected
            )
            continue
        for index, value in enumerate(fields):
            columns[index].append(value)

    if dropped:
        logger.debug("dropped %d malformed line(s) while decoding", dropped)

    return DecodedCsv(
        headers=headers,
        fragments=[{header: column} for header, column in zip(headers, columns)],
    )


def flatten(decoded: Union[DecodedCsv, List[Dict[str, Any]]]) -> Dict[str, List[str]]:
    """
    Merge decoded column fragments into one ordered column map.

    Accepts a DecodedCsv or its as_sequence() form. A duplicated header name
    keeps its first position and the last fragment's values.
    """
    if isinstance(decoded, DecodedCsv):
        fragments: List[Dict[str, Any]] = list(decoded.fragments)
    else:
        fragments = list(decoded)
        if fragments and set(fragments[0]) == {"headers"}:
            fragments = fragments[1:]

    flat: Dict[str, List[str]] = {}
    for fragment in fragments:
        for header, values in fragment.items():
            flat[header] = list(values)
    return flat


def decode_csv_rows(
    text: str,
    delimiter: str = DEFAULT_DELIMITER,
    quote: str = DEFAULT_QUOTE,
    escape: str = DEFAULT_ESCAPE,
) -> List[Dict[str, str]]:
    """Decode CSV text with a header line into row-based form."""
    decoded = decode_csv(text, delimiter=delimiter, with_headers=True, quote=quote, escape=escape)
    return decoded_to_rows(decoded)


def decoded_to_rows(decoded: DecodedCsv) -> List[Dict[str, str]]:
    columns = [values for fragment in decoded.fragments for values in fragment.values()]
    return [dict(zip(decoded.headers, row)) for row in zip(*columns)]

