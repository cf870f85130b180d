from __future__ import annotations

import html
import re
from typing import Any, List

from .cells import cell_to_str
from .shapes import to_table
from .width import Alignment, column_widths, pad

_CSS_NAME_RE = re.compile(r"[^A-Za-z0-9_-]")
_STYLE_RE = re.compile(r"[^A-Za-z0-9\s:;#%.,()_-]")


def sanitize_css_name(name: str) -> str:
    cleaned = _CSS_NAME_RE.sub("", name.strip())
    # CSS identifiers may not start with a digit
    if cleaned and cleaned[0].isdigit():
        cleaned = f"_{cleaned}"
    return cleaned


def sanitize_style(style: str) -> str:
    return _STYLE_RE.sub("", style).strip()


def _attributes(table_id: str, css_class: str, style: str) -> str:
    parts = []
    if table_id and sanitize_css_name(table_id):
        parts.append(f' id="{sanitize_css_name(table_id)}"')
    if css_class:
        classes = " ".join(filter(None, (sanitize_css_name(c) for c in css_class.split())))
        if classes:
            parts.append(f' class="{classes}"')
    if style and sanitize_style(style):
        parts.append(f' style="{html.escape(sanitize_style(style))}"')
    return "".join(parts)


def to_html_table(value: Any, table_id: str = "", css_class: str = "", style: str = "") -> str:
    """
    Render a tabular value as an HTML table.

    Column names go into <thead>, rows into <tbody>; every cell is escaped.
    An indexed value becomes one body row without a header.
    """
    table = to_table(value)
    rows = table.row_values()
    headers = table.headers

    lines = [f"<table{_attributes(table_id, css_class, style)}>"]
    if not rows and not headers:
        return lines[0] + "</table>"

    if headers:
        lines.append("\t<thead>")
        lines.append("\t\t<tr>")
        lines.extend(f"\t\t\t<th>{html.escape(h)}</th>" for h in headers)
        lines.append("\t\t</tr>")
        lines.append("\t</thead>")

    lines.append("\t<tbody>")
    for row in rows:
        lines.append("\t\t<tr>")
        lines.extend(f"\t\t\t<td>{html.escape(cell_to_str(c))}</td>" for c in row)
        lines.append("\t\t</tr>")
    lines.append("\t</tbody>")
    lines.append("</table>")

    return "\n".join(lines)


def to_padded_tsv(value: Any, include_headers: bool = True, right_pad_first_column: bool = True) -> str:
    """
    Tab-separated text with padded columns, one LF-terminated line per row.

    The first column is left-aligned (padded on the right) unless
    right_pad_first_column is False; all other columns are right-aligned.
    """
    table = to_table(value)
    rows: List[List[Any]] = table.row_values()
    if include_headers and table.headers:
        rows = [list(table.headers)] + rows
    if not rows:
        return ""

    widths = column_widths(rows)
    out = []
    for row in rows:
        cells = []
        for index, cell in enumerate(row):
            align = Alignment.LEFT if index == 0 and right_pad_first_column else Alignment.RIGHT
            cells.append(pad(cell_to_str(cell), widths[index], align))
        out.append("\t".join(cells) + "\n")

    return "".join(out)
