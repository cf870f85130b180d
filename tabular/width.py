"""Display-width measurement and multibyte-aware padding."""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import Enum
from typing import Any, Iterable, List

import wcwidth as _wcwidth

from .cells import cell_to_str
from .errors import ArgumentError
from .rules import VALID_ALIGNMENTS


class Alignment(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


def parse_alignment(value: Any) -> Alignment:
    if isinstance(value, Alignment):
        return value
    try:
        return Alignment(value)
    except ValueError:
        raise ArgumentError(
            f"Invalid alignment: {value!r}. Use {', '.join(repr(a) for a in VALID_ALIGNMENTS)}."
        ) from None


# Control characters
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f-\x9f]")


def display_width(text: str, use_display_width: bool = True) -> int:
    """
    Number of terminal columns `text` occupies.

    Wide and full-width characters (CJK, emoji including ZWJ sequences and
    flags) count as 2, combining marks as 0. With use_display_width=False
    this is plain len().
    """
    if not use_display_width:
        return len(text)

    # Fast ASCII path: all codepoints in 0x20..0x7E
    if text.isascii() and text.isprintable():
        return len(text)

    return max(_wcwidth.wcswidth(_CONTROL_RE.sub("", text)), 0)


def column_widths(rows: Iterable[Any], use_display_width: bool = True) -> List[int]:
    """
    Widest cell per column index, over every row.

    Rows may be sequences or mappings (mapping values are taken in order).
    Shorter rows simply contribute nothing to the trailing columns.
    """
    widths: List[int] = []

    for row in rows:
        cells = row.values() if isinstance(row, Mapping) else row
        for index, cell in enumerate(cells):
            width = display_width(cell_to_str(cell), use_display_width)
            if index < len(widths):
                widths[index] = max(widths[index], width)
            else:
                widths.append(width)

    return widths


def _fill(columns: int, pad_with: str, use_display_width: bool) -> str:
    """Repeat `pad_with` to cover exactly `columns` display columns."""
    if columns <= 0:
        return ""

    if pad_with == " " or display_width(pad_with, use_display_width) == 0:
        return " " * columns

    out: List[str] = []
    used = 0
    while used < columns:
        for ch in pad_with:
            w = display_width(ch, use_display_width)
            if used + w > columns:
                # A wide pad character does not fit into the residual; close with spaces.
                out.append(" " * (columns - used))
                return "".join(out)
            out.append(ch)
            used += w
            if used == columns:
                break

    return "".join(out)


def pad(
    text: str,
    width: int,
    align: Any = Alignment.LEFT,
    pad_with: str = " ",
    use_display_width: bool = True,
) -> str:
    """
    Pad `text` to `width` display columns. Never truncates.

    left   -> padding appended
    right  -> padding prepended
    center -> floor(total / 2) on the left, the rest on the right
    """
    alignment = parse_alignment(align)
    if not pad_with:
        raise ArgumentError("Padding string must not be empty.")

    total = width - display_width(text, use_display_width)
    if total <= 0:
        return text

    if alignment is Alignment.LEFT:
        return text + _fill(total, pad_with, use_display_width)
    if alignment is Alignment.RIGHT:
        return _fill(total, pad_with, use_display_width) + text

    left = total // 2
    right = total - left
    return _fill(left, pad_with, use_display_width) + text + _fill(right, pad_with, use_display_width)
