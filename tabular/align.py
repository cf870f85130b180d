"""
Column-aligned text rendering.

Both entry points share one pipeline: build a list of cell rows, measure
every column across all rows, pad each cell, then join cells with a single
space and rows with LF (no trailing newline).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Sequence

from .cells import cell_to_str
from .codec import CsvDialect, parse_line, split_lines
from .rules import (
    CELL_SEPARATOR,
    DEFAULT_ALIGNMENT,
    DEFAULT_DELIMITER,
    DEFAULT_ESCAPE,
    DEFAULT_QUOTE,
    LINE_SEPARATOR,
)
from .shapes import to_table
from .width import Alignment, column_widths, pad, parse_alignment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderOptions:
    """All knobs of the aligned renderer. Validated on construction."""

    delimiter: str = DEFAULT_DELIMITER
    quote: str = DEFAULT_QUOTE
    escape: str = DEFAULT_ESCAPE
    alignment: str = DEFAULT_ALIGNMENT
    use_display_width: bool = True
    left_align_first_column: bool = True

    def __post_init__(self) -> None:
        parse_alignment(self.alignment)
        self.dialect()

    def dialect(self) -> CsvDialect:
        return CsvDialect(delimiter=self.delimiter, quote=self.quote, escape=self.escape)


def render_rows(
    rows: Sequence[Sequence[Any]],
    alignment: Any = Alignment.LEFT,
    use_display_width: bool = True,
    left_align_first_column: bool = True,
) -> str:
    align = parse_alignment(alignment)
    if not rows:
        return ""

    widths = column_widths(rows, use_display_width)
    lines: List[str] = []
    for row in rows:
        cells = []
        for index, cell in enumerate(row):
            cell_align = Alignment.LEFT if index == 0 and left_align_first_column else align
            cells.append(pad(cell_to_str(cell), widths[index], cell_align, use_display_width=use_display_width))
        lines.append(CELL_SEPARATOR.join(cells))

    return LINE_SEPARATOR.join(lines)


def align_structure(
    value: Any,
    alignment: Any = DEFAULT_ALIGNMENT,
    use_display_width: bool = True,
    left_align_first_column: bool = True,
) -> str:
    """
    Render an indexed, column-based or row-based value as aligned text.

    No header row is emitted; every row (an indexed value is one row)
    contributes to the column widths. Raises StructureError for any other
    shape and ArgumentError for an unknown alignment, before rendering.
    """
    parse_alignment(alignment)
    table = to_table(value)
    return render_rows(
        table.row_values(),
        alignment=alignment,
        use_display_width=use_display_width,
        left_align_first_column=left_align_first_column,
    )


def align_csv_text(text: str, options: RenderOptions = RenderOptions()) -> str:
    """
    Align raw delimited text. Each line is split into fields with no header
    semantics, so ragged lines are kept as they are.
    """
    dialect = options.dialect()
    rows = [parse_line(line, dialect) for line in split_lines(text)]
    logger.debug("aligning %d delimited line(s)", len(rows))
    return render_rows(
        rows,
        alignment=options.alignment,
        use_display_width=options.use_display_width,
        left_align_first_column=options.left_align_first_column,
    )


def render(value: Any, options: RenderOptions = RenderOptions()) -> str:
    """Dispatch on input type: text is aligned as CSV, anything else as a structure."""
    if isinstance(value, str):
        return align_csv_text(value, options)
    return align_structure(
        value,
        alignment=options.alignment,
        use_display_width=options.use_display_width,
        left_align_first_column=options.left_align_first_column,
    )
