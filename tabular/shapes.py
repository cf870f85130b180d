"""
Shape classification and normalization for in-memory tabular values.

A tabular value is always one of:
- indexed:       ["a", "b", 3]                       (no column identity)
- column-based:  {"name": ["Alice", "Bob"], "age": [25, 30]}
- row-based:     [{"name": "Alice", "age": 25}, {"name": "Bob", "age": 30}]

Anything else (nested cells, uneven columns, rows with differing keys) is
invalid and is rejected with StructureError wherever a shape-dependent
operation is attempted.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Sequence

from .cells import is_scalar
from .errors import INVALID_STRUCTURE, StructureError

logger = logging.getLogger(__name__)


class Shape(Enum):
    INDEXED = "indexed"
    COLUMN_BASED = "column_based"
    ROW_BASED = "row_based"
    INVALID = "invalid"


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_index_key(key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool)


def is_indexed(value: Any) -> bool:
    """True for a flat list of scalars, or a mapping keyed 0..n-1 in order. Empty counts."""
    if _is_sequence(value):
        return all(is_scalar(v) for v in value)

    if isinstance(value, Mapping):
        for expected, (key, cell) in enumerate(value.items()):
            if not _is_index_key(key) or key != expected or not is_scalar(cell):
                return False
        return True

    return False


def is_column_based(value: Any) -> bool:
    if not isinstance(value, Mapping) or not value:
        return False

    expected_length = None
    for key, column in value.items():
        if not isinstance(key, str) or not _is_sequence(column):
            return False

        if expected_length is None:
            expected_length = len(column)
        elif len(column) != expected_length:
            return False

        if not all(is_scalar(cell) for cell in column):
            return False

    return True


def is_row_based(value: Any) -> bool:
    if not _is_sequence(value) or not value:
        return False

    first = value[0]
    if not isinstance(first, Mapping):
        return False
    expected_keys = list(first.keys())

    for row in value:
        if not isinstance(row, Mapping) or list(row.keys()) != expected_keys:
            return False
        for key, cell in row.items():
            if not isinstance(key, str) or not is_scalar(cell):
                return False

    return True


def classify(value: Any) -> Shape:
    # Order matters: the empty structure is trivially indexed.
    if is_indexed(value):
        return Shape.INDEXED
    if is_column_based(value):
        return Shape.COLUMN_BASED
    if is_row_based(value):
        return Shape.ROW_BASED
    return Shape.INVALID


@dataclass(frozen=True)
class Table(ABC):
    """A classified tabular value. Built once by to_table(), read by every renderer."""

    @property
    def headers(self) -> List[str]:
        return []

    @abstractmethod
    def row_values(self) -> List[List[Any]]:
        """Cell rows in render order."""


@dataclass(frozen=True)
class IndexedTable(Table):
    values: tuple = ()

    def row_values(self) -> List[List[Any]]:
        # A single implicit row; nothing at all for the empty structure.
        return [list(self.values)] if self.values else []


@dataclass(frozen=True)
class ColumnTable(Table):
    columns: Dict[str, list] = field(default_factory=dict)

    @property
    def headers(self) -> List[str]:
        return list(self.columns.keys())

    def row_values(self) -> List[List[Any]]:
        return [list(row) for row in zip(*self.columns.values())]


@dataclass(frozen=True)
class RowTable(Table):
    rows: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def headers(self) -> List[str]:
        return list(self.rows[0].keys()) if self.rows else []

    def row_values(self) -> List[List[Any]]:
        return [list(row.values()) for row in self.rows]


def to_table(value: Any) -> Table:
    """Classify `value` once and wrap it. Raises StructureError for invalid shapes."""
    shape = classify(value)
    logger.debug("classified tabular value as %s", shape.value)

    if shape is Shape.INDEXED:
        values = value.values() if isinstance(value, Mapping) else value
        return IndexedTable(values=tuple(values))
    if shape is Shape.COLUMN_BASED:
        return ColumnTable(columns={k: list(v) for k, v in value.items()})
    if shape is Shape.ROW_BASED:
        return RowTable(rows=[dict(row) for row in value])

    raise StructureError(INVALID_STRUCTURE)


def _columns_to_rows(columns: Mapping[str, Sequence[Any]]) -> List[Dict[str, Any]]:
    keys = list(columns.keys())
    length = len(columns[keys[0]]) if keys else 0
    return [{key: columns[key][i] for key in keys} for i in range(length)]


def to_row_based(value: Any) -> Any:
    """
    Normalize any valid shape to row-based form.

    Indexed and row-based input is returned unchanged. Column-based input
    becomes one row per position, keys in column order.
    """
    shape = classify(value)

    if shape is Shape.COLUMN_BASED:
        return _columns_to_rows(value)
    if shape in (Shape.INDEXED, Shape.ROW_BASED):
        return value

    raise StructureError(INVALID_STRUCTURE)


def to_column_based(value: Any) -> Dict[str, list]:
    """Inverse of to_row_based() for row-based input. Indexed input has no columns to build."""
    shape = classify(value)

    if shape is Shape.COLUMN_BASED:
        return {key: list(column) for key, column in value.items()}
    if shape is Shape.ROW_BASED:
        keys = list(value[0].keys())
        return {key: [row[key] for row in value] for key in keys}
    if shape is Shape.INDEXED:
        raise StructureError("Indexed values have no column names to convert.")

    raise StructureError(INVALID_STRUCTURE)
