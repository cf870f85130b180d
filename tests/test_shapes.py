import pytest

from tabular.errors import StructureError
from tabular.shapes import (
    ColumnTable,
    IndexedTable,
    RowTable,
    Shape,
    Table,
    classify,
    is_column_based,
    is_indexed,
    is_row_based,
    to_column_based,
    to_row_based,
    to_table,
)

COLUMNS = {"name": ["Alice", "Bob"], "age": [25, 30]}
ROWS = [{"name": "Alice", "age": 25}, {"name": "Bob", "age": 30}]


@pytest.mark.parametrize(
    "value, expected",
    [
        ([], Shape.INDEXED),
        ({}, Shape.INDEXED),
        (["a", 1, 2.5, True, None], Shape.INDEXED),
        ({0: "a", 1: "b"}, Shape.INDEXED),
        (COLUMNS, Shape.COLUMN_BASED),
        (ROWS, Shape.ROW_BASED),
        ([1, [2, 3], 4], Shape.INVALID),
        ([["a", "b"], ["c"]], Shape.INVALID),
        ({"a": [1, 2], "b": [1]}, Shape.INVALID),
        ([{"a": 1}, {"b": 2}], Shape.INVALID),
        ({"a": [[1], [2]]}, Shape.INVALID),
        ("plain text", Shape.INVALID),
    ],
)
def test_classify(value, expected):
    assert classify(value) is expected


def test_indexed_mapping_keys_must_be_sequential():
    assert is_indexed({0: "a", 1: "b"})
    assert not is_indexed({1: "a", 2: "b"})
    assert not is_indexed({0: "a", "x": "b"})


def test_column_based_rejects_uneven_columns():
    assert is_column_based({"a": [1, 2], "b": [3, 4]})
    assert not is_column_based({"a": [1, 2], "b": [3]})
    assert not is_column_based({})


def test_row_based_requires_identical_ordered_keys():
    assert is_row_based([{"a": 1, "b": 2}, {"a": 3, "b": 4}])
    # same keys, different order
    assert not is_row_based([{"a": 1, "b": 2}, {"b": 4, "a": 3}])
    assert not is_row_based([{"a": {"nested": 1}}])
    assert not is_row_based([])


def test_to_row_based_transposes_columns_in_order():
    assert to_row_based(COLUMNS) == ROWS
    assert list(to_row_based(COLUMNS)[0].keys()) == ["name", "age"]


def test_to_row_based_passes_through_indexed_and_rows():
    assert to_row_based(["a", "b"]) == ["a", "b"]
    assert to_row_based(ROWS) is ROWS


def test_to_row_based_is_idempotent():
    once = to_row_based(COLUMNS)
    assert to_row_based(once) == once
    assert classify(once) is Shape.ROW_BASED


def test_to_row_based_rejects_invalid():
    with pytest.raises(StructureError, match="indexed, column-based, or row-based"):
        to_row_based({"a": [1, 2], "b": [1]})


def test_to_column_based():
    assert to_column_based(ROWS) == COLUMNS
    assert to_column_based(COLUMNS) == COLUMNS
    with pytest.raises(StructureError):
        to_column_based(["a", "b"])


def test_to_table_variants():
    assert isinstance(to_table(["x"]), IndexedTable)
    assert to_table(["x", "y"]).row_values() == [["x", "y"]]
    assert to_table([]).row_values() == []

    table = to_table(COLUMNS)
    assert isinstance(table, ColumnTable)
    assert table.headers == ["name", "age"]
    assert table.row_values() == [["Alice", 25], ["Bob", 30]]

    table = to_table(ROWS)
    assert isinstance(table, RowTable)
    assert table.headers == ["name", "age"]

    with pytest.raises(StructureError):
        to_table([1, [2, 3], 4])


def test_table_base_cannot_be_instantiated():
    with pytest.raises(TypeError):
        Table()
    assert IndexedTable(values=("a",)).headers == []
