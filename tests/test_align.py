import pytest

from tabular.align import RenderOptions, align_csv_text, align_structure, render
from tabular.errors import ArgumentError, StructureError

PEOPLE = {"name": ["Alice", "Bob"], "age": [25, 30]}


def test_align_column_based_left():
    assert align_structure(PEOPLE, "left", True) == "Alice 25\nBob   30"


def test_align_right_and_center():
    assert align_structure(PEOPLE, "right", left_align_first_column=False) == "Alice 25\n  Bob 30"
    assert align_structure(PEOPLE, "center", left_align_first_column=False) == "Alice 25\n Bob  30"


def test_align_keeps_first_column_left_by_default():
    assert align_structure(PEOPLE, "right") == "Alice 25\nBob   30"
    assert align_structure(PEOPLE, "center") == "Alice 25\nBob   30"
    assert RenderOptions().left_align_first_column is True


def test_align_row_based_matches_column_based():
    rows = [{"name": "Alice", "age": 25}, {"name": "Bob", "age": 30}]
    assert align_structure(rows) == align_structure(PEOPLE)


def test_align_indexed_is_one_row():
    assert align_structure(["a", "bb", True, None]) == "a bb 1 "
    assert align_structure([]) == ""


def test_align_uses_display_width():
    data = {"k": ["日本", "ab"]}
    assert align_structure(data) == "日本\nab  "
    assert align_structure(data, use_display_width=False) == "日本\nab"


def test_align_emoji_sequence_occupies_two_columns():
    data = {"k": ["\U0001F1EF\U0001F1F5", "abc"], "v": ["x", "y"]}
    assert align_structure(data) == "\U0001F1EF\U0001F1F5  x\nabc y"


def test_align_rejects_invalid_structure():
    with pytest.raises(StructureError):
        align_structure([["a", "b"], ["c"]])


def test_align_rejects_unknown_alignment():
    with pytest.raises(ArgumentError):
        align_structure(PEOPLE, "diagonal")


def test_align_csv_text():
    text = "name,qty\r\napple,3\nkiwi,12"
    options = RenderOptions(alignment="right", left_align_first_column=True)
    assert align_csv_text(text, options) == "name  qty\napple   3\nkiwi   12"


def test_align_csv_text_first_column_can_follow_alignment():
    options = RenderOptions(alignment="right", left_align_first_column=False)
    assert align_csv_text("a,b\nccc,d", options) == "  a b\nccc d"
    assert align_csv_text("a,b\nccc,d", RenderOptions(alignment="right")) == "a   b\nccc d"


def test_align_csv_text_keeps_ragged_lines():
    assert align_csv_text("a,b,c\nd") == "a b c\nd"


def test_align_csv_text_custom_dialect():
    options = RenderOptions(delimiter=";", quote="'")
    assert align_csv_text("'x;y';z\nw;v", options) == "x;y z\nw   v"


def test_align_csv_text_empty():
    assert align_csv_text("") == ""


def test_align_csv_text_ignores_trailing_whitespace_line():
    assert align_csv_text("a,b\nc,d\n   ") == "a b\nc d"
    assert align_csv_text("  a,b\nc,d") == "  a b\nc   d"


@pytest.mark.parametrize(
    "kwargs",
    [{"alignment": "top"}, {"delimiter": ";;"}, {"quote": ""}, {"delimiter": '"'}],
)
def test_render_options_are_validated(kwargs):
    with pytest.raises(ArgumentError):
        RenderOptions(**kwargs)


def test_render_dispatches_on_input_type():
    assert render("a,b\nc,d") == "a b\nc d"
    assert render(PEOPLE) == "Alice 25\nBob   30"
