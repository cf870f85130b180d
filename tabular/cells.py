from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Union

CellValue = Union[str, int, float, bool, None]


def is_scalar(value: Any) -> bool:
    """Containers are the only values a cell may not hold; strings and bytes count as scalars."""
    if isinstance(value, (str, bytes)):
        return True
    return not isinstance(value, (Mapping, list, tuple, set, frozenset))


def cell_to_str(value: Any) -> str:
    """
    Display form of a cell.

    - True  -> "1"
    - False -> ""
    - None  -> ""
    - str   -> unchanged
    - anything else -> str(value)
    """
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)
