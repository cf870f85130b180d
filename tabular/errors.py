from __future__ import annotations


class TabularError(Exception):
    """Base class for every error raised by the tabular engine."""


class StructureError(TabularError, ValueError):
    """The value is not indexed, column-based or row-based, or holds a non-scalar cell."""


class ArgumentError(TabularError, ValueError):
    """A caller-supplied option (alignment, delimiter, quote, ...) is invalid."""


INVALID_STRUCTURE = "Invalid structure. Must be indexed, column-based, or row-based."
