"""Normalisation of dimension/axis names ("row", "col", "column", ...)."""

from __future__ import annotations

from typing import Literal

from gctkit.core.errors import InvalidAxis, InvalidDimension

__all__ = ['ROW', 'COL', 'normalize_dimension', 'normalize_axis']

ROW = "row"
COL = "col"

_SYNONYMS = {
    "row": ROW,
    "rows": ROW,
    "col": COL,
    "cols": COL,
    "column": COL,
    "columns": COL,
}


def _lookup(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    return _SYNONYMS.get(value.strip().lower())


def normalize_dimension(value: object) -> Literal["row", "col"]:
    """
    Map a user-supplied dimension to "row" or "col".

    Raises:
        InvalidDimension: For anything other than a row/column synonym
    """
    dim = _lookup(value)
    if dim is None:
        raise InvalidDimension(value)
    return dim  # type: ignore[return-value]


def normalize_axis(value: object) -> Literal["row", "col"]:
    """Same as normalize_dimension, raising InvalidAxis instead."""
    dim = _lookup(value)
    if dim is None:
        raise InvalidAxis(value)
    return dim  # type: ignore[return-value]
