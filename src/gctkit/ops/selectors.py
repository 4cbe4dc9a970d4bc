"""
Id/index selectors and their resolution against a reference axis.

Callers pick rows or columns either by id (``["g1", "g7"]``) or by 0-based
position (``[0, 6]``). The ambiguity is resolved once at the API boundary by
``as_selector`` into a tagged union (ById | ByIndex); the resolution itself
then works on an explicit variant.

Ordering:
    Resolved ids are always re-derived from the reference axis. Selecting by
    id follows the reference order (membership, not caller order); selecting
    by index follows the caller's index order, repeats included.
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np
import pandas as pd

from gctkit.config import get_config
from gctkit.core.diagnostics import UnmatchedKeys, emit
from gctkit.core.errors import InvalidSelectorKind

__all__ = ['ById', 'ByIndex', 'Selector', 'as_selector', 'resolve_ids', 'is_whole_number']

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ById:
    """Select by identifier; matched by membership against the reference ids."""
    ids: tuple[str, ...]

    def __init__(self, ids: Sequence[str]):
        object.__setattr__(self, 'ids', tuple(ids))


@dataclass(frozen=True)
class ByIndex:
    """Select by 0-based position; repeats replicate rows/columns."""
    indices: tuple[int, ...]

    def __init__(self, indices: Sequence[int]):
        object.__setattr__(self, 'indices', tuple(int(i) for i in indices))


Selector = Union[ById, ByIndex]


def is_whole_number(x, tol: Optional[float] = None) -> np.ndarray:
    """
    Check whether values are within ``tol`` of a whole number.

    Examples:
        >>> is_whole_number([1, 2.0, 0.5])
        array([ True,  True, False])
    """
    if tol is None:
        tol = get_config().whole_number_tol
    values = np.asarray(x, dtype=float)
    return np.abs(values - np.round(values)) < tol


def _is_number(value: object) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


def as_selector(
    selector: object,
    axis_name: str,
    tol: Optional[float] = None,
) -> Optional[Selector]:
    """
    Classify a raw selector into ById / ByIndex.

    Args:
        selector: None, a ById/ByIndex, a single id, or a sequence of ids or
            whole-number positions
        axis_name: Name used in error messages ("rid", "cid", ...)
        tol: Whole-number tolerance (default from config)

    Returns:
        None when selector is None, otherwise a Selector

    Raises:
        InvalidSelectorKind: If values are neither all strings nor all whole numbers
    """
    if selector is None or isinstance(selector, (ById, ByIndex)):
        return selector

    if isinstance(selector, str):
        return ById([selector])

    if isinstance(selector, (pd.Index, pd.Series, np.ndarray)):
        values = list(selector.tolist())
    else:
        try:
            values = list(selector)  # type: ignore[call-overload]
        except TypeError:
            raise InvalidSelectorKind(axis_name) from None

    if all(isinstance(v, str) for v in values):
        return ById(values)

    if all(_is_number(v) for v in values) and bool(np.all(is_whole_number(values, tol))):
        return ByIndex([int(round(float(v))) for v in values])

    raise InvalidSelectorKind(axis_name)


def resolve_ids(
    selector: object,
    reference_ids: pd.Index,
    axis_name: str,
    tol: Optional[float] = None,
) -> tuple[pd.Index, np.ndarray]:
    """
    Resolve a selector into ordered ids and positions on a reference axis.

    Args:
        selector: Raw selector or ById/ByIndex (None selects everything)
        reference_ids: Ids of the axis being selected from
        axis_name: Name used in errors and diagnostics
        tol: Whole-number tolerance for numeric selectors

    Returns:
        (ids, idx): ids equal ``reference_ids[idx]``

    Raises:
        InvalidSelectorKind: For selectors that are neither ids nor indices
        IndexError: For positions outside the reference axis

    Warns:
        UnmatchedKeys: Selector ids absent from the reference (they are dropped)

    Examples:
        >>> ref = pd.Index(["a", "b", "c"])
        >>> ids, idx = resolve_ids(["c", "a"], ref, "rid")
        >>> ids.tolist(), idx.tolist()
        (['a', 'c'], [0, 2])
    """
    reference_ids = pd.Index(reference_ids)
    sel = as_selector(selector, axis_name, tol)

    if sel is None:
        idx = np.arange(len(reference_ids), dtype=int)

    elif isinstance(sel, ById):
        idx = np.flatnonzero(reference_ids.isin(sel.ids))
        present = set(reference_ids)
        missing = [i for i in dict.fromkeys(sel.ids) if i not in present]
        if missing:
            emit(UnmatchedKeys, f"the following {axis_name}s were not found", missing)

    else:
        idx = np.asarray(sel.indices, dtype=int)
        n = len(reference_ids)
        out_of_range = idx[(idx < 0) | (idx >= n)]
        if out_of_range.size:
            raise IndexError(
                f"{axis_name} indices out of range for axis of length {n}: "
                f"{out_of_range[:10].tolist()}"
            )

    logger.debug(f"Resolved {len(idx)}/{len(reference_ids)} {axis_name}s")
    return reference_ids[idx], idx
