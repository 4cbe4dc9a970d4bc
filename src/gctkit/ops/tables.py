"""
Descriptor-table helpers: precedence merge and id realignment.

``merge_with_precedence`` is the join used wherever annotations from a second
table are folded into an existing descriptor table. The left table is
authoritative: its rows, their order, and any column it shares with the right
table are kept as-is; the right table only contributes new columns.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
import pandas as pd

from gctkit.core.diagnostics import CardinalityWarning, UnmatchedKeys, emit
from gctkit.core.errors import (
    CardinalityViolation,
    MissingJoinKey,
    UnresolvableDescriptorRow,
)

__all__ = [
    'check_colnames',
    'match_ids',
    'merge_with_precedence',
    'subset_to_ids',
    'take_rows',
]

logger = logging.getLogger(__name__)


def check_colnames(
    test_names: Sequence[str],
    df: pd.DataFrame,
    throw_error: bool = True,
    table_name: str = "table",
) -> bool:
    """
    Check whether ``test_names`` are all columns of ``df``.

    Args:
        test_names: Column names to test
        df: Table to test against
        throw_error: Raise instead of returning False
        table_name: Name used in the error message

    Raises:
        MissingJoinKey: If names are missing and throw_error is True

    Examples:
        >>> check_colnames(["id", "foobar"], rdesc, throw_error=False)
        False
    """
    missing = [name for name in test_names if name not in df.columns]
    if missing:
        if throw_error:
            raise MissingJoinKey(missing, table_name)
        return False
    return True


def merge_with_precedence(
    left: pd.DataFrame,
    right: pd.DataFrame,
    by: str,
    allow_fanout: bool = True,
) -> pd.DataFrame:
    """
    Left-join ``right`` onto ``left``; on shared column names ``left`` wins.

    Args:
        left: Table whose rows, order and columns take precedence
        right: Table contributing columns not already in ``left``
        by: Key column present in both tables
        allow_fanout: If False, a left key matching several right rows is an
            error; if True the first right row per key is used

    Returns:
        New table with exactly one row per ``left`` row, in ``left`` order

    Raises:
        MissingJoinKey: If ``by`` is absent from either table
        CardinalityViolation: If right keys fan out and allow_fanout is False

    Warns:
        CardinalityWarning: Right keys fan out (allow_fanout=True)
        UnmatchedKeys: Some left keys have no match in right

    Examples:
        >>> x = pd.DataFrame({"foo": list("abc"), "bar": [1, 2, 3]})
        >>> y = pd.DataFrame({"foo": list("abc"), "bar": [11, 12, 13], "baz": list("ABC")})
        >>> merge_with_precedence(x, y, by="foo")["bar"].tolist()
        [1, 2, 3]
    """
    check_colnames([by], left, table_name="left")
    check_colnames([by], right, table_name="right")

    common = set(left.columns) & set(right.columns)
    keep_cols = [by] + [c for c in right.columns if c not in common]
    right = right.loc[:, keep_cols]

    left_keys = set(left[by])
    dup_mask = right[by].duplicated(keep='first')
    fanned = [k for k in pd.unique(right.loc[dup_mask, by]) if k in left_keys]
    if fanned:
        if not allow_fanout:
            raise CardinalityViolation(fanned)
        emit(
            CardinalityWarning,
            "some keys match more than one row in the right table, using the first match",
            fanned,
        )
    if dup_mask.any():
        right = right.loc[~dup_mask]

    right_keys = set(right[by])
    unmatched = [k for k in pd.unique(left[by]) if k not in right_keys]
    if unmatched:
        emit(
            UnmatchedKeys,
            "not all rows of left had a match in right, some columns may contain NaN",
            unmatched,
        )

    merged = left.merge(right, on=by, how='left', sort=False)
    logger.debug(
        f"Precedence merge on '{by}': {len(left)} rows, "
        f"{len(keep_cols) - 1} columns added"
    )
    return merged.reset_index(drop=True)


def subset_to_ids(df: pd.DataFrame, ids: Sequence[str]) -> pd.DataFrame:
    """
    Realign a descriptor table to ``ids`` by exact match on its ``id`` column.

    Each requested id takes the first table row with that id. Ids absent from
    the table get a row of NaN (with ``id`` filled in) rather than being
    dropped, so the result always has one row per requested id.

    Raises:
        UnresolvableDescriptorRow: If the table has no ``id`` column
    """
    if 'id' not in df.columns:
        raise UnresolvableDescriptorRow(
            f"descriptor table has no 'id' column (columns: {list(df.columns)})"
        )

    ids = pd.Index(ids)
    table = df.reset_index(drop=True)
    positions = match_ids(ids, table['id'])
    missing = positions < 0

    out = table.reindex(positions).reset_index(drop=True)
    if missing.any():
        out.loc[missing, 'id'] = ids[missing].to_numpy()
    return out


def take_rows(df: pd.DataFrame, positions: Sequence[int]) -> pd.DataFrame:
    """
    Descriptor rows at ``positions``, renumbered from 0.

    Rows are taken positionally, so a table whose ``id`` column repeats (as
    after a merge) keeps each copy's own fields.

    Raises:
        UnresolvableDescriptorRow: If the table has no ``id`` column
    """
    if 'id' not in df.columns:
        raise UnresolvableDescriptorRow(
            f"descriptor table has no 'id' column (columns: {list(df.columns)})"
        )
    return df.iloc[np.asarray(positions, dtype=int)].reset_index(drop=True)


def match_ids(ids: Sequence, reference: Sequence) -> np.ndarray:
    """
    Position of the first occurrence of each id in ``reference``, -1 if absent.

    Examples:
        >>> match_ids(["b", "z", "a"], ["a", "b", "b"]).tolist()
        [1, -1, 0]
    """
    reference = pd.Series(list(reference), dtype=object)
    first = ~reference.duplicated(keep='first')
    lookup = pd.Index(reference[first], dtype=object)
    first_pos = np.flatnonzero(first.to_numpy())

    hit = lookup.get_indexer(pd.Index(list(ids), dtype=object))
    positions = np.full(len(hit), -1, dtype=int)
    found = hit >= 0
    positions[found] = first_pos[hit[found]]
    return positions
