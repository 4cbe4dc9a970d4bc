"""
Structural operations on AnnotatedMatrix objects.

Every operation is a pure function returning a new object:

    - subset_gct: select rows/columns by id or position
    - merge_gct: append rows or columns of a second matrix
    - melt_gct: reshape to a long-form table
    - annotate_gct: add fields to row or column descriptors
    - transpose_gct: swap rows and columns
    - rank_gct: descending fractional ranks per row or column

Shared primitives:

    - resolve_ids: selector → (ids, positions) on a reference axis
    - merge_with_precedence: left join where the left table's columns win
"""

from gctkit.ops.selectors import ById, ByIndex, as_selector, resolve_ids, is_whole_number
from gctkit.ops.tables import (
    check_colnames,
    match_ids,
    merge_with_precedence,
    subset_to_ids,
    take_rows,
)
from gctkit.ops.subset import subset_gct, Subset
from gctkit.ops.merge import merge_gct
from gctkit.ops.melt import melt_gct, is_symmetric
from gctkit.ops.annotate import annotate_gct, Annotate
from gctkit.ops.reshape import transpose_gct, rank_gct, Transpose, Rank

__all__ = [
    # Selectors
    'ById',
    'ByIndex',
    'as_selector',
    'resolve_ids',
    'is_whole_number',
    # Tables
    'check_colnames',
    'match_ids',
    'merge_with_precedence',
    'subset_to_ids',
    'take_rows',
    # Operations
    'subset_gct',
    'merge_gct',
    'melt_gct',
    'is_symmetric',
    'annotate_gct',
    'transpose_gct',
    'rank_gct',
    # Transforms
    'Subset',
    'Annotate',
    'Transpose',
    'Rank',
]
