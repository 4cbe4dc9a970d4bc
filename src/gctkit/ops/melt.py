"""
Reshape an AnnotatedMatrix into long form ("melt").

One output row per non-missing matrix cell, with the row id, column id and
value, optionally joined with the row and/or column descriptors.

Column naming:
    The row id and column id columns are ``id<row_suffix>`` and
    ``id<col_suffix>`` (``id.x`` / ``id.y`` by default). A descriptor field
    present on both axes is renamed ``<field><row_suffix>`` and
    ``<field><col_suffix>``. Renames are decided from which table a field came
    from, never by pattern-matching names, so user fields that happen to end
    in ``.x`` or ``.y`` are left alone.

Examples:
    >>> # keep both row and column descriptors
    >>> long = melt_gct(g)
    >>>
    >>> # rows are genes, columns are experiments
    >>> long = melt_gct(g, suffixes=("_gene", "_experiment"))
    >>>
    >>> # ignore descriptors
    >>> long = melt_gct(g, keep_rdesc=False, keep_cdesc=False)
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from gctkit.config import get_config
from gctkit.core.annotated_matrix import AnnotatedMatrix
from gctkit.ops.tables import merge_with_precedence

__all__ = ['melt_gct', 'is_symmetric']

logger = logging.getLogger(__name__)


def is_symmetric(
    mat: np.ndarray,
    rtol: Optional[float] = None,
    atol: Optional[float] = None,
) -> bool:
    """
    True if ``mat`` is square and equal to its transpose within tolerance.

    NaN entries are considered equal to NaN in the mirrored position.
    """
    config = get_config()
    rtol = config.symmetry_rtol if rtol is None else rtol
    atol = config.symmetry_atol if atol is None else atol

    if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
        return False
    return bool(np.allclose(mat, mat.T, rtol=rtol, atol=atol, equal_nan=True))


def melt_gct(
    g: AnnotatedMatrix,
    keep_rdesc: bool = True,
    keep_cdesc: bool = True,
    remove_symmetries: bool = False,
    suffixes: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """
    Transform a matrix into a long-form table.

    Args:
        g: Input matrix
        keep_rdesc: Join row descriptors onto each cell
        keep_cdesc: Join column descriptors onto each cell
        remove_symmetries: If the matrix is symmetric, keep only the lower
            triangle and diagonal so each unordered pair appears once
        suffixes: (row_suffix, col_suffix) for id columns and colliding
            descriptor fields; defaults to config ``melt_suffixes``

    Returns:
        DataFrame with columns ``id<row_suffix>``, ``id<col_suffix>``,
        ``value`` followed by descriptor fields; cells are listed column by
        column and missing values are dropped

    Raises:
        ValueError: If suffixes is not a pair of distinct strings
    """
    if suffixes is None:
        suffixes = get_config().melt_suffixes
    if len(suffixes) != 2 or str(suffixes[0]) == str(suffixes[1]):
        raise ValueError(f"suffixes must be a pair of distinct strings, got {suffixes!r}")
    row_suffix, col_suffix = str(suffixes[0]), str(suffixes[1])
    row_key, col_key = f"id{row_suffix}", f"id{col_suffix}"

    logger.info("melting GCT object...")

    mat = g.mat.copy()
    if remove_symmetries and is_symmetric(mat):
        mat[np.triu_indices(mat.shape[0], k=1)] = np.nan
        logger.debug("matrix is symmetric, upper triangle masked")

    # Positional labels keep the reshape valid when ids repeat
    wide = pd.DataFrame(mat)
    wide.insert(0, '_row', np.arange(g.n_rows))
    long = wide.melt(id_vars='_row', var_name='_col', value_name='value')
    long = long[long['value'].notna()]

    flat = pd.DataFrame({
        row_key: g.rid.to_numpy(dtype=object)[long['_row'].to_numpy(dtype=int)],
        col_key: g.cid.to_numpy(dtype=object)[long['_col'].to_numpy(dtype=int)],
        'value': long['value'].to_numpy(dtype=float),
    })

    rdesc = g.rdesc if keep_rdesc and _has_fields(g.rdesc) else None
    cdesc = g.cdesc if keep_cdesc and _has_fields(g.cdesc) else None

    collisions: set = set()
    if rdesc is not None and cdesc is not None:
        collisions = (set(rdesc.columns) & set(cdesc.columns)) - {'id'}

    if rdesc is not None:
        flat = merge_with_precedence(
            flat, _suffixed(rdesc, row_key, collisions, row_suffix), by=row_key
        )
    if cdesc is not None:
        flat = merge_with_precedence(
            flat, _suffixed(cdesc, col_key, collisions, col_suffix), by=col_key
        )

    logger.info("done")
    return flat


def _has_fields(desc: pd.DataFrame) -> bool:
    if len(desc.columns) == 0:
        logger.debug("skipping descriptor table with no fields")
        return False
    return True


def _suffixed(
    desc: pd.DataFrame,
    key: str,
    collisions: set,
    suffix: str,
) -> pd.DataFrame:
    """Copy of ``desc`` with ``id`` renamed to ``key`` and colliding fields suffixed."""
    mapping = {'id': key}
    mapping.update({field: f"{field}{suffix}" for field in collisions})
    return desc.rename(columns=mapping)
