"""
Merge two AnnotatedMatrix objects along rows or columns.

Appending rows concatenates the row ids and row descriptors of both inputs;
the second matrix is realigned to the first one's column order before its
rows are stacked underneath. Appending columns is the same operation on the
transposed inputs.

Examples:
    >>> # take the first 10 and last 10 rows and merge them back together
    >>> a = subset_gct(g, rid=range(10))
    >>> b = subset_gct(g, rid=range(g.n_rows - 10, g.n_rows))
    >>> merged = merge_gct(a, b, dimension="row")
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from gctkit.core.annotated_matrix import AnnotatedMatrix
from gctkit.core.diagnostics import UnmatchedKeys, emit
from gctkit.ops.dimensions import ROW, normalize_dimension
from gctkit.ops.reshape import transpose_gct
from gctkit.ops.tables import match_ids

__all__ = ['merge_gct']

logger = logging.getLogger(__name__)


def merge_gct(
    g1: AnnotatedMatrix,
    g2: AnnotatedMatrix,
    dimension: str = "row",
    matrix_only: bool = False,
) -> AnnotatedMatrix:
    """
    Merge ``g2`` onto ``g1`` along ``dimension``.

    Args:
        g1: First matrix; its order and descriptors take precedence
        g2: Second matrix, appended after ``g1``
        dimension: "row" to append rows, "col"/"column" to append columns
        matrix_only: Drop descriptors on the orthogonal axis (zero-field table)

    Returns:
        New AnnotatedMatrix. Ids on the merge dimension are ``g1``'s followed by
        ``g2``'s, duplicates included. On the orthogonal axis the result keeps
        ``g1``'s ids; positions missing from ``g2`` are NaN.

    Raises:
        InvalidDimension: If dimension is not a row/column synonym

    Warns:
        UnmatchedKeys: ``g1`` orthogonal ids absent from ``g2``
    """
    dim = normalize_dimension(dimension)

    if dim == ROW:
        logger.info("appending rows...")
        return _append_rows(g1, g2, matrix_only, labels=("rid", "cid"))

    logger.info("appending columns...")
    merged = _append_rows(
        transpose_gct(g1), transpose_gct(g2), matrix_only, labels=("cid", "rid")
    )
    return transpose_gct(merged)


def _append_rows(
    g1: AnnotatedMatrix,
    g2: AnnotatedMatrix,
    matrix_only: bool,
    labels: tuple[str, str],
) -> AnnotatedMatrix:
    primary_label, orthogonal_label = labels

    rid = g1.rid.append(g2.rid)
    rdesc = pd.concat(
        [_with_ids(g1.rdesc, g1.rid), _with_ids(g2.rdesc, g2.rid)],
        ignore_index=True,
        sort=False,
    )

    # Position of each g1 column in g2 (-1 when absent)
    idx = match_ids(g1.cid, g2.cid)
    found = idx >= 0
    if not found.all():
        emit(
            UnmatchedKeys,
            f"the following {orthogonal_label}s of the first matrix were not found "
            f"in the second, filling with NaN",
            list(g1.cid[~found]),
        )

    block = np.full((g2.n_rows, g1.n_cols), np.nan)
    block[:, found] = g2.mat[:, idx[found]]
    mat = np.vstack([g1.mat, block])

    if matrix_only:
        cdesc = pd.DataFrame(index=pd.RangeIndex(g1.n_cols))
    else:
        base = _with_ids(g1.cdesc, g1.cid)
        extra_cols = [c for c in g2.cdesc.columns if c not in base.columns]
        extra = g2.cdesc.reset_index(drop=True).loc[:, extra_cols].reindex(idx)
        cdesc = pd.concat([base, extra.reset_index(drop=True)], axis=1)

    logger.debug(
        f"Merged {primary_label}s: {g1.n_rows} + {g2.n_rows} -> {len(rid)}, "
        f"{int(found.sum())}/{g1.n_cols} {orthogonal_label}s matched"
    )
    return AnnotatedMatrix(
        mat=mat,
        rid=rid,
        cid=g1.cid,
        rdesc=rdesc,
        cdesc=cdesc,
        allow_duplicates=True,
    )


def _with_ids(desc: pd.DataFrame, ids: pd.Index) -> pd.DataFrame:
    """Descriptor table with an ``id`` column; zero-field tables get an id-only one."""
    if len(desc.columns) == 0:
        return pd.DataFrame({'id': list(ids)})
    return desc.reset_index(drop=True)
