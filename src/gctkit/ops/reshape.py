"""
Transpose and rank transformations.

Both keep ids and descriptor tables intact (transpose swaps them as whole
units) and only rearrange or replace matrix values.

Examples:
    >>> transpose_gct(transpose_gct(g)).equals(g)
    True
    >>> ranked = rank_gct(g, dim="column")
    >>> # largest value in each column gets rank 1
"""

from __future__ import annotations

import logging

import numpy as np
from scipy.stats import rankdata

from gctkit.core.annotated_matrix import AnnotatedMatrix
from gctkit.core.transform import Transform
from gctkit.ops.dimensions import ROW, normalize_axis

__all__ = ['transpose_gct', 'rank_gct', 'Transpose', 'Rank']

logger = logging.getLogger(__name__)


def transpose_gct(g: AnnotatedMatrix) -> AnnotatedMatrix:
    """
    Transpose the matrix and swap row/column ids and descriptor tables.

    Descriptor fields are not renamed.
    """
    return AnnotatedMatrix(
        mat=g.mat.T.copy(),
        rid=g.cid,
        cid=g.rid,
        rdesc=g.cdesc.copy(),
        cdesc=g.rdesc.copy(),
        allow_duplicates=True,
    )


def rank_gct(g: AnnotatedMatrix, dim: str = "col") -> AnnotatedMatrix:
    """
    Replace values with their descending rank along rows or columns.

    Each row (dim="row") or column (dim="col"/"column") is ranked
    independently: the largest value gets rank 1 and ties share the average
    of the ranks they span. Missing values stay missing and do not take part
    in the ranking.

    Args:
        g: Input matrix
        dim: "row" or "col"/"column"

    Returns:
        New AnnotatedMatrix of ranks with unchanged ids and descriptors

    Raises:
        InvalidAxis: If dim is not a row/column synonym

    Examples:
        >>> # column [3, 1, 2] -> [1, 3, 2]; column [5, 5, 1] -> [1.5, 1.5, 3]
    """
    axis = normalize_axis(dim)
    along = 1 if axis == ROW else 0

    if g.mat.size == 0:
        ranks = g.mat.astype(float).copy()
    else:
        ranks = rankdata(-g.mat, method='average', axis=along, nan_policy='omit')
        ranks = np.asarray(ranks, dtype=float)

    logger.debug(f"Ranked {g.shape} matrix along {axis}s")
    return AnnotatedMatrix(
        mat=ranks,
        rid=g.rid,
        cid=g.cid,
        rdesc=g.rdesc.copy(),
        cdesc=g.cdesc.copy(),
        allow_duplicates=True,
    )


class Transpose(Transform):
    """Transform wrapper around transpose_gct()."""

    def __init__(self):
        super().__init__(name="Transpose", params={})

    def apply(self, matrix: AnnotatedMatrix) -> AnnotatedMatrix:
        return transpose_gct(matrix)


class Rank(Transform):
    """Transform wrapper around rank_gct()."""

    def __init__(self, dim: str = "col"):
        super().__init__(name="Rank", params={"dim": dim})
        # Fail at construction rather than mid-pipeline
        normalize_axis(dim)
        self.dim = dim

    def apply(self, matrix: AnnotatedMatrix) -> AnnotatedMatrix:
        return rank_gct(matrix, dim=self.dim)
