"""
Subset an AnnotatedMatrix by row and/or column ids or positions.

Examples:
    >>> # first 10 rows and columns by position
    >>> a = subset_gct(g, rid=range(10), cid=range(10))
    >>>
    >>> # the same rows and columns by id
    >>> b = subset_gct(g, rid=g.rid[:10], cid=g.cid[:10])
    >>> a.equals(b)
    True
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from gctkit.core.annotated_matrix import AnnotatedMatrix
from gctkit.core.diagnostics import EmptyResultWarning, emit
from gctkit.core.errors import InvalidSelectorKind
from gctkit.core.transform import Transform
from gctkit.ops.selectors import ByIndex, as_selector, resolve_ids
from gctkit.ops.tables import take_rows

__all__ = ['subset_gct', 'Subset']

logger = logging.getLogger(__name__)


def subset_gct(
    g: AnnotatedMatrix,
    rid: object = None,
    cid: object = None,
    tol: Optional[float] = None,
) -> AnnotatedMatrix:
    """
    Subset a matrix using row and column selectors.

    Args:
        g: Input matrix
        rid: Row selector: ids, 0-based positions, ById/ByIndex, or None for all
        cid: Column selector, same forms as ``rid``
        tol: Whole-number tolerance for numeric selectors

    Returns:
        New AnnotatedMatrix whose matrix, ids and descriptor tables follow the
        resolved order

    Raises:
        InvalidSelectorKind: If a selector is neither ids nor whole numbers
        UnresolvableDescriptorRow: If a descriptor table has no 'id' column
        IndexError: If a positional selector is out of range

    Warns:
        UnmatchedKeys: Requested ids not present in the matrix
        EmptyResultWarning: A resulting dimension has length 0
    """
    new_rid, ridx = resolve_ids(rid, g.rid, "rid", tol)
    new_cid, cidx = resolve_ids(cid, g.cid, "cid", tol)

    # Descriptor rows follow the resolved positions, duplicate ids included
    rdesc = take_rows(g.rdesc, ridx)
    cdesc = take_rows(g.cdesc, cidx)

    mat = g.mat[np.ix_(ridx, cidx)]

    if mat.shape[0] == 0 or mat.shape[1] == 0:
        emit(
            EmptyResultWarning,
            f"one or more returned dimension is length 0 (shape {mat.shape}); "
            "check that at least some of the provided rid and/or cid values "
            "have matches in the matrix",
        )

    logger.debug(f"Subset {g.shape} -> {mat.shape}")
    return AnnotatedMatrix(
        mat=mat,
        rid=new_rid,
        cid=new_cid,
        rdesc=rdesc,
        cdesc=cdesc,
        allow_duplicates=True,
    )


class Subset(Transform):
    """
    Transform wrapper around subset_gct().

    Examples:
        >>> Subset(rid=["g1", "g2"]).apply(g).rid.tolist()
        ['g1', 'g2']
    """

    def __init__(self, rid: object = None, cid: object = None):
        super().__init__(name="Subset", params={"rid": rid, "cid": cid})
        self.rid = rid
        self.cid = cid

    def validate(self, matrix: AnnotatedMatrix) -> list[str]:
        """Selectors must classify, fit the axis, and have an 'id' field to realign."""
        errors = super().validate(matrix)

        axes = (
            ("rid", self.rid, matrix.rid, matrix.rdesc),
            ("cid", self.cid, matrix.cid, matrix.cdesc),
        )
        for label, selector, ids, desc in axes:
            try:
                sel = as_selector(selector, label)
            except InvalidSelectorKind as e:
                errors.append(str(e))
                continue

            if isinstance(sel, ByIndex):
                bad = [i for i in sel.indices if not 0 <= i < len(ids)]
                if bad:
                    errors.append(
                        f"{label} indices out of range for axis of length {len(ids)}: {bad[:10]}"
                    )
            if 'id' not in desc.columns:
                errors.append(f"{label} descriptor table has no 'id' field")

        return errors

    def apply(self, matrix: AnnotatedMatrix) -> AnnotatedMatrix:
        return subset_gct(matrix, rid=self.rid, cid=self.cid)
