"""
Add annotations to the row or column descriptors of an AnnotatedMatrix.

The annotation table is joined onto the existing descriptor table with
precedence merge semantics: fields already present in the descriptors are
kept, new fields are added, and the descriptor rows keep their original
count and order whatever the order or multiplicity of the annotation rows.

Examples:
    >>> annot = pd.DataFrame({"pr_id": ["g2", "g1"], "pr_gene_symbol": ["EGFR", "TP53"]})
    >>> g2 = annotate_gct(g, annot, dimension="row", keyfield="pr_id")
    >>> g2.rdesc["pr_gene_symbol"].tolist()
    ['TP53', 'EGFR']
    >>>
    >>> # annotations straight from a file
    >>> g2 = annotate_gct(g, "/path/to/col_annot.txt", dimension="column")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
import pandas as pd

from gctkit.config import get_config
from gctkit.core.annotated_matrix import AnnotatedMatrix
from gctkit.core.errors import MissingAnnotationKey
from gctkit.core.transform import Transform
from gctkit.io.annotations import load_annotation_table
from gctkit.ops.dimensions import ROW, normalize_dimension
from gctkit.ops.selectors import is_whole_number
from gctkit.ops.tables import merge_with_precedence, subset_to_ids

__all__ = ['annotate_gct', 'Annotate']

logger = logging.getLogger(__name__)

AnnotationSource = Union[pd.DataFrame, str, Path]


def annotate_gct(
    g: AnnotatedMatrix,
    annot: AnnotationSource,
    dimension: str = "row",
    keyfield: str = "id",
    strict: Optional[bool] = None,
) -> AnnotatedMatrix:
    """
    Apply an annotation table to the row or column descriptors.

    Args:
        g: Input matrix
        annot: Annotation DataFrame, or path to a delimited annotation table
        dimension: "row" or "col"/"column"
        keyfield: Column of ``annot`` holding the row/column ids
        strict: Raise CardinalityViolation when an id matches several
            annotation rows instead of using the first one (default from
            config ``strict_cardinality``)

    Returns:
        New AnnotatedMatrix with the annotated descriptor table; matrix, ids
        and the other descriptor table are unchanged

    Raises:
        InvalidDimension: If dimension is not a row/column synonym
        MissingAnnotationKey: If keyfield is not a column of ``annot``
        CardinalityViolation: Duplicate annotation keys in strict mode

    Warns:
        UnmatchedKeys: Descriptor ids with no annotation row
        CardinalityWarning: Ids matching several annotation rows
    """
    dim = normalize_dimension(dimension)
    if strict is None:
        strict = get_config().strict_cardinality

    if not isinstance(annot, pd.DataFrame):
        annot = load_annotation_table(annot)

    if keyfield not in annot.columns:
        raise MissingAnnotationKey(keyfield)

    # Copy the key into 'id' for the join; keyfield itself stays in the table
    annot = annot.copy()
    annot['id'] = annot[keyfield].map(_key_string)

    ids = g.rid if dim == ROW else g.cid
    desc = g.rdesc if dim == ROW else g.cdesc
    if len(desc.columns) == 0:
        desc = pd.DataFrame({'id': list(ids)})

    merged = merge_with_precedence(desc, annot, by='id', allow_fanout=not strict)
    if len(merged) != len(desc) or not np.array_equal(
        merged['id'].to_numpy(), desc['id'].to_numpy()
    ):
        merged = subset_to_ids(merged, desc['id'])

    added = [c for c in merged.columns if c not in desc.columns]
    logger.info(f"Annotated {len(merged)} {dim}s with {len(added)} new fields")

    return AnnotatedMatrix(
        mat=g.mat.copy(),
        rid=g.rid,
        cid=g.cid,
        rdesc=merged if dim == ROW else g.rdesc,
        cdesc=g.cdesc if dim == ROW else merged,
        allow_duplicates=True,
    )


def _key_string(value: object) -> object:
    """Annotation key as an id string; whole-number floats drop their '.0'."""
    if pd.isna(value):
        return value
    if isinstance(value, (float, np.floating)) and is_whole_number([value])[0]:
        return str(int(round(value)))
    return str(value)


class Annotate(Transform):
    """
    Transform wrapper around annotate_gct().

    Examples:
        >>> Annotate(annot, dimension="column", keyfield="sig_id").apply(g)
    """

    def __init__(
        self,
        annot: AnnotationSource,
        dimension: str = "row",
        keyfield: str = "id",
    ):
        source = str(annot) if not isinstance(annot, pd.DataFrame) else f"<table {annot.shape}>"
        super().__init__(
            name="Annotate",
            params={"annot": source, "dimension": dimension, "keyfield": keyfield},
        )
        normalize_dimension(dimension)
        self.annot = annot
        self.dimension = dimension
        self.keyfield = keyfield

    def validate(self, matrix: AnnotatedMatrix) -> list[str]:
        """The annotation source must exist and carry the key field."""
        errors = super().validate(matrix)

        if isinstance(self.annot, pd.DataFrame):
            if self.keyfield not in self.annot.columns:
                errors.append(f"annotation table has no key field '{self.keyfield}'")
        elif not Path(self.annot).exists():
            errors.append(f"annotation table not found: {self.annot}")

        return errors

    def apply(self, matrix: AnnotatedMatrix) -> AnnotatedMatrix:
        return annotate_gct(matrix, self.annot, dimension=self.dimension, keyfield=self.keyfield)
