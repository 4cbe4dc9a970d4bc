"""
Core data structure for annotated (GCT-style) matrices.

AnnotatedMatrix unifies a numeric matrix with the identifiers of its rows and
columns and a descriptor table for each axis (row annotations such as gene
symbols, column annotations such as perturbation or cell line).

Data Context:
    GCT datasets are the common currency of connectivity-map style pipelines:
    - Rows = features (genes, probes, proteins)
    - Columns = profiles (signatures, samples, experiments)
    - Values = measurements (z-scores, expression levels, connectivity scores)

    Both axes are independently addressable, so every structural operation
    (subset, merge, transpose, ...) has to keep the matrix, the ids and the
    descriptor tables of BOTH axes aligned.

Engineering Design:
    - Immutable: Operations return new instances (functional style)
    - Type-safe: NumPy arrays for data, Pandas for ids and descriptors
    - Validated: Constructor checks shape and id/descriptor consistency
    - Descriptor tables keep ids in an explicit ``id`` column (not the index),
      so they can be joined like any other table

Examples:
    >>> import numpy as np
    >>> import pandas as pd
    >>> from gctkit.core.annotated_matrix import AnnotatedMatrix
    >>>
    >>> g = AnnotatedMatrix(
    ...     mat=np.array([[1.0, 2.0], [3.0, 4.0]]),
    ...     rid=pd.Index(["g1", "g2"]),
    ...     cid=pd.Index(["s1", "s2"]),
    ...     rdesc=pd.DataFrame({"id": ["g1", "g2"], "symbol": ["TP53", "EGFR"]}),
    ...     cdesc=pd.DataFrame({"id": ["s1", "s2"], "pert": ["DMSO", "BRD-1"]}),
    ... )
    >>> g.shape
    (2, 2)
"""

from __future__ import annotations

from typing import Optional, Sequence
import numpy as np
import pandas as pd

__all__ = ['AnnotatedMatrix']


def _as_index(ids: Sequence[str] | pd.Index) -> pd.Index:
    if isinstance(ids, pd.Index):
        return ids
    return pd.Index([str(i) for i in ids], dtype=object)


class AnnotatedMatrix:
    """
    Immutable container for a matrix + row/column ids + descriptor tables.

    Attributes:
        mat: Numeric matrix (rows × columns), NaN marks missing values
        rid: Row identifiers
        cid: Column identifiers
        rdesc: Row descriptor table, one row per rid, with an ``id`` column
        cdesc: Column descriptor table, one row per cid, with an ``id`` column

    Shape Invariants:
        - mat.shape == (len(rid), len(cid))
        - rdesc['id'] equals rid element-wise (same for cdesc/cid)
        - rid and cid are each free of duplicates (checked unless
          ``allow_duplicates`` is set, which operations use when duplicated
          ids are a legitimate result, e.g. merging overlapping datasets)

    A descriptor table with zero fields is accepted as "no annotations"; it is
    what a matrix-only merge leaves on the orthogonal axis.
    """

    def __init__(
        self,
        mat: np.ndarray,
        rid: pd.Index,
        cid: pd.Index,
        rdesc: Optional[pd.DataFrame] = None,
        cdesc: Optional[pd.DataFrame] = None,
        allow_duplicates: bool = False,
    ):
        """
        Initialize AnnotatedMatrix with validation.

        Args:
            mat: 2D numeric matrix
            rid: Row identifiers (pd.Index or sequence of strings)
            cid: Column identifiers (pd.Index or sequence of strings)
            rdesc: Row descriptor table; defaults to an ``id``-only table
            cdesc: Column descriptor table; defaults to an ``id``-only table
            allow_duplicates: Skip the uniqueness check on rid/cid

        Raises:
            ValueError: If shapes are inconsistent or ids don't match descriptors
            TypeError: If data types are incorrect
        """
        if not isinstance(mat, np.ndarray):
            raise TypeError(f"mat must be np.ndarray, got {type(mat)}")
        if mat.ndim != 2:
            raise ValueError(f"mat must be 2D, got shape {mat.shape}")

        rid = _as_index(rid)
        cid = _as_index(cid)
        n_rows, n_cols = mat.shape

        if len(rid) != n_rows:
            raise ValueError(f"rid length ({len(rid)}) must match mat rows ({n_rows})")
        if len(cid) != n_cols:
            raise ValueError(f"cid length ({len(cid)}) must match mat columns ({n_cols})")

        if not allow_duplicates:
            if not rid.is_unique:
                raise ValueError(f"rid contains duplicates: {list(rid[rid.duplicated()][:10])}")
            if not cid.is_unique:
                raise ValueError(f"cid contains duplicates: {list(cid[cid.duplicated()][:10])}")

        if rdesc is None:
            rdesc = pd.DataFrame({'id': list(rid)})
        if cdesc is None:
            cdesc = pd.DataFrame({'id': list(cid)})

        self._validate_desc(rdesc, rid, "rdesc")
        self._validate_desc(cdesc, cid, "cdesc")

        if not np.issubdtype(mat.dtype, np.floating):
            mat = mat.astype(float)

        # Store as private attributes (immutability by convention)
        self._mat = mat
        self._rid = rid
        self._cid = cid
        self._rdesc = rdesc.reset_index(drop=True)
        self._cdesc = cdesc.reset_index(drop=True)

    @staticmethod
    def _validate_desc(desc: pd.DataFrame, ids: pd.Index, name: str) -> None:
        if not isinstance(desc, pd.DataFrame):
            raise TypeError(f"{name} must be pd.DataFrame, got {type(desc)}")
        if len(desc.columns) == 0:
            # Zero-field table: no annotations on this axis
            return
        if 'id' not in desc.columns:
            raise ValueError(f"{name} must contain an 'id' column")
        if len(desc) != len(ids):
            raise ValueError(
                f"{name} has {len(desc)} rows for {len(ids)} ids"
            )
        if not np.array_equal(desc['id'].astype(str).to_numpy(), ids.astype(str).to_numpy()):
            raise ValueError(f"{name}['id'] must match ids exactly and in order")

    @property
    def mat(self) -> np.ndarray:
        """Data matrix (rows × columns)."""
        return self._mat

    @property
    def rid(self) -> pd.Index:
        """Row identifiers."""
        return self._rid

    @property
    def cid(self) -> pd.Index:
        """Column identifiers."""
        return self._cid

    @property
    def rdesc(self) -> pd.DataFrame:
        """Row descriptor table."""
        return self._rdesc

    @property
    def cdesc(self) -> pd.DataFrame:
        """Column descriptor table."""
        return self._cdesc

    @property
    def shape(self) -> tuple[int, int]:
        """Matrix dimensions (n_rows, n_cols)."""
        return self._mat.shape

    @property
    def n_rows(self) -> int:
        return self._mat.shape[0]

    @property
    def n_cols(self) -> int:
        return self._mat.shape[1]

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        rdesc: Optional[pd.DataFrame] = None,
        cdesc: Optional[pd.DataFrame] = None,
    ) -> AnnotatedMatrix:
        """
        Build an AnnotatedMatrix from a labelled DataFrame.

        The DataFrame index becomes rid and its columns become cid. Descriptor
        tables default to ``id``-only tables.

        Examples:
            >>> df = pd.DataFrame([[1.0, 2.0]], index=["g1"], columns=["s1", "s2"])
            >>> AnnotatedMatrix.from_frame(df).cid.tolist()
            ['s1', 's2']
        """
        return cls(
            mat=df.to_numpy(dtype=float),
            rid=pd.Index([str(i) for i in df.index], dtype=object),
            cid=pd.Index([str(c) for c in df.columns], dtype=object),
            rdesc=rdesc,
            cdesc=cdesc,
        )

    def to_frame(self) -> pd.DataFrame:
        """Matrix as a DataFrame indexed by rid with cid columns."""
        return pd.DataFrame(self._mat, index=self._rid, columns=self._cid)

    def copy(self, deep: bool = True) -> AnnotatedMatrix:
        """
        Create a copy of this matrix.

        Args:
            deep: If True, copy all arrays. If False, share arrays (faster but mutable)
        """
        if deep:
            return AnnotatedMatrix(
                mat=self._mat.copy(),
                rid=self._rid.copy(),
                cid=self._cid.copy(),
                rdesc=self._rdesc.copy(),
                cdesc=self._cdesc.copy(),
                allow_duplicates=True,
            )
        return AnnotatedMatrix(
            mat=self._mat,
            rid=self._rid,
            cid=self._cid,
            rdesc=self._rdesc,
            cdesc=self._cdesc,
            allow_duplicates=True,
        )

    def equals(self, other: object) -> bool:
        """
        Value equality of matrix, ids and descriptor tables.

        NaN entries compare equal to NaN in the same position.
        """
        if not isinstance(other, AnnotatedMatrix):
            return False
        if self.shape != other.shape:
            return False
        return (
            np.array_equal(self._mat, other._mat, equal_nan=True)
            and self._rid.equals(other._rid)
            and self._cid.equals(other._cid)
            and self._rdesc.equals(other._rdesc)
            and self._cdesc.equals(other._cdesc)
        )

    def __repr__(self) -> str:
        """String representation for debugging."""
        def _span(ids: pd.Index) -> str:
            if len(ids) == 0:
                return "<empty>"
            return f"{ids[0]}...{ids[-1]}"

        return (
            f"AnnotatedMatrix({self.n_rows} rows × {self.n_cols} columns)\n"
            f"  Rows: {_span(self._rid)}\n"
            f"  Columns: {_span(self._cid)}\n"
            f"  Row descriptors: {list(self._rdesc.columns)}\n"
            f"  Column descriptors: {list(self._cdesc.columns)}"
        )

    def __str__(self) -> str:
        """Human-readable string representation."""
        return self.__repr__()
