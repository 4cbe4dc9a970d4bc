"""Tests for the AnnotatedMatrix container."""

import numpy as np
import pandas as pd
import pytest

from gctkit.core.annotated_matrix import AnnotatedMatrix


class TestConstruction:
    """Constructor validation of shapes, ids and descriptor tables."""

    def test_default_descriptors_are_id_only(self):
        g = AnnotatedMatrix(np.zeros((2, 3)), ["a", "b"], ["x", "y", "z"])

        assert list(g.rdesc.columns) == ['id']
        assert g.rdesc['id'].tolist() == ["a", "b"]
        assert g.cdesc['id'].tolist() == ["x", "y", "z"]
        assert g.shape == (2, 3)

    def test_integer_matrix_is_stored_as_float(self):
        g = AnnotatedMatrix(np.array([[1, 2]]), ["a"], ["x", "y"])
        assert np.issubdtype(g.mat.dtype, np.floating)

    def test_rid_length_mismatch(self):
        with pytest.raises(ValueError, match="rid length"):
            AnnotatedMatrix(np.zeros((2, 2)), ["a"], ["x", "y"])

    def test_cid_length_mismatch(self):
        with pytest.raises(ValueError, match="cid length"):
            AnnotatedMatrix(np.zeros((2, 2)), ["a", "b"], ["x"])

    def test_non_array_rejected(self):
        with pytest.raises(TypeError):
            AnnotatedMatrix([[1.0]], ["a"], ["x"])

    def test_duplicate_ids_rejected_by_default(self):
        with pytest.raises(ValueError, match="duplicates"):
            AnnotatedMatrix(np.zeros((2, 1)), ["a", "a"], ["x"])

    def test_duplicate_ids_allowed_on_request(self):
        g = AnnotatedMatrix(np.zeros((2, 1)), ["a", "a"], ["x"], allow_duplicates=True)
        assert g.rid.tolist() == ["a", "a"]

    def test_row_and_column_ids_may_overlap(self):
        g = AnnotatedMatrix(np.zeros((2, 2)), ["a", "b"], ["a", "b"])
        assert g.rid.equals(g.cid)

    def test_descriptor_ids_must_match_order(self):
        rdesc = pd.DataFrame({'id': ["b", "a"]})
        with pytest.raises(ValueError, match="match ids"):
            AnnotatedMatrix(np.zeros((2, 1)), ["a", "b"], ["x"], rdesc=rdesc)

    def test_descriptor_without_id_column(self):
        rdesc = pd.DataFrame({'symbol': ["A", "B"]})
        with pytest.raises(ValueError, match="'id' column"):
            AnnotatedMatrix(np.zeros((2, 1)), ["a", "b"], ["x"], rdesc=rdesc)

    def test_zero_field_descriptor_accepted(self):
        g = AnnotatedMatrix(
            np.zeros((2, 1)), ["a", "b"], ["x"], cdesc=pd.DataFrame()
        )
        assert len(g.cdesc.columns) == 0


class TestFrames:
    """Conversion to and from labelled DataFrames."""

    def test_round_trip(self):
        df = pd.DataFrame([[1.0, 2.0], [3.0, 4.0]], index=["g1", "g2"], columns=["s1", "s2"])
        g = AnnotatedMatrix.from_frame(df)

        assert g.rid.tolist() == ["g1", "g2"]
        assert g.cid.tolist() == ["s1", "s2"]
        pd.testing.assert_frame_equal(g.to_frame(), df, check_index_type=False,
                                      check_column_type=False)


class TestEqualityAndCopy:

    def test_copy_is_equal_and_independent(self, small_gct):
        copied = small_gct.copy()

        assert copied.equals(small_gct)
        copied.mat[0, 0] = 999.0
        assert small_gct.mat[0, 0] != 999.0

    def test_nan_positions_compare_equal(self):
        mat = np.array([[np.nan, 1.0]])
        a = AnnotatedMatrix(mat, ["r"], ["x", "y"])
        b = AnnotatedMatrix(mat.copy(), ["r"], ["x", "y"])
        assert a.equals(b)

    def test_different_values_not_equal(self, small_gct):
        other = AnnotatedMatrix(
            small_gct.mat + 1, small_gct.rid, small_gct.cid,
            small_gct.rdesc, small_gct.cdesc,
        )
        assert not small_gct.equals(other)
        assert not small_gct.equals("not a matrix")

    def test_repr_handles_empty_axis(self):
        g = AnnotatedMatrix(np.zeros((0, 2)), [], ["x", "y"])
        assert "0 rows" in repr(g)
