"""Tests for transpose_gct, rank_gct and transform pipelines."""

import numpy as np
import pandas as pd
import pytest

from gctkit.core.annotated_matrix import AnnotatedMatrix
from gctkit.core.errors import InvalidAxis
from gctkit.core.transform import Transform, apply_all
from gctkit.ops.reshape import Rank, Transpose, rank_gct, transpose_gct
from gctkit.ops.subset import Subset


@pytest.fixture
def rank_gct_input():
    """3 × 2 matrix with a tie in the second column."""
    mat = np.array([
        [3.0, 5.0],
        [1.0, 5.0],
        [2.0, 1.0],
    ])
    return AnnotatedMatrix(mat, ["r0", "r1", "r2"], ["c0", "c1"])


class TestTranspose:

    def test_involution(self, small_gct):
        assert transpose_gct(transpose_gct(small_gct)).equals(small_gct)

    def test_swaps_ids_and_descriptors(self, small_gct):
        t = transpose_gct(small_gct)

        assert t.shape == (3, 4)
        assert t.rid.tolist() == small_gct.cid.tolist()
        assert t.cid.tolist() == small_gct.rid.tolist()
        assert t.rdesc.equals(small_gct.cdesc)
        assert t.cdesc.equals(small_gct.rdesc)
        assert np.array_equal(t.mat, small_gct.mat.T)

    def test_result_is_independent(self, small_gct):
        t = transpose_gct(small_gct)
        t.mat[:] = 0
        assert not np.all(small_gct.mat == 0)


class TestRank:

    def test_column_ranks_descending(self, rank_gct_input):
        ranked = rank_gct(rank_gct_input, dim="col")

        assert ranked.mat[:, 0].tolist() == [1.0, 3.0, 2.0]
        assert ranked.mat[:, 1].tolist() == [1.5, 1.5, 3.0]

    @pytest.mark.parametrize("dim", ["column", "COL", " cols "])
    def test_column_synonyms(self, rank_gct_input, dim):
        expected = rank_gct(rank_gct_input, dim="col")
        assert np.array_equal(rank_gct(rank_gct_input, dim=dim).mat, expected.mat)

    def test_row_ranks(self, rank_gct_input):
        ranked = rank_gct(rank_gct_input, dim="row")

        assert ranked.mat[0].tolist() == [2.0, 1.0]
        assert ranked.mat[1].tolist() == [2.0, 1.0]
        assert ranked.mat[2].tolist() == [1.0, 2.0]

    def test_ranks_are_permutations(self, small_gct):
        ranked = rank_gct(small_gct, dim="col")
        for j in range(small_gct.n_cols):
            assert sorted(ranked.mat[:, j].tolist()) == [1.0, 2.0, 3.0, 4.0]

    def test_nan_stays_nan(self):
        mat = np.array([[3.0], [np.nan], [1.0]])
        g = AnnotatedMatrix(mat, ["a", "b", "c"], ["x"])

        ranked = rank_gct(g, dim="col")

        assert ranked.mat[0, 0] == 1.0
        assert np.isnan(ranked.mat[1, 0])
        assert ranked.mat[2, 0] == 2.0

    def test_ids_and_descriptors_unchanged(self, small_gct):
        ranked = rank_gct(small_gct)

        assert ranked.rid.equals(small_gct.rid)
        assert ranked.cid.equals(small_gct.cid)
        assert ranked.rdesc.equals(small_gct.rdesc)
        assert ranked.cdesc.equals(small_gct.cdesc)

    def test_empty_matrix(self):
        g = AnnotatedMatrix(np.empty((0, 2)), [], ["x", "y"])
        assert rank_gct(g).shape == (0, 2)

    def test_invalid_axis(self, small_gct):
        with pytest.raises(InvalidAxis, match="depth"):
            rank_gct(small_gct, dim="depth")


class TestTransforms:

    def test_rank_rejects_axis_at_construction(self):
        with pytest.raises(InvalidAxis):
            Rank(dim="diagonal")

    def test_pipeline(self, small_gct):
        pipeline = [Subset(rid=["g0", "g1"]), Rank(dim="column"), Transpose()]

        result = apply_all(pipeline, small_gct)

        expected = transpose_gct(rank_gct(
            AnnotatedMatrix(
                small_gct.mat[:2], small_gct.rid[:2], small_gct.cid,
                rdesc=small_gct.rdesc.iloc[:2], cdesc=small_gct.cdesc,
            ),
            dim="column",
        ))
        assert result.equals(expected)
        assert [str(t) for t in pipeline] == [
            "Subset(rid=['g0', 'g1'], cid=None)", "Rank(dim=column)", "Transpose()"
        ]

    def test_validation_errors_stop_pipeline(self, small_gct):

        class AlwaysInvalid(Transform):
            def __init__(self):
                super().__init__(name="AlwaysInvalid", params={})

            def validate(self, matrix):
                errors = super().validate(matrix)
                errors.append("never applicable")
                return errors

            def apply(self, matrix):
                raise AssertionError("apply must not run")

        with pytest.raises(ValueError, match="never applicable"):
            apply_all([AlwaysInvalid()], small_gct)

    def test_transform_records_params(self):
        transform = Rank(dim="row")
        assert transform.name == "Rank"
        assert transform.params == {"dim": "row"}
        assert transform.timestamp is not None
