"""Tests for precedence merge and descriptor realignment."""

import numpy as np
import pandas as pd
import pytest

from gctkit.core.diagnostics import CardinalityWarning, UnmatchedKeys
from gctkit.core.errors import CardinalityViolation, MissingJoinKey, UnresolvableDescriptorRow
from gctkit.ops.tables import (
    check_colnames,
    match_ids,
    merge_with_precedence,
    subset_to_ids,
    take_rows,
)


class TestCheckColnames:

    def test_present(self):
        df = pd.DataFrame({'id': [1], 'x': [2]})
        assert check_colnames(['id', 'x'], df)

    def test_missing_without_error(self):
        df = pd.DataFrame({'id': [1]})
        assert check_colnames(['id', 'foobar'], df, throw_error=False) is False

    def test_missing_raises(self):
        df = pd.DataFrame({'id': [1]})
        with pytest.raises(MissingJoinKey, match="foobar"):
            check_colnames(['foobar'], df, table_name="cdesc")


class TestMergeWithPrecedence:

    @pytest.fixture
    def left(self):
        return pd.DataFrame({'foo': list("abcd"), 'score': [1, 2, 3, 4]})

    @pytest.fixture
    def right(self):
        return pd.DataFrame({
            'foo': list("dcba"),
            'score': [40, 30, 20, 10],
            'baz': list("DCBA"),
        })

    def test_left_columns_win(self, left, right):
        merged = merge_with_precedence(left, right, by='foo')

        assert merged['score'].tolist() == [1, 2, 3, 4]
        assert list(merged.columns) == ['foo', 'score', 'baz']

    def test_left_order_preserved(self, left, right):
        merged = merge_with_precedence(left, right, by='foo')

        assert merged['foo'].tolist() == list("abcd")
        assert merged['baz'].tolist() == list("ABCD")

    def test_unmatched_left_rows_get_nan(self, left):
        right = pd.DataFrame({'foo': ['a', 'b'], 'baz': ['A', 'B']})

        with pytest.warns(UnmatchedKeys) as record:
            merged = merge_with_precedence(left, right, by='foo')

        assert len(merged) == 4
        assert merged['baz'].isna().tolist() == [False, False, True, True]
        assert record[0].message.keys == ['c', 'd']

    def test_missing_key_names_table(self, left):
        right = pd.DataFrame({'bar': ['a']})
        with pytest.raises(MissingJoinKey, match="right"):
            merge_with_precedence(left, right, by='foo')
        with pytest.raises(MissingJoinKey, match="left"):
            merge_with_precedence(right, left, by='foo')

    def test_fanout_takes_first_match(self, left):
        right = pd.DataFrame({'foo': list("aabcd"), 'baz': ["A1", "A2", "B", "C", "D"]})

        with pytest.warns(CardinalityWarning):
            merged = merge_with_precedence(left, right, by='foo', allow_fanout=True)

        assert len(merged) == len(left)
        assert merged['baz'].tolist() == ["A1", "B", "C", "D"]

    def test_fanout_strict_raises(self, left):
        right = pd.DataFrame({'foo': list("aabcd"), 'baz': list("xxbcd")})
        with pytest.raises(CardinalityViolation):
            merge_with_precedence(left, right, by='foo', allow_fanout=False)

    def test_inputs_not_mutated(self, left, right):
        left_before = left.copy()
        right_before = right.copy()

        merge_with_precedence(left, right, by='foo')

        pd.testing.assert_frame_equal(left, left_before)
        pd.testing.assert_frame_equal(right, right_before)


class TestSubsetToIds:

    def test_reorders_and_fills_missing(self):
        df = pd.DataFrame({'id': ["a", "b", "c"], 'val': [1.0, 2.0, 3.0]})

        out = subset_to_ids(df, ["c", "zz", "a"])

        assert out['id'].tolist() == ["c", "zz", "a"]
        assert out['val'].tolist()[0] == 3.0
        assert np.isnan(out['val'].tolist()[1])
        assert out['val'].tolist()[2] == 1.0

    def test_repeated_ids(self):
        df = pd.DataFrame({'id': ["a", "b"], 'val': [1, 2]})
        out = subset_to_ids(df, ["b", "b"])
        assert out['val'].tolist() == [2, 2]

    def test_requires_id_column(self):
        with pytest.raises(UnresolvableDescriptorRow):
            subset_to_ids(pd.DataFrame({'x': [1]}), ["a"])


def test_match_ids_first_occurrence():
    assert match_ids(["b", "z", "a"], ["a", "b", "b"]).tolist() == [1, -1, 0]


class TestTakeRows:

    def test_duplicate_ids_keep_own_rows(self):
        df = pd.DataFrame({'id': ["a", "b", "a"], 'val': [1, 2, 3]}, index=[5, 6, 7])

        out = take_rows(df, [2, 0, 2])

        assert out['val'].tolist() == [3, 1, 3]
        assert out.index.tolist() == [0, 1, 2]

    def test_requires_id_column(self):
        with pytest.raises(UnresolvableDescriptorRow):
            take_rows(pd.DataFrame({'x': [1]}), [0])
