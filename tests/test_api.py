"""Tests for the impute/chain entry points and method shortcuts."""
from __future__ import annotations

import math

import numpy as np
import pandas as pd
import pytest

import impute
from impute import (
    METHODS,
    SVD,
    Chain,
    ConfigurationError,
    Drop,
    Fill,
    ImputeError,
    Interpolate,
    LOCF,
    NOCB,
    build_imputor,
)


class TestImpute:
    def test_drop(self, seq):
        result = impute.impute(seq, "drop", limit=0.2)
        assert result == [v for v in seq if v is not None]

    def test_interp(self, seq):
        result = impute.impute(seq, "interp", limit=0.2)
        assert result == [float(i) for i in range(1, 21)]
        assert result == impute.interp(seq)

    def test_default_method_is_interp(self, seq):
        assert impute.impute(seq, limit=0.2) == impute.impute(seq, "interp", limit=0.2)

    def test_fill_args(self, seq):
        result = impute.impute(seq, "fill", -1.0, limit=0.2)
        assert result[1] == -1.0
        assert impute.impute(seq, "fill", value=-2.0, limit=0.2)[1] == -2.0

    def test_locf_nocb(self, seq):
        assert impute.impute(seq, "locf", limit=0.2)[6] == 6.0
        assert impute.impute(seq, "nocb", limit=0.2)[6] == 8.0

    def test_not_enough_data(self, seq):
        with pytest.raises(ImputeError):
            impute.impute(seq, "drop")

    def test_copy_leaves_input(self, seq):
        original = list(seq)
        impute.impute(seq, "interp", limit=0.2)
        assert seq == original

    def test_inplace_modifies_input(self, seq):
        result = impute.impute_(seq, "interp", limit=0.2)
        assert result is seq
        assert seq[1] == 2.0

    def test_copy_frame(self, frame):
        original = frame.copy()
        result = impute.impute(frame, "drop", limit=0.5)
        pd.testing.assert_frame_equal(frame, original)
        assert len(result) == 2

    def test_inplace_frame(self, frame):
        impute.impute_(frame, "drop", limit=0.5)
        assert len(frame) == 2

    def test_matrix_drop_returns_new_array(self, matrix):
        result = impute.impute_(matrix, "drop", limit=0.5)
        assert result.shape == (2, 3)

    def test_imputor_instance(self, seq):
        assert impute.impute(seq, LOCF(), limit=0.2)[1] == 1.0

    def test_positional_predicate(self):
        data = [1.0, -1.0, 3.0]
        result = impute.impute(data, lambda v: v == -1.0, "fill", 0.0, limit=0.5)
        assert result == [1.0, 0.0, 3.0]

    def test_keyword_predicate(self):
        data = [1.0, float("nan"), 3.0]
        result = impute.impute(data, "interp", is_missing=math.isnan, limit=0.5)
        assert result == [1.0, 2.0, 3.0]

    def test_unknown_method(self, seq):
        with pytest.raises(ConfigurationError, match="Unknown imputation method"):
            impute.impute(seq, "mice", limit=1.0)

    def test_invalid_arguments(self, seq):
        with pytest.raises(ConfigurationError):
            impute.impute(seq, "drop", 1.0, limit=1.0)
        with pytest.raises(ConfigurationError):
            impute.impute(seq, "svd", rank=0, limit=1.0)

    @pytest.mark.parametrize("limit", [-0.5, 2.0])
    def test_invalid_limit(self, seq, limit):
        with pytest.raises(ConfigurationError):
            impute.impute(seq, "interp", limit=limit)

    @pytest.mark.parametrize("method", ["drop", "fill", "interp", "locf", "nocb"])
    def test_limit_leaves_input_untouched(self, method):
        data = [None, 1.0, None, 3.0]
        with pytest.raises(ImputeError):
            impute.impute_(data, method, limit=0.25)
        assert data == [None, 1.0, None, 3.0]


class TestChain:
    def test_chain_matrix(self, matrix):
        result = impute.chain(matrix, Interpolate(), LOCF(), NOCB(), limit=1.0)
        assert result.shape == matrix.shape
        assert not np.isnan(result).any()
        assert np.isnan(matrix).sum() == 2

    def test_chain_inplace(self, matrix):
        result = impute.chain_(matrix, Interpolate(), LOCF(), NOCB(), limit=1.0)
        assert result is matrix
        assert not np.isnan(matrix).any()

    def test_alternate_missing_predicate(self, frame):
        marked = impute.impute(frame, "fill", -1.0, limit=1.0)
        result1 = impute.chain(frame, Interpolate(), Drop(), limit=1.0)
        result2 = impute.chain(marked, lambda v: v == -1.0, Interpolate(), Drop(), limit=1.0)
        pd.testing.assert_frame_equal(result1, result2)

    def test_chain_requires_imputors(self, seq):
        with pytest.raises(ConfigurationError):
            impute.chain(seq, limit=1.0)


class TestShortcuts:
    def test_default_limit_is_permissive(self):
        data = [None, None, 1.0, None, 3.0]
        assert impute.interp(data) == [None, None, 1.0, 2.0, 3.0]
        assert impute.drop(data) == [1.0, 3.0]
        assert impute.locf(data)[3] == 1.0
        assert impute.nocb(data)[0] == 1.0
        assert impute.fill(data, 0.0) == [0.0, 0.0, 1.0, 0.0, 3.0]
        assert data == [None, None, 1.0, None, 3.0]

    def test_inplace_shortcuts(self):
        data = [1.0, None, 3.0]
        impute.interp_(data)
        assert data == [1.0, 2.0, 3.0]
        data = [1.0, None]
        assert impute.drop_(data) is data
        assert data == [1.0]

    def test_svd(self):
        X = np.outer(np.arange(1.0, 7.0), np.arange(1.0, 5.0))
        X[2, 1] = np.nan
        result = impute.svd(X, rank=1, strict=False)
        assert np.isnan(X[2, 1])
        assert not np.isnan(result).any()
        impute.svd_(X, rank=1, strict=False)
        assert not np.isnan(X).any()

    def test_svd_frame_defaults(self):
        df = pd.DataFrame(np.outer(np.arange(1.0, 9.0), np.arange(1.0, 6.0)), columns=list("abcde"))
        df.iloc[3, 2] = np.nan
        result = impute.svd(df)
        assert np.isnan(df.iloc[3, 2])
        assert not result.isna().any().any()

    def test_fill_integer_array(self):
        result = impute.impute(np.array([1, -999, 2]), lambda v: v == -999, "fill", limit=1.0)
        assert result[1] == 1.5

    def test_shortcut_names(self):
        assert impute.drop.__name__ == "drop"
        assert impute.drop_.__name__ == "drop_"


class TestRegistry:
    def test_methods(self):
        assert dict(METHODS) == {
            "drop": Drop,
            "fill": Fill,
            "interp": Interpolate,
            "locf": LOCF,
            "nocb": NOCB,
            "svd": SVD,
        }

    def test_read_only(self):
        with pytest.raises(TypeError):
            METHODS["mean"] = Fill

    def test_build_imputor(self):
        assert build_imputor("svd", 2) == SVD(rank=2)
        chain = Chain(LOCF())
        assert build_imputor(chain) is chain
        with pytest.raises(ConfigurationError):
            build_imputor(chain, 1)
        with pytest.raises(ConfigurationError):
            build_imputor(42)
