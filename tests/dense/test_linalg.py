"""
Tests for DenseMatrix determinant, inverse, matrix power and the
matrix product entry point.

Reference values are computed independently with numpy.
"""

import warnings

import numpy as np
import pytest

from pymatrices import DenseMatrix, PerformanceWarning
from pymatrices.core.exceptions import (
    MultiplicationDimensionError,
    NumericalError,
    ValidationError,
)
from pymatrices.dense import COFACTOR_WARN_SIZE


# ═══════════════════════════════════════════════════════════════════════
# Determinant
# ═══════════════════════════════════════════════════════════════════════


class TestDeterminant:

    def test_known_4x4(self, det_matrix):
        det = det_matrix.determinant()
        assert det == -376
        assert det.dtype == np.int64

    def test_det_alias(self, det_matrix):
        assert det_matrix.det() == det_matrix.determinant()

    def test_1x1(self):
        assert DenseMatrix([5], (1, 1)).det() == 5

    def test_2x2(self):
        assert DenseMatrix([1, 2, 3, 4], (2, 2)).det() == -2

    def test_3x3(self):
        m = DenseMatrix([2, 0, 1, 1, 3, 2, 1, 1, 4], (3, 3))
        assert m.det() == 18

    def test_identity(self):
        assert DenseMatrix.eye(6).det() == 1.0

    def test_non_square_is_none(self):
        assert DenseMatrix.ones((2, 3)).determinant() is None

    def test_empty_is_one(self):
        assert DenseMatrix.zeros((0, 0)).det() == 1.0

    def test_matches_numpy_float(self, rng):
        values = rng.standard_normal((6, 6))
        det = DenseMatrix.from_array(values).det()
        np.testing.assert_allclose(det, np.linalg.det(values), rtol=1e-8)

    def test_zero_row(self):
        m = DenseMatrix.randomize_range(-5, 5, (5, 5), 'int64', seed=7)
        m.set_many([(2, j) for j in range(5)], 0)
        assert m.det() == 0

    def test_integer_overflow_raises(self):
        m = DenseMatrix([100, 0, 0, 0, 100, 0, 0, 0, 100], (3, 3), 'int8')
        with pytest.raises(NumericalError):
            m.det()

    def test_large_warns(self):
        # diagonal matrix: zero entries are skipped, so expansion stays fast
        m = DenseMatrix.eye(COFACTOR_WARN_SIZE, 'int64')
        with pytest.warns(PerformanceWarning):
            assert m.det() == 1

    def test_small_does_not_warn(self, det_matrix):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            det_matrix.det()


# ═══════════════════════════════════════════════════════════════════════
# Inverse
# ═══════════════════════════════════════════════════════════════════════


class TestInverse:

    def test_2x2(self):
        inv = DenseMatrix([4.0, 7.0, 2.0, 6.0], (2, 2)).inverse()
        np.testing.assert_allclose(inv.to_numpy(), [[0.6, -0.7], [-0.2, 0.4]])

    def test_3x3_matches_numpy(self, rng):
        values = rng.standard_normal((3, 3))
        inv = DenseMatrix.from_array(values).inverse()
        np.testing.assert_allclose(inv.to_numpy(), np.linalg.inv(values), rtol=1e-10)

    def test_product_is_identity(self, rng):
        m = DenseMatrix.from_array(rng.standard_normal((5, 5)))
        np.testing.assert_allclose((m @ m.inverse()).to_numpy(), np.eye(5), atol=1e-9)

    def test_integer_promotes_to_float(self, det_matrix):
        inv = det_matrix.inverse()
        assert inv.dtype == np.float64
        np.testing.assert_allclose(
            inv.to_numpy(), np.linalg.inv(det_matrix.to_numpy().astype(float)), rtol=1e-10
        )

    def test_singular_is_none(self):
        assert DenseMatrix([1.0, 2.0, 2.0, 4.0], (2, 2)).inverse() is None
        assert DenseMatrix([1.0, 2.0, 3.0, 2.0, 4.0, 6.0, 0.0, 1.0, 1.0], (3, 3)).inverse() is None

    def test_non_square_is_none(self):
        assert DenseMatrix.ones((2, 3)).inverse() is None

    def test_empty_is_none(self):
        assert DenseMatrix.zeros((0, 0)).inverse() is None


# ═══════════════════════════════════════════════════════════════════════
# Products
# ═══════════════════════════════════════════════════════════════════════


class TestMatmul:

    def test_matches_numpy(self, rng):
        a = rng.integers(-9, 9, (7, 5))
        b = rng.integers(-9, 9, (5, 11))
        product = DenseMatrix.from_array(a).matmul(DenseMatrix.from_array(b))
        np.testing.assert_array_equal(product.to_numpy(), a @ b)

    def test_mm_alias(self, det_matrix):
        assert det_matrix.mm(det_matrix) == det_matrix.matmul(det_matrix)

    def test_inner_dimension_mismatch(self):
        with pytest.raises(MultiplicationDimensionError):
            DenseMatrix.ones((2, 3)).matmul(DenseMatrix.ones((2, 3)))


class TestExp:

    def test_power(self, det_matrix):
        expected = np.linalg.matrix_power(det_matrix.to_numpy(), 3)
        np.testing.assert_array_equal(det_matrix.exp(3).to_numpy(), expected)

    def test_power_one_is_copy(self, det_matrix):
        result = det_matrix.exp(1)
        assert result == det_matrix
        result.set(0, (0, 0))
        assert det_matrix.at(0, 0) == 1

    def test_non_square_is_none(self):
        assert DenseMatrix.ones((2, 3)).exp(2) is None

    @pytest.mark.parametrize("n", [0, -1, 1.5])
    def test_invalid_power_raises(self, det_matrix, n):
        with pytest.raises(ValidationError):
            det_matrix.exp(n)


class TestAllclose:

    def test_float_within_tolerance(self):
        a = DenseMatrix([1.0, 2.0], (1, 2))
        b = DenseMatrix([1.0 + 1e-13, 2.0], (1, 2))
        assert a.allclose(b)

    def test_float_outside_tolerance(self):
        a = DenseMatrix([1.0, 2.0], (1, 2))
        assert not a.allclose(DenseMatrix([1.001, 2.0], (1, 2)))

    def test_integer_exact(self):
        a = DenseMatrix([1, 2], (1, 2))
        assert a.allclose(a.copy())
        assert not a.allclose(DenseMatrix([1, 3], (1, 2)))

    def test_shape_mismatch_is_false(self):
        assert not DenseMatrix.ones((2, 2)).allclose(DenseMatrix.ones((1, 4)))
