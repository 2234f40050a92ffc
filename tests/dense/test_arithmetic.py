"""
Tests for DenseMatrix elementwise arithmetic.

Validates:
    - Allocating, in-place and operator forms agree
    - Shape mismatches and zero divisors raise
    - Integer division truncates toward zero
    - Floating-point functions require a floating element type
"""

import numpy as np
import pytest

from pymatrices import DenseMatrix
from pymatrices.core.exceptions import (
    DimensionMismatchError,
    DivideByZeroError,
    ValidationError,
)


@pytest.fixture
def a():
    return DenseMatrix([1.0, 2.0, 3.0, 4.0], (2, 2))


@pytest.fixture
def b():
    return DenseMatrix([5.0, 6.0, 7.0, 8.0], (2, 2))


# ═══════════════════════════════════════════════════════════════════════
# Matrix-matrix
# ═══════════════════════════════════════════════════════════════════════


class TestElementwise:

    def test_add(self, a, b):
        np.testing.assert_array_equal(a.add(b).to_numpy(), [[6, 8], [10, 12]])

    def test_sub(self, a, b):
        np.testing.assert_array_equal(b.sub(a).to_numpy(), [[4, 4], [4, 4]])

    def test_sub_abs(self, a, b):
        np.testing.assert_array_equal(a.sub_abs(b).to_numpy(), [[4, 4], [4, 4]])

    def test_mul_is_hadamard(self, a, b):
        np.testing.assert_array_equal(a.mul(b).to_numpy(), [[5, 12], [21, 32]])
        assert a.dot(b) == a.mul(b)

    def test_div(self, a, b):
        np.testing.assert_allclose(b.div(a).to_numpy(), [[5.0, 3.0], [7.0 / 3.0, 2.0]])

    def test_operands_untouched(self, a, b):
        before = a.copy()
        a.add(b)
        assert a == before

    @pytest.mark.parametrize("method", ["add", "sub", "mul", "div", "sub_abs"])
    def test_shape_mismatch_raises(self, a, method):
        other = DenseMatrix.ones((2, 3))
        with pytest.raises(DimensionMismatchError):
            getattr(a, method)(other)

    def test_div_by_zero_element_raises(self, a):
        divisor = DenseMatrix([1.0, 1.0, 0.0, 1.0], (2, 2))
        with pytest.raises(DivideByZeroError) as info:
            a.div(divisor)
        assert info.value.position == (1, 0)

    def test_mixed_dtypes_promote(self):
        ints = DenseMatrix([1, 2], (1, 2), 'int32')
        floats = DenseMatrix([0.5, 0.5], (1, 2))
        assert ints.add(floats).dtype == np.float64


class TestIntegerDivision:

    def test_truncates_toward_zero(self):
        num = DenseMatrix([7, -7, 7, -7], (2, 2), 'int64')
        den = DenseMatrix([2, 2, -2, -2], (2, 2), 'int64')
        np.testing.assert_array_equal(num.div(den).to_numpy(), [[3, -3], [-3, 3]])

    def test_scalar_truncates(self):
        m = DenseMatrix([9, -9], (1, 2), 'int32')
        np.testing.assert_array_equal(m.div_val(4).get_vec(), [2, -2])
        assert m.div_val(4).dtype == np.int32


# ═══════════════════════════════════════════════════════════════════════
# Scalars and in-place forms
# ═══════════════════════════════════════════════════════════════════════


class TestScalar:

    def test_add_val(self, a):
        np.testing.assert_array_equal(a.add_val(1.0).get_vec(), [2, 3, 4, 5])

    def test_sub_val(self, a):
        np.testing.assert_array_equal(a.sub_val(1.0).get_vec(), [0, 1, 2, 3])

    def test_mul_val(self, a):
        np.testing.assert_array_equal(a.mul_val(2.0).get_vec(), [2, 4, 6, 8])

    def test_div_val_zero_raises(self, a):
        with pytest.raises(DivideByZeroError):
            a.div_val(0)

    def test_fractional_scalar_on_int_raises(self):
        m = DenseMatrix([1, 2], (1, 2))
        with pytest.raises(ValidationError):
            m.mul_val(2.5)

    def test_neg_abs(self):
        m = DenseMatrix([-1.0, 2.0], (1, 2))
        np.testing.assert_array_equal(m.neg().get_vec(), [1.0, -2.0])
        np.testing.assert_array_equal(m.abs().get_vec(), [1.0, 2.0])

    def test_pow(self):
        m = DenseMatrix([2, 3], (1, 2))
        np.testing.assert_array_equal(m.pow(3).get_vec(), [8, 27])
        np.testing.assert_array_equal(m.pow(0).get_vec(), [1, 1])

    def test_pow_negative_raises(self):
        with pytest.raises(ValidationError):
            DenseMatrix([2, 3], (1, 2)).pow(-1)


class TestInPlace:

    def test_add_self(self, a, b):
        a.add_self(b)
        np.testing.assert_array_equal(a.get_vec(), [6, 8, 10, 12])

    def test_in_place_matches_allocating(self, a, b):
        for name in ("add", "sub", "mul", "div"):
            expected = getattr(a, name)(b)
            target = a.copy()
            getattr(target, f"{name}_self")(b)
            assert target == expected

    def test_scalar_in_place(self, a):
        a.mul_val_self(3.0)
        a.sub_val_self(1.0)
        a.add_val_self(2.0)
        a.div_val_self(2.0)
        np.testing.assert_array_equal(a.get_vec(), [2.0, 3.5, 5.0, 6.5])

    def test_abs_self(self):
        m = DenseMatrix([-3, 4], (1, 2))
        m.abs_self()
        np.testing.assert_array_equal(m.get_vec(), [3, 4])

    def test_in_place_shape_mismatch_leaves_target(self, a):
        with pytest.raises(DimensionMismatchError):
            a.add_self(DenseMatrix.ones((3, 3)))
        np.testing.assert_array_equal(a.get_vec(), [1, 2, 3, 4])

    def test_in_place_wider_dtype_raises(self):
        ints = DenseMatrix([1, 2], (1, 2), 'int64')
        with pytest.raises(ValidationError):
            ints.add_self(DenseMatrix([0.5, 0.5], (1, 2)))

    def test_div_self_zero_leaves_target(self, a):
        with pytest.raises(DivideByZeroError):
            a.div_self(DenseMatrix.zeros((2, 2)))
        np.testing.assert_array_equal(a.get_vec(), [1, 2, 3, 4])


# ═══════════════════════════════════════════════════════════════════════
# Operators
# ═══════════════════════════════════════════════════════════════════════


class TestOperators:

    def test_binary_operators(self, a, b):
        assert a + b == a.add(b)
        assert a - b == a.sub(b)
        assert a * b == a.mul(b)
        assert a / b == a.div(b)

    def test_scalar_operators(self, a):
        assert a + 1.0 == a.add_val(1.0)
        assert 1.0 + a == a.add_val(1.0)
        assert 2.0 * a == a.mul_val(2.0)
        assert a / 2.0 == a.div_val(2.0)

    def test_reflected_sub(self, a):
        np.testing.assert_array_equal((10.0 - a).get_vec(), [9, 8, 7, 6])

    def test_numpy_scalar_on_left(self, a):
        result = np.float64(2.0) * a
        assert isinstance(result, DenseMatrix)
        np.testing.assert_array_equal(result.get_vec(), [2, 4, 6, 8])

    def test_neg_operator(self, a):
        assert -a == a.neg()

    def test_matmul_operator(self, a, b):
        np.testing.assert_array_equal((a @ b).to_numpy(), a.to_numpy() @ b.to_numpy())

    def test_unsupported_operand(self, a):
        with pytest.raises(TypeError):
            a + "x"

    def test_equality(self, a):
        assert a == a.copy()
        assert a != DenseMatrix([1.0, 2.0, 3.0, 4.0], (4, 1))
        assert (a == "matrix") is False

    def test_equality_ignores_dtype(self):
        ints = DenseMatrix([1, 2, 3, 4], (2, 2), 'int64')
        floats = DenseMatrix([1.0, 2.0, 3.0, 4.0], (2, 2), 'float64')
        assert ints == floats
        assert ints != DenseMatrix([1.0, 2.0, 3.0, 4.5], (2, 2))

    def test_unhashable(self, a):
        with pytest.raises(TypeError):
            hash(a)


# ═══════════════════════════════════════════════════════════════════════
# Floating-point functions
# ═══════════════════════════════════════════════════════════════════════


class TestFloatFunctions:

    def test_trig_and_hyperbolic(self, rng):
        values = rng.uniform(-1, 1, (3, 3))
        m = DenseMatrix.from_array(values)
        for name in ("sin", "cos", "tan", "sinh", "cosh", "tanh"):
            np.testing.assert_allclose(getattr(m, name)().to_numpy(), getattr(np, name)(values))

    def test_ln_and_log(self):
        m = DenseMatrix([1.0, 8.0], (1, 2))
        np.testing.assert_allclose(m.ln().get_vec(), [0.0, np.log(8.0)])
        np.testing.assert_allclose(m.log(2).get_vec(), [0.0, 3.0])

    def test_sqrt_keeps_non_positive(self):
        m = DenseMatrix([4.0, 0.0, -9.0], (1, 3))
        np.testing.assert_array_equal(m.sqrt().get_vec(), [2.0, 0.0, -9.0])

    def test_float32_preserved(self):
        m = DenseMatrix([0.5, 0.25], (1, 2), 'float32')
        assert m.sin().dtype == np.float32

    @pytest.mark.parametrize("name", ["ln", "sqrt", "sin", "cos", "tan", "sinh", "cosh", "tanh"])
    def test_integer_dtype_raises(self, name):
        m = DenseMatrix([1, 2], (1, 2))
        with pytest.raises(ValidationError, match="floating"):
            getattr(m, name)()
