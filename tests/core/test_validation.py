"""
Tests for input validators.

Each validator checks one thing and raises with the offending values in
the message.
"""

import numpy as np
import pytest

from pymatrices.core.exceptions import (
    DimensionMismatchError,
    DivideByZeroError,
    IndexOutOfBoundsError,
    MatrixCreationError,
    MultiplicationDimensionError,
    ValidationError,
)
from pymatrices.core.validation import (
    check_array,
    check_buffer_length,
    check_index,
    check_inner_dimensions,
    check_nonzero_divisor,
    check_same_shape,
    check_shape,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:
    """check_array converts to a supported numeric dtype or fails."""

    def test_list_of_floats(self):
        result = check_array([1.0, 2.0], "data")
        assert result.dtype == np.float64

    def test_list_of_ints_keeps_int64(self):
        result = check_array([1, 2, 3], "data")
        assert result.dtype == np.int64

    def test_requested_dtype_casts(self):
        result = check_array([1, 2, 3], "data", "float32")
        assert result.dtype == np.float32

    def test_bool_becomes_int64(self):
        assert check_array([True, False], "data").dtype == np.int64

    def test_unsigned_becomes_int64(self):
        assert check_array(np.array([1, 2], dtype=np.uint8), "data").dtype == np.int64

    def test_object_rejected(self):
        with pytest.raises(ValidationError, match="my_var"):
            check_array([None, 1], "my_var")

    def test_strings_rejected(self):
        with pytest.raises(ValidationError, match="my_var"):
            check_array(["a", "b"], "my_var")

    def test_complex_rejected(self):
        with pytest.raises(ValidationError, match="complex"):
            check_array([1 + 2j], "data")

    def test_unsupported_dtype_rejected(self):
        with pytest.raises(ValidationError, match="not a supported element type"):
            check_array([1, 2], "data", "uint16")


# ═══════════════════════════════════════════════════════════════════════
# Shapes and indices
# ═══════════════════════════════════════════════════════════════════════


class TestCheckShape:

    def test_valid(self):
        assert check_shape((3, 4)) == (3, 4)

    def test_numpy_ints_normalized(self):
        rows, cols = check_shape((np.int64(2), np.int32(5)))
        assert type(rows) is int and type(cols) is int

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="non-negative"):
            check_shape((-1, 2))

    def test_float_rejected(self):
        with pytest.raises(ValidationError, match="must be an int"):
            check_shape((2.0, 2))

    def test_wrong_arity_rejected(self):
        with pytest.raises(ValidationError, match="expected"):
            check_shape((1, 2, 3))


class TestCheckBufferLength:

    def test_matching_passes(self):
        check_buffer_length(6, (2, 3))

    def test_mismatch_raises_with_attributes(self):
        with pytest.raises(MatrixCreationError) as info:
            check_buffer_length(5, (2, 3))
        assert info.value.expected_length == 6
        assert info.value.actual_length == 5
        assert info.value.shape == (2, 3)


class TestCheckSameShape:

    def test_equal_passes(self):
        check_same_shape((2, 3), (2, 3), "add")

    def test_different_raises(self):
        with pytest.raises(DimensionMismatchError, match="add"):
            check_same_shape((2, 3), (3, 2), "add")


class TestCheckInnerDimensions:

    def test_compatible_passes(self):
        check_inner_dimensions((2, 3), (3, 5))

    def test_incompatible_raises(self):
        with pytest.raises(MultiplicationDimensionError, match="3 != 4"):
            check_inner_dimensions((2, 3), (4, 5))


class TestCheckIndex:

    def test_inside_passes(self):
        check_index(1, 2, (2, 3))

    def test_column_past_end_does_not_wrap(self):
        # (0, 3) would be flat index 3, inside a 2x3 buffer
        with pytest.raises(IndexOutOfBoundsError):
            check_index(0, 3, (2, 3))

    def test_negative_rejected(self):
        with pytest.raises(IndexOutOfBoundsError):
            check_index(-1, 0, (2, 3))


class TestCheckNonzeroDivisor:

    def test_no_zero_passes(self):
        check_nonzero_divisor(np.array([1.0, 2.0, 3.0, 4.0]), (2, 2))

    def test_reports_first_zero_position(self):
        with pytest.raises(DivideByZeroError) as info:
            check_nonzero_divisor(np.array([1, 2, 3, 0, 0, 6]), (2, 3))
        assert info.value.position == (1, 0)
