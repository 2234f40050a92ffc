"""
Input validation utilities for PyMatrices.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from pymatrices.core.elements import infer_dtype, resolve_dtype
from pymatrices.core.exceptions import (
    DimensionMismatchError,
    DivideByZeroError,
    IndexOutOfBoundsError,
    MatrixCreationError,
    MultiplicationDimensionError,
    ValidationError,
)


def check_array(
    array: ArrayLike,
    name: str,
    dtype: DTypeLike | None = None,
) -> NDArray[Any]:
    """
    Validate and convert input to a numpy array of a supported element type.
    
    Args:
        array: Input to validate
        name: Parameter name for error messages
        dtype: Requested element type; inferred from the data when None
        
    Returns:
        numpy.ndarray with a supported dtype
        
    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e
    
    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not (np.issubdtype(result.dtype, np.number) or result.dtype == np.bool_):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )
    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(f"{name}: complex dtype {result.dtype} is not supported")

    target = resolve_dtype(dtype) if dtype is not None else infer_dtype(result)
    if result.dtype != target:
        result = result.astype(target)

    return result


def check_shape(shape: Any, name: str = "shape") -> tuple[int, int]:
    """
    Verify a shape is a pair of non-negative integers.
    
    Returns:
        The shape as a tuple of two Python ints
        
    Raises:
        ValidationError: If shape is not a 2-tuple of non-negative ints
    """
    try:
        rows, cols = shape
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name}: expected (rows, cols), got {shape!r}") from e
    
    for label, value in (("rows", rows), ("cols", cols)):
        if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
            raise ValidationError(f"{name}: {label} must be an int, got {value!r}")
        if value < 0:
            raise ValidationError(f"{name}: {label} must be non-negative, got {value}")
    return int(rows), int(cols)


def check_buffer_length(length: int, shape: tuple[int, int]) -> None:
    """
    Verify a flat buffer holds exactly rows * cols elements.
    
    Raises:
        MatrixCreationError: If the buffer length disagrees with the shape
    """
    expected = shape[0] * shape[1]
    if length != expected:
        raise MatrixCreationError(
            f"cannot create {shape[0]}x{shape[1]} matrix: expected {expected} "
            f"elements, got {length}",
            shape=shape,
            expected_length=expected,
            actual_length=length,
        )


def check_same_shape(
    left: tuple[int, int],
    right: tuple[int, int],
    operation: str,
) -> None:
    """
    Verify two operands of an elementwise operation share a shape.
    
    Raises:
        DimensionMismatchError: If the shapes differ
    """
    if left != right:
        raise DimensionMismatchError(
            f"{operation}: shapes {left} and {right} are not both M x N",
            left=left,
            right=right,
        )


def check_inner_dimensions(
    left: tuple[int, int],
    right: tuple[int, int],
) -> None:
    """
    Verify operands have the form (M x N) @ (N x P).
    
    Raises:
        MultiplicationDimensionError: If left cols != right rows
    """
    if left[1] != right[0]:
        raise MultiplicationDimensionError(
            f"matmul: shapes {left} and {right} are not of the form "
            f"M x N @ N x P ({left[1]} != {right[0]})",
            left=left,
            right=right,
        )


def check_index(i: int, j: int, shape: tuple[int, int]) -> None:
    """
    Verify (i, j) addresses a cell inside shape.
    
    Both coordinates are checked; a column past the row end never wraps
    into the next row.
    
    Raises:
        IndexOutOfBoundsError: If either coordinate is out of range
    """
    if not (0 <= i < shape[0] and 0 <= j < shape[1]):
        raise IndexOutOfBoundsError(
            f"index ({i}, {j}) is out of bounds for shape {shape}",
            index=(i, j),
            shape=shape,
        )


def check_nonzero_divisor(divisor: NDArray[Any], shape: tuple[int, int]) -> None:
    """
    Verify an elementwise divisor contains no zero element.
    
    Raises:
        DivideByZeroError: If any element is zero, reporting the first one
    """
    zeros = np.flatnonzero(divisor == 0)
    if zeros.size > 0:
        cols = shape[1] if shape[1] > 0 else 1
        position = divmod(int(zeros[0]), cols)
        raise DivideByZeroError(
            f"division by zero: divisor is zero at {position}",
            position=position,
        )
