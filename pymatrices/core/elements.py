"""
The numeric element constraint.

Every matrix stores elements of exactly one supported numpy dtype. This
module is the single place that says which dtypes qualify and how their
identities, text parsing and division behave, so storage and kernels
never special-case scalar types themselves.

Supported element types:
    signed integers: int8, int16, int32, int64
    floating point:  float32, float64 (default)

Division semantics:
    integer dtypes truncate toward zero (fixed-width integer division);
    floating dtypes use true division.
"""

import math
from typing import Any
import numpy as np
from numpy.typing import DTypeLike, NDArray

from pymatrices.core.exceptions import MatrixParseError, ValidationError


DEFAULT_DTYPE = np.dtype(np.float64)

SUPPORTED_DTYPES = frozenset({
    np.dtype(np.int8),
    np.dtype(np.int16),
    np.dtype(np.int32),
    np.dtype(np.int64),
    np.dtype(np.float32),
    np.dtype(np.float64),
})


def resolve_dtype(dtype: DTypeLike | None) -> np.dtype:
    """
    Normalize a dtype request and verify it is a supported element type.
    
    Args:
        dtype: Anything numpy accepts as a dtype, or None for the default
        
    Returns:
        The resolved numpy dtype
        
    Raises:
        ValidationError: If the dtype is not a supported element type
    """
    if dtype is None:
        return DEFAULT_DTYPE
    try:
        resolved = np.dtype(dtype)
    except TypeError as e:
        raise ValidationError(f"dtype: not understood: {dtype!r}") from e
    if resolved not in SUPPORTED_DTYPES:
        supported = sorted(str(d) for d in SUPPORTED_DTYPES)
        raise ValidationError(
            f"dtype: {resolved} is not a supported element type, expected one of {supported}"
        )
    return resolved


def infer_dtype(values: NDArray) -> np.dtype:
    """
    Pick the element type for an array that arrived without one.
    
    Signed integers are kept, booleans and unsigned integers become int64,
    everything else numeric becomes float64 unless already float32.
    """
    if values.dtype in SUPPORTED_DTYPES:
        return values.dtype
    if values.dtype.kind in ('b', 'u'):
        return np.dtype(np.int64)
    if values.dtype.kind == 'f':
        return DEFAULT_DTYPE
    raise ValidationError(
        f"non-numeric dtype {values.dtype}, expected numeric data"
    )


def is_integer(dtype: np.dtype) -> bool:
    """True for integer element types, where addition is associative."""
    return np.issubdtype(dtype, np.integer)


def zero(dtype: np.dtype) -> Any:
    """Additive identity of the element type."""
    return dtype.type(0)


def one(dtype: np.dtype) -> Any:
    """Multiplicative identity of the element type."""
    return dtype.type(1)


def cast_scalar(value: Any, dtype: np.dtype) -> Any:
    """
    Convert a Python or numpy scalar to the element type.
    
    Raises:
        ValidationError: If the value is not a real number, does not fit
            the element type, or a value with a fractional part is given
            for an integer element type
    """
    if isinstance(value, (bool, np.bool_)) or not np.isscalar(value):
        raise ValidationError(f"value: expected a real scalar, got {value!r}")
    if isinstance(value, (complex, np.complexfloating)):
        raise ValidationError(f"value: complex scalars are not supported, got {value!r}")
    if isinstance(value, (str, bytes)):
        raise ValidationError(f"value: expected a real scalar, got {value!r}")
    if is_integer(dtype):
        if not math.isfinite(value) or float(value) != int(value):
            raise ValidationError(
                f"value: {value!r} is not an integer but the matrix holds {dtype}"
            )
        info = np.iinfo(dtype)
        if not info.min <= int(value) <= info.max:
            raise ValidationError(
                f"value: {value!r} is outside the range of {dtype} [{info.min}, {info.max}]"
            )
    return dtype.type(value)


def sample_uniform(
    low: Any,
    high: Any,
    count: int,
    dtype: np.dtype,
    seed: int | np.random.Generator | None = None,
) -> NDArray:
    """
    Draw count values uniformly from [low, high] in the element type.
    
    Integer element types include both endpoints.
    
    Args:
        seed: Integer seed or an existing Generator, passed to
            numpy.random.default_rng
    """
    rng = np.random.default_rng(seed)
    if is_integer(dtype):
        low, high = int(cast_scalar(low, dtype)), int(cast_scalar(high, dtype))
        if low > high:
            raise ValidationError(f"range: low ({low}) must not exceed high ({high})")
        return rng.integers(low, high, size=count, endpoint=True).astype(dtype)
    low, high = float(low), float(high)
    if low > high:
        raise ValidationError(f"range: low ({low}) must not exceed high ({high})")
    return rng.uniform(low, high, size=count).astype(dtype)


def parse_element(text: str, dtype: np.dtype, line: int | None = None) -> Any:
    """
    Parse one element from text.
    
    Args:
        text: Token to parse, e.g. '3', '-2.5', '1e-3'
        dtype: Target element type
        line: Line number reported in the error, if known
        
    Raises:
        MatrixParseError: If the token is not a valid element of dtype
    """
    token = text.strip()
    try:
        if is_integer(dtype):
            return dtype.type(int(token))
        return dtype.type(float(token))
    except (ValueError, OverflowError) as e:
        where = f" on line {line}" if line is not None else ""
        raise MatrixParseError(
            f"cannot parse {token!r} as {dtype}{where}", line=line
        ) from e


def divide(numerator: NDArray, denominator: NDArray | Any, dtype: np.dtype) -> NDArray:
    """
    Elementwise division in the semantics of the element type.
    
    The caller guarantees the denominator holds no zeros.
    """
    if not is_integer(dtype):
        return np.true_divide(numerator, denominator).astype(dtype, copy=False)

    quotient = np.floor_divide(numerator, denominator)
    # floor -> truncate: bump negative inexact quotients one step toward zero
    inexact = (quotient < 0) & (quotient * denominator != numerator)
    return (quotient + inexact).astype(dtype, copy=False)


def result_dtype(left: np.dtype, right: np.dtype) -> np.dtype:
    """Element type produced by combining two matrices."""
    return resolve_dtype(np.result_type(left, right))
