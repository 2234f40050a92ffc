"""
Determinant by cofactor expansion.

Sizes 1, 2 and 3 use closed forms. Larger matrices expand along their
first row:

    det(M) = sum_c (-1)^c * M[0, c] * det(minor(M, 0, c))

Minors are never copied out of the buffer: each recursion level carries
the tuple of row indices and the tuple of column indices still in play,
and reads the original matrix through them.

Complexity is O(N!) time and O(N^2) space for the index tuples along one
recursion path. Expansion is practical only for small N; a
PerformanceWarning is emitted at N >= COFACTOR_WARN_SIZE.
"""

import warnings
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pymatrices.core.elements import is_integer, one
from pymatrices.core.exceptions import NumericalError, PerformanceWarning


# 9! = 362880 leaf evaluations
COFACTOR_WARN_SIZE = 9


def determinant(matrix: NDArray, dtype: np.dtype) -> Any:
    """
    Determinant of a square 2D array, returned as a scalar of dtype.
    
    Integer matrices are expanded with exact Python integers; a result
    that does not fit the element type raises instead of wrapping.
    
    Args:
        matrix: Square array, shape (N, N)
        dtype: Element type of the matrix
        
    Raises:
        NumericalError: If an integer determinant overflows dtype
    """
    n = matrix.shape[0]
    if n >= COFACTOR_WARN_SIZE:
        warnings.warn(
            f"cofactor expansion of a {n}x{n} matrix takes O(N!) time",
            PerformanceWarning,
            stacklevel=3,
        )
    if n == 0:
        return one(dtype)
    
    values = matrix.tolist()
    total = _expand(values, tuple(range(n)), tuple(range(n)))
    
    if is_integer(dtype):
        info = np.iinfo(dtype)
        if not info.min <= total <= info.max:
            raise NumericalError(
                f"determinant {total} does not fit in {dtype} [{info.min}, {info.max}]"
            )
    return dtype.type(total)


def _expand(m: list[list[Any]], rows: tuple[int, ...], cols: tuple[int, ...]) -> Any:
    n = len(rows)
    
    if n == 1:
        return m[rows[0]][cols[0]]
    
    if n == 2:
        r0, r1 = rows
        c0, c1 = cols
        return m[r0][c0] * m[r1][c1] - m[r0][c1] * m[r1][c0]
    
    if n == 3:
        r0, r1, r2 = rows
        c0, c1, c2 = cols
        return (
            m[r0][c0] * (m[r1][c1] * m[r2][c2] - m[r1][c2] * m[r2][c1])
            - m[r0][c1] * (m[r1][c0] * m[r2][c2] - m[r1][c2] * m[r2][c0])
            + m[r0][c2] * (m[r1][c0] * m[r2][c1] - m[r1][c1] * m[r2][c0])
        )
    
    top, rest = rows[0], rows[1:]
    total = 0
    for position, col in enumerate(cols):
        value = m[top][col]
        if value == 0:
            continue
        minor = _expand(m, rest, cols[:position] + cols[position + 1:])
        if position % 2 == 0:
            total += value * minor
        else:
            total -= value * minor
    return total
