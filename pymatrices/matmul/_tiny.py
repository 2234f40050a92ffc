"""
Closed-form kernels for operands no larger than 2x2.

At these sizes the bookkeeping of a tiled loop costs more than the
arithmetic, so each supported shape pair gets a straight-line formula.
"""

from typing import Callable
import numpy as np
from numpy.typing import NDArray


def _onetwo_by_twoone(a: NDArray, b: NDArray, dtype: np.dtype) -> NDArray:
    # (1x2) @ (2x1)
    c = a[0, 0] * b[0, 0] + a[0, 1] * b[1, 0]
    return np.array([[c]], dtype=dtype)


def _twotwo_by_twoone(a: NDArray, b: NDArray, dtype: np.dtype) -> NDArray:
    # (2x2) @ (2x1)
    c0 = a[0, 0] * b[0, 0] + a[0, 1] * b[1, 0]
    c1 = a[1, 0] * b[0, 0] + a[1, 1] * b[1, 0]
    return np.array([[c0], [c1]], dtype=dtype)


def _onetwo_by_twotwo(a: NDArray, b: NDArray, dtype: np.dtype) -> NDArray:
    # (1x2) @ (2x2)
    c0 = a[0, 0] * b[0, 0] + a[0, 1] * b[1, 0]
    c1 = a[0, 0] * b[0, 1] + a[0, 1] * b[1, 1]
    return np.array([[c0, c1]], dtype=dtype)


def _twotwo_by_twotwo(a: NDArray, b: NDArray, dtype: np.dtype) -> NDArray:
    # (2x2) @ (2x2)
    c00 = a[0, 0] * b[0, 0] + a[0, 1] * b[1, 0]
    c01 = a[0, 0] * b[0, 1] + a[0, 1] * b[1, 1]
    c10 = a[1, 0] * b[0, 0] + a[1, 1] * b[1, 0]
    c11 = a[1, 0] * b[0, 1] + a[1, 1] * b[1, 1]
    return np.array([[c00, c01], [c10, c11]], dtype=dtype)


TinyKernel = Callable[[NDArray, NDArray, np.dtype], NDArray]

TINY_KERNELS: dict[tuple[tuple[int, int], tuple[int, int]], TinyKernel] = {
    ((1, 2), (2, 1)): _onetwo_by_twoone,
    ((2, 2), (2, 1)): _twotwo_by_twoone,
    ((1, 2), (2, 2)): _onetwo_by_twotwo,
    ((2, 2), (2, 2)): _twotwo_by_twotwo,
}

TINY_SHAPES = frozenset(TINY_KERNELS)


def tiny_kernel(
    shape_a: tuple[int, int],
    shape_b: tuple[int, int],
) -> TinyKernel | None:
    """Closed-form kernel for this exact shape pair, or None."""
    return TINY_KERNELS.get((shape_a, shape_b))
