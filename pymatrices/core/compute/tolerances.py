"""
Tolerance tiers for numerical comparison.

Blocked and naive kernels sum the same products in different orders, so
floating results may differ in the last bits. Integer results must match
exactly because integer addition is associative.

Used by DenseMatrix.allclose and by the test suite.
"""

from dataclasses import dataclass
import numpy as np
from numpy.typing import DTypeLike


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


INTEGER_EXACT = ToleranceTier(
    rtol=0.0,
    atol=0.0,
    name='integer_exact',
    description='Integer element types: summation order cannot change results',
)

FLOAT64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='float64',
    description='Double precision, reordered summation',
)

FLOAT32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='float32',
    description='Single precision, reordered summation',
)


def select_tolerance(dtype: DTypeLike) -> ToleranceTier:
    """Select the tolerance tier for an element type."""
    dtype = np.dtype(dtype)
    if np.issubdtype(dtype, np.integer):
        return INTEGER_EXACT
    if dtype == np.float32:
        return FLOAT32
    return FLOAT64
