"""
Dense matrix multiplication.

Public API:
    matmul(a, b, ...) -> MatmulSolution
    multiply(a, b) -> DenseMatrix

Kernel entry points:
    naive, transposed_blocked, general_blocked

Block sizing:
    block_size_range, select_block_size

Example:
    >>> from pymatrices import DenseMatrix
    >>> from pymatrices.matmul import matmul
    >>> a = DenseMatrix.ones((12, 20))
    >>> b = DenseMatrix.ones((20, 8))
    >>> solution = matmul(a, b)
    >>> solution.kernel, solution.block_size
    ('general_blocked', 10)
"""

from pymatrices.matmul._block_size import (
    BLOCK_SIZE_TIERS,
    block_size_range,
    select_block_size,
)
from pymatrices.matmul.design import KERNELS, MatmulDesign, plan_kernel
from pymatrices.matmul.solution import MatmulParams, MatmulSolution
from pymatrices.matmul.solvers import (
    general_blocked,
    matmul,
    multiply,
    naive,
    transposed_blocked,
)

__all__ = [
    "matmul",
    "multiply",
    "naive",
    "transposed_blocked",
    "general_blocked",
    "MatmulDesign",
    "MatmulParams",
    "MatmulSolution",
    "KERNELS",
    "plan_kernel",
    "BLOCK_SIZE_TIERS",
    "block_size_range",
    "select_block_size",
]
