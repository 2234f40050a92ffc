"""
PyMatrices: dense and sparse matrices with a shape-dispatched
multiplication engine.

Subpackages:
    core: Exceptions, validation, element types, result envelope, timing
    dense: DenseMatrix and the cofactor determinant
    matmul: Block-size selection, tiny and blocked kernels, dispatcher
    sparse: SparseMatrix, sparse arithmetic and sparse-sparse products

Example:
    >>> from pymatrices import DenseMatrix, matmul
    >>> a = DenseMatrix.randomize((40, 30), seed=1)
    >>> b = DenseMatrix.randomize((30, 20), seed=2)
    >>> solution = matmul(a, b)
    >>> solution.kernel, solution.block_size
    ('general_blocked', 30)
"""

__version__ = "0.1.0"

from pymatrices.core.operations import Dimension, Operation
from pymatrices.core.exceptions import (
    PyMatricesError,
    ValidationError,
    DimensionError,
    MatrixCreationError,
    DimensionMismatchError,
    MultiplicationDimensionError,
    ConcatenationError,
    IndexOutOfBoundsError,
    MatrixParseError,
    MatrixFileReadError,
    NumericalError,
    DivideByZeroError,
    PerformanceWarning,
)
from pymatrices.dense import DenseMatrix
from pymatrices.sparse import SparseMatrix
from pymatrices.matmul import MatmulSolution, matmul, multiply

__all__ = [
    "__version__",
    "DenseMatrix",
    "SparseMatrix",
    "matmul",
    "multiply",
    "MatmulSolution",
    "Dimension",
    "Operation",
    "PyMatricesError",
    "ValidationError",
    "DimensionError",
    "MatrixCreationError",
    "DimensionMismatchError",
    "MultiplicationDimensionError",
    "ConcatenationError",
    "IndexOutOfBoundsError",
    "MatrixParseError",
    "MatrixFileReadError",
    "NumericalError",
    "DivideByZeroError",
    "PerformanceWarning",
]
