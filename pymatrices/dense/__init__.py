"""
Dense matrices.

Public API:
    DenseMatrix: row-major storage with factories, elementwise arithmetic,
        reductions, predicates and linear algebra

Example:
    >>> from pymatrices.dense import DenseMatrix
    >>> m = DenseMatrix([1, 3, 5, 9, 1, 3, 1, 7, 4, 3, 9, 7, 5, 2, 0, 9], (4, 4), 'int64')
    >>> m.determinant()
    np.int64(-376)
"""

from pymatrices.dense._determinant import COFACTOR_WARN_SIZE
from pymatrices.dense.matrix import DenseMatrix

__all__ = [
    "DenseMatrix",
    "COFACTOR_WARN_SIZE",
]
