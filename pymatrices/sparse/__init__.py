"""
Sparse matrices.

Public API:
    SparseMatrix: coordinate-map storage of the non-zero cells with
        elementwise arithmetic and sparse-sparse multiplication

Example:
    >>> from pymatrices.sparse import SparseMatrix
    >>> s = SparseMatrix.eye(3)
    >>> (s + s).at(1, 1)
    np.float64(2.0)
"""

from pymatrices.sparse.matrix import SparseMatrix

__all__ = [
    "SparseMatrix",
]
