"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pymatrices import DenseMatrix, SparseMatrix


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def det_matrix():
    """4x4 integer matrix with determinant -376."""
    return DenseMatrix(
        [1, 3, 5, 9,
         1, 3, 1, 7,
         4, 3, 9, 7,
         5, 2, 0, 9],
        (4, 4),
        'int64',
    )


@pytest.fixture
def sparse_pair():
    """Two 3x3 sparse operands used for the sparse product."""
    a = SparseMatrix({(0, 1): 2.0, (1, 0): 4.0, (1, 1): 6.0, (2, 2): 8.0}, (3, 3))
    b = SparseMatrix({(0, 0): 2.0, (1, 0): 4.0, (1, 1): 8.0, (2, 1): 6.0}, (3, 3))
    return a, b
