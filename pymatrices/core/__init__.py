"""
Core infrastructure for PyMatrices.

This module provides shared abstractions used by the dense, sparse and
matmul subpackages.

Key components:
    elements: The numeric element constraint (supported dtypes, parsing)
    operations: Operation and Dimension enumerations
    protocols: MatrixLike, Backend protocols
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing and tolerance tiers
"""

from pymatrices.core.protocols import MatrixLike, Backend
from pymatrices.core.result import Result
from pymatrices.core.operations import Operation, Dimension
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

__all__ = [
    # Protocols
    "MatrixLike",
    "Backend",
    # Result
    "Result",
    # Enumerations
    "Operation",
    "Dimension",
    # Exceptions
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
