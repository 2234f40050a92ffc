"""
Exception hierarchy for PyMatrices.

All exceptions inherit from PyMatricesError to allow catching any
library-specific error. Storage- and kernel-specific exceptions inherit
from the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyMatricesError(Exception):
    """Base exception for all PyMatrices errors."""
    pass


class ValidationError(PyMatricesError, ValueError):
    """
    Input validation failed.
    
    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Matrix dimensions are incorrect or inconsistent.
    
    Base class for every shape-related failure between one or more
    matrices.
    """
    pass


class MatrixCreationError(ValidationError):
    """
    A matrix could not be constructed from the given buffer and shape.
    
    Attributes:
        shape: Requested (rows, cols)
        expected_length: rows * cols
        actual_length: Number of elements actually supplied
    """
    
    def __init__(
        self,
        message: str,
        shape: tuple[int, int] | None = None,
        expected_length: int | None = None,
        actual_length: int | None = None,
    ):
        super().__init__(message)
        self.shape = shape
        self.expected_length = expected_length
        self.actual_length = actual_length


class DimensionMismatchError(DimensionError):
    """
    Two matrices do not share the shape an operation requires.
    
    Attributes:
        left: Shape of the left operand
        right: Shape of the right operand
    """
    
    def __init__(
        self,
        message: str,
        left: tuple[int, int] | None = None,
        right: tuple[int, int] | None = None,
    ):
        super().__init__(message)
        self.left = left
        self.right = right


class MultiplicationDimensionError(DimensionMismatchError):
    """
    Operands are not of the form (M x N) @ (N x P).
    """
    pass


class ConcatenationError(DimensionMismatchError):
    """
    Matrices cannot be concatenated or extended along the requested axis.
    """
    pass


class IndexOutOfBoundsError(ValidationError, IndexError):
    """
    A (row, col) index lies outside the matrix.
    
    Attributes:
        index: The offending (row, col) pair or flat index
        shape: Shape of the matrix that was indexed
    """
    
    def __init__(
        self,
        message: str,
        index: tuple[int, int] | int | None = None,
        shape: tuple[int, int] | None = None,
    ):
        super().__init__(message)
        self.index = index
        self.shape = shape


class MatrixParseError(ValidationError):
    """
    Text could not be parsed into a matrix.
    
    Attributes:
        line: 1-based line number of the first bad line, if known
    """
    
    def __init__(self, message: str, line: int | None = None):
        super().__init__(message)
        self.line = line


class MatrixFileReadError(PyMatricesError, OSError):
    """
    A matrix file could not be read.
    
    Attributes:
        path: The path that failed
    """
    
    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class NumericalError(PyMatricesError):
    """
    Numerical computation failed.
    
    Base class for errors arising from numerical issues during computation.
    """
    pass


class DivideByZeroError(NumericalError, ZeroDivisionError):
    """
    An elementwise division met a zero divisor.
    
    Attributes:
        position: First (row, col) where the divisor is zero, if known
    """
    
    def __init__(self, message: str, position: tuple[int, int] | None = None):
        super().__init__(message)
        self.position = position


class PerformanceWarning(UserWarning):
    """
    A request will run, but along a path with poor complexity.
    
    Emitted through the warnings module, never raised.
    """
    pass
