"""
Core protocols for PyMatrices.

These define the read interface shared by dense and sparse storage
(used by the text formatters) and the interface multiplication backends
implement. Both are structural: DenseMatrix and SparseMatrix satisfy
MatrixLike without a common base class.
"""

from typing import Any, Protocol, TypeVar, runtime_checkable

D = TypeVar('D')  # Design type
P = TypeVar('P')  # Parameter payload type


@runtime_checkable
class MatrixLike(Protocol):
    """
    Read-only view every matrix kind offers to formatting collaborators.
    """
    
    @property
    def shape(self) -> tuple[int, int]:
        """(rows, cols)."""
        ...
    
    @property
    def dtype(self) -> Any:
        """numpy dtype of the stored elements."""
        ...
    
    def get(self, i: int, j: int) -> Any | None:
        """
        Value at (i, j), or None when the index is out of bounds.
        
        Never raises for out-of-range reads.
        """
        ...


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for multiplication backends.
    
    A backend takes a validated design (operands plus dispatch plan) and
    produces a Result envelope. Backends are stateless; all configuration
    travels in the design.
    
    Type Parameters:
        D: The design type this backend accepts
        P: The payload type this backend produces
    """
    
    @property
    def name(self) -> str:
        """
        Backend identifier.
        
        Device identifier, e.g. 'cpu'. Results it produces are labelled
        '{name}_{kernel}', e.g. 'cpu_general_blocked'.
        """
        ...
    
    def solve(self, design: D) -> 'Result[P]':
        """
        Execute the computation.
        
        Raises:
            ValidationError: If design is invalid for this backend
        """
        ...
