"""
Generic result container for PyMatrices computations that report metadata.

The Result class provides a standardized envelope around a kernel's
payload. It carries which kernel ran, its parameters and its timing, so
callers can inspect dispatch decisions without re-deriving them.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (kernel, block size, shapes)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for matrix computations.
    
    Type Parameters:
        P: The payload type
        
    Attributes:
        params: Payload (the product matrix, for multiplication)
        info: Structured metadata (kernel, block_size, shapes)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation
        
    Examples:
        >>> Result(
        ...     params=MatmulParams(product=c),
        ...     info={'kernel': 'general_blocked', 'block_size': 8},
        ...     timing={'total_seconds': 0.01},
        ...     backend_name='cpu_general_blocked'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    
    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
