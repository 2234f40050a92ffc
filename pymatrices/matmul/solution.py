"""
Multiplication solution types.

Contains the parameter payload and the user-facing solution wrapper.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pymatrices.core.result import Result
from pymatrices.dense.matrix import DenseMatrix

if TYPE_CHECKING:
    from pymatrices.matmul.design import MatmulDesign


@dataclass(frozen=True)
class MatmulParams:
    """
    Parameter payload for a dense multiplication.
    
    This is the immutable data computed by backends.
    """
    product: DenseMatrix


@dataclass
class MatmulSolution:
    """
    User-facing multiplication result.
    
    Wraps the backend Result and exposes the product together with the
    dispatch decisions that produced it.
    """
    _result: Result[MatmulParams]
    _design: 'MatmulDesign'
    
    @property
    def product(self) -> DenseMatrix:
        return self._result.params.product
    
    @property
    def kernel(self) -> str:
        return self._result.info['kernel']
    
    @property
    def block_size(self) -> int | None:
        return self._result.info['block_size']
    
    @property
    def block_size_fallback(self) -> bool:
        return self._result.info['block_size_fallback']
    
    @property
    def shape(self) -> tuple[int, int]:
        return self.product.shape
    
    @property
    def info(self) -> dict:
        return self._result.info
    
    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing
    
    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Human-readable account of how the product was computed."""
        info = self._result.info
        lines = [
            f"{info['left_shape']} @ {info['right_shape']} -> {info['output_shape']}",
            f"Kernel:     {self.kernel}",
        ]
        if self.block_size is not None:
            note = " (range minimum, no divisor)" if self.block_size_fallback else ""
            lines.append(f"Block size: {self.block_size}{note}")
        if self.timing is not None:
            lines.append(f"Time:       {self.timing['total_seconds']:.6f}s")
        lines.append(f"Backend:    {self.backend_name}")
        return "\n".join(lines)
    
    def __repr__(self) -> str:
        return (
            f"MatmulSolution(shape={self.shape}, kernel={self.kernel!r}, "
            f"block_size={self.block_size})"
        )
