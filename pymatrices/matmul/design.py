"""
MatmulDesign: validated operand pair plus dispatch plan.

Wraps two dense operands and records, before any arithmetic runs, which
kernel will multiply them and with what block size. Immutable after
construction. Follows the Design pattern: construct via from_matrices(),
never directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal
import numpy as np
from numpy.typing import NDArray

from pymatrices.core.elements import result_dtype
from pymatrices.core.exceptions import DimensionMismatchError, ValidationError
from pymatrices.core.validation import check_inner_dimensions
from pymatrices.dense.matrix import DenseMatrix
from pymatrices.matmul._block_size import has_exact_divisor, select_block_size
from pymatrices.matmul._tiny import tiny_kernel


KernelChoice = Literal['auto', 'transposed_blocked', 'general_blocked', 'naive']

KERNELS = ('tiny', 'transposed_blocked', 'general_blocked', 'naive')


def plan_kernel(
    shape_a: tuple[int, int],
    shape_b: tuple[int, int],
    kernel: KernelChoice = 'auto',
) -> str:
    """
    Decide which kernel multiplies shape_a @ shape_b.
    
    Automatic dispatch order:
        1. exact tiny shapes (<= 2x2) -> 'tiny' closed-form formulas
        2. identical (hence square) shapes -> 'transposed_blocked'
        3. anything else -> 'general_blocked'
    
    Args:
        shape_a: Left operand shape, inner dimensions already checked
        shape_b: Right operand shape
        kernel: 'auto', or a general kernel to force
        
    Raises:
        DimensionMismatchError: If 'transposed_blocked' is forced on
            operands that are not both N x N
        ValidationError: On an unknown kernel name
    """
    if kernel == 'auto':
        if tiny_kernel(shape_a, shape_b) is not None:
            return 'tiny'
        if shape_a == shape_b:
            return 'transposed_blocked'
        return 'general_blocked'
    
    if kernel == 'transposed_blocked':
        if shape_a != shape_b or shape_a[0] != shape_a[1]:
            raise DimensionMismatchError(
                f"transposed_blocked: requires two N x N operands, got {shape_a} and {shape_b}",
                left=shape_a,
                right=shape_b,
            )
        return kernel
    
    if kernel in ('general_blocked', 'naive'):
        return kernel
    
    raise ValidationError(
        f"Unknown kernel: {kernel!r}. "
        f"Must be 'auto', 'transposed_blocked', 'general_blocked', or 'naive'."
    )


@dataclass(frozen=True)
class MatmulDesign:
    """
    Design for one dense multiplication.
    
    Construction:
        MatmulDesign.from_matrices(a, b)
        MatmulDesign.from_matrices(a, b, kernel='naive', workers=4)
    """
    _left: NDArray[Any]
    _right: NDArray[Any]
    _dtype: np.dtype
    _kernel: str
    _block_size: int | None
    _block_size_fallback: bool
    _workers: int | None

    @classmethod
    def from_matrices(
        cls,
        left: DenseMatrix,
        right: DenseMatrix,
        *,
        kernel: KernelChoice = 'auto',
        block_size: int | None = None,
        workers: int | None = None,
    ) -> MatmulDesign:
        """
        Build a MatmulDesign from two dense matrices.

        Parameters
        ----------
        left, right : DenseMatrix
            Operands of left @ right.
        kernel : str
            'auto' (shape-driven dispatch) or a general kernel to force.
        block_size : int, optional
            Tile edge for the blocked kernels. Selected from the operand
            shapes when None.
        workers : int, optional
            Thread count for the naive kernel.
        """
        for name, operand in (('left', left), ('right', right)):
            if not isinstance(operand, DenseMatrix):
                raise ValidationError(
                    f"{name}: expected DenseMatrix, got {type(operand).__name__}"
                )
        return cls._build(
            left.view(),
            right.view(),
            dtype=result_dtype(left.dtype, right.dtype),
            kernel=kernel,
            block_size=block_size,
            workers=workers,
        )

    @classmethod
    def _build(
        cls,
        left: NDArray,
        right: NDArray,
        *,
        dtype: np.dtype,
        kernel: KernelChoice,
        block_size: int | None,
        workers: int | None,
    ) -> MatmulDesign:
        """Internal builder with validation."""
        shape_a = (left.shape[0], left.shape[1])
        shape_b = (right.shape[0], right.shape[1])
        check_inner_dimensions(shape_a, shape_b)
        
        if block_size is not None and (not isinstance(block_size, int) or block_size < 1):
            raise ValidationError(f"block_size: must be a positive int, got {block_size!r}")
        if workers is not None and (not isinstance(workers, int) or workers < 1):
            raise ValidationError(f"workers: must be a positive int, got {workers!r}")
        
        planned = plan_kernel(shape_a, shape_b, kernel)
        
        fallback = False
        if planned in ('transposed_blocked', 'general_blocked'):
            if block_size is None:
                block_size = select_block_size(shape_a, shape_b)
                fallback = not has_exact_divisor(shape_a, shape_b)
        else:
            block_size = None
        
        return cls(
            _left=left.astype(dtype, copy=False),
            _right=right.astype(dtype, copy=False),
            _dtype=dtype,
            _kernel=planned,
            _block_size=block_size,
            _block_size_fallback=fallback,
            _workers=workers,
        )

    @property
    def left(self) -> NDArray[Any]:
        """Left operand as a 2D array in the output element type."""
        return self._left

    @property
    def right(self) -> NDArray[Any]:
        """Right operand as a 2D array in the output element type."""
        return self._right

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def kernel(self) -> str:
        """One of 'tiny', 'transposed_blocked', 'general_blocked', 'naive'."""
        return self._kernel

    @property
    def block_size(self) -> int | None:
        """Tile edge for blocked kernels, None otherwise."""
        return self._block_size

    @property
    def block_size_fallback(self) -> bool:
        """True when no candidate block size divided the operands."""
        return self._block_size_fallback

    @property
    def workers(self) -> int | None:
        return self._workers

    @property
    def output_shape(self) -> tuple[int, int]:
        return (self._left.shape[0], self._right.shape[1])

    def __repr__(self) -> str:
        block = f", block_size={self._block_size}" if self._block_size is not None else ""
        return (
            f"MatmulDesign({self._left.shape} @ {self._right.shape}, "
            f"kernel={self._kernel!r}{block})"
        )
