"""
Solver dispatch for dense multiplication.

This module provides matmul() (public API, returns a MatmulSolution with
dispatch metadata), multiply() (the plain product used by DenseMatrix and
the @ operator) and one entry point per general kernel.
"""

from pymatrices.dense.matrix import DenseMatrix
from pymatrices.matmul.backends.cpu import CPUMatmulBackend, run_kernel
from pymatrices.matmul.design import KernelChoice, MatmulDesign
from pymatrices.matmul.solution import MatmulSolution


def matmul(
    a: DenseMatrix,
    b: DenseMatrix,
    *,
    kernel: KernelChoice = 'auto',
    block_size: int | None = None,
    workers: int | None = None,
) -> MatmulSolution:
    """
    Multiply two dense matrices and report how it was done.
    
    Args:
        a: Left operand (M x N)
        b: Right operand (N x P)
        kernel: Kernel selection:
            - 'auto': tiny closed forms for shapes up to 2x2, the
              transposed blocked kernel for two N x N operands, the
              general blocked kernel otherwise
            - 'transposed_blocked': force it (both operands N x N)
            - 'general_blocked': force it
            - 'naive': untiled reference kernel
        block_size: Tile edge for the blocked kernels; chosen from the
            operand shapes when None
        workers: Thread count for the naive kernel
            
    Returns:
        MatmulSolution with the product and the chosen kernel and block size
        
    Raises:
        ValidationError: If an operand is not a DenseMatrix or an option
            is invalid
        MultiplicationDimensionError: If a.cols != b.rows
        DimensionMismatchError: If transposed_blocked is forced on
            operands that are not both N x N
        
    Example:
        >>> from pymatrices import DenseMatrix
        >>> from pymatrices.matmul import matmul
        >>> a = DenseMatrix.randomize((64, 64))
        >>> solution = matmul(a, a)
        >>> print(solution.summary())
    """
    design = MatmulDesign.from_matrices(
        a, b, kernel=kernel, block_size=block_size, workers=workers
    )
    result = CPUMatmulBackend().solve(design)
    return MatmulSolution(_result=result, _design=design)


def multiply(a: DenseMatrix, b: DenseMatrix) -> DenseMatrix:
    """Product a @ b through automatic kernel dispatch, without timing."""
    design = MatmulDesign.from_matrices(a, b)
    return DenseMatrix._wrap(run_kernel(design))


def naive(a: DenseMatrix, b: DenseMatrix, *, workers: int | None = None) -> DenseMatrix:
    """Product a @ b computed one full dot product per cell."""
    design = MatmulDesign.from_matrices(a, b, kernel='naive', workers=workers)
    return DenseMatrix._wrap(run_kernel(design))


def transposed_blocked(
    a: DenseMatrix,
    b: DenseMatrix,
    *,
    block_size: int | None = None,
) -> DenseMatrix:
    """Product of two N x N matrices with the pre-transposed tiled kernel."""
    design = MatmulDesign.from_matrices(
        a, b, kernel='transposed_blocked', block_size=block_size
    )
    return DenseMatrix._wrap(run_kernel(design))


def general_blocked(
    a: DenseMatrix,
    b: DenseMatrix,
    *,
    block_size: int | None = None,
) -> DenseMatrix:
    """Product of M x N and N x P matrices with the general tiled kernel."""
    design = MatmulDesign.from_matrices(
        a, b, kernel='general_blocked', block_size=block_size
    )
    return DenseMatrix._wrap(run_kernel(design))
