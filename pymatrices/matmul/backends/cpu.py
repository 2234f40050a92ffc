"""
CPU backend for dense multiplication.

Runs whichever kernel the design planned on the operands' row-major
buffers and wraps the product as a DenseMatrix.
"""

from typing import Any
from numpy.typing import NDArray

from pymatrices.core.result import Result
from pymatrices.core.compute.timing import timed
from pymatrices.dense.matrix import DenseMatrix
from pymatrices.matmul import _kernels
from pymatrices.matmul._tiny import tiny_kernel
from pymatrices.matmul.design import MatmulDesign
from pymatrices.matmul.solution import MatmulParams


def run_kernel(design: MatmulDesign) -> NDArray:
    """
    Execute the planned kernel and return the raw (M, P) product.
    
    Raises:
        ValueError: If the design names a kernel this backend does not know
    """
    a, b, dtype = design.left, design.right, design.dtype
    
    if design.kernel == 'tiny':
        kernel = tiny_kernel(a.shape, b.shape)
        return kernel(a, b, dtype)
    if design.kernel == 'transposed_blocked':
        return _kernels.transposed_blocked(a, b, design.block_size, dtype)
    if design.kernel == 'general_blocked':
        return _kernels.general_blocked(a, b, design.block_size, dtype)
    if design.kernel == 'naive':
        return _kernels.naive(a, b, dtype, workers=design.workers)
    raise ValueError(f"Unknown kernel: {design.kernel!r}")


class CPUMatmulBackend:
    """
    CPU backend for dense M x N @ N x P products.
    
    Implements the Backend protocol for MatmulDesign -> MatmulParams.
    """
    
    @property
    def name(self) -> str:
        return 'cpu'
    
    def solve(self, design: MatmulDesign) -> Result[MatmulParams]:
        """
        Multiply the design's operands.
        
        Args:
            design: Validated multiplication design
            
        Returns:
            Result containing MatmulParams, with the kernel and block size
            recorded in info
        """
        with timed() as timer:
            with timer.section('kernel'):
                product = run_kernel(design)
        
        info: dict[str, Any] = {
            'kernel': design.kernel,
            'block_size': design.block_size,
            'block_size_fallback': design.block_size_fallback,
            'workers': design.workers,
            'left_shape': design.left.shape,
            'right_shape': design.right.shape,
            'output_shape': design.output_shape,
            'dtype': str(design.dtype),
        }
        
        warnings: tuple[str, ...] = ()
        if design.block_size_fallback:
            warnings = (
                f"no block size in range divides {design.left.shape} @ {design.right.shape}; "
                f"using {design.block_size}",
            )
        
        return Result(
            params=MatmulParams(product=DenseMatrix._wrap(product)),
            info=info,
            timing=timer.result(),
            backend_name=f"{self.name}_{design.kernel}",
            warnings=warnings,
        )
