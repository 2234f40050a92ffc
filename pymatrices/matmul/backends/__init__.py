"""
Multiplication backends.

Available backends:
    CPUMatmulBackend: shape-dispatched tiny, blocked and naive kernels
"""

from pymatrices.matmul.backends.cpu import CPUMatmulBackend, run_kernel

__all__ = [
    "CPUMatmulBackend",
    "run_kernel",
]
