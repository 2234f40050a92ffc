"""
General dense multiplication kernels.

All kernels take 2D numpy views of row-major buffers that already share
the output element type, and return a freshly allocated product. Reads
and writes never alias, so no kernel needs locking.

Each output cell is an independent reduction. Within a tile the
reduction over the shared dimension is delegated to numpy, which may
sum in any order (and across threads); floating results can therefore
differ in the last bits between kernels and runs. Integer results are
exact.

    transposed_blocked: N x N @ N x N, right operand transposed once
    general_blocked:    M x N @ N x P, tiles clamped at every edge
    naive:              one full-length dot product per cell, no tiling
"""

from concurrent.futures import ThreadPoolExecutor
import numpy as np
from numpy.typing import NDArray


def transposed_blocked(a: NDArray, b: NDArray, block_size: int, dtype: np.dtype) -> NDArray:
    """
    Cache-tiled N x N product with a pre-transposed right operand.
    
    Algorithm:
        1. bt = transpose(b), materialized once (O(N^2) extra space) so
           both operands walk their k dimension along contiguous rows
        2. for kk, jj over [0, N) in steps of block_size:
               for every row i and every j in the jj tile:
                   c[i, j] += sum_{k in kk tile} a[i, k] * bt[j, k]
    
    Tiles at the right and bottom edges are clamped, so N need not be a
    multiple of block_size, and partial sums of successive kk tiles are
    accumulated.
    
    Args:
        a: Left operand, shape (N, N)
        b: Right operand, shape (N, N)
        block_size: Tile edge length, >= 1
        dtype: Output element type
    """
    n = a.shape[0]
    bt = np.ascontiguousarray(b.T)
    out = np.zeros((n, n), dtype=dtype)
    
    for kk in range(0, n, block_size):
        k_end = min(kk + block_size, n)
        a_panel = a[:, kk:k_end]
        for jj in range(0, n, block_size):
            j_end = min(jj + block_size, n)
            out[:, jj:j_end] += a_panel @ bt[jj:j_end, kk:k_end].T
    
    return out


def general_blocked(a: NDArray, b: NDArray, block_size: int, dtype: np.dtype) -> NDArray:
    """
    Cache-tiled M x N @ N x P product.
    
    Loop order is kk (shared), jj (output cols), ii (output rows), each in
    steps of block_size with the inner bounds clamped to the dimension.
    Every tile's partial sum is added to the output, so the result is the
    full product for any shapes.
    
    Args:
        a: Left operand, shape (M, N)
        b: Right operand, shape (N, P)
        block_size: Tile edge length, >= 1
        dtype: Output element type
    """
    m, n = a.shape
    p = b.shape[1]
    out = np.zeros((m, p), dtype=dtype)
    
    for kk in range(0, n, block_size):
        k_end = min(kk + block_size, n)
        for jj in range(0, p, block_size):
            j_end = min(jj + block_size, p)
            b_tile = b[kk:k_end, jj:j_end]
            for ii in range(0, m, block_size):
                i_end = min(ii + block_size, m)
                out[ii:i_end, jj:j_end] += a[ii:i_end, kk:k_end] @ b_tile
    
    return out


def naive(a: NDArray, b: NDArray, dtype: np.dtype, workers: int | None = None) -> NDArray:
    """
    Untiled product: every cell is one full-length dot product.
    
    Used as the ground truth the blocked kernels are checked against.
    
    Args:
        a: Left operand, shape (M, N)
        b: Right operand, shape (N, P)
        dtype: Output element type
        workers: With more than one worker, output rows are computed on a
            thread pool and joined before returning
    """
    m = a.shape[0]
    p = b.shape[1]
    out = np.zeros((m, p), dtype=dtype)
    
    def row(i: int) -> NDArray:
        # column j of the result row is dot(a[i, :], b[:, j])
        return a[i, :] @ b
    
    if workers is not None and workers > 1 and m > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            for i, values in enumerate(pool.map(row, range(m))):
                out[i, :] = values
    else:
        for i in range(m):
            out[i, :] = row(i)
    
    return out
