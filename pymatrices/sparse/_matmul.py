"""
Sparse-sparse matrix multiplication.

Only true non-zero structure is visited; no output coordinate is ever
tested against an input coordinate. Two formulations of the same
product are provided:

    square_product:  N x N @ N x N. For every (non-empty row i of A,
        non-empty column j of B) pair, merge A's row indices with B's
        column indices (both sorted) and reduce over the shared k.

    general_product: M x N @ N x P (Gustavson). For every non-empty
        row i of A, scatter a[i, k] * B[k, :] into a length-P
        accumulator for each stored k, then gather the touched columns.

Both store only non-zero results and return identical maps for integer
types; float sums may differ in the last bits.
"""

from collections import defaultdict
from typing import Any
import numpy as np

Entries = dict[tuple[int, int], Any]
Lines = dict[int, tuple[np.ndarray, np.ndarray]]


def _lines(entries: Entries, axis: int, dtype: np.dtype) -> Lines:
    """Group entries by row (axis=0) or column (axis=1), sorted along the other axis."""
    grouped: dict[int, list[tuple[int, Any]]] = defaultdict(list)
    for key, value in entries.items():
        grouped[key[axis]].append((key[1 - axis], value))
    
    lines: Lines = {}
    for line, pairs in grouped.items():
        pairs.sort(key=lambda pair: pair[0])
        indices = np.array([index for index, _ in pairs], dtype=np.intp)
        values = np.array([value for _, value in pairs], dtype=dtype)
        lines[line] = (indices, values)
    return lines


def square_product(a: Entries, b: Entries, dtype: np.dtype) -> Entries:
    """
    Inner-product formulation: c[i, j] = sum over shared k of a[i, k] * b[k, j].
    
    Rows of A and columns of B are kept as sorted index arrays; their
    intersection is the set of k that contribute.
    """
    rows = _lines(a, 0, dtype)
    cols = _lines(b, 1, dtype)
    
    out: Entries = {}
    for i, (a_k, a_vals) in rows.items():
        for j, (b_k, b_vals) in cols.items():
            _, ia, ib = np.intersect1d(a_k, b_k, assume_unique=True, return_indices=True)
            if ia.size == 0:
                continue
            value = np.dot(a_vals[ia], b_vals[ib])
            if value != 0:
                out[(i, j)] = dtype.type(value)
    return out


def general_product(a: Entries, b: Entries, p: int, dtype: np.dtype) -> Entries:
    """
    Row-wise (Gustavson) formulation with a dense length-p accumulator.
    
    The accumulator is reset only at the touched columns after each row.
    """
    rows = _lines(a, 0, dtype)
    b_rows = _lines(b, 0, dtype)
    accumulator = np.zeros(p, dtype=dtype)
    
    out: Entries = {}
    for i, (a_k, a_vals) in rows.items():
        touched: list[np.ndarray] = []
        for k, a_ik in zip(a_k.tolist(), a_vals):
            if k not in b_rows:
                continue
            b_j, b_vals = b_rows[k]
            accumulator[b_j] += a_ik * b_vals
            touched.append(b_j)
        if not touched:
            continue
        
        columns = np.unique(np.concatenate(touched))
        for j, value in zip(columns.tolist(), accumulator[columns]):
            if value != 0:
                out[(i, j)] = value
        accumulator[columns] = 0
    return out
