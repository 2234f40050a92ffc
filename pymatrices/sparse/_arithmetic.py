"""
Elementwise arithmetic over coordinate maps.

Both operands are maps (row, col) -> non-zero value over the same shape;
an absent coordinate is a zero. The result map is computed for the
coordinates where the operator can produce a non-zero and then pruned,
so no result ever stores a zero:

    ADD, SUB: union of both key sets     (absent side contributes 0)
    MUL:      intersection of key sets   (x * 0 == 0)
    DIV:      keys of the left operand   (0 / y == 0); a left entry
              facing an absent right entry is a division by zero

Values are gathered into numpy arrays and combined in one vectorized
pass, so integer results wrap exactly like the dense kernels.
"""

from typing import Any
import numpy as np

from pymatrices.core.exceptions import DivideByZeroError
from pymatrices.core.operations import Operation, apply

Entries = dict[tuple[int, int], Any]


def _prune(keys: list[tuple[int, int]], values: np.ndarray) -> Entries:
    return {key: value for key, value in zip(keys, values) if value != 0}


def combine(left: Entries, right: Entries, op: Operation, dtype: np.dtype) -> Entries:
    """
    Combine two coordinate maps of equal shape with op.
    
    The caller has already checked that the shapes agree.
    
    Raises:
        DivideByZeroError: For DIV, if a stored left entry has no
            counterpart in right
    """
    if op in (Operation.ADD, Operation.SUB):
        keys = list(left)
        keys.extend(key for key in right if key not in left)
    elif op is Operation.MUL:
        keys = [key for key in left if key in right]
    else:
        for key in left:
            if key not in right:
                raise DivideByZeroError(
                    f"division by zero: divisor is zero at {key}",
                    position=key,
                )
        keys = list(left)
    
    if not keys:
        return {}
    
    zero = dtype.type(0)
    lhs = np.array([left.get(key, zero) for key in keys], dtype=dtype)
    rhs = np.array([right.get(key, zero) for key in keys], dtype=dtype)
    return _prune(keys, apply(op, lhs, rhs, dtype))


def broadcast(entries: Entries, value: Any, op: Operation, dtype: np.dtype) -> Entries:
    """
    Apply op between every stored value and a scalar.
    
    Implicit zeros are not touched. Results equal to zero are dropped.
    
    Raises:
        DivideByZeroError: For DIV by a zero scalar
    """
    if op is Operation.DIV and value == 0:
        raise DivideByZeroError("division by zero: scalar divisor is zero")
    if not entries:
        return {}
    keys = list(entries)
    stored = np.array([entries[key] for key in keys], dtype=dtype)
    return _prune(keys, apply(op, stored, value, dtype))


def map_values(entries: Entries, func: Any, dtype: np.dtype) -> Entries:
    """Apply a vectorized function to every stored value, dropping zeros."""
    if not entries:
        return {}
    keys = list(entries)
    stored = np.array([entries[key] for key in keys], dtype=dtype)
    return _prune(keys, np.asarray(func(stored)).astype(dtype, copy=False))
