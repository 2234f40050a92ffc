"""
Closed enumerations shared by dense and sparse storage.

Operation parameterizes the elementwise combinators of both storage
kinds; Dimension selects the axis for row/column reductions and for
concatenation.
"""

from enum import Enum, IntEnum
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pymatrices.core.elements import divide


class Operation(Enum):
    """Binary arithmetic operator applied by the elementwise combinators."""
    ADD = 'add'
    SUB = 'sub'
    MUL = 'mul'
    DIV = 'div'

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS = {
    Operation.ADD: '+',
    Operation.SUB: '-',
    Operation.MUL: '*',
    Operation.DIV: '/',
}


class Dimension(IntEnum):
    """Axis selector. ROW is 0 and COL is 1, matching numpy axes."""
    ROW = 0
    COL = 1


def apply(op: Operation, left: NDArray, right: NDArray | Any, dtype: np.dtype) -> NDArray:
    """
    Combine left and right elementwise with op, in the element type.
    
    The caller has already verified shapes and, for DIV, that the
    divisor holds no zeros.
    """
    if op is Operation.ADD:
        result = np.add(left, right)
    elif op is Operation.SUB:
        result = np.subtract(left, right)
    elif op is Operation.MUL:
        result = np.multiply(left, right)
    else:
        result = divide(left, right, dtype)
    return np.asarray(result).astype(dtype, copy=False)
