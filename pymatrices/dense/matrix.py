"""
DenseMatrix: row-major storage covering every cell.

A DenseMatrix owns one contiguous 1D numpy buffer of nrows * ncols
elements plus its shape. Reshape changes only the shape; transpose
permutes the buffer. Matrices never share buffers: every factory and
every allocating operation produces a fresh one, and copy() is deep.

Operations come in three flavours:
    add(other)      -> new matrix
    add_self(other) -> mutates this matrix in place, returns None
    a + b           -> operator form of add / add_val

Shape mismatches raise; reads through get() and the not-applicable
results of determinant(), inverse(), exp() and find() return None.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Iterable
import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from pymatrices import io
from pymatrices.core.compute.tolerances import select_tolerance
from pymatrices.core.elements import (
    DEFAULT_DTYPE,
    cast_scalar,
    infer_dtype,
    is_integer,
    resolve_dtype,
    result_dtype,
    sample_uniform,
    zero,
)
from pymatrices.core.exceptions import (
    ConcatenationError,
    DimensionMismatchError,
    DivideByZeroError,
    IndexOutOfBoundsError,
    ValidationError,
)
from pymatrices.core.operations import Dimension, Operation, apply
from pymatrices.core.validation import (
    check_array,
    check_buffer_length,
    check_index,
    check_nonzero_divisor,
    check_same_shape,
    check_shape,
)
from pymatrices.dense._determinant import determinant as _cofactor_determinant

if TYPE_CHECKING:
    from pymatrices.sparse.matrix import SparseMatrix


Predicate = Callable[[Any], bool]
Seed = int | np.random.Generator | None


class DenseMatrix:
    """
    Dense matrix over one supported numeric element type.

    Construction:
        DenseMatrix([1, 2, 3, 4], (2, 2))
        DenseMatrix.from_array(np.eye(3))
        DenseMatrix.init(0.5, (3, 4))
        DenseMatrix.randomize_range(-1, 1, (8, 8), seed=0)
    """

    __slots__ = ('_data', '_nrows', '_ncols')

    # numpy defers to the reflected operators instead of broadcasting
    __array_ufunc__ = None

    def __init__(
        self,
        data: ArrayLike,
        shape: tuple[int, int],
        dtype: DTypeLike | None = None,
    ):
        """
        Build a matrix from a flat row-major buffer.

        Args:
            data: rows * cols elements in row-major order
            shape: (rows, cols)
            dtype: Element type; inferred from data when None

        Raises:
            MatrixCreationError: If len(data) != rows * cols
            ValidationError: If data is not numeric or dtype is unsupported
        """
        nrows, ncols = check_shape(shape)
        buffer = check_array(data, 'data', dtype).reshape(-1)
        check_buffer_length(buffer.size, (nrows, ncols))

        self._data = buffer.copy()
        self._nrows = nrows
        self._ncols = ncols

    @classmethod
    def _wrap(cls, array: NDArray) -> DenseMatrix:
        """Adopt a freshly allocated 2D array as the buffer, without copying."""
        matrix = cls.__new__(cls)
        matrix._data = np.ascontiguousarray(array).reshape(-1)
        matrix._nrows, matrix._ncols = int(array.shape[0]), int(array.shape[1])
        return matrix

    # ═══════════════════════════════════════════════════════════════════
    # Factories
    # ═══════════════════════════════════════════════════════════════════

    @classmethod
    def new(
        cls,
        data: ArrayLike,
        shape: tuple[int, int],
        dtype: DTypeLike | None = None,
    ) -> DenseMatrix:
        """Same as DenseMatrix(data, shape, dtype)."""
        return cls(data, shape, dtype)

    @classmethod
    def from_array(cls, array: ArrayLike, dtype: DTypeLike | None = None) -> DenseMatrix:
        """
        Build a matrix from a 2D array-like (nested lists, numpy array).

        Raises:
            ValidationError: If the input is not two-dimensional
        """
        values = check_array(array, 'array', dtype)
        if values.ndim != 2:
            raise ValidationError(f"array: expected 2D, got {values.ndim}D")
        return cls._wrap(values.copy())

    @classmethod
    def init(cls, value: Any, shape: tuple[int, int], dtype: DTypeLike | None = None) -> DenseMatrix:
        """Matrix of the given shape with every element set to value."""
        nrows, ncols = check_shape(shape)
        if dtype is None:
            dtype = infer_dtype(check_array(value, 'value'))
        dtype = resolve_dtype(dtype)
        return cls._wrap(np.full((nrows, ncols), cast_scalar(value, dtype), dtype=dtype))

    @classmethod
    def zeros(cls, shape: tuple[int, int], dtype: DTypeLike | None = None) -> DenseMatrix:
        return cls._wrap(np.zeros(check_shape(shape), dtype=resolve_dtype(dtype)))

    @classmethod
    def ones(cls, shape: tuple[int, int], dtype: DTypeLike | None = None) -> DenseMatrix:
        return cls._wrap(np.ones(check_shape(shape), dtype=resolve_dtype(dtype)))

    @classmethod
    def zeros_like(cls, other: DenseMatrix) -> DenseMatrix:
        return cls.zeros(other.shape, other.dtype)

    @classmethod
    def ones_like(cls, other: DenseMatrix) -> DenseMatrix:
        return cls.ones(other.shape, other.dtype)

    @classmethod
    def eye(cls, size: int, dtype: DTypeLike | None = None) -> DenseMatrix:
        """size x size identity matrix."""
        size, _ = check_shape((size, size), 'size')
        return cls._wrap(np.eye(size, dtype=resolve_dtype(dtype)))

    @classmethod
    def identity(cls, size: int, dtype: DTypeLike | None = None) -> DenseMatrix:
        return cls.eye(size, dtype)

    @classmethod
    def eye_like(cls, other: DenseMatrix) -> DenseMatrix:
        """Identity with other's row count and element type."""
        return cls.eye(other.nrows, other.dtype)

    @classmethod
    def randomize_range(
        cls,
        low: Any,
        high: Any,
        shape: tuple[int, int],
        dtype: DTypeLike | None = None,
        *,
        seed: Seed = None,
    ) -> DenseMatrix:
        """
        Matrix of values drawn uniformly from [low, high].

        Args:
            low, high: Inclusive bounds
            shape: (rows, cols)
            dtype: Element type, float64 by default
            seed: Integer seed or numpy Generator for reproducible draws
        """
        nrows, ncols = check_shape(shape)
        dtype = resolve_dtype(dtype)
        values = sample_uniform(low, high, nrows * ncols, dtype, seed)
        return cls._wrap(values.reshape(nrows, ncols))

    @classmethod
    def randomize(
        cls,
        shape: tuple[int, int],
        dtype: DTypeLike | None = None,
        *,
        seed: Seed = None,
    ) -> DenseMatrix:
        """Matrix of values drawn uniformly from [0, 1]."""
        return cls.randomize_range(0, 1, shape, dtype, seed=seed)

    @classmethod
    def random_like(cls, other: DenseMatrix, *, seed: Seed = None) -> DenseMatrix:
        return cls.randomize(other.shape, other.dtype, seed=seed)

    @classmethod
    def from_sparse(cls, sparse: SparseMatrix) -> DenseMatrix:
        """Dense copy of a sparse matrix; absent coordinates become zero."""
        out = np.zeros(sparse.shape, dtype=sparse.dtype)
        for (i, j), value in sparse.items():
            out[i, j] = value
        return cls._wrap(out)

    @classmethod
    def from_string(cls, text: str, dtype: DTypeLike | None = None) -> DenseMatrix:
        """
        Parse whitespace-separated rows, one row per line.

        Raises:
            MatrixParseError: On ragged rows or unparsable elements
        """
        dtype = resolve_dtype(dtype) if dtype is not None else DEFAULT_DTYPE
        buffer, shape = io.parse_dense(text, dtype)
        return cls(buffer, shape, dtype)

    @classmethod
    def from_file(cls, path: Any, dtype: DTypeLike | None = None) -> DenseMatrix:
        """
        Read a matrix written in the dense text format.

        Raises:
            MatrixFileReadError: If the file cannot be read
            MatrixParseError: If its contents are not a valid matrix
        """
        return cls.from_string(io.read_text(path), dtype)

    def copy(self) -> DenseMatrix:
        """Deep copy."""
        return DenseMatrix._wrap(self._grid().copy())

    # ═══════════════════════════════════════════════════════════════════
    # Accessors
    # ═══════════════════════════════════════════════════════════════════

    @property
    def shape(self) -> tuple[int, int]:
        return (self._nrows, self._ncols)

    @property
    def nrows(self) -> int:
        return self._nrows

    @property
    def ncols(self) -> int:
        return self._ncols

    @property
    def size(self) -> int:
        return self._nrows * self._ncols

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    def _grid(self) -> NDArray:
        # writable 2D view of the owned buffer
        return self._data.reshape(self._nrows, self._ncols)

    def view(self) -> NDArray:
        """Read-only 2D view of the buffer, valid until the next mutation."""
        grid = self._grid()
        grid.flags.writeable = False
        return grid

    def to_numpy(self) -> NDArray:
        """2D numpy copy."""
        return self._grid().copy()

    def __array__(self, dtype: DTypeLike | None = None, copy: bool | None = None) -> NDArray:
        array = self.to_numpy()
        return array if dtype is None else array.astype(dtype)

    def get(self, i: int, j: int) -> Any | None:
        """Element at (i, j), or None if either index is out of range."""
        if not (0 <= i < self._nrows and 0 <= j < self._ncols):
            return None
        return self._data[i * self._ncols + j]

    def at(self, i: int, j: int) -> Any:
        """
        Element at (i, j).

        Raises:
            IndexOutOfBoundsError: If either index is out of range
        """
        check_index(i, j, self.shape)
        return self._data[i * self._ncols + j]

    def get_vec(self) -> NDArray:
        """Copy of the flat row-major buffer."""
        return self._data.copy()

    def get_vec_slice(self, start: tuple[int, int], size: tuple[int, int]) -> NDArray:
        """
        Elements of the size = (rows, cols) window starting at start, row-major.

        Cells of the window that fall outside the matrix are skipped.
        """
        row, col = start
        rows, cols = check_shape(size, 'size')
        values = [
            value
            for i in range(row, row + rows)
            for j in range(col, col + cols)
            if (value := self.get(i, j)) is not None
        ]
        return np.array(values, dtype=self.dtype)

    def get_sub_matrix(self, start: tuple[int, int], size: tuple[int, int]) -> DenseMatrix:
        """
        Copy of the size = (rows, cols) window starting at start.

        Raises:
            IndexOutOfBoundsError: If the window reaches outside the matrix
        """
        row, col = start
        rows, cols = check_shape(size, 'size')
        if row < 0 or col < 0 or row + rows > self._nrows or col + cols > self._ncols:
            raise IndexOutOfBoundsError(
                f"window of size {(rows, cols)} at {start} does not fit shape {self.shape}",
                index=(row + rows - 1, col + cols - 1),
                shape=self.shape,
            )
        return DenseMatrix._wrap(self._grid()[row:row + rows, col:col + cols].copy())

    def one_to_2d_idx(self, idx: int) -> tuple[int, int]:
        """(row, col) of a flat row-major index."""
        if not 0 <= idx < self.size:
            raise IndexOutOfBoundsError(
                f"flat index {idx} is out of bounds for size {self.size}",
                index=idx,
                shape=self.shape,
            )
        return divmod(idx, self._ncols)

    # ═══════════════════════════════════════════════════════════════════
    # Mutators
    # ═══════════════════════════════════════════════════════════════════

    def set(self, value: Any, idx: tuple[int, int]) -> None:
        """
        Set the element at idx = (row, col).

        Raises:
            IndexOutOfBoundsError: If idx is outside the matrix
        """
        i, j = idx
        check_index(i, j, self.shape)
        self._data[i * self._ncols + j] = cast_scalar(value, self.dtype)

    def set_many(self, idx_list: Iterable[tuple[int, int]], value: Any) -> None:
        """Set every listed (row, col) to value. Nothing is set if any index is out of range."""
        indices = list(idx_list)
        for i, j in indices:
            check_index(i, j, self.shape)
        value = cast_scalar(value, self.dtype)
        for i, j in indices:
            self._data[i * self._ncols + j] = value

    def set_range(self, start: int, stop: int, value: Any) -> None:
        """
        Set flat indices start..stop, both inclusive.

        Raises:
            IndexOutOfBoundsError: If start < 0 or stop >= size
        """
        for idx in (start, stop):
            if not 0 <= idx < self.size:
                raise IndexOutOfBoundsError(
                    f"flat index {idx} is out of bounds for size {self.size}",
                    index=idx,
                    shape=self.shape,
                )
        self._data[start:stop + 1] = cast_scalar(value, self.dtype)

    def reshape(self, nrows: int, ncols: int) -> None:
        """
        Reinterpret the buffer as nrows x ncols; the buffer is untouched.

        Raises:
            DimensionMismatchError: If nrows * ncols != size
        """
        nrows, ncols = check_shape((nrows, ncols))
        if nrows * ncols != self.size:
            raise DimensionMismatchError(
                f"cannot reshape {self.shape} ({self.size} elements) to "
                f"{(nrows, ncols)} ({nrows * ncols} elements)",
                left=self.shape,
                right=(nrows, ncols),
            )
        self._nrows, self._ncols = nrows, ncols

    def transpose(self) -> None:
        """Transpose in place: permute the buffer and swap the shape."""
        self._data = np.ascontiguousarray(self._grid().T).reshape(-1)
        self._nrows, self._ncols = self._ncols, self._nrows

    def t(self) -> None:
        self.transpose()

    def transpose_copy(self) -> DenseMatrix:
        return DenseMatrix._wrap(self._grid().T.copy())

    def _joined(self, other: DenseMatrix, dim: Dimension | int) -> NDArray:
        dim = Dimension(dim)
        if dim is Dimension.ROW and self._ncols != other.ncols:
            raise ConcatenationError(
                f"cannot stack rows: {self._ncols} columns vs {other.ncols}",
                left=self.shape,
                right=other.shape,
            )
        if dim is Dimension.COL and self._nrows != other.nrows:
            raise ConcatenationError(
                f"cannot join columns: {self._nrows} rows vs {other.nrows}",
                left=self.shape,
                right=other.shape,
            )
        dtype = result_dtype(self.dtype, other.dtype)
        return np.concatenate(
            (self._grid().astype(dtype, copy=False), other.view().astype(dtype, copy=False)),
            axis=int(dim),
        )

    def concat(self, other: DenseMatrix, dim: Dimension | int) -> DenseMatrix:
        """
        New matrix with other appended below (ROW) or to the right (COL).

        Raises:
            ConcatenationError: If the shared dimension differs
        """
        return DenseMatrix._wrap(self._joined(other, dim))

    def extend(self, other: DenseMatrix, dim: Dimension | int) -> None:
        """
        In-place concat. The element type is kept.

        Raises:
            ConcatenationError: If the shared dimension differs
        """
        joined = self._joined(other, dim)
        self._require_castable(joined.dtype, 'extend')
        self._data = joined.reshape(-1)
        self._nrows, self._ncols = joined.shape

    # ═══════════════════════════════════════════════════════════════════
    # Elementwise arithmetic
    # ═══════════════════════════════════════════════════════════════════

    def _require_castable(self, dtype: np.dtype, operation: str) -> None:
        if dtype != self.dtype:
            raise ValidationError(
                f"{operation}: result type {dtype} cannot be stored in this "
                f"{self.dtype} matrix in place"
            )

    def _combine(self, other: DenseMatrix, op: Operation) -> DenseMatrix:
        check_same_shape(self.shape, other.shape, op.value)
        if op is Operation.DIV:
            check_nonzero_divisor(other._data, other.shape)
        dtype = result_dtype(self.dtype, other.dtype)
        return DenseMatrix._wrap(apply(op, self._grid(), other.view(), dtype))

    def _combine_self(self, other: DenseMatrix, op: Operation) -> None:
        check_same_shape(self.shape, other.shape, f"{op.value}_self")
        self._require_castable(result_dtype(self.dtype, other.dtype), f"{op.value}_self")
        if op is Operation.DIV:
            check_nonzero_divisor(other._data, other.shape)
        self._data = apply(op, self._data, other._data, self.dtype)

    def _scalar(self, value: Any, op: Operation) -> Any:
        value = cast_scalar(value, self.dtype)
        if op is Operation.DIV and value == 0:
            raise DivideByZeroError("division by zero: scalar divisor is zero")
        return value

    def add(self, other: DenseMatrix) -> DenseMatrix:
        """
        Elementwise sum.

        Raises:
            DimensionMismatchError: If the shapes differ
        """
        return self._combine(other, Operation.ADD)

    def sub(self, other: DenseMatrix) -> DenseMatrix:
        return self._combine(other, Operation.SUB)

    def sub_abs(self, other: DenseMatrix) -> DenseMatrix:
        """Elementwise |self - other|."""
        difference = self._combine(other, Operation.SUB)
        return DenseMatrix._wrap(np.abs(difference._grid()))

    def mul(self, other: DenseMatrix) -> DenseMatrix:
        """Elementwise (Hadamard) product."""
        return self._combine(other, Operation.MUL)

    def dot(self, other: DenseMatrix) -> DenseMatrix:
        """Alias of mul(): elementwise, not the matrix product."""
        return self.mul(other)

    def div(self, other: DenseMatrix) -> DenseMatrix:
        """
        Elementwise quotient; integer types truncate toward zero.

        Raises:
            DimensionMismatchError: If the shapes differ
            DivideByZeroError: If any element of other is zero
        """
        return self._combine(other, Operation.DIV)

    def neg(self) -> DenseMatrix:
        return DenseMatrix._wrap(np.negative(self._grid()))

    def abs(self) -> DenseMatrix:
        return DenseMatrix._wrap(np.abs(self._grid()))

    def pow(self, n: int) -> DenseMatrix:
        """Raise every element to the non-negative integer power n."""
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 0:
            raise ValidationError(f"n: must be a non-negative int, got {n!r}")
        return DenseMatrix._wrap(np.power(self._grid(), n).astype(self.dtype, copy=False))

    def add_val(self, value: Any) -> DenseMatrix:
        return DenseMatrix._wrap(apply(Operation.ADD, self._grid(), self._scalar(value, Operation.ADD), self.dtype))

    def sub_val(self, value: Any) -> DenseMatrix:
        return DenseMatrix._wrap(apply(Operation.SUB, self._grid(), self._scalar(value, Operation.SUB), self.dtype))

    def mul_val(self, value: Any) -> DenseMatrix:
        return DenseMatrix._wrap(apply(Operation.MUL, self._grid(), self._scalar(value, Operation.MUL), self.dtype))

    def div_val(self, value: Any) -> DenseMatrix:
        """
        Divide every element by value.

        Raises:
            DivideByZeroError: If value is zero
        """
        return DenseMatrix._wrap(apply(Operation.DIV, self._grid(), self._scalar(value, Operation.DIV), self.dtype))

    def add_self(self, other: DenseMatrix) -> None:
        """
        In-place elementwise sum.

        Raises:
            DimensionMismatchError: If the shapes differ
            ValidationError: If other's element type does not fit this one
        """
        self._combine_self(other, Operation.ADD)

    def sub_self(self, other: DenseMatrix) -> None:
        self._combine_self(other, Operation.SUB)

    def mul_self(self, other: DenseMatrix) -> None:
        self._combine_self(other, Operation.MUL)

    def div_self(self, other: DenseMatrix) -> None:
        self._combine_self(other, Operation.DIV)

    def abs_self(self) -> None:
        np.abs(self._data, out=self._data)

    def add_val_self(self, value: Any) -> None:
        self._data = apply(Operation.ADD, self._data, self._scalar(value, Operation.ADD), self.dtype)

    def sub_val_self(self, value: Any) -> None:
        self._data = apply(Operation.SUB, self._data, self._scalar(value, Operation.SUB), self.dtype)

    def mul_val_self(self, value: Any) -> None:
        self._data = apply(Operation.MUL, self._data, self._scalar(value, Operation.MUL), self.dtype)

    def div_val_self(self, value: Any) -> None:
        self._data = apply(Operation.DIV, self._data, self._scalar(value, Operation.DIV), self.dtype)

    # ═══════════════════════════════════════════════════════════════════
    # Operators
    # ═══════════════════════════════════════════════════════════════════

    @staticmethod
    def _is_scalar(value: Any) -> bool:
        return np.isscalar(value) and not isinstance(value, (str, bytes))

    def __add__(self, other: Any) -> DenseMatrix:
        if isinstance(other, DenseMatrix):
            return self.add(other)
        if self._is_scalar(other):
            return self.add_val(other)
        return NotImplemented

    def __radd__(self, other: Any) -> DenseMatrix:
        if self._is_scalar(other):
            return self.add_val(other)
        return NotImplemented

    def __sub__(self, other: Any) -> DenseMatrix:
        if isinstance(other, DenseMatrix):
            return self.sub(other)
        if self._is_scalar(other):
            return self.sub_val(other)
        return NotImplemented

    def __rsub__(self, other: Any) -> DenseMatrix:
        if self._is_scalar(other):
            return self.neg().add_val(other)
        return NotImplemented

    def __mul__(self, other: Any) -> DenseMatrix:
        if isinstance(other, DenseMatrix):
            return self.mul(other)
        if self._is_scalar(other):
            return self.mul_val(other)
        return NotImplemented

    def __rmul__(self, other: Any) -> DenseMatrix:
        if self._is_scalar(other):
            return self.mul_val(other)
        return NotImplemented

    def __truediv__(self, other: Any) -> DenseMatrix:
        if isinstance(other, DenseMatrix):
            return self.div(other)
        if self._is_scalar(other):
            return self.div_val(other)
        return NotImplemented

    def __matmul__(self, other: Any) -> DenseMatrix:
        if isinstance(other, DenseMatrix):
            return self.matmul(other)
        return NotImplemented

    def __neg__(self) -> DenseMatrix:
        return self.neg()

    def __eq__(self, other: object) -> bool:
        """Equal shapes and equal values; the element dtype is not compared."""
        if not isinstance(other, DenseMatrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None

    # ═══════════════════════════════════════════════════════════════════
    # Floating-point functions
    # ═══════════════════════════════════════════════════════════════════

    def _require_float(self, name: str) -> None:
        if is_integer(self.dtype):
            raise ValidationError(f"{name}: requires a floating element type, got {self.dtype}")

    def _map_float(self, name: str, func: Callable[[NDArray], NDArray]) -> DenseMatrix:
        self._require_float(name)
        return DenseMatrix._wrap(np.asarray(func(self._grid())).astype(self.dtype, copy=False))

    def log(self, base: float) -> DenseMatrix:
        """Logarithm of every element in the given base."""
        return self._map_float('log', lambda x: np.log(x) / np.log(base))

    def ln(self) -> DenseMatrix:
        return self._map_float('ln', np.log)

    def sqrt(self) -> DenseMatrix:
        """Square root of every positive element; the rest are kept unchanged."""
        return self._map_float('sqrt', lambda x: np.where(x > 0, np.sqrt(np.abs(x)), x))

    def sin(self) -> DenseMatrix:
        return self._map_float('sin', np.sin)

    def cos(self) -> DenseMatrix:
        return self._map_float('cos', np.cos)

    def tan(self) -> DenseMatrix:
        return self._map_float('tan', np.tan)

    def sinh(self) -> DenseMatrix:
        return self._map_float('sinh', np.sinh)

    def cosh(self) -> DenseMatrix:
        return self._map_float('cosh', np.cosh)

    def tanh(self) -> DenseMatrix:
        return self._map_float('tanh', np.tanh)

    # ═══════════════════════════════════════════════════════════════════
    # Reductions
    # ═══════════════════════════════════════════════════════════════════

    def _require_nonempty(self, name: str) -> None:
        if self.size == 0:
            raise ValidationError(f"{name}: matrix is empty")

    def max(self) -> Any:
        self._require_nonempty('max')
        return self._data.max()

    def min(self) -> Any:
        self._require_nonempty('min')
        return self._data.min()

    def cumsum(self) -> Any:
        """Sum of all elements (zero for an empty matrix)."""
        return self._data.sum(dtype=self.dtype)

    def cumprod(self) -> Any:
        """Product of all elements. An empty matrix yields zero, not one."""
        if self.size == 0:
            return zero(self.dtype)
        return self._data.prod(dtype=self.dtype)

    def avg(self) -> Any:
        """
        Arithmetic mean in the element type.

        Integer matrices divide the exact total by the size, truncating
        toward zero.
        """
        self._require_nonempty('avg')
        if is_integer(self.dtype):
            total = sum(int(v) for v in self._data.tolist())
            quotient = abs(total) // self.size
            return self.dtype.type(quotient if total >= 0 else -quotient)
        return self.dtype.type(self._data.mean(dtype=np.float64))

    def mean(self) -> Any:
        return self.avg()

    def median(self) -> Any:
        """Middle element, or the mean of the two middle elements for even sizes."""
        self._require_nonempty('median')
        ordered = np.sort(self._data)
        half = self.size // 2
        if self.size % 2 == 1:
            return ordered[half]
        if is_integer(self.dtype):
            total = int(ordered[half - 1]) + int(ordered[half])
            quotient = abs(total) // 2
            return self.dtype.type(quotient if total >= 0 else -quotient)
        return self.dtype.type((float(ordered[half - 1]) + float(ordered[half])) / 2)

    def _line(self, rowcol: int, dim: Dimension | int) -> NDArray:
        dim = Dimension(dim)
        extent = self._nrows if dim is Dimension.ROW else self._ncols
        if not 0 <= rowcol < extent:
            raise IndexOutOfBoundsError(
                f"{dim.name.lower()} {rowcol} is out of bounds for shape {self.shape}",
                index=rowcol,
                shape=self.shape,
            )
        grid = self._grid()
        return grid[rowcol, :] if dim is Dimension.ROW else grid[:, rowcol]

    def sum(self, rowcol: int, dim: Dimension | int) -> Any:
        """
        Sum of one row (Dimension.ROW) or one column (Dimension.COL).

        Raises:
            IndexOutOfBoundsError: If rowcol is not a valid row/column
        """
        return self._line(rowcol, dim).sum(dtype=self.dtype)

    def prod(self, rowcol: int, dim: Dimension | int) -> Any:
        """Product of one row or column; see sum()."""
        return self._line(rowcol, dim).prod(dtype=self.dtype)

    def sparsity(self) -> float:
        """Fraction of elements equal to zero (0.0 for an empty matrix)."""
        if self.size == 0:
            return 0.0
        return float(np.count_nonzero(self._data == 0)) / self.size

    # ═══════════════════════════════════════════════════════════════════
    # Predicates
    # ═══════════════════════════════════════════════════════════════════

    def _mask(self, pred: Predicate) -> NDArray:
        # pred sees one element at a time
        return np.fromiter((bool(pred(v)) for v in self._data), dtype=bool, count=self.size)

    def count_where(self, pred: Predicate) -> int:
        return int(np.count_nonzero(self._mask(pred)))

    def sum_where(self, pred: Predicate) -> Any:
        return self._data[self._mask(pred)].sum(dtype=self.dtype)

    def set_where(self, pred: Predicate, value: Any) -> None:
        """Set every element satisfying pred to value."""
        self._data[self._mask(pred)] = cast_scalar(value, self.dtype)

    def any(self, pred: Predicate) -> bool:
        return any(pred(v) for v in self._data)

    def all(self, pred: Predicate) -> bool:
        return all(pred(v) for v in self._data)

    def find(self, pred: Predicate) -> tuple[int, int] | None:
        """(row, col) of the first element in row-major order satisfying pred."""
        for idx, value in enumerate(self._data):
            if pred(value):
                return self.one_to_2d_idx(idx)
        return None

    def find_all(self, pred: Predicate) -> list[tuple[int, int]] | None:
        """Every matching (row, col) in row-major order, or None if there are none."""
        positions = [self.one_to_2d_idx(int(idx)) for idx in np.flatnonzero(self._mask(pred))]
        return positions or None

    # ═══════════════════════════════════════════════════════════════════
    # Linear algebra
    # ═══════════════════════════════════════════════════════════════════

    def matmul(self, other: DenseMatrix) -> DenseMatrix:
        """
        Matrix product self @ other through the shape-driven dispatcher.

        Raises:
            MultiplicationDimensionError: If self.ncols != other.nrows
        """
        from pymatrices.matmul.solvers import multiply
        return multiply(self, other)

    def mm(self, other: DenseMatrix) -> DenseMatrix:
        return self.matmul(other)

    def determinant(self) -> Any | None:
        """
        Determinant by cofactor expansion, or None if not square.

        O(N!) in the matrix size; warns with PerformanceWarning from
        N = 9 on.
        """
        if self._nrows != self._ncols:
            return None
        return _cofactor_determinant(self._grid(), self.dtype)

    def det(self) -> Any | None:
        return self.determinant()

    def inverse(self) -> DenseMatrix | None:
        """
        Matrix inverse, or None if not square, empty, or singular.

        2x2 matrices use the adjugate formula; larger ones are inverted by
        scipy.linalg.inv (LU). Integer matrices yield a float64 inverse.
        """
        if self._nrows != self._ncols or self.size == 0:
            return None

        dtype = self.dtype if not is_integer(self.dtype) else DEFAULT_DTYPE
        values = self._grid().astype(dtype)

        if self.shape == (2, 2):
            (a, b), (c, d) = values
            det = a * d - b * c
            if det == 0:
                return None
            return DenseMatrix._wrap(np.array([[d, -b], [-c, a]], dtype=dtype) / det)

        from scipy import linalg
        try:
            inverse = linalg.inv(values)
        except linalg.LinAlgError:
            return None
        return DenseMatrix._wrap(inverse.astype(dtype, copy=False))

    def exp(self, n: int) -> DenseMatrix | None:
        """
        Matrix power self @ self @ ... (n factors), or None if not square.

        Raises:
            ValidationError: If n < 1
        """
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 1:
            raise ValidationError(f"n: must be an int >= 1, got {n!r}")
        if self._nrows != self._ncols:
            return None
        result = self.copy()
        for _ in range(n - 1):
            result = result.matmul(self)
        return result

    def allclose(self, other: DenseMatrix) -> bool:
        """
        Elementwise equality within the tolerance tier of the element type.

        Integer matrices must match exactly.
        """
        if self.shape != other.shape:
            return False
        tier = select_tolerance(result_dtype(self.dtype, other.dtype))
        if tier.rtol == 0 and tier.atol == 0:
            return bool(np.array_equal(self._data, other._data))
        return bool(np.allclose(self._data, other._data, rtol=tier.rtol, atol=tier.atol))

    # ═══════════════════════════════════════════════════════════════════
    # Display
    # ═══════════════════════════════════════════════════════════════════

    def print(self, decimals: int = 4) -> None:
        print(io.format_dense(self, decimals))

    def __str__(self) -> str:
        return io.format_dense(self)

    def __repr__(self) -> str:
        return f"DenseMatrix(shape={self.shape}, dtype={self.dtype})"
