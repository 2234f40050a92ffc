"""
SparseMatrix: coordinate-map storage of the non-zero cells.

A SparseMatrix owns a dict mapping (row, col) to a non-zero value of
one supported element type, plus its shape. A coordinate missing from
the map reads as zero, and no zero is ever stored: inserting a zero
clears the coordinate, and every arithmetic result is pruned.

Scalar arithmetic (add_val & co.) and the float functions act on the
stored entries only; implicit zeros stay zero.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator, Mapping
import numpy as np
from numpy.typing import DTypeLike

from pymatrices import io
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
    DimensionMismatchError,
    MatrixCreationError,
    ValidationError,
)
from pymatrices.core.operations import Operation
from pymatrices.core.validation import (
    check_array,
    check_index,
    check_inner_dimensions,
    check_same_shape,
    check_shape,
)
from pymatrices.sparse import _arithmetic
from pymatrices.sparse._matmul import general_product, square_product

if TYPE_CHECKING:
    from scipy import sparse as sp
    from pymatrices.dense.matrix import DenseMatrix


EntryPredicate = Callable[[tuple[int, int], Any], bool]
Seed = int | np.random.Generator | None


class SparseMatrix:
    """
    Sparse matrix over one supported numeric element type.

    Construction:
        SparseMatrix({(0, 1): 2.0, (2, 2): 8.0}, (3, 3))
        SparseMatrix.eye(4)
        SparseMatrix.from_dense(dense)
        SparseMatrix.randomize(0.9, (100, 100), seed=0)
    """

    __slots__ = ('_data', '_nrows', '_ncols', '_dtype')

    __array_ufunc__ = None

    def __init__(
        self,
        data: Mapping[tuple[int, int], Any],
        shape: tuple[int, int],
        dtype: DTypeLike | None = None,
    ):
        """
        Build a matrix from a coordinate map.

        Zero values are dropped.

        Args:
            data: Mapping (row, col) -> value
            shape: (rows, cols)
            dtype: Element type; inferred from the values when None

        Raises:
            MatrixCreationError: If a coordinate lies outside shape
            ValidationError: If a value is not numeric or dtype is unsupported
        """
        nrows, ncols = check_shape(shape)
        if dtype is None:
            values = list(data.values())
            dtype = infer_dtype(check_array(values, 'data')) if values else DEFAULT_DTYPE
        dtype = resolve_dtype(dtype)

        entries: dict[tuple[int, int], Any] = {}
        for (i, j), value in data.items():
            if not (0 <= i < nrows and 0 <= j < ncols):
                raise MatrixCreationError(
                    f"cannot create {nrows}x{ncols} sparse matrix: "
                    f"coordinate ({i}, {j}) is outside the shape",
                    shape=(nrows, ncols),
                )
            value = cast_scalar(value, dtype)
            if value != 0:
                entries[(int(i), int(j))] = value

        self._data = entries
        self._nrows = nrows
        self._ncols = ncols
        self._dtype = dtype

    @classmethod
    def _wrap(
        cls,
        entries: dict[tuple[int, int], Any],
        shape: tuple[int, int],
        dtype: np.dtype,
    ) -> SparseMatrix:
        """Adopt an already validated, zero-free map without copying."""
        matrix = cls.__new__(cls)
        matrix._data = entries
        matrix._nrows, matrix._ncols = shape
        matrix._dtype = dtype
        return matrix

    # ═══════════════════════════════════════════════════════════════════
    # Factories
    # ═══════════════════════════════════════════════════════════════════

    @classmethod
    def new(
        cls,
        data: Mapping[tuple[int, int], Any],
        shape: tuple[int, int],
        dtype: DTypeLike | None = None,
    ) -> SparseMatrix:
        """Same as SparseMatrix(data, shape, dtype)."""
        return cls(data, shape, dtype)

    @classmethod
    def init(cls, nrows: int, ncols: int, dtype: DTypeLike | None = None) -> SparseMatrix:
        """All-zero nrows x ncols matrix."""
        return cls._wrap({}, check_shape((nrows, ncols)), resolve_dtype(dtype))

    @classmethod
    def eye(cls, size: int, dtype: DTypeLike | None = None) -> SparseMatrix:
        size, _ = check_shape((size, size), 'size')
        dtype = resolve_dtype(dtype)
        return cls._wrap({(i, i): dtype.type(1) for i in range(size)}, (size, size), dtype)

    @classmethod
    def identity(cls, size: int, dtype: DTypeLike | None = None) -> SparseMatrix:
        return cls.eye(size, dtype)

    @classmethod
    def eye_like(cls, other: SparseMatrix) -> SparseMatrix:
        return cls.eye(other.nrows, other.dtype)

    @classmethod
    def randomize_range(
        cls,
        low: Any,
        high: Any,
        sparsity: float,
        shape: tuple[int, int],
        dtype: DTypeLike | None = None,
        *,
        seed: Seed = None,
    ) -> SparseMatrix:
        """
        Random matrix whose sparsity does not exceed the target.

        Distinct coordinates are drawn without replacement, enough of them
        that the fraction of zero cells is at most sparsity. Values are
        uniform over [low, high]; draws that land on zero are redrawn.

        Raises:
            ValidationError: If sparsity is outside [0, 1], or [low, high]
                holds no non-zero value
        """
        nrows, ncols = check_shape(shape)
        dtype = resolve_dtype(dtype)
        if not 0.0 <= sparsity <= 1.0:
            raise ValidationError(f"sparsity: must be in [0, 1], got {sparsity}")
        if low == 0 and high == 0:
            raise ValidationError("range: [0, 0] contains no non-zero value")

        size = nrows * ncols
        count = min(size, math.ceil(round((1.0 - sparsity) * size, 9)))
        rng = np.random.default_rng(seed)
        flat = rng.choice(size, size=count, replace=False) if count else np.array([], dtype=np.intp)

        values = sample_uniform(low, high, count, dtype, rng)
        while count and np.any(values == 0):
            redraw = values == 0
            values[redraw] = sample_uniform(low, high, int(redraw.sum()), dtype, rng)

        entries = {
            divmod(int(idx), ncols): value
            for idx, value in zip(flat, values)
        }
        return cls._wrap(entries, (nrows, ncols), dtype)

    @classmethod
    def randomize(
        cls,
        sparsity: float,
        shape: tuple[int, int],
        dtype: DTypeLike | None = None,
        *,
        seed: Seed = None,
    ) -> SparseMatrix:
        """Random matrix with values in [0, 1]; see randomize_range()."""
        return cls.randomize_range(0, 1, sparsity, shape, dtype, seed=seed)

    @classmethod
    def ones(
        cls,
        sparsity: float,
        shape: tuple[int, int],
        dtype: DTypeLike | None = None,
        *,
        seed: Seed = None,
    ) -> SparseMatrix:
        """Random pattern of ones at the given sparsity."""
        return cls.randomize_range(1, 1, sparsity, shape, dtype, seed=seed)

    @classmethod
    def randomize_range_like(
        cls,
        low: Any,
        high: Any,
        other: SparseMatrix,
        *,
        seed: Seed = None,
    ) -> SparseMatrix:
        return cls.randomize_range(low, high, other.sparsity(), other.shape, other.dtype, seed=seed)

    @classmethod
    def random_like(cls, other: SparseMatrix, *, seed: Seed = None) -> SparseMatrix:
        return cls.randomize(other.sparsity(), other.shape, other.dtype, seed=seed)

    @classmethod
    def from_dense(cls, dense: DenseMatrix) -> SparseMatrix:
        """Sparse copy of a dense matrix, dropping its zero cells."""
        grid = dense.view()
        rows, cols = np.nonzero(grid)
        entries = {
            (i, j): grid[i, j]
            for i, j in zip(rows.tolist(), cols.tolist())
        }
        return cls._wrap(entries, dense.shape, dense.dtype)

    @classmethod
    def from_slices(
        cls,
        rows: Iterable[int],
        cols: Iterable[int],
        vals: Iterable[Any],
        shape: tuple[int, int],
        dtype: DTypeLike | None = None,
    ) -> SparseMatrix:
        """
        Build from three parallel sequences (row[k], col[k]) -> vals[k].

        Later duplicates of a coordinate overwrite earlier ones.

        Raises:
            DimensionMismatchError: If the three sequences differ in length
        """
        rows, cols, vals = list(rows), list(cols), list(vals)
        if not len(rows) == len(cols) == len(vals):
            raise DimensionMismatchError(
                f"from_slices: rows, cols and vals have lengths "
                f"{len(rows)}, {len(cols)}, {len(vals)}"
            )
        return cls(dict(zip(zip(rows, cols), vals)), shape, dtype)

    @classmethod
    def from_string(cls, text: str, dtype: DTypeLike | None = None) -> SparseMatrix:
        """
        Parse the sparse text format: a 'nrows ncols' header, then 'row col value' lines.

        Raises:
            MatrixParseError: On a malformed header, entry, or value
            MatrixCreationError: If an entry lies outside the header's shape
        """
        dtype = resolve_dtype(dtype) if dtype is not None else DEFAULT_DTYPE
        data, shape = io.parse_sparse(text, dtype)
        return cls(data, shape, dtype)

    @classmethod
    def from_file(cls, path: Any, dtype: DTypeLike | None = None) -> SparseMatrix:
        """
        Read a matrix written in the sparse text format.

        Raises:
            MatrixFileReadError: If the file cannot be read
        """
        return cls.from_string(io.read_text(path), dtype)

    @classmethod
    def from_scipy(cls, matrix: Any) -> SparseMatrix:
        """Convert any scipy.sparse matrix or array; duplicate entries are summed."""
        from scipy import sparse as sp

        coo = sp.coo_array(matrix)
        coo.sum_duplicates()
        dtype = infer_dtype(coo.data)
        values = coo.data.astype(dtype, copy=False)
        entries = {
            (i, j): value
            for i, j, value in zip(coo.row.tolist(), coo.col.tolist(), values)
            if value != 0
        }
        return cls._wrap(entries, (int(coo.shape[0]), int(coo.shape[1])), dtype)

    def copy(self) -> SparseMatrix:
        return SparseMatrix._wrap(dict(self._data), self.shape, self._dtype)

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
    def nnz(self) -> int:
        """Number of stored (non-zero) entries."""
        return len(self._data)

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    def get_zero_count(self) -> int:
        return self.size - self.nnz

    def sparsity(self) -> float:
        """Fraction of zero cells (0.0 for an empty matrix)."""
        if self.size == 0:
            return 0.0
        return 1.0 - self.nnz / self.size

    def get(self, i: int, j: int) -> Any | None:
        """Element at (i, j): zero if not stored, None if out of range."""
        if not (0 <= i < self._nrows and 0 <= j < self._ncols):
            return None
        return self._data.get((i, j), zero(self._dtype))

    def at(self, i: int, j: int) -> Any:
        """
        Element at (i, j).

        Raises:
            IndexOutOfBoundsError: If either index is out of range
        """
        check_index(i, j, self.shape)
        return self._data.get((i, j), zero(self._dtype))

    def items(self) -> Iterator[tuple[tuple[int, int], Any]]:
        """Stored ((row, col), value) pairs, in insertion order."""
        return iter(self._data.items())

    def _sorted_items(self) -> list[tuple[tuple[int, int], Any]]:
        return sorted(self._data.items(), key=lambda item: item[0])

    def to_dense(self) -> DenseMatrix:
        from pymatrices.dense.matrix import DenseMatrix
        return DenseMatrix.from_sparse(self)

    def to_scipy(self, format: str = 'csr') -> sp.sparray:
        """
        Convert to a scipy.sparse array.

        Args:
            format: Any scipy sparse format name ('coo', 'csr', 'csc', ...)
        """
        from scipy import sparse as sp

        keys = list(self._data)
        rows = np.array([i for i, _ in keys], dtype=np.intp)
        cols = np.array([j for _, j in keys], dtype=np.intp)
        values = np.array([self._data[key] for key in keys], dtype=self._dtype)
        coo = sp.coo_array((values, (rows, cols)), shape=self.shape)
        return coo.asformat(format)

    # ═══════════════════════════════════════════════════════════════════
    # Mutators
    # ═══════════════════════════════════════════════════════════════════

    def set(self, value: Any, idx: tuple[int, int]) -> None:
        """
        Store value at idx = (row, col). Setting zero removes the entry.

        Raises:
            IndexOutOfBoundsError: If idx is outside the matrix
        """
        i, j = idx
        check_index(i, j, self.shape)
        value = cast_scalar(value, self._dtype)
        if value == 0:
            self._data.pop((i, j), None)
        else:
            self._data[(i, j)] = value

    def insert(self, i: int, j: int, value: Any) -> None:
        self.set(value, (i, j))

    def reshape(self, nrows: int, ncols: int) -> None:
        """
        Reinterpret the shape, moving each entry to the same row-major flat index.

        Raises:
            DimensionMismatchError: If nrows * ncols != size
        """
        nrows, ncols = check_shape((nrows, ncols))
        if nrows * ncols != self.size:
            raise DimensionMismatchError(
                f"cannot reshape {self.shape} ({self.size} cells) to "
                f"{(nrows, ncols)} ({nrows * ncols} cells)",
                left=self.shape,
                right=(nrows, ncols),
            )
        old_cols = self._ncols
        self._data = {
            divmod(i * old_cols + j, ncols): value
            for (i, j), value in self._data.items()
        }
        self._nrows, self._ncols = nrows, ncols

    def transpose(self) -> None:
        """Transpose in place by swapping every key."""
        self._data = {(j, i): value for (i, j), value in self._data.items()}
        self._nrows, self._ncols = self._ncols, self._nrows

    def t(self) -> None:
        self.transpose()

    def transpose_new(self) -> SparseMatrix:
        result = self.copy()
        result.transpose()
        return result

    # ═══════════════════════════════════════════════════════════════════
    # Arithmetic
    # ═══════════════════════════════════════════════════════════════════

    def _combine(self, other: SparseMatrix, op: Operation) -> SparseMatrix:
        check_same_shape(self.shape, other.shape, op.value)
        dtype = result_dtype(self._dtype, other.dtype)
        entries = _arithmetic.combine(self._data, other._data, op, dtype)
        return SparseMatrix._wrap(entries, self.shape, dtype)

    def _combine_self(self, other: SparseMatrix, op: Operation) -> None:
        check_same_shape(self.shape, other.shape, f"{op.value}_self")
        if result_dtype(self._dtype, other.dtype) != self._dtype:
            raise ValidationError(
                f"{op.value}_self: {other.dtype} values cannot be stored in this "
                f"{self._dtype} matrix in place"
            )
        self._data = _arithmetic.combine(self._data, other._data, op, self._dtype)

    def add(self, other: SparseMatrix) -> SparseMatrix:
        """
        Elementwise sum.

        Raises:
            DimensionMismatchError: If the shapes differ
        """
        return self._combine(other, Operation.ADD)

    def sub(self, other: SparseMatrix) -> SparseMatrix:
        return self._combine(other, Operation.SUB)

    def mul(self, other: SparseMatrix) -> SparseMatrix:
        """Elementwise product, non-zero only where both operands store an entry."""
        return self._combine(other, Operation.MUL)

    def dot(self, other: SparseMatrix) -> SparseMatrix:
        """Alias of mul(): elementwise, not the matrix product."""
        return self.mul(other)

    def div(self, other: SparseMatrix) -> SparseMatrix:
        """
        Elementwise quotient over the stored entries of self.

        Raises:
            DimensionMismatchError: If the shapes differ
            DivideByZeroError: If a stored entry of self meets a zero in other
        """
        return self._combine(other, Operation.DIV)

    def add_self(self, other: SparseMatrix) -> None:
        """
        In-place elementwise sum.

        Raises:
            DimensionMismatchError: If the shapes differ
        """
        self._combine_self(other, Operation.ADD)

    def sub_self(self, other: SparseMatrix) -> None:
        self._combine_self(other, Operation.SUB)

    def mul_self(self, other: SparseMatrix) -> None:
        self._combine_self(other, Operation.MUL)

    def div_self(self, other: SparseMatrix) -> None:
        self._combine_self(other, Operation.DIV)

    def _broadcast(self, value: Any, op: Operation) -> dict[tuple[int, int], Any]:
        return _arithmetic.broadcast(self._data, cast_scalar(value, self._dtype), op, self._dtype)

    def add_val(self, value: Any) -> SparseMatrix:
        """Add value to every stored entry."""
        return SparseMatrix._wrap(self._broadcast(value, Operation.ADD), self.shape, self._dtype)

    def sub_val(self, value: Any) -> SparseMatrix:
        return SparseMatrix._wrap(self._broadcast(value, Operation.SUB), self.shape, self._dtype)

    def mul_val(self, value: Any) -> SparseMatrix:
        return SparseMatrix._wrap(self._broadcast(value, Operation.MUL), self.shape, self._dtype)

    def div_val(self, value: Any) -> SparseMatrix:
        """
        Divide every stored entry by value.

        Raises:
            DivideByZeroError: If value is zero
        """
        return SparseMatrix._wrap(self._broadcast(value, Operation.DIV), self.shape, self._dtype)

    def add_val_self(self, value: Any) -> None:
        self._data = self._broadcast(value, Operation.ADD)

    def sub_val_self(self, value: Any) -> None:
        self._data = self._broadcast(value, Operation.SUB)

    def mul_val_self(self, value: Any) -> None:
        self._data = self._broadcast(value, Operation.MUL)

    def div_val_self(self, value: Any) -> None:
        self._data = self._broadcast(value, Operation.DIV)

    def neg(self) -> SparseMatrix:
        entries = _arithmetic.map_values(self._data, np.negative, self._dtype)
        return SparseMatrix._wrap(entries, self.shape, self._dtype)

    def matmul_sparse(self, other: SparseMatrix) -> SparseMatrix:
        """
        Sparse-sparse matrix product self @ other.

        Two N x N operands use the inner-product merge; other shapes use
        the row-wise accumulator. Both visit only stored entries.

        Raises:
            MultiplicationDimensionError: If self.ncols != other.nrows
        """
        check_inner_dimensions(self.shape, other.shape)
        dtype = result_dtype(self._dtype, other.dtype)
        if self.shape == other.shape:
            entries = square_product(self._data, other._data, dtype)
        else:
            entries = general_product(self._data, other._data, other.ncols, dtype)
        return SparseMatrix._wrap(entries, (self._nrows, other.ncols), dtype)

    # ═══════════════════════════════════════════════════════════════════
    # Operators
    # ═══════════════════════════════════════════════════════════════════

    @staticmethod
    def _is_scalar(value: Any) -> bool:
        return np.isscalar(value) and not isinstance(value, (str, bytes))

    def __add__(self, other: Any) -> SparseMatrix:
        if isinstance(other, SparseMatrix):
            return self.add(other)
        if self._is_scalar(other):
            return self.add_val(other)
        return NotImplemented

    def __sub__(self, other: Any) -> SparseMatrix:
        if isinstance(other, SparseMatrix):
            return self.sub(other)
        if self._is_scalar(other):
            return self.sub_val(other)
        return NotImplemented

    def __mul__(self, other: Any) -> SparseMatrix:
        if isinstance(other, SparseMatrix):
            return self.mul(other)
        if self._is_scalar(other):
            return self.mul_val(other)
        return NotImplemented

    def __rmul__(self, other: Any) -> SparseMatrix:
        if self._is_scalar(other):
            return self.mul_val(other)
        return NotImplemented

    def __truediv__(self, other: Any) -> SparseMatrix:
        if isinstance(other, SparseMatrix):
            return self.div(other)
        if self._is_scalar(other):
            return self.div_val(other)
        return NotImplemented

    def __matmul__(self, other: Any) -> SparseMatrix:
        if isinstance(other, SparseMatrix):
            return self.matmul_sparse(other)
        return NotImplemented

    def __neg__(self) -> SparseMatrix:
        return self.neg()

    def __eq__(self, other: object) -> bool:
        """Equal shapes and equal values; the element dtype is not compared."""
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return self.shape == other.shape and self._data == other._data

    __hash__ = None

    # ═══════════════════════════════════════════════════════════════════
    # Floating-point functions (stored entries only)
    # ═══════════════════════════════════════════════════════════════════

    def _map_float(self, name: str, func: Callable[[np.ndarray], np.ndarray]) -> SparseMatrix:
        if is_integer(self._dtype):
            raise ValidationError(f"{name}: requires a floating element type, got {self._dtype}")
        entries = _arithmetic.map_values(self._data, func, self._dtype)
        return SparseMatrix._wrap(entries, self.shape, self._dtype)

    def log(self, base: float) -> SparseMatrix:
        return self._map_float('log', lambda x: np.log(x) / np.log(base))

    def ln(self) -> SparseMatrix:
        return self._map_float('ln', np.log)

    def sqrt(self) -> SparseMatrix:
        """Square root of every positive stored entry; negative entries are kept."""
        return self._map_float('sqrt', lambda x: np.where(x > 0, np.sqrt(np.abs(x)), x))

    def sin(self) -> SparseMatrix:
        return self._map_float('sin', np.sin)

    def cos(self) -> SparseMatrix:
        return self._map_float('cos', np.cos)

    def tan(self) -> SparseMatrix:
        return self._map_float('tan', np.tan)

    def sinh(self) -> SparseMatrix:
        return self._map_float('sinh', np.sinh)

    def cosh(self) -> SparseMatrix:
        return self._map_float('cosh', np.cosh)

    def tanh(self) -> SparseMatrix:
        return self._map_float('tanh', np.tanh)

    # ═══════════════════════════════════════════════════════════════════
    # Reductions (implicit zeros included)
    # ═══════════════════════════════════════════════════════════════════

    def _require_nonempty(self, name: str) -> None:
        if self.size == 0:
            raise ValidationError(f"{name}: matrix is empty")

    def max(self) -> Any:
        self._require_nonempty('max')
        best = max(self._data.values(), default=zero(self._dtype))
        if self.nnz < self.size and best < 0:
            return zero(self._dtype)
        return best

    def min(self) -> Any:
        self._require_nonempty('min')
        least = min(self._data.values(), default=zero(self._dtype))
        if self.nnz < self.size and least > 0:
            return zero(self._dtype)
        return least

    def avg(self) -> Any:
        """Mean over all cells, truncated toward zero for integer types."""
        self._require_nonempty('avg')
        if is_integer(self._dtype):
            total = sum(int(v) for v in self._data.values())
            quotient = abs(total) // self.size
            return self._dtype.type(quotient if total >= 0 else -quotient)
        return self._dtype.type(sum(float(v) for v in self._data.values()) / self.size)

    def mean(self) -> Any:
        return self.avg()

    def median(self) -> Any:
        """Exact median over all cells, without materializing the zeros."""
        self._require_nonempty('median')
        values = sorted(self._data.values())
        negatives = [v for v in values if v < 0]
        positives = [v for v in values if v > 0]
        zeros = self.get_zero_count()

        def kth(k: int) -> Any:
            if k < len(negatives):
                return negatives[k]
            if k < len(negatives) + zeros:
                return zero(self._dtype)
            return positives[k - len(negatives) - zeros]

        half = self.size // 2
        if self.size % 2 == 1:
            return kth(half)
        if is_integer(self._dtype):
            total = int(kth(half - 1)) + int(kth(half))
            quotient = abs(total) // 2
            return self._dtype.type(quotient if total >= 0 else -quotient)
        return self._dtype.type((float(kth(half - 1)) + float(kth(half))) / 2)

    # ═══════════════════════════════════════════════════════════════════
    # Predicates (stored entries, in row-major coordinate order)
    # ═══════════════════════════════════════════════════════════════════

    def all(self, pred: EntryPredicate) -> bool:
        """True if pred((row, col), value) holds for every stored entry."""
        return all(pred(idx, value) for idx, value in self._sorted_items())

    def any(self, pred: EntryPredicate) -> bool:
        return any(pred(idx, value) for idx, value in self._sorted_items())

    def count_where(self, pred: EntryPredicate) -> int:
        return sum(1 for idx, value in self._sorted_items() if pred(idx, value))

    def sum_where(self, pred: EntryPredicate) -> Any:
        matched = [value for idx, value in self._sorted_items() if pred(idx, value)]
        return np.array(matched, dtype=self._dtype).sum(dtype=self._dtype)

    def set_where(self, pred: EntryPredicate, value: Any) -> None:
        """Set every stored entry satisfying pred to value; zero removes them."""
        value = cast_scalar(value, self._dtype)
        matched = [idx for idx, stored in self._sorted_items() if pred(idx, stored)]
        for idx in matched:
            if value == 0:
                del self._data[idx]
            else:
                self._data[idx] = value

    def find(self, pred: EntryPredicate) -> Any | None:
        """Value of the first stored entry satisfying pred, or None."""
        for idx, value in self._sorted_items():
            if pred(idx, value):
                return value
        return None

    def position(self, pred: EntryPredicate) -> tuple[int, int] | None:
        """Coordinate of the first stored entry satisfying pred, or None."""
        for idx, value in self._sorted_items():
            if pred(idx, value):
                return idx
        return None

    # ═══════════════════════════════════════════════════════════════════
    # Display
    # ═══════════════════════════════════════════════════════════════════

    def print(self, decimals: int = 4) -> None:
        print(io.format_entries(self._data.items(), self._dtype, decimals))

    def __str__(self) -> str:
        return io.format_dense(self)

    def __repr__(self) -> str:
        return f"SparseMatrix(shape={self.shape}, nnz={self.nnz}, dtype={self._dtype})"
