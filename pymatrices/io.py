"""
Text parsing and formatting for matrices.

Dense text format:
    one row per line, elements separated by whitespace

        1 2 3
        4 5 6

Sparse text format:
    first line holds the shape, every further line one stored entry

        3 3
        0 1 2.0
        2 2 8.0

Parsing returns plain buffers; the matrix classes own construction.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable
import numpy as np

from pymatrices.core.elements import is_integer, parse_element
from pymatrices.core.exceptions import MatrixFileReadError, MatrixParseError
from pymatrices.core.protocols import MatrixLike


# Matrices larger than this in either dimension get a '...' marker
LARGE_MATRIX_EXTENT = 10


def read_text(path: str | Path) -> str:
    """
    Read a matrix file.
    
    Raises:
        MatrixFileReadError: If the file cannot be read
    """
    try:
        return Path(path).read_text()
    except OSError as e:
        raise MatrixFileReadError(
            f"could not read file from path: {path} ({e.strerror or e})",
            path=str(path),
        ) from e


def parse_dense(text: str, dtype: np.dtype) -> tuple[list[Any], tuple[int, int]]:
    """
    Parse dense text into a row-major buffer and its shape.
    
    Raises:
        MatrixParseError: On empty input, ragged rows, or bad tokens
    """
    lines = [line for line in text.strip().splitlines() if line.strip()]
    if not lines:
        raise MatrixParseError("no rows found in dense matrix text")
    
    buffer: list[Any] = []
    ncols = len(lines[0].split())
    for lineno, line in enumerate(lines, start=1):
        tokens = line.split()
        if len(tokens) != ncols:
            raise MatrixParseError(
                f"row {lineno} has {len(tokens)} elements, expected {ncols}",
                line=lineno,
            )
        buffer.extend(parse_element(token, dtype, line=lineno) for token in tokens)
    
    return buffer, (len(lines), ncols)


def parse_sparse(
    text: str,
    dtype: np.dtype,
) -> tuple[dict[tuple[int, int], Any], tuple[int, int]]:
    """
    Parse sparse text into a coordinate map and its shape.
    
    Raises:
        MatrixParseError: On a missing header, malformed entries, or bad tokens
    """
    lines = [line for line in text.strip().splitlines() if line.strip()]
    if not lines:
        raise MatrixParseError("missing 'nrows ncols' header in sparse matrix text")
    
    header = lines[0].split()
    if len(header) != 2:
        raise MatrixParseError(
            f"header must be 'nrows ncols', got {lines[0]!r}", line=1
        )
    shape = (_parse_index(header[0], 1), _parse_index(header[1], 1))
    
    data: dict[tuple[int, int], Any] = {}
    for lineno, line in enumerate(lines[1:], start=2):
        tokens = line.split()
        if len(tokens) != 3:
            raise MatrixParseError(
                f"entry must be 'row col value', got {line!r}", line=lineno
            )
        i = _parse_index(tokens[0], lineno)
        j = _parse_index(tokens[1], lineno)
        data[(i, j)] = parse_element(tokens[2], dtype, line=lineno)
    
    return data, shape


def _parse_index(token: str, line: int) -> int:
    try:
        value = int(token)
    except ValueError as e:
        raise MatrixParseError(f"cannot parse index {token!r} on line {line}", line=line) from e
    if value < 0:
        raise MatrixParseError(f"negative index {value} on line {line}", line=line)
    return value


def format_element(value: Any, dtype: np.dtype, decimals: int) -> str:
    if is_integer(dtype):
        return str(int(value))
    return f"{float(value):.{decimals}f}"


def format_dense(matrix: MatrixLike, decimals: int = 4) -> str:
    """
    Render a matrix as bracketed rows followed by its dtype.
    
    Example:
        [1.00 2.00
         3.00 4.00], dtype=float64
    """
    nrows, ncols = matrix.shape
    rows = []
    for i in range(nrows):
        rows.append(" ".join(
            format_element(matrix.get(i, j), matrix.dtype, decimals)
            for j in range(ncols)
        ))
    
    marker = "..." if nrows > LARGE_MATRIX_EXTENT or ncols > LARGE_MATRIX_EXTENT else ""
    return f"[{marker}" + "\n ".join(rows) + f"], dtype={matrix.dtype}"


def format_entries(
    entries: Iterable[tuple[tuple[int, int], Any]],
    dtype: np.dtype,
    decimals: int = 4,
) -> str:
    """Render stored sparse entries as 'i j: value' lines in coordinate order."""
    return "\n".join(
        f"{i} {j}: {format_element(value, dtype, decimals)}"
        for (i, j), value in sorted(entries)
    )
