"""
Block-size selection for the blocked multiplication kernels.

The tile edge is chosen per call from a range that grows with the
operands: small operands get small tiles so tiling never degenerates
into a single oversized block, large operands get tiles that keep three
working tiles inside cache.
"""

# (extent limit, (min block, max block)); the first tier whose limit
# exceeds both dimensions of either operand wins, None matches everything
BLOCK_SIZE_TIERS: tuple[tuple[int | None, tuple[int, int]], ...] = (
    (30, (2, 10)),
    (100, (10, 30)),
    (None, (30, 50)),
)


def _within(shape: tuple[int, int], limit: int | None) -> bool:
    return limit is None or (shape[0] < limit and shape[1] < limit)


def block_size_range(
    shape_a: tuple[int, int],
    shape_b: tuple[int, int],
) -> tuple[int, int]:
    """
    Candidate block-size range (inclusive) for a pair of operand shapes.
    
    Chosen by the smaller operand: a matrix with both dimensions under a
    tier's limit selects that tier.
    """
    for limit, bounds in BLOCK_SIZE_TIERS:
        if _within(shape_a, limit) or _within(shape_b, limit):
            return bounds
    # unreachable: the last tier has no limit
    return BLOCK_SIZE_TIERS[-1][1]


def select_block_size(
    shape_a: tuple[int, int],
    shape_b: tuple[int, int],
) -> int:
    """
    Pick the tile edge length for multiplying shape_a @ shape_b.
    
    Returns the largest candidate in block_size_range() that evenly
    divides A's columns, A's rows, or B's columns. When no candidate
    divides any of them, returns the range minimum; the result is
    therefore always inside the range.
    
    Args:
        shape_a: (M, N) of the left operand
        shape_b: (N, P) of the right operand
        
    Returns:
        Block size
    """
    low, high = block_size_range(shape_a, shape_b)
    a_rows, a_cols = shape_a
    b_cols = shape_b[1]
    
    for candidate in range(high, low - 1, -1):
        if a_cols % candidate == 0 or a_rows % candidate == 0 or b_cols % candidate == 0:
            return candidate
    return low


def has_exact_divisor(shape_a: tuple[int, int], shape_b: tuple[int, int]) -> bool:
    """True when select_block_size found a divisor rather than falling back."""
    block = select_block_size(shape_a, shape_b)
    return any(extent % block == 0 for extent in (shape_a[1], shape_a[0], shape_b[1]))
