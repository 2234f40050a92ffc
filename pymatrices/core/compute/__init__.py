"""
Shared compute infrastructure for PyMatrices.

Submodules:
    timing: Execution timing utilities
    tolerances: Tolerance tiers per element type
"""

from pymatrices.core.compute.timing import Timer, timed
from pymatrices.core.compute.tolerances import (
    ToleranceTier,
    INTEGER_EXACT,
    FLOAT32,
    FLOAT64,
    select_tolerance,
)

__all__ = [
    # Timing
    "Timer",
    "timed",
    # Tolerances
    "ToleranceTier",
    "INTEGER_EXACT",
    "FLOAT32",
    "FLOAT64",
    "select_tolerance",
]
