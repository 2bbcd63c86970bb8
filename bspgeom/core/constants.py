"""Central numerical tolerances for the partitioning algebra.

Every tolerance-dependent decision goes through a PrecisionContext; this
module only holds the defaults those contexts are built from, so literals
are not scattered through the geometry code.
"""
from __future__ import annotations

# Default absolute tolerance for coordinate comparisons
DEFAULT_EPSILON: float = 1e-10

# BSP trees deeper than this are reported (un-simplified operation chains)
DEPTH_WARNING: int = 256

__all__ = [
    'DEFAULT_EPSILON',
    'DEPTH_WARNING',
]
