"""Tolerance-based comparison of floating point values.

All geometric predicates (point classification, parallelism, emptiness of
intervals) go through a PrecisionContext rather than raw ``==``/``<``.

Equality within epsilon is NOT transitive: with epsilon 1, ``eq(0, 0.8)``
and ``eq(0.8, 1.6)`` hold while ``eq(0, 1.6)`` does not. Callers that group
values (for example sorting cut locations) accept that risk; nothing here
tries to repair it.
"""
from __future__ import annotations

import math
from enum import IntEnum

from .constants import DEFAULT_EPSILON
from .errors import InvalidConfiguration


class Ordering(IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


class PrecisionContext:
    """Absolute-epsilon comparison policy.

    ``compare(a, b)`` is EQUAL whenever ``|a - b| <= epsilon``. Infinities of
    the same sign are equal to each other; NaN is equal to NaN and greater
    than every other value so orderings stay total.
    """

    __slots__ = ('_epsilon',)

    def __init__(self, epsilon: float = DEFAULT_EPSILON):
        try:
            eps = float(epsilon)
        except (TypeError, ValueError) as exc:
            raise InvalidConfiguration(f'epsilon must be a number, got {epsilon!r}') from exc
        if not math.isfinite(eps) or eps < 0.0:
            raise InvalidConfiguration(f'epsilon must be finite and >= 0, got {epsilon!r}')
        self._epsilon = eps

    @property
    def epsilon(self) -> float:
        return self._epsilon

    def compare(self, a: float, b: float) -> Ordering:
        a_nan = math.isnan(a)
        b_nan = math.isnan(b)
        if a_nan or b_nan:
            if a_nan and b_nan:
                return Ordering.EQUAL
            return Ordering.GREATER if a_nan else Ordering.LESS
        if a == b:
            # covers equal infinities, which would give nan below
            return Ordering.EQUAL
        if abs(a - b) <= self._epsilon:
            return Ordering.EQUAL
        return Ordering.LESS if a < b else Ordering.GREATER

    def eq(self, a: float, b: float) -> bool:
        return self.compare(a, b) == Ordering.EQUAL

    def eq_zero(self, a: float) -> bool:
        return self.compare(a, 0.0) == Ordering.EQUAL

    def lt(self, a: float, b: float) -> bool:
        return self.compare(a, b) == Ordering.LESS

    def lte(self, a: float, b: float) -> bool:
        return self.compare(a, b) != Ordering.GREATER

    def gt(self, a: float, b: float) -> bool:
        return self.compare(a, b) == Ordering.GREATER

    def gte(self, a: float, b: float) -> bool:
        return self.compare(a, b) != Ordering.LESS

    def sign(self, a: float) -> int:
        """Return -1, 0 or 1 according to the comparison of ``a`` with zero."""
        return int(self.compare(a, 0.0))

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, PrecisionContext):
            return NotImplemented
        return self._epsilon == other._epsilon

    def __hash__(self):
        return hash((PrecisionContext, self._epsilon))

    def __repr__(self):
        return f'PrecisionContext(epsilon={self._epsilon!r})'


__all__ = ['Ordering', 'PrecisionContext']
