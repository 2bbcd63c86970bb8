"""Compensated arithmetic helpers.

Coordinates of points built from near-parallel or near-coincident lines are
sensitive to cancellation, so linear combinations are evaluated with
error-free products and an exactly rounded sum.
"""
from __future__ import annotations

import math

# 2**27 + 1, Veltkamp splitter for IEEE doubles
_SPLITTER = 134217729.0


def _split(a):
    c = _SPLITTER * a
    hi = c - (c - a)
    return hi, a - hi


def two_product(a, b):
    """Return (p, e) with p = fl(a*b) and a*b == p + e exactly (finite inputs)."""
    p = a * b
    if not math.isfinite(p):
        return p, 0.0
    a_hi, a_lo = _split(a)
    b_hi, b_lo = _split(b)
    e = a_lo * b_lo - (((p - a_hi * b_hi) - a_lo * b_hi) - a_hi * b_lo)
    return p, e


def linear_combination(*terms):
    """Compute a1*b1 + a2*b2 + ... with compensated accuracy.

    Arguments are given flat: ``linear_combination(a1, b1, a2, b2, ...)``.
    Non-finite inputs fall back to plain evaluation so infinities and NaN
    propagate the same way ordinary arithmetic would.
    """
    if len(terms) % 2:
        raise ValueError('linear_combination expects an even number of arguments')
    parts = []
    naive = 0.0
    for a, b in zip(terms[0::2], terms[1::2]):
        a = float(a); b = float(b)
        p, e = two_product(a, b)
        naive += p
        parts.append(p); parts.append(e)
    if not math.isfinite(naive):
        return naive
    return math.fsum(parts)


__all__ = ['two_product', 'linear_combination']
