"""Exceptions raised by the geometry package.

Construction-time problems raise immediately; queries that have no answer
(no intersection, empty boundary) return None or an empty tuple instead.
"""
from __future__ import annotations


class GeometryError(Exception):
    """Base class for all bspgeom errors."""


class InvalidConfiguration(GeometryError, ValueError):
    """A tolerance or configuration value is negative, non-finite or unknown."""


class DegenerateGeometry(GeometryError, ValueError):
    """Inputs cannot define a direction or normal within tolerance."""


class IncompatibleHyperplanes(GeometryError, ValueError):
    """Operands of a composition do not live on the same hyperplane / space."""

    def __init__(self, message: str, first=None, second=None):
        super().__init__(message)
        self.first = first
        self.second = second


__all__ = [
    'GeometryError',
    'InvalidConfiguration',
    'DegenerateGeometry',
    'IncompatibleHyperplanes',
]
