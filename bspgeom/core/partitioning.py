"""Dimension-generic partitioning contracts.

A Hyperplane splits its space into a plus and a minus half-space. A
SubHyperplane is a hyperplane restricted to a region of the hyperplane's
own (one lower dimensional) coordinate system. The BSP algebra in
``bsp``/``region``/``region_factory`` is written once against these
interfaces; ``oned`` and ``twod`` implement them.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum


class Location(Enum):
    """Position of a point relative to a region."""
    INSIDE = 'inside'
    OUTSIDE = 'outside'
    BOUNDARY = 'boundary'


class HyperplaneLocation(Enum):
    """Position of a point relative to a hyperplane."""
    PLUS = 1
    ON = 0
    MINUS = -1


class Side(Enum):
    """Position of a sub-hyperplane relative to a hyperplane."""
    PLUS = 'plus'
    MINUS = 'minus'
    BOTH = 'both'
    HYPER = 'hyper'


class Hyperplane(ABC):
    """Codimension-1 affine subset with an attached precision context."""

    def __init__(self, precision):
        self._precision = precision

    @property
    def precision(self):
        return self._precision

    @abstractmethod
    def offset(self, point) -> float:
        """Signed distance of ``point``: positive on the plus side."""

    def classify(self, point) -> HyperplaneLocation:
        sign = self._precision.sign(self.offset(point))
        if sign > 0:
            return HyperplaneLocation.PLUS
        if sign < 0:
            return HyperplaneLocation.MINUS
        return HyperplaneLocation.ON

    def contains(self, point) -> bool:
        return self.classify(point) is HyperplaneLocation.ON

    @abstractmethod
    def project(self, point):
        """Closest point of the hyperplane to ``point``."""

    @abstractmethod
    def reverse(self) -> 'Hyperplane':
        """Same point set with plus and minus sides swapped."""

    @abstractmethod
    def same_orientation_as(self, other: 'Hyperplane') -> bool:
        """True when the plus sides of the two hyperplanes point the same way."""

    @abstractmethod
    def same_as(self, other: 'Hyperplane') -> bool:
        """True when every point of one hyperplane is ON the other (orientation ignored)."""

    @abstractmethod
    def whole_hyperplane(self) -> 'SubHyperplane':
        """Sub-hyperplane covering the entire hyperplane."""

    @abstractmethod
    def whole_space(self):
        """Full region of the ambient space (same concrete region type)."""


class Embedding(ABC):
    """Mapping between a hyperplane's own coordinates and its ambient space."""

    @abstractmethod
    def to_sub_space(self, point):
        ...

    @abstractmethod
    def to_space(self, point):
        ...


class SplitSubHyperplane:
    """Result of splitting a sub-hyperplane by a hyperplane.

    ``plus``/``minus`` are the non-empty parts on each side, or None.
    Neither part means the sub-hyperplane lies on the splitting hyperplane.
    """

    __slots__ = ('plus', 'minus')

    def __init__(self, plus, minus):
        self.plus = plus
        self.minus = minus

    @property
    def side(self) -> Side:
        if self.plus is not None and self.minus is not None:
            return Side.BOTH
        if self.plus is not None:
            return Side.PLUS
        if self.minus is not None:
            return Side.MINUS
        return Side.HYPER

    def __repr__(self):
        return f'SplitSubHyperplane(side={self.side.name}, plus={self.plus!r}, minus={self.minus!r})'


class SubHyperplane(ABC):
    """A hyperplane restricted to a region of itself."""

    def __init__(self, hyperplane: Hyperplane, remaining_region=None):
        self._hyperplane = hyperplane
        self._remaining_region = remaining_region

    @property
    def hyperplane(self) -> Hyperplane:
        return self._hyperplane

    @property
    def remaining_region(self):
        """Embedded region, one dimension lower (None for 0-D sub-hyperplanes)."""
        return self._remaining_region

    def get_remaining_region(self):
        return self._remaining_region

    @property
    def precision(self):
        return self._hyperplane.precision

    @abstractmethod
    def is_empty(self) -> bool:
        ...

    @abstractmethod
    def is_full(self) -> bool:
        ...

    @property
    @abstractmethod
    def size(self) -> float:
        ...

    @abstractmethod
    def split(self, hyperplane: Hyperplane) -> SplitSubHyperplane:
        ...

    @abstractmethod
    def reverse(self) -> 'SubHyperplane':
        """Same point set on the reversed hyperplane."""

    def side(self, hyperplane: Hyperplane) -> Side:
        return self.split(hyperplane).side


__all__ = [
    'Location', 'HyperplaneLocation', 'Side',
    'Hyperplane', 'Embedding', 'SubHyperplane', 'SplitSubHyperplane',
]
