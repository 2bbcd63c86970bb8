"""Region base class: a BSP tree plus the precision context it was built with."""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from typing import Iterable, List, Tuple

from . import bsp
from .bsp import LEAF_IN, LEAF_OUT, Leaf, Node
from .errors import IncompatibleHyperplanes
from .partitioning import Location, SubHyperplane


class Region(ABC):
    """A set of points described by the ``inside`` leaves of a BSP tree.

    Sign convention for trees built from raw hyperplanes: the plus side of a
    hyperplane is outside, the minus side is inside. Regions never change
    after construction; every operation returns a new region.
    """

    def __init__(self, tree: Node, precision):
        self._tree = tree
        self._precision = precision

    @property
    def tree(self) -> Node:
        return self._tree

    @property
    def precision(self):
        return self._precision

    @abstractmethod
    def build_new(self, tree: Node) -> 'Region':
        """Region of the same concrete type and precision around ``tree``."""

    @classmethod
    def full(cls, precision) -> 'Region':
        return cls(LEAF_IN, precision)

    @classmethod
    def empty(cls, precision) -> 'Region':
        return cls(LEAF_OUT, precision)

    @classmethod
    def from_hyperplanes(cls, hyperplanes: Iterable) -> 'Region':
        """Convex region: intersection of the minus half-spaces of ``hyperplanes``."""
        from .region_factory import RegionFactory
        region = RegionFactory().build_convex(hyperplanes)
        if not isinstance(region, cls):
            raise IncompatibleHyperplanes(
                f'hyperplanes build a {type(region).__name__}, not a {cls.__name__}', cls, region)
        return region

    def _to_point(self, point):
        return point

    def check_point(self, point) -> Location:
        """INSIDE, OUTSIDE or BOUNDARY, decided with the region's precision context."""
        return bsp.classify_point(self._tree, self._to_point(point))

    def contains(self, point) -> bool:
        return self.check_point(point) is not Location.OUTSIDE

    def is_empty(self) -> bool:
        return not bsp.fold(self._tree, lambda leaf: leaf.inside, lambda c, p, m: p or m)

    def is_full(self) -> bool:
        return bsp.fold(self._tree, lambda leaf: leaf.inside, lambda c, p, m: p and m)

    @cached_property
    def _facets(self) -> Tuple[Tuple[SubHyperplane, bool], ...]:
        facets: List[Tuple[SubHyperplane, bool]] = []
        for node in bsp.iter_cuts(self._tree):
            facets.extend(bsp.boundary_facets(node))
        return tuple(facets)

    def boundary(self) -> Tuple[SubHyperplane, ...]:
        """Boundary facets, each oriented so the region lies on its minus side."""
        return tuple(f.reverse() if inside_on_plus else f for f, inside_on_plus in self._facets)

    @property
    def boundary_size(self) -> float:
        return float(sum(f.size for f, _ in self._facets))

    @property
    @abstractmethod
    def size(self) -> float:
        ...

    @property
    @abstractmethod
    def barycenter(self):
        ...

    @property
    def depth(self) -> int:
        return bsp.tree_depth(self._tree)

    # Convenience wrappers over the default factory

    def complement(self) -> 'Region':
        from .region_factory import RegionFactory
        return RegionFactory().complement(self)

    def union(self, other: 'Region') -> 'Region':
        from .region_factory import RegionFactory
        return RegionFactory().union(self, other)

    def intersection(self, other: 'Region') -> 'Region':
        from .region_factory import RegionFactory
        return RegionFactory().intersection(self, other)

    def difference(self, other: 'Region') -> 'Region':
        from .region_factory import RegionFactory
        return RegionFactory().difference(self, other)

    def xor(self, other: 'Region') -> 'Region':
        from .region_factory import RegionFactory
        return RegionFactory().xor(self, other)

    def __repr__(self):
        if isinstance(self._tree, Leaf):
            state = 'full' if self._tree.inside else 'empty'
        else:
            state = f'{bsp.tree_size(self._tree)} nodes'
        return f'{type(self).__name__}({state}, {self._precision!r})'


__all__ = ['Region']
