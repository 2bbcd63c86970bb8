"""Boolean algebra over BSP regions.

All operations are pure: operands are left untouched and the result is a
new region (which may share subtrees with the operands). Results are not
minimal; when ``config.simplify`` is set (the default) uniform subtrees are
collapsed after every operation so chained operations do not keep growing
the tree depth.
"""
from __future__ import annotations

import logging
from functools import reduce
from typing import Iterable, Optional

from . import bsp
from .bsp import LEAF_IN, LEAF_OUT, Leaf, Node
from .config import DEFAULT_CONFIG, GeometryConfig
from .errors import IncompatibleHyperplanes
from .logging_utils import get_logger
from .region import Region

logger = get_logger('bspgeom.region_factory')


def _union_rule(leaf: Leaf, other: Node, leaf_is_first: bool) -> Node:
    return LEAF_IN if leaf.inside else other


def _intersection_rule(leaf: Leaf, other: Node, leaf_is_first: bool) -> Node:
    return other if leaf.inside else LEAF_OUT


def _xor_rule(leaf: Leaf, other: Node, leaf_is_first: bool) -> Node:
    return bsp.complement(other) if leaf.inside else other


class RegionFactory:
    """Union, intersection, complement, difference and xor of regions."""

    def __init__(self, config: Optional[GeometryConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def _check(self, a: Region, b: Region):
        if type(a) is not type(b):
            raise IncompatibleHyperplanes(
                f'cannot combine {type(a).__name__} with {type(b).__name__}', a, b)

    def _finish(self, op: str, region: Region) -> Region:
        tree = region.tree
        if self.config.simplify:
            tree = bsp.simplify(tree)
            region = region.build_new(tree)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug('%s -> %d nodes', op, bsp.tree_size(tree))
        depth = bsp.tree_depth(tree)
        if depth > self.config.depth_warning:
            logger.warning('%s produced a tree of depth %d (warning threshold %d)',
                           op, depth, self.config.depth_warning)
        return region

    def _merge(self, op, a: Region, b: Region, rule) -> Region:
        self._check(a, b)
        return self._finish(op, a.build_new(bsp.merge(a.tree, b.tree, rule)))

    def union(self, a: Region, b: Region) -> Region:
        """Points inside ``a`` or inside ``b``."""
        return self._merge('union', a, b, _union_rule)

    def intersection(self, a: Region, b: Region) -> Region:
        """Points inside both ``a`` and ``b``."""
        return self._merge('intersection', a, b, _intersection_rule)

    def complement(self, a: Region) -> Region:
        """Same cuts, every leaf flag flipped."""
        return self._finish('complement', a.build_new(bsp.complement(a.tree)))

    def difference(self, a: Region, b: Region) -> Region:
        """``intersection(a, complement(b))``."""
        self._check(a, b)
        return self.intersection(a, self.complement(b))

    def xor(self, a: Region, b: Region) -> Region:
        """Symmetric difference, equal to ``union(difference(a, b), difference(b, a))``."""
        return self._merge('xor', a, b, _xor_rule)

    def simplify(self, a: Region) -> Region:
        return a.build_new(bsp.simplify(a.tree))

    def union_all(self, regions: Iterable[Region]) -> Region:
        return reduce(self.union, regions)

    def intersection_all(self, regions: Iterable[Region]) -> Region:
        return reduce(self.intersection, regions)

    def half_space(self, hyperplane) -> Region:
        """Region on the minus side of ``hyperplane``."""
        space = hyperplane.whole_space()
        return space.build_new(bsp.make_cut(hyperplane.whole_hyperplane(), LEAF_OUT, LEAF_IN))

    def build_convex(self, hyperplanes: Iterable) -> Region:
        """Intersection of the minus half-spaces of ``hyperplanes``.

        Redundant hyperplanes leave no cut in the result; contradictory ones
        give an empty region.
        """
        planes = list(hyperplanes)
        if not planes:
            raise ValueError('at least one hyperplane is required to build a convex region')
        return self.intersection_all(self.half_space(h) for h in planes)


__all__ = ['RegionFactory']
