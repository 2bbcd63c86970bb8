"""One-dimensional partitioning: oriented points and interval sets."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from . import bsp
from .bsp import LEAF_IN, LEAF_OUT, Node, make_cut
from .errors import DegenerateGeometry
from .logging_utils import get_logger
from .partitioning import Hyperplane, Location, SplitSubHyperplane, SubHyperplane
from .precision import PrecisionContext
from .region import Region
from .region_factory import RegionFactory
from .vectors import Point1D, Vector1D

logger = get_logger('bspgeom.oned')

__all__ = ['OrientedPoint', 'SubOrientedPoint', 'Interval', 'IntervalsSet']


def _abscissa(value) -> float:
    if isinstance(value, (Point1D, Vector1D)):
        return value.x
    return float(value)


class OrientedPoint(Hyperplane):
    """Hyperplane of the real line.

    ``positive_facing`` points its plus side toward increasing values; the
    minus side (inside, for regions built from raw hyperplanes) is below it.
    """

    def __init__(self, location, positive_facing: bool, precision: PrecisionContext):
        super().__init__(precision)
        self._location = _abscissa(location)
        self._positive_facing = bool(positive_facing)

    @classmethod
    def from_point_and_direction(cls, point, direction, precision: PrecisionContext) -> 'OrientedPoint':
        d = _abscissa(direction)
        if precision.eq_zero(d) or math.isnan(d):
            logger.debug('rejecting zero direction %r', direction)
            raise DegenerateGeometry(f'oriented point direction must be non-zero, got {direction!r}')
        return cls(point, d > 0, precision)

    @classmethod
    def from_points(cls, point, toward, precision: PrecisionContext) -> 'OrientedPoint':
        """Oriented point at ``point`` whose plus side contains ``toward``."""
        return cls.from_point_and_direction(point, _abscissa(toward) - _abscissa(point), precision)

    @classmethod
    def create_positive_facing(cls, point, precision: PrecisionContext) -> 'OrientedPoint':
        return cls(point, True, precision)

    @classmethod
    def create_negative_facing(cls, point, precision: PrecisionContext) -> 'OrientedPoint':
        return cls(point, False, precision)

    @property
    def location(self) -> float:
        return self._location

    @property
    def point(self) -> Point1D:
        return Point1D(self._location)

    @property
    def positive_facing(self) -> bool:
        return self._positive_facing

    @property
    def direction(self) -> Vector1D:
        return Vector1D.ONE if self._positive_facing else Vector1D(-1.0)

    def offset(self, point) -> float:
        delta = _abscissa(point) - self._location
        return delta if self._positive_facing else -delta

    def project(self, point) -> Point1D:
        return self.point

    def reverse(self) -> 'OrientedPoint':
        return OrientedPoint(self._location, not self._positive_facing, self._precision)

    def same_orientation_as(self, other: 'OrientedPoint') -> bool:
        return self._positive_facing == other._positive_facing

    def same_as(self, other: 'OrientedPoint') -> bool:
        return self._precision.eq(self._location, other._location)

    def whole_hyperplane(self) -> 'SubOrientedPoint':
        return SubOrientedPoint(self)

    def whole_space(self) -> 'IntervalsSet':
        return IntervalsSet.full(self._precision)

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, OrientedPoint):
            return NotImplemented
        return (self._location == other._location
                and self._positive_facing == other._positive_facing
                and self._precision == other._precision)

    def __hash__(self):
        return hash((self._location, self._positive_facing, self._precision))

    def __repr__(self):
        facing = '+' if self._positive_facing else '-'
        return f'OrientedPoint({self._location}, facing={facing})'


class SubOrientedPoint(SubHyperplane):
    """Sub-hyperplane of the real line; a single point with no embedded region."""

    def __init__(self, hyperplane: OrientedPoint):
        super().__init__(hyperplane, None)

    def is_empty(self) -> bool:
        return False

    def is_full(self) -> bool:
        return True

    @property
    def size(self) -> float:
        return 0.0

    def split(self, hyperplane) -> SplitSubHyperplane:
        sign = self.precision.sign(hyperplane.offset(self._hyperplane.location))
        if sign > 0:
            return SplitSubHyperplane(self, None)
        if sign < 0:
            return SplitSubHyperplane(None, self)
        return SplitSubHyperplane(None, None)

    def reverse(self) -> 'SubOrientedPoint':
        return SubOrientedPoint(self._hyperplane.reverse())

    def __repr__(self):
        return f'SubOrientedPoint({self._hyperplane!r})'


@dataclass(frozen=True)
class Interval:
    """Closed interval, bounds possibly infinite; ``lower == upper`` is a single point."""
    lower: float
    upper: float
    precision: PrecisionContext = field(default_factory=PrecisionContext, compare=False, repr=False)

    @property
    def size(self) -> float:
        return self.upper - self.lower

    @property
    def barycenter(self) -> Point1D:
        if math.isinf(self.lower) or math.isinf(self.upper):
            return Point1D.NaN
        return Point1D(0.5 * (self.lower + self.upper))

    def is_infinite(self) -> bool:
        return math.isinf(self.lower) or math.isinf(self.upper)

    def check_point(self, point) -> Location:
        x = _abscissa(point)
        prec = self.precision
        if prec.lt(x, self.lower) or prec.gt(x, self.upper):
            return Location.OUTSIDE
        if prec.gt(x, self.lower) and prec.lt(x, self.upper):
            return Location.INSIDE
        return Location.BOUNDARY


class IntervalsSet(Region):
    """Subset of the real line as a union of intervals."""

    def build_new(self, tree: Node) -> 'IntervalsSet':
        return IntervalsSet(tree, self._precision)

    @classmethod
    def from_interval(cls, lower, upper, precision: PrecisionContext) -> 'IntervalsSet':
        """``[lower, upper]``; either bound may be infinite."""
        lo = _abscissa(lower)
        hi = _abscissa(upper)
        if math.isnan(lo) or math.isnan(hi):
            raise DegenerateGeometry(f'interval bounds must not be NaN: [{lower!r}, {upper!r}]')
        if precision.gt(lo, hi):
            raise DegenerateGeometry(f'interval lower bound {lo} is above upper bound {hi}')
        return cls(cls._build_tree(lo, hi, precision), precision)

    @classmethod
    def from_intervals(cls, bounds: Iterable[Tuple[float, float]], precision: PrecisionContext) -> 'IntervalsSet':
        factory = RegionFactory()
        result = cls.empty(precision)
        for lo, hi in bounds:
            result = factory.union(result, cls.from_interval(lo, hi, precision))
        return result

    @staticmethod
    def _build_tree(lower: float, upper: float, precision: PrecisionContext) -> Node:
        if math.isinf(lower) and lower < 0:
            if math.isinf(upper) and upper > 0:
                return LEAF_IN
            upper_cut = OrientedPoint(upper, True, precision).whole_hyperplane()
            return make_cut(upper_cut, LEAF_OUT, LEAF_IN)
        lower_cut = OrientedPoint(lower, False, precision).whole_hyperplane()
        if math.isinf(upper) and upper > 0:
            return make_cut(lower_cut, LEAF_OUT, LEAF_IN)
        upper_cut = OrientedPoint(upper, True, precision).whole_hyperplane()
        return make_cut(upper_cut, LEAF_OUT, make_cut(lower_cut, LEAF_OUT, LEAF_IN))

    def _to_point(self, point):
        return _abscissa(point)

    def _grouped_locations(self) -> Tuple[List[float], Dict[float, int]]:
        """Cut locations grouped by tolerance; returns representatives and a location->group map."""
        locations = sorted({c.hyperplane.location for c in bsp.iter_cuts(self._tree)})
        groups: List[List[float]] = []
        for loc in locations:
            if groups and self._precision.eq(groups[-1][-1], loc):
                groups[-1].append(loc)
            else:
                groups.append([loc])
        index = {loc: i for i, g in enumerate(groups) for loc in g}
        return [g[len(g) // 2] for g in groups], index

    def _gap_inside(self, gap: int, index: Dict[float, int]) -> bool:
        # gap k lies between group k-1 and group k
        node = self._tree
        while isinstance(node, bsp.Cut):
            hp = node.sub.hyperplane
            above = index[hp.location] < gap
            node = node.plus if above == hp.positive_facing else node.minus
        return node.inside

    def as_intervals(self) -> Tuple[Interval, ...]:
        """Maximal intervals of the set, in increasing order."""
        reps, index = self._grouped_locations()
        if not reps:
            inside = bool(self._tree.inside)
            return (Interval(-math.inf, math.inf, self._precision),) if inside else ()
        flags = [self._gap_inside(g, index) for g in range(len(reps) + 1)]
        intervals: List[Interval] = []
        lower = None
        for g, inside in enumerate(flags):
            if inside and lower is None:
                lower = -math.inf if g == 0 else reps[g - 1]
            if inside and (g == len(reps) or not flags[g + 1]):
                upper = math.inf if g == len(reps) else reps[g]
                intervals.append(Interval(lower, upper, self._precision))
                lower = None
            elif not inside and 0 < g < len(reps) + 1:
                # isolated point between two outside gaps
                rep = reps[g - 1]
                before = flags[g - 1]
                if not before and self.check_point(rep) is not Location.OUTSIDE:
                    intervals.append(Interval(rep, rep, self._precision))
        return tuple(intervals)

    def boundary_points(self) -> Tuple[Point1D, ...]:
        points = []
        for iv in self.as_intervals():
            for bound in (iv.lower, iv.upper):
                if math.isfinite(bound) and (not points or points[-1].x != bound):
                    points.append(Point1D(bound))
        return tuple(points)

    @property
    def inf(self) -> float:
        intervals = self.as_intervals()
        return intervals[0].lower if intervals else math.inf

    @property
    def sup(self) -> float:
        intervals = self.as_intervals()
        return intervals[-1].upper if intervals else -math.inf

    @property
    def size(self) -> float:
        return float(sum(iv.size for iv in self.as_intervals()))

    @property
    def barycenter(self) -> Point1D:
        intervals = self.as_intervals()
        total = sum(iv.size for iv in intervals)
        if not intervals or math.isinf(total):
            return Point1D.NaN
        if total == 0.0:
            return Point1D(sum(iv.lower for iv in intervals) / len(intervals))
        return Point1D(sum(iv.size * iv.barycenter.x for iv in intervals) / total)

    def __repr__(self):
        parts = ', '.join(f'[{iv.lower}, {iv.upper}]' for iv in self.as_intervals())
        return f'IntervalsSet({parts or "empty"})'
