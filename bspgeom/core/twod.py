"""Two-dimensional partitioning: oriented lines, sub-lines, segments and polygon sets.

A Line carries a unit direction; its plus side is on the right of the
direction and its minus side (inside, for regions built from lines) on the
left. So a polygon whose vertices run counter-clockwise has its interior on
the minus side of every edge line.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from functools import cached_property
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .bsp import LEAF_OUT, Node, make_cut, split as split_tree
from .errors import DegenerateGeometry, IncompatibleHyperplanes
from .logging_utils import get_logger
from .numeric import linear_combination
from .oned import IntervalsSet, OrientedPoint
from .partitioning import Embedding, Hyperplane, Location, SplitSubHyperplane, SubHyperplane
from .precision import PrecisionContext
from .region import Region
from .region_factory import RegionFactory
from .vectors import Point1D, Point2D, Vector2D

logger = get_logger('bspgeom.twod')

__all__ = ['Line', 'Segment', 'SubLine', 'PolygonsSet', 'intersection']


def _as_point(value) -> Point2D:
    if isinstance(value, Point2D):
        return value
    return Point2D.of(value)


class Line(Hyperplane, Embedding):
    """Oriented line in the plane.

    Stored as a unit ``direction`` and the ``origin`` point closest to (0, 0),
    so the 1-D coordinate of a point along the line is ``direction . point``.
    """

    def __init__(self, origin: Point2D, direction: Vector2D, precision: PrecisionContext):
        super().__init__(precision)
        d = direction.normalize()
        o = _as_point(origin)
        t = d.dot(o.as_vector())
        self._direction = d
        self._origin = Point2D.linear_combination(1.0, o, -t, d)

    @classmethod
    def from_points(cls, p1, p2, precision: PrecisionContext) -> 'Line':
        """Line through ``p1`` and ``p2``, directed from ``p1`` to ``p2``."""
        p1 = _as_point(p1); p2 = _as_point(p2)
        v = p1.vector_to(p2)
        if precision.eq_zero(v.norm()) or v.is_nan():
            logger.debug('rejecting line through coincident points %r %r', p1, p2)
            raise DegenerateGeometry(f'cannot build a line through coincident points {p1!r} and {p2!r}')
        return cls(p1, v, precision)

    @classmethod
    def from_point_and_direction(cls, point, direction, precision: PrecisionContext) -> 'Line':
        d = direction if isinstance(direction, Vector2D) else Vector2D.of(direction)
        if precision.eq_zero(d.norm()) or d.is_nan():
            raise DegenerateGeometry(f'line direction must be non-zero, got {d!r}')
        return cls(_as_point(point), d, precision)

    @classmethod
    def from_point_and_angle(cls, point, angle: float, precision: PrecisionContext) -> 'Line':
        return cls(_as_point(point), Vector2D.from_angle(angle), precision)

    @property
    def origin(self) -> Point2D:
        return self._origin

    @property
    def direction(self) -> Vector2D:
        return self._direction

    @property
    def normal(self) -> Vector2D:
        """Unit normal pointing to the plus (right-hand) side."""
        return Vector2D(self._direction.y, -self._direction.x)

    @property
    def angle(self) -> float:
        """Direction angle in ``[0, 2*pi)``."""
        a = math.atan2(self._direction.y, self._direction.x)
        return a + 2.0 * math.pi if a < 0 else a

    @property
    def origin_offset(self) -> float:
        """Offset of the point (0, 0) relative to the line."""
        return self.offset(Point2D.ZERO)

    def offset(self, point) -> float:
        if isinstance(point, Line):
            return self.offset(point.origin)
        p = _as_point(point)
        n = self.normal
        return linear_combination(n.x, p.x - self._origin.x, n.y, p.y - self._origin.y)

    def offsets(self, points) -> np.ndarray:
        """Vectorised offsets of an (N, 2) array of points."""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        n = self.normal
        return (pts[:, 0] - self._origin.x) * n.x + (pts[:, 1] - self._origin.y) * n.y

    def classify_points(self, points) -> np.ndarray:
        """Vectorised ``classify``: +1 plus side, -1 minus side, 0 on the line."""
        off = self.offsets(points)
        eps = self._precision.epsilon
        out = np.zeros(off.shape, dtype=np.int8)
        out[off > eps] = 1
        out[off < -eps] = -1
        # NaN compares above everything, as in PrecisionContext.compare
        out[np.isnan(off)] = 1
        return out

    def distance(self, point) -> float:
        return abs(self.offset(point))

    def abscissa(self, point) -> float:
        p = _as_point(point)
        return linear_combination(self._direction.x, p.x, self._direction.y, p.y)

    def to_sub_space(self, point) -> Point1D:
        return Point1D(self.abscissa(point))

    def point_at(self, abscissa: float, offset: float = 0.0) -> Point2D:
        """Point at ``abscissa`` along the line, shifted by ``offset`` toward the plus side."""
        t = float(abscissa)
        if math.isinf(t):
            # keep the origin coordinate on axes the direction does not move along
            def coord(o, d):
                return o if d == 0.0 else math.copysign(math.inf, d * t)
            return Point2D(coord(self._origin.x, self._direction.x), coord(self._origin.y, self._direction.y))
        n = self.normal
        return Point2D(linear_combination(1.0, self._origin.x, t, self._direction.x, offset, n.x),
                       linear_combination(1.0, self._origin.y, t, self._direction.y, offset, n.y))

    def to_space(self, point) -> Point2D:
        t = point.x if isinstance(point, Point1D) else float(point)
        return self.point_at(t)

    def project(self, point) -> Point2D:
        return self.point_at(self.abscissa(point))

    def reverse(self) -> 'Line':
        return Line(self._origin, self._direction.negate(), self._precision)

    def is_parallel(self, other: 'Line') -> bool:
        return self._precision.eq_zero(self._direction.cross(other._direction))

    def same_orientation_as(self, other: 'Line') -> bool:
        return self._direction.dot(other._direction) >= 0.0

    def same_as(self, other: 'Line') -> bool:
        return (self.is_parallel(other)
                and self.contains(other._origin)
                and other.contains(self._origin))

    def intersection(self, other: 'Line') -> Optional[Point2D]:
        """Crossing point of the two full lines, or None when they are parallel."""
        if self.is_parallel(other):
            return None
        n1 = self.normal; n2 = other.normal
        k1 = n1.dot(self._origin.as_vector())
        k2 = n2.dot(other._origin.as_vector())
        det = n1.cross(n2)
        x = linear_combination(k1, n2.y, -k2, n1.y) / det
        y = linear_combination(k2, n1.x, -k1, n2.x) / det
        return Point2D(x, y)

    def whole_hyperplane(self) -> 'SubLine':
        return SubLine(self, IntervalsSet.full(self._precision))

    def whole_space(self) -> 'PolygonsSet':
        return PolygonsSet.full(self._precision)

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, Line):
            return NotImplemented
        return (self._origin == other._origin and self._direction == other._direction
                and self._precision == other._precision)

    def __hash__(self):
        return hash((self._origin, self._direction, self._precision))

    def __repr__(self):
        return f'Line(origin={self._origin!r}, direction={self._direction!r})'


@dataclass(frozen=True)
class Segment:
    """Piece of a line between two points; either end may be at infinity."""
    start: Point2D
    end: Point2D
    line: Line

    @classmethod
    def of(cls, start, end, precision: PrecisionContext) -> 'Segment':
        start = _as_point(start); end = _as_point(end)
        return cls(start, end, Line.from_points(start, end, precision))

    @property
    def size(self) -> float:
        if self.is_infinite():
            return math.inf
        return self.start.distance(self.end)

    def is_infinite(self) -> bool:
        return self.start.is_infinite() or self.end.is_infinite()

    def to_array(self) -> np.ndarray:
        return np.array([[self.start.x, self.start.y], [self.end.x, self.end.y]], dtype=np.float64)

    def intersection(self, other: 'Segment', strict: bool) -> Optional[Point2D]:
        return SubLine.from_segment(self).intersection(SubLine.from_segment(other), strict)


class SubLine(SubHyperplane):
    """A line restricted to an IntervalsSet of its abscissae."""

    def __init__(self, line: Line, remaining_region: IntervalsSet):
        super().__init__(line, remaining_region)

    @classmethod
    def from_points(cls, start, end, precision: PrecisionContext) -> 'SubLine':
        """Bounded sub-line from ``start`` to ``end``."""
        line = Line.from_points(start, end, precision)
        return cls(line, IntervalsSet.from_interval(line.abscissa(start), line.abscissa(end), precision))

    @classmethod
    def from_segment(cls, segment: Segment) -> 'SubLine':
        line = segment.line
        a = line.abscissa(segment.start)
        b = line.abscissa(segment.end)
        return cls(line, IntervalsSet.from_interval(min(a, b), max(a, b), line.precision))

    @property
    def line(self) -> Line:
        return self._hyperplane

    def is_empty(self) -> bool:
        return self._remaining_region.is_empty()

    def is_full(self) -> bool:
        return self._remaining_region.is_full()

    @property
    def size(self) -> float:
        return self._remaining_region.size

    @cached_property
    def segments(self) -> Tuple[Segment, ...]:
        line = self._hyperplane
        return tuple(Segment(line.point_at(iv.lower), line.point_at(iv.upper), line)
                     for iv in self._remaining_region.as_intervals())

    def get_segments(self) -> Tuple[Segment, ...]:
        """Maximal segments of the sub-line, computed on first use and reusable."""
        return self.segments

    def reverse(self) -> 'SubLine':
        line = self._hyperplane
        return SubLine(line.reverse(), self._reparametrized(line.reverse(), line, self._remaining_region))

    def split(self, hyperplane: Line) -> SplitSubHyperplane:
        line = self._hyperplane
        prec = line.precision
        crossing = line.intersection(hyperplane)
        if crossing is None:
            sign = prec.sign(hyperplane.offset(line))
            if sign < 0:
                return SplitSubHyperplane(None, self)
            if sign > 0:
                return SplitSubHyperplane(self, None)
            return SplitSubHyperplane(None, None)

        # plus side of this 1-D cut faces the plus side of ``hyperplane``
        direct = hyperplane.normal.dot(line.direction) > 0.0
        cut = OrientedPoint(line.abscissa(crossing), direct, prec)
        plus_tree, minus_tree = split_tree(self._remaining_region.tree, cut.whole_hyperplane())
        plus = IntervalsSet(make_cut(cut.reverse().whole_hyperplane(), LEAF_OUT, plus_tree), prec)
        minus = IntervalsSet(make_cut(cut.whole_hyperplane(), LEAF_OUT, minus_tree), prec)
        return SplitSubHyperplane(self._part(plus), self._part(minus))

    def _part(self, region: IntervalsSet) -> Optional['SubLine']:
        if region.is_empty() or region.size <= region.precision.epsilon:
            return None
        return SubLine(self._hyperplane, region)

    @staticmethod
    def _reparametrized(target: Line, source: Line, region: IntervalsSet) -> IntervalsSet:
        """Express ``region`` (abscissae of ``source``) in abscissae of ``target``."""
        scale = target.direction.dot(source.direction)
        shift = target.abscissa(source.origin)
        prec = target.precision
        if scale == 1.0 and shift == 0.0:
            return region
        bounds = []
        for iv in region.as_intervals():
            a = shift + scale * iv.lower
            b = shift + scale * iv.upper
            bounds.append((min(a, b), max(a, b)))
        return IntervalsSet.from_intervals(bounds, prec)

    def _compatible(self, other: 'SubLine') -> IntervalsSet:
        if not isinstance(other, SubLine) or not self._hyperplane.same_as(other._hyperplane):
            raise IncompatibleHyperplanes('sub-lines do not lie on the same line', self, other)
        return self._reparametrized(self._hyperplane, other._hyperplane, other._remaining_region)

    def union(self, other: 'SubLine') -> 'SubLine':
        return SubLine(self._hyperplane, self._remaining_region.union(self._compatible(other)))

    def intersect(self, other: 'SubLine') -> 'SubLine':
        """Boolean intersection of the embedded regions (see ``intersection`` for crossing points)."""
        return SubLine(self._hyperplane, self._remaining_region.intersection(self._compatible(other)))

    def difference(self, other: 'SubLine') -> 'SubLine':
        return SubLine(self._hyperplane, self._remaining_region.difference(self._compatible(other)))

    def xor(self, other: 'SubLine') -> 'SubLine':
        return SubLine(self._hyperplane, self._remaining_region.xor(self._compatible(other)))

    def intersection(self, other: 'SubLine', strict: bool) -> Optional[Point2D]:
        """Crossing point of two sub-lines, or None.

        With ``strict`` the point must lie strictly inside both sub-lines;
        otherwise touching an end point of either one is enough. Parallel
        lines never intersect.
        """
        line = self._hyperplane
        crossing = line.intersection(other._hyperplane)
        if crossing is None:
            return None
        loc1 = self._remaining_region.check_point(line.to_sub_space(crossing))
        loc2 = other._remaining_region.check_point(other._hyperplane.to_sub_space(crossing))
        if strict:
            ok = loc1 is Location.INSIDE and loc2 is Location.INSIDE
        else:
            ok = loc1 is not Location.OUTSIDE and loc2 is not Location.OUTSIDE
        return crossing if ok else None

    def __repr__(self):
        return f'SubLine({self._hyperplane!r}, {self._remaining_region!r})'


def intersection(sub_a: SubLine, sub_b: SubLine, strict: bool) -> Optional[Point2D]:
    """Module-level form of ``SubLine.intersection``."""
    return sub_a.intersection(sub_b, strict)


class PolygonsSet(Region):
    """Subset of the plane described by a BSP tree of lines."""

    def build_new(self, tree: Node) -> 'PolygonsSet':
        return PolygonsSet(tree, self._precision)

    @classmethod
    def convex_polygon(cls, vertices: Sequence, precision: PrecisionContext) -> 'PolygonsSet':
        """Convex polygon from vertices in counter-clockwise order."""
        pts = [_as_point(v) for v in vertices]
        if len(pts) < 3:
            raise DegenerateGeometry('a polygon needs at least three vertices')
        lines = [Line.from_points(pts[i], pts[(i + 1) % len(pts)], precision) for i in range(len(pts))]
        return cls.from_hyperplanes(lines)

    @classmethod
    def from_vertices(cls, vertices: Sequence, precision: PrecisionContext) -> 'PolygonsSet':
        """Simple polygon (convex or not, either winding) as the xor of its fan triangles."""
        pts = [_as_point(v) for v in vertices]
        if len(pts) < 3:
            raise DegenerateGeometry('a polygon needs at least three vertices')
        factory = RegionFactory()
        result = cls.empty(precision)
        p0 = pts[0]
        for a, b in zip(pts[1:-1], pts[2:]):
            area2 = p0.vector_to(a).cross(p0.vector_to(b))
            if precision.eq_zero(area2):
                continue
            tri = (p0, a, b) if area2 > 0 else (p0, b, a)
            result = factory.xor(result, cls.convex_polygon(tri, precision))
        return result

    def _to_point(self, point):
        return _as_point(point)

    def check_points(self, points) -> List[Location]:
        return [self.check_point(p) for p in Point2D.from_array(points)]

    def contains_points(self, points) -> np.ndarray:
        """Boolean mask over an (N, 2) array: inside or on the boundary."""
        return np.array([loc is not Location.OUTSIDE for loc in self.check_points(points)], dtype=bool)

    @cached_property
    def _segments(self) -> Tuple[Segment, ...]:
        segments: List[Segment] = []
        for facet in self.boundary():
            segments.extend(facet.get_segments())
        return tuple(segments)

    def boundary_segments(self) -> Tuple[Segment, ...]:
        """Boundary segments, each oriented with the region on its left."""
        return self._segments

    def boundary_array(self) -> np.ndarray:
        """Boundary as an (N, 2, 2) array of [start, end] rows."""
        if not self._segments:
            return np.empty((0, 2, 2), dtype=np.float64)
        return np.stack([s.to_array() for s in self._segments])

    @cached_property
    def _moments(self) -> Tuple[float, float, float]:
        if not self._segments:
            return (math.inf if self.is_full() else 0.0), math.nan, math.nan
        if any(s.is_infinite() for s in self._segments):
            return math.inf, math.nan, math.nan
        area2 = 0.0; cx = 0.0; cy = 0.0
        for s in self._segments:
            cross = linear_combination(s.start.x, s.end.y, -s.end.x, s.start.y)
            area2 += cross
            cx += (s.start.x + s.end.x) * cross
            cy += (s.start.y + s.end.y) * cross
        if self._precision.lt(area2, 0.0):
            # closed boundary with the inside on its right: complement of a bounded set
            return math.inf, math.nan, math.nan
        return 0.5 * area2, cx, cy

    @property
    def size(self) -> float:
        return self._moments[0]

    @property
    def barycenter(self) -> Point2D:
        area, cx, cy = self._moments
        if not math.isfinite(area) or area == 0.0:
            return Point2D.NaN
        return Point2D(cx / (6.0 * area), cy / (6.0 * area))
