"""Tests for polygon regions and the boolean algebra over BSP trees."""
import logging
import math

import numpy as np
import pytest

from bspgeom import (
    LEAF_OUT, DegenerateGeometry, GeometryConfig, IncompatibleHyperplanes, IntervalsSet,
    Line, Location, OrientedPoint, Point2D, PolygonsSet, PrecisionContext, RegionFactory,
)
from bspgeom.core.bsp import iter_cuts, tree_size

PREC = PrecisionContext()

UNIT_SQUARE = [(0, 0), (1, 0), (1, 1), (0, 1)]
L_SHAPE = [(0, 0), (2, 0), (2, 1), (1, 1), (1, 2), (0, 2)]


def square():
    return PolygonsSet.convex_polygon(UNIT_SQUARE, PREC)


def triangle():
    return PolygonsSet.convex_polygon([(0.5, 0.5), (2, 0.5), (0.5, 2)], PREC)


def box():
    return PolygonsSet.convex_polygon([(0.25, -0.5), (1.5, -0.5), (1.5, 0.75), (0.25, 0.75)], PREC)


def sample_points(n=300, seed=0):
    rng = np.random.default_rng(seed)
    return rng.uniform(-1.0, 2.5, size=(n, 2))


class _Records(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records = []

    def emit(self, record):
        self.records.append(record)


class TestConvexPolygon:
    """The unit square built from four half-planes."""

    def test_membership(self):
        sq = square()
        assert sq.check_point((0.5, 0.5)) is Location.INSIDE
        assert sq.check_point((2.0, 0.5)) is Location.OUTSIDE
        assert sq.check_point((1.0, 0.5)) is Location.BOUNDARY
        assert sq.check_point(Point2D(0.0, 0.0)) is Location.BOUNDARY
        assert sq.contains((1.0, 1.0))

    def test_measures(self):
        sq = square()
        assert sq.size == pytest.approx(1.0)
        assert sq.boundary_size == pytest.approx(4.0)
        c = sq.barycenter
        assert c.x == pytest.approx(0.5) and c.y == pytest.approx(0.5)

    def test_boundary_has_inside_on_the_left(self):
        sq = square()
        segments = sq.boundary_segments()
        assert len(segments) == 4
        for seg in segments:
            mid = seg.start.lerp(seg.end, 0.5)
            left = mid + 0.01 * seg.line.direction.orthogonal()
            assert sq.check_point(left) is Location.INSIDE
        assert sq.boundary_array().shape == (4, 2, 2)

    def test_vectorised_membership(self):
        pts = np.array([[0.5, 0.5], [2.0, 2.0], [1.0, 1.0]])
        assert square().contains_points(pts).tolist() == [True, False, True]
        assert square().check_points(pts)[2] is Location.BOUNDARY

    def test_from_hyperplanes(self):
        lines = [Line.from_points(UNIT_SQUARE[i], UNIT_SQUARE[(i + 1) % 4], PREC) for i in range(4)]
        sq = PolygonsSet.from_hyperplanes(lines)
        assert isinstance(sq, PolygonsSet)
        assert sq.size == pytest.approx(1.0)

    def test_redundant_hyperplane_leaves_no_cut(self):
        lines = [Line.from_points(UNIT_SQUARE[i], UNIT_SQUARE[(i + 1) % 4], PREC) for i in range(4)]
        lines.append(Line.from_points((5, 0), (5, 1), PREC))
        region = PolygonsSet.from_hyperplanes(lines)
        assert region.size == pytest.approx(1.0)
        assert len(list(iter_cuts(region.tree))) == 4

    def test_contradictory_half_planes(self):
        below = Line.from_points((1, 0), (0, 0), PREC)
        above = Line.from_points((0, 1), (1, 1), PREC)
        region = PolygonsSet.from_hyperplanes([below, above])
        assert region.is_empty()
        assert region.tree == LEAF_OUT
        assert region.size == 0.0
        assert region.barycenter == Point2D.NaN

    def test_empty_hyperplane_list(self):
        with pytest.raises(ValueError):
            PolygonsSet.from_hyperplanes([])

    def test_from_hyperplanes_checks_region_type(self):
        with pytest.raises(IncompatibleHyperplanes):
            IntervalsSet.from_hyperplanes([Line.from_points((0, 0), (1, 0), PREC)])
        with pytest.raises(IncompatibleHyperplanes):
            PolygonsSet.from_hyperplanes([OrientedPoint(2.0, True, PREC)])
        half_line = IntervalsSet.from_hyperplanes([OrientedPoint(2.0, True, PREC)])
        assert isinstance(half_line, IntervalsSet)
        assert half_line.check_point(0.0) is Location.INSIDE

    def test_half_plane_is_unbounded(self):
        region = PolygonsSet.from_hyperplanes([Line.from_points((0, 0), (1, 0), PREC)])
        assert region.check_point((3.0, 5.0)) is Location.INSIDE
        assert region.size == math.inf
        (seg,) = region.boundary_segments()
        assert seg.is_infinite()

    def test_too_few_vertices(self):
        with pytest.raises(DegenerateGeometry):
            PolygonsSet.convex_polygon([(0, 0), (1, 0)], PREC)


class TestSimplePolygon:

    @pytest.mark.parametrize('vertices', [L_SHAPE, L_SHAPE[::-1]])
    def test_l_shape(self, vertices):
        region = PolygonsSet.from_vertices(vertices, PREC)
        assert region.size == pytest.approx(3.0)
        assert region.boundary_size == pytest.approx(8.0)
        assert region.check_point((1.5, 1.5)) is Location.OUTSIDE
        assert region.check_point((0.5, 1.5)) is Location.INSIDE
        assert region.check_point((1.5, 0.5)) is Location.INSIDE
        c = region.barycenter
        assert c.x == pytest.approx(2.5 / 3.0) and c.y == pytest.approx(2.5 / 3.0)


class TestBooleanAlgebra:
    """Membership semantics and algebraic identities."""

    def test_complement(self):
        sq = square()
        comp = sq.complement()
        assert comp.check_point((2.0, 2.0)) is Location.INSIDE
        assert comp.check_point((0.5, 0.5)) is Location.OUTSIDE
        assert comp.check_point((1.0, 0.5)) is Location.BOUNDARY
        assert comp.size == math.inf
        assert comp.barycenter == Point2D.NaN
        back = comp.complement()
        for p in sample_points(50):
            assert back.check_point(p) is sq.check_point(p)

    def test_unbounded_region_with_finite_boundary(self):
        far = PolygonsSet.convex_polygon([(5, 5), (6, 5), (6, 6), (5, 6)], PREC)
        holes = square().union(far).complement()
        assert all(not s.is_infinite() for s in holes.boundary_segments())
        assert holes.size == math.inf
        assert holes.barycenter == Point2D.NaN
        assert holes.complement().size == pytest.approx(2.0)

    @pytest.mark.parametrize('region', [square(), PolygonsSet.from_vertices(L_SHAPE, PREC)],
                             ids=['square', 'l_shape'])
    def test_complement_verdicts_are_dual(self, region):
        dual = {Location.INSIDE: Location.OUTSIDE, Location.OUTSIDE: Location.INSIDE,
                Location.BOUNDARY: Location.BOUNDARY}
        comp = region.complement()
        for p in sample_points():
            assert comp.check_point(p) is dual[region.check_point(p)]
        on_boundary = [seg.start.lerp(seg.end, t)
                       for seg in region.boundary_segments() for t in (0.0, 0.3, 0.5, 1.0)]
        assert on_boundary
        for p in on_boundary:
            assert region.check_point(p) is Location.BOUNDARY
            assert comp.check_point(p) is Location.BOUNDARY

    def test_union_and_intersection_with_complement(self):
        sq = square()
        assert sq.union(sq.complement()).is_full()
        assert sq.intersection(sq.complement()).is_empty()
        assert sq.xor(sq).is_empty()
        assert sq.difference(sq).is_empty()

    def test_membership_semantics(self):
        a, b = square(), triangle()
        ops = {
            'union': (a.union(b), lambda x, y: x or y),
            'intersection': (a.intersection(b), lambda x, y: x and y),
            'difference': (a.difference(b), lambda x, y: x and not y),
            'xor': (a.xor(b), lambda x, y: x != y),
        }
        checked = 0
        for p in sample_points():
            la, lb = a.check_point(p), b.check_point(p)
            if Location.BOUNDARY in (la, lb):
                continue
            checked += 1
            for region, rule in ops.values():
                expected = rule(la is Location.INSIDE, lb is Location.INSIDE)
                assert region.check_point(p) is (Location.INSIDE if expected else Location.OUTSIDE)
        assert checked > 200

    def test_commutativity_and_associativity(self):
        a, b, c = square(), triangle(), box()
        pairs = [
            (a.union(b), b.union(a)),
            (a.intersection(b), b.intersection(a)),
            (a.xor(b), b.xor(a)),
            (a.union(b).union(c), a.union(b.union(c))),
            (a.intersection(b).intersection(c), a.intersection(b.intersection(c))),
        ]
        for p in sample_points(200, seed=1):
            if any(r.check_point(p) is Location.BOUNDARY for r in (a, b, c)):
                continue
            for left, right in pairs:
                assert left.check_point(p) is right.check_point(p)

    def test_measures_are_consistent(self):
        a, b = square(), triangle()
        union = a.union(b).size
        inter = a.intersection(b).size
        assert union == pytest.approx(a.size + b.size - inter)
        assert a.xor(b).size == pytest.approx(union - inter)
        assert inter == pytest.approx(0.25)

    def test_union_all_and_intersection_all(self):
        factory = RegionFactory()
        regions = [square(), triangle(), box()]
        union = factory.union_all(regions)
        inter = factory.intersection_all(regions)
        assert union.check_point((1.8, 0.6)) is Location.INSIDE
        assert inter.check_point((0.6, 0.6)) is Location.INSIDE
        assert inter.check_point((0.1, 0.1)) is Location.OUTSIDE

    def test_mixed_region_types(self):
        with pytest.raises(IncompatibleHyperplanes):
            RegionFactory().union(square(), IntervalsSet.from_interval(0, 1, PREC))


class TestFactoryConfiguration:

    def test_without_simplification(self):
        raw = RegionFactory(GeometryConfig(simplify=False))
        a, b = square(), triangle()
        merged = raw.union(a, b)
        simplified = raw.simplify(merged)
        assert tree_size(simplified.tree) <= tree_size(merged.tree)
        for p in sample_points(50):
            assert simplified.check_point(p) is merged.check_point(p)
        assert raw.xor(a, a).is_empty()

    def test_depth_warning(self):
        factory = RegionFactory(GeometryConfig(depth_warning=1))
        handler = _Records()
        logger = logging.getLogger('bspgeom.region_factory')
        logger.addHandler(handler)
        try:
            factory.union(square(), triangle())
        finally:
            logger.removeHandler(handler)
        warnings = [r for r in handler.records if r.levelno == logging.WARNING]
        assert warnings
        assert 'depth' in warnings[0].getMessage()
