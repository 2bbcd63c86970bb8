"""Tests for oriented points and interval sets on the real line."""
import math

import pytest

from bspgeom import (
    DegenerateGeometry, HyperplaneLocation, Interval, IntervalsSet, Location,
    OrientedPoint, Point1D, PrecisionContext, Side,
)

PREC = PrecisionContext()


class TestOrientedPoint:
    """Offsets, orientation and factories."""

    def test_offset_sign_follows_facing(self):
        op = OrientedPoint(2.0, True, PREC)
        assert op.offset(5.0) == 3.0
        assert op.offset(Point1D(1.0)) == -1.0
        assert op.reverse().offset(5.0) == -3.0

    def test_classify(self):
        op = OrientedPoint(2.0, False, PREC)
        assert op.classify(1.0) is HyperplaneLocation.PLUS
        assert op.classify(3.0) is HyperplaneLocation.MINUS
        assert op.classify(2.0) is HyperplaneLocation.ON
        assert op.contains(Point1D(2.0))

    def test_factories(self):
        assert OrientedPoint.from_points(1.0, 3.0, PREC).positive_facing
        assert not OrientedPoint.from_point_and_direction(1.0, -0.5, PREC).positive_facing
        assert OrientedPoint.create_negative_facing(4.0, PREC).direction.x == -1.0
        with pytest.raises(DegenerateGeometry):
            OrientedPoint.from_point_and_direction(1.0, 0.0, PREC)

    def test_same_as_ignores_orientation(self):
        a = OrientedPoint(2.0, True, PREC)
        b = OrientedPoint(2.0, False, PREC)
        assert a.same_as(b)
        assert not a.same_orientation_as(b)
        assert a != b
        assert a == OrientedPoint(2.0, True, PREC)

    def test_sub_oriented_point_split(self):
        sub = OrientedPoint(3.0, True, PREC).whole_hyperplane()
        assert sub.split(OrientedPoint(1.0, True, PREC)).side is Side.PLUS
        assert sub.split(OrientedPoint(5.0, True, PREC)).side is Side.MINUS
        assert sub.split(OrientedPoint(3.0, False, PREC)).side is Side.HYPER
        assert sub.size == 0.0


class TestInterval:

    def test_interval_queries(self):
        iv = Interval(1.0, 3.0, PREC)
        assert iv.size == 2.0
        assert iv.barycenter == Point1D(2.0)
        assert iv.check_point(2.0) is Location.INSIDE
        assert iv.check_point(3.0) is Location.BOUNDARY
        assert iv.check_point(4.0) is Location.OUTSIDE
        assert Interval(-math.inf, 0.0).is_infinite()
        assert Interval(-math.inf, 0.0).barycenter == Point1D.NaN


class TestIntervalsSet:
    """Interval sets built through the BSP algebra."""

    def test_single_interval(self):
        s = IntervalsSet.from_interval(1.0, 2.0, PREC)
        assert s.check_point(1.5) is Location.INSIDE
        assert s.check_point(1.0) is Location.BOUNDARY
        assert s.check_point(2.0 + 1e-12) is Location.BOUNDARY
        assert s.check_point(0.0) is Location.OUTSIDE
        assert s.size == 1.0
        assert s.barycenter == Point1D(1.5)
        assert len(s.boundary()) == 2
        assert s.boundary_size == 0.0

    def test_disjoint_union_keeps_two_intervals(self):
        s = IntervalsSet.from_intervals([(1.0, 2.0), (3.0, 4.0)], PREC)
        assert s.as_intervals() == (Interval(1.0, 2.0), Interval(3.0, 4.0))
        assert s.size == 2.0
        assert s.inf == 1.0 and s.sup == 4.0
        assert s.barycenter == Point1D(2.5)
        assert [p.x for p in s.boundary_points()] == [1.0, 2.0, 3.0, 4.0]
        assert s.check_point(2.5) is Location.OUTSIDE

    def test_overlapping_union_merges(self):
        s = IntervalsSet.from_intervals([(1.0, 3.0), (2.0, 4.0)], PREC)
        assert s.as_intervals() == (Interval(1.0, 4.0),)
        assert s.size == pytest.approx(3.0)
        assert s.check_point(2.0) is Location.INSIDE

    def test_complement_is_unbounded(self):
        s = IntervalsSet.from_interval(1.0, 2.0, PREC).complement()
        assert s.as_intervals() == (Interval(-math.inf, 1.0), Interval(2.0, math.inf))
        assert s.size == math.inf
        assert s.barycenter == Point1D.NaN
        assert s.check_point(1.5) is Location.OUTSIDE

    def test_half_infinite_bounds(self):
        s = IntervalsSet.from_interval(-math.inf, 2.0, PREC)
        assert s.check_point(-1e6) is Location.INSIDE
        assert s.as_intervals() == (Interval(-math.inf, 2.0),)
        assert IntervalsSet.from_interval(-math.inf, math.inf, PREC).is_full()

    def test_complementary_half_lines_cover_everything(self):
        left = IntervalsSet.from_interval(-math.inf, 2.0, PREC)
        right = IntervalsSet.from_interval(1.0, math.inf, PREC)
        assert left.union(right).is_full()
        assert left.intersection(right).as_intervals() == (Interval(1.0, 2.0),)

    def test_degenerate_point_interval(self):
        s = IntervalsSet.from_interval(2.0, 2.0, PREC)
        assert not s.is_empty()
        assert s.check_point(2.0) is Location.BOUNDARY
        assert s.as_intervals() == (Interval(2.0, 2.0),)
        assert s.size == 0.0

    def test_empty_and_full(self):
        assert IntervalsSet.empty(PREC).as_intervals() == ()
        assert IntervalsSet.empty(PREC).size == 0.0
        assert IntervalsSet.full(PREC).as_intervals() == (Interval(-math.inf, math.inf),)
        assert 'empty' in repr(IntervalsSet.empty(PREC))

    def test_invalid_bounds(self):
        with pytest.raises(DegenerateGeometry):
            IntervalsSet.from_interval(3.0, 1.0, PREC)
        with pytest.raises(DegenerateGeometry):
            IntervalsSet.from_interval(math.nan, 1.0, PREC)

    def test_difference_and_xor(self):
        a = IntervalsSet.from_interval(0.0, 4.0, PREC)
        b = IntervalsSet.from_interval(1.0, 2.0, PREC)
        diff = a.difference(b)
        assert diff.as_intervals() == (Interval(0.0, 1.0), Interval(2.0, 4.0))
        assert diff.size == pytest.approx(3.0)
        assert a.xor(b).size == pytest.approx(3.0)
        assert b.difference(a).is_empty()
