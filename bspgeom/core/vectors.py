"""Immutable point and vector value types for 1-D and 2-D space.

Points are locations, vectors are displacements: ``point + vector`` is a
point and ``point - point`` is a vector. Identity (``==``/``hash``) is exact:
two finite values are equal only when every coordinate compares exactly
equal. Tolerances apply to geometric predicates, never to identity. Any
value holding a NaN coordinate equals every other NaN value of its type and
shares one hash.
"""
from __future__ import annotations

import math

import numpy as np

from .errors import DegenerateGeometry
from .numeric import linear_combination as _lincomb

__all__ = ['Vector1D', 'Point1D', 'Vector2D', 'Point2D']


def _coords_from(values, dim):
    arr = np.asarray(values, dtype=np.float64).reshape(-1)
    if arr.shape[0] != dim:
        raise ValueError(f'expected {dim} coordinate(s), got {arr.shape[0]}')
    return [float(v) for v in arr]


class _Cartesian1D:
    __slots__ = ('_x',)
    _NAN_HASH = 0

    def __init__(self, x: float):
        object.__setattr__(self, '_x', float(x))

    def __setattr__(self, name, value):
        raise AttributeError(f'{type(self).__name__} is immutable')

    @property
    def x(self) -> float:
        return self._x

    def is_nan(self) -> bool:
        return math.isnan(self._x)

    def is_infinite(self) -> bool:
        return not self.is_nan() and math.isinf(self._x)

    def is_finite(self) -> bool:
        return math.isfinite(self._x)

    def to_array(self) -> np.ndarray:
        return np.array([self._x], dtype=np.float64)

    def __iter__(self):
        yield self._x

    def __eq__(self, other):
        if self is other:
            return True
        if type(other) is not type(self):
            return NotImplemented
        if other.is_nan():
            return self.is_nan()
        return self._x == other._x

    def __hash__(self):
        if self.is_nan():
            return self._NAN_HASH
        return 997 * hash(self._x)

    def __repr__(self):
        return f'({self._x})'


class Vector1D(_Cartesian1D):
    __slots__ = ()
    _NAN_HASH = 7785

    @classmethod
    def of(cls, x) -> 'Vector1D':
        if isinstance(x, _Cartesian1D):
            return cls(x.x)
        if np.ndim(x) == 0:
            return cls(float(x))
        return cls(*_coords_from(x, 1))

    @classmethod
    def linear_combination(cls, *terms) -> 'Vector1D':
        """``linear_combination(a1, c1, a2, c2, ...)`` with compensated summation."""
        flat = []
        for a, c in zip(terms[0::2], terms[1::2]):
            flat.extend((a, c.x))
        return cls(_lincomb(*flat))

    def add(self, v: 'Vector1D') -> 'Vector1D':
        return Vector1D(self._x + v.x)

    def subtract(self, v: 'Vector1D') -> 'Vector1D':
        return Vector1D(self._x - v.x)

    def multiply(self, a: float) -> 'Vector1D':
        return Vector1D(a * self._x)

    def negate(self) -> 'Vector1D':
        return Vector1D(-self._x)

    def dot(self, v: 'Vector1D') -> float:
        return self._x * v.x

    def norm(self) -> float:
        return abs(self._x)

    def normalize(self) -> 'Vector1D':
        n = self.norm()
        if n == 0.0 or not math.isfinite(n):
            raise DegenerateGeometry(f'cannot normalize vector {self!r}')
        return Vector1D(self._x / n)

    __add__ = add
    __sub__ = subtract
    __neg__ = negate

    def __mul__(self, a):
        return self.multiply(a)

    __rmul__ = __mul__


class Point1D(_Cartesian1D):
    __slots__ = ()
    _NAN_HASH = 7785

    @classmethod
    def of(cls, x) -> 'Point1D':
        if isinstance(x, _Cartesian1D):
            return cls(x.x)
        if np.ndim(x) == 0:
            return cls(float(x))
        return cls(*_coords_from(x, 1))

    @classmethod
    def linear_combination(cls, *terms) -> 'Point1D':
        flat = []
        for a, c in zip(terms[0::2], terms[1::2]):
            flat.extend((a, c.x))
        return cls(_lincomb(*flat))

    def as_vector(self) -> Vector1D:
        return Vector1D(self._x)

    def distance(self, p: 'Point1D') -> float:
        return abs(p.x - self._x)

    def subtract(self, p: 'Point1D') -> Vector1D:
        return Vector1D(self._x - p.x)

    def vector_to(self, p: 'Point1D') -> Vector1D:
        return p.subtract(self)

    def add(self, v: Vector1D) -> 'Point1D':
        return Point1D(self._x + v.x)

    def lerp(self, p: 'Point1D', t: float) -> 'Point1D':
        return Point1D(_lincomb(1.0 - t, self._x, t, p.x))

    def __add__(self, v):
        return self.add(v)

    def __sub__(self, other):
        if isinstance(other, Point1D):
            return self.subtract(other)
        return Point1D(self._x - other.x)


class _Cartesian2D:
    __slots__ = ('_x', '_y')
    _NAN_HASH = 0

    def __init__(self, x: float, y: float):
        object.__setattr__(self, '_x', float(x))
        object.__setattr__(self, '_y', float(y))

    def __setattr__(self, name, value):
        raise AttributeError(f'{type(self).__name__} is immutable')

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    def is_nan(self) -> bool:
        return math.isnan(self._x) or math.isnan(self._y)

    def is_infinite(self) -> bool:
        return not self.is_nan() and (math.isinf(self._x) or math.isinf(self._y))

    def is_finite(self) -> bool:
        return math.isfinite(self._x) and math.isfinite(self._y)

    def to_array(self) -> np.ndarray:
        return np.array([self._x, self._y], dtype=np.float64)

    def __iter__(self):
        yield self._x
        yield self._y

    def __eq__(self, other):
        if self is other:
            return True
        if type(other) is not type(self):
            return NotImplemented
        if other.is_nan():
            return self.is_nan()
        return self._x == other._x and self._y == other._y

    def __hash__(self):
        if self.is_nan():
            return self._NAN_HASH
        return 122 * (76 * hash(self._x) + hash(self._y))

    def __repr__(self):
        return f'({self._x}, {self._y})'


def _pair(args):
    if len(args) == 2:
        return float(args[0]), float(args[1])
    if len(args) == 1:
        value = args[0]
        if isinstance(value, _Cartesian2D):
            return value.x, value.y
        return tuple(_coords_from(value, 2))
    raise TypeError('expected (x, y) or a single 2-element value')


class Vector2D(_Cartesian2D):
    __slots__ = ()
    _NAN_HASH = 542

    @classmethod
    def of(cls, *args) -> 'Vector2D':
        """``Vector2D.of(x, y)``, ``Vector2D.of(other)`` or ``Vector2D.of(array_like)``."""
        return cls(*_pair(args))

    @classmethod
    def from_angle(cls, angle: float, norm: float = 1.0) -> 'Vector2D':
        return cls(norm * math.cos(angle), norm * math.sin(angle))

    @classmethod
    def linear_combination(cls, *terms) -> 'Vector2D':
        """``linear_combination(a1, c1, a2, c2, ...)`` with compensated summation."""
        xs = []; ys = []
        for a, c in zip(terms[0::2], terms[1::2]):
            xs.extend((a, c.x)); ys.extend((a, c.y))
        return cls(_lincomb(*xs), _lincomb(*ys))

    def add(self, v: 'Vector2D') -> 'Vector2D':
        return Vector2D(self._x + v.x, self._y + v.y)

    def subtract(self, v: 'Vector2D') -> 'Vector2D':
        return Vector2D(self._x - v.x, self._y - v.y)

    def multiply(self, a: float) -> 'Vector2D':
        return Vector2D(a * self._x, a * self._y)

    def negate(self) -> 'Vector2D':
        return Vector2D(-self._x, -self._y)

    def dot(self, v: 'Vector2D') -> float:
        return _lincomb(self._x, v.x, self._y, v.y)

    def cross(self, v: 'Vector2D') -> float:
        """z component of the 3-D cross product (positive when v is counter-clockwise)."""
        return _lincomb(self._x, v.y, -self._y, v.x)

    def norm(self) -> float:
        return math.hypot(self._x, self._y)

    def normalize(self) -> 'Vector2D':
        n = self.norm()
        if n == 0.0 or not math.isfinite(n):
            raise DegenerateGeometry(f'cannot normalize vector {self!r}')
        return Vector2D(self._x / n, self._y / n)

    def orthogonal(self) -> 'Vector2D':
        """Counter-clockwise perpendicular of the same norm."""
        return Vector2D(-self._y, self._x)

    __add__ = add
    __sub__ = subtract
    __neg__ = negate

    def __mul__(self, a):
        return self.multiply(a)

    __rmul__ = __mul__


class Point2D(_Cartesian2D):
    __slots__ = ()
    _NAN_HASH = 542

    @classmethod
    def of(cls, *args) -> 'Point2D':
        """``Point2D.of(x, y)``, ``Point2D.of(other)`` or ``Point2D.of(array_like)``."""
        return cls(*_pair(args))

    @classmethod
    def linear_combination(cls, *terms) -> 'Point2D':
        xs = []; ys = []
        for a, c in zip(terms[0::2], terms[1::2]):
            xs.extend((a, c.x)); ys.extend((a, c.y))
        return cls(_lincomb(*xs), _lincomb(*ys))

    @classmethod
    def from_array(cls, points) -> 'list[Point2D]':
        """Convert an (N, 2) array-like into a list of points."""
        arr = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        return [cls(float(px), float(py)) for px, py in arr]

    def as_vector(self) -> Vector2D:
        return Vector2D(self._x, self._y)

    def distance(self, p: 'Point2D') -> float:
        return math.hypot(p.x - self._x, p.y - self._y)

    def subtract(self, p: 'Point2D') -> Vector2D:
        return Vector2D(self._x - p.x, self._y - p.y)

    def vector_to(self, p: 'Point2D') -> Vector2D:
        return p.subtract(self)

    def add(self, v: Vector2D) -> 'Point2D':
        return Point2D(self._x + v.x, self._y + v.y)

    def lerp(self, p: 'Point2D', t: float) -> 'Point2D':
        return Point2D(_lincomb(1.0 - t, self._x, t, p.x), _lincomb(1.0 - t, self._y, t, p.y))

    def __add__(self, v):
        return self.add(v)

    def __sub__(self, other):
        if isinstance(other, Point2D):
            return self.subtract(other)
        return Point2D(self._x - other.x, self._y - other.y)


def _install_constants():
    for cls in (Vector1D, Point1D):
        cls.ZERO = cls(0.0)
        cls.ONE = cls(1.0)
        cls.NaN = cls(math.nan)
        cls.POSITIVE_INFINITY = cls(math.inf)
        cls.NEGATIVE_INFINITY = cls(-math.inf)
    for cls in (Vector2D, Point2D):
        cls.ZERO = cls(0.0, 0.0)
        cls.NaN = cls(math.nan, math.nan)
        cls.POSITIVE_INFINITY = cls(math.inf, math.inf)
        cls.NEGATIVE_INFINITY = cls(-math.inf, -math.inf)
    Vector2D.PLUS_X = Vector2D(1.0, 0.0)
    Vector2D.MINUS_X = Vector2D(-1.0, 0.0)
    Vector2D.PLUS_Y = Vector2D(0.0, 1.0)
    Vector2D.MINUS_Y = Vector2D(0.0, -1.0)


_install_constants()
