"""Public package API for the bspgeom partitioning toolkit.

This facade provides a flat import surface on top of the internal
implementation package ``bspgeom.core``. The matplotlib-backed plotting
module is loaded lazily so ``import bspgeom`` stays light.

Example
-------
    from bspgeom import PrecisionContext, SubLine

    precision = PrecisionContext()
    a = SubLine.from_points((1, 1), (3, 1), precision)
    b = SubLine.from_points((2, 0), (2, 2), precision)
    a.intersection(b, strict=True)   # Point2D(2, 1)
"""
from importlib import import_module as _imp
import logging as _logging

try:
    from importlib.metadata import PackageNotFoundError as _NotFound, version as _pkg_version
    __version__ = _pkg_version("bspgeom")  # populated when installed
except _NotFound:  # pragma: no cover - editable / unknown state
    __version__ = "0.0.0+dev"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

from .core.bsp import LEAF_IN, LEAF_OUT, Cut, Leaf  # noqa: E402
from .core.config import DEFAULT_CONFIG, GeometryConfig  # noqa: E402
from .core.constants import DEFAULT_EPSILON, DEPTH_WARNING  # noqa: E402
from .core.errors import (  # noqa: E402
    DegenerateGeometry, GeometryError, IncompatibleHyperplanes, InvalidConfiguration,
)
from .core.logging_utils import configure_logging, get_logger  # noqa: E402
from .core.oned import Interval, IntervalsSet, OrientedPoint, SubOrientedPoint  # noqa: E402
from .core.partitioning import (  # noqa: E402
    Hyperplane, HyperplaneLocation, Location, Side, SplitSubHyperplane, SubHyperplane,
)
from .core.precision import Ordering, PrecisionContext  # noqa: E402
from .core.region import Region  # noqa: E402
from .core.region_factory import RegionFactory  # noqa: E402
from .core.twod import Line, PolygonsSet, Segment, SubLine, intersection  # noqa: E402
from .core.vectors import Point1D, Point2D, Vector1D, Vector2D  # noqa: E402


def _lazy_module(mod_name):
    class _ModuleProxy:
        __slots__ = ('_m',)
        def _load(self):
            try:
                return object.__getattribute__(self, '_m')
            except AttributeError:
                module = _imp(mod_name)
                object.__setattr__(self, '_m', module)
                return module
        def __getattr__(self, item):
            return getattr(self._load(), item)
        def __dir__(self):
            return dir(self._load())
    return _ModuleProxy()


# matplotlib is only pulled in on first use
visualization = _lazy_module('bspgeom.core.visualization')

__all__ = [
    '__version__',
    # precision / config / logging
    'PrecisionContext', 'Ordering', 'GeometryConfig', 'DEFAULT_CONFIG',
    'DEFAULT_EPSILON', 'DEPTH_WARNING', 'configure_logging', 'get_logger',
    # errors
    'GeometryError', 'InvalidConfiguration', 'DegenerateGeometry', 'IncompatibleHyperplanes',
    # primitives
    'Point1D', 'Vector1D', 'Point2D', 'Vector2D',
    # partitioning
    'Location', 'HyperplaneLocation', 'Side', 'Hyperplane', 'SubHyperplane', 'SplitSubHyperplane',
    'Leaf', 'Cut', 'LEAF_IN', 'LEAF_OUT', 'Region', 'RegionFactory',
    # dimensions
    'OrientedPoint', 'SubOrientedPoint', 'Interval', 'IntervalsSet',
    'Line', 'Segment', 'SubLine', 'PolygonsSet', 'intersection',
    'visualization',
]
