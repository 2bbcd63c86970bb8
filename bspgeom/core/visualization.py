"""Plotting helpers for regions and sub-lines.

Kept apart from the algebra so matplotlib is only imported by callers that
actually draw something.
"""
from __future__ import annotations

import math
import os as _os
from typing import Iterable, Optional, Tuple

import matplotlib as _mpl
# Ensure a non-interactive backend in headless environments before importing pyplot
if not _os.environ.get('MPLBACKEND'):
    try:
        _mpl.use('Agg')
    except (ImportError, ValueError):
        pass
import matplotlib.pyplot as plt
import numpy as np

from .logging_utils import get_logger
from .partitioning import Location
from .twod import PolygonsSet, Segment

logger = get_logger('bspgeom.viz')

Box = Tuple[float, float, float, float]


def _clip_to_box(segment: Segment, box: Box) -> Optional[np.ndarray]:
    """Replace infinite end points by points far enough along the line to leave ``box``."""
    xmin, xmax, ymin, ymax = box
    line = segment.line
    reach = math.hypot(xmax - xmin, ymax - ymin) + math.hypot(line.origin.x, line.origin.y) \
        + abs(xmin) + abs(xmax) + abs(ymin) + abs(ymax)
    ends = []
    for p, sign in ((segment.start, -1.0), (segment.end, 1.0)):
        if p.is_infinite():
            p = line.point_at(sign * reach)
        ends.append([p.x, p.y])
    return np.array(ends, dtype=np.float64)


def plot_segments(segments: Iterable[Segment], ax=None, box: Box = (-10.0, 10.0, -10.0, 10.0),
                  color=(0.85, 0.2, 0.2), linewidth: float = 1.8, arrows: bool = False):
    """Draw segments (infinite ones clipped to ``box``) and return the axes."""
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 6))
    count = 0
    for seg in segments:
        pts = _clip_to_box(seg, box)
        ax.plot(pts[:, 0], pts[:, 1], color=color, linewidth=linewidth)
        if arrows:
            mid = pts.mean(axis=0)
            d = pts[1] - pts[0]
            ax.annotate('', xy=mid + 0.05 * d, xytext=mid,
                        arrowprops=dict(arrowstyle='->', color=color))
        count += 1
    ax.set_xlim(box[0], box[1])
    ax.set_ylim(box[2], box[3])
    ax.set_aspect('equal')
    logger.debug('plotted %d segments', count)
    return ax


def plot_region(region: PolygonsSet, outname: Optional[str] = None, box: Box = (-10.0, 10.0, -10.0, 10.0),
                resolution: int = 200, title: Optional[str] = None):
    """Shade the inside of ``region`` on a grid and overlay its boundary.

    Args:
        region: PolygonsSet to draw
        outname: when given, the figure is saved there and closed
        box: (xmin, xmax, ymin, ymax) viewport
        resolution: grid samples per axis for the inside shading
        title: optional figure title
    """
    fig, ax = plt.subplots(figsize=(6, 6))
    xs = np.linspace(box[0], box[1], resolution)
    ys = np.linspace(box[2], box[3], resolution)
    gx, gy = np.meshgrid(xs, ys)
    grid = np.column_stack([gx.ravel(), gy.ravel()])
    mask = np.array([region.check_point(p) is Location.INSIDE for p in grid], dtype=float)
    ax.imshow(mask.reshape(gx.shape), origin='lower', extent=box, cmap='Blues', alpha=0.4, vmin=0.0, vmax=1.0)
    plot_segments(region.boundary_segments(), ax=ax, box=box, arrows=True)
    if title:
        ax.set_title(title)
    if outname:
        fig.savefig(outname, dpi=150)
        plt.close(fig)
        logger.info('wrote %s', outname)
        return None
    return ax


__all__ = ['plot_segments', 'plot_region']
