"""Split overlapping circles into boundary arcs at their intersection points."""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .config import get_engine_config
from .geometry import TWO_PI, Arc, Circle, Point

logger = logging.getLogger(__name__)


def circle_intersections(a: Circle, b: Circle, eps: Optional[float] = None) -> List[Point]:
    """Intersection points of two circles via the radical-line construction.

    Returns no points for separated, nested or near-coincident circles, one
    point for tangency (within ``eps``) and two points otherwise.
    """

    if eps is None:
        eps = get_engine_config().intersection_epsilon
    dx = b.cx - a.cx
    dy = b.cy - a.cy
    dist = math.hypot(dx, dy)
    if dist < eps:
        return []
    if dist > a.r + b.r + eps or dist < abs(a.r - b.r) - eps:
        return []

    along = (a.r * a.r - b.r * b.r + dist * dist) / (2.0 * dist)
    h = math.sqrt(max(0.0, a.r * a.r - along * along))
    px = a.cx + along * dx / dist
    py = a.cy + along * dy / dist
    if h < eps:
        return [(px, py)]
    ox = h * dy / dist
    oy = h * dx / dist
    return [(px + ox, py - oy), (px - ox, py + oy)]


def _normalize_angle(angle: float) -> float:
    angle = math.fmod(angle, TWO_PI)
    if angle < 0.0:
        angle += TWO_PI
    if angle >= TWO_PI:
        angle -= TWO_PI
    return angle


def _unique_sorted_angles(angles: Sequence[float], eps: float) -> List[float]:
    ordered = np.sort(np.asarray(angles, dtype=float), kind="stable")
    unique: List[float] = []
    for value in ordered.tolist():
        if unique and value - unique[-1] < eps:
            continue
        unique.append(value)
    if len(unique) > 1 and unique[0] + TWO_PI - unique[-1] < eps:
        unique.pop()
    return unique


def decompose_circles_into_arcs(
    circles: Sequence[Circle], eps: Optional[float] = None
) -> Tuple[List[Arc], List[Circle]]:
    """Subdivide each circle's outline at every intersection with the others.

    Returns ``(arcs, whole_circles)``.  Hidden arcs are not removed: the arcs
    of one source circle always sweep exactly one full turn between them.
    Circles that intersect nothing are returned whole.
    """

    if eps is None:
        eps = get_engine_config().intersection_epsilon
    arcs: List[Arc] = []
    whole: List[Circle] = []
    count = len(circles)
    if count == 0:
        return arcs, whole

    centers = np.array([(c.cx, c.cy) for c in circles], dtype=float)
    radii = np.array([c.r for c in circles], dtype=float)
    deltas = centers[None, :, :] - centers[:, None, :]
    dist = np.hypot(deltas[..., 0], deltas[..., 1])
    reach = radii[:, None] + radii[None, :]
    nested = np.abs(radii[:, None] - radii[None, :])
    candidates = (dist >= eps) & (dist <= reach + eps) & (dist >= nested - eps)
    np.fill_diagonal(candidates, False)

    for i, circle in enumerate(circles):
        angles: List[float] = []
        for j in np.flatnonzero(candidates[i]).tolist():
            for px, py in circle_intersections(circle, circles[j], eps):
                angles.append(_normalize_angle(math.atan2(py - circle.cy, px - circle.cx)))
        if not angles:
            whole.append(circle)
            continue

        # Angular tolerance equivalent to eps along the outline.
        unique = _unique_sorted_angles(angles, eps / max(circle.r, eps))
        for k, start in enumerate(unique):
            end = unique[(k + 1) % len(unique)]
            if end <= start:
                end += TWO_PI
            arcs.append(Arc(circle.cx, circle.cy, circle.r, start, end))

    logger.debug(
        "Decomposed %d circles into %d arcs (%d whole circles)", count, len(arcs), len(whole)
    )
    return arcs, whole


__all__ = ["circle_intersections", "decompose_circles_into_arcs"]
