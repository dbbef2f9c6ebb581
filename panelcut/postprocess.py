"""Margin clipping and tolerance-based deduplication of generated geometry."""

from __future__ import annotations

import logging
import math
from typing import Hashable, Iterable, List, Optional, Set, Tuple, TypeVar

from .config import get_engine_config
from .geometry import Arc, Circle, GeometryBundle, Line
from .logging_utils import debug_log_call

logger = logging.getLogger(__name__)

T = TypeVar("T")

InsetRect = Tuple[float, float, float, float]


def inset_rect(width: float, height: float, margin_fraction: Optional[float] = None) -> InsetRect:
    if margin_fraction is None:
        margin_fraction = get_engine_config().margin_fraction
    margin = min(width, height) * margin_fraction
    return margin, margin, width - margin, height - margin


def _line_outside(line: Line, rect: InsetRect) -> bool:
    x0, y0, x1, y1 = rect
    return (
        (line.x1 < x0 and line.x2 < x0)
        or (line.x1 > x1 and line.x2 > x1)
        or (line.y1 < y0 and line.y2 < y0)
        or (line.y1 > y1 and line.y2 > y1)
    )


def _disc_overlaps(cx: float, cy: float, r: float, rect: InsetRect) -> bool:
    x0, y0, x1, y1 = rect
    return cx + r > x0 and cx - r < x1 and cy + r > y0 and cy - r < y1


@debug_log_call(logger)
def margin_clip(
    bundle: GeometryBundle,
    width: float,
    height: float,
    margin_fraction: Optional[float] = None,
) -> GeometryBundle:
    """Drop geometry lying entirely beyond the inset panel rectangle.

    A line goes only when both endpoints are beyond the same edge; partially
    inside lines are kept whole.  Circles and arcs go only when the bounding
    box of their full circle has no overlap with the inset rectangle.
    """

    rect = inset_rect(width, height, margin_fraction)
    return bundle.replace(
        lines=[line for line in bundle.lines if not _line_outside(line, rect)],
        circles=[c for c in bundle.circles if _disc_overlaps(c.cx, c.cy, c.r, rect)],
        arcs=[a for a in bundle.arcs if _disc_overlaps(a.cx, a.cy, a.r, rect)],
    )


def _quantize(value: float, tolerance: float) -> int:
    # Round half up so keys match regardless of the platform's round().
    return int(math.floor(value / tolerance + 0.5))


def _unique(items: Iterable[T], keys) -> List[T]:
    seen: Set[Hashable] = set()
    kept: List[T] = []
    for item in items:
        candidates = keys(item)
        if any(key in seen for key in candidates):
            continue
        seen.add(candidates[0])
        kept.append(item)
    return kept


@debug_log_call(logger)
def deduplicate(bundle: GeometryBundle, tolerance: Optional[float] = None) -> GeometryBundle:
    """Keep the first occurrence of each line, circle and arc at ``tolerance``.

    Lines are keyed on their rounded endpoint pair in both directions so a
    reversed duplicate collapses onto the original.
    """

    if tolerance is None:
        tolerance = get_engine_config().dedupe_tolerance

    def q(value: float) -> int:
        return _quantize(value, tolerance)

    def line_keys(line: Line):
        a = (q(line.x1), q(line.y1))
        b = (q(line.x2), q(line.y2))
        return ((a, b), (b, a))

    def circle_keys(circle: Circle):
        return ((q(circle.cx), q(circle.cy), q(circle.r)),)

    def arc_keys(arc: Arc):
        return ((q(arc.cx), q(arc.cy), q(arc.r), q(arc.start), q(arc.end)),)

    return bundle.replace(
        lines=_unique(bundle.lines, line_keys),
        circles=_unique(bundle.circles, circle_keys),
        arcs=_unique(bundle.arcs, arc_keys),
    )


def postprocess(
    bundle: GeometryBundle,
    width: float,
    height: float,
    *,
    margin_fraction: Optional[float] = None,
    tolerance: Optional[float] = None,
) -> GeometryBundle:
    """Clip to the panel margin, then deduplicate."""

    clipped = margin_clip(bundle, width, height, margin_fraction)
    result = deduplicate(clipped, tolerance)
    logger.debug(
        "Post-processed bundle: %s -> %s -> %s", bundle.counts(), clipped.counts(), result.counts()
    )
    return result


__all__ = ["deduplicate", "inset_rect", "margin_clip", "postprocess"]
