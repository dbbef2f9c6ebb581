"""Panel outlines: inside tests, relaxed clipping and frame geometry."""

from __future__ import annotations

import logging
import math
from typing import Literal, Tuple

from .geometry import TWO_PI, BundleBuilder, GeometryBundle

logger = logging.getLogger(__name__)

PanelShape = Literal["rectangle", "circle", "arch", "oval"]

PANEL_SHAPES: Tuple[str, ...] = ("rectangle", "circle", "arch", "oval")

# Fraction of the panel height where the arch's straight sides end.
ARCH_SPRING = 0.6
OVAL_SEGMENTS = 64
ARCH_SEGMENTS = 32


def _check_shape(shape: str) -> None:
    if shape not in PANEL_SHAPES:
        raise ValueError(f"unknown panel shape {shape!r} (expected one of {', '.join(PANEL_SHAPES)})")


def is_inside_panel(x: float, y: float, width: float, height: float, shape: PanelShape = "rectangle") -> bool:
    _check_shape(shape)
    if shape == "rectangle":
        return 0.0 <= x <= width and 0.0 <= y <= height
    if shape == "circle":
        r = min(width, height) * 0.5
        return (x - width * 0.5) ** 2 + (y - height * 0.5) ** 2 <= r * r
    if shape == "arch":
        spring = height * ARCH_SPRING
        if y > spring:
            return 0.0 <= x <= width and y <= height
        return ((x - width * 0.5) / (width * 0.5)) ** 2 + ((y - spring) / spring) ** 2 <= 1.0
    return ((x - width * 0.5) / (width * 0.5)) ** 2 + ((y - height * 0.5) / (height * 0.5)) ** 2 <= 1.0


def clip_to_panel(bundle: GeometryBundle, width: float, height: float, shape: PanelShape = "rectangle") -> GeometryBundle:
    """Keep geometry touching the panel shape.

    This is not a geometric clip: a line survives when either endpoint is
    inside, a circle when its centre is inside and a fill when any vertex is
    inside.  Arcs pass through unchanged.  Rectangles return the bundle as is.
    """

    _check_shape(shape)
    if shape == "rectangle":
        return bundle

    def inside(x: float, y: float) -> bool:
        return is_inside_panel(x, y, width, height, shape)

    clipped = bundle.replace(
        lines=[l for l in bundle.lines if inside(l.x1, l.y1) or inside(l.x2, l.y2)],
        circles=[c for c in bundle.circles if inside(c.cx, c.cy)],
        fills=[f for f in bundle.fills if any(inside(px, py) for px, py in f.vertices())],
    )
    logger.debug("Clipped to %s panel: %s -> %s", shape, bundle.counts(), clipped.counts())
    return clipped


def frame_outline(width: float, height: float, shape: PanelShape = "rectangle") -> GeometryBundle:
    """Panel boundary as cuttable primitives; curved edges become line chains."""

    _check_shape(shape)
    builder = BundleBuilder()
    if shape == "rectangle":
        builder.rectangle(0.0, 0.0, width, height)
    elif shape == "circle":
        builder.circle(width * 0.5, height * 0.5, min(width, height) * 0.5)
    elif shape == "oval":
        cx, cy, rx, ry = width * 0.5, height * 0.5, width * 0.5, height * 0.5
        points = [
            (cx + rx * math.cos(TWO_PI * i / OVAL_SEGMENTS), cy + ry * math.sin(TWO_PI * i / OVAL_SEGMENTS))
            for i in range(OVAL_SEGMENTS)
        ]
        builder.polyline(points, closed=True)
    else:
        spring = height * ARCH_SPRING
        builder.line(0.0, height, 0.0, spring)
        builder.line(width, spring, width, height)
        builder.line(width, height, 0.0, height)
        cx, rx = width * 0.5, width * 0.5
        points = [
            (cx + rx * math.cos(math.pi + math.pi * i / ARCH_SEGMENTS), spring + spring * math.sin(math.pi + math.pi * i / ARCH_SEGMENTS))
            for i in range(ARCH_SEGMENTS + 1)
        ]
        builder.polyline(points)
    return builder.build()


def frame_svg_path(width: float, height: float, shape: PanelShape = "rectangle") -> str:
    """SVG path data for the panel boundary."""

    _check_shape(shape)
    if shape == "rectangle":
        return f"M 0 0 L {width:g} 0 L {width:g} {height:g} L 0 {height:g} Z"
    if shape == "arch":
        spring = height * ARCH_SPRING
        return (
            f"M 0 {height:g} L 0 {spring:g} A {width * 0.5:g} {spring:g} 0 0 1 {width:g} {spring:g} "
            f"L {width:g} {height:g} Z"
        )
    cx, cy = width * 0.5, height * 0.5
    if shape == "circle":
        rx = ry = min(width, height) * 0.5
    else:
        rx, ry = width * 0.5, height * 0.5
    return (
        f"M {cx - rx:g} {cy:g} A {rx:g} {ry:g} 0 1 1 {cx + rx:g} {cy:g} "
        f"A {rx:g} {ry:g} 0 1 1 {cx - rx:g} {cy:g} Z"
    )


__all__ = [
    "PANEL_SHAPES",
    "PanelShape",
    "clip_to_panel",
    "frame_outline",
    "frame_svg_path",
    "is_inside_panel",
]
