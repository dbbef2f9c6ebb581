"""Family A: lattice based "modular panel" motifs.

Every generator derives its pitch from the shorter panel side and
``params.density``, draws its single categorical variation first, then walks
a :class:`~panelcut.lattice.Lattice` emitting one motif per cell.  Geometry
outside the panel is left for the post-processor to clip.
"""

from __future__ import annotations

import logging
import math
from types import MappingProxyType
from typing import List, Sequence

from ..bridges import BridgePolicy
from ..geometry import BundleBuilder, GeometryBundle, Point, lerp
from ..lattice import SQRT3, Lattice, row_fraction
from ..params import StyleParameters
from ..rng import RandomStream
from .common import Generator, base_size, draw_variation

logger = logging.getLogger(__name__)

HALF_PI = math.pi * 0.5


def _gapped_polygon(builder: BundleBuilder, vertices: Sequence[Point], fraction: float) -> None:
    """Outline a polygon leaving a bridge at every vertex.

    Each side keeps only the stretch between ``fraction`` and
    ``1 - fraction`` of its length.
    """

    count = len(vertices)
    for idx in range(count):
        a = vertices[idx]
        b = vertices[(idx + 1) % count]
        p = lerp(a, b, fraction)
        q = lerp(a, b, 1.0 - fraction)
        builder.line(p[0], p[1], q[0], q[1])


def _midpoint_gapped_rectangle(
    builder: BundleBuilder, x: float, y: float, w: float, h: float, half: float
) -> None:
    """Rectangle outline with a ``2 * half`` wide bridge at each side midpoint."""

    mx = x + w * 0.5
    my = y + h * 0.5
    builder.line(x, y, mx - half, y)
    builder.line(mx + half, y, x + w, y)
    builder.line(x + w, y, x + w, my - half)
    builder.line(x + w, my + half, x + w, y + h)
    builder.line(x + w, y + h, mx + half, y + h)
    builder.line(mx - half, y + h, x, y + h)
    builder.line(x, y + h, x, my + half)
    builder.line(x, my - half, x, y)


def _diamond(cx: float, cy: float, hw: float, hh: float) -> List[Point]:
    return [(cx, cy - hh), (cx + hw, cy), (cx, cy + hh), (cx - hw, cy)]


def _hexagon(cx: float, cy: float, r: float) -> List[Point]:
    # Pointy-top: first vertex at -30 degrees.
    return [
        (cx + r * math.cos(math.pi / 3.0 * i - math.pi / 6.0), cy + r * math.sin(math.pi / 3.0 * i - math.pi / 6.0))
        for i in range(6)
    ]


def _scaled_about_centroid(points: Sequence[Point], factor: float) -> List[Point]:
    gx = sum(p[0] for p in points) / len(points)
    gy = sum(p[1] for p in points) / len(points)
    return [(gx + (px - gx) * factor, gy + (py - gy) * factor) for px, py in points]


def generate_slats(width: float, height: float, stream: RandomStream, params: StyleParameters) -> GeometryBundle:
    """Parallel slots, either staggered into segments or tapering across the panel."""

    policy = BridgePolicy.from_params(params)
    pitch = base_size(width, height, 0.03, 0.05, params.density)
    variation = draw_variation(stream, params, ("staggered", "tapered"))
    horizontal = stream.next() < 0.5
    slot = policy.cutout(pitch, params.scale_or(0.4))
    builder = BundleBuilder()
    if slot is None:
        return builder.build()

    along, across = (width, height) if horizontal else (height, width)

    def emit(a1: float, c1: float, a2: float, c2: float) -> None:
        if horizontal:
            builder.line(a1, c1, a2, c2)
        else:
            builder.line(c1, a1, c2, a2)

    if variation == "staggered":
        segment = base_size(width, height, 0.08, 0.12, params.density)
        bridge = policy.web(segment * 0.15 + 2.0 * slot * 0.08)
        cut = segment - bridge
        if cut <= 0.0:
            logger.debug("Slat segment %.4g cannot hold a %.4g bridge", segment, bridge)
            return builder.build()
        bar = pitch - slot
        course = Lattice("square", segment, pitch, stagger=0.5)
        for cell in course.cells(along, across, row_lead=0, row_trail=1):
            a1 = cell.x + bridge * 0.5
            a2 = a1 + cut
            c1 = cell.y + bar
            c2 = c1 + slot
            emit(a1, c1, a2, c1)
            emit(a2, c1, a2, c2)
            emit(a2, c2, a1, c2)
            emit(a1, c2, a1, c1)
    else:
        count = math.ceil(across / pitch) + 1
        widest = pitch - policy.web(pitch * 0.15)
        for row in range(count):
            slot_width = min(slot * (0.3 + row_fraction(row, count) * 1.4), widest)
            if slot_width <= 0.0:
                continue
            c1 = row * pitch
            c2 = c1 + slot_width
            emit(0.0, c1, along, c1)
            emit(0.0, c2, along, c2)

    logger.debug("slats: variation=%s horizontal=%s pitch=%.4g", variation, horizontal, pitch)
    return builder.build()


def generate_rectangular(width: float, height: float, stream: RandomStream, params: StyleParameters) -> GeometryBundle:
    """Square cutouts, nested with a bridged island or alternating in size."""

    policy = BridgePolicy.from_params(params)
    cell = base_size(width, height, 0.05, 0.07, params.density)
    variation = draw_variation(stream, params, ("nested", "alternating"))
    builder = BundleBuilder()
    size = policy.cutout(cell, params.scale_or(0.85))
    if size is None:
        return builder.build()

    lattice = Lattice.square(cell)
    for c in lattice.cells(width, height, lead=0, trail=1):
        if variation == "nested":
            pad = (cell - size) * 0.5
            x, y = c.x + pad, c.y + pad
            fraction = policy.gap_fraction(0.09, 2.0 * size)
            if fraction is None:
                builder.rectangle(x, y, size, size)
                continue
            _midpoint_gapped_rectangle(builder, x, y, size, size, fraction * size)

            inset = size * 0.25
            inner = size * 0.5
            inner_fraction = policy.gap_fraction(0.09, 2.0 * inner)
            if inner_fraction is None or not policy.spacing_ok(inset):
                continue
            _midpoint_gapped_rectangle(builder, x + inset, y + inset, inner, inner, inner_fraction * inner)
        else:
            side = size if c.parity == 0 else size * 0.6
            pad = (cell - side) * 0.5
            builder.rectangle(c.x + pad, c.y + pad, side, side)

    logger.debug("rectangular: variation=%s cell=%.4g size=%.4g", variation, cell, size)
    return builder.build()


def generate_diamond(width: float, height: float, stream: RandomStream, params: StyleParameters) -> GeometryBundle:
    """Rhombic lattice of diamonds, elongated or doubled with a bridged inner diamond."""

    policy = BridgePolicy.from_params(params)
    cell = base_size(width, height, 0.06, 0.08, params.density)
    variation = draw_variation(stream, params, ("elongated", "double"))
    builder = BundleBuilder()

    dw = cell
    dh = cell * 1.6 if variation == "elongated" else cell
    a = dw * 0.5
    b = dh * 0.5
    # Web between neighbouring diamonds is 2 * (1 - s) * a * b / hypot(a, b).
    scale = min(params.scale_or(0.84), 1.0 - policy.min_gap * math.hypot(a, b) / (2.0 * a * b))
    if scale <= 0.0:
        return builder.build()
    hw, hh = a * scale, b * scale

    lattice = Lattice.rhombic(dw, dh)
    for c in lattice.cells(width, height):
        cx, cy = c.x, c.y
        if variation == "elongated":
            builder.polyline(_diamond(cx, cy, hw, hh), closed=True)
            continue

        fraction = policy.gap_fraction(0.12, 2.0 * min(hw, hh))
        if fraction is None:
            builder.polyline(_diamond(cx, cy, hw, hh), closed=True)
            continue
        _gapped_polygon(builder, _diamond(cx, cy, hw, hh), fraction)

        ihw, ihh = hw * 0.5, hh * 0.5
        ring = (hw - ihw) * hh / math.hypot(hw, hh)
        inner_fraction = policy.gap_fraction(0.12, 2.0 * min(ihw, ihh))
        if inner_fraction is None or not policy.spacing_ok(ring):
            continue
        _gapped_polygon(builder, _diamond(cx, cy, ihw, ihh), inner_fraction)

    logger.debug("diamond: variation=%s cell=%.4g scale=%.4g", variation, cell, scale)
    return builder.build()


def generate_honeycomb(width: float, height: float, stream: RandomStream, params: StyleParameters) -> GeometryBundle:
    """Hexagonal lattice, either checker-skipped or with a bridged centre dot."""

    policy = BridgePolicy.from_params(params)
    hex_r = base_size(width, height, 0.03, 0.05, params.density)
    variation = draw_variation(stream, params, ("partial", "centerdot"))
    builder = BundleBuilder()

    # Web between neighbouring hexagons is sqrt(3) * (hex_r - inner_r).
    inner_r = min(hex_r * params.scale_or(0.925), hex_r - policy.min_gap / SQRT3)
    if inner_r <= 0.0:
        return builder.build()

    lattice = Lattice.hexagonal(hex_r * SQRT3, hex_r * 1.5)
    pitch = 2.0 * math.pi / 3.0
    dot_r = inner_r * 0.22
    dot_half = policy.angular_half_gap(pitch * 0.15 * 0.5, dot_r, pitch)
    # Bridge chord at a 120 degree vertex is sqrt(3) * fraction * side.
    fraction = policy.gap_fraction(0.125, SQRT3 * inner_r)

    for c in lattice.cells(width, height):
        if variation == "partial":
            if c.parity == 0:
                continue
            builder.polyline(_hexagon(c.x, c.y, inner_r), closed=True)
            continue

        if fraction is None:
            builder.polyline(_hexagon(c.x, c.y, inner_r), closed=True)
            continue
        _gapped_polygon(builder, _hexagon(c.x, c.y, inner_r), fraction)
        if dot_half is None:
            continue
        for k in range(3):
            bridge = pitch * k
            builder.arc(c.x, c.y, dot_r, bridge + dot_half, bridge + pitch - dot_half)

    logger.debug("honeycomb: variation=%s hex_r=%.4g inner_r=%.4g", variation, hex_r, inner_r)
    return builder.build()


def generate_chevron(width: float, height: float, stream: RandomStream, params: StyleParameters) -> GeometryBundle:
    """Rows of V shapes alternating direction, nested or broken at the arm midpoints."""

    policy = BridgePolicy.from_params(params)
    cell = base_size(width, height, 0.05, 0.07, params.density)
    variation = draw_variation(stream, params, ("nested", "broken"))
    builder = BundleBuilder()
    chev_w = cell * 1.5
    chev_h = cell
    scale = params.scale_or(1.0)
    spread = 0.56

    # Parallel arms of nested Vs sit dk * a * b / hypot(a, b) apart.
    a = chev_w * 0.5 * scale
    b = chev_h * 0.5 * scale
    arm_offset = a * b / math.hypot(a, b)
    depth = 3
    while depth > 1 and not policy.spacing_ok(arm_offset * spread / (depth - 1)):
        depth -= 1

    lattice = Lattice.rectangular(chev_w, chev_h)
    for c in lattice.cells(width, height):
        direction = 1.0 if c.row % 2 == 0 else -1.0
        cx = c.x + chev_w * 0.5
        if variation == "nested":
            for n in range(depth):
                k = 1.0 - spread * row_fraction(n, depth)
                sw = chev_w * 0.5 * k * scale
                sh = chev_h * 0.5 * k * scale * direction
                builder.polyline([(cx - sw, c.y), (cx, c.y + sh), (cx + sw, c.y)])
            continue

        half_w = chev_w * 0.5 * scale
        half_h = chev_h * 0.5 * scale
        fraction = policy.gap_fraction(0.15, 2.0 * math.hypot(half_w, half_h))
        if fraction is None:
            continue
        tip = (cx, c.y + half_h * direction)
        for start in ((cx - half_w, c.y), (cx + half_w, c.y)):
            p = lerp(start, tip, 0.5 - fraction)
            q = lerp(start, tip, 0.5 + fraction)
            builder.line(start[0], start[1], p[0], p[1])
            builder.line(q[0], q[1], tip[0], tip[1])

    logger.debug("chevron: variation=%s cell=%.4g depth=%d", variation, cell, depth)
    return builder.build()


def generate_triangle(width: float, height: float, stream: RandomStream, params: StyleParameters) -> GeometryBundle:
    """Triangular lattice of alternately pointing triangles."""

    policy = BridgePolicy.from_params(params)
    size = base_size(width, height, 0.05, 0.07, params.density)
    variation = draw_variation(stream, params, ("alternate", "subdivided"))
    builder = BundleBuilder()
    # Web between neighbours is 2 * (1 - s) * inradius, inradius = size / (2 * sqrt(3)).
    scale = min(params.scale_or(0.85), 1.0 - policy.min_gap * SQRT3 / size)
    if scale <= 0.0:
        return builder.build()

    lattice = Lattice.triangular(size)
    row_h = lattice.pitch_y
    for c in lattice.cells(width, height):
        up = c.parity == 0
        if variation == "alternate" and up:
            continue
        if up:
            tri = [(c.x + size * 0.5, c.y), (c.x, c.y + row_h), (c.x + size, c.y + row_h)]
        else:
            tri = [(c.x + size * 0.5, c.y + row_h), (c.x, c.y), (c.x + size, c.y)]
        tri = _scaled_about_centroid(tri, scale)
        if variation == "subdivided":
            tri = [lerp(tri[i], tri[(i + 1) % 3], 0.5) for i in range(3)]
        builder.polyline(tri, closed=True)

    logger.debug("triangle: variation=%s size=%.4g scale=%.4g", variation, size, scale)
    return builder.build()


def generate_circles(width: float, height: float, stream: RandomStream, params: StyleParameters) -> GeometryBundle:
    """Circle grid on a square or hex-packed lattice, as bridged rings or mixed discs."""

    policy = BridgePolicy.from_params(params)
    cell = base_size(width, height, 0.04, 0.06, params.density)
    variation = draw_variation(stream, params, ("concentric", "mixed"))
    hex_packed = stream.next() < 0.5
    builder = BundleBuilder()

    outer_r = min(cell * 0.5 * params.scale_or(0.88), (cell - policy.min_gap) * 0.5)
    if outer_r <= 0.0:
        return builder.build()

    lattice = Lattice.hexagonal(cell, cell * 0.866) if hex_packed else Lattice.square(cell)
    for c in lattice.cells(width, height):
        cx = c.x + cell * 0.5
        cy = c.y + cell * 0.5
        if variation == "mixed":
            builder.circle(cx, cy, outer_r if c.parity == 0 else outer_r * 0.6)
            continue

        radii = [outer_r, outer_r * 0.6]
        if stream.next() > 0.5:
            radii.append(outer_r * 0.3)
        previous = None
        for r in radii:
            if previous is not None and not policy.spacing_ok(previous - r):
                break
            half = policy.angular_half_gap(0.12, r, HALF_PI)
            if half is None:
                break
            for spoke in range(4):
                angle = HALF_PI * spoke
                builder.arc(cx, cy, r, angle + half, angle + HALF_PI - half)
            previous = r

    logger.debug(
        "circles: variation=%s hex_packed=%s cell=%.4g outer_r=%.4g", variation, hex_packed, cell, outer_r
    )
    return builder.build()


def generate_basketweave(width: float, height: float, stream: RandomStream, params: StyleParameters) -> GeometryBundle:
    """Woven pairs of bars alternating orientation, or rotated bridged diamonds."""

    policy = BridgePolicy.from_params(params)
    cell = base_size(width, height, 0.06, 0.08, params.density)
    variation = draw_variation(stream, params, ("weave", "rotated"))
    builder = BundleBuilder()
    lattice = Lattice.square(cell)

    if variation == "weave":
        web = policy.web(cell * (1.0 - params.scale_or(0.7)) / 3.0)
        bar = (cell - 3.0 * web) * 0.5
        long_side = cell - 2.0 * web
        if bar <= 0.0:
            return builder.build()
        for c in lattice.cells(width, height, trail=1):
            for i in range(2):
                offset = web + i * (bar + web)
                if c.parity == 0:
                    builder.rectangle(c.x + web, c.y + offset, long_side, bar)
                else:
                    builder.rectangle(c.x + offset, c.y + web, bar, long_side)
    else:
        half = min(cell * 0.5 * params.scale_or(0.7), (cell - policy.min_gap) * 0.5)
        if half <= 0.0:
            return builder.build()
        fraction = policy.gap_fraction(0.15, 2.0 * half)
        for c in lattice.cells(width, height, trail=1):
            diamond = _diamond(c.x + cell * 0.5, c.y + cell * 0.5, half, half)
            if fraction is None:
                builder.polyline(diamond, closed=True)
            else:
                _gapped_polygon(builder, diamond, fraction)

    logger.debug("basketweave: variation=%s cell=%.4g", variation, cell)
    return builder.build()


def generate_brick(width: float, height: float, stream: RandomStream, params: StyleParameters) -> GeometryBundle:
    """Running-bond brick courses, optionally interrupted by soldier rows."""

    policy = BridgePolicy.from_params(params)
    brick_w = base_size(width, height, 0.08, 0.1, params.density)
    brick_h = brick_w * 0.45
    variation = draw_variation(stream, params, ("standard", "soldier"))
    soldier_interval = stream.randint(4, 3)
    builder = BundleBuilder()

    # One mortar width for both joints, sized from the course height.
    cut_h = policy.cutout(brick_h, params.scale_or(0.78))
    if cut_h is None:
        return builder.build()
    web = brick_h - cut_h
    cut_w = brick_w - web

    course = Lattice("square", brick_w, brick_h, stagger=0.5)
    soldiers = Lattice.rectangular(brick_h, brick_h)
    soldier_w = brick_h - web
    soldier_h = min(brick_w * 0.6, brick_h) - web
    rows, _ = course.span(width, height)
    for row in rows:
        if variation == "soldier" and row % soldier_interval == 0:
            if soldier_w <= 0.0 or soldier_h <= 0.0:
                continue
            _, cols = soldiers.span(width, height)
            for col in cols:
                x, y = soldiers.origin(row, col)
                builder.rectangle(x + web * 0.5, y + web * 0.5, soldier_w, soldier_h)
            continue
        _, cols = course.span(width, height)
        for col in cols:
            x, y = course.origin(row, col)
            builder.rectangle(x + web * 0.5, y + web * 0.5, cut_w, cut_h)

    logger.debug(
        "brick: variation=%s brick_w=%.4g soldier_interval=%d", variation, brick_w, soldier_interval
    )
    return builder.build()


MODERN_STYLES: "MappingProxyType[str, Generator]" = MappingProxyType(
    {
        "slats": generate_slats,
        "rectangular": generate_rectangular,
        "diamond": generate_diamond,
        "honeycomb": generate_honeycomb,
        "chevron": generate_chevron,
        "triangle": generate_triangle,
        "circles": generate_circles,
        "basketweave": generate_basketweave,
        "brick": generate_brick,
    }
)

DEFAULT_MODERN_STYLE = "slats"


__all__ = [
    "DEFAULT_MODERN_STYLE",
    "MODERN_STYLES",
    "generate_basketweave",
    "generate_brick",
    "generate_chevron",
    "generate_circles",
    "generate_diamond",
    "generate_honeycomb",
    "generate_rectangular",
    "generate_slats",
    "generate_triangle",
]
