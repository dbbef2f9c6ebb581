"""Family B: centred "sacred geometry" motifs.

Each generator places its motif around the midpoint of the area it is given,
with a characteristic radius of ``min(w, h) * k * density_factor``.  In tiled
layout the same motif is generated once for a square tile and repeated over a
grid by :func:`tile_layout`.
"""

from __future__ import annotations

import logging
import math
from types import MappingProxyType
from typing import List, Optional, Tuple

from ..arcs import decompose_circles_into_arcs
from ..bridges import BridgePolicy
from ..config import get_engine_config
from ..geometry import TWO_PI, BundleBuilder, Circle, GeometryBundle, Point, polar
from ..params import StyleParameters
from ..rng import RandomStream
from .common import Generator, density_factor

logger = logging.getLogger(__name__)

PHI = (1.0 + math.sqrt(5.0)) / 2.0
SYMMETRY_ORDERS = (6, 8, 10, 12, 16)


def _hexagonal_ring(cx: float, cy: float, step: float, ring: int) -> List[Point]:
    """Centres on hexagonal ring ``ring`` of a triangular lattice with spacing ``step``."""

    if ring == 0:
        return [(cx, cy)]
    corners = [polar(cx, cy, step * ring, math.pi / 3.0 * i) for i in range(6)]
    points: List[Point] = []
    for side in range(6):
        ax, ay = corners[side]
        bx, by = corners[(side + 1) % 6]
        for k in range(ring):
            t = k / ring
            points.append((ax + (bx - ax) * t, ay + (by - ay) * t))
    return points


def _connect_all(builder: BundleBuilder, centers: List[Point]) -> None:
    for i in range(len(centers)):
        for j in range(i + 1, len(centers)):
            builder.line(centers[i][0], centers[i][1], centers[j][0], centers[j][1])


def generate_flower_of_life(width: float, height: float, stream: RandomStream, params: StyleParameters) -> GeometryBundle:
    """Overlapping equal circles on hexagonal rings, cut as their intersection arcs."""

    cx, cy = width * 0.5, height * 0.5
    max_r = min(width, height) * 0.4 * density_factor(params.density)
    rings = stream.randint(2, 2)
    base_r = max_r / (rings + 1)

    circles = [
        Circle(px, py, base_r)
        for ring in range(rings + 1)
        for px, py in _hexagonal_ring(cx, cy, base_r, ring)
    ]
    arcs, whole = decompose_circles_into_arcs(circles)
    logger.debug("floweroflife: rings=%d circles=%d arcs=%d", rings, len(circles), len(arcs))
    return GeometryBundle(circles=tuple(whole), arcs=tuple(arcs))


def generate_metatron(width: float, height: float, stream: RandomStream, params: StyleParameters) -> GeometryBundle:
    """Fruit of Life: 13 mutually tangent circles with every pair of centres joined."""

    cx, cy = width * 0.5, height * 0.5
    r = min(width, height) * 0.16 * density_factor(params.density)
    centers = [(cx, cy)]
    centers += [polar(cx, cy, r, TWO_PI * i / 6.0) for i in range(6)]
    centers += [polar(cx, cy, 2.0 * r, TWO_PI * i / 6.0) for i in range(6)]

    builder = BundleBuilder()
    _connect_all(builder, centers)
    for px, py in centers:
        builder.circle(px, py, r)
    return builder.build()


def generate_starwars(width: float, height: float, stream: RandomStream, params: StyleParameters) -> GeometryBundle:
    """Thirteen centres (two offset rings of six around the middle), all pairs joined."""

    cx, cy = width * 0.5, height * 0.5
    r = min(width, height) * 0.35 * density_factor(params.density)
    centers = [(cx, cy)]
    centers += [polar(cx, cy, r, TWO_PI * i / 6.0) for i in range(6)]
    centers += [polar(cx, cy, r, TWO_PI * i / 6.0 + math.pi / 6.0) for i in range(6)]

    builder = BundleBuilder()
    _connect_all(builder, centers)
    return builder.build()


def generate_sri_yantra(width: float, height: float, stream: RandomStream, params: StyleParameters) -> GeometryBundle:
    cx, cy = width * 0.5, height * 0.5
    r = min(width, height) * 0.35 * density_factor(params.density)
    triangles = (
        ((cx, cy - r * 0.8), (cx - r * 0.7, cy + r * 0.5), (cx + r * 0.7, cy + r * 0.5)),
        ((cx, cy - r * 0.4), (cx - r * 0.5, cy + r * 0.3), (cx + r * 0.5, cy + r * 0.3)),
        ((cx - r * 0.6, cy - r * 0.5), (cx, cy + r * 0.6), (cx + r * 0.6, cy - r * 0.5)),
    )
    builder = BundleBuilder()
    for tri in triangles:
        builder.polyline(tri, closed=True)
    builder.circle(cx, cy, r)
    return builder.build()


def generate_mandala(width: float, height: float, stream: RandomStream, params: StyleParameters) -> GeometryBundle:
    """Radial spokes and concentric rings with a randomly drawn motif per ring."""

    cx, cy = width * 0.5, height * 0.5
    max_r = min(width, height) * 0.4 * density_factor(params.density)
    rings = stream.randint(3, 4)
    order = stream.choice(SYMMETRY_ORDERS)
    sector = TWO_PI / order

    builder = BundleBuilder()
    for i in range(order):
        ex, ey = polar(cx, cy, max_r, sector * i)
        builder.line(cx, cy, ex, ey)
    for ring in range(1, rings + 1):
        builder.circle(cx, cy, max_r * ring / rings)

    motifs = []
    for ring in range(1, rings + 1):
        outer = max_r * ring / rings
        inner = max_r * (ring - 1) / rings
        band = outer - inner
        motif = stream.randint(0, 4)
        motifs.append(motif)
        for i in range(order):
            mid = sector * (i + 0.5)
            if motif == 0:
                # Petal
                r1 = inner + band * 0.3
                r2 = inner + band * 0.7
                builder.polyline([polar(cx, cy, r1, mid - 0.2), polar(cx, cy, r2, mid), polar(cx, cy, r1, mid + 0.2)])
            elif motif == 1:
                px, py = polar(cx, cy, (inner + outer) * 0.5, mid)
                builder.circle(px, py, band * 0.2)
            elif motif == 2:
                tx, ty = polar(cx, cy, (inner + outer) * 0.5, mid)
                builder.polyline([polar(tx, ty, band * 0.3, mid + TWO_PI * t / 3.0) for t in range(3)], closed=True)

    logger.debug("mandala: rings=%d order=%d motifs=%s", rings, order, motifs)
    return builder.build()


def _spiral_step(x: float, y: float, w: float, h: float, direction: int) -> Tuple[Tuple[float, ...], Tuple[float, ...], Tuple[float, float, float, float]]:
    """Cut the next square off the rectangle ``(x, y, w, h)``.

    Returns the division line, the quarter arc ``(cx, cy, r, start, end)``
    inscribed in the square and the remaining rectangle.  The square is taken
    from the left, top, right and bottom side in turn so consecutive arcs
    join into one continuous spiral.
    """

    s = min(w, h)
    if direction == 0:
        return (x + s, y, x + s, y + h), (x + s, y + s, s, math.pi, 1.5 * math.pi), (x + s, y, w - s, h)
    if direction == 1:
        return (x, y + s, x + w, y + s), (x, y + s, s, 1.5 * math.pi, TWO_PI), (x, y + s, w, h - s)
    if direction == 2:
        return (x + w - s, y, x + w - s, y + h), (x + w - s, y, s, 0.0, 0.5 * math.pi), (x, y, w - s, h)
    return (x, y + h - s, x + w, y + h - s), (x + s, y + h - s, s, 0.5 * math.pi, math.pi), (x, y, w, h - s)


def generate_fibonacci(width: float, height: float, stream: RandomStream, params: StyleParameters) -> GeometryBundle:
    """Golden rectangle subdivided into squares with a quarter-arc spiral."""

    cx, cy = width * 0.5, height * 0.5
    size = min(width, height) * 0.4 * density_factor(params.density)
    iterations = stream.randint(6, 3)

    x, y = cx - size * 0.5, cy - size / (2.0 * PHI)
    w, h = size, size / PHI
    builder = BundleBuilder()
    builder.rectangle(x, y, w, h)
    for step in range(iterations):
        line, arc, (x, y, w, h) = _spiral_step(x, y, w, h, step % 4)
        builder.line(*line)
        builder.arc(*arc)
    builder.circle(cx, cy, size * 0.7)
    logger.debug("fibonacci: iterations=%d size=%.4g", iterations, size)
    return builder.build()


def generate_torus(width: float, height: float, stream: RandomStream, params: StyleParameters) -> GeometryBundle:
    """Ring of overlapping loops, each cut as six arcs with alternate loops woven."""

    cx, cy = width * 0.5, height * 0.5
    major_r = min(width, height) * 0.3 * density_factor(params.density)
    loops = stream.randint(6, 4)
    loop_r = major_r * 0.4
    segments = 6
    pitch = TWO_PI / segments
    half = BridgePolicy.from_params(params).angular_half_gap(math.pi / 24.0, loop_r, pitch)

    builder = BundleBuilder()
    for i in range(loops):
        lx, ly = polar(cx, cy, major_r, TWO_PI * i / loops)
        if half is None:
            builder.circle(lx, ly, loop_r)
            continue
        for s in range(segments):
            if i % 2 == 0 and s % 2 == 0:
                continue
            builder.arc(lx, ly, loop_r, pitch * s + half, pitch * (s + 1) - half)
    logger.debug("torus: loops=%d major_r=%.4g", loops, major_r)
    return builder.build()


def tile_layout(
    generator: Generator,
    width: float,
    height: float,
    stream: RandomStream,
    params: StyleParameters,
    tile_fraction: Optional[float] = None,
) -> GeometryBundle:
    """Generate ``generator``'s motif once for a square tile and repeat it.

    The tile side is ``min(w, h) * tile_fraction``; a grid of
    ``ceil(w / tile) x ceil(h / tile)`` tiles is centred on the panel.
    """

    if tile_fraction is None:
        tile_fraction = get_engine_config().tile_fraction
    tile = min(width, height) * tile_fraction
    motif = generator(tile, tile, stream, params)
    cols = math.ceil(width / tile)
    rows = math.ceil(height / tile)
    ox = (width - cols * tile) * 0.5
    oy = (height - rows * tile) * 0.5
    builder = BundleBuilder()
    for row in range(rows):
        for col in range(cols):
            builder.extend(motif.translated(ox + col * tile, oy + row * tile))
    logger.debug("Tiled motif %dx%d with tile %.4g", cols, rows, tile)
    return builder.build()


SACRED_STYLES: "MappingProxyType[str, Generator]" = MappingProxyType(
    {
        "floweroflife": generate_flower_of_life,
        "metatron": generate_metatron,
        "starwars": generate_starwars,
        "sriyantra": generate_sri_yantra,
        "mandala": generate_mandala,
        "fibonacci": generate_fibonacci,
        "torus": generate_torus,
    }
)

DEFAULT_SACRED_STYLE = "floweroflife"


__all__ = [
    "DEFAULT_SACRED_STYLE",
    "PHI",
    "SACRED_STYLES",
    "generate_fibonacci",
    "generate_flower_of_life",
    "generate_mandala",
    "generate_metatron",
    "generate_sri_yantra",
    "generate_starwars",
    "generate_torus",
    "tile_layout",
]
