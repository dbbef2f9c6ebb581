"""Geometry primitives and the bundle returned by every synthesis call."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, List, Literal, NamedTuple, Optional, Sequence, Tuple

import numpy as np

Point = Tuple[float, float]
FillKind = Literal["rect", "polygon"]

TWO_PI = 2.0 * math.pi


class Line(NamedTuple):
    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def length(self) -> float:
        return math.hypot(self.x2 - self.x1, self.y2 - self.y1)


class Circle(NamedTuple):
    cx: float
    cy: float
    r: float


class Arc(NamedTuple):
    """Circular arc swept from ``start`` to ``end`` (radians, ``end > start``)."""

    cx: float
    cy: float
    r: float
    start: float
    end: float

    @property
    def span(self) -> float:
        return self.end - self.start

    def point_at(self, angle: float) -> Point:
        return (self.cx + self.r * math.cos(angle), self.cy + self.r * math.sin(angle))

    @property
    def endpoints(self) -> Tuple[Point, Point]:
        return self.point_at(self.start), self.point_at(self.end)

    def is_full_turn(self, eps: float = 1e-9) -> bool:
        return self.span >= TWO_PI - eps


@dataclass(frozen=True)
class Fill:
    """Solid region: an axis aligned rectangle or a closed polygon."""

    kind: FillKind
    points: Tuple[Point, ...]

    @classmethod
    def rect(cls, x: float, y: float, w: float, h: float) -> "Fill":
        return cls("rect", ((x, y), (x + w, y + h)))

    @classmethod
    def polygon(cls, points: Iterable[Point]) -> "Fill":
        return cls("polygon", tuple((float(px), float(py)) for px, py in points))

    def vertices(self) -> Tuple[Point, ...]:
        if self.kind == "rect":
            (x0, y0), (x1, y1) = self.points
            return ((x0, y0), (x1, y0), (x1, y1), (x0, y1))
        return self.points


@dataclass(frozen=True)
class GeometryBundle:
    """Immutable output of a synthesis call, in panel-local units."""

    lines: Tuple[Line, ...] = ()
    circles: Tuple[Circle, ...] = ()
    arcs: Tuple[Arc, ...] = ()
    fills: Tuple[Fill, ...] = ()

    @classmethod
    def empty(cls) -> "GeometryBundle":
        return cls()

    def is_empty(self) -> bool:
        return not (self.lines or self.circles or self.arcs or self.fills)

    def counts(self) -> dict:
        return {
            "lines": len(self.lines),
            "circles": len(self.circles),
            "arcs": len(self.arcs),
            "fills": len(self.fills),
        }

    def replace(
        self,
        *,
        lines: Optional[Iterable[Line]] = None,
        circles: Optional[Iterable[Circle]] = None,
        arcs: Optional[Iterable[Arc]] = None,
        fills: Optional[Iterable[Fill]] = None,
    ) -> "GeometryBundle":
        return GeometryBundle(
            lines=self.lines if lines is None else tuple(lines),
            circles=self.circles if circles is None else tuple(circles),
            arcs=self.arcs if arcs is None else tuple(arcs),
            fills=self.fills if fills is None else tuple(fills),
        )

    def translated(self, dx: float, dy: float) -> "GeometryBundle":
        return GeometryBundle(
            lines=tuple(Line(l.x1 + dx, l.y1 + dy, l.x2 + dx, l.y2 + dy) for l in self.lines),
            circles=tuple(Circle(c.cx + dx, c.cy + dy, c.r) for c in self.circles),
            arcs=tuple(Arc(a.cx + dx, a.cy + dy, a.r, a.start, a.end) for a in self.arcs),
            fills=tuple(
                Fill(f.kind, tuple((px + dx, py + dy) for px, py in f.points)) for f in self.fills
            ),
        )

    def scaled(self, factor: float) -> "GeometryBundle":
        """Uniformly scale about the origin; arc angles are preserved."""

        k = float(factor)
        return GeometryBundle(
            lines=tuple(Line(l.x1 * k, l.y1 * k, l.x2 * k, l.y2 * k) for l in self.lines),
            circles=tuple(Circle(c.cx * k, c.cy * k, c.r * k) for c in self.circles),
            arcs=tuple(Arc(a.cx * k, a.cy * k, a.r * k, a.start, a.end) for a in self.arcs),
            fills=tuple(Fill(f.kind, tuple((px * k, py * k) for px, py in f.points)) for f in self.fills),
        )

    def merged(self, *others: "GeometryBundle") -> "GeometryBundle":
        builder = BundleBuilder()
        builder.extend(self)
        for other in others:
            builder.extend(other)
        return builder.build()

    def bounds(self) -> Optional[Tuple[float, float, float, float]]:
        """Return ``(min_x, min_y, max_x, max_y)`` over all primitives, or ``None``."""

        xs: List[float] = []
        ys: List[float] = []
        for l in self.lines:
            xs.extend((l.x1, l.x2))
            ys.extend((l.y1, l.y2))
        for c in list(self.circles) + [Circle(a.cx, a.cy, a.r) for a in self.arcs]:
            xs.extend((c.cx - c.r, c.cx + c.r))
            ys.extend((c.cy - c.r, c.cy + c.r))
        for f in self.fills:
            for px, py in f.points:
                xs.append(px)
                ys.append(py)
        if not xs:
            return None
        x_arr = np.asarray(xs, dtype=float)
        y_arr = np.asarray(ys, dtype=float)
        return float(x_arr.min()), float(y_arr.min()), float(x_arr.max()), float(y_arr.max())


@dataclass
class BundleBuilder:
    """Mutable accumulator used by generators before freezing a bundle."""

    lines: List[Line] = field(default_factory=list)
    circles: List[Circle] = field(default_factory=list)
    arcs: List[Arc] = field(default_factory=list)
    fills: List[Fill] = field(default_factory=list)

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.lines.append(Line(float(x1), float(y1), float(x2), float(y2)))

    def polyline(self, points: Sequence[Point], *, closed: bool = False) -> None:
        count = len(points)
        if count < 2:
            return
        last = count if closed else count - 1
        for idx in range(last):
            ax, ay = points[idx]
            bx, by = points[(idx + 1) % count]
            self.line(ax, ay, bx, by)

    def rectangle(self, x: float, y: float, w: float, h: float) -> None:
        self.polyline([(x, y), (x + w, y), (x + w, y + h), (x, y + h)], closed=True)

    def circle(self, cx: float, cy: float, r: float) -> None:
        self.circles.append(Circle(float(cx), float(cy), float(r)))

    def arc(self, cx: float, cy: float, r: float, start: float, end: float) -> None:
        self.arcs.append(Arc(float(cx), float(cy), float(r), float(start), float(end)))

    def fill(self, fill: Fill) -> None:
        self.fills.append(fill)

    def extend(self, bundle: GeometryBundle) -> None:
        self.lines.extend(bundle.lines)
        self.circles.extend(bundle.circles)
        self.arcs.extend(bundle.arcs)
        self.fills.extend(bundle.fills)

    def build(self) -> GeometryBundle:
        return GeometryBundle(
            lines=tuple(self.lines),
            circles=tuple(self.circles),
            arcs=tuple(self.arcs),
            fills=tuple(self.fills),
        )


def polar(cx: float, cy: float, r: float, angle: float) -> Point:
    return cx + r * math.cos(angle), cy + r * math.sin(angle)


def lerp(a: Point, b: Point, t: float) -> Point:
    return a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t


__all__ = [
    "Arc",
    "BundleBuilder",
    "Circle",
    "Fill",
    "FillKind",
    "GeometryBundle",
    "Line",
    "Point",
    "TWO_PI",
    "lerp",
    "polar",
]
