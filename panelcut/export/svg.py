"""Standalone SVG preview of a bundle inside its panel frame."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import List, Union

from ..geometry import Arc, GeometryBundle
from ..shapes import PanelShape, frame_svg_path

logger = logging.getLogger(__name__)

PATTERN_COLOR = "#2563eb"
FRAME_COLOR = "#dc2626"
PADDING = 10.0

_TEMPLATE = """<svg xmlns="http://www.w3.org/2000/svg" viewBox="{vx:g} {vy:g} {vw:g} {vh:g}" width="{vw:g}" height="{vh:g}">
  <defs>
    <clipPath id="panelClip">
      <path d="{frame}" />
    </clipPath>
  </defs>
  <g clip-path="url(#panelClip)" stroke="{pattern_color}" stroke-width="1" fill="none">
{body}
  </g>
{frame_element}</svg>
"""


def _fmt(value: float) -> str:
    return f"{value:.4f}".rstrip("0").rstrip(".")


def _arc_path(arc: Arc) -> str:
    if arc.is_full_turn():
        # SVG cannot sweep a full turn in one segment.
        mid = arc.start + math.pi
        halves = [(arc.start, mid), (mid, arc.start + 2.0 * math.pi)]
    else:
        halves = [(arc.start, arc.end)]
    sx, sy = arc.point_at(halves[0][0])
    parts = [f"M {_fmt(sx)} {_fmt(sy)}"]
    for start, end in halves:
        ex, ey = arc.point_at(end)
        large = 1 if end - start > math.pi else 0
        parts.append(f"A {_fmt(arc.r)} {_fmt(arc.r)} 0 {large} 1 {_fmt(ex)} {_fmt(ey)}")
    return " ".join(parts)


def _elements(bundle: GeometryBundle) -> List[str]:
    out: List[str] = []
    for l in bundle.lines:
        out.append(f'    <line x1="{_fmt(l.x1)}" y1="{_fmt(l.y1)}" x2="{_fmt(l.x2)}" y2="{_fmt(l.y2)}" />')
    for c in bundle.circles:
        out.append(f'    <circle cx="{_fmt(c.cx)}" cy="{_fmt(c.cy)}" r="{_fmt(c.r)}" />')
    for a in bundle.arcs:
        out.append(f'    <path d="{_arc_path(a)}" />')
    for f in bundle.fills:
        points = " ".join(f"{_fmt(px)},{_fmt(py)}" for px, py in f.vertices())
        out.append(f'    <polygon points="{points}" fill="{PATTERN_COLOR}" fill-opacity="0.3" />')
    return out


def render_svg(
    bundle: GeometryBundle,
    width: float,
    height: float,
    shape: PanelShape = "rectangle",
    *,
    show_frame: bool = True,
) -> str:
    """Render ``bundle`` clipped to the panel outline as an SVG document."""

    frame = frame_svg_path(width, height, shape)
    frame_element = (
        f'  <path d="{frame}" fill="none" stroke="{FRAME_COLOR}" stroke-width="2.5" />\n' if show_frame else ""
    )
    return _TEMPLATE.format(
        vx=-PADDING,
        vy=-PADDING,
        vw=width + 2.0 * PADDING,
        vh=height + 2.0 * PADDING,
        frame=frame,
        pattern_color=PATTERN_COLOR,
        body="\n".join(_elements(bundle)),
        frame_element=frame_element,
    )


def write_svg(
    path: Union[str, Path],
    bundle: GeometryBundle,
    width: float,
    height: float,
    shape: PanelShape = "rectangle",
    *,
    show_frame: bool = True,
) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(render_svg(bundle, width, height, shape, show_frame=show_frame), encoding="utf-8")
    logger.info("Wrote SVG to %s", target)
    return target


__all__ = ["FRAME_COLOR", "PATTERN_COLOR", "render_svg", "write_svg"]
