"""Two-layer DXF output built with ezdxf.

The panel frame goes on ``FRAME`` and the pattern on ``PATTERN``.  Each
primitive becomes one entity: ``LINE``, ``CIRCLE``, ``ARC`` (a full-turn arc
is written as a ``CIRCLE``) and a closed ``LWPOLYLINE`` per fill.  Input
coordinates are in inches and are multiplied by the unit factor.
"""

from __future__ import annotations

import io
import logging
import math
from pathlib import Path
from typing import Dict, Optional, Union

import ezdxf
from ezdxf import units

from ..geometry import GeometryBundle

logger = logging.getLogger(__name__)

FRAME_LAYER = "FRAME"
PATTERN_LAYER = "PATTERN"
LAYER_COLORS: Dict[str, int] = {FRAME_LAYER: 1, PATTERN_LAYER: 3}

UNIT_FACTORS: Dict[str, float] = {"inches": 1.0, "mm": 25.4}
_INSUNITS = {"inches": units.IN, "mm": units.MM}


def unit_factor(unit: str) -> float:
    try:
        return UNIT_FACTORS[unit]
    except KeyError:
        raise ValueError(f"unknown unit {unit!r} (expected one of {', '.join(UNIT_FACTORS)})") from None


def _add_bundle(msp, bundle: GeometryBundle, layer: str, k: float) -> None:
    attribs = {"layer": layer}
    for line in bundle.lines:
        msp.add_line((line.x1 * k, line.y1 * k), (line.x2 * k, line.y2 * k), dxfattribs=attribs)
    for circle in bundle.circles:
        msp.add_circle((circle.cx * k, circle.cy * k), circle.r * k, dxfattribs=attribs)
    for arc in bundle.arcs:
        center = (arc.cx * k, arc.cy * k)
        if arc.is_full_turn():
            msp.add_circle(center, arc.r * k, dxfattribs=attribs)
            continue
        msp.add_arc(
            center,
            arc.r * k,
            math.degrees(arc.start),
            math.degrees(arc.end),
            dxfattribs=attribs,
        )
    for fill in bundle.fills:
        msp.add_lwpolyline([(px * k, py * k) for px, py in fill.vertices()], close=True, dxfattribs=attribs)


def build_dxf_document(
    pattern: GeometryBundle,
    frame: Optional[GeometryBundle] = None,
    unit: str = "inches",
):
    """Return an ezdxf ``Drawing`` holding ``frame`` and ``pattern``."""

    k = unit_factor(unit)
    doc = ezdxf.new("R2010")
    doc.units = _INSUNITS[unit]
    for name, color in LAYER_COLORS.items():
        doc.layers.add(name, color=color)
    msp = doc.modelspace()
    if frame is not None:
        _add_bundle(msp, frame, FRAME_LAYER, k)
    _add_bundle(msp, pattern, PATTERN_LAYER, k)
    logger.debug(
        "Built DXF (%s, factor %g): frame=%s pattern=%s",
        unit,
        k,
        frame.counts() if frame is not None else None,
        pattern.counts(),
    )
    return doc


def dxf_string(pattern: GeometryBundle, frame: Optional[GeometryBundle] = None, unit: str = "inches") -> str:
    stream = io.StringIO()
    build_dxf_document(pattern, frame, unit).write(stream)
    return stream.getvalue()


def write_dxf(
    path: Union[str, Path],
    pattern: GeometryBundle,
    frame: Optional[GeometryBundle] = None,
    unit: str = "inches",
) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    build_dxf_document(pattern, frame, unit).saveas(target)
    logger.info("Wrote DXF to %s", target)
    return target


__all__ = [
    "FRAME_LAYER",
    "LAYER_COLORS",
    "PATTERN_LAYER",
    "UNIT_FACTORS",
    "build_dxf_document",
    "dxf_string",
    "unit_factor",
    "write_dxf",
]
