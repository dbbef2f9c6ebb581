"""Encoders turning bundles into cutting and preview files."""

from .dxf import UNIT_FACTORS, build_dxf_document, dxf_string, unit_factor, write_dxf
from .svg import render_svg, write_svg

__all__ = [
    "UNIT_FACTORS",
    "build_dxf_document",
    "dxf_string",
    "render_svg",
    "unit_factor",
    "write_dxf",
    "write_svg",
]
