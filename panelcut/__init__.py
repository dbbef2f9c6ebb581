from .rng import RandomStream, create_stream
from .geometry import Arc, BundleBuilder, Circle, Fill, GeometryBundle, Line
from .params import ParameterError, StyleParameters
from .config import EngineConfig, get_engine_config, set_engine_config, reset_engine_config
from .lattice import Lattice, LatticeCell
from .bridges import BridgePolicy
from .arcs import circle_intersections, decompose_circles_into_arcs
from .postprocess import deduplicate, margin_clip, postprocess
from .generators import MODERN_STYLES, SACRED_STYLES, tile_layout
from .synthesis import (
    FAMILIES,
    PatternSynthesizer,
    get_family,
    synthesize,
    synthesize_modern,
    synthesize_sacred,
)
from .shapes import PANEL_SHAPES, clip_to_panel, frame_outline, frame_svg_path, is_inside_panel
from .export import UNIT_FACTORS, build_dxf_document, dxf_string, render_svg, write_dxf, write_svg

__all__ = [
    'RandomStream',
    'create_stream',
    'Arc',
    'BundleBuilder',
    'Circle',
    'Fill',
    'GeometryBundle',
    'Line',
    'ParameterError',
    'StyleParameters',
    'EngineConfig',
    'get_engine_config',
    'set_engine_config',
    'reset_engine_config',
    'Lattice',
    'LatticeCell',
    'BridgePolicy',
    'circle_intersections',
    'decompose_circles_into_arcs',
    'deduplicate',
    'margin_clip',
    'postprocess',
    'MODERN_STYLES',
    'SACRED_STYLES',
    'tile_layout',
    'FAMILIES',
    'PatternSynthesizer',
    'get_family',
    'synthesize',
    'synthesize_modern',
    'synthesize_sacred',
    'PANEL_SHAPES',
    'clip_to_panel',
    'frame_outline',
    'frame_svg_path',
    'is_inside_panel',
    'UNIT_FACTORS',
    'build_dxf_document',
    'dxf_string',
    'render_svg',
    'write_dxf',
    'write_svg',
]
