"""Sub-pattern generator library.

Every generator shares one capability::

    generator(width, height, stream, params) -> GeometryBundle

and is registered in an explicit name -> generator table per family.
"""

from .common import Generator, base_size, density_factor, draw_variation
from .modern import DEFAULT_MODERN_STYLE, MODERN_STYLES
from .sacred import DEFAULT_SACRED_STYLE, SACRED_STYLES, tile_layout

__all__ = [
    "DEFAULT_MODERN_STYLE",
    "DEFAULT_SACRED_STYLE",
    "Generator",
    "MODERN_STYLES",
    "SACRED_STYLES",
    "base_size",
    "density_factor",
    "draw_variation",
    "tile_layout",
]
