"""Per-family synthesis entry points.

A call creates a fresh :class:`~panelcut.rng.RandomStream` from the seed,
selects the generator named by ``subStyle`` from the family's table, runs it
and post-processes the result (margin clip, then dedupe).  Nothing is shared
between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from .generators import (
    DEFAULT_MODERN_STYLE,
    DEFAULT_SACRED_STYLE,
    MODERN_STYLES,
    SACRED_STYLES,
    Generator,
    tile_layout,
)
from .geometry import GeometryBundle
from .logging_utils import debug_log_call
from .params import StyleParameters
from .postprocess import postprocess
from .rng import create_stream

logger = logging.getLogger(__name__)

ParametersLike = Union[StyleParameters, Mapping[str, Any], None]


@dataclass(frozen=True)
class PatternSynthesizer:
    """One pattern family: a style table plus its default style."""

    family: str
    styles: Mapping[str, Generator]
    default_style: str
    supports_tiling: bool = False

    def style_names(self) -> tuple:
        return tuple(self.styles)

    def resolve(self, params: StyleParameters) -> Optional[Generator]:
        return self.styles.get(params.sub_style or self.default_style)

    def synthesize(
        self, width: float, height: float, seed: int, parameters: ParametersLike = None
    ) -> GeometryBundle:
        """Return the post-processed bundle for one panel.

        Unknown ``subStyle`` names yield an empty bundle; malformed parameter
        values raise :class:`~panelcut.params.ParameterError`.
        """

        params = StyleParameters.from_mapping(parameters)
        style = params.sub_style or self.default_style
        generator = self.styles.get(style)
        if generator is None:
            logger.warning(
                "Unknown %s sub-style %r (known: %s); returning an empty bundle",
                self.family,
                style,
                ", ".join(self.styles),
            )
            return GeometryBundle.empty()

        stream = create_stream(seed)
        if self.supports_tiling and params.layout_mode == "tiled":
            raw = tile_layout(generator, width, height, stream, params)
        else:
            if params.layout_mode == "tiled":
                logger.debug("layoutMode ignored by the %s family", self.family)
            raw = generator(width, height, stream, params)

        result = postprocess(raw, width, height)
        logger.info(
            "Synthesised %s/%s (%gx%g, seed=%s, %d draws): %s -> %s",
            self.family,
            style,
            width,
            height,
            seed,
            stream.draws,
            raw.counts(),
            result.counts(),
        )
        return result


MODERN = PatternSynthesizer("modern", MODERN_STYLES, DEFAULT_MODERN_STYLE)
SACRED = PatternSynthesizer("sacred", SACRED_STYLES, DEFAULT_SACRED_STYLE, supports_tiling=True)

FAMILIES: Mapping[str, PatternSynthesizer] = {
    MODERN.family: MODERN,
    SACRED.family: SACRED,
}


def get_family(name: str) -> PatternSynthesizer:
    try:
        return FAMILIES[name]
    except KeyError:
        raise ValueError(f"unknown pattern family {name!r} (expected one of {', '.join(FAMILIES)})") from None


@debug_log_call(logger)
def synthesize(
    family: str, width: float, height: float, seed: int, parameters: ParametersLike = None
) -> GeometryBundle:
    return get_family(family).synthesize(width, height, seed, parameters)


@debug_log_call(logger)
def synthesize_modern(
    width: float, height: float, seed: int, parameters: ParametersLike = None
) -> GeometryBundle:
    return MODERN.synthesize(width, height, seed, parameters)


@debug_log_call(logger)
def synthesize_sacred(
    width: float, height: float, seed: int, parameters: ParametersLike = None
) -> GeometryBundle:
    return SACRED.synthesize(width, height, seed, parameters)


__all__ = [
    "FAMILIES",
    "MODERN",
    "PatternSynthesizer",
    "SACRED",
    "get_family",
    "synthesize",
    "synthesize_modern",
    "synthesize_sacred",
]
