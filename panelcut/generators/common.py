"""Helpers shared by both generator families."""

from __future__ import annotations

import logging
from typing import Callable, Tuple, TypeVar

from ..geometry import GeometryBundle
from ..params import StyleParameters
from ..rng import RandomStream

logger = logging.getLogger(__name__)

Generator = Callable[[float, float, RandomStream, StyleParameters], GeometryBundle]

V = TypeVar("V", bound=str)


def draw_variation(stream: RandomStream, params: StyleParameters, options: Tuple[V, V]) -> V:
    """Draw the single categorical variation of a call.

    Exactly one value is consumed.  A forced ``params.variation`` naming one
    of ``options`` wins over the draw, which still happens so the rest of the
    sequence is unchanged.
    """

    first, second = options
    drawn = first if stream.next() < 0.5 else second
    if params.variation is not None:
        if params.variation in options:
            return params.variation  # type: ignore[return-value]
        logger.warning(
            "Ignoring variation %r (expected one of %s)", params.variation, ", ".join(options)
        )
    return drawn


def base_size(width: float, height: float, base: float, spread: float, density: float) -> float:
    """Cell size from the shorter panel side: ``min(w, h) * (base + (1 - density) * spread)``."""

    return min(width, height) * (base + (1.0 - density) * spread)


def density_factor(density: float) -> float:
    """Radius multiplier for centred motifs."""

    return 0.8 + density * 0.2
