"""Bridge (uncut web) sizing shared by the lattice generators.

Two strategies coexist.  With ``min_gap == 0`` every motif keeps its fixed
fractional gap.  With a positive ``min_gap`` the fraction becomes
``max(default, min_gap / extent)`` where ``extent`` is the length that the
fraction multiplies into a physical bridge width, so bridges never shrink
below the absolute minimum as motifs scale down.  Fractions are kept inside
the open interval (0, 0.5); when the minimum cannot fit the resolver returns
``None`` and the caller must fall back to a motif without an island.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from .params import StyleParameters

logger = logging.getLogger(__name__)

MAX_FRACTION = 0.5
FRACTION_FLOOR = 1e-6


@dataclass(frozen=True)
class BridgePolicy:
    """Minimum-bridge rules for one synthesis call."""

    min_gap: float = 0.0

    @classmethod
    def from_params(cls, params: StyleParameters) -> "BridgePolicy":
        return cls(min_gap=params.min_bridge_gap)

    @property
    def enforced(self) -> bool:
        return self.min_gap > 0.0

    def gap_fraction(self, default_fraction: float, extent: float) -> Optional[float]:
        """Resolve the gap fraction for one motif instance.

        ``fraction * extent`` is the physical bridge width.  Returns ``None``
        when ``extent`` is too small to carry ``min_gap``.
        """

        if extent <= 0.0:
            return None
        required = self.min_gap / extent
        if required >= MAX_FRACTION:
            return None
        fraction = max(default_fraction, required)
        return min(max(fraction, FRACTION_FLOOR), MAX_FRACTION - FRACTION_FLOOR)

    def angular_half_gap(self, default_half_gap: float, radius: float, pitch: float) -> Optional[float]:
        """Half-angle of a gap on a ring of ``radius`` split every ``pitch`` radians.

        The chord across the gap is at least ``min_gap``.  ``None`` when the
        gaps would swallow the whole arc between two bridges.
        """

        if radius <= 0.0:
            return None
        ratio = self.min_gap / (2.0 * radius)
        if ratio >= 1.0:
            return None
        half = max(default_half_gap, math.asin(ratio))
        if half >= pitch * MAX_FRACTION:
            return None
        return max(half, FRACTION_FLOOR)

    def cutout(self, pitch: float, scale: float) -> Optional[float]:
        """Cutout size inside a cell of ``pitch`` leaving at least ``min_gap`` of web."""

        size = min(pitch * scale, pitch - self.min_gap)
        if size <= 0.0:
            return None
        return size

    def web(self, default_width: float) -> float:
        return max(default_width, self.min_gap)

    def spacing_ok(self, spacing: float) -> bool:
        """``True`` when two parallel cuts ``spacing`` apart leave enough material."""

        return spacing >= self.min_gap


__all__ = ["BridgePolicy", "FRACTION_FLOOR", "MAX_FRACTION"]
