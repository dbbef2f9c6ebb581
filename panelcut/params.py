"""Style parameter parsing for both pattern families."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Literal, Mapping, Optional

LayoutMode = Literal["centered", "tiled"]

LAYOUT_MODES = ("centered", "tiled")
DEFAULT_DENSITY = 0.5

# camelCase keys accepted from configuration surfaces, mapped to field names.
_KEY_ALIASES = {
    "subStyle": "sub_style",
    "sub_style": "sub_style",
    "density": "density",
    "scale": "scale",
    "minBridgeGap": "min_bridge_gap",
    "min_bridge_gap": "min_bridge_gap",
    "layoutMode": "layout_mode",
    "layout_mode": "layout_mode",
    "variation": "variation",
}


class ParameterError(ValueError):
    """Raised when a style parameter has an unusable value."""


@dataclass(frozen=True)
class StyleParameters:
    """Recognised style options.

    ``density`` sets the lattice pitch, ``scale`` the cutout-to-cell size
    fraction (``None`` keeps each style's own default) and ``min_bridge_gap``
    the absolute minimum width of uncut material.  ``variation`` forces one
    of the two categorical variations of a style.
    """

    sub_style: Optional[str] = None
    density: float = DEFAULT_DENSITY
    scale: Optional[float] = None
    min_bridge_gap: float = 0.0
    layout_mode: LayoutMode = "centered"
    variation: Optional[str] = None

    def __post_init__(self) -> None:
        density = _as_float("density", self.density)
        if not 0.0 <= density <= 1.0:
            raise ParameterError(f"density must lie in [0, 1] (got {density})")
        object.__setattr__(self, "density", density)

        if self.scale is not None:
            scale = _as_float("scale", self.scale)
            if not 0.0 < scale <= 1.0:
                raise ParameterError(f"scale must lie in (0, 1] (got {scale})")
            object.__setattr__(self, "scale", scale)

        gap = _as_float("minBridgeGap", self.min_bridge_gap)
        if gap < 0.0:
            raise ParameterError(f"minBridgeGap must be non-negative (got {gap})")
        object.__setattr__(self, "min_bridge_gap", gap)

        if self.layout_mode not in LAYOUT_MODES:
            raise ParameterError(
                f"layoutMode must be one of {', '.join(LAYOUT_MODES)} (got {self.layout_mode!r})"
            )

    @classmethod
    def from_mapping(cls, params: Optional[Mapping[str, Any]] = None) -> "StyleParameters":
        """Build parameters from a loose mapping; ``None`` values mean "use the default"."""

        if params is None:
            return cls()
        if isinstance(params, StyleParameters):
            return params
        kwargs = {}
        for key, value in params.items():
            field_name = _KEY_ALIASES.get(key)
            if field_name is None or value is None:
                continue
            kwargs[field_name] = value
        return cls(**kwargs)

    def scale_or(self, default: float) -> float:
        return default if self.scale is None else self.scale

    def with_style(self, sub_style: str) -> "StyleParameters":
        return replace(self, sub_style=sub_style)


def _as_float(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ParameterError(f"{name} must be a number (got {value!r})")
    try:
        result = float(value)
    except (TypeError, ValueError) as exc:
        raise ParameterError(f"{name} must be a number (got {value!r})") from exc
    if not math.isfinite(result):
        raise ParameterError(f"{name} must be finite (got {value!r})")
    return result


__all__ = [
    "DEFAULT_DENSITY",
    "LAYOUT_MODES",
    "LayoutMode",
    "ParameterError",
    "StyleParameters",
]
