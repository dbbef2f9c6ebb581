"""Engine-wide numeric settings."""

from __future__ import annotations

import copy
from dataclasses import dataclass


@dataclass
class EngineConfig:
    """Tunables shared by the post-processor, decomposer and tiled layout."""

    margin_fraction: float = 0.03
    dedupe_tolerance: float = 0.01
    intersection_epsilon: float = 1e-3
    tile_fraction: float = 0.5


_ENGINE_CONFIG = EngineConfig()


def get_engine_config() -> EngineConfig:
    return copy.deepcopy(_ENGINE_CONFIG)


def set_engine_config(config: EngineConfig) -> None:
    global _ENGINE_CONFIG
    _ENGINE_CONFIG = copy.deepcopy(config)


def reset_engine_config() -> None:
    set_engine_config(EngineConfig())
