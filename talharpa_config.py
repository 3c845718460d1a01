#!/usr/bin/env python3
"""
TALHARPA_CONFIG.PY - Drawing configuration

Contains:
- DrawingConfig: margins, pixel size, string colour and corner factors
- get_defaults / load_config / save_config: JSON persistence
"""

import json
import math
import os
from dataclasses import dataclass, asdict, fields
from typing import Optional

from talharpa_models import InvalidInput


# Default config file, next to this module
CONFIG_PATH = os.path.join(os.path.dirname(__file__), "talharpa_config.json")


@dataclass(frozen=True)
class DrawingConfig:
    """Immutable drawing configuration, validated once on construction."""
    drawing_margin: float = 10.0
    extra_margin: float = 50.0
    pixel_width: int = 700
    pixel_height: int = 800
    string_color: str = "#ccc"
    r_top_factor: float = 0.08      # x headstock width
    r_bottom_factor: float = 0.2    # x body minimum width
    r_window_factor: float = 0.08   # x window width

    def __post_init__(self):
        for name in ("drawing_margin", "extra_margin",
                     "r_top_factor", "r_bottom_factor", "r_window_factor"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidInput(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value) or value < 0:
                raise InvalidInput(f"{name} must be a finite value >= 0, got {value}")
        for name in ("pixel_width", "pixel_height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise InvalidInput(f"{name} must be a positive integer, got {value!r}")
        if not isinstance(self.string_color, str) or not self.string_color:
            raise InvalidInput("string_color must be a non-empty string")

    @property
    def total_margin(self) -> float:
        return self.drawing_margin + self.extra_margin

    def replace(self, **overrides) -> "DrawingConfig":
        """Return a copy with the given (non-None) fields overridden."""
        values = asdict(self)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return DrawingConfig(**values)


def get_defaults() -> dict:
    """Return default config values."""
    return asdict(DrawingConfig())


def config_from_dict(data: dict) -> DrawingConfig:
    """Build a DrawingConfig from a plain dict, rejecting unknown keys."""
    known = {f.name for f in fields(DrawingConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise InvalidInput(f"Unknown config keys: {', '.join(unknown)}")
    values = get_defaults()
    values.update(data)
    return DrawingConfig(**values)


def load_config(path: Optional[str] = None) -> DrawingConfig:
    """Load config from a JSON file, falling back to defaults when it is missing."""
    path = path or CONFIG_PATH
    if not os.path.exists(path):
        return DrawingConfig()
    with open(path, 'r') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidInput(f"Config {path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise InvalidInput(f"Config {path} must hold a JSON object")
    return config_from_dict(data)


def save_config(config: DrawingConfig, path: Optional[str] = None):
    """Save config to a JSON file."""
    with open(path or CONFIG_PATH, 'w') as f:
        json.dump(asdict(config), f, indent=2)
