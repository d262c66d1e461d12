"""
gradientfield/config.py
Configuration constants and user settings for gradientfield

Defaults live in dataclasses below. A YAML settings file can override any
field; see load_settings() for the lookup order.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from platformdirs import user_config_dir

# =============================================================================
# Version
# =============================================================================

APP_NAME = "gradientfield"
FORMAT_VERSION = "1.0"

# =============================================================================
# Compositing
# =============================================================================

# Applied after per-channel weight normalization. Values above 1/3.5 saturate.
BRIGHTNESS_SCALE = 3.5

# Smallest canvas edge. A 1-pixel axis can collapse max_distance to zero.
MIN_CANVAS = 2

# =============================================================================
# Source sampling
# =============================================================================

@dataclass
class SamplingConfig:
    """Randomized source generation settings."""
    mean_source_count: float = 4.0   # Poisson mean for still images
    min_source_count: int = 2
    video_source_count: int = 5
    velocity_min: int = -2
    velocity_max: int = 2


SAMPLING_CONFIG = SamplingConfig()

# =============================================================================
# Render settings
# =============================================================================

@dataclass
class RenderConfig:
    """Canvas fallback and output settings."""
    default_width: int = 1920   # used when no display can be queried
    default_height: int = 1080
    workers: int = 1
    gif_fps: int = 30


RENDER_CONFIG = RenderConfig()

# =============================================================================
# Settings file
# =============================================================================

CONFIG_ENV_VAR = "GRADIENTFIELD_CONFIG"
SETTINGS_FILENAME = "settings.yaml"


@dataclass
class Settings:
    """All user-overridable settings."""
    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    render: RenderConfig = field(default_factory=RenderConfig)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Settings":
        unknown = set(d) - {"sampling", "render"}
        if unknown:
            raise ValueError(f"Unknown settings section(s): {sorted(unknown)}")
        return cls(
            sampling=_build_section(SamplingConfig, d.get("sampling") or {}),
            render=_build_section(RenderConfig, d.get("render") or {}),
        )


def _build_section(section_cls, data: Dict[str, Any]):
    if not isinstance(data, dict):
        raise ValueError(f"{section_cls.__name__} must be a mapping, got {type(data).__name__}")
    known = {f.name: f for f in fields(section_cls)}
    unknown = set(data) - set(known)
    if unknown:
        raise ValueError(f"Unknown {section_cls.__name__} key(s): {sorted(unknown)}")
    defaults = section_cls()
    # Coerce to the type of the default so "4" in YAML still works for ints
    values = {
        name: type(getattr(defaults, name))(value)
        for name, value in data.items()
    }
    return section_cls(**values)


def default_settings_path() -> Path:
    """Per-user settings file location."""
    return Path(user_config_dir(APP_NAME, appauthor=False)) / SETTINGS_FILENAME


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """
    Load settings from YAML.

    Lookup order:
        1. explicit path (must exist)
        2. $GRADIENTFIELD_CONFIG (must exist)
        3. user config dir settings.yaml (if present)
        4. built-in defaults
    """
    if path is None:
        env = os.environ.get(CONFIG_ENV_VAR)
        if env:
            path = Path(os.path.expanduser(env))
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")
    else:
        candidate = default_settings_path()
        if not candidate.exists():
            return Settings()
        path = candidate

    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping")
    return Settings.from_dict(data)
