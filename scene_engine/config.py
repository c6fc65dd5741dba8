"""
Scene Configuration System

Centralized configuration for scene generation: which family to draw, the
background mode, the overlay motto or logo and the scatter limits.
"""

from typing import Optional
from dataclasses import dataclass, fields
import logging
import os

import yaml

SCENE_FAMILIES = ('waves', 'blobs', 'ovals', 'clouds', 'trees')
MAX_SCATTER_ELEMENTS = 16


@dataclass
class SceneConfig:
    """
    Comprehensive configuration for scene generation.

    Ratios are fractions of the canvas height unless stated otherwise.
    """

    # Canvas settings
    width: int = 1920
    height: int = 1080
    dark_background: bool = True

    # Generation
    family: str = "random"           # one of SCENE_FAMILIES or "random"
    seed: Optional[int] = None       # None = fresh randomness per build
    scatter_limit: int = 16          # maximum blobs/ovals per scene
    show_color_label: bool = False   # draw the wave color name along the edge

    # Motto settings (takes precedence over the logo)
    motto_text: str = ""
    motto_font_path: str = "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"
    motto_font_size: float = 0.06    # 6% of canvas height
    motto_vertical: bool = False
    motto_line_spacing: float = 1.05
    fallback_to_default_font: bool = True

    # Logo settings
    logo_path: str = ""
    logo_center_ratio: float = 0.4   # logo centered at 40% of canvas height

    # Vertical share of the canvas the motto is centered in
    text_band_ratio: float = 2 / 3

    def to_dict(self) -> dict:
        """Convert config to dictionary for serialization"""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict) -> 'SceneConfig':
        """Create config from dictionary, ignoring unknown keys"""
        valid_fields = {f.name for f in fields(cls)}
        filtered_data = {k: v for k, v in data.items() if k in valid_fields}
        unknown = set(data) - valid_fields
        if unknown:
            logging.warning(f"Ignoring unknown scene config keys: {sorted(unknown)}")
        return cls(**filtered_data)

    @classmethod
    def from_yaml(cls, path: str) -> 'SceneConfig':
        """Load config from a YAML mapping file"""
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Scene config {path} must contain a mapping, got {type(data).__name__}")
        return cls.from_dict(data)

    def copy(self) -> 'SceneConfig':
        """Create a copy of this configuration"""
        return SceneConfig(**self.to_dict())

    def validate(self) -> list:
        """Validate configuration and return list of issues"""
        issues = []

        if self.width <= 0 or self.height <= 0:
            issues.append(f"canvas size must be positive, got {self.width}x{self.height}")

        if self.family != "random" and self.family not in SCENE_FAMILIES:
            issues.append(f"family must be one of {SCENE_FAMILIES} or 'random', got {self.family!r}")

        if not 0 <= self.scatter_limit <= MAX_SCATTER_ELEMENTS:
            issues.append(f"scatter_limit must be between 0 and {MAX_SCATTER_ELEMENTS}, got {self.scatter_limit}")

        for field_name in ('motto_font_size', 'logo_center_ratio', 'text_band_ratio'):
            value = getattr(self, field_name)
            if not 0 < value <= 1:
                issues.append(f"{field_name} must be between 0 and 1, got {value}")

        if self.motto_text and not os.path.exists(self.motto_font_path):
            if not self.fallback_to_default_font:
                issues.append(f"Motto font not found: {self.motto_font_path}")

        if self.logo_path and not os.path.exists(self.logo_path):
            issues.append(f"Logo file not found: {self.logo_path}")

        return issues


# Predefined configuration presets
class ConfigPresets:
    """Predefined configuration presets for different use cases"""

    @staticmethod
    def default() -> SceneConfig:
        """Default configuration"""
        return SceneConfig()

    @staticmethod
    def light() -> SceneConfig:
        """Light background"""
        config = SceneConfig()
        config.dark_background = False
        return config

    @staticmethod
    def motto(text: str = "Stay hungry, stay foolish") -> SceneConfig:
        """Scatter scene around a centered motto"""
        config = SceneConfig()
        config.motto_text = text
        config.family = "blobs"
        return config

    @staticmethod
    def logo(path: str) -> SceneConfig:
        """Scene with a logo image"""
        config = SceneConfig()
        config.logo_path = path
        return config

    @staticmethod
    def minimal() -> SceneConfig:
        """Waves only, no overlay"""
        config = SceneConfig()
        config.family = "waves"
        config.show_color_label = False
        return config

    @classmethod
    def get(cls, name: str) -> SceneConfig:
        presets = {
            'default': cls.default,
            'light': cls.light,
            'motto': cls.motto,
            'minimal': cls.minimal,
        }
        if name not in presets:
            logging.warning(f"Unknown preset '{name}', using default")
            return cls.default()
        return presets[name]()
