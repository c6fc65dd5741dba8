"""
Scene Engine - Procedural Background Scenery

Randomized generators for waves, blobs, ovals, clouds with a moon, and
flowering trees on a terrain ribbon, plus a Pillow renderer for the result.
"""

from .config import SceneConfig, ConfigPresets, SCENE_FAMILIES
from .sampler import Sampler
from .reservation import TextReservation
from .palette import Palette
from .generators.unified import Scene, SceneGenerator
from .renderer import SceneRenderer

__all__ = [
    'SceneConfig',
    'ConfigPresets',
    'SCENE_FAMILIES',
    'Sampler',
    'TextReservation',
    'Palette',
    'Scene',
    'SceneGenerator',
    'SceneRenderer'
]
