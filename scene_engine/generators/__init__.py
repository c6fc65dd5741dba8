"""
Scene Engine Generators

One generator per scene family, and the unified generator that runs a whole
scene build.
"""

from .waves import waves
from .scatter import blobs, ovals
from .clouds import cloud, clouds, moon, moon_phase
from .trees import land, tree, trees
from .unified import Scene, SceneGenerator, generate_layers

__all__ = [
    'waves',
    'blobs',
    'ovals',
    'cloud',
    'clouds',
    'moon',
    'moon_phase',
    'land',
    'tree',
    'trees',
    'Scene',
    'SceneGenerator',
    'generate_layers'
]
