"""
Scene Overlay Components

Motto and logo overlays that reserve canvas space before generation.
"""

from .motto import MottoComponent
from .logo import LogoComponent

__all__ = [
    'MottoComponent',
    'LogoComponent'
]
