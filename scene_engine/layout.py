"""
Overlay Layout and Component System

Overlay components (motto text, logo image) know their own size, where they
sit on the canvas and how to paint themselves. Their placement becomes the
text reservation that scatter generators keep clear of.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple
from dataclasses import dataclass
from PIL import Image

from .config import SceneConfig
from .geometry import Rect
from .layers import ColorSample


@dataclass
class OverlayPlacement:
    """Calculated placement of an overlay component"""
    x: float
    y: float
    width: float
    height: float
    component_id: str

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)


class OverlayComponent(ABC):
    """
    Base class for overlay components.

    Each component knows how to calculate its own size, where it goes on the
    canvas and how to render itself there.
    """

    def __init__(self, component_id: str = None):
        self.component_id = component_id or self.__class__.__name__

    @abstractmethod
    def calculate_size(self, canvas_width: int, canvas_height: int,
                       config: SceneConfig) -> Optional[Tuple[int, int]]:
        """
        Calculate the size of this component.

        Args:
            canvas_width: Canvas width in pixels
            canvas_height: Canvas height in pixels
            config: Scene configuration

        Returns:
            Tuple of (width, height) in pixels, or None if the component
            cannot be shown
        """
        pass

    @abstractmethod
    def place(self, canvas_width: int, canvas_height: int,
              config: SceneConfig) -> Optional[OverlayPlacement]:
        """Calculate where the component sits, or None if it is omitted"""
        pass

    @abstractmethod
    def render(self, image: Image.Image, placement: OverlayPlacement,
               config: SceneConfig, color: ColorSample) -> None:
        """
        Render this component at its placement.

        Args:
            image: RGBA canvas to paint on
            placement: Result of ``place``
            config: Scene configuration
            color: Foreground color for the current background mode
        """
        pass


def composite_at(image: Image.Image, overlay: Image.Image, x: float, y: float) -> None:
    """Alpha-composite ``overlay`` onto ``image`` at (x, y), clipping at the canvas edges"""
    x, y = int(round(x)), int(round(y))
    left, top = max(0, -x), max(0, -y)
    if left >= overlay.width or top >= overlay.height:
        return
    if left or top:
        overlay = overlay.crop((left, top, overlay.width, overlay.height))
    image.alpha_composite(overlay, (x + left, y + top))
