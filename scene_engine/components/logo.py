"""
Logo Component

Renders a logo image centered in the upper part of the canvas. A logo that
cannot be loaded is left out of the scene.
"""

from typing import Optional, Tuple
from PIL import Image
import logging
import os

from ..config import SceneConfig
from ..layers import ColorSample
from ..layout import OverlayComponent, OverlayPlacement, composite_at


class LogoComponent(OverlayComponent):
    """Component for rendering logo images"""

    def __init__(self, image_path: str = None, component_id: str = "logo"):
        super().__init__(component_id)
        self.image_path = image_path
        self._image_cache = {}

    def _get_image_path(self, config: SceneConfig) -> str:
        """Get image path, using config default if not specified"""
        path = self.image_path if self.image_path is not None else config.logo_path
        return os.path.expanduser(path) if path else path

    def _load_logo_image(self, image_path: str, max_size: Tuple[int, int]) -> Optional[Image.Image]:
        """Load the logo, shrunk to fit ``max_size``, with caching"""
        cache_key = (image_path, max_size)

        if cache_key not in self._image_cache:
            try:
                if not image_path or not os.path.exists(image_path):
                    logging.warning(f"Logo image not found: {image_path}")
                    self._image_cache[cache_key] = None
                    return None

                with Image.open(image_path) as logo_img:
                    logo = logo_img.convert('RGBA')
                logo.thumbnail(max_size, Image.Resampling.LANCZOS)
                self._image_cache[cache_key] = logo

            except Exception as e:
                logging.error(f"Failed to load logo image {image_path}: {e}")
                self._image_cache[cache_key] = None

        return self._image_cache[cache_key]

    def calculate_size(self, canvas_width: int, canvas_height: int,
                       config: SceneConfig) -> Optional[Tuple[int, int]]:
        """Natural logo size, shrunk to fit the canvas"""
        logo = self._load_logo_image(self._get_image_path(config), (int(canvas_width), int(canvas_height)))
        if logo is None:
            return None
        return logo.size

    def place(self, canvas_width: int, canvas_height: int,
              config: SceneConfig) -> Optional[OverlayPlacement]:
        size = self.calculate_size(canvas_width, canvas_height, config)
        if size is None:
            return None
        width, height = size
        return OverlayPlacement(
            x=(canvas_width - width) / 2,
            y=(2 * config.logo_center_ratio * canvas_height - height) / 2,
            width=width,
            height=height,
            component_id=self.component_id
        )

    def render(self, image: Image.Image, placement: OverlayPlacement,
               config: SceneConfig, color: ColorSample) -> None:
        """Render the logo at its placement"""
        logo = self._load_logo_image(self._get_image_path(config), (image.width, image.height))
        if logo is None:
            return
        composite_at(image, logo, placement.x, placement.y)
