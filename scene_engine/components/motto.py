"""
Motto Component

Renders the motto text, horizontally or rotated a quarter turn, centered in
the text band of the canvas.
"""

from typing import Optional, Tuple
from PIL import Image, ImageDraw, ImageFont
import logging

from ..config import SceneConfig
from ..layers import ColorSample
from ..layout import OverlayComponent, OverlayPlacement, composite_at


class MottoComponent(OverlayComponent):
    """Component for rendering the motto text"""

    def __init__(self, text: str = None, font_path: str = None, vertical: bool = None,
                 component_id: str = "motto"):
        super().__init__(component_id)
        self.text = text
        self.font_path = font_path
        self.vertical = vertical
        self._font_cache = {}

    def _get_text(self, config: SceneConfig) -> str:
        """Get text, using config default if not specified"""
        return self.text if self.text is not None else config.motto_text

    def _get_vertical(self, config: SceneConfig) -> bool:
        return self.vertical if self.vertical is not None else config.motto_vertical

    def _font_size(self, canvas_height: int, config: SceneConfig) -> int:
        return max(8, int(canvas_height * config.motto_font_size))

    def _load_font(self, size: int, config: SceneConfig) -> ImageFont.ImageFont:
        """Load font with caching"""
        font_path = self.font_path or config.motto_font_path
        cache_key = (font_path, size)

        if cache_key not in self._font_cache:
            try:
                font = ImageFont.truetype(font_path, size)
                self._font_cache[cache_key] = font
            except Exception as e:
                if config.fallback_to_default_font:
                    logging.warning(f"Could not load motto font {font_path}: {e}, using default")
                    font = ImageFont.load_default()
                    self._font_cache[cache_key] = font
                else:
                    raise e

        return self._font_cache[cache_key]

    def _spacing(self, font_size: int, config: SceneConfig) -> int:
        return int(font_size * (config.motto_line_spacing - 1))

    def _measure(self, text: str, font: ImageFont.ImageFont, spacing: int) -> Tuple[int, int]:
        draw = ImageDraw.Draw(Image.new('RGBA', (1, 1)))
        bbox = draw.multiline_textbbox((0, 0), text, font=font, spacing=spacing, align="center")
        return bbox[2] - bbox[0], bbox[3] - bbox[1]

    def calculate_size(self, canvas_width: int, canvas_height: int,
                       config: SceneConfig) -> Optional[Tuple[int, int]]:
        """Size of the laid-out text before any rotation"""
        text = self._get_text(config)
        if not text.strip():
            return None
        font_size = self._font_size(canvas_height, config)
        font = self._load_font(font_size, config)
        return self._measure(text, font, self._spacing(font_size, config))

    def place(self, canvas_width: int, canvas_height: int,
              config: SceneConfig) -> Optional[OverlayPlacement]:
        """Center the motto at half the width and half the text band"""
        size = self.calculate_size(canvas_width, canvas_height, config)
        if size is None:
            return None
        text_width, text_height = size
        cx = canvas_width / 2
        cy = config.text_band_ratio * canvas_height / 2

        if self._get_vertical(config):
            text_width, text_height = text_height, text_width

        return OverlayPlacement(
            x=cx - text_width / 2,
            y=cy - text_height / 2,
            width=text_width,
            height=text_height,
            component_id=self.component_id
        )

    def render(self, image: Image.Image, placement: OverlayPlacement,
               config: SceneConfig, color: ColorSample) -> None:
        """Render the motto; vertical mottos are turned a quarter clockwise"""
        text = self._get_text(config)
        font_size = self._font_size(image.height, config)
        font = self._load_font(font_size, config)
        spacing = self._spacing(font_size, config)
        vertical = self._get_vertical(config)

        width, height = int(placement.width), int(placement.height)
        if vertical:
            width, height = height, width

        label = Image.new('RGBA', (max(1, width), max(1, height)), (0, 0, 0, 0))
        draw = ImageDraw.Draw(label)
        bbox = draw.multiline_textbbox((0, 0), text, font=font, spacing=spacing, align="center")
        draw.multiline_text((-bbox[0], -bbox[1]), text, fill=color.rgba255(), font=font,
                            spacing=spacing, align="center")

        if vertical:
            label = label.rotate(-90, expand=True)

        composite_at(image, label, placement.x, placement.y)
