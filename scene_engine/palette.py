"""
Palette Provider

Named colors for the scene families. Dark backgrounds draw from the light
half of the table and light backgrounds from the dark half, so elements
always stand out from the canvas.
"""

from typing import List, Optional, Tuple

from .layers import ColorSample
from .sampler import Sampler

DARK = ColorSample(0.13, 0.13, 0.16, 1.0, 'dark')
LIGHT = ColorSample(0.93, 0.93, 0.91, 1.0, 'light')

# (label, hex) pairs
NAMED_COLORS: List[Tuple[str, str]] = [
    ('ink', '#1A1A1A'),
    ('indigo', '#2E3A87'),
    ('pine', '#1F4E3D'),
    ('brick', '#8E2F25'),
    ('plum', '#5B2A4E'),
    ('slate', '#3E4C59'),
    ('moss', '#4E6B2F'),
    ('umber', '#6B4226'),
    ('teal', '#008080'),
    ('cobalt', '#1C4FA1'),
    ('crimson', '#D62828'),
    ('tangerine', '#F28C28'),
    ('saffron', '#F6BE00'),
    ('jade', '#4E9F3D'),
    ('sky', '#7FB2E5'),
    ('coral', '#FF6F91'),
    ('lilac', '#B9A2D8'),
    ('mint', '#A8E0C0'),
    ('peach', '#F7C59F'),
    ('cream', '#F8F1E5'),
]


def hex_to_color(value: str, alpha: float = 1.0, label: str = '') -> ColorSample:
    value = value.lstrip('#')
    if len(value) != 6:
        raise ValueError(f"Expected a #RRGGBB color, got {value!r}")
    r, g, b = (int(value[i:i + 2], 16) / 255 for i in (0, 2, 4))
    return ColorSample(r, g, b, alpha, label)


def luminance(color: ColorSample) -> float:
    return 0.2126 * color.r + 0.7152 * color.g + 0.0722 * color.b


def color_to_hex(color: ColorSample) -> str:
    return '#' + ''.join(f"{c:02x}" for c in color.rgba255()[:3])


class Palette:
    """Random color provider with a dark/light background bias"""

    def __init__(self, colors: Optional[List[Tuple[str, str]]] = None):
        samples = [hex_to_color(code, label=name) for name, code in (NAMED_COLORS if colors is None else colors)]
        if not samples:
            raise ValueError("Palette needs at least one color")
        samples.sort(key=luminance)
        half = max(1, len(samples) // 2)
        self.colors = samples
        self._dark_half = samples[:half]
        self._light_half = samples[-half:]

    def background(self, dark: bool) -> ColorSample:
        return DARK if dark else LIGHT

    def foreground(self, dark: bool) -> ColorSample:
        return LIGHT if dark else DARK

    def random_color(self, sampler: Sampler, dark: Optional[bool] = None,
                     alpha: float = 1.0) -> ColorSample:
        """
        Pick a color for an element.

        Args:
            sampler: Random source
            dark: Background darkness; None picks from the whole table
            alpha: Alpha of the returned sample
        """
        if dark is None:
            pool = self.colors
        else:
            pool = self._light_half if dark else self._dark_half
        return sampler.choice(pool).with_alpha(alpha)
