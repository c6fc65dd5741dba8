"""
Wave Generator

Stack of translucent wave bands across the canvas width.
"""

from ..geometry import Point, validate_canvas
from ..layers import WaveLayer
from ..palette import Palette
from ..sampler import Sampler
from ..shapes import bezier_controls

WAVE_LAYERS = 5
WAVE_BAND_RATIO = 1 - 1 / 3
WAVE_BASELINE_RATIO = 1 / 3
WAVE_SPREAD = 0.7


def waves(width: float, height: float, sampler: Sampler, palette: Palette,
          dark: bool = True) -> WaveLayer:
    """
    Generate layered waves.

    Layer ``i`` oscillates around ``i`` bands below the baseline; all layers
    share one color whose alpha is ``1 / WAVE_LAYERS`` so the stack darkens
    toward the bottom.
    """
    validate_canvas(width, height)
    band = WAVE_BAND_RATIO * height / WAVE_LAYERS
    baseline = WAVE_BASELINE_RATIO * height
    minimum = sampler.uniform_int(6, 9)

    paths = []
    for layer in range(WAVE_LAYERS):
        n = int(minimum + sampler.uniform_int(0, 5))
        vertices = [Point(width * j / n, baseline + sampler.amplitude(layer, WAVE_SPREAD) * band)
                    for j in range(n + 1)]
        paths.append(bezier_controls(vertices))

    color = palette.random_color(sampler, dark, 1 / WAVE_LAYERS)
    return WaveLayer(baseline_y=baseline, color=color, paths=paths, width=width, height=height)
