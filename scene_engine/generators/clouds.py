"""
Cloud and Moon Generator

Cloud silhouettes built from row steps and a moon disc showing today's phase.
"""

from typing import List, Optional, Tuple
from dataclasses import dataclass
from datetime import datetime, timezone
import math

from ..geometry import Point, Rect, validate_canvas
from ..layers import (CloudLayer, ColorSample, FullMoon, GradientStop, HalfMoon,
                      LinearGradient, MoonLayer, PartialMoon, RadialGradient)
from ..palette import LIGHT, Palette
from ..sampler import Sampler

SYNODIC_MONTH_DAYS = 29.5305882
# Days from the Unix epoch to a reference new moon
PHASE_EPOCH_DAYS = 18256.8
SECONDS_PER_DAY = 86400

TERMINATOR_TILT = math.pi / 4
TERMINATOR_SOFTNESS = 1 / 16
MOON_GLOW = ColorSample(0.8, 0.8, 0.8, 1.0, 'moonlight')
TRANSPARENT = ColorSample(0.0, 0.0, 0.0, 0.0, 'transparent')

CLOUD_ROWS_PER_CANVAS = 27
CLOUDS_PER_SCENE = 3


@dataclass(frozen=True)
class CloudArchetype:
    """Placement bounds for a cloud rect, as fractions of the canvas"""
    x_range: Tuple[float, float]
    y_range: Tuple[float, float]
    width_factor: float
    quadrant: Tuple[float, float]
    max_rows: int


CLOUD_ARCHETYPES = [
    CloudArchetype((0, 1 / 8), (1 / 16, 1 / 8), 2, (0, 0), 5),
    CloudArchetype((0, 1 / 8), (1 / 8, 1 / 4), 2, (0, 1 / 4), 7),
    CloudArchetype((0, 1 / 4), (0, 1 / 4), 5 / 2, (0, 2 / 4), 7),
    CloudArchetype((0, 1 / 4), (1 / 8, 1 / 4), 3, (1 / 4, 2 / 4), 7),
    CloudArchetype((0, 1 / 4), (0, 1 / 4), 5 / 2, (2 / 4, 2 / 4), 7),
    CloudArchetype((1 / 8, 1 / 4), (1 / 8, 1 / 4), 2, (2 / 4, 1 / 4), 7),
]

CLOUD_LAYOUTS = [(0, 2, 4), (0, 2, 5), (0, 3, 5), (1, 3, 5), (1, 3, 5)]


def moon_phase(when: Optional[datetime] = None) -> Tuple[float, float]:
    """
    Phase of the moon at ``when`` (default: now).

    Returns:
        Tuple of (cycle position in [0, 1), illuminated fraction in [0, 1]
        rounded to 3 decimals)
    """
    when = when or datetime.now(timezone.utc)
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    days = when.timestamp() / SECONDS_PER_DAY
    cycles = abs((days - PHASE_EPOCH_DAYS) / SYNODIC_MONTH_DAYS)
    position = cycles - math.floor(cycles)
    illumination = round(1 - abs(2 * position - 1), 3)
    return position, illumination


def moon(width: float, when: Optional[datetime] = None) -> MoonLayer:
    """
    Moon disc in the top right corner of a canvas ``width`` wide.

    The terminator is modeled as a circular arc. Crescent and gibbous phases
    combine the half disc with that arc under the even-odd fill rule.
    """
    position, illumination = moon_phase(when)
    center = Point(width * 8 / 10, width / 10)
    r = width / 20
    start, end = 0.0, math.pi
    tilt = TERMINATOR_TILT if position > 0.5 else -TERMINATOR_TILT
    soft = r * TERMINATOR_SOFTNESS

    if illumination >= 1:
        geometry = FullMoon(center=center, radius=r, color=LIGHT)
    elif illumination == 0.5:
        gradient = LinearGradient(Point(0, 0), Point(0, soft),
                                  [GradientStop(0, TRANSPARENT), GradientStop(1, MOON_GLOW)])
        geometry = HalfMoon(center=center, radius=r, start=start, end=end, tilt=tilt, gradient=gradient)
    elif illumination < 0.5:
        m = 1 - 2 * illumination
        n = 1 / m
        t1 = math.asin((n - m) / (n + m))
        inner_center = Point(0, r * (m - n) / 2)
        inner_radius = r * (n + m) / 2
        gradient = RadialGradient(inner_center, inner_radius, inner_radius + soft,
                                  [GradientStop(0, TRANSPARENT), GradientStop(1, MOON_GLOW)])
        geometry = PartialMoon(phase='crescent', center=center, radius=r, start=start, end=end,
                               inner_center=inner_center, inner_radius=inner_radius,
                               inner_start=t1, inner_end=math.pi - t1, tilt=tilt, gradient=gradient)
    else:
        m = 2 * illumination - 1
        n = 1 / m
        t1 = math.asin((n - m) / (n + m))
        inner_center = Point(0, r * (n - m) / 2)
        inner_radius = r * (n + m) / 2
        fade = r * min((n - 1) / 2, TERMINATOR_SOFTNESS)
        gradient = RadialGradient(inner_center, inner_radius - fade, inner_radius,
                                  [GradientStop(0, MOON_GLOW), GradientStop(1, TRANSPARENT)])
        geometry = PartialMoon(phase='gibbous', center=center, radius=r, start=start, end=end,
                               inner_center=inner_center, inner_radius=inner_radius,
                               inner_start=math.pi + t1, inner_end=2 * math.pi - t1,
                               tilt=tilt, gradient=gradient)

    return MoonLayer(geometry=geometry, phase=position, illumination=illumination)


def _wave_pass(samples: List[float], sampler: Sampler) -> List[float]:
    """
    One pass over even indices swapping each sample with a neighbor when
    out of order, leaving hills (or valleys) instead of a sorted run.
    """
    peaks = sampler.boolean()
    last = len(samples) - 1
    for i in range(0, len(samples), 2):
        for j in (i - 1, i + 1):
            if j < 0 or j > last:
                continue
            if (samples[i] < samples[j]) if peaks else (samples[i] > samples[j]):
                samples[i], samples[j] = samples[j], samples[i]
    return samples


def cloud(rect: Rect, row_offset: float, sampler: Sampler, color: ColorSample) -> CloudLayer:
    """
    Cloud silhouette inside ``rect`` made of rows ``row_offset`` tall.

    Each row is a vertical step at a sampled x; the renderer joins rows with
    semicircular arcs. Start and end points hang off the left or right edge
    depending on which way the first and last rows lean.
    """
    rows = int(rect.h // row_offset)
    if rows < 2:
        raise ValueError(f"Cloud rect {rect} too short for rows of {row_offset}")

    steps = _wave_pass([i / rows for i in range(rows)], sampler)
    steps = _wave_pass(sampler.shuffle(steps), sampler)

    def overhang(a: float, b: float) -> float:
        if a > b:
            return math.floor(sampler.gaussian(rect.x, rect.w * a / 4))
        return math.floor(sampler.gaussian(rect.right, rect.w * (1 - a) / 4))

    polyline = [Point(overhang(steps[0], steps[1]), rect.y)]
    bumps = []
    y = rect.y
    for step in steps:
        x = rect.x + rect.w * step
        bumps.append(sampler.boolean())
        polyline.append(Point(x, y))
        polyline.append(Point(x, y + row_offset))
        y += row_offset
    polyline.append(Point(overhang(steps[-1], steps[-2]), y))

    return CloudLayer(color=color, polyline=polyline, bumps=bumps, row_offset=row_offset)


def cloud_rect(archetype: CloudArchetype, width: float, height: float,
               row_offset: float, sampler: Sampler) -> Rect:
    h = sampler.uniform_int(3 * row_offset, archetype.max_rows * row_offset)
    w = sampler.uniform_int(h * 2, archetype.width_factor * row_offset * 7)
    x = sampler.uniform_int(archetype.x_range[0] * width, archetype.x_range[1] * width)
    y = sampler.uniform_int(archetype.y_range[0] * height, archetype.y_range[1] * height)
    return Rect(x + archetype.quadrant[0] * width, y + archetype.quadrant[1] * height, max(w, 0), h)


def clouds(width: float, height: float, sampler: Sampler, palette: Palette,
           dark: bool = True, when: Optional[datetime] = None) -> Tuple[MoonLayer, List[CloudLayer]]:
    """
    Moon plus three clouds laid out by one of the fixed templates.

    Returns:
        Tuple of (moon layer, cloud layers)
    """
    validate_canvas(width, height)
    row_offset = height / CLOUD_ROWS_PER_CANVAS
    layout = CLOUD_LAYOUTS[int(sampler.uniform_int(0, len(CLOUD_LAYOUTS) - 1))]

    layers = []
    for index in layout:
        rect = cloud_rect(CLOUD_ARCHETYPES[index], width, height, row_offset, sampler)
        color = palette.random_color(sampler, dark)
        layers.append(cloud(rect, row_offset, sampler, color))

    return moon(width, when), layers
