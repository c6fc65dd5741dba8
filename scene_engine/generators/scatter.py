"""
Scatter Generators

Blobs and ovals placed in a jittered quad-subdivision of the canvas, one per
cell, skipping cells that touch the text reservation.
"""

from typing import List, Optional
import math

from ..config import MAX_SCATTER_ELEMENTS
from ..geometry import Rect, validate_canvas
from ..layers import BlobLayer, OvalLayer
from ..palette import Palette
from ..reservation import TextReservation
from ..sampler import Sampler
from ..shapes import bezier_controls, fit_circle, polygon, subdivide

MAX_ELEMENTS = MAX_SCATTER_ELEMENTS
SCATTER_TARGET_COUNT = 20
SCATTER_ALPHA = 0.5


def placement_cells(width: float, height: float, sampler: Sampler,
                    reservation: Optional[TextReservation] = None,
                    limit: int = MAX_ELEMENTS) -> List[Rect]:
    """Shuffled subdivision cells clear of the reservation, at most ``limit`` (capped at MAX_ELEMENTS)"""
    validate_canvas(width, height)
    cells = sampler.shuffle(subdivide(Rect(0, 0, width, height), sampler, SCATTER_TARGET_COUNT))
    if reservation is not None:
        cells = [cell for cell in cells if not reservation.overlaps(cell)]
    return cells[:max(0, min(limit, MAX_ELEMENTS))]


def blobs(width: float, height: float, sampler: Sampler, palette: Palette,
          reservation: Optional[TextReservation] = None, dark: bool = True,
          limit: int = MAX_ELEMENTS) -> List[BlobLayer]:
    layers = []
    for cell in placement_cells(width, height, sampler, reservation, limit):
        color = palette.random_color(sampler, dark, SCATTER_ALPHA)
        center, radius = fit_circle(cell, sampler)
        path = bezier_controls(polygon(center, radius, sampler), 1, closed=True)
        layers.append(BlobLayer(color=color, path=path, cell=cell))
    return layers


def ovals(width: float, height: float, sampler: Sampler, palette: Palette,
          reservation: Optional[TextReservation] = None, dark: bool = True,
          limit: int = MAX_ELEMENTS) -> List[OvalLayer]:
    layers = []
    for cell in placement_cells(width, height, sampler, reservation, limit):
        color = palette.random_color(sampler, dark, SCATTER_ALPHA)
        center, radius = fit_circle(cell, sampler)
        ry = sampler.gaussian(1, 0.2) * radius
        rotation = sampler.uniform(0, 2 * math.pi)
        layers.append(OvalLayer(color=color, center=center, rx=radius, ry=abs(ry),
                                rotation=rotation, cell=cell))
    return layers
