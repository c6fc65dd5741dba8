"""
Shape Builders

Space-filling subdivision, circle fitting, bezier control fitting and organic
polygons. These are the building blocks the scene generators compose.
"""

from typing import List, Sequence, Tuple
import math

from .geometry import Point, Rect, polar
from .layers import BezierPath, ControlTriple
from .sampler import Sampler

DEFAULT_TARGET_COUNT = 20
DEFAULT_JITTER = 1 / 5


def _round_half_up(value: float) -> float:
    return math.floor(value + 0.5)


def subdivision_depth(target_count: int) -> int:
    """Quad-split depth giving at least ``target_count`` cells"""
    if target_count < 1:
        raise ValueError(f"target_count must be at least 1, got {target_count}")
    return math.ceil(math.log2(target_count) / 2)


def subdivide(rect: Rect, sampler: Sampler, target_count: int = DEFAULT_TARGET_COUNT,
              jitter: float = DEFAULT_JITTER) -> List[Rect]:
    """
    Recursively quad-split ``rect`` into 4**depth cells.

    Each split places one vertical and one horizontal cut near the middle,
    jittered by ``jitter`` of the side length. The cells tile ``rect`` exactly.

    Args:
        rect: Rectangle to partition
        sampler: Random source for the cut positions
        target_count: Minimum number of cells wanted
        jitter: Maximum offset of a cut from the middle, as a fraction of the side

    Returns:
        List of cells
    """
    depth = subdivision_depth(target_count)
    if depth == 0:
        return [rect]

    cells = []
    for cell in subdivide(rect, sampler, 4 ** (depth - 1), jitter):
        cells.extend(_split(cell, sampler, jitter))
    return cells


def _split(rect: Rect, sampler: Sampler, jitter: float) -> List[Rect]:
    x, y, w, h = rect.as_tuple()
    a = _round_half_up(w * sampler.amplitude(1 / 2, jitter))
    b = _round_half_up(h * sampler.amplitude(1 / 2, jitter))
    a = min(max(a, 0), w)
    b = min(max(b, 0), h)
    return [
        Rect(x, y, a, b),
        Rect(x + a, y, w - a, b),
        Rect(x + a, y + b, w - a, h - b),
        Rect(x, y + b, a, h - b),
    ]


def fit_circle(rect: Rect, sampler: Sampler) -> Tuple[Point, float]:
    """Largest circle inside ``rect``, slid randomly along the longer axis"""
    r = min(rect.w, rect.h) / 2
    if rect.w > rect.h:
        center = Point(rect.x + sampler.uniform(r, rect.w - r), rect.y + rect.h / 2)
    else:
        center = Point(rect.x + rect.w / 2, rect.y + sampler.uniform(r, rect.h - r))
    return center, r


def _smooth_triple(a: Point, b: Point, c: Point, smoothness: float) -> ControlTriple:
    la, lc = a.distance(b), c.distance(b)
    ma, mc = a.midpoint(b), c.midpoint(b)
    total = la + lc
    target = ma.lerp(mc, la / total if total else 0.5)
    pre = b + (ma - target).scale(smoothness)
    post = b + (mc - target).scale(smoothness)
    return ControlTriple(pre, b, post)


def bezier_controls(vertices: Sequence[Point], smoothness: float = 1,
                    closed: bool = False) -> BezierPath:
    """
    Fit smooth bezier control triples through ``vertices``.

    Open paths get flat caps: the first two triples sit on the first vertex
    and the last two on the last vertex, so the curve does not bend past its
    ends. Closed paths get one triple per vertex.
    """
    count = len(vertices)
    if count < (3 if closed else 2):
        raise ValueError(f"Not enough vertices for a {'closed' if closed else 'open'} path: {count}")

    if closed:
        triples = [_smooth_triple(vertices[i - 1], vertices[i % count], vertices[(i + 1) % count], smoothness)
                   for i in range(1, count + 1)]
        return BezierPath(triples[-1:] + triples[:-1], closed=True)

    interior = [_smooth_triple(vertices[i - 1], vertices[i], vertices[i + 1], smoothness)
                for i in range(1, count - 1)]
    head = ControlTriple.anchor(vertices[0])
    tail = ControlTriple.anchor(vertices[-1])
    return BezierPath([head, head] + interior + [tail, tail], closed=False)


def polygon(center: Point, radius: float, sampler: Sampler, jitter_angle: float = 0.6,
            jitter_radius: float = 0.2, n: int = 6) -> List[Point]:
    """
    Organic closed polygon around ``center``.

    Angular steps are jittered then normalized to a full turn, so vertex
    angles strictly increase and the loop never self-intersects.
    """
    if n < 3:
        raise ValueError(f"A polygon needs at least 3 vertices, got {n}")
    if not 0 <= jitter_angle < 1:
        raise ValueError(f"jitter_angle must be in [0, 1), got {jitter_angle}")
    steps = [sampler.amplitude(1, jitter_angle) * 2 / n for _ in range(n)]
    total = sum(steps)
    angle = sampler.uniform(0, 2) * math.pi
    points = []
    for step in steps:
        angle += 2 * math.pi * step / total
        points.append(center + polar(sampler.gaussian(1, jitter_radius) * radius, angle))
    return points
