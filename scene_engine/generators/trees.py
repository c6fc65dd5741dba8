"""
Tree and Land Generator

Recursively branching trees stored as implicit binary heaps, with widths
propagated bottom-up and flowers on the asymmetric tips, standing on a
smoothed terrain ribbon.
"""

from typing import List, Optional, Union
import math

from ..geometry import Point, Rect, apply, polar, rotate, translate, validate_canvas
from ..layers import (Bloom, BranchNode, ColorSample, Flower, LandLayer, Stem,
                      TreeLayer)
from ..palette import Palette
from ..sampler import Sampler
from ..shapes import bezier_controls

# Branch growth
BRANCH_TURN = 1 / 4
TRUNK_TURN_SD = 1 / 32
MIN_STEP = 0.3

# Width propagation
WIDTH_SUM_WEIGHT = 0.7
WIDTH_SINGLE_BONUS = 0.5
WIDTH_CHILD_SCALE = 1.2
LEAF_WIDTH_BONUS = 1.25
LEAF_WIDTH_RATIO = 1 / 1024

# Flowers
BLOOM_MIN_INDEX = 8
FLOWER_SIZE_RATIO = 1 / 54
PETALS = 5
PETAL_RADII = (0.05, 0.1, 1)
FRONT_BLOOM_THRESHOLD = 0.6
STEM_WIDTH_SCALE = 0.9

# Land
LAND_SEGMENTS = 20
LAND_LEVEL = 5 / 6
LAND_PROFILE = [40, 40, 42, 44, 45, 46, 46, 43, 40, 40]
LAND_PROFILE_BASE = 40
LAND_PROFILE_SCALE = 48
LAND_JITTER_RATIO = 1 / 96
LAND_SMOOTHNESS = 0.3
SKY_BAND_TOP = 7 / 8
SKY_BAND_ALPHA = 0.4


def _half_turns(value: float) -> float:
    return value * math.pi


def branch(parent: Optional[BranchNode], turn_bias: float, unit: float,
           sampler: Sampler) -> Optional[BranchNode]:
    """
    Grow one branch from ``parent``.

    Angles are in half-turns from vertical; steps shrink quadratically as
    branches lean, and steps shorter than ``MIN_STEP`` units are pruned.
    """
    if parent is None:
        return None
    angle = parent.angle + turn_bias * sampler.uniform(0.1, 0.9)
    step = sampler.uniform(0.1, 0.9) * 3 * (1 - abs(angle)) ** 2
    if step < MIN_STEP:
        return None
    offset = polar(step * unit, _half_turns(angle - 1 / 2))
    return BranchNode(position=parent.position + offset, angle=angle)


def _merge_width(a: float, b: float, leaf_bonus: float) -> float:
    single = (b if not a else 0) + (a if not b else 0)
    width = max(WIDTH_SUM_WEIGHT * (a + b) + WIDTH_SINGLE_BONUS * single,
                a * WIDTH_CHILD_SCALE, b * WIDTH_CHILD_SCALE)
    if not a and not b:
        width += LEAF_WIDTH_BONUS * leaf_bonus
    return width


def stem(node: BranchNode, size: float, sampler: Sampler) -> Stem:
    length = sampler.gaussian(5 / 2, 1) * size
    end = node.position + polar(length, _half_turns(node.angle - 1 / 2))
    return Stem(width=node.width * STEM_WIDTH_SCALE, start=node.position, end=end)


def bloom(node: BranchNode, size: float, sampler: Sampler, petals: int = PETALS) -> Bloom:
    """
    Flower head seen at a random tilt: petals are laid out on a circle,
    squashed by the tilt, spun and moved onto the branch tip.
    """
    spacing = 2 / (petals + 1)
    tilt = sampler.gaussian(1 / 2, 1 / 9)
    spin = rotate(_half_turns(sampler.uniform(0, 2)))
    squash = 1 - abs(tilt * 2 - 1)
    steps = [sampler.gaussian(1, abs(1 / 2 - squash)) for _ in range(petals)]
    total = sum(steps)
    tilt_matrix = ((1.0, math.cos(_half_turns(tilt)) * squash, 0.0),
                   (0.0, math.sin(_half_turns(tilt)) * squash, 0.0))
    move = translate(node.position.x, node.position.y)

    def edge(angle: float):
        return tuple(apply(polar(r * size, _half_turns(angle)), tilt_matrix, spin, move)
                     for r in PETAL_RADII)

    result = []
    start = 0.0
    for i, step in enumerate(steps):
        start += step * spacing / total
        result.append((edge(start + i * spacing), edge(start + (i + 1) * spacing)))

    front = math.sin(_half_turns(tilt)) * squash > FRONT_BLOOM_THRESHOLD
    return Bloom(petals=result, front=front)


def flower(node: BranchNode, index: int, size: float, sampler: Sampler) -> Flower:
    """Blooms open on the outer generations only; inner tips get a bare stem"""
    if index < BLOOM_MIN_INDEX:
        return stem(node, size, sampler)
    return bloom(node, size, sampler)


def tree(depth: int, x: float, y: float, unit: float, sampler: Sampler,
         color: Optional[ColorSample] = None) -> TreeLayer:
    """
    Grow a tree of ``depth`` generations rooted at (x, y).

    Args:
        depth: Number of branch generations, the trunk included
        x, y: Trunk base position
        unit: Length of a unit branch step in pixels
        sampler: Random source
        color: Flower color

    Returns:
        TreeLayer with ``2 ** depth`` node slots
    """
    if depth < 1:
        raise ValueError(f"Tree depth must be at least 1, got {depth}")

    base = BranchNode(position=Point(x, y), angle=0.0)
    nodes: List[Optional[BranchNode]] = [base, branch(base, sampler.gaussian(0, TRUNK_TURN_SD), unit, sampler)]
    level = [nodes[1]]
    for _ in range(depth - 1):
        level = [child for parent in level
                 for child in (branch(parent, -BRANCH_TURN, unit, sampler),
                               branch(parent, BRANCH_TURN, unit, sampler))]
        nodes.extend(level)

    def width_of(index: int) -> float:
        node = nodes[index] if index < len(nodes) else None
        return node.width if node is not None else 0.0

    leaf_bonus = y * LEAF_WIDTH_RATIO
    for i in range(len(nodes) - 1, -1, -1):
        if nodes[i] is None:
            continue
        # the base's only child is the trunk tip
        left = 0.0 if i == 0 else width_of(2 * i)
        nodes[i].width = _merge_width(left, width_of(2 * i + 1), leaf_bonus)

    size = y * FLOWER_SIZE_RATIO
    for i in range(1, len(nodes)):
        node = nodes[i]
        if node is None:
            continue
        left = 2 * i < len(nodes) and nodes[2 * i] is not None
        right = 2 * i + 1 < len(nodes) and nodes[2 * i + 1] is not None
        if left != right:
            node.flower = flower(node, i, size, sampler)

    return TreeLayer(nodes=nodes, color=color)


def land(width: float, height: float, sampler: Sampler, color: ColorSample) -> LandLayer:
    """
    Terrain ribbon across the lower canvas.

    Samples pinned at the profile's base level stay on the horizon; the others
    are jittered around their profile height.
    """
    validate_canvas(width, height)
    level = LAND_LEVEL * height
    vertices = []
    for i, value in enumerate(LAND_PROFILE):
        x = (i + 5) * width / LAND_SEGMENTS
        if value == LAND_PROFILE_BASE:
            vertices.append(Point(x, level))
        else:
            vertices.append(Point(x, sampler.gaussian(value * height / LAND_PROFILE_SCALE,
                                                      height * LAND_JITTER_RATIO)))

    ribbon = bezier_controls(vertices, LAND_SMOOTHNESS)
    base = [Point(width, level), Point(width, height), Point(0, height), Point(0, level)]
    band = Rect(0, SKY_BAND_TOP * height, width, height * (1 - SKY_BAND_TOP))
    return LandLayer(ribbon=ribbon, color=color.with_alpha(SKY_BAND_ALPHA), sky_band=band,
                     base=base, stroke_width=height * LEAF_WIDTH_RATIO * 2)


def trees(width: float, height: float, sampler: Sampler, palette: Palette,
          dark: bool = True) -> List[Union[TreeLayer, LandLayer]]:
    """Two trees of different depth on a shared patch of land, one shared color"""
    validate_canvas(width, height)
    color = palette.random_color(sampler)
    ground = land(width, height, sampler, color)
    base_y = LAND_LEVEL * height
    unit = width / 30
    small = tree(6, sampler.uniform(2, 5) * width / 20, base_y, unit, sampler, color)
    large = tree(8, sampler.uniform(14, 18) * width / 20, base_y, unit, sampler, color)
    return [small, large, ground]
