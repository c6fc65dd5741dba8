"""
Scene Layers

Typed geometry payloads produced by the scene generators and consumed by the
renderer. Every variant carries an explicit ``kind`` tag so serialized scenes
can be dispatched without inspecting their shape.
"""

from typing import Iterator, List, Optional, Tuple, Union
from dataclasses import dataclass, field

from .geometry import Point, Rect


@dataclass(frozen=True)
class ColorSample:
    """Color drawn from the palette; channels are floats in [0, 1]"""
    r: float
    g: float
    b: float
    a: float = 1.0
    label: str = ''

    def rgba255(self) -> Tuple[int, int, int, int]:
        return tuple(int(round(c * 255)) for c in (self.r, self.g, self.b, self.a))

    def with_alpha(self, alpha: float) -> 'ColorSample':
        return ColorSample(self.r, self.g, self.b, alpha, self.label)


@dataclass(frozen=True)
class ControlTriple:
    """Incoming control point, on-curve vertex and outgoing control point"""
    pre: Point
    vertex: Point
    post: Point

    @classmethod
    def anchor(cls, point: Point) -> 'ControlTriple':
        return cls(point, point, point)


Segment = Tuple[Point, Point, Point, Point]


@dataclass
class BezierPath:
    triples: List[ControlTriple]
    closed: bool = False

    def __len__(self) -> int:
        return len(self.triples)

    @property
    def vertices(self) -> List[Point]:
        return [t.vertex for t in self.triples]

    def segments(self) -> Iterator[Segment]:
        """Cubic segments (start, c1, c2, end) between consecutive triples"""
        count = len(self.triples)
        last = count if self.closed else count - 1
        for i in range(last):
            a = self.triples[i]
            b = self.triples[(i + 1) % count]
            yield a.vertex, a.post, b.pre, b.vertex


@dataclass
class WaveLayer:
    baseline_y: float
    color: ColorSample
    paths: List[BezierPath]
    width: float
    height: float
    kind: str = field(default='wave', init=False)


@dataclass
class BlobLayer:
    color: ColorSample
    path: BezierPath
    cell: Rect
    kind: str = field(default='blob', init=False)


@dataclass
class OvalLayer:
    color: ColorSample
    center: Point
    rx: float
    ry: float
    rotation: float
    cell: Rect
    kind: str = field(default='oval', init=False)


@dataclass
class CloudLayer:
    """
    Cloud silhouette as a polyline of row steps.

    ``polyline`` holds a start point, two points per row (row top and row
    bottom at the same x) and an end point. ``bumps[i]`` asks for a second
    arc on row ``i``.
    """
    color: ColorSample
    polyline: List[Point]
    bumps: List[bool]
    row_offset: float
    kind: str = field(default='cloud', init=False)


# Moon geometry

@dataclass(frozen=True)
class GradientStop:
    offset: float
    color: ColorSample


@dataclass
class LinearGradient:
    start: Point
    end: Point
    stops: List[GradientStop]
    kind: str = field(default='linear', init=False)


@dataclass
class RadialGradient:
    center: Point
    inner_radius: float
    outer_radius: float
    stops: List[GradientStop]
    kind: str = field(default='radial', init=False)


@dataclass
class FullMoon:
    center: Point
    radius: float
    color: ColorSample
    kind: str = field(default='full', init=False)


@dataclass
class HalfMoon:
    """Disc cut along a straight terminator, in the tilted local frame"""
    center: Point
    radius: float
    start: float
    end: float
    tilt: float
    gradient: LinearGradient
    kind: str = field(default='half', init=False)


@dataclass
class PartialMoon:
    """
    Crescent or gibbous moon: a half disc combined with an ellipse-like arc
    under the even-odd fill rule. Inner geometry is in the tilted local frame.
    """
    phase: str
    center: Point
    radius: float
    start: float
    end: float
    inner_center: Point
    inner_radius: float
    inner_start: float
    inner_end: float
    tilt: float
    gradient: RadialGradient
    kind: str = field(default='partial', init=False)


MoonGeometry = Union[FullMoon, HalfMoon, PartialMoon]


@dataclass
class MoonLayer:
    geometry: MoonGeometry
    phase: float
    illumination: float
    kind: str = field(default='moon', init=False)


# Trees

@dataclass
class Stem:
    width: float
    start: Point
    end: Point
    kind: str = field(default='stem', init=False)


Petal = Tuple[Tuple[Point, Point, Point], Tuple[Point, Point, Point]]


@dataclass
class Bloom:
    """Petals as pairs of (inner, middle, outer) edges; front blooms face the viewer"""
    petals: List[Petal]
    front: bool
    kind: str = field(default='bloom', init=False)


Flower = Union[Stem, Bloom]


@dataclass
class BranchNode:
    position: Point
    angle: float
    width: float = 0.0
    flower: Optional[Flower] = None


@dataclass
class TreeLayer:
    """
    Branches in implicit binary-heap layout: node ``i`` has children
    ``2i`` and ``2i + 1``; index 0 is the trunk base. Pruned branches are None.
    """
    nodes: List[Optional[BranchNode]]
    color: ColorSample
    kind: str = field(default='tree', init=False)

    @property
    def depth(self) -> int:
        return len(self.nodes).bit_length() - 1

    def children(self, index: int) -> Tuple[Optional[BranchNode], Optional[BranchNode]]:
        return self.node(2 * index), self.node(2 * index + 1)

    def node(self, index: int) -> Optional[BranchNode]:
        if 0 <= index < len(self.nodes):
            return self.nodes[index]
        return None


@dataclass
class LandLayer:
    ribbon: BezierPath
    color: ColorSample
    sky_band: Rect
    base: List[Point]
    stroke_width: float
    kind: str = field(default='land', init=False)


SceneLayer = Union[WaveLayer, BlobLayer, OvalLayer, CloudLayer, MoonLayer, TreeLayer, LandLayer]
