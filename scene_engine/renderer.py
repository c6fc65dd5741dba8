"""
Scene Renderer

Paints generated scenes onto Pillow images. Translucent shapes are drawn on
their own transparent overlay and alpha-composited so stacked layers blend.
Gradients on the moon are flattened to their opaque stop.
"""

from typing import Callable, List, Optional, Sequence, Tuple
from PIL import Image, ImageDraw, ImageFont
import logging
import math

from .components import LogoComponent, MottoComponent
from .config import SceneConfig
from .geometry import Point, apply, rotate, translate
from .layers import (BezierPath, BlobLayer, Bloom, CloudLayer, ColorSample, FullMoon,
                     LandLayer, MoonLayer, OvalLayer, PartialMoon, Stem,
                     TreeLayer, WaveLayer)
from .layout import OverlayComponent, composite_at
from .palette import DARK, LIGHT

XY = Tuple[float, float]

CURVE_STEPS = 16
ARC_STEPS = 48
STEM_COLOR = ColorSample(0.2, 0.2, 0.2, 0.7, 'stem')
LAND_STROKE = ColorSample(0.0, 0.0, 0.0, 0.4, 'shadow')
LABEL_ALPHA = 0.1


def cubic_point(p0: Point, p1: Point, p2: Point, p3: Point, t: float) -> XY:
    u = 1 - t
    a, b, c, d = u ** 3, 3 * u * u * t, 3 * u * t * t, t ** 3
    return (a * p0.x + b * p1.x + c * p2.x + d * p3.x,
            a * p0.y + b * p1.y + c * p2.y + d * p3.y)


def flatten_cubic(p0: Point, p1: Point, p2: Point, p3: Point,
                  steps: int = CURVE_STEPS) -> List[XY]:
    """Points along one cubic segment, excluding its start point"""
    return [cubic_point(p0, p1, p2, p3, i / steps) for i in range(1, steps + 1)]


def flatten_path(path: BezierPath, steps: int = CURVE_STEPS) -> List[XY]:
    """Polyline approximation of a bezier path"""
    if not path.triples:
        return []
    first = path.triples[0].vertex
    points = [(first.x, first.y)]
    for start, c1, c2, end in path.segments():
        points.extend(flatten_cubic(start, c1, c2, end, steps))
    return points


def arc_points(center: Point, radius: float, start: float, end: float,
               steps: int = ARC_STEPS) -> List[Point]:
    """Arc from ``start`` to ``end`` radians, increasing clockwise on screen"""
    while end < start:
        end += 2 * math.pi
    return [Point(center.x + radius * math.cos(start + (end - start) * i / steps),
                  center.y + radius * math.sin(start + (end - start) * i / steps))
            for i in range(steps + 1)]


class SceneRenderer:
    """
    Renders scenes built by the SceneGenerator.

    Each layer kind has its own painter; a layer that fails to paint is
    logged and skipped so the rest of the scene still renders.
    """

    def __init__(self, curve_steps: int = CURVE_STEPS):
        self.curve_steps = curve_steps
        self._painters = {
            'wave': self._paint_wave,
            'blob': self._paint_blob,
            'oval': self._paint_oval,
            'cloud': self._paint_cloud,
            'moon': self._paint_moon,
            'tree': self._paint_tree,
            'land': self._paint_land,
        }
        self._config = SceneConfig()
        self._dark = True

    def render(self, scene, config: Optional[SceneConfig] = None) -> Image.Image:
        """
        Render a scene to an RGBA image.

        Args:
            scene: Scene from ``SceneGenerator.build``
            config: Configuration for the overlay; defaults to SceneConfig()

        Returns:
            PIL Image of the scene's canvas size
        """
        config = config or SceneConfig()
        self._config = config
        self._dark = scene.dark
        size = (int(math.ceil(scene.width)), int(math.ceil(scene.height)))
        image = Image.new('RGBA', size, scene.background.rgba255())

        for layer in scene.layers:
            painter = self._painters.get(layer.kind)
            if painter is None:
                logging.warning(f"No painter for layer kind {layer.kind!r}")
                continue
            try:
                painter(image, layer)
            except Exception as e:
                logging.error(f"Error rendering {layer.kind} layer: {e}")

        if scene.overlay is not None:
            component = self._overlay_component(scene.overlay.component_id)
            try:
                component.render(image, scene.overlay, config, scene.foreground)
            except Exception as e:
                logging.error(f"Error rendering overlay {scene.overlay.component_id}: {e}")

        return image

    def _overlay_component(self, component_id: str) -> OverlayComponent:
        if component_id == 'logo':
            return LogoComponent()
        return MottoComponent()

    def _composite(self, image: Image.Image, paint: Callable[[ImageDraw.ImageDraw], None]) -> None:
        overlay = Image.new('RGBA', image.size, (0, 0, 0, 0))
        paint(ImageDraw.Draw(overlay))
        image.alpha_composite(overlay)

    def _fill(self, image: Image.Image, points: Sequence[XY], color: ColorSample) -> None:
        if len(points) < 3:
            return
        self._composite(image, lambda draw: draw.polygon(list(points), fill=color.rgba255()))

    def _paint_wave(self, image: Image.Image, layer: WaveLayer) -> None:
        for path in layer.paths:
            outline = [(layer.width, layer.height), (0, layer.height)]
            outline.extend(flatten_path(path, self.curve_steps))
            self._fill(image, outline, layer.color)

        if self._config.show_color_label and layer.color.label:
            self._paint_label(image, layer)

    def _paint_label(self, image: Image.Image, layer: WaveLayer) -> None:
        """Color name written downward along the right edge"""
        font = ImageFont.load_default()
        draw = ImageDraw.Draw(Image.new('RGBA', (1, 1)))
        bbox = draw.textbbox((0, 0), layer.color.label, font=font)
        label = Image.new('RGBA', (bbox[2] - bbox[0] + 1, bbox[3] - bbox[1] + 1), (0, 0, 0, 0))
        fg = LIGHT if self._dark else DARK
        ImageDraw.Draw(label).text((-bbox[0], -bbox[1]), layer.color.label,
                                   fill=fg.with_alpha(LABEL_ALPHA).rgba255(), font=font)
        label = label.rotate(-90, expand=True)
        composite_at(image, label, layer.width - label.width, 0.03 * layer.height)

    def _paint_blob(self, image: Image.Image, layer: BlobLayer) -> None:
        self._fill(image, flatten_path(layer.path, self.curve_steps), layer.color)

    def _paint_oval(self, image: Image.Image, layer: OvalLayer) -> None:
        turn = rotate(-layer.rotation)
        move = translate(layer.center.x, layer.center.y)
        points = []
        for i in range(ARC_STEPS):
            t = 2 * math.pi * i / ARC_STEPS
            p = apply(Point(layer.rx * math.cos(t), layer.ry * math.sin(t)), turn, move)
            points.append((p.x, p.y))
        self._fill(image, points, layer.color)

    def _paint_cloud(self, image: Image.Image, layer: CloudLayer) -> None:
        p = layer.polyline
        width = max(1, int(round(layer.row_offset / 20)))
        color = layer.color.rgba255()

        def paint(draw: ImageDraw.ImageDraw) -> None:
            for row, i in enumerate(range(1, len(p) - 1, 2)):
                draw.line([(p[i - 1].x, p[i - 1].y), (p[i].x, p[i].y)], fill=color, width=width)
                r = (p[i + 1].y - p[i].y) / 2
                if r <= 0:
                    continue
                leftward = p[i].x < p[i + 2].x
                start, end = (90, 270) if leftward else (-90, 90)
                cx, cy = p[i].x, p[i].y + r
                draw.arc([cx - r, cy - r, cx + r, cy + r], start, end, fill=color, width=width)
                if row < len(layer.bumps) and layer.bumps[row]:
                    cx = cx + r if leftward else cx - r
                    draw.arc([cx - r, cy - r, cx + r, cy + r], start, end, fill=color, width=width)
            draw.line([(p[-2].x, p[-2].y), (p[-1].x, p[-1].y)], fill=color, width=width)

        self._composite(image, paint)

    def _paint_moon(self, image: Image.Image, layer: MoonLayer) -> None:
        geometry = layer.geometry
        if isinstance(geometry, FullMoon):
            c, r = geometry.center, geometry.radius
            self._composite(image, lambda draw: draw.ellipse([c.x - r, c.y - r, c.x + r, c.y + r],
                                                             fill=geometry.color.rgba255()))
            return

        frame = (rotate(-geometry.tilt), translate(geometry.center.x, geometry.center.y))
        local = arc_points(Point(0, 0), geometry.radius, geometry.start, geometry.end)
        if isinstance(geometry, PartialMoon):
            local += arc_points(geometry.inner_center, geometry.inner_radius,
                                geometry.inner_start, geometry.inner_end)
        # PIL polygons fill with the even-odd rule, which carves the terminator
        points = [(q.x, q.y) for q in (apply(p, *frame) for p in local)]
        self._fill(image, points, _opaque_stop(geometry))

    def _paint_tree(self, image: Image.Image, layer: TreeLayer) -> None:
        nodes = layer.nodes
        branch_color = DARK.rgba255()

        def line(draw: ImageDraw.ImageDraw, a: Point, b: Point, width: float, color) -> None:
            w = max(1, int(round(width)))
            draw.line([(a.x, a.y), (b.x, b.y)], fill=color, width=w)
            if w > 2:
                for q in (a, b):
                    draw.ellipse([q.x - w / 2, q.y - w / 2, q.x + w / 2, q.y + w / 2], fill=color)

        def flower(draw: ImageDraw.ImageDraw, index: int, front: bool) -> None:
            node = layer.node(index)
            if node is None or node.flower is None:
                return
            f = node.flower
            if isinstance(f, Stem):
                if not front:
                    line(draw, f.start, f.end, f.width, STEM_COLOR.rgba255())
            elif isinstance(f, Bloom) and f.front == front and layer.color is not None:
                for petal in f.petals:
                    draw.polygon(_petal_outline(petal, self.curve_steps), fill=layer.color.rgba255())

        def paint(draw: ImageDraw.ImageDraw) -> None:
            for j, node in enumerate(nodes):
                if node is None:
                    continue
                for child in (2 * j, 2 * j + 1):
                    flower(draw, child, False)
                    target = layer.node(child)
                    if child != j and target is not None:
                        line(draw, node.position, target.position, target.width, branch_color)
                flower(draw, j, True)

        self._composite(image, paint)

    def _paint_land(self, image: Image.Image, layer: LandLayer) -> None:
        band = layer.sky_band
        self._fill(image, [(band.x, band.y), (band.right, band.y),
                           (band.right, band.bottom), (band.x, band.bottom)], layer.color)

        ridge = flatten_path(layer.ribbon, self.curve_steps)
        ground = ridge + [(p.x, p.y) for p in layer.base]
        self._fill(image, ground, LIGHT)

        start, end = layer.base[-1], layer.base[0]
        outline = [(start.x, start.y)] + ridge + [(end.x, end.y)]
        width = max(1, int(round(layer.stroke_width)))
        self._composite(image, lambda draw: draw.line(outline, fill=LAND_STROKE.rgba255(), width=width))


def _opaque_stop(geometry) -> ColorSample:
    stops = geometry.gradient.stops
    return max(stops, key=lambda stop: stop.color.a).color


def _petal_outline(petal, steps: int) -> List[XY]:
    (inner0, mid0, outer0), (inner1, mid1, outer1) = petal
    points = [(mid0.x, mid0.y)]
    points += flatten_cubic(mid0, outer0, outer1, mid1, steps)
    points += flatten_cubic(mid1, inner1, inner0, mid0, steps)
    return points

