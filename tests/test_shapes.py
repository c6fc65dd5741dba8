# tests/test_shapes.py
import math
from itertools import combinations

import pytest

from scene_engine.geometry import Point, Rect
from scene_engine.shapes import bezier_controls, fit_circle, polygon, subdivide, subdivision_depth


def _intersection_area(a: Rect, b: Rect) -> float:
    w = min(a.right, b.right) - max(a.x, b.x)
    h = min(a.bottom, b.bottom) - max(a.y, b.y)
    return max(0, w) * max(0, h)


@pytest.mark.parametrize("target,depth", [(1, 0), (2, 1), (4, 1), (5, 2), (16, 2), (20, 3), (64, 3)])
def test_subdivision_depth(target, depth):
    assert subdivision_depth(target) == depth


def test_subdivision_depth_rejects_zero():
    with pytest.raises(ValueError):
        subdivision_depth(0)


@pytest.mark.parametrize("target,count", [(1, 1), (4, 4), (5, 16), (20, 64)])
def test_subdivide_cell_count(sampler, target, count):
    assert len(subdivide(Rect(0, 0, 1920, 1080), sampler, target)) == count


def test_subdivide_tiles_the_rect(sampler):
    rect = Rect(0, 0, 1920, 1080)
    cells = subdivide(rect, sampler, 20)

    assert sum(cell.area for cell in cells) == rect.area
    for cell in cells:
        assert cell.x >= rect.x and cell.y >= rect.y
        assert cell.right <= rect.right and cell.bottom <= rect.bottom
    for a, b in combinations(cells, 2):
        assert _intersection_area(a, b) == 0


def test_subdivide_cuts_near_the_middle(sampler):
    cells = subdivide(Rect(0, 0, 1000, 1000), sampler, 4)
    top_left = cells[0]
    assert 300 <= top_left.w <= 700
    assert 300 <= top_left.h <= 700


def test_fit_circle_stays_inside_cell(sampler):
    for rect in (Rect(10, 20, 200, 50), Rect(0, 0, 40, 300), Rect(5, 5, 60, 60)):
        center, r = fit_circle(rect, sampler)
        assert r == min(rect.w, rect.h) / 2
        assert rect.x - 1e-9 <= center.x - r and center.x + r <= rect.right + 1e-9
        assert rect.y - 1e-9 <= center.y - r and center.y + r <= rect.bottom + 1e-9


class TestBezierControls:

    def test_open_path_has_flat_caps(self):
        vertices = [Point(0, 0), Point(10, 5), Point(20, 0), Point(30, 5)]
        path = bezier_controls(vertices)

        assert not path.closed
        assert len(path) == len(vertices) + 2
        for triple in path.triples[:2]:
            assert triple.pre == triple.vertex == triple.post == vertices[0]
        for triple in path.triples[-2:]:
            assert triple.pre == triple.vertex == triple.post == vertices[-1]
        assert [t.vertex for t in path.triples[2:-2]] == vertices[1:-1]

    def test_closed_path_follows_vertex_order(self):
        vertices = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]
        path = bezier_controls(vertices, closed=True)

        assert path.closed
        assert path.vertices == vertices
        assert len(list(path.segments())) == len(vertices)

    def test_collinear_vertices_keep_controls_on_the_line(self):
        path = bezier_controls([Point(0, 0), Point(1, 0), Point(2, 0)])
        middle = path.triples[2]
        assert middle.vertex == Point(1, 0)
        assert middle.pre == Point(0.5, 0)
        assert middle.post == Point(1.5, 0)

    def test_smoothness_scales_handles(self):
        vertices = [Point(0, 0), Point(1, 1), Point(2, 0)]
        full = bezier_controls(vertices, 1).triples[2]
        half = bezier_controls(vertices, 0.5).triples[2]
        assert half.vertex.distance(half.post) == pytest.approx(full.vertex.distance(full.post) / 2)

    def test_coincident_vertices_stay_finite(self):
        path = bezier_controls([Point(3, 3), Point(3, 3), Point(3, 3)])
        assert all(t.pre.is_finite() and t.post.is_finite() for t in path.triples)

    @pytest.mark.parametrize("vertices,closed", [([Point(0, 0)], False), ([Point(0, 0), Point(1, 1)], True)])
    def test_too_few_vertices(self, vertices, closed):
        with pytest.raises(ValueError):
            bezier_controls(vertices, closed=closed)


def test_polygon_angles_wind_once_around_center(sampler):
    center = Point(100, 100)
    for _ in range(20):
        points = polygon(center, 50, sampler)
        assert len(points) == 6
        angles = [math.atan2(p.y - center.y, p.x - center.x) for p in points]
        steps = [(angles[(i + 1) % 6] - angles[i]) % (2 * math.pi) for i in range(6)]
        assert all(step > 0 for step in steps)
        assert sum(steps) == pytest.approx(2 * math.pi)


def test_polygon_radius_stays_near_target(sampler):
    center = Point(0, 0)
    distances = [p.distance(center) for _ in range(50) for p in polygon(center, 10, sampler)]
    assert sum(distances) / len(distances) == pytest.approx(10, rel=0.05)


def test_polygon_needs_three_vertices(sampler):
    with pytest.raises(ValueError):
        polygon(Point(0, 0), 1, sampler, n=2)


@pytest.mark.parametrize("jitter_angle", [1, 1.5, -0.1])
def test_polygon_rejects_jitter_that_breaks_winding(sampler, jitter_angle):
    with pytest.raises(ValueError):
        polygon(Point(0, 0), 1, sampler, jitter_angle=jitter_angle)


def test_polygon_without_angle_jitter(sampler):
    center = Point(0, 0)
    points = polygon(center, 10, sampler, jitter_angle=0)
    angles = [math.atan2(p.y, p.x) for p in points]
    steps = [(angles[(i + 1) % 6] - angles[i]) % (2 * math.pi) for i in range(6)]
    assert steps == pytest.approx([math.pi / 3] * 6)
