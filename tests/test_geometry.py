# tests/test_geometry.py
import math

import pytest

from scene_engine.geometry import Point, Rect, apply, overlap, polar, rotate, translate, validate_canvas
from scene_engine.reservation import EMPTY_RECT, TextReservation


@pytest.mark.parametrize("a,b,expected", [
    (Rect(0, 0, 10, 10), Rect(5, 5, 10, 10), True),
    (Rect(0, 0, 10, 10), Rect(10, 0, 5, 5), True),     # shared edge
    (Rect(0, 0, 10, 10), Rect(10, 10, 5, 5), True),    # shared corner
    (Rect(0, 0, 10, 10), Rect(11, 0, 5, 5), False),
    (Rect(0, 0, 10, 10), Rect(0, 20, 5, 5), False),
    (Rect(0, 0, 100, 100), Rect(40, 40, 5, 5), True),  # containment
])
def test_overlap(a, b, expected):
    assert overlap(a, b) is expected
    assert overlap(b, a) is expected


def test_rect_rejects_negative_size():
    with pytest.raises(ValueError):
        Rect(0, 0, -1, 5)


def test_rect_properties():
    r = Rect(2, 3, 10, 20)
    assert r.right == 12
    assert r.bottom == 23
    assert r.area == 200
    assert r.as_tuple() == (2, 3, 10, 20)


@pytest.mark.parametrize("width,height", [(0, 100), (100, -1), (float('nan'), 10), (10, float('inf')), ("10", 10)])
def test_validate_canvas_rejects_bad_sizes(width, height):
    with pytest.raises(ValueError):
        validate_canvas(width, height)


def test_validate_canvas_accepts_positive_sizes():
    validate_canvas(1, 1)
    validate_canvas(1920.5, 1080)


def test_polar():
    p = polar(2, math.pi / 2)
    assert p.x == pytest.approx(0, abs=1e-12)
    assert p.y == pytest.approx(2)


def test_rotate_quarter_turn_points_up_on_screen():
    p = apply(Point(1, 0), rotate(math.pi / 2))
    assert p.x == pytest.approx(0, abs=1e-12)
    assert p.y == pytest.approx(-1)


def test_apply_runs_matrices_in_order():
    p = apply(Point(1, 0), rotate(math.pi / 2), translate(10, 0))
    assert p.x == pytest.approx(10)
    assert p.y == pytest.approx(-1)

    q = apply(Point(1, 0), translate(10, 0), rotate(math.pi / 2))
    assert q.x == pytest.approx(0, abs=1e-9)
    assert q.y == pytest.approx(-11)


def test_point_helpers():
    a, b = Point(0, 0), Point(4, 2)
    assert a.midpoint(b) == Point(2, 1)
    assert a.lerp(b, 0.25) == Point(1, 0.5)
    assert (b - a).scale(2) == Point(8, 4)
    assert Point(3, 4).distance(a) == 5
    assert not Point(float('inf'), 0).is_finite()


class TestTextReservation:

    def test_starts_empty(self):
        reservation = TextReservation()
        assert reservation.is_empty
        assert reservation.rect == EMPTY_RECT
        assert not reservation.overlaps(Rect(-5, -5, 10, 10))

    def test_reserved_rect_blocks_overlapping_cells(self):
        reservation = TextReservation()
        reservation.reserve(Rect(100, 100, 50, 20))
        assert reservation.overlaps(Rect(120, 90, 10, 20))
        assert not reservation.overlaps(Rect(0, 0, 50, 50))

    def test_reserve_is_write_once(self):
        reservation = TextReservation()
        reservation.reserve(Rect(0, 0, 10, 10))
        reservation.reserve(Rect(50, 50, 10, 10))
        assert reservation.rect == Rect(0, 0, 10, 10)

    def test_reset_allows_a_new_reservation(self):
        reservation = TextReservation(Rect(0, 0, 10, 10))
        reservation.reset()
        assert reservation.is_empty
        reservation.reserve(Rect(50, 50, 10, 10))
        assert reservation.rect == Rect(50, 50, 10, 10)
