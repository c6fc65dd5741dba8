# tests/test_clouds.py
import math
from collections import Counter
from datetime import datetime, timedelta, timezone

import pytest

from scene_engine.geometry import Rect
from scene_engine.generators.clouds import (PHASE_EPOCH_DAYS, SECONDS_PER_DAY, SYNODIC_MONTH_DAYS,
                                            TERMINATOR_TILT, _wave_pass, cloud, clouds, moon,
                                            moon_phase)
from scene_engine.layers import ColorSample, FullMoon, HalfMoon, PartialMoon
from scene_engine.sampler import Sampler

WHITE = ColorSample(1, 1, 1)


def at_position(position: float) -> datetime:
    """Moment at the given fraction of the lunar cycle"""
    days = PHASE_EPOCH_DAYS + position * SYNODIC_MONTH_DAYS
    return datetime.fromtimestamp(days * SECONDS_PER_DAY, tz=timezone.utc)


class TestMoonPhase:

    def test_phase_stays_in_range(self):
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        for day in range(0, 60, 3):
            position, illumination = moon_phase(start + timedelta(days=day))
            assert 0 <= position < 1
            assert 0 <= illumination <= 1

    def test_naive_datetimes_are_utc(self):
        when = datetime(2024, 5, 1, 12, 0)
        assert moon_phase(when) == moon_phase(when.replace(tzinfo=timezone.utc))

    @pytest.mark.parametrize("position,illumination", [(0.25, 0.5), (0.5, 1.0), (0.75, 0.5), (0.1, 0.2)])
    def test_illumination_follows_cycle(self, position, illumination):
        p, i = moon_phase(at_position(position))
        assert p == pytest.approx(position, abs=1e-4)
        assert i == pytest.approx(illumination, abs=1e-3)


class TestMoon:

    def test_disc_sits_top_right(self):
        layer = moon(1000, at_position(0.3))
        assert layer.kind == 'moon'
        assert layer.geometry.center.x == pytest.approx(800)
        assert layer.geometry.center.y == pytest.approx(100)
        assert layer.geometry.radius == pytest.approx(50)

    def test_full_moon(self):
        layer = moon(1000, at_position(0.5))
        assert isinstance(layer.geometry, FullMoon)
        assert layer.illumination == 1

    @pytest.mark.parametrize("position", [0.25, 0.75])
    def test_half_moon(self, position):
        layer = moon(1000, at_position(position))
        assert isinstance(layer.geometry, HalfMoon)
        assert layer.geometry.start == 0
        assert layer.geometry.end == pytest.approx(math.pi)

    def test_crescent(self):
        layer = moon(1000, at_position(0.1))
        geometry = layer.geometry
        assert isinstance(geometry, PartialMoon)
        assert geometry.phase == 'crescent'
        assert geometry.inner_radius > geometry.radius
        assert geometry.inner_start < geometry.inner_end

    def test_gibbous(self):
        layer = moon(1000, at_position(0.4))
        geometry = layer.geometry
        assert isinstance(geometry, PartialMoon)
        assert geometry.phase == 'gibbous'
        assert math.pi < geometry.inner_start < geometry.inner_end < 2 * math.pi

    def test_new_moon_is_a_degenerate_crescent(self):
        layer = moon(1000, at_position(0.0001))
        geometry = layer.geometry
        assert layer.illumination == 0
        assert geometry.phase == 'crescent'
        assert geometry.inner_radius == pytest.approx(geometry.radius)

    def test_tilt_flips_after_full_moon(self):
        assert moon(1000, at_position(0.3)).geometry.tilt == pytest.approx(-TERMINATOR_TILT)
        assert moon(1000, at_position(0.7)).geometry.tilt == pytest.approx(TERMINATOR_TILT)


def test_wave_pass_permutes(sampler):
    samples = [i / 9 for i in range(9)]
    result = _wave_pass(list(samples), sampler)
    assert Counter(result) == Counter(samples)


def test_cloud_rows(sampler):
    rect = Rect(100, 50, 300, 100)
    layer = cloud(rect, 10, sampler, WHITE)

    rows = 10
    assert layer.kind == 'cloud'
    assert len(layer.bumps) == rows
    assert len(layer.polyline) == 2 * rows + 2
    assert layer.polyline[0].y == rect.y
    assert layer.polyline[-1].y == pytest.approx(rect.y + rows * 10)
    for top, bottom in zip(layer.polyline[1:-1:2], layer.polyline[2:-1:2]):
        assert top.x == bottom.x
        assert bottom.y - top.y == pytest.approx(10)
        assert rect.x <= top.x < rect.right


@pytest.mark.parametrize("values", [[0.75, 0.25], [0.3, 0.8], [0.1, 0.6]])
def test_cloud_ends_hang_toward_the_leaning_side(scripted, values):
    rect = Rect(0, 0, 400, 100)
    layer = cloud(rect, 10, Sampler(source=scripted(values)), WHITE)
    steps = [(p.x - rect.x) / rect.w for p in layer.polyline[1:-1:2]]
    middle = rect.x + rect.w / 2

    start, end = layer.polyline[0], layer.polyline[-1]
    # a first row right of the second hangs off the left edge, and vice versa
    if steps[0] > steps[1]:
        assert start.x < middle
    else:
        assert start.x > middle
    if steps[-1] > steps[-2]:
        assert end.x < middle
    else:
        assert end.x > middle
    assert start.x == math.floor(start.x)
    assert end.x == math.floor(end.x)


def test_cloud_needs_two_rows(sampler):
    with pytest.raises(ValueError):
        cloud(Rect(0, 0, 100, 15), 10, sampler, WHITE)


def test_clouds_scene(palette):
    for seed in range(10):
        moon_layer, layers = clouds(1920, 1080, Sampler(seed), palette, when=at_position(0.5))
        assert isinstance(moon_layer.geometry, FullMoon)
        assert len(layers) == 3
        for layer in layers:
            assert len(layer.bumps) >= 2
            assert all(p.is_finite() for p in layer.polyline)
