# tests/test_trees.py
import math

import pytest

from scene_engine.generators.trees import (BLOOM_MIN_INDEX, LAND_LEVEL, LAND_PROFILE, SKY_BAND_ALPHA,
                                           WIDTH_CHILD_SCALE, land, tree, trees)
from scene_engine.layers import Bloom, ColorSample, LandLayer, Stem, TreeLayer
from scene_engine.sampler import Sampler

PINK = ColorSample(1, 0.4, 0.6)


@pytest.mark.parametrize("depth", [1, 3, 6, 8])
def test_tree_has_heap_slots(depth, sampler):
    layer = tree(depth, 100, 500, 30, sampler, PINK)
    assert layer.kind == 'tree'
    assert len(layer.nodes) == 2 ** depth
    assert layer.depth == depth
    assert layer.nodes[0].position.x == 100
    assert layer.nodes[0].position.y == 500


def test_tree_depth_must_be_positive(sampler):
    with pytest.raises(ValueError):
        tree(0, 0, 0, 1, sampler)


def test_tree_positions_are_finite():
    for seed in range(20):
        layer = tree(8, 960, 900, 64, Sampler(seed), PINK)
        for node in layer.nodes:
            if node is not None:
                assert node.position.is_finite()
                assert math.isfinite(node.width)


def test_parent_is_wider_than_children():
    for seed in range(20):
        layer = tree(8, 960, 900, 64, Sampler(seed), PINK)
        for i, node in enumerate(layer.nodes):
            if node is None:
                continue
            assert node.width > 0
            for child in layer.children(i):
                if child is not None and child is not node:
                    assert node.width >= child.width * WIDTH_CHILD_SCALE - 1e-9


def test_flowers_grow_on_one_sided_tips():
    blooms = 0
    for seed in range(20):
        layer = tree(8, 960, 900, 64, Sampler(seed), PINK)
        for i, node in enumerate(layer.nodes[1:], start=1):
            if node is None:
                continue
            left, right = layer.children(i)
            one_sided = (left is None) != (right is None)
            assert (node.flower is not None) == one_sided
            if node.flower is not None:
                if i >= BLOOM_MIN_INDEX:
                    assert isinstance(node.flower, Bloom)
                    assert len(node.flower.petals) == 5
                    blooms += 1
                else:
                    assert isinstance(node.flower, Stem)
    assert blooms > 0


def test_same_seed_same_tree():
    a = tree(6, 100, 500, 30, Sampler(11), PINK)
    b = tree(6, 100, 500, 30, Sampler(11), PINK)
    assert a == b


def test_land(sampler):
    layer = land(1920, 1080, sampler, PINK)
    level = LAND_LEVEL * 1080

    assert layer.kind == 'land'
    assert len(layer.ribbon) == len(LAND_PROFILE) + 2
    assert layer.color.a == SKY_BAND_ALPHA
    assert layer.sky_band.bottom == pytest.approx(1080)
    vertices = layer.ribbon.vertices
    # profile ends are pinned to the horizon
    assert vertices[0].y == level
    assert vertices[-1].y == level
    assert vertices[0].x == pytest.approx(5 * 1920 / 20)
    assert layer.base[1].y == 1080


def test_trees_scene(sampler, palette):
    small, large, ground = trees(1920, 1080, sampler, palette)
    assert isinstance(small, TreeLayer) and small.depth == 6
    assert isinstance(large, TreeLayer) and large.depth == 8
    assert isinstance(ground, LandLayer)
    assert small.color == large.color
    assert small.nodes[0].position.x < large.nodes[0].position.x
