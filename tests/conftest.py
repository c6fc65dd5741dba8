"""
Test configuration and fixtures for scene generation.

Provides seeded samplers, a scripted uniform source for exercising the
gaussian cache, and a shared palette.
"""

import os
import sys

import pytest

# Ensure repo root is on sys.path
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from scene_engine.palette import Palette
from scene_engine.sampler import Sampler


class ScriptedSource:
    """Uniform source replaying a fixed list of values, counting draws"""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def __call__(self):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def sampler():
    """Sampler with a fixed seed"""
    return Sampler(seed=1234)


@pytest.fixture
def palette():
    return Palette()


@pytest.fixture
def scripted():
    """Factory for scripted uniform sources"""
    return ScriptedSource
