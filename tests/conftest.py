"""Shared fixtures."""

import random
from types import SimpleNamespace

import pytest

from blockforge.core.camera import Camera
from blockforge.gameplay.actor import PlaySimulator
from blockforge.tools.scene_store import SceneStore

KEY_NAMES = (
    "W", "S", "A", "D", "SPACE",
    "NUMBER_1", "NUMBER_2", "NUMBER_3", "NUMBER_4",
    "X", "Y", "Z", "B", "N", "P",
    "DELETE", "BACKSPACE", "ESCAPE",
)


@pytest.fixture
def keys():
    """Stand-in for a window's key constants (distinct integer codes)."""
    return SimpleNamespace(**{name: 100 + i for i, name in enumerate(KEY_NAMES)})


@pytest.fixture
def store():
    """Default scene (baseplate id=1, spawn location id=2) with seeded placement."""
    return SceneStore(rng=random.Random(1234))


@pytest.fixture
def camera():
    return Camera(position=(20.0, 15.0, 20.0), target=(0.0, 0.0, 0.0))


@pytest.fixture
def simulator(camera):
    return PlaySimulator(camera)
