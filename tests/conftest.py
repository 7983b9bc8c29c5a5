"""Pytest configuration and shared fixtures."""

import os

# Ensure headless pygame for all tests
os.environ['SDL_VIDEODRIVER'] = 'dummy'

import pytest

from neon_runner.body import Runner
from neon_runner.config import GameConfig
from neon_runner.course import ColumnTag, Obstacle
from neon_runner.run import RunController


@pytest.fixture
def game_config():
    """Default game configuration."""
    return GameConfig()


@pytest.fixture
def runner():
    """Fresh runner at the spawn point."""
    return Runner()


@pytest.fixture
def controller():
    """Seeded run controller."""
    return RunController(seed=1234)


@pytest.fixture
def flat_controller():
    """Controller whose course is solid blocks end to end."""
    ctrl = RunController(seed=1234)
    ctrl.course.columns = tuple([ColumnTag.SOLID] * len(ctrl.course))
    return ctrl


@pytest.fixture
def block():
    """A lone solid block with its top edge at y=500."""
    return Obstacle(column=1, tag=ColumnTag.SOLID, x=100.0, y=500.0, width=64.0, height=64.0)
