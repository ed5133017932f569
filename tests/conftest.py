"""
Pytest configuration and shared fixtures.

This file is automatically discovered by pytest and provides fixtures
available to all test files.
"""

import os

import pytest
from typing import Generator

# No display needed for the HUD tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def pygame_init() -> Generator[None, None, None]:
    """
    Initialize pygame for the test session.
    This runs once before all tests and cleans up after.
    """
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture
def sample_screen() -> pygame.Surface:
    """
    Create a sample pygame surface for tests that need a screen.
    """
    return pygame.Surface((800, 600))


@pytest.fixture
def simple_config():
    """
    A TimeConfig with round-number breakpoints: day is [0, 12000), night is
    [12000, 24000), both at native speed, sleep disabled.
    """
    from world.time.config import TimeConfig
    return TimeConfig(
        day_speed=1.0,
        night_speed=1.0,
        day_start=0,
        night_start=12000,
        enable_sleep_feature=False,
    )


@pytest.fixture
def sleep_config():
    """
    A TimeConfig with the sleep feature on and a linear sleep curve from 1x to 101x.
    """
    from world.time.config import TimeConfig
    return TimeConfig(
        day_speed=1.0,
        night_speed=1.0,
        day_start=0,
        night_start=12000,
        enable_sleep_feature=True,
        sleep_speed_min=1.0,
        sleep_speed_max=101.0,
        sleep_speed_curve=0.0,
        sleep_speed_all=-1.0,
    )


@pytest.fixture
def level():
    """
    An in-memory level named "overworld" at tick 0.
    """
    from world.level import SimLevel
    return SimLevel("overworld", day_time=0)
