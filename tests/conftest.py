"""Shared pytest fixtures and markers for all tests."""

import random

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def rng():
    """Provide a seeded random source."""
    return random.Random(1234)


@pytest.fixture
def registry(rng):
    """Provide a built-in strategy registry with a seeded Random strategy."""
    from reciprocity.strategies import build_default_registry
    return build_default_registry(rng)


@pytest.fixture
def small_config():
    """Provide a small, seeded configuration mapping."""
    return {
        "strategies": ["tit-for-tat", "always-defect"],
        "proportion": 0.5,
        "population_size": 6,
        "total_games": 60,
        "games_per_pairing": 3,
        "seed": 7,
    }
