"""Pytest configuration: local package imports and shared track fixtures."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_repo_on_syspath() -> None:
    repo_root = Path(__file__).resolve().parent
    repo_str = str(repo_root)
    if repo_str not in sys.path:
        sys.path.insert(0, repo_str)


_ensure_repo_on_syspath()

from autolevel.protocol import PropDefinition, TrackConfig  # noqa: E402


@pytest.fixture
def short_track() -> TrackConfig:
    return TrackConfig(start_line=0, end_line=200, prop_spawn_offset=10, level_end_offset=10)


@pytest.fixture
def mixed_props():
    """Three props exercising discrete lanes, uniform lanes and fixed spacing."""
    return [
        PropDefinition(
            model="crate",
            position_samples=[(-2, 0, 0), (0, 0, 0), (2, 0, 0)],
            rotation_samples=[(0, 0, 0), (0, 0, 90)],
            min_safe_distance=5,
            max_safe_distance=15,
        ),
        PropDefinition(
            model="barrier",
            position_offset=(0, 0.5, 0),
            uniform_position=True,
            position_samples=[(-3, 0, 0), (3, 0, 0)],
            uniform_rotation=True,
            rotation_samples=[(0, 0, -45), (0, 0, 45)],
            discrete_safe_distance=True,
            min_safe_distance=12,
            max_safe_distance=99,
        ),
        PropDefinition(
            model="coin",
            min_safe_distance=1,
            max_safe_distance=3,
        ),
    ]
