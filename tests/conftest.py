"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import itertools

import numpy as np
import pytest

from viewfit.view import Camera, View


@pytest.fixture
def cube_points() -> np.ndarray:
    """Corners of the cube [-1, 1]^3."""
    return np.array(list(itertools.product((-1.0, 1.0), repeat=3)), dtype=np.float64)


@pytest.fixture
def parallel_view() -> View:
    """Parallel camera at (0, 0, 10) looking down -z, square viewport."""
    camera = Camera(
        eye=np.array([0.0, 0.0, 10.0]),
        direction=np.array([0.0, 0.0, -1.0]),
        up=np.array([0.0, 1.0, 0.0]),
        perspective=False,
        height=5.0,
    )
    return View(camera=camera, vpwidth=800, vpheight=800)


@pytest.fixture
def perspective_view() -> View:
    """Perspective camera at (0, 0, 20) looking down -z, 90 degree fov, square viewport."""
    camera = Camera(
        eye=np.array([0.0, 0.0, 20.0]),
        direction=np.array([0.0, 0.0, -1.0]),
        up=np.array([0.0, 1.0, 0.0]),
        perspective=True,
        fov=90.0,
    )
    return View(camera=camera, vpwidth=800, vpheight=800)


@pytest.fixture
def oblique_camera() -> Camera:
    """Camera looking diagonally down at the origin with z up."""
    return Camera(
        eye=np.array([-30.0, -30.0, 30.0]),
        direction=np.array([1.0, 1.0, -1.0]),
        up=np.array([0.0, 0.0, 1.0]),
        fov=40.0,
    )


@pytest.fixture
def point_cloud() -> np.ndarray:
    """Reproducible scattered points around (2, -1, 0.5)."""
    rng = np.random.default_rng(7)
    return rng.normal(loc=(2.0, -1.0, 0.5), scale=(3.0, 1.5, 2.0), size=(200, 3))
