"""Tests for camera state and the field-of-view utilities."""

from __future__ import annotations

import math

import numpy as np
import pytest

from viewfit.errors import DegenerateGeometryError
from viewfit.view import (
    Camera,
    View,
    camera_from_dict,
    current_aspect_ratio,
    fov_h,
    fov_v,
    frustum_ratio,
    set_eye,
    set_height,
    set_width,
    view_from_dict,
    view_to_dict,
    vp_aspect_ratio,
)


def test_camera_axes(perspective_view: View) -> None:
    """Test right/up/forward axes of a camera looking down -z."""
    camera = perspective_view.camera

    assert np.allclose(camera.xaxis, [1.0, 0.0, 0.0])
    assert np.allclose(camera.yaxis, [0.0, 1.0, 0.0])
    assert np.allclose(camera.zaxis, [0.0, 0.0, -1.0])


def test_camera_axes_orthonormal_for_slanted_up(oblique_camera: Camera) -> None:
    """Test that yaxis is orthogonalized against the direction."""
    axes = np.column_stack([oblique_camera.xaxis, oblique_camera.yaxis, oblique_camera.zaxis])

    assert np.allclose(axes.T @ axes, np.eye(3))
    assert oblique_camera.yaxis[2] > 0.0


def test_camera_rejects_up_parallel_to_direction() -> None:
    """Test that a camera needs a usable right axis."""
    with pytest.raises(DegenerateGeometryError):
        Camera(eye=(0, 0, 0), direction=(0, 0, -1), up=(0, 0, 2))


def test_camera_rejects_bad_fov() -> None:
    """Test the field of view range check."""
    with pytest.raises(ValueError, match="fov"):
        Camera(eye=(0, 0, 0), direction=(0, 0, -1), up=(0, 1, 0), fov=180.0)


def test_aspect_ratio(perspective_view: View) -> None:
    """Test viewport and explicit aspect ratios."""
    perspective_view.vpwidth, perspective_view.vpheight = 1600, 900
    assert vp_aspect_ratio(perspective_view) == pytest.approx(16 / 9)
    assert current_aspect_ratio(perspective_view) == pytest.approx(16 / 9)

    perspective_view.camera.aspect_ratio = 2.0
    assert current_aspect_ratio(perspective_view) == pytest.approx(2.0)
    assert vp_aspect_ratio(perspective_view) == pytest.approx(16 / 9)


def test_frustum_ratio() -> None:
    """Test converting a frustum angle across axes."""
    assert frustum_ratio(90.0, 1.0) == pytest.approx(90.0)
    assert frustum_ratio(90.0, 0.5) == pytest.approx(math.degrees(2 * math.atan(0.5)))


def test_fov_vertical_source(perspective_view: View) -> None:
    """Test fov conversions when the fov is measured vertically."""
    perspective_view.camera.aspect_ratio = 2.0

    assert fov_v(perspective_view) == pytest.approx(90.0)
    assert fov_h(perspective_view) == pytest.approx(math.degrees(2 * math.atan(2.0)))


def test_fov_horizontal_source(perspective_view: View) -> None:
    """Test fov conversions when the fov is measured horizontally."""
    perspective_view.camera.fov_is_height = False
    perspective_view.camera.aspect_ratio = 2.0

    assert fov_h(perspective_view) == pytest.approx(90.0)
    assert fov_v(perspective_view) == pytest.approx(math.degrees(2 * math.atan(0.5)))


def test_set_eye_keeps_orientation(perspective_view: View) -> None:
    """Test that moving the eye leaves direction and up alone."""
    direction = perspective_view.camera.direction.copy()
    up = perspective_view.camera.up.copy()

    set_eye(perspective_view, (1.0, 2.0, 3.0))

    assert np.allclose(perspective_view.camera.eye, [1.0, 2.0, 3.0])
    assert np.array_equal(perspective_view.camera.direction, direction)
    assert np.array_equal(perspective_view.camera.up, up)


def test_set_height_and_width(parallel_view: View) -> None:
    """Test orthographic extent setters."""
    parallel_view.vpwidth, parallel_view.vpheight = 800, 400

    set_height(parallel_view, 3.0)
    assert parallel_view.camera.height == pytest.approx(3.0)

    set_width(parallel_view, 8.0)
    assert parallel_view.camera.height == pytest.approx(4.0)

    with pytest.raises(DegenerateGeometryError):
        set_height(parallel_view, 0.0)


def test_view_rejects_empty_viewport(parallel_view: View) -> None:
    """Test viewport validation."""
    with pytest.raises(ValueError, match="viewport"):
        View(camera=parallel_view.camera, vpwidth=0, vpheight=600)


def test_view_dict_round_trip(parallel_view: View) -> None:
    """Test serializing and loading a view."""
    loaded = view_from_dict(view_to_dict(parallel_view))

    assert loaded.vpwidth == parallel_view.vpwidth
    assert loaded.camera.perspective is False
    assert loaded.camera.height == pytest.approx(parallel_view.camera.height)
    assert np.allclose(loaded.camera.eye, parallel_view.camera.eye)


def test_camera_from_dict_defaults_and_missing_fields() -> None:
    """Test defaults for omitted camera fields."""
    camera = camera_from_dict(
        {"eye": [0, 0, 5], "direction": [0, 0, -1], "up": [0, 1, 0]}
    )
    assert camera.perspective is True
    assert camera.aspect_ratio == 0.0

    with pytest.raises(ValueError, match="direction"):
        camera_from_dict({"eye": [0, 0, 5], "up": [0, 1, 0]})
