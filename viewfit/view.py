"""Camera and view state plus the field-of-view and aspect-ratio utilities."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import numpy as np
import numpy.typing as npt

from viewfit.config import (
    CAMERA_DEFAULT_FOV_DEG,
    CAMERA_DEFAULT_ORTHO_HEIGHT,
    VIEWPORT_DEFAULT_HEIGHT,
    VIEWPORT_DEFAULT_WIDTH,
    CameraDefaults,
    get_settings,
)
from viewfit.errors import DegenerateGeometryError
from viewfit.protocols import ViewProtocol
from viewfit.utils.geometry import Array, as_vector, unit
from viewfit.utils.logger import get_logger

LOGGER = get_logger(__name__)


@dataclass
class Camera:
    """Pinhole or parallel camera.

    Attributes:
        eye: Camera position in world coordinates
        direction: Viewing direction
        up: Up hint; need not be orthogonal to ``direction``
        perspective: False for parallel (orthographic) projection
        fov: Field of view in degrees, vertical when ``fov_is_height``
        fov_is_height: Whether ``fov`` is measured vertically
        aspect_ratio: Explicit aspect ratio, 0 to follow the viewport
        height: Full visible height for parallel projection
    """

    eye: Array
    direction: Array
    up: Array
    perspective: bool = True
    fov: float = CAMERA_DEFAULT_FOV_DEG
    fov_is_height: bool = True
    aspect_ratio: float = 0.0
    height: float = CAMERA_DEFAULT_ORTHO_HEIGHT

    def __post_init__(self) -> None:
        self.set(self.eye, self.direction, self.up)
        if not 0.0 < self.fov < 180.0:
            raise ValueError(f"fov must be in (0, 180) degrees, got {self.fov}")
        if self.aspect_ratio < 0.0:
            raise ValueError(f"aspect_ratio must be >= 0, got {self.aspect_ratio}")

    def set(self, eye: npt.ArrayLike, direction: npt.ArrayLike, up: npt.ArrayLike) -> None:
        eye = as_vector(eye, "eye")
        direction = as_vector(direction, "direction")
        up = as_vector(up, "up")
        # both must give a usable right axis
        unit(np.cross(direction, up), "direction x up")
        self.eye, self.direction, self.up = eye, direction, up

    @property
    def xaxis(self) -> Array:
        return unit(np.cross(self.direction, self.up), "xaxis")

    @property
    def yaxis(self) -> Array:
        return unit(np.cross(self.xaxis, self.direction), "yaxis")

    @property
    def zaxis(self) -> Array:
        return unit(self.direction, "zaxis")


@dataclass
class View:
    """A camera seen through a viewport of ``vpwidth`` x ``vpheight`` pixels."""

    camera: Camera
    vpwidth: int = VIEWPORT_DEFAULT_WIDTH
    vpheight: int = VIEWPORT_DEFAULT_HEIGHT

    def __post_init__(self) -> None:
        if self.vpwidth <= 0 or self.vpheight <= 0:
            raise ValueError(
                f"viewport must be positive, got {self.vpwidth}x{self.vpheight}"
            )


# ============================================================================
# FIELD OF VIEW & ASPECT RATIO
# ============================================================================


def frustum_ratio(angle: float, ratio: float) -> float:
    """Frustum angle on the other axis, given one angle in degrees and the axis ratio."""
    return math.degrees(2.0 * math.atan(math.tan(math.radians(angle) / 2.0) * ratio))


def vp_aspect_ratio(view: ViewProtocol) -> float:
    """Width over height of the viewport."""
    return view.vpwidth / float(view.vpheight)


def current_aspect_ratio(view: ViewProtocol) -> float:
    """Aspect ratio of the view; an explicit camera ratio wins over the viewport."""
    if view.camera.aspect_ratio:
        return float(view.camera.aspect_ratio)
    return vp_aspect_ratio(view)


def fov_v(view: ViewProtocol) -> float:
    """Vertical field of view in degrees, honoring an explicit aspect ratio."""
    camera = view.camera
    if camera.fov_is_height:
        return float(camera.fov)
    return frustum_ratio(camera.fov, 1.0 / current_aspect_ratio(view))


def fov_h(view: ViewProtocol) -> float:
    """Horizontal field of view in degrees, honoring an explicit aspect ratio."""
    camera = view.camera
    if not camera.fov_is_height:
        return float(camera.fov)
    return frustum_ratio(camera.fov, current_aspect_ratio(view))


# ============================================================================
# MUTATORS
# ============================================================================


def set_eye(view: ViewProtocol, eye: npt.ArrayLike) -> None:
    """Move the camera, keeping its direction and up vector."""
    camera = view.camera
    camera.set(eye, camera.direction, camera.up)


def set_height(view: ViewProtocol, height: float) -> None:
    """Set the visible height of a parallel projection."""
    if height <= 0.0:
        raise DegenerateGeometryError(f"orthographic height must be positive, got {height}")
    view.camera.height = float(height)
    LOGGER.debug("Orthographic height set to {:.6g}", height)


def set_width(view: ViewProtocol, width: float) -> None:
    """Set the visible width of a parallel projection; height follows the aspect ratio."""
    if width <= 0.0:
        raise DegenerateGeometryError(f"orthographic width must be positive, got {width}")
    set_height(view, width / current_aspect_ratio(view))


# ============================================================================
# SERIALIZATION
# ============================================================================


def camera_from_dict(data: Mapping[str, Any], defaults: CameraDefaults | None = None) -> Camera:
    defaults = defaults or get_settings().camera
    try:
        eye, direction, up = data["eye"], data["direction"], data["up"]
    except KeyError as exc:
        raise ValueError(f"camera is missing field {exc.args[0]!r}") from exc
    return Camera(
        eye=eye,
        direction=direction,
        up=up,
        perspective=bool(data.get("perspective", True)),
        fov=float(data.get("fov", defaults.fov)),
        fov_is_height=bool(data.get("fov_is_height", True)),
        aspect_ratio=float(data.get("aspect_ratio", 0.0)),
        height=float(data.get("height", defaults.ortho_height)),
    )


def camera_to_dict(camera: Camera) -> dict[str, Any]:
    return {
        "eye": [float(v) for v in camera.eye],
        "direction": [float(v) for v in camera.direction],
        "up": [float(v) for v in camera.up],
        "perspective": bool(camera.perspective),
        "fov": float(camera.fov),
        "fov_is_height": bool(camera.fov_is_height),
        "aspect_ratio": float(camera.aspect_ratio),
        "height": float(camera.height),
    }


def view_from_dict(data: Mapping[str, Any], defaults: CameraDefaults | None = None) -> View:
    defaults = defaults or get_settings().camera
    if "camera" not in data:
        raise ValueError("view is missing field 'camera'")
    return View(
        camera=camera_from_dict(data["camera"], defaults),
        vpwidth=int(data.get("vpwidth", defaults.vpwidth)),
        vpheight=int(data.get("vpheight", defaults.vpheight)),
    )


def view_to_dict(view: View) -> dict[str, Any]:
    return {
        "camera": camera_to_dict(view.camera),
        "vpwidth": int(view.vpwidth),
        "vpheight": int(view.vpheight),
    }


__all__ = [
    "Camera",
    "View",
    "camera_from_dict",
    "camera_to_dict",
    "current_aspect_ratio",
    "fov_h",
    "fov_v",
    "frustum_ratio",
    "set_eye",
    "set_height",
    "set_width",
    "view_from_dict",
    "view_to_dict",
    "vp_aspect_ratio",
]
