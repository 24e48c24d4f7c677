"""Side planes of a camera's view frustum."""

from __future__ import annotations

import math
from typing import NamedTuple

import numpy as np
import numpy.typing as npt

from viewfit.config import GEOM_EPSILON, get_settings
from viewfit.errors import DegenerateGeometryError, InvalidFrustum
from viewfit.protocols import ViewProtocol
from viewfit.utils.geometry import Plane, as_points
from viewfit.view import current_aspect_ratio, fov_h, fov_v


class FrustumPlanes(NamedTuple):
    """The four side planes, normals pointing into the view volume.

    The order ``(left, right, bottom, top)`` is what the framing solvers index.
    """

    left: Plane
    right: Plane
    bottom: Plane
    top: Plane


def frustum_planes(view: ViewProtocol) -> FrustumPlanes:
    """Side planes of the view's current frustum.

    Raises:
        InvalidFrustum: when the camera state cannot give four valid planes,
            or when opposing planes come out parallel.
    """
    camera = view.camera
    try:
        eye = camera.eye
        xaxis, yaxis, zaxis = camera.xaxis, camera.yaxis, camera.zaxis
        if camera.perspective:
            planes = _perspective_planes(view, eye, xaxis, yaxis, zaxis)
        else:
            planes = _parallel_planes(view, eye, xaxis, yaxis)
    except DegenerateGeometryError as exc:
        raise InvalidFrustum(f"cannot derive frustum planes: {exc}") from exc

    _check_opposing(planes.left, planes.right, "left/right")
    _check_opposing(planes.bottom, planes.top, "bottom/top")
    return planes


def _perspective_planes(view, eye, xaxis, yaxis, zaxis) -> FrustumPlanes:
    half_h = math.radians(fov_h(view)) / 2.0
    half_v = math.radians(fov_v(view)) / 2.0
    ch, sh = math.cos(half_h), math.sin(half_h)
    cv, sv = math.cos(half_v), math.sin(half_v)
    return FrustumPlanes(
        left=Plane(eye, ch * xaxis + sh * zaxis),
        right=Plane(eye, -ch * xaxis + sh * zaxis),
        bottom=Plane(eye, cv * yaxis + sv * zaxis),
        top=Plane(eye, -cv * yaxis + sv * zaxis),
    )


def _parallel_planes(view, eye, xaxis, yaxis) -> FrustumPlanes:
    half_height = view.camera.height / 2.0
    half_width = half_height * current_aspect_ratio(view)
    return FrustumPlanes(
        left=Plane(eye - half_width * xaxis, xaxis),
        right=Plane(eye + half_width * xaxis, -xaxis),
        bottom=Plane(eye - half_height * yaxis, yaxis),
        top=Plane(eye + half_height * yaxis, -yaxis),
    )


def _check_opposing(a: Plane, b: Plane, label: str) -> None:
    # antiparallel pairs are expected for parallel projection
    if np.linalg.norm(np.cross(a.normal, b.normal)) < GEOM_EPSILON and a.normal @ b.normal > 0:
        raise InvalidFrustum(f"{label} planes face the same way")


def contains(
    planes: FrustumPlanes, points: npt.ArrayLike, tolerance: float | None = None
) -> bool:
    """True if every point is on the inner side of all four planes.

    ``tolerance`` defaults to the configured containment tolerance.
    """
    if tolerance is None:
        tolerance = get_settings().geometry.tolerance
    pts = as_points(points)
    return all(bool(np.all(plane.signed_distance(pts) >= -tolerance)) for plane in planes)


__all__ = ["FrustumPlanes", "contains", "frustum_planes"]
