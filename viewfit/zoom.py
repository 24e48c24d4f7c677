"""Position a camera so its view frustum tightly encloses points or entities.

Direction, up vector and field of view are never changed. A perspective camera
is only moved; a parallel camera is moved sideways and its visible extent is
resized.

Example:
    view = View(Camera(eye=(0, 0, 10), direction=(0, 0, -1), up=(0, 1, 0)))
    zoom_entities(model_entities, view)
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from viewfit.config import get_settings
from viewfit.errors import DegenerateGeometryError, InvalidFrustum
from viewfit.frustum import FrustumPlanes, frustum_planes
from viewfit.protocols import ViewProtocol
from viewfit.scene import Entity, collect_points
from viewfit.utils.format import format_matrix, format_point
from viewfit.utils.geometry import (
    Array,
    Plane,
    Transformation,
    as_points,
    intersect_plane_plane,
)
from viewfit.utils.logger import get_logger
from viewfit.view import current_aspect_ratio, set_eye, set_height, set_width

LOGGER = get_logger(__name__)


def zoom_entities(entities: Entity | list[Entity], view: ViewProtocol) -> None:
    """Position the camera to include every vertex reachable from ``entities``.

    Args:
        entities: A single entity, a list of entities or a group's contents
        view: View whose camera is moved (and resized for parallel projection)
    """
    zoom_points(collect_points(entities), view)


def zoom_points(points: npt.ArrayLike, view: ViewProtocol) -> None:
    """Position the camera to include ``points``.

    An empty point set leaves the camera untouched.

    Raises:
        InvalidFrustum: when the view's frustum planes are degenerate
        DegenerateGeometryError: when a point has non-finite coordinates
        ValueError: when ``points`` is not shaped ``(N, 3)``
    """
    pts = as_points(points)
    if len(pts) == 0:
        LOGGER.debug("No points to frame, camera left unchanged")
        return

    if view.camera.perspective:
        zoom_perspective(pts, view)
    else:
        zoom_parallel(pts, view)


def zoom_parallel(points: Array, view: ViewProtocol) -> tuple[float, float]:
    """Center a parallel camera on ``points`` and fit its extent.

    Returns:
        The framed ``(width, height)`` in camera-local units
    """
    transformation = camera_space(view)
    to_local = transformation.inverse()

    left, right, bottom, top = (
        to_local.apply(plane.anchor) for plane in extreme_planes(points, view)
    )

    width = float(right[0] - left[0])
    height = float(top[1] - bottom[1])
    epsilon = get_settings().geometry.epsilon
    if width < -epsilon or height < -epsilon:
        raise InvalidFrustum(
            f"frustum planes give negative extent (width={width:g}, height={height:g})"
        )
    width, height = max(width, 0.0), max(height, 0.0)

    # z = 0: no movement along the viewing direction
    local_eye = np.array([(left[0] + right[0]) / 2.0, (bottom[1] + top[1]) / 2.0, 0.0])
    eye = transformation.apply(local_eye)

    set_eye(view, eye)
    set_zoom(view, width, height)
    LOGGER.debug(
        "Parallel framing: eye {} width {:.6g} height {:.6g}",
        format_point(eye),
        width,
        height,
    )
    return width, height


def set_zoom(view: ViewProtocol, width: float, height: float) -> None:
    """Fit a parallel camera's extent so both ``width`` and ``height`` are visible.

    The binding dimension is the one whose ratio to the other exceeds the
    view's aspect ratio. A zero dimension leaves the other one binding; when
    both are zero the extent is left unchanged.
    """
    if width <= 0.0 and height <= 0.0:
        LOGGER.debug("Zero framed extent, zoom left unchanged")
        return
    if height <= 0.0:
        set_width(view, width)
    elif width <= 0.0:
        set_height(view, height)
    elif current_aspect_ratio(view) > width / height:
        set_height(view, height)
    else:
        set_width(view, width)


def zoom_perspective(points: Array, view: ViewProtocol) -> Array:
    """Move a perspective camera back or forth so ``points`` fill its frustum.

    Returns:
        The new eye in world coordinates
    """
    transformation = camera_space(view)
    to_local = transformation.inverse()

    left, right, bottom, top = (
        to_local.apply_plane(plane) for plane in extreme_planes(points, view)
    )

    epsilon = get_settings().geometry.epsilon
    try:
        line_y = intersect_plane_plane(left, right, epsilon)
        line_x = intersect_plane_plane(bottom, top, epsilon)
    except DegenerateGeometryError as exc:
        raise InvalidFrustum(f"opposing frustum planes do not intersect: {exc}") from exc

    # the eye must sit behind both constraints, i.e. at the smaller forward offset
    local_eye = np.array(
        [line_y.point[0], line_x.point[1], min(line_x.point[2], line_y.point[2])]
    )
    eye = transformation.apply(local_eye)

    set_eye(view, eye)
    LOGGER.debug("Perspective framing: eye {}", format_point(eye))
    return eye


def camera_space(view: ViewProtocol) -> Transformation:
    """Camera-local to world transformation: origin at the eye, axes right/up/forward."""
    camera = view.camera
    transformation = Transformation.axes(camera.eye, camera.xaxis, camera.yaxis, camera.zaxis)
    LOGGER.debug("Camera space:\n{}", format_matrix(transformation.matrix))
    return transformation


def extreme_planes(points: Array, view: ViewProtocol) -> FrustumPlanes:
    """Planes parallel to each frustum side through the point furthest outside it.

    Every point lies on or inside each returned plane. ``points`` must be
    non-empty and is not modified.
    """
    return FrustumPlanes(*(_extreme_plane(points, plane) for plane in frustum_planes(view)))


def _extreme_plane(points: Array, plane: Plane) -> Plane:
    to_plane = Transformation.from_plane(plane.anchor, plane.normal).inverse()
    depth = to_plane.apply(points)[:, 2]
    # normals face into the view volume, so the outermost point has the lowest depth
    point = points[int(np.argmin(depth))]
    return Plane(anchor=point.copy(), normal=plane.normal)


__all__ = [
    "camera_space",
    "extreme_planes",
    "set_zoom",
    "zoom_entities",
    "zoom_parallel",
    "zoom_perspective",
    "zoom_points",
]
