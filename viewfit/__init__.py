"""Camera auto-framing: fit a view frustum around points or scene entities."""

from __future__ import annotations

from viewfit.config import Settings, get_settings
from viewfit.errors import DegenerateGeometryError, InvalidFrustum
from viewfit.frustum import FrustumPlanes, frustum_planes
from viewfit.scene import Geometry, Group, Unrecognized, collect_points
from viewfit.view import Camera, View
from viewfit.zoom import zoom_entities, zoom_points

__all__ = [
    "Camera",
    "DegenerateGeometryError",
    "FrustumPlanes",
    "Geometry",
    "Group",
    "InvalidFrustum",
    "Settings",
    "Unrecognized",
    "View",
    "collect_points",
    "frustum_planes",
    "get_settings",
    "zoom_entities",
    "zoom_points",
]
