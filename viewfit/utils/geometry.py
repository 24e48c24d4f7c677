# viewfit/utils/geometry.py
"""Transformation, plane and line primitives shared across the package."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
from scipy.spatial.transform import Rotation as SciRot

from viewfit.config import GEOM_EPSILON
from viewfit.errors import DegenerateGeometryError
from viewfit.utils.logger import get_logger

LOGGER = get_logger(__name__)

Array = npt.NDArray[np.float64]


def as_vector(values: npt.ArrayLike, name: str = "vector") -> Array:
    """Coerce to a finite float64 3-vector."""
    vec = np.asarray(values, dtype=np.float64).reshape(-1)
    if vec.shape != (3,):
        raise ValueError(f"{name} must have 3 components, got shape {vec.shape}")
    if not np.all(np.isfinite(vec)):
        raise DegenerateGeometryError(f"{name} has non-finite components: {vec}")
    return vec


def as_points(values: npt.ArrayLike) -> Array:
    """Coerce to a finite ``(N, 3)`` float64 array; an empty input gives ``(0, 3)``."""
    pts = np.asarray(values, dtype=np.float64)
    if pts.size == 0:
        return np.empty((0, 3), dtype=np.float64)
    if pts.ndim == 1:
        pts = pts.reshape(1, -1)
    if pts.ndim != 2 or pts.shape[1] != 3:
        raise ValueError(f"points must be shaped (N, 3), got {pts.shape}")
    if not np.all(np.isfinite(pts)):
        raise DegenerateGeometryError("points contain non-finite coordinates")
    return pts


def unit(values: npt.ArrayLike, name: str = "vector", epsilon: float = GEOM_EPSILON) -> Array:
    vec = as_vector(values, name)
    norm = float(np.linalg.norm(vec))
    if norm < epsilon:
        raise DegenerateGeometryError(f"{name} has near-zero length ({norm:g})")
    return vec / norm


@dataclass(slots=True)
class Transformation:
    matrix: Array  # 4x4 homogeneous matrix

    def __post_init__(self) -> None:
        self.matrix = np.asarray(self.matrix, dtype=np.float64)
        if self.matrix.shape != (4, 4):
            raise ValueError(f"matrix must be 4x4, got {self.matrix.shape}")

    @classmethod
    def identity(cls) -> Transformation:
        return cls(matrix=np.eye(4))

    @classmethod
    def axes(
        cls,
        origin: npt.ArrayLike,
        xaxis: npt.ArrayLike,
        yaxis: npt.ArrayLike,
        zaxis: npt.ArrayLike,
    ) -> Transformation:
        """Local-to-world mapping of a frame given by its origin and axes."""
        matrix = np.eye(4)
        matrix[:3, 0] = as_vector(xaxis, "xaxis")
        matrix[:3, 1] = as_vector(yaxis, "yaxis")
        matrix[:3, 2] = as_vector(zaxis, "zaxis")
        matrix[:3, 3] = as_vector(origin, "origin")
        return cls(matrix=matrix)

    @classmethod
    def from_plane(cls, anchor: npt.ArrayLike, normal: npt.ArrayLike) -> Transformation:
        """Orthonormal frame with origin ``anchor`` and local z along ``normal``.

        Only the local z of points expressed in this frame is meaningful, the
        in-plane axes are an arbitrary but consistent completion.
        """
        zaxis = unit(normal, "normal")
        helper = np.array([0.0, 0.0, 1.0]) if abs(zaxis[2]) < 0.9 else np.array([1.0, 0.0, 0.0])
        xaxis = np.cross(helper, zaxis)
        xaxis /= np.linalg.norm(xaxis)
        yaxis = np.cross(zaxis, xaxis)
        return cls.axes(anchor, xaxis, yaxis, zaxis)

    @property
    def rotation(self) -> Array:
        return self.matrix[:3, :3]

    @property
    def origin(self) -> Array:
        return self.matrix[:3, 3]

    def inverse(self) -> Transformation:
        inv = np.linalg.inv(self.matrix)
        LOGGER.debug("Computed inverse transformation")
        return Transformation(matrix=inv)

    def compose(self, other: Transformation) -> Transformation:
        """``self × other``: apply ``other`` first, then ``self``."""
        return Transformation(matrix=self.matrix @ other.matrix)

    def __matmul__(self, other: Transformation) -> Transformation:
        return self.compose(other)

    def apply(self, points: npt.ArrayLike) -> Array:
        """Map a point ``(3,)`` or a point set ``(N, 3)``."""
        pts = np.asarray(points, dtype=np.float64)
        return pts @ self.rotation.T + self.origin

    def apply_vector(self, vectors: npt.ArrayLike) -> Array:
        """Map directions: linear part only, no translation."""
        vecs = np.asarray(vectors, dtype=np.float64)
        return vecs @ self.rotation.T

    def apply_plane(self, plane: Plane) -> Plane:
        # normals follow the inverse transpose so they stay perpendicular
        # under non-rigid transformations too
        normal = np.linalg.inv(self.rotation).T @ plane.normal
        return Plane(anchor=self.apply(plane.anchor), normal=normal)


def make_transformation(translation: Iterable[float], rpy: Iterable[float]) -> Transformation:
    """Rigid transformation from a translation and extrinsic roll/pitch/yaw in radians."""
    transform = np.eye(4)
    transform[:3, :3] = SciRot.from_euler("xyz", list(rpy)).as_matrix()
    transform[:3, 3] = as_vector(list(translation), "translation")
    LOGGER.debug("Created transformation from translation {} and rpy {}", translation, rpy)
    return Transformation(matrix=transform)


def compose_transformations(*transforms: Transformation) -> Transformation:
    result = np.eye(4)
    for transform in transforms:
        result = result @ transform.matrix
    LOGGER.debug("Composed {} transformations", len(transforms))
    return Transformation(matrix=result)


@dataclass(frozen=True, eq=False)
class Plane:
    """Points ``p`` with ``(p - anchor) . normal == 0``; the normal is stored normalized."""

    anchor: Array
    normal: Array

    def __post_init__(self) -> None:
        object.__setattr__(self, "anchor", as_vector(self.anchor, "anchor"))
        object.__setattr__(self, "normal", unit(self.normal, "plane normal"))

    def signed_distance(self, points: npt.ArrayLike) -> Array:
        """Distance along the normal; positive on the side the normal points to."""
        return (np.asarray(points, dtype=np.float64) - self.anchor) @ self.normal


@dataclass(frozen=True, eq=False)
class Line:
    point: Array
    direction: Array


def intersect_plane_plane(a: Plane, b: Plane, epsilon: float = GEOM_EPSILON) -> Line:
    """Line shared by two planes.

    The returned point is the one on the line closest to the origin of the
    frame the planes are expressed in.
    """
    direction = np.cross(a.normal, b.normal)
    length = float(np.linalg.norm(direction))
    if length < epsilon:
        raise DegenerateGeometryError("planes are parallel and do not intersect in a line")
    direction /= length
    system = np.vstack([a.normal, b.normal, direction])
    rhs = np.array([a.normal @ a.anchor, b.normal @ b.anchor, 0.0])
    point = np.linalg.solve(system, rhs)
    return Line(point=point, direction=direction)


__all__ = [
    "Line",
    "Plane",
    "Transformation",
    "as_points",
    "as_vector",
    "compose_transformations",
    "intersect_plane_plane",
    "make_transformation",
    "unit",
]
