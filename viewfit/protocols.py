"""Protocol interfaces for the host camera and view.

The framing code reads camera orientation and projection state and writes the
eye and the orthographic extent through these contracts only, so any host
object with matching attributes can be framed.
"""

from __future__ import annotations

from typing import Protocol

import numpy.typing as npt


class CameraProtocol(Protocol):
    """Protocol for a host camera."""

    eye: npt.NDArray
    direction: npt.NDArray
    up: npt.NDArray
    perspective: bool
    fov: float
    fov_is_height: bool
    aspect_ratio: float
    height: float

    @property
    def xaxis(self) -> npt.NDArray:
        """Camera right axis in world coordinates."""
        ...

    @property
    def yaxis(self) -> npt.NDArray:
        """Camera up axis, orthogonal to the direction."""
        ...

    @property
    def zaxis(self) -> npt.NDArray:
        """Camera forward axis."""
        ...

    def set(self, eye: npt.ArrayLike, direction: npt.ArrayLike, up: npt.ArrayLike) -> None:
        """Set camera pose."""
        ...


class ViewProtocol(Protocol):
    """Protocol for a host view holding a camera and a viewport."""

    camera: CameraProtocol
    vpwidth: int
    vpheight: int


__all__ = ["CameraProtocol", "ViewProtocol"]
