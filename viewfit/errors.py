"""Exceptions raised by the framing code."""

from __future__ import annotations


class DegenerateGeometryError(ValueError):
    """Geometry that has no well-defined answer: zero normals, parallel planes."""


class InvalidFrustum(DegenerateGeometryError):
    """Frustum side planes that cannot drive a framing solve.

    Raised for zero-length or parallel side normals and for orthographic
    extents that come out negative. This is a broken precondition from the
    frustum producer and is propagated to the caller.
    """


__all__ = ["DegenerateGeometryError", "InvalidFrustum"]
