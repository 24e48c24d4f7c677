"""Utility package re-exporting shared helpers for viewfit."""

from viewfit.utils.format import format_matrix, format_point
from viewfit.utils.geometry import (
    Line,
    Plane,
    Transformation,
    compose_transformations,
    intersect_plane_plane,
    make_transformation,
)
from viewfit.utils.io import (
    atomic_write_json,
    atomic_write_yaml,
    load_document,
    load_json,
    load_yaml,
    write_document,
)
from viewfit.utils.logger import configure, get_logger, logging_context

__all__ = [
    "Line",
    "Plane",
    "Transformation",
    "atomic_write_json",
    "atomic_write_yaml",
    "compose_transformations",
    "configure",
    "format_matrix",
    "format_point",
    "get_logger",
    "intersect_plane_plane",
    "load_document",
    "load_json",
    "load_yaml",
    "logging_context",
    "make_transformation",
    "write_document",
]
