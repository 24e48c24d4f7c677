"""Centralized configuration for the viewfit camera framing toolkit.

All constants, settings, and configuration dataclasses are defined here.
Modules should import from this single source of truth.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

# ============================================================================
# PROJECT PATHS
# ============================================================================

BASE_DIR: Final[Path] = Path(__file__).resolve().parent.parent


def _env_path(key: str, default: Path) -> Path:
    """Resolve path from environment variable with fallback."""
    value = os.getenv(key)
    return Path(value).expanduser() if value else default


def _env_str(key: str, default: str) -> str:
    """Resolve string from environment variable with fallback."""
    value = os.getenv(key)
    return value if value is not None else default


def _env_float(key: str, default: float) -> float:
    """Resolve float from environment variable with fallback."""
    value = os.getenv(key)
    return float(value) if value is not None else default


def _env_bool(key: str, default: bool) -> bool:
    """Resolve boolean from environment variable with fallback."""
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


# ============================================================================
# GEOMETRY CONSTANTS
# ============================================================================

# Normals shorter than this are rejected, cross products shorter than this
# mean parallel planes.
GEOM_EPSILON: Final[float] = 1e-9
# Containment checks after framing.
GEOM_TOLERANCE: Final[float] = 1e-6

# ============================================================================
# CAMERA CONSTANTS
# ============================================================================

CAMERA_DEFAULT_FOV_DEG: Final[float] = 35.0
CAMERA_DEFAULT_ORTHO_HEIGHT: Final[float] = 1.0
VIEWPORT_DEFAULT_WIDTH: Final[int] = 1280
VIEWPORT_DEFAULT_HEIGHT: Final[int] = 720

# ============================================================================
# LOGGING CONSTANTS
# ============================================================================

LOG_DEFAULT_LEVEL: Final[str] = "INFO"
LOG_FILE_PREFIX: Final[str] = "viewfit"

# ============================================================================
# DATACLASSES - Configuration Sections
# ============================================================================


@dataclass(frozen=True)
class PathsConfig:
    """File system paths configuration."""

    logs_root: Path


@dataclass(frozen=True)
class LoggingConfig:
    """Log level and sink selection."""

    level: str = LOG_DEFAULT_LEVEL
    to_file: bool = False


@dataclass(frozen=True)
class GeometryConfig:
    """Numeric thresholds shared by the geometry code."""

    epsilon: float = GEOM_EPSILON
    tolerance: float = GEOM_TOLERANCE


@dataclass(frozen=True)
class CameraDefaults:
    """Fallback values used when a scene file omits camera fields."""

    fov: float = CAMERA_DEFAULT_FOV_DEG
    vpwidth: int = VIEWPORT_DEFAULT_WIDTH
    vpheight: int = VIEWPORT_DEFAULT_HEIGHT
    ortho_height: float = CAMERA_DEFAULT_ORTHO_HEIGHT


# ============================================================================
# MAIN CONFIGURATION
# ============================================================================


@dataclass(frozen=True)
class Settings:
    """Main application configuration.

    Instances are immutable (frozen=True) to prevent accidental mutation.
    """

    paths: PathsConfig
    logging: LoggingConfig
    geometry: GeometryConfig
    camera: CameraDefaults


def get_settings() -> Settings:
    """Factory function to create Settings with environment variable overrides.

    Environment variables:
        VIEWFIT_LOGS_ROOT: Directory for log files
        VIEWFIT_LOG_LEVEL: Logging level
        VIEWFIT_LOG_TO_FILE: Enable the file sink (1/true/yes/on)
        VIEWFIT_EPSILON: Degeneracy threshold for normals and intersections
        VIEWFIT_TOLERANCE: Containment tolerance
        VIEWFIT_DEFAULT_FOV: Field of view in degrees for scene files without one
    """
    paths = PathsConfig(logs_root=_env_path("VIEWFIT_LOGS_ROOT", BASE_DIR / "logs"))

    logging = LoggingConfig(
        level=_env_str("VIEWFIT_LOG_LEVEL", LOG_DEFAULT_LEVEL),
        to_file=_env_bool("VIEWFIT_LOG_TO_FILE", False),
    )

    geometry = GeometryConfig(
        epsilon=_env_float("VIEWFIT_EPSILON", GEOM_EPSILON),
        tolerance=_env_float("VIEWFIT_TOLERANCE", GEOM_TOLERANCE),
    )

    camera = CameraDefaults(fov=_env_float("VIEWFIT_DEFAULT_FOV", CAMERA_DEFAULT_FOV_DEG))

    return Settings(paths=paths, logging=logging, geometry=geometry, camera=camera)


# ============================================================================
# MODULE EXPORTS
# ============================================================================

__all__ = [
    # Factory
    "get_settings",
    # Main config
    "Settings",
    # Config sections
    "PathsConfig",
    "LoggingConfig",
    "GeometryConfig",
    "CameraDefaults",
    # Constants
    "BASE_DIR",
    "GEOM_EPSILON",
    "GEOM_TOLERANCE",
    "CAMERA_DEFAULT_FOV_DEG",
    "CAMERA_DEFAULT_ORTHO_HEIGHT",
    "VIEWPORT_DEFAULT_WIDTH",
    "VIEWPORT_DEFAULT_HEIGHT",
    "LOG_DEFAULT_LEVEL",
    "LOG_FILE_PREFIX",
]
