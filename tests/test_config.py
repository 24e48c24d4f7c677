"""Tests for centralized configuration module."""

from __future__ import annotations

from pathlib import Path

import pytest

from viewfit.config import (
    BASE_DIR,
    CAMERA_DEFAULT_FOV_DEG,
    GEOM_EPSILON,
    GEOM_TOLERANCE,
    LOG_DEFAULT_LEVEL,
    get_settings,
)


def test_constants_have_expected_types() -> None:
    """Verify that constants are defined and have expected types."""
    assert isinstance(BASE_DIR, Path)
    assert 0.0 < GEOM_EPSILON < GEOM_TOLERANCE
    assert 0.0 < CAMERA_DEFAULT_FOV_DEG < 180.0


def test_get_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test get_settings without environment overrides."""
    for key in (
        "VIEWFIT_LOGS_ROOT",
        "VIEWFIT_LOG_LEVEL",
        "VIEWFIT_LOG_TO_FILE",
        "VIEWFIT_EPSILON",
        "VIEWFIT_TOLERANCE",
        "VIEWFIT_DEFAULT_FOV",
    ):
        monkeypatch.delenv(key, raising=False)

    settings = get_settings()

    assert settings.paths.logs_root == BASE_DIR / "logs"
    assert settings.logging.level == LOG_DEFAULT_LEVEL
    assert settings.logging.to_file is False
    assert settings.geometry.epsilon == GEOM_EPSILON
    assert settings.geometry.tolerance == GEOM_TOLERANCE
    assert settings.camera.fov == CAMERA_DEFAULT_FOV_DEG
    assert settings.camera.vpwidth > 0
    assert settings.camera.vpheight > 0


def test_get_settings_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Test that VIEWFIT_* variables override defaults."""
    monkeypatch.setenv("VIEWFIT_LOGS_ROOT", str(tmp_path / "logs"))
    monkeypatch.setenv("VIEWFIT_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("VIEWFIT_LOG_TO_FILE", "yes")
    monkeypatch.setenv("VIEWFIT_TOLERANCE", "0.001")
    monkeypatch.setenv("VIEWFIT_DEFAULT_FOV", "60")

    settings = get_settings()

    assert settings.paths.logs_root == tmp_path / "logs"
    assert settings.logging.level == "DEBUG"
    assert settings.logging.to_file is True
    assert settings.geometry.tolerance == pytest.approx(0.001)
    assert settings.camera.fov == pytest.approx(60.0)


def test_settings_immutability() -> None:
    """Test that Settings is frozen and immutable."""
    settings = get_settings()

    with pytest.raises(Exception):  # FrozenInstanceError
        settings.geometry = None  # type: ignore
