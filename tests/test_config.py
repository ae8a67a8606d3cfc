"""Test module for configuration validation."""

import pytest
from pydantic import ValidationError

from app.config import Settings


def test_default_settings() -> None:
    """Test the defaults match the classic 600px board."""
    settings = Settings()

    assert settings.CANVAS_SIZE == 600
    assert (settings.GRID_ROWS, settings.GRID_COLS) == (4, 4)
    assert settings.HAT_COMPLEXITY == 6
    assert settings.SNAP_THRESHOLD == 30
    assert settings.DEFAULT_MISSING_PIECES == 5
    assert settings.MAX_MISSING_PIECES == 20


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that board settings can be overridden from the environment."""
    monkeypatch.setenv("CANVAS_SIZE", "800")
    monkeypatch.setenv("SNAP_THRESHOLD", "12.5")

    settings = Settings()

    assert settings.CANVAS_SIZE == 800
    assert settings.SNAP_THRESHOLD == 12.5


@pytest.mark.parametrize(
    "name,value",
    [
        ("CANVAS_SIZE", "0"),
        ("GRID_ROWS", "-1"),
        ("HAT_COMPLEXITY", "0"),
        ("SNAP_THRESHOLD", "-3"),
        ("SOLVE_DURATION", "0"),
        ("SETTLE_DELAY", "-0.1"),
    ],
)
def test_invalid_board_settings_are_rejected(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    """Test that non-positive board parameters raise a validation error."""
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        Settings()


def test_puzzle_config_from_settings() -> None:
    """Test that settings produce a matching core config."""
    settings = Settings()

    config = settings.puzzle_config("uploads/abc.img")

    assert config.image_url == "uploads/abc.img"
    assert config.canvas_size == settings.CANVAS_SIZE
    assert config.snap_threshold == settings.SNAP_THRESHOLD
    assert settings.puzzle_config().image_url == settings.IMAGE_URL


def test_default_missing_pieces_above_cap_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that the default difficulty cannot exceed the API cap."""
    monkeypatch.setenv("DEFAULT_MISSING_PIECES", "30")
    monkeypatch.setenv("MAX_MISSING_PIECES", "20")

    with pytest.raises(ValidationError):
        Settings()
