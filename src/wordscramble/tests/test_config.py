"""Tests for configuration settings."""
from unittest.mock import patch

import pytest

from wordscramble.config import Settings, settings


def test_settings_defaults() -> None:
    """Test default training values."""
    assert settings.training.max_task_count == 6
    assert settings.training.max_err_count == 3
    assert settings.training.words_file is None
    assert settings.database.url == "sqlite:///:memory:"


def test_test_environment_has_no_pause() -> None:
    assert settings.training.pause_seconds == 0


@pytest.mark.parametrize("field, value", [
    ("max_task_count", 0),
    ("max_err_count", 0),
    ("pause_seconds", -1.0),
])
def test_validate_rejects_bad_training_settings(field: str, value) -> None:
    test_settings = Settings()
    setattr(test_settings.training, field, value)
    with pytest.raises(ValueError):
        test_settings.validate()


def test_validate_does_not_require_token() -> None:
    test_settings = Settings()
    test_settings.bot.token = ""
    test_settings.validate()


def test_ensure_directories(tmp_path) -> None:
    data_dir = tmp_path / "data"
    with patch("wordscramble.config.DATA_DIR", data_dir):
        from wordscramble.config import ensure_directories
        ensure_directories()
    assert data_dir.exists()


if __name__ == "__main__":
    pytest.main([__file__])
