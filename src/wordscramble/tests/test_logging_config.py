"""Tests for logging setup."""
import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from wordscramble.config import settings
from wordscramble.logging_config import setup_logging


@pytest.fixture
def root_logger():
    """Restore the root logger after a test reconfigures it."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        if handler not in handlers:
            handler.close()
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_setup_logging_console_only(root_logger: logging.Logger) -> None:
    with patch.object(settings.logging, "dir", None):
        root = setup_logging("Starting tests", level="warning")
    assert root is root_logger
    assert root.level == logging.WARNING
    assert len(root.handlers) == 1
    assert logging.getLogger("telegram").level == logging.WARNING


def test_setup_logging_with_file(root_logger: logging.Logger, tmp_path: Path) -> None:
    log_dir = tmp_path / "logs"
    with patch.object(settings.logging, "dir", str(log_dir)):
        root = setup_logging(level=logging.DEBUG)
    assert (log_dir / "wordscramble.log").exists()
    assert len(root.handlers) == 2
    assert root.level == logging.DEBUG
