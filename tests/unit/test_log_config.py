"""Unit tests for configure_logging."""

import logging
from pathlib import Path

import pytest

from fsynth.log_config import LOG_FORMAT, configure_logging


@pytest.fixture(autouse=True)
def reset_fsynth_logger():
    package_logger = logging.getLogger("fsynth")
    level = package_logger.level
    handlers = list(package_logger.handlers)
    yield
    for handler in list(package_logger.handlers):
        if handler not in handlers:
            package_logger.removeHandler(handler)
            handler.close()
    package_logger.setLevel(level)


@pytest.mark.unit
class TestConfigureLogging:
    def test_default_level_is_warning(self, monkeypatch):
        monkeypatch.delenv("FSYNTH_LOG_LEVEL", raising=False)
        monkeypatch.delenv("FSYNTH_LOG_FILE", raising=False)

        package_logger = configure_logging()

        assert package_logger.name == "fsynth"
        assert package_logger.level == logging.WARNING

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("FSYNTH_LOG_LEVEL", "debug")

        assert configure_logging().level == logging.DEBUG

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("FSYNTH_LOG_LEVEL", "DEBUG")

        assert configure_logging("ERROR").level == logging.ERROR

    def test_file_handler(self, temp_dir: Path):
        log_file = temp_dir / "fsynth.log"

        configure_logging("INFO", log_file)
        logging.getLogger("fsynth.operations").info("copied something")
        for handler in logging.getLogger("fsynth").handlers:
            handler.flush()

        text = log_file.read_text()
        assert "fsynth.operations - INFO - copied something" in text

    def test_reconfigure_replaces_handlers(self, monkeypatch):
        monkeypatch.delenv("FSYNTH_LOG_FILE", raising=False)
        configure_logging("INFO")
        package_logger = configure_logging("INFO")

        installed = [h for h in package_logger.handlers if getattr(h, "_fsynth_handler", False)]
        assert len(installed) == 1
        assert installed[0].formatter._fmt == LOG_FORMAT

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            configure_logging("LOUD")
