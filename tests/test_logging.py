"""Tests for logging helpers."""

import logging
from io import StringIO
from pathlib import Path

import pytest

from promptkit import logging as pk_logging
from promptkit.logging import get_logger, setup_logging


@pytest.fixture(autouse=True)
def _restore_logger():
    root = logging.getLogger("promptkit")
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    root.disabled = False


class TestGetLogger:
    """Tests for get_logger."""

    def test_namespaced(self) -> None:
        """Loggers live under the promptkit namespace."""
        assert get_logger("prompts.select").name == "promptkit.prompts.select"
        assert get_logger("promptkit.tui").name == "promptkit.tui"


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_stream_handler(self) -> None:
        """Records at or above the level reach the stream."""
        stream = StringIO()
        setup_logging("INFO", format="%(levelname)s %(name)s %(message)s", stream=stream)

        get_logger("test").debug("hidden")
        get_logger("test").info("shown")

        assert stream.getvalue() == "INFO promptkit.test shown\n"

    def test_file_only(self, tmp_path: Path) -> None:
        """A file-only setup installs no stream handler."""
        log_file = tmp_path / "prompts.log"
        setup_logging("DEBUG", file=str(log_file))

        root = logging.getLogger("promptkit")
        assert [type(h) for h in root.handlers] == [logging.FileHandler]

        get_logger("test").debug("to file")
        for handler in root.handlers:
            handler.flush()
            handler.close()
        assert "to file" in log_file.read_text()

    def test_repeated_setup_replaces_handlers(self) -> None:
        """Calling setup twice does not duplicate output."""
        stream = StringIO()
        setup_logging("INFO", stream=stream)
        setup_logging("INFO", format="%(message)s", stream=stream)

        get_logger("test").info("once")

        assert stream.getvalue() == "once\n"

    def test_disable_enable(self) -> None:
        """disable() silences the whole package until enable()."""
        stream = StringIO()
        setup_logging("INFO", format="%(message)s", stream=stream)

        pk_logging.disable()
        get_logger("test").info("muted")
        pk_logging.enable()
        get_logger("test").info("audible")

        assert stream.getvalue() == "audible\n"

    def test_set_level(self) -> None:
        """set_level accepts names and numbers."""
        pk_logging.set_level("error")
        assert logging.getLogger("promptkit").level == logging.ERROR
        pk_logging.set_level(logging.DEBUG)
        assert logging.getLogger("promptkit").level == logging.DEBUG
