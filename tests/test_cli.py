"""Tests for the promptkit command line."""

import io
import logging
from pathlib import Path

import pytest
import yaml

from promptkit.cli import DEMO_KINDS, main
from promptkit.config import get_settings


@pytest.fixture(autouse=True)
def _restore_logger():
    root = logging.getLogger("promptkit")
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSettingsCommand:
    """Tests for `promptkit settings`."""

    def test_show(self, capsys: pytest.CaptureFixture[str]) -> None:
        """The effective settings are printed as YAML."""
        assert main(["settings"]) == 0

        out = capsys.readouterr().out
        assert "Current Settings" in out
        assert "page_size: 10" in out

    def test_init_writes_file(self, tmp_path: Path) -> None:
        """--init writes a loadable settings file."""
        path = tmp_path / "promptkit.yaml"

        assert main(["settings", "--init", str(path)]) == 0
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        assert data["color"] == "never"
        assert data["symbols"]["pointer"] == "❯"

    def test_init_refuses_overwrite(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """An existing file is left alone."""
        path = tmp_path / "promptkit.yaml"
        path.write_text("keep: me\n")

        assert main(["settings", "--init", str(path)]) == 1
        assert path.read_text() == "keep: me\n"
        assert "already exists" in capsys.readouterr().out


class TestGlobalOptions:
    """Tests for -c/--config."""

    def test_config_file_applied(self, tmp_path: Path) -> None:
        """A valid settings file becomes the process default."""
        path = tmp_path / "settings.yaml"
        path.write_text("page_size: 3\ncolor: never\n")

        assert main(["-c", str(path), "settings"]) == 0
        assert get_settings().page_size == 3

    def test_bad_config_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Invalid settings abort with exit code 1."""
        path = tmp_path / "settings.yaml"
        path.write_text("page_size: 0\n")

        assert main(["-c", str(path), "settings"]) == 1
        assert "Failed to load" in capsys.readouterr().out

    def test_missing_config_file(self, tmp_path: Path) -> None:
        """A missing file is reported, not raised."""
        assert main(["-c", str(tmp_path / "nope.yaml"), "settings"]) == 1


class TestDemoCommand:
    """Tests for `promptkit demo`."""

    def test_every_kind_is_offered(self) -> None:
        """All prompt kinds plus 'all' are valid choices."""
        assert set(DEMO_KINDS) >= {"text", "select", "date", "form", "editor", "all"}

    def test_unknown_kind(self) -> None:
        """argparse rejects unknown kinds."""
        with pytest.raises(SystemExit) as exc_info:
            main(["demo", "wizard"])
        assert exc_info.value.code == 2

    def test_without_terminal(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        """A non-interactive stdin is reported with exit code 1."""
        monkeypatch.setattr("sys.stdin", io.StringIO())

        assert main(["demo", "text"]) == 1
        assert "file descriptor" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Running without a command shows usage."""
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out
