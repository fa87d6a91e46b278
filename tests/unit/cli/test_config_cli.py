"""Unit tests for config commands."""

from pathlib import Path

import pytest
from exavctl.cli.main import app
from exavctl.core.settings import Settings, load_settings
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated XDG config home."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    return tmp_path


class TestConfigInit:
    """Tests for exavctl config init."""

    def test_init_writes_defaults(self, config_home: Path) -> None:
        """Init writes a default settings file."""
        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0, result.output
        path = config_home / "exavctl" / "config.toml"
        assert load_settings(path) == Settings()

    def test_init_refuses_overwrite(self, config_home: Path) -> None:
        """An existing file is kept unless --force is given."""
        path = config_home / "exavctl" / "config.toml"
        path.parent.mkdir(parents=True)
        path.write_text("timeout_seconds = 300\n", encoding="utf-8")

        refused = runner.invoke(app, ["config", "init"])
        assert refused.exit_code == 1
        assert load_settings(path).timeout_seconds == 300

        forced = runner.invoke(app, ["config", "init", "--force"])
        assert forced.exit_code == 0
        assert load_settings(path).timeout_seconds == 120

    def test_init_custom_path(self, tmp_path: Path) -> None:
        """--config selects the file to write."""
        path = tmp_path / "custom.toml"

        result = runner.invoke(app, ["--config", str(path), "config", "init"])

        assert result.exit_code == 0
        assert path.is_file()


class TestConfigShow:
    """Tests for exavctl config show."""

    def test_show_defaults(self, config_home: Path) -> None:
        """Unset values are shown as environment fallbacks."""
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0, result.output
        assert "install_path" in result.output
        assert "(environment)" in result.output
        assert "powershell.exe" in result.output

    def test_show_invalid_file(self, config_home: Path) -> None:
        """An invalid settings file is reported."""
        path = config_home / "exavctl" / "config.toml"
        path.parent.mkdir(parents=True)
        path.write_text("unknown_key = 1\n", encoding="utf-8")

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 1
        assert "Invalid settings content" in result.output
