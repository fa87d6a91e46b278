"""Unit tests for settings loading, saving and context resolution."""

import tomllib
from pathlib import Path

import pytest
from exavctl.core.settings import (
    Settings,
    SettingsError,
    SettingsNotFoundError,
    SettingsParseError,
    load_settings,
    load_settings_or_default,
    resolve_context,
    resolve_hostname,
    save_settings,
)


class TestSettingsModel:
    """Tests for the Settings model."""

    def test_defaults(self) -> None:
        """Defaults leave host-specific values to the environment."""
        settings = Settings()

        assert settings.install_path is None
        assert settings.powershell == "powershell.exe"
        assert settings.timeout_seconds == 120

    def test_rejects_unknown_keys(self) -> None:
        """Unknown keys are a validation error."""
        with pytest.raises(ValueError):
            Settings.model_validate({"instal_path": "C:\\"})

    @pytest.mark.parametrize("timeout", [5, 4000])
    def test_timeout_bounds(self, timeout: int) -> None:
        """Timeout must stay between 10 and 3600 seconds."""
        with pytest.raises(ValueError):
            Settings(timeout_seconds=timeout)


class TestLoadSettings:
    """Tests for load_settings and load_settings_or_default."""

    def test_load_valid(self, tmp_path: Path) -> None:
        """Values from TOML are validated into Settings."""
        path = tmp_path / "config.toml"
        path.write_text(
            'install_path = "D:\\\\Exchange\\\\"\ntimeout_seconds = 300\n', encoding="utf-8"
        )

        settings = load_settings(path)

        assert settings.install_path == "D:\\Exchange\\"
        assert settings.timeout_seconds == 300

    def test_missing_file(self, tmp_path: Path) -> None:
        """An explicit missing path raises SettingsNotFoundError."""
        with pytest.raises(SettingsNotFoundError):
            load_settings(tmp_path / "absent.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML raises SettingsParseError."""
        path = tmp_path / "config.toml"
        path.write_text("install_path = \n", encoding="utf-8")

        with pytest.raises(SettingsParseError):
            load_settings(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Schema violations raise SettingsError."""
        path = tmp_path / "config.toml"
        path.write_text("timeout_seconds = 1\n", encoding="utf-8")

        with pytest.raises(SettingsError, match="Invalid settings content"):
            load_settings(path)

    def test_default_path_absent_gives_defaults(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Without a settings file at the default path, defaults are used."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert load_settings_or_default() == Settings()

    def test_explicit_path_must_exist(self, tmp_path: Path) -> None:
        """An explicit path is never silently replaced by defaults."""
        with pytest.raises(SettingsNotFoundError):
            load_settings_or_default(tmp_path / "absent.toml")


class TestSaveSettings:
    """Tests for save_settings."""

    def test_round_trip_omits_unset(self, tmp_path: Path) -> None:
        """Saved TOML reloads equal and leaves None values out."""
        path = tmp_path / "nested" / "config.toml"
        settings = Settings(install_path="D:\\Exchange\\", output_dir=Path("reports"))

        save_settings(settings, path)

        with open(path, "rb") as f:
            data = tomllib.load(f)
        assert "system_root" not in data
        assert data["output_dir"] == "reports"
        assert load_settings(path) == settings


class TestResolveContext:
    """Tests for resolve_context and resolve_hostname."""

    def test_environment_fallbacks(self) -> None:
        """Environment variables fill unset values."""
        env = {
            "COMPUTERNAME": "EX02",
            "ExchangeInstallPath": "E:\\Exchange\\",
            "SystemRoot": "E:\\Windows",
            "SystemDrive": "E:",
        }

        context = resolve_context(Settings(), environ=env)

        assert context.hostname == "EX02"
        assert context.install_path == "E:\\Exchange\\"
        assert context.system_root == "E:\\Windows"
        assert context.system_drive == "E:"

    def test_precedence(self) -> None:
        """Arguments beat settings, settings beat environment."""
        env = {"COMPUTERNAME": "EX02", "ExchangeInstallPath": "E:\\Env\\"}
        settings = Settings(install_path="F:\\Settings", system_root="F:\\Windows")

        from_settings = resolve_context(settings, environ=env)
        from_args = resolve_context(settings, host="EX09", install_path="G:\\Arg", environ=env)

        assert from_settings.install_path == "F:\\Settings\\"
        assert from_settings.system_root == "F:\\Windows"
        assert from_args.hostname == "EX09"
        assert from_args.install_path == "G:\\Arg\\"

    def test_builtin_defaults(self) -> None:
        """SystemRoot and SystemDrive default to C:."""
        context = resolve_context(Settings(), host="EX01", install_path="C:\\X", environ={})

        assert context.system_root == "C:\\Windows"
        assert context.system_drive == "C:"

    def test_missing_install_path(self) -> None:
        """Without any install path source, resolution fails."""
        with pytest.raises(SettingsError, match="install path"):
            resolve_context(Settings(), host="EX01", environ={})

    def test_hostname_falls_back_to_socket(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without COMPUTERNAME the socket hostname is used."""
        monkeypatch.setattr("exavctl.core.settings.socket.gethostname", lambda: "linuxbox")

        assert resolve_hostname(None, {}) == "linuxbox"
