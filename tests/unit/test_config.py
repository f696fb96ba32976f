"""Unit tests — Settings loading, key/value access and persistence."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from flux_framework.config import Settings, get_settings, override_settings
from flux_framework.exceptions import ConfigError


@pytest.mark.unit
class TestDefaults:
    def test_default_values(self) -> None:
        settings = Settings()
        assert settings.general.mode == "interactive"
        assert settings.general.default_ssh_port == 22
        assert settings.logging.format == "console"
        assert settings.workflows == {}
        assert not settings.dry_run

    def test_dry_run_mode(self) -> None:
        assert Settings(general={"mode": "dry-run"}).dry_run

    def test_invalid_port_rejected(self) -> None:
        with pytest.raises(ValueError):
            Settings(general={"default_ssh_port": 70000})

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FLUX_GENERAL__MODE", "auto")
        assert Settings().general.mode == "auto"


@pytest.mark.unit
class TestLoad:
    def test_no_files_gives_defaults(self, isolated_config_paths: Path) -> None:
        settings = Settings.load()
        assert settings.general.mode == "interactive"
        assert settings.config_path == isolated_config_paths / "user-flux.yaml"

    def test_explicit_file_wins(self, isolated_config_paths: Path) -> None:
        (isolated_config_paths / "etc-flux.yaml").write_text("general:\n  mode: auto\n")
        explicit = isolated_config_paths / "mine.yaml"
        explicit.write_text(
            "general:\n  mode: dry-run\n"
            "modules:\n  ssh:\n    port: 2222\n"
            "workflows:\n  web:\n    modules: [ssh, certs]\n"
        )
        settings = Settings.load(explicit)
        assert settings.general.mode == "dry-run"
        assert settings.module_config("ssh") == {"port": 2222}
        assert settings.workflows["web"].modules == ["ssh", "certs"]
        assert settings.config_path == explicit

    def test_missing_explicit_file(self, isolated_config_paths: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            Settings.load(isolated_config_paths / "missing.yaml")

    def test_malformed_yaml(self, isolated_config_paths: Path) -> None:
        bad = isolated_config_paths / "bad.yaml"
        bad.write_text("general: [unclosed\n")
        with pytest.raises(ConfigError, match="parse"):
            Settings.load(bad)

    def test_non_mapping(self, isolated_config_paths: Path) -> None:
        bad = isolated_config_paths / "list.yaml"
        bad.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            Settings.load(bad)

    def test_invalid_value(self, isolated_config_paths: Path) -> None:
        bad = isolated_config_paths / "mode.yaml"
        bad.write_text("general:\n  mode: sometimes\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            Settings.load(bad)


@pytest.mark.unit
class TestKeyValue:
    def test_get_general_and_custom(self) -> None:
        settings = Settings(custom={"region": "eu"})
        assert settings.get("mode") == "interactive"
        assert settings.get("colored_output") == "true"
        assert settings.get("region") == "eu"
        assert settings.get("unknown") is None
        assert settings.get("github_user") is None

    def test_set_general_key_validated(self) -> None:
        settings = Settings()
        settings.set("default_ssh_port", "2222")
        assert settings.general.default_ssh_port == 2222
        with pytest.raises(ConfigError):
            settings.set("default_ssh_port", "not-a-port")
        with pytest.raises(ConfigError):
            settings.set("mode", "sometimes")
        assert settings.general.default_ssh_port == 2222

    def test_set_bool(self) -> None:
        settings = Settings()
        settings.set("colored_output", "FALSE")
        assert settings.general.colored_output is False
        with pytest.raises(ConfigError):
            settings.set("colored_output", "maybe")

    def test_set_custom(self) -> None:
        settings = Settings()
        settings.set("region", "eu")
        assert settings.get("region") == "eu"

    def test_all_sorted(self) -> None:
        settings = Settings(custom={"zone": "a"})
        keys = [k for k, _ in settings.all()]
        assert keys == sorted(keys)
        assert "zone" in keys
        assert "github_user" not in keys

    def test_module_config_is_a_copy(self) -> None:
        settings = Settings(modules={"ssh": {"port": 22}})
        settings.module_config("ssh")["port"] = 1
        assert settings.modules["ssh"]["port"] == 22
        assert settings.module_config("missing") == {}


@pytest.mark.unit
class TestSave:
    def test_save_round_trip(self, isolated_config_paths: Path) -> None:
        target = isolated_config_paths / "saved" / "flux.yaml"
        settings = Settings()
        settings.set("mode", "auto")
        settings.set("region", "eu")
        assert settings.save(target) == target

        data = yaml.safe_load(target.read_text())
        assert data["general"]["mode"] == "auto"
        assert data["custom"] == {"region": "eu"}
        assert Settings.load(target).get("region") == "eu"

    def test_save_without_path(self) -> None:
        with pytest.raises(ConfigError):
            Settings().save()


@pytest.mark.unit
class TestSingleton:
    def test_override(self) -> None:
        settings = Settings(custom={"marker": "1"})
        override_settings(settings)
        assert get_settings() is settings
