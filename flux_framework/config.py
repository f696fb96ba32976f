"""Flux — Configuration.

Configuration is merged from (later entries win):
    1. Built-in defaults (this file)
    2. System config: /etc/flux/flux.yaml
    3. User config:   ~/.config/flux/flux.yaml
    4. An explicit ``--config FILE``
Environment variables prefixed with ``FLUX_`` fill in any value that no file
sets (e.g. ``FLUX_GENERAL__MODE=auto``).

Modules receive a deep copy of the settings on every call, so nothing a module
does can change the orchestrator's view.  Persisting a change is a separate
step performed by ``flux config KEY VALUE`` through :meth:`Settings.save`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, PrivateAttr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from flux_framework.exceptions import ConfigError

SYSTEM_CONFIG_PATH = Path("/etc/flux/flux.yaml")


def user_config_path() -> Path:
    return Path.home() / ".config" / "flux" / "flux.yaml"


# ---------------------------------------------------------------------------
# Sub-configuration blocks
# ---------------------------------------------------------------------------


class GeneralConfig(BaseModel):
    mode: Literal["interactive", "auto", "dry-run"] = Field(
        default="interactive",
        description=(
            "interactive — prompt before each module (default). "
            "auto — accept every prompt's default answer. "
            "dry-run — modules report what they would do without changing anything."
        ),
    )
    log_level: Literal["debug", "info", "warning", "error", "critical"] = "info"
    colored_output: bool = True
    default_ssh_port: int = Field(default=22, ge=1, le=65535)
    default_admin_user: str = "fluxadmin"
    default_admin_groups: list[str] = Field(
        default_factory=lambda: ["sudo", "adm", "systemd-journal"]
    )
    github_user: str | None = None
    default_dns: list[str] = Field(default_factory=lambda: ["1.1.1.1", "8.8.8.8"])


class LoggingConfig(BaseModel):
    format: Literal["json", "console"] = "console"
    file: Path | None = None


class WorkflowConfig(BaseModel):
    """A workflow declared in the config file."""

    description: str = ""
    modules: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------

# Keys that ``get``/``set`` map onto the general block.  Anything else is a
# custom key/value pair.
_GENERAL_KEYS = (
    "mode",
    "log_level",
    "colored_output",
    "default_ssh_port",
    "default_admin_user",
    "github_user",
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FLUX_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    general: GeneralConfig = Field(default_factory=GeneralConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    modules: dict[str, dict[str, Any]] = Field(default_factory=dict)
    workflows: dict[str, WorkflowConfig] = Field(default_factory=dict)
    custom: dict[str, str] = Field(default_factory=dict)

    _config_path: Path | None = PrivateAttr(default=None)

    @classmethod
    def load(cls, config_file: Path | None = None) -> "Settings":
        """Load settings from the config files and environment variables.

        Raises:
            ConfigError: A config file exists but cannot be read or parsed,
                or the merged values fail validation.
        """
        data: dict[str, Any] = {}

        candidates = [SYSTEM_CONFIG_PATH, user_config_path()]
        if config_file:
            if not Path(config_file).exists():
                raise ConfigError(
                    f"Config file not found: {config_file}",
                    context={"path": str(config_file)},
                )
            candidates.append(Path(config_file))

        for path in candidates:
            if path.exists():
                data.update(_read_yaml(path))

        try:
            settings = cls(**data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc

        settings._config_path = Path(config_file) if config_file else user_config_path()
        return settings

    @property
    def config_path(self) -> Path | None:
        return self._config_path

    @property
    def dry_run(self) -> bool:
        return self.general.mode == "dry-run"

    # ------------------------------------------------------------------
    # Key/value access used by ``flux config``
    # ------------------------------------------------------------------

    def get(self, key: str) -> str | None:
        """Return the string value for *key*, checking custom values first."""
        if key in self.custom:
            return self.custom[key]
        if key in _GENERAL_KEYS:
            value = getattr(self.general, key)
            if value is None:
                return None
            return str(value).lower() if isinstance(value, bool) else str(value)
        return None

    def set(self, key: str, value: str) -> None:
        """Set *key* to *value*, validating known general keys.

        Raises:
            ConfigError: The value is not valid for the key.
        """
        if key not in _GENERAL_KEYS:
            self.custom[key] = value
            return

        update: dict[str, Any] = self.general.model_dump()
        if key == "colored_output":
            lowered = value.strip().lower()
            if lowered not in ("true", "false"):
                raise ConfigError(
                    "Invalid boolean value", context={"key": key, "value": value}
                )
            update[key] = lowered == "true"
        else:
            update[key] = value
        try:
            self.general = GeneralConfig.model_validate(update)
        except ValidationError as exc:
            raise ConfigError(
                f"Invalid value for '{key}': {value}",
                context={"key": key, "value": value},
            ) from exc

    def all(self) -> list[tuple[str, str]]:
        """Return every set key/value pair, sorted by key."""
        values = [(k, v) for k in _GENERAL_KEYS if (v := self.get(k)) is not None]
        values.extend(self.custom.items())
        return sorted(values)

    def module_config(self, module_name: str) -> dict[str, Any]:
        """Return the ``modules.<module_name>`` block (empty if absent)."""
        return dict(self.modules.get(module_name, {}))

    def save(self, path: Path | None = None) -> Path:
        """Write the settings as YAML to *path* (default: the load target).

        Raises:
            ConfigError: No path is known or the file cannot be written.
        """
        target = path or self._config_path
        if target is None:
            raise ConfigError("No config path set")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open("w") as f:
                yaml.safe_dump(self.model_dump(mode="json"), f, sort_keys=False)
        except OSError as exc:
            raise ConfigError(
                f"Failed to write config file: {exc}", context={"path": str(target)}
            ) from exc
        return target


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open() as f:
            loaded = yaml.safe_load(f) or {}
    except OSError as exc:
        raise ConfigError(
            f"Failed to read config file: {exc}", context={"path": str(path)}
        ) from exc
    except yaml.YAMLError as exc:
        raise ConfigError(
            f"Failed to parse config file: {exc}", context={"path": str(path)}
        ) from exc
    if not isinstance(loaded, dict):
        raise ConfigError(
            "Config file must contain a mapping", context={"path": str(path)}
        )
    return loaded


# Module-level singleton, replaced by ``Settings.load()`` at CLI startup.
_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def override_settings(settings: Settings) -> None:
    """Replace the module-level singleton. Used in tests."""
    global _settings
    _settings = settings
