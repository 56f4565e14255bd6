"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``HOSTLAYOUT_*`` prefix
  3. TOML file    — ``<config_dir>/<app_name>/config.toml`` or ``--config``
  4. Code defaults

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource`.
"""

from __future__ import annotations

import os
import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

APP_NAME = "hostlayout"
CONFIG_FILENAME = "config.toml"
LAYOUT_FILENAME = "layout.json"
CONFIG_ENV_VAR = "HOSTLAYOUT_CONFIG"


def default_config_dir() -> Path:
    """``$XDG_CONFIG_HOME``, falling back to ``~/.config``."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".config"


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a TOML file, if one exists."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class HostLayoutSettings(BaseSettings):
    """Settings for the layout store and CLI.

    Attributes:
        config_dir: Base per-user configuration directory.
        app_name: Subdirectory of *config_dir* holding the layout.
        layout_filename: Name of the layout document.
        hosts: Canonical host names given on the command line.
        hosts_file: Optional file listing canonical hosts, one per line.
        config_path: TOML file the settings were read from, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "HOSTLAYOUT_",
        "env_nested_delimiter": "__",
    }

    config_dir: Path = Field(default_factory=default_config_dir)
    app_name: str = APP_NAME
    layout_filename: str = LAYOUT_FILENAME
    config_path: Path | None = None

    hosts: tuple[str, ...] = ()
    hosts_file: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    @property
    def app_dir(self) -> Path:
        return self.config_dir / self.app_name

    @property
    def layout_path(self) -> Path:
        return self.app_dir / self.layout_filename

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        config_dir: Path | None = None,
        **cli_flags: Any,
    ) -> HostLayoutSettings:
        """Construct settings from a CLI invocation.

        The TOML file is *config_path* when given, else ``$HOSTLAYOUT_CONFIG``,
        else ``config.toml`` inside the app directory. ``None`` flag values
        are dropped so they never mask env or TOML values.
        """
        flags = {k: v for k, v in cli_flags.items() if v is not None}
        if config_dir is not None:
            flags["config_dir"] = config_dir

        toml_path = find_config(config_path, config_dir=config_dir)
        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **flags)
        finally:
            _tls.toml_path = None


def find_config(config_path: str | None = None, *, config_dir: Path | None = None) -> Path | None:
    """Locate the TOML config file, or None if there is none."""
    explicit = config_path or os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        p = Path(explicit)
        return p if p.is_file() else None

    env_dir = os.environ.get("HOSTLAYOUT_CONFIG_DIR")
    base = config_dir or (Path(env_dir) if env_dir else default_config_dir())
    candidate = base / APP_NAME / CONFIG_FILENAME
    return candidate if candidate.is_file() else None
