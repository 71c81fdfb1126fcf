"""Layered settings loader: JSON files first, environment variables last."""

import json
import os
from pathlib import Path
from typing import Any

from dotenv import dotenv_values

from techtube.commons.settings.models import Settings

ENV_PREFIX = "TECHTUBE__"


class SettingsLoader:
    """Builds a ``Settings`` object from several configuration layers.

    Later layers win:
    1. ``appsettings.json``
    2. ``appsettings.{environment}.json``
    3. ``TECHTUBE__``-prefixed variables from the ``.env`` file
    4. ``TECHTUBE__``-prefixed process environment variables
    """

    def __init__(
        self,
        config_dir: Path | None = None,
        environment: str | None = None,
        env_file: Path | None = None,
    ) -> None:
        """Initialize the settings loader.

        Args:
            config_dir: Directory holding the JSON files. Defaults to ``./config``.
            environment: Environment name. Defaults to
                ``TECHTUBE__APP__ENVIRONMENT`` or ``dev``.
            env_file: Dotenv file read below the process environment.
                Defaults to ``./.env``.
        """
        self.config_dir = config_dir or Path("config")
        self.env_file = env_file or Path(".env")
        self.environment = environment or self._environ().get(
            f"{ENV_PREFIX}APP__ENVIRONMENT", "dev"
        )

    def load(self) -> Settings:
        """Resolve every layer and validate the result."""
        merged = self._read_file("appsettings.json")
        for layer in (
            self._read_file(f"appsettings.{self.environment}.json"),
            self._read_env(),
        ):
            merged = self._deep_merge(merged, layer)
        return Settings(**merged)

    def _environ(self) -> dict[str, str]:
        """Process environment over the ``.env`` file.

        Blank entries in the file are unfilled placeholders and are skipped.
        """
        values: dict[str, str] = {}
        if self.env_file.is_file():
            values = {
                name: value
                for name, value in dotenv_values(self.env_file).items()
                if value
            }
        values.update(os.environ)
        return values

    def _read_env(self) -> dict[str, Any]:
        """Turn ``TECHTUBE__MEDIA__CLOUD_NAME=x`` into ``{"media": {"cloud_name": "x"}}``."""
        tree: dict[str, Any] = {}
        for name, raw in self._environ().items():
            if not name.startswith(ENV_PREFIX):
                continue
            *parents, leaf = name[len(ENV_PREFIX) :].lower().split("__")
            node = tree
            for part in parents:
                node = node.setdefault(part, {})
            node[leaf] = self._coerce_value(raw)
        return tree

    def _coerce_value(self, value: str) -> Any:
        """Decode JSON lists/objects; scalars stay strings for pydantic to coerce.

        Numeric-looking credentials (API keys) must remain strings.
        """
        if value.startswith(("[", "{")):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass

        return value

    def _read_file(self, filename: str) -> dict[str, Any]:
        """Read a JSON layer; a missing file is an empty layer."""
        path = self.config_dir / filename
        if not path.exists():
            return {}
        with path.open(encoding="utf-8") as f:
            return dict(json.load(f))

    def _deep_merge(
        self,
        base: dict[str, Any],
        override: dict[str, Any],
    ) -> dict[str, Any]:
        """Recursively merge ``override`` into a copy of ``base``."""
        result = base.copy()
        for key, value in override.items():
            current = result.get(key)
            if isinstance(current, dict) and isinstance(value, dict):
                result[key] = self._deep_merge(current, value)
            else:
                result[key] = value
        return result


_settings: Settings | None = None


def get_settings(
    config_dir: Path | None = None,
    environment: str | None = None,
    *,
    reload: bool = False,
) -> Settings:
    """Return the process-wide settings, loading them on first use.

    Args:
        config_dir: Optional config directory override.
        environment: Optional environment override.
        reload: Discard the cached instance and load again.
    """
    global _settings  # noqa: PLW0603
    if _settings is None or reload:
        _settings = SettingsLoader(config_dir=config_dir, environment=environment).load()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings (tests)."""
    global _settings  # noqa: PLW0603
    _settings = None
