"""
Configuration store for the remote-control server settings.

Values come from, in order of precedence:
- GRANTFLOW_* environment variables (a .env file is loaded first)
- settings.yaml in the config directory
- Defaults (built in, or replaced by defaults.yaml in the config directory)

Every getter reads the sources again, nothing is cached.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv

from ..errors import ConfigError
from ..schemas.flow import ConfigSnapshot

load_dotenv()

logger = logging.getLogger(__name__)

SETTINGS_FILE = "settings.yaml"
DEFAULTS_FILE = "defaults.yaml"

KEY_VIEW_ONLY = "view_only"
KEY_START_ON_BOOT = "start_on_boot"
KEY_ACCESS_KEY = "access_key"
KEY_SERVICE_COMMAND = "service_command"

ENV_OVERRIDES = {
    KEY_VIEW_ONLY: "GRANTFLOW_VIEW_ONLY",
    KEY_START_ON_BOOT: "GRANTFLOW_START_ON_BOOT",
    KEY_ACCESS_KEY: "GRANTFLOW_ACCESS_KEY",
}

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


def default_config_dir() -> Path:
    """Config directory, overridable with GRANTFLOW_CONFIG_DIR."""
    override = os.environ.get("GRANTFLOW_CONFIG_DIR")
    if override:
        return Path(override).expanduser()
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg).expanduser() if xdg else Path.home() / ".config"
    return base / "grantflow"


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(data).__name__}")
    return data


def _parse_bool(value: Any, fallback: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    if value is not None:
        logger.warning("Ignoring non-boolean setting value %r, using %s", value, fallback)
    return fallback


class Defaults:
    """
    Fallback values for unset settings.

    Built-in defaults:
    - view_only: False (input is requested)
    - start_on_boot: True
    - access_key: "" (no credential)
    - service_command: ["grantflow-server"]

    A defaults.yaml in the config directory replaces any of these, so a
    deployment can ship its own defaults.
    """

    VIEW_ONLY = False
    START_ON_BOOT = True
    ACCESS_KEY = ""
    SERVICE_COMMAND = ["grantflow-server"]

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or default_config_dir()
        self._overrides = _load_yaml(self.config_dir / DEFAULTS_FILE)

    def get_view_only(self) -> bool:
        return _parse_bool(self._overrides.get(KEY_VIEW_ONLY), self.VIEW_ONLY)

    def get_start_on_boot(self) -> bool:
        return _parse_bool(self._overrides.get(KEY_START_ON_BOOT), self.START_ON_BOOT)

    def get_access_key(self) -> str:
        value = self._overrides.get(KEY_ACCESS_KEY)
        return str(value) if value is not None else self.ACCESS_KEY

    def get_service_command(self) -> List[str]:
        value = self._overrides.get(KEY_SERVICE_COMMAND)
        if isinstance(value, list) and value:
            return [str(part) for part in value]
        return list(self.SERVICE_COMMAND)


class ConfigStore:
    """
    Read-only access to persisted settings with default fallback.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or default_config_dir()

    @property
    def settings_path(self) -> Path:
        return self.config_dir / SETTINGS_FILE

    def _lookup(self, key: str) -> Any:
        env_name = ENV_OVERRIDES.get(key)
        if env_name and env_name in os.environ:
            return os.environ[env_name]
        return _load_yaml(self.settings_path).get(key)

    def get_view_only(self) -> bool:
        """Whether the server runs view-only."""
        return _parse_bool(
            self._lookup(KEY_VIEW_ONLY), Defaults(self.config_dir).get_view_only()
        )

    def get_start_on_boot(self) -> bool:
        """Whether the server should start on user login."""
        return _parse_bool(
            self._lookup(KEY_START_ON_BOOT),
            Defaults(self.config_dir).get_start_on_boot(),
        )

    def get_access_key(self) -> str:
        """Shared credential handed to the server."""
        value = self._lookup(KEY_ACCESS_KEY)
        if value is None:
            return Defaults(self.config_dir).get_access_key()
        return str(value)

    def get_service_command(self) -> List[str]:
        """Command line that starts the dependent server."""
        value = self._lookup(KEY_SERVICE_COMMAND)
        if isinstance(value, list) and value:
            return [str(part) for part in value]
        if isinstance(value, str) and value.strip():
            return value.split()
        return Defaults(self.config_dir).get_service_command()

    def snapshot(self, platform_supports_autostart: bool) -> ConfigSnapshot:
        """
        Read the values the flow decision depends on.

        Args:
            platform_supports_autostart: Whether start-on-login is possible here

        Returns:
            Immutable ConfigSnapshot
        """
        return ConfigSnapshot(
            view_only=self.get_view_only(),
            start_on_boot=self.get_start_on_boot(),
            platform_supports_autostart=platform_supports_autostart,
        )
