"""
================================================================================
Configuration Loader
================================================================================

Settings for the browser session and logging, read from config/config.yaml.

Every key can be overridden from the environment. The variable name is the key
in upper snake case with dots turned into underscores:

    desiredBrowser      -> DESIRED_BROWSER
    browser.headless    -> BROWSER_HEADLESS
    logging.level       -> LOGGING_LEVEL

Lookup order: environment, YAML file, caller's default.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


DEFAULT_CONFIG_PATH = Path(__file__).parents[3] / "config" / "config.yaml"

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_TRUE_WORDS = ("true", "1", "yes", "on")


class ConfigurationError(Exception):
    """Raised when a setting is missing, malformed or unsupported."""
    pass


def env_var_name(key: str) -> str:
    """
    Map a configuration key to its environment variable name.

    Examples:
        >>> env_var_name("desiredBrowser")
        'DESIRED_BROWSER'
        >>> env_var_name("browser.headless")
        'BROWSER_HEADLESS'
    """
    return _CAMEL_BOUNDARY.sub("_", key).upper().replace(".", "_")


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        logger.warning(f"No settings file at {path}; using environment and defaults")
        return {}

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    logger.debug(f"Settings loaded from {path}")
    return data or {}


def _coerce(raw: str, like: Any) -> Any:
    """Convert an environment string to the type of the caller's default."""
    # bool first: bool is a subclass of int
    if isinstance(like, bool):
        return raw.strip().lower() in _TRUE_WORDS
    for kind in (int, float):
        if isinstance(like, kind):
            try:
                return kind(raw)
            except ValueError:
                return raw
    return raw


class ConfigLoader:
    """
    Process-wide settings, loaded once.

    The first construction decides the file; later calls return the same
    instance regardless of ``config_path``. Call ``reset()`` to start over.

    Usage:
        >>> settings = ConfigLoader()
        >>> settings.get("desiredBrowser")
        'chrome'
        >>> settings.get_int("timeouts.page", 30)
        30
    """

    _instance: Optional["ConfigLoader"] = None

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        if cls._instance is None:
            loader = super().__new__(cls)
            loader.path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
            loader._values = _read_yaml(loader.path)
            cls._instance = loader
        return cls._instance

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a dotted key.

        An environment variable wins over the file; its string value is
        converted to the type of ``default`` when one is given.
        """
        raw = os.environ.get(env_var_name(key))
        if raw is not None:
            return raw if default is None else _coerce(raw, default)

        node: Any = self._values
        for part in key.split("."):
            node = node.get(part) if isinstance(node, dict) else None
            if node is None:
                return default
        return node

    def get_int(self, key: str, default: int = 0) -> int:
        """
        Look up a dotted key as an integer.

        Raises:
            ConfigurationError: If the value cannot be read as an integer
        """
        value = self.get(key, default)
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Setting '{key}' is not an integer: {value!r}"
            ) from e

    @classmethod
    def reset(cls) -> None:
        """Forget the loaded instance so the next construction reads again."""
        cls._instance = None


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "env_var_name",
]
