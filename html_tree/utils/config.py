"""
Configuration utility for the HTML tree.
"""

import copy
import json
import logging
import os
import threading
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "HTML_TREE_CONFIG"

DEFAULT_CONFIG: Dict[str, Any] = {
    "render": {
        "pretty": False,
    },
    "ids": {
        "prefix": "n",
    },
    "logging": {
        "console_level": "WARNING",
        "file_level": "DEBUG",
        "file": None,
    },
    "parser": {
        "keep_whitespace": False,
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Configuration manager for rendering, id generation, logging and parsing."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to a JSON config file. Falls back to the
                ``HTML_TREE_CONFIG`` environment variable; with neither, only
                the defaults are used.
        """
        if not config_path:
            config_path = os.environ.get(CONFIG_ENV_VAR) or None

        self.config_path = config_path
        self.config: Dict[str, Any] = {}
        self._lock = threading.Lock()

        self.load()

        logger.debug(f"Configuration initialized (config_path: {config_path})")

    def load(self) -> None:
        """
        Load configuration from file, merged over the defaults.

        Raises:
            ValueError: If the file exists but is not valid JSON
        """
        if not self.config_path or not os.path.exists(self.config_path):
            logger.debug(f"Configuration file not found at {self.config_path}, using defaults")
            self._set_defaults()
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Error loading configuration from {self.config_path}: {e}")
            raise ValueError(f"Invalid configuration file {self.config_path}: {e}") from e

        with self._lock:
            self.config = _merge(DEFAULT_CONFIG, loaded)
        logger.debug(f"Configuration loaded from {self.config_path}")

    def save(self, config_path: Optional[str] = None) -> None:
        """
        Save configuration to file.

        Args:
            config_path: Destination path (defaults to the loaded path)
        """
        path = config_path or self.config_path
        if not path:
            raise ValueError("No configuration path to save to")

        with self._lock:
            config_copy = copy.deepcopy(self.config)

        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(config_copy, f, indent=4)

        self.config_path = path
        logger.debug(f"Configuration saved to {path}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Configuration key (can be nested using dots, e.g. 'render.pretty')
            default: Default value if key doesn't exist

        Returns:
            Any: Configuration value or default
        """
        with self._lock:
            config = self.config
            parts = key.split('.')
            for part in parts[:-1]:
                if part not in config or not isinstance(config[part], dict):
                    return default
                config = config[part]
            return config.get(parts[-1], default)

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            key: Configuration key (can be nested using dots, e.g. 'ids.prefix')
            value: Configuration value
        """
        with self._lock:
            config = self.config
            parts = key.split('.')
            for part in parts[:-1]:
                if not isinstance(config.get(part), dict):
                    config[part] = {}
                config = config[part]
            config[parts[-1]] = value

    def get_all(self) -> Dict[str, Any]:
        """
        Get all configuration values.

        Returns:
            Dict[str, Any]: Copy of all configuration values
        """
        with self._lock:
            return copy.deepcopy(self.config)

    def reset(self) -> None:
        """Restore the default configuration."""
        self._set_defaults()

    def _set_defaults(self) -> None:
        """Set default configuration values."""
        with self._lock:
            self.config = copy.deepcopy(DEFAULT_CONFIG)

        logger.debug("Default configuration set")


_config: Optional[Config] = None
_config_lock = threading.Lock()


def get_config() -> Config:
    """
    Get the process-wide configuration, creating it on first use.

    Returns:
        Config: The shared configuration
    """
    global _config
    with _config_lock:
        if _config is None:
            _config = Config()
        return _config


def set_config(config: Optional[Config]) -> None:
    """
    Replace the process-wide configuration.

    Args:
        config: The new configuration, or None to recreate it on next use
    """
    global _config
    with _config_lock:
        _config = config
