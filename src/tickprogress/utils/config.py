"""Configuration management."""

import json
import logging
from typing import Dict, Any, Optional
from pathlib import Path

logger = logging.getLogger(__name__)


class Config:
    """Display preferences for progress output."""

    def __init__(self, config_file: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config_file: Path to configuration file
        """
        self.config_file = Path(config_file) if config_file else Path("tickprogress.json")
        self._config: Dict[str, Any] = self._get_default_config()
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file, on top of the defaults."""
        if not self.config_file.exists():
            return

        try:
            with open(self.config_file, 'r') as f:
                loaded = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Ignoring unreadable config file {self.config_file}: {e}")
            return

        if not isinstance(loaded, dict):
            logger.warning(f"Ignoring config file {self.config_file}: expected a JSON object")
            return

        self._config.update(loaded)

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "bar_length": 20,
            "bar_filled": "=",
            "bar_empty": "-",
            "bar_undefined": "~",
            "block_size": 4096,
            "line_format": None
        }

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        return self._config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set configuration value.

        Args:
            key: Configuration key
            value: Configuration value
        """
        self._config[key] = value

    def bar_style(self) -> Dict[str, Any]:
        """Keyword arguments for ProgressLine describing the bar."""
        return {
            "bar_length": int(self.get("bar_length", 20)),
            "filled": self.get("bar_filled", "="),
            "empty": self.get("bar_empty", "-"),
            "undefined": self.get("bar_undefined", "~"),
        }

    def save(self) -> None:
        """Save configuration to file."""
        with open(self.config_file, 'w') as f:
            json.dump(self._config, f, indent=2)
