"""
Configuration loader for the Fuzzle reading assistant.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml


class Config:
    """Configuration manager for the reading assistant."""

    _instance: Optional["Config"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if not self._config:
            self._load_config()

    def _get_project_root(self) -> Path:
        """Get the project root directory."""
        # Navigate up from fuzzle/utils to project root
        current = Path(__file__).resolve()
        return current.parent.parent.parent

    def _get_package_root(self) -> Path:
        return Path(__file__).resolve().parent.parent

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        config_path = self._get_project_root() / "config" / "settings.yaml"

        if config_path.exists():
            with open(config_path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or self._get_defaults()
        else:
            # Use defaults if config doesn't exist
            self._config = self._get_defaults()

    def _get_defaults(self) -> Dict[str, Any]:
        """Return default configuration."""
        return {
            "voice": {
                "name": None,
                "rate": 0.6,
                "pitch": 1.1,
                "volume": 0.9,
                "base_rate": 200,
            },
            "playback": {
                "settle_delay": 0.4,
            },
            "vocabulary": {
                "limit": 3,
            },
            "syllables": {
                "min_length": 4,
            },
            "data": {
                "dictionary": None,
                "simplifications": None,
            },
        }

    def get(self, *keys: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Example:
            config.get("voice", "rate") -> 0.6
        """
        value = self._config
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return default
            if value is None:
                return default
        return value

    def _data_path(self, key: str, filename: str) -> Path:
        configured = self.get("data", key)
        if configured:
            path = Path(configured)
            return path if path.is_absolute() else self._get_project_root() / path
        return self._get_package_root() / "data" / filename

    @property
    def project_root(self) -> Path:
        """Get the project root directory."""
        return self._get_project_root()

    @property
    def voice(self) -> Optional[str]:
        """Get the preferred system voice (None for the platform default)."""
        return self.get("voice", "name")

    @property
    def voice_rate(self) -> float:
        """Get the speech rate multiplier."""
        return self.get("voice", "rate", default=0.6)

    @property
    def voice_pitch(self) -> float:
        return self.get("voice", "pitch", default=1.1)

    @property
    def voice_volume(self) -> float:
        return self.get("voice", "volume", default=0.9)

    @property
    def voice_base_rate(self) -> int:
        """Get the engine rate (words per minute) that a multiplier of 1.0 maps to."""
        return self.get("voice", "base_rate", default=200)

    @property
    def settle_delay(self) -> float:
        """Get the pause between spoken words, in seconds."""
        return self.get("playback", "settle_delay", default=0.4)

    @property
    def vocabulary_limit(self) -> int:
        return self.get("vocabulary", "limit", default=3)

    @property
    def syllable_min_length(self) -> int:
        """Get the length a word must exceed to be shown split in syllable mode."""
        return self.get("syllables", "min_length", default=4)

    @property
    def dictionary_path(self) -> Path:
        return self._data_path("dictionary", "dictionary.yaml")

    @property
    def simplifications_path(self) -> Path:
        return self._data_path("simplifications", "simplifications.yaml")


# Singleton instance
config = Config()
