"""Configuration provider port.

Defines the interface for loading and accessing application configuration.
"""

from pathlib import Path
from typing import Protocol

from resync.domain.config import ResyncConfig


class ConfigProvider(Protocol):
    """Protocol for loading and providing configuration."""

    def load(self, config_path: Path) -> ResyncConfig:
        """Load configuration from a config file.

        Args:
            config_path: Path to resync.toml (may not exist)

        Returns:
            ResyncConfig instance with loaded or default values

        Note:
            Implementations should gracefully fall back to defaults
            if config file is missing or invalid.
        """
        ...
