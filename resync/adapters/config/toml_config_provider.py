"""TOML-based configuration provider.

Loads configuration from resync.toml with global config fallback.

Config loading priority (highest to lowest):
1. Local: resync.toml (or the path given with --config)
2. Global: ~/.config/resync/config.toml (user defaults)
3. Built-in defaults
"""

import logging
from pathlib import Path

from resync.domain.config import ResyncConfig
from resync.shared.config_io import (
    config_data_to_resync_config,
    get_global_config_path,
    load_config_data,
    merge_config_data,
)

logger = logging.getLogger(__name__)


class TomlConfigProvider:
    """Configuration provider that loads from TOML files.

    Implements config cascade:
    1. Load global config if present
    2. Load local config if present
    3. Local values override global values (section-level merge)
    4. Missing values fall back to built-in defaults

    Gracefully handles missing or invalid configs with warnings.
    """

    def load(self, config_path: Path) -> ResyncConfig:
        """Load configuration with global fallback.

        Args:
            config_path: Path to the local config file (may not exist)

        Returns:
            ResyncConfig instance with merged global/local values or defaults
        """
        global_path = get_global_config_path()
        data: dict = {}

        if global_path.exists():
            try:
                global_data = load_config_data(global_path)
                config_data_to_resync_config(global_data)
                data = global_data
                logger.debug("Loaded global config from %s", global_path)
            except (FileNotFoundError, ValueError) as e:
                logger.warning(
                    "Failed to parse global config at %s: %s. Ignoring global config.",
                    global_path,
                    e,
                )

        if config_path.exists():
            try:
                local_data = load_config_data(config_path)
                merged = merge_config_data(data, local_data)
                config = config_data_to_resync_config(merged)
                logger.debug("Loaded local config from %s", config_path)
                return config
            except (FileNotFoundError, ValueError) as e:
                logger.warning(
                    "Failed to parse %s: %s. Using global/default configuration.",
                    config_path,
                    e,
                )

        if not data:
            return ResyncConfig.default()
        return config_data_to_resync_config(data)
