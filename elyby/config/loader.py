"""Configuration loader for the Ely.by client library

Resolves settings from these sources, highest priority first:
1. Process environment variables
2. .env file
3. Hardcoded defaults

The .env file is read on the first lookup and its values are kept in the
loader. The process environment is never written to.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

# Every setting read through the loader is namespaced with this prefix
ENV_PREFIX = "ELYBY_"


class ConfigLoader:
    """Handles loading configuration from various sources"""

    def __init__(self, env_path: Optional[str] = None):
        """Initialize the config loader

        Args:
            env_path: Optional path to .env file.
                     Defaults to '.env' in the current directory.
        """
        self.env_path = Path(env_path) if env_path else Path(".env")
        self._file_values: Optional[Dict[str, Optional[str]]] = None

    def _env_file_values(self) -> Dict[str, Optional[str]]:
        """Values from the .env file, parsed once and cached"""
        if self._file_values is None:
            if self.env_path.exists():
                self._file_values = dict(dotenv_values(self.env_path))
                logger.debug(f"Read settings from {self.env_path}")
            else:
                self._file_values = {}
                logger.debug(f".env file not found at {self.env_path}, using environment variables and defaults only")
        return self._file_values

    def get(self, name: str, default: Any) -> Any:
        """Get a configuration value with priority: env > .env file > default

        The variable looked up is ``ELYBY_<name>``.

        Args:
            name: Setting name without the ELYBY_ prefix
            default: Default value if the variable is not set anywhere. Its
                type decides how the string value is parsed.

        Returns:
            The parsed configuration value or default
        """
        env_var = f"{ENV_PREFIX}{name}"
        raw_value = os.getenv(env_var)
        if raw_value is None:
            raw_value = self._env_file_values().get(env_var)
        if raw_value is None:
            return default

        if isinstance(default, bool):
            return raw_value.lower() in ('true', '1', 'yes')
        elif isinstance(default, int):
            try:
                return int(raw_value)
            except ValueError:
                logger.warning(f"Failed to parse {env_var}={raw_value} as int, using default: {default}")
                return default
        elif isinstance(default, float):
            try:
                return float(raw_value)
            except ValueError:
                logger.warning(f"Failed to parse {env_var}={raw_value} as float, using default: {default}")
                return default
        return raw_value


# Created on first use so that importing the package touches no files
_config_loader = None


def get_config_loader() -> ConfigLoader:
    """Get or create the global ConfigLoader instance"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader
