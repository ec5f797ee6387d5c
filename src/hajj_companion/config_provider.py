"""Helpers for constructing configuration instances."""

import os
from pathlib import Path
from typing import Optional

from hajj_companion.config import Config

CONFIG_PATH_ENV_VAR = "HAJJ_COMPANION_CONFIG"


class ConfigProvider:
    """
    Provides configuration instances without import-time side effects.

    The JSON config path is taken from the constructor, then from the
    ``HAJJ_COMPANION_CONFIG`` environment variable, then the default location.

    Args:
        path: Optional override path for the JSON config file.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path

    def resolve_path(self) -> Optional[Path]:
        """Returns the JSON config path that ``load`` will read."""

        if self._path is not None:
            return self._path
        env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
        return Path(env_path) if env_path else None

    def load(self) -> Config:
        """
        Loads a configuration instance using the resolved path.

        Returns:
            A validated configuration object.
        """
        return Config.load(self.resolve_path())
