"""Configuration loading utilities."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..constants import CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE
from .model import ClientConfig


class ConfigLoader:
    """Loads ``ClientConfig`` from a JSON file plus explicit overrides.

    A missing file is normal and yields defaults. An unreadable or invalid
    file is logged and ignored so the client still starts.
    """

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self.path = Path(path or os.environ.get(CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE))

    def load_raw(self) -> dict[str, Any]:
        """Read the config file into a dict.

        Returns:
            Parsed settings, or an empty dict when the file is absent or unusable.
        """
        try:
            with self.path.open(encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logging.debug(f"📁 No config file path={self.path}")
            return {}
        except (OSError, json.JSONDecodeError) as e:
            logging.warning(f"⚠️ Ignoring unreadable config path={self.path} error={e}")
            return {}
        if not isinstance(data, dict):
            logging.warning(f"⚠️ Ignoring config path={self.path}: top level must be an object")
            return {}
        return data

    def load(self, overrides: Mapping[str, Any] | None = None) -> ClientConfig:
        """Build the effective configuration.

        Args:
            overrides: Values that take precedence over the file (CLI flags).
                ``None`` values are ignored.

        Returns:
            Validated ClientConfig.

        Raises:
            ValidationError: If the overrides themselves are invalid.
        """
        merged = self.load_raw()
        try:
            ClientConfig.from_dict(merged)
        except ValidationError as e:
            logging.warning(
                f"⚠️ Invalid config path={self.path} errors={e.error_count()}, using defaults"
            )
            merged = {}
        if overrides:
            merged.update({k: v for k, v in overrides.items() if v is not None})
        config = ClientConfig.from_dict(merged)
        logging.debug(f"⚙️ Configuration loaded nick={config.nickname} server={config.server}")
        return config
