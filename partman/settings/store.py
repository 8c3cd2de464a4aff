"""Holder for the process configuration.

The store is created once by the application shell and handed to every
component that needs configuration lookups. It is written exactly once, at
startup, and read for the rest of the process lifetime.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Optional, Union

from partman.errors import ConfigError, ConfigStateError
from partman.observability.logging import get_logger

from .config import Config

logger = get_logger(__name__)


class ConfigStore:
    """Single-assignment container for a :class:`Config`."""

    def __init__(self, config: Optional[Config] = None):
        self._lock = threading.Lock()
        self._config: Optional[Config] = config
        self.source: Optional[str] = "<provided>" if config is not None else None

    @property
    def is_loaded(self) -> bool:
        return self._config is not None

    def install(self, config: Config, source: str = "<provided>") -> Config:
        """Install ``config``; a store accepts only one installation."""
        with self._lock:
            if self._config is not None:
                raise ConfigStateError(
                    message=f"Configuration already loaded from {self.source}; "
                    "it cannot be replaced while the process is running",
                )
            self._config = config
            self.source = source
        logger.info("Installed configuration from %s", source)
        return config

    def load(
        self,
        path: Optional[Union[str, Path]] = None,
        *,
        fallback_to_default: bool = False,
    ) -> Config:
        """Parse a configuration and install it.

        Args:
            path: User configuration file; None loads the built-in default
            fallback_to_default: Install the built-in default when the user
                file fails to load instead of raising

        Raises:
            ConfigError: If parsing fails and no fallback was requested
            ConfigStateError: If a configuration is already installed
        """
        if self.is_loaded:
            raise ConfigStateError(message=f"Configuration already loaded from {self.source}")

        if path is None:
            return self.install(Config.default(), source="<default>")

        try:
            config = Config.from_file(path)
        except ConfigError as exc:
            if not fallback_to_default:
                raise
            logger.warning("Falling back to default configuration: %s", exc)
            return self.install(Config.default(), source="<default>")
        return self.install(config, source=str(path))

    def get(self) -> Config:
        """Return the installed configuration, loading the default on first use."""
        config = self._config
        if config is not None:
            return config
        with self._lock:
            if self._config is None:
                self._config = Config.default()
                self.source = "<default>"
                logger.info("Installed configuration from <default>")
            return self._config


__all__ = ["ConfigStore"]
