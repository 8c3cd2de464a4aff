"""Runtime configuration built from configuration-language text."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from importlib import resources
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from partman.errors import ConfigError, UnknownServerKindError
from partman.observability.logging import get_logger

from .keymap import Keybinds

if TYPE_CHECKING:
    from .env import PartmanSettings

logger = get_logger(__name__)

DEFAULT_CONFIG_RESOURCE = "default.conf"
DEVELOPMENT_URL = "http://localhost:3000"


class ServerKind(Enum):
    """Which parts server the client talks to."""

    PRODUCTION = "Production"
    DEVELOPMENT = "Development"

    @classmethod
    def names(cls) -> List[str]:
        return [member.value for member in cls]

    @classmethod
    def from_name(cls, name: str) -> "ServerKind":
        try:
            return cls(name)
        except ValueError:
            raise UnknownServerKindError(
                message=f"Unknown server kind {name!r}",
                name=name,
                choices=cls.names(),
            ) from None

    def base_url(self, settings: Optional["PartmanSettings"] = None) -> Optional[str]:
        """Base URL for the HTTP client, or None if production is unconfigured."""
        if self is ServerKind.DEVELOPMENT:
            return DEVELOPMENT_URL
        if settings is None:
            from .env import get_settings

            settings = get_settings()
        return settings.production_url


@dataclass
class Grid:
    """Dimensions of the storage grid shown by the UI."""

    rows: int = 1
    columns: int = 1
    zs: int = 1


@dataclass
class Config:
    """Keybindings, grid size and server selection for one process."""

    keyboard: Keybinds = field(default_factory=Keybinds)
    grid: Grid = field(default_factory=Grid)
    server_kind: ServerKind = ServerKind.PRODUCTION

    @classmethod
    def new(cls) -> "Config":
        """The baseline every configuration text is applied on top of."""
        return cls()

    @classmethod
    def from_str(cls, source: Union[str, bytes], path: Optional[str] = None) -> "Config":
        """
        Parse configuration text into a new :class:`Config`.

        The text is applied statement by statement to a fresh baseline. The
        result is only returned when every statement succeeded; on error the
        partially built value is discarded.

        Args:
            source: Configuration text (``bytes`` must be UTF-8)
            path: Optional file path for error reporting

        Returns:
            The parsed configuration

        Raises:
            ConfigError: Any subclass, located at the offending line

        Example:
            ```python
            config = Config.from_str("Bind ctrl+q Quit\\nGrid 10 10 2\\n")
            config.grid.rows  # 10
            ```
        """
        from partman.lang.commands import CommandDispatcher
        from partman.lang.statements import parse_statements

        statements = parse_statements(source, path)
        dispatcher = CommandDispatcher(path)
        config = cls.new()
        for statement in statements:
            dispatcher.apply(statement, config)
        logger.debug(
            "Parsed %d statements from %s", len(statements), path or "<string>"
        )
        return config

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Config":
        """Read and parse a configuration file."""
        file_path = Path(path)
        try:
            data = file_path.read_bytes()
        except OSError as exc:
            raise ConfigError(
                message=f"Cannot read configuration file: {exc.strerror or exc}",
                path=str(file_path),
                code="CONFIG_UNREADABLE",
            ) from exc
        return cls.from_str(data, path=str(file_path))

    @classmethod
    def default(cls) -> "Config":
        """Parse the configuration text shipped with the package."""
        return cls.from_str(default_config_text(), path=DEFAULT_CONFIG_RESOURCE)

    def summary(self) -> Dict[str, Any]:
        """Plain-data view for display and diagnostics."""
        return {
            "grid": {"rows": self.grid.rows, "columns": self.grid.columns, "zs": self.grid.zs},
            "server_kind": self.server_kind.value,
            "keyboard": {chord: action.value for chord, action in self.keyboard.as_dict().items()},
        }


def default_config_text() -> str:
    """Return the built-in configuration text."""
    return resources.files("partman.assets").joinpath(DEFAULT_CONFIG_RESOURCE).read_text(encoding="utf-8")


__all__ = ["Config", "Grid", "ServerKind", "default_config_text"]
