"""Command handlers for the partman CLI.

Each handler takes the parsed ``argparse`` namespace and returns a process
exit code.
"""

import json
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table
from rich.text import Text

from partman.app.messages import to_app_message
from partman.errors import ConfigError, InvalidChordSyntaxError
from partman.observability.logging import get_logger
from partman.settings.config import Config, default_config_text
from partman.settings.env import PartmanSettings, get_settings
from partman.settings.keymap import Chord
from partman.settings.store import ConfigStore

from .errors import CLIConfigError, CLIFileNotFoundError, CLIValidationError

logger = get_logger(__name__)


# Accepted spellings shown in hints when an environment value is rejected
_SETTING_CHOICES = {
    "log_level": "debug, info, warn, warning, error",
    "fallback_to_default": "true, false, 1, 0, yes, no, on, off",
}


def load_cli_settings() -> PartmanSettings:
    """Read ``PARTMAN_*`` settings, reporting bad values as CLI errors."""
    try:
        return get_settings()
    except ValidationError as exc:
        problems = []
        hints = []
        for error in exc.errors():
            field = str(error["loc"][0]) if error.get("loc") else "?"
            variable = f"PARTMAN_{field.upper()}"
            problems.append(f"{variable}={error.get('input')!r}")
            choices = _SETTING_CHOICES.get(field)
            if choices:
                hints.append(f"Set {variable} to one of: {choices}")
            else:
                hints.append(f"{variable}: {error['msg']}")
        raise CLIConfigError(
            f"Invalid environment setting: {', '.join(problems)}",
            hint="; ".join(hints),
            context={"errors": exc.error_count()},
        ) from exc


def _settings(args) -> PartmanSettings:
    settings = getattr(args, "settings", None)
    return settings if settings is not None else load_cli_settings()


def resolve_config_path(args) -> Optional[Path]:
    """Pick the configuration file from ``--config`` or ``PARTMAN_CONFIG``."""
    if getattr(args, "config", None):
        return Path(args.config)
    return _settings(args).config


def load_store(args) -> ConfigStore:
    """Build the store the way the application does at startup."""
    path = resolve_config_path(args)
    if path is not None and not path.exists():
        raise CLIFileNotFoundError(
            f"Configuration file not found: {path}",
            hint="Pass an existing file with --config or unset PARTMAN_CONFIG",
        )
    store = ConfigStore()
    try:
        store.load(path, fallback_to_default=_settings(args).fallback_to_default)
    except ConfigError as exc:
        raise CLIConfigError(
            str(exc),
            hint="Fix the reported line or run 'partman default' to see a valid file",
            context={"path": str(path), "code": exc.code},
        ) from exc
    return store


def cmd_check(args) -> int:
    """Parse every file and report which ones are valid."""
    failures = 0
    for name in args.files:
        path = Path(name)
        try:
            config = Config.from_file(path)
        except ConfigError as exc:
            failures += 1
            print(str(exc), file=sys.stderr)
            continue
        logger.debug("Checked %s: %s", path, config.summary())
        print(f"OK: {path}")
    return 1 if failures else 0


def render_config(config: Config, console: Console, title: str) -> None:
    table = Table(title=title)
    table.add_column("Chord", style="bold blue")
    table.add_column("Action", style="green")
    for chord, action in config.keyboard.items():
        table.add_row(Text(str(chord)), Text(action.value))
    console.print(table)
    grid = config.grid
    console.print(Text(f"Grid: {grid.rows} rows x {grid.columns} columns x {grid.zs} layers"))
    console.print(Text(f"Server: {config.server_kind.value}"))


def cmd_show(args) -> int:
    """Print the configuration the application would start with."""
    store = load_store(args)
    config = store.get()
    if args.json:
        print(json.dumps(config.summary(), indent=2))
        return 0
    render_config(config, Console(), title=f"Configuration ({store.source})")
    return 0


def cmd_resolve(args) -> int:
    """Print the action bound to one chord."""
    try:
        chord = Chord.parse(args.chord)
    except InvalidChordSyntaxError as exc:
        raise CLIValidationError(exc.message, hint="Chords look like ctrl+q or alt+shift+f5") from exc
    action = load_store(args).get().keyboard.lookup(chord)
    if action is None:
        print(f"{chord} is not bound", file=sys.stderr)
        return 1
    print(f"{chord} -> {action.value} ({to_app_message(action)})")
    return 0


def cmd_default(args) -> int:
    """Print the built-in configuration text."""
    sys.stdout.write(default_config_text())
    return 0


__all__ = [
    "cmd_check",
    "cmd_default",
    "cmd_resolve",
    "cmd_show",
    "load_cli_settings",
    "load_store",
    "resolve_config_path",
]
