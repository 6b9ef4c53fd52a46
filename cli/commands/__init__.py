"""CLI commands package."""

from cli.commands.config import config_command
from cli.commands.dates import dates_command
from cli.commands.discover import discover_command
from cli.commands.notify import notify_command
from cli.commands.serve import serve_command

__all__ = [
    "config_command",
    "dates_command",
    "discover_command",
    "notify_command",
    "serve_command",
]
