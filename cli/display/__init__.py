"""Display module for rendering CLI output.

This module provides:
- console: Shared Rich console instance
- TableRenderer: Calendar date tables
- JobRenderer: Discovery and notification run results
- Formatting functions for dates, relative times and secrets
"""

from cli.display.console import console
from cli.display.formatters import (
    format_event_date,
    format_relative_time,
    format_secret,
)
from cli.display.job_renderer import JobRenderer
from cli.display.table_renderer import TableRenderer

__all__ = [
    # Console
    "console",
    # Renderers
    "JobRenderer",
    "TableRenderer",
    # Formatters
    "format_event_date",
    "format_relative_time",
    "format_secret",
]
