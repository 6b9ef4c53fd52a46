"""Display configuration file path, server settings and scheduler state."""

import os
from pathlib import Path

from rich.table import Table

from cli.context import get_context
from cli.display import console, format_relative_time, format_secret
from seller_calendar.config import CalendarConfig


def _find_env_file() -> Path | None:
    """Find .env file by searching current directory and parent directories."""
    current = Path.cwd()

    for path in [current] + list(current.parents):
        env_file = path / ".env"
        if env_file.exists():
            return env_file.resolve()

    return None


def _get_source(env_key: str, value, default_value) -> str:
    """Determine the source of a config value."""
    if env_key in os.environ or value != default_value:
        return "env"
    return "default"


def _create_table(setting_width: int, source_width: int) -> Table:
    """Create a styled table for config sections with fixed column widths."""
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("SETTING", style="cyan", min_width=setting_width, no_wrap=True)
    table.add_column("SOURCE", style="dim", min_width=source_width, no_wrap=True)
    table.add_column("VALUE")
    return table


def _row(env_key: str, name: str, cfg: CalendarConfig, default: CalendarConfig):
    value = getattr(cfg, name)
    return (name, str(value), _get_source(env_key, value, getattr(default, name)))


def config_command() -> None:
    """Display configuration, user settings and scheduler state."""
    env_file = _find_env_file()
    default_config = CalendarConfig()
    ctx = get_context()
    cfg = ctx.config
    settings = ctx.repository.load_settings()
    state = ctx.repository.load_scheduler_state()

    last_run = state.last_discovery_run
    last_run_display = (
        f"{last_run.isoformat()} ({format_relative_time(last_run)})"
        if last_run
        else "[dim]Never[/dim]"
    )

    sections: list[tuple[str, list[tuple[str, str, str]]]] = [
        (
            "Storage Paths",
            [
                (
                    "data_dir",
                    str(cfg.data_dir.resolve()),
                    _get_source(
                        "DATA_DIR", str(cfg.data_dir), str(default_config.data_dir)
                    ),
                ),
                (
                    "log_dir",
                    str(cfg.log_dir.resolve()),
                    _get_source("LOG_DIR", str(cfg.log_dir), str(default_config.log_dir)),
                ),
                _row("LOG_FILENAME", "log_filename", cfg, default_config),
            ],
        ),
        (
            "AI",
            [
                (
                    "gemini_api_key",
                    format_secret(cfg.gemini_api_key),
                    _get_source("API_KEY", cfg.gemini_api_key, None),
                ),
                _row("GEMINI_MODEL", "gemini_model", cfg, default_config),
                _row("REQUEST_TIMEOUT", "request_timeout", cfg, default_config),
            ],
        ),
        (
            "Scheduler",
            [
                _row("TIMEZONE", "timezone", cfg, default_config),
                _row("DISCOVERY_TIME", "discovery_time", cfg, default_config),
                _row("ENABLE_SCHEDULER", "enable_scheduler", cfg, default_config),
                ("last_discovery_run", last_run_display, "state"),
            ],
        ),
        (
            "HTTP Server",
            [
                _row("HOST", "host", cfg, default_config),
                _row("PORT", "port", cfg, default_config),
            ],
        ),
        (
            "User Settings",
            [
                ("aiProvider", settings.ai_provider.value, "settings"),
                (
                    "webhookUrl",
                    format_secret(settings.webhook_url),
                    "settings",
                ),
                (
                    "autoDiscover",
                    f"{settings.is_auto_discover_enabled} "
                    f"(every {settings.auto_discover_frequency} days)",
                    "settings",
                ),
                (
                    "autoNotify",
                    f"{settings.is_auto_notify_enabled} "
                    f"({settings.notify_days_before} days before)",
                    "settings",
                ),
                (
                    "dailyBriefing",
                    f"{settings.is_daily_briefing_enabled} "
                    f"(at {settings.daily_briefing_time})",
                    "settings",
                ),
            ],
        ),
    ]

    # Calculate max widths across all sections
    all_rows = [row for _, rows in sections for row in rows]
    setting_width = max(len("SETTING"), max(len(row[0]) for row in all_rows))
    source_width = max(len("SOURCE"), max(len(row[2]) for row in all_rows))

    console.print()
    console.print("━" * 50)
    console.print("[bold]  Configuration[/bold]")
    console.print("━" * 50)

    console.print("\n[bold]Config File:[/bold]")
    if env_file:
        console.print(f"  [cyan]{env_file}[/cyan]")
    else:
        console.print("  [dim]Not found (using defaults and environment variables)[/dim]")

    for section_name, rows in sections:
        console.print(f"\n[bold]{section_name}:[/bold]")
        table = _create_table(setting_width, source_width)
        for setting, value, source in rows:
            table.add_row(setting, source, value)
        console.print(table)

    console.print()
