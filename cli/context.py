"""CLI context shared between the Typer callback and the commands."""

from seller_calendar.context import CalendarContext


class CLIContext(CalendarContext):
    """CalendarContext carrying the global --verbose/--quiet flags."""

    def __init__(self, verbose: bool = False, quiet: bool = False, **kwargs):
        super().__init__(**kwargs)
        self.verbose = verbose
        self.quiet = quiet


# Set by the Typer callback before any command runs
_ctx: CLIContext | None = None


def get_context() -> CLIContext:
    """Return the context created by the Typer callback.

    Raises:
        RuntimeError: If called before the callback ran
    """
    if _ctx is None:
        raise RuntimeError("CLI context not initialized. This should not happen.")
    return _ctx


def set_context(ctx: CLIContext) -> None:
    global _ctx
    _ctx = ctx
