"""Rich console shared by the CLI renderers."""

from rich.console import Console

# No automatic number/date highlighting; renderers style output explicitly
console = Console(highlight=False)
