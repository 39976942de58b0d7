"""folio CLI package."""

from folio.cli.main import FolioCLI, cli, main

__all__ = ["FolioCLI", "cli", "main"]
