"""folio CLI main entry point.

This module provides the main CLI dispatcher for all folio commands.
"""

import sys
from pathlib import Path

import click
from rich.console import Console

from folio.cli.commands import CheckCommand, ListCommand, NewCommand, ShowCommand
from folio.cli.utils.command import FolioCommand
from folio.config import load_config
from folio.errors import FolioError
from folio.logging import configure_logging

# Initialize console with stderr to avoid mixing with command output
console = Console(stderr=True)


class FolioCLI:
    """Main CLI dispatcher for folio commands."""

    def __init__(self) -> None:
        """Initialize the CLI dispatcher."""
        self.commands: dict[str, FolioCommand] = {}
        self._register_commands()

    def _register_commands(self) -> None:
        """Register all available commands."""
        command_classes = [
            CheckCommand,
            ListCommand,
            NewCommand,
            ShowCommand,
        ]

        for cmd_class in command_classes:
            cmd = cmd_class()
            self.commands[cmd.name] = cmd

    def create_cli(self) -> click.Group:
        """Create the CLI application.

        Returns:
            The Click command group for the CLI.
        """

        @click.group()
        @click.option(
            "--config",
            "config_path",
            type=click.Path(dir_okay=False, path_type=Path),
            default=None,
            help="Path to a folio.yaml configuration file",
        )
        @click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
        @click.pass_context
        def cli(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
            """folio - front-matter tooling for Markdown blog posts."""
            try:
                config = load_config(config_path)
            except FolioError as e:
                raise click.ClickException(str(e)) from e

            level = "DEBUG" if verbose else config.logging.level
            log_dir = config.paths.logs_dir if config.logging.file else None
            configure_logging(level=level, log_dir=log_dir, console=console)
            ctx.obj = config

        for cmd in self.commands.values():
            cli.add_command(cmd.create_command())

        return cli


cli = FolioCLI().create_cli()


def main() -> None:
    """Main entry point for the folio CLI."""
    try:
        cli()
    except FolioError as e:
        console.print(f"[red]ERROR:[/red] {e!s}")
        sys.exit(1)
