"""Base command utilities for folio CLI.

This module provides the base command class and utilities for folio CLI
commands.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import click
from rich.console import Console

from folio.config import FolioConfig, load_config
from folio.errors import FolioError
from folio.logging import get_component_logger, log_error
from folio.store import DocumentStore

# Command output goes to stdout; logging goes to stderr
console = Console(highlight=False, soft_wrap=True)

logger = get_component_logger("cli")


class FolioCommand(ABC):
    """Base class for all folio commands."""

    name: str
    help: str

    def __init__(self) -> None:
        """Initialize the base command."""
        self.config: FolioConfig | None = None

    def set_dependencies(self, config: FolioConfig | None = None) -> None:
        """Set command dependencies.

        Args:
            config: Loaded configuration; loaded from default locations if None
        """
        self.config = config

    def get_config(self) -> FolioConfig:
        if self.config is None:
            self.config = load_config()
        return self.config

    def open_store(self, content_dir: Path | None) -> DocumentStore:
        """Open the store at ``content_dir`` or the configured directory."""
        return DocumentStore(content_dir or self.get_config().paths.content_dir)

    def run(self, **kwargs: Any) -> int:
        """Run the command with the given arguments.

        Args:
            **kwargs: Command arguments

        Returns:
            Process exit code
        """
        try:
            return self._run_sync(**kwargs)
        except click.ClickException:
            raise
        except FolioError as e:
            log_error(logger, "Command failed", e)
            raise click.ClickException(str(e)) from e

    @abstractmethod
    def _run_sync(self, **kwargs: Any) -> int:
        """Run the command synchronously.

        Args:
            **kwargs: Command arguments

        Returns:
            Process exit code
        """

    def params(self) -> list[click.Parameter]:
        """Click arguments and options for this command."""
        return []

    def create_command(self) -> click.Command:
        """Create the click command.

        Returns:
            The click command instance
        """

        @click.pass_context
        def command(ctx: click.Context, **kwargs: Any) -> None:
            """Execute command with given arguments."""
            if isinstance(ctx.obj, FolioConfig):
                self.set_dependencies(config=ctx.obj)
            code = self.run(**kwargs)
            if code:
                ctx.exit(code)

        return click.Command(
            name=self.name,
            callback=command,
            params=self.params(),
            help=self.help,
        )

    def log_info(self, message: str) -> None:
        """Log an info message.

        Args:
            message: The message to log.
        """
        logger.info(message)

    def log_success(self, message: str) -> None:
        """Log a success message.

        Args:
            message: The message to log.
        """
        logger.info(f"[SUCCESS] {message}")

    def log_warning(self, message: str) -> None:
        """Log a warning message.

        Args:
            message: The message to log.
        """
        logger.warning(message)


def content_dir_option() -> click.Option:
    return click.Option(
        ["--content-dir", "-d"],
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Directory holding the posts (defaults to the configured content_dir)",
    )
