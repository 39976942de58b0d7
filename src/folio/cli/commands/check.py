"""Check command implementation."""

from pathlib import Path
from typing import Any

import click
from rich.markup import escape

from folio.cli.utils.command import FolioCommand, console


class CheckCommand(FolioCommand):
    """Parse every post and report the ones with a broken metadata block."""

    name = "check"
    help = "Check that every post has a valid front-matter block."

    def params(self) -> list[click.Parameter]:
        return [
            click.Argument(
                ["content_dir"],
                required=False,
                type=click.Path(file_okay=False, path_type=Path),
            )
        ]

    def _run_sync(self, content_dir: Path | None = None, **kwargs: Any) -> int:
        store = self.open_store(content_dir)
        report = store.load()

        for path, error in sorted(report.failures.items()):
            location = f"{path}:{error.line}" if error.line else str(path)
            console.print(f"[red]FAIL[/red] {escape(location)}: {escape(error.message)}")

        summary = f"{len(report.documents)} ok, {len(report.failures)} failed"
        if report.ok:
            console.print(f"[green]{summary}[/green]")
            self.log_info(f"All posts in {store.root} are valid")
            return 0

        console.print(f"[red]{summary}[/red]")
        return 1
