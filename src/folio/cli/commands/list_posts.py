"""List command implementation."""

from pathlib import Path
from typing import Any

import click
from rich.table import Table

from folio.cli.utils.command import FolioCommand, console


class ListCommand(FolioCommand):
    """Show posts newest first."""

    name = "list"
    help = "List posts, newest first."

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
        if report.failures:
            self.log_warning(
                f"Skipped {len(report.failures)} posts with invalid front matter, "
                "run 'folio check' for details"
            )

        table = Table(title=f"Posts in {store.root}")
        table.add_column("Date", no_wrap=True)
        table.add_column("Slug", no_wrap=True)
        table.add_column("Title")
        table.add_column("Read", justify="right", no_wrap=True)

        for document in store:
            table.add_row(
                document.date.isoformat(),
                document.slug,
                document.title,
                f"{document.reading_time} min",
            )

        console.print(table)
        return 0
