"""New post command implementation."""

import datetime as dt
import re
from pathlib import Path
from typing import Any

import click
from rich.markup import escape

from folio.cli.utils.command import FolioCommand, console, content_dir_option
from folio.document import Document
from folio.errors import ValidationError

SLUG_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]*(/[a-z0-9][a-z0-9-]*)*$")


class NewCommand(FolioCommand):
    """Author a new post as <content_dir>/<slug>/index.md."""

    name = "new"
    help = "Create a new post with a front-matter block."

    def params(self) -> list[click.Parameter]:
        return [
            click.Argument(["slug"]),
            click.Option(["--title", "-t"], required=True, help="Post title"),
            click.Option(["--spoiler", "-s"], required=True, help="One-line summary"),
            click.Option(
                ["--date"],
                type=click.DateTime(formats=["%Y-%m-%d"]),
                default=None,
                help="Publication date, YYYY-MM-DD (defaults to today)",
            ),
            content_dir_option(),
        ]

    def _run_sync(
        self,
        slug: str,
        title: str,
        spoiler: str,
        date: dt.datetime | None = None,
        content_dir: Path | None = None,
        **kwargs: Any,
    ) -> int:
        if not SLUG_PATTERN.match(slug):
            raise click.BadParameter(
                "use lowercase letters, digits and dashes, with '/' between sections",
                param_hint="'SLUG'",
            )

        published = date.date() if date else dt.date.today()
        try:
            document = Document.create(slug, title=title, date=published, spoiler=spoiler, body="\n")
        except ValidationError as e:
            raise click.ClickException(e.message) from e

        store = self.open_store(content_dir)
        try:
            path = store.create(document)
        except FileExistsError as e:
            raise click.ClickException(str(e)) from e

        console.print(f"Created {escape(str(path))}")
        self.log_success(f"Created post {slug}")
        return 0
