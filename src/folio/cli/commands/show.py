"""Show command implementation."""

from collections import Counter
from pathlib import Path
from typing import Any

import click
from rich.markup import escape

from folio import markdown
from folio.cli.utils.command import FolioCommand, console, content_dir_option


class ShowCommand(FolioCommand):
    """Print one post's metadata and a summary of its body."""

    name = "show"
    help = "Show a post's metadata, headings, code blocks and images."

    def params(self) -> list[click.Parameter]:
        return [click.Argument(["slug"]), content_dir_option()]

    def _run_sync(self, slug: str, content_dir: Path | None = None, **kwargs: Any) -> int:
        store = self.open_store(content_dir)
        try:
            document = store.get(slug)
        except KeyError:
            raise click.ClickException(f"No post with slug '{slug}' in {store.root}") from None

        console.print(f"[bold]{escape(document.title)}[/bold]")
        console.print(f"date:    {document.date.isoformat()}")
        console.print(f"spoiler: {escape(document.spoiler)}")
        for key, value in document.front_matter.extra.items():
            console.print(f"{escape(str(key))}: {escape(str(value))}")
        if document.source_path:
            console.print(f"file:    {escape(str(document.source_path))}")
        console.print(f"words:   {document.word_count} ({document.reading_time} min read)")

        headings = markdown.headings(document.body)
        if headings:
            console.print("\n[bold]Headings[/bold]")
            for heading in headings:
                indent = "  " * (heading.level - 1)
                console.print(f"{indent}{escape(heading.text)}")

        blocks = markdown.code_blocks(document.body)
        if blocks:
            languages = Counter(block.language or "plain" for block in blocks)
            console.print("\n[bold]Code blocks[/bold]")
            for language, count in sorted(languages.items()):
                console.print(f"  {escape(language)}: {count}")

        images = markdown.images(document.body)
        if images:
            console.print("\n[bold]Images[/bold]")
            for image in images:
                console.print(f"  {escape(image.url)}")

        return 0
