"""Document store for a directory of posts."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from folio import frontmatter
from folio.document import Document
from folio.errors import FolioError, ParseError, ValidationError, wrap_error
from folio.frontmatter import MARKDOWN_SUFFIXES

logger = logging.getLogger(__name__)

INDEX_STEM = "index"


def slug_for(path: str | Path, root: str | Path) -> str:
    """Derive a slug from a file's location under the content root.

    ``hello-world/index.md`` and ``hello-world.md`` both map to
    ``hello-world``; nested directories keep their ``/`` separators.

    Raises:
        ValueError: If ``path`` is not below ``root``
    """
    relative = PurePosixPath(Path(path).relative_to(Path(root)).as_posix())
    if relative.suffix.lower() in MARKDOWN_SUFFIXES:
        relative = relative.with_suffix("")
    if relative.name == INDEX_STEM and relative.parent != PurePosixPath("."):
        relative = relative.parent
    return str(relative)


@dataclass
class LoadReport:
    """Outcome of loading a content directory."""

    documents: list[Document] = field(default_factory=list)
    failures: dict[Path, ParseError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures


class DocumentStore:
    """Posts found below a content directory, keyed by slug.

    Documents are authored once with :meth:`create`, edited in place with
    :meth:`save`, and never deleted.
    """

    def __init__(self, root: str | Path) -> None:
        """Initialize store.

        Args:
            root: Content directory holding the Markdown posts
        """
        self.root = Path(root)
        self._documents: dict[str, Document] = {}
        self._loaded = False

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def _markdown_files(self) -> list[Path]:
        return sorted(
            path
            for path in self.root.rglob("*")
            if path.is_file() and path.suffix.lower() in MARKDOWN_SUFFIXES
        )

    def load(self) -> LoadReport:
        """Parse every post below the root.

        A malformed post is skipped and recorded in the report; it never
        stops the others from loading.

        Raises:
            FolioError: If the root exists but is not a directory
        """
        logger.info("Loading documents from %s", self.root)
        self._documents = {}
        self._loaded = True
        report = LoadReport()

        if not self.root.exists():
            logger.warning("Content directory does not exist: %s", self.root)
            return report

        if not self.root.is_dir():
            logger.error("Content path is not a directory: %s", self.root)
            raise FolioError(
                f"Content path is not a directory: {self.root}",
                context={"path": str(self.root)},
            )

        for path in self._markdown_files():
            slug = slug_for(path, self.root)
            try:
                if slug in self._documents:
                    raise ParseError(
                        f"Duplicate slug {slug!r}, already defined by "
                        f"{self._documents[slug].source_path}",
                        path=path,
                    )
                document = frontmatter.load(path, slug=slug)
            except ParseError as e:
                logger.error("Failed to parse %s: %s", path, e.message)
                report.failures[path] = e
                continue

            self._documents[slug] = document
            report.documents.append(document)
            logger.debug("Loaded %s from %s", slug, path)

        logger.info(
            "Loaded %d documents (%d failed)", len(report.documents), len(report.failures)
        )
        return report

    def get(self, slug: str) -> Document:
        """Return the document with ``slug``.

        Raises:
            KeyError: If no such document was loaded
        """
        self._ensure_loaded()
        try:
            return self._documents[slug]
        except KeyError:
            raise KeyError(f"No document with slug {slug!r}") from None

    def slugs(self) -> list[str]:
        self._ensure_loaded()
        return sorted(self._documents)

    def __contains__(self, slug: object) -> bool:
        self._ensure_loaded()
        return slug in self._documents

    def __len__(self) -> int:
        self._ensure_loaded()
        return len(self._documents)

    def __iter__(self) -> Iterator[Document]:
        """Iterate newest first; same-day posts in slug order."""
        self._ensure_loaded()
        by_slug = sorted(self._documents.values(), key=lambda doc: doc.slug)
        return iter(sorted(by_slug, key=lambda doc: doc.date, reverse=True))

    def path_for(self, slug: str) -> Path:
        """Location a new post with ``slug`` is written to.

        Raises:
            ValidationError: If the slug would place the post outside the
                root, or would not be derived back from its own path
        """
        path = self.root / PurePosixPath(slug) / f"{INDEX_STEM}.md"
        try:
            inside = path.resolve().is_relative_to(self.root.resolve())
            derived = slug_for(path, self.root)
        except ValueError:
            inside, derived = False, None
        if not inside or derived != slug:
            raise ValidationError(
                f"Invalid slug {slug!r} for content directory {self.root}",
                context={"slug": slug},
            )
        return path

    def create(self, document: Document) -> Path:
        """Author a new post.

        Returns:
            Path the post was written to

        Raises:
            FileExistsError: If the slug is taken or the file already exists
            ValidationError: If the slug does not name a path below the root
        """
        self._ensure_loaded()
        path = self.path_for(document.slug)
        if document.slug in self._documents:
            raise FileExistsError(f"Document {document.slug!r} already exists")
        if path.exists():
            raise FileExistsError(f"File already exists: {path}")

        self._write(document, path)
        logger.info("Created %s at %s", document.slug, path)
        return path

    def save(self, document: Document) -> Path:
        """Write an edited post back over its file.

        Raises:
            KeyError: If the store holds no document with this slug
        """
        current = self.get(document.slug)
        path = current.source_path or self.path_for(document.slug)
        self._write(document, path)
        logger.info("Saved %s to %s", document.slug, path)
        return path

    def _write(self, document: Document, path: Path) -> None:
        try:
            frontmatter.write(document, path)
        except OSError as e:
            raise wrap_error(e, f"Failed to write document: {e}", {"path": str(path)}) from e
        # Reload so the stored copy carries the header and path just written
        self._documents[document.slug] = frontmatter.load(path, slug=document.slug)
