"""folio - front-matter document model for Markdown blog posts."""

__version__ = "0.1.0"

from folio.document import Document, FrontMatter
from folio.errors import ConfigurationError, FolioError, ParseError, ValidationError
from folio.frontmatter import load, parse, serialize
from folio.store import DocumentStore, LoadReport, slug_for

__all__ = [
    "ConfigurationError",
    "Document",
    "DocumentStore",
    "FolioError",
    "FrontMatter",
    "LoadReport",
    "ParseError",
    "ValidationError",
    "load",
    "parse",
    "serialize",
    "slug_for",
]
