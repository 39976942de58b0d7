"""Front-matter parsing and serialization.

A post starts with a YAML block fenced by ``---`` lines::

    ---
    title: 'Hello'
    date: '2024-01-01'
    spoiler: "First post"
    ---
    Markdown body...

Everything after the closing delimiter line is the body and is never
touched, so fenced code blocks (including ones holding ``---`` lines or
YAML) survive verbatim. Parsing a document and serializing it again
reproduces the input byte for byte.
"""

import logging
from pathlib import Path

import pydantic
import yaml

from folio.document import Document, FrontMatter, describe_validation_error
from folio.errors import ParseError

logger = logging.getLogger(__name__)

DELIMITER = "---"
BOM = "\ufeff"

MARKDOWN_SUFFIXES = (".md", ".markdown")


def _next_line(text: str, start: int) -> tuple[str, int]:
    """Return the line beginning at ``start`` (without its ending) and the
    offset just past its line ending."""
    end = text.find("\n", start)
    if end == -1:
        return text[start:], len(text)
    return text[start:end].rstrip("\r"), end + 1


def _is_delimiter(line: str) -> bool:
    return line.rstrip() == DELIMITER


def split(text: str) -> tuple[str, str, str]:
    """Split a document into its metadata block and body.

    Args:
        text: Full document text

    Returns:
        ``(header, metadata_text, body)``: the block including both delimiter
        lines, the YAML between them, and everything after the block.

    Raises:
        ParseError: If the opening or closing delimiter is missing
    """
    start = len(BOM) if text.startswith(BOM) else 0
    first, offset = _next_line(text, start)
    if not _is_delimiter(first):
        raise ParseError(
            f"Missing opening '{DELIMITER}' delimiter on the first line", line=1
        )

    metadata_start = offset
    line_number = 1
    while offset < len(text):
        line_start = offset
        line, offset = _next_line(text, offset)
        line_number += 1
        if _is_delimiter(line):
            return text[:offset], text[metadata_start:line_start], text[offset:]

    raise ParseError(
        f"Missing closing '{DELIMITER}' delimiter after line {line_number}",
        line=line_number,
    )


def parse_front_matter(metadata_text: str) -> FrontMatter:
    """Decode the YAML between the delimiters.

    Raises:
        ParseError: On invalid YAML, a non-mapping block, or a missing,
            empty or undecodable required field
    """
    try:
        data = yaml.safe_load(metadata_text)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        # +2: one for 1-based numbering, one for the opening delimiter
        line = mark.line + 2 if mark is not None else None
        problem = getattr(e, "problem", None) or str(e)
        raise ParseError(f"Invalid YAML in metadata block: {problem}", line=line, original_error=e) from e
    except ValueError as e:
        # Timestamps such as 2024-02-30 match YAML's pattern but fail to construct
        raise ParseError(f"Invalid date in metadata block: {e}", original_error=e) from e

    if data is None:
        raise ParseError("Metadata block is empty")
    if not isinstance(data, dict):
        raise ParseError(
            f"Metadata block must be a mapping, got {type(data).__name__}"
        )

    try:
        return FrontMatter.from_mapping(data)
    except pydantic.ValidationError as e:
        raise ParseError(describe_validation_error(e), original_error=e) from e


def parse(text: str, slug: str = "", source_path: Path | None = None) -> Document:
    """Parse a full document.

    Args:
        text: Document text
        slug: Identifier to give the document
        source_path: File the text came from, if any

    Returns:
        Parsed document carrying its original header

    Raises:
        ParseError: If the metadata block is malformed or incomplete
    """
    header, metadata_text, body = split(text)
    front_matter = parse_front_matter(metadata_text)
    return Document(
        slug=slug,
        front_matter=front_matter,
        body=body,
        header=header,
        source_path=source_path,
    )


def dump_front_matter(front_matter: FrontMatter) -> str:
    """Render a fresh metadata block, delimiters included."""
    dumped = yaml.safe_dump(
        front_matter.to_mapping(),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=4096,
    )
    return f"{DELIMITER}\n{dumped}{DELIMITER}\n"


def serialize(document: Document) -> str:
    """Render a document back to text.

    A parsed, unedited metadata block is written back exactly as read.
    """
    if document.header is not None:
        return document.header + document.body
    return dump_front_matter(document.front_matter) + document.body


def load(path: str | Path, slug: str | None = None) -> Document:
    """Read and parse a document file.

    Args:
        path: Markdown file to read
        slug: Identifier to give the document, defaults to the file stem

    Raises:
        ParseError: If the file cannot be read, is not UTF-8, or its
            metadata block is malformed; the error names the file
    """
    path = Path(path)
    logger.debug("Parsing %s", path)
    try:
        # newline="" keeps \r\n intact for exact round trips
        with open(path, encoding="utf-8", newline="") as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise ParseError(f"Not valid UTF-8: {e.reason}", path=path, original_error=e) from e
    except OSError as e:
        raise ParseError(f"Cannot read file: {e.strerror or e}", path=path, original_error=e) from e

    try:
        return parse(text, slug=path.stem if slug is None else slug, source_path=path)
    except ParseError as e:
        raise e.with_path(path) from e


def write(document: Document, path: str | Path) -> Path:
    """Serialize a document to ``path``, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(serialize(document))
    logger.debug("Wrote %s", path)
    return path
