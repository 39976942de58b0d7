"""Read-only inspection of Markdown document bodies.

Fenced code blocks are opaque: their content is returned untouched and
nothing inside them is reported as a heading, link or image.
"""

import math
import re
from collections.abc import Iterator
from dataclasses import dataclass

FENCE_PATTERN = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})(?P<info>.*)$")
HEADING_PATTERN = re.compile(r"^ {0,3}(?P<marks>#{1,6})[ \t]+(?P<text>.+?)(?:[ \t]+#+)?[ \t]*$")
LINK_PATTERN = re.compile(
    r"(?P<bang>!?)\[(?P<text>[^\]]*)\]\(\s*<?(?P<url>[^)\s>]+)>?(?:\s+[\"'][^\"']*[\"'])?\s*\)"
)
INLINE_CODE_PATTERN = re.compile(r"`[^`\n]*`")

WORDS_PER_MINUTE = 200


@dataclass(frozen=True)
class CodeBlock:
    """A fenced code block."""

    language: str
    content: str
    start_line: int


@dataclass(frozen=True)
class Heading:
    """An ATX heading."""

    level: int
    text: str
    line: int


@dataclass(frozen=True)
class Link:
    """An inline link or image reference."""

    text: str
    url: str
    is_image: bool = False


def _scan(body: str) -> Iterator[tuple[int, str, CodeBlock | None]]:
    """Walk body lines, yielding prose lines and completed code blocks.

    Yields ``(line_number, line, None)`` for every line outside a fence and
    ``(start_line, "", block)`` once per fenced block. Line numbers are
    1-based.
    """
    lines = body.splitlines(keepends=True)
    fence: str | None = None
    language = ""
    start = 0
    content: list[str] = []

    for number, line in enumerate(lines, start=1):
        stripped = line.rstrip("\r\n")
        if fence is None:
            match = FENCE_PATTERN.match(stripped)
            # Backtick fences may not carry backticks in their info string
            if match and not (match["fence"][0] == "`" and "`" in match["info"]):
                fence = match["fence"]
                info = match["info"].strip()
                language = info.split()[0] if info else ""
                start = number
                content = []
                continue
            yield number, stripped, None
        else:
            closing = stripped.strip()
            if (
                closing
                and set(closing) == {fence[0]}
                and len(closing) >= len(fence)
                and len(stripped) - len(stripped.lstrip(" ")) <= 3
            ):
                yield start, "", CodeBlock(language, "".join(content), start)
                fence = None
                continue
            content.append(line)

    if fence is not None:
        yield start, "", CodeBlock(language, "".join(content), start)


def code_blocks(body: str) -> list[CodeBlock]:
    """Return fenced code blocks in order of appearance."""
    return [block for _, _, block in _scan(body) if block is not None]


def headings(body: str) -> list[Heading]:
    """Return ATX headings outside code blocks."""
    found = []
    for number, line, block in _scan(body):
        if block is not None:
            continue
        match = HEADING_PATTERN.match(line)
        if match:
            found.append(Heading(len(match["marks"]), match["text"].strip(), number))
    return found


def links(body: str) -> list[Link]:
    """Return inline links and images outside code.

    Inline code spans are skipped as well as fenced blocks.
    """
    found = []
    for _, line, block in _scan(body):
        if block is not None:
            continue
        prose = INLINE_CODE_PATTERN.sub("", line)
        for match in LINK_PATTERN.finditer(prose):
            found.append(Link(match["text"], match["url"], is_image=bool(match["bang"])))
    return found


def images(body: str) -> list[Link]:
    """Return image references outside code."""
    return [link for link in links(body) if link.is_image]


def word_count(body: str) -> int:
    """Count words in prose, ignoring fenced code."""
    count = 0
    for _, line, block in _scan(body):
        if block is not None:
            continue
        count += sum(1 for token in line.split() if any(ch.isalnum() for ch in token))
    return count


def reading_time(body: str, words_per_minute: int = WORDS_PER_MINUTE) -> int:
    """Estimate reading time in whole minutes, never less than one."""
    if words_per_minute <= 0:
        raise ValueError("words_per_minute must be positive")
    return max(1, math.ceil(word_count(body) / words_per_minute))
