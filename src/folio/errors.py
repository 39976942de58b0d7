"""Error handling for folio documents."""

from pathlib import Path
from typing import Any


class FolioError(Exception):
    """Base exception for folio errors."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize error.

        Args:
            message: Error message.
            context: Optional context dictionary.
            original_error: Optional original exception.
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.original_error = original_error

    def __str__(self) -> str:
        path = self.context.get("path")
        if path is not None:
            return f"{path}: {self.message}"
        return self.message


class ParseError(FolioError):
    """A document's metadata block is malformed or incomplete."""

    def __init__(
        self,
        message: str,
        path: str | Path | None = None,
        line: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        context: dict[str, Any] = {}
        if path is not None:
            context["path"] = str(path)
        if line is not None:
            context["line"] = line
        super().__init__(message, context=context, original_error=original_error)

    @property
    def path(self) -> str | None:
        return self.context.get("path")

    @property
    def line(self) -> int | None:
        return self.context.get("line")

    def with_path(self, path: str | Path) -> "ParseError":
        """Return a copy of this error that names the file it came from."""
        return ParseError(
            self.message,
            path=path,
            line=self.line,
            original_error=self.original_error,
        )


class ValidationError(FolioError):
    """A document built in code breaks the document invariants."""
    pass


class ConfigurationError(FolioError):
    """Error in configuration."""
    pass


def wrap_error(
    error: Exception,
    message: str,
    context: dict[str, Any] | None = None,
) -> FolioError:
    """Wrap an exception in a folio error.

    Args:
        error: Original exception.
        message: Error message.
        context: Optional context dictionary.

    Returns:
        Wrapped folio error.
    """
    if isinstance(error, FolioError):
        if context:
            error.context.update(context)
        return error

    return FolioError(
        message=message,
        context=context,
        original_error=error,
    )
