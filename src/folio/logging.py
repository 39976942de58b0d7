"""folio logging configuration."""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOG_FILE_NAME = "folio.log"


def get_component_logger(name: str) -> logging.Logger:
    """Get a logger for a component.

    Args:
        name: Component name

    Returns:
        Logger for the component
    """
    return logging.getLogger(f"folio.{name}")


def log_error(logger: logging.Logger, message: str, error: Exception | None = None) -> None:
    """Log an error message.

    Args:
        logger: Logger to use
        message: Error message
        error: Optional exception
    """
    if error:
        logger.error(f"{message}: {error!s}")
    else:
        logger.error(message)


def configure_logging(
    level: str = "INFO",
    log_dir: Path | None = None,
    console: Console | None = None,
) -> None:
    """Configure logging.

    Sets up rich console output on stderr and, when ``log_dir`` is given,
    file output to ``<log_dir>/folio.log``. Calling it again replaces the
    handlers installed by the previous call.

    Args:
        level: Console log level
        log_dir: Directory for the log file, or None for console only
        console: Console to render to, defaults to stderr
    """
    folio_logger = logging.getLogger("folio")
    for handler in list(folio_logger.handlers):
        if getattr(handler, "_folio_handler", False):
            folio_logger.removeHandler(handler)
            handler.close()

    folio_logger.setLevel(logging.DEBUG)
    folio_logger.propagate = False

    # Console handler
    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        omit_repeated_times=False,
        show_time=False,
    )
    rich_handler.setLevel(level.upper())
    rich_handler._folio_handler = True  # type: ignore[attr-defined]
    folio_logger.addHandler(rich_handler)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / LOG_FILE_NAME, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        file_handler._folio_handler = True  # type: ignore[attr-defined]
        folio_logger.addHandler(file_handler)
