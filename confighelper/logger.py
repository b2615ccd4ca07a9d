"""Leveled logging sinks for configuration operations.

Every component reports through the small :class:`Logger` protocol so the
host can plug in whatever sink it already uses. Two sinks ship with the
package: :class:`ConsoleLogger` (rich console output, the default) and
:class:`LoggingAdapter` (forwards to a stdlib ``logging.Logger``).
"""

import logging
from typing import Optional, Protocol, runtime_checkable

from rich.console import Console
from rich.markup import escape

LOGGER_METHODS = ("debug", "info", "warning", "error")


@runtime_checkable
class Logger(Protocol):
    """Leveled logger accepting a message and an optional exception payload."""

    def debug(self, message: str, exc: Optional[BaseException] = None) -> None: ...

    def info(self, message: str, exc: Optional[BaseException] = None) -> None: ...

    def warning(self, message: str, exc: Optional[BaseException] = None) -> None: ...

    def error(self, message: str, exc: Optional[BaseException] = None) -> None: ...


class ConsoleLogger:
    """Rich console output for configuration operations."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        """Initialize logger.

        Args:
            console: Rich Console instance (defaults to stderr)
            verbose: Emit debug lines
        """
        self.console = console or Console(stderr=True)
        self.verbose = verbose

    def debug(self, message: str, exc: Optional[BaseException] = None) -> None:
        """Dim debug message, shown only in verbose mode."""
        if self.verbose:
            self._emit("[dim]·[/dim]", message, exc)

    def info(self, message: str, exc: Optional[BaseException] = None) -> None:
        """Blue info message."""
        self._emit("[blue]ℹ[/blue]", message, exc)

    def warning(self, message: str, exc: Optional[BaseException] = None) -> None:
        """Yellow warning message."""
        self._emit("[yellow]⚠[/yellow]", message, exc)

    def error(self, message: str, exc: Optional[BaseException] = None) -> None:
        """Red error message."""
        self._emit("[red]✗[/red]", message, exc)

    def _emit(self, marker: str, message: str, exc: Optional[BaseException]) -> None:
        text = escape(message)
        if exc is not None:
            text += f" [dim]({type(exc).__name__}: {escape(str(exc))})[/dim]"
        self.console.print(f"{marker} {text}")


class LoggingAdapter:
    """Forward log calls to a stdlib ``logging.Logger``."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("confighelper")

    def debug(self, message: str, exc: Optional[BaseException] = None) -> None:
        self.logger.debug(message, exc_info=exc)

    def info(self, message: str, exc: Optional[BaseException] = None) -> None:
        self.logger.info(message, exc_info=exc)

    def warning(self, message: str, exc: Optional[BaseException] = None) -> None:
        self.logger.warning(message, exc_info=exc)

    def error(self, message: str, exc: Optional[BaseException] = None) -> None:
        self.logger.error(message, exc_info=exc)


def validate_logger(logger: object) -> Logger:
    """
    Check that an object can serve as a logger.

    Args:
        logger: Candidate logger.

    Returns:
        The same object, typed as a Logger.

    Raises:
        ValueError: If logger is None.
        TypeError: If logger lacks one of the level methods.
    """
    if logger is None:
        raise ValueError("logger must not be None")

    missing = [name for name in LOGGER_METHODS if not callable(getattr(logger, name, None))]
    if missing:
        raise TypeError(f"logger is missing required method(s): {', '.join(missing)}")

    return logger  # type: ignore[return-value]
