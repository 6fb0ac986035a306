"""Progress and status reporting abstraction.

Core fitting code reports diagnostics through the ``Reporter`` protocol so
that it never depends on a specific output channel.

Design Pattern: Protocol-based dependency injection
    - Reporter protocol defines the contract
    - NullReporter provides silent operation (the default)
    - LoggingReporter uses Python's logging module (selected by verbose=True)
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable


@runtime_checkable
class Reporter(Protocol):
    """Protocol for diagnostic reporting.

    All methods take plain strings to avoid coupling to any output format.
    """

    def action(self, message: str) -> None:
        """Report an action being performed (e.g. 'Stage 1 solve')."""
        ...

    def info(self, message: str) -> None:
        """Report an informational message."""
        ...

    def warning(self, message: str) -> None:
        """Report a recoverable problem."""
        ...

    def error(self, message: str) -> None:
        """Report a failure that affects the result."""
        ...

    def success(self, message: str) -> None:
        """Report successful completion."""
        ...


class NullReporter:
    """Silent reporter that discards all messages.

    Example:
        >>> reporter = NullReporter()
        >>> reporter.action("Fitting row...")  # No output
    """

    def action(self, message: str) -> None:
        """Discard action message."""

    def info(self, message: str) -> None:
        """Discard info message."""

    def warning(self, message: str) -> None:
        """Discard warning message."""

    def error(self, message: str) -> None:
        """Discard error message."""

    def success(self, message: str) -> None:
        """Discard success message."""


class LoggingReporter:
    """Reporter that writes to Python logging.

    Example:
        >>> reporter = LoggingReporter("chargefit.fitting")
        >>> reporter.action("Trying dataset 0")  # INFO level
        >>> reporter.warning("Covariance failed")  # WARNING level
    """

    def __init__(self, logger_name: str = "chargefit") -> None:
        """Initialize with a logger name.

        Args:
            logger_name: Name for the logger (default: 'chargefit')
        """
        self._logger = logging.getLogger(logger_name)

    def action(self, message: str) -> None:
        """Log action at INFO level with prefix."""
        self._logger.info("[ACTION] %s", message)

    def info(self, message: str) -> None:
        """Log info at INFO level."""
        self._logger.info(message)

    def warning(self, message: str) -> None:
        """Log warning at WARNING level."""
        self._logger.warning(message)

    def error(self, message: str) -> None:
        """Log error at ERROR level."""
        self._logger.error(message)

    def success(self, message: str) -> None:
        """Log success at INFO level with prefix."""
        self._logger.info("[SUCCESS] %s", message)


def resolve_reporter(reporter: Reporter | None, verbose: bool, logger_name: str) -> Reporter:
    """Pick the reporter for a call: explicit reporter, else verbose logging, else silence."""
    if reporter is not None:
        return reporter
    if verbose:
        return LoggingReporter(logger_name)
    return NullReporter()
