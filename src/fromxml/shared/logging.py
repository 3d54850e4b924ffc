"""Structured logging utilities for XML folding.

Every pipeline layer logs through a CorrelationLogger so that records carry
the component name and the caller's correlation ID in their ``extra`` data.
The package never installs handlers; configuring output is left to the
application.
"""

import logging
from typing import Any, Dict, Optional


class CorrelationLogger:
    """Logger that automatically includes correlation ID and component information."""

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Optional correlation ID for request tracking
            component: Component name, defaults to the last part of ``name``
        """
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.split(".")[-1]

    def _get_extra(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        combined_extra = {
            "component": self.component,
            "correlation_id": self.correlation_id,
        }
        if extra:
            combined_extra.update(extra)
        return combined_extra

    def _log(
        self,
        level: int,
        message: str,
        extra: Optional[Dict[str, Any]],
        exc_info: bool
    ) -> None:
        if self.logger.isEnabledFor(level):
            self.logger.log(
                level, message, extra=self._get_extra(extra), exc_info=exc_info
            )

    def debug(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = False
    ) -> None:
        """Log debug message with correlation info."""
        self._log(logging.DEBUG, message, extra, exc_info)

    def info(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = False
    ) -> None:
        """Log info message with correlation info."""
        self._log(logging.INFO, message, extra, exc_info)

    def warning(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = False
    ) -> None:
        """Log warning message with correlation info."""
        self._log(logging.WARNING, message, extra, exc_info)

    def error(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = False
    ) -> None:
        """Log error message with correlation info."""
        self._log(logging.ERROR, message, extra, exc_info)


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        correlation_id: Optional correlation ID for request tracking
        component: Component name for structured logging

    Returns:
        CorrelationLogger instance
    """
    return CorrelationLogger(name, correlation_id, component)
