"""
Centralized error handling for rinkside.

Errors are categorised, counted and logged in one place. Nothing here
raises: fetch failures end up as failed-load actions in state, rendering
failures end up in the status bar, and both are recorded here for
diagnostics.
"""
from __future__ import annotations

import logging
import threading
import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Categorization of errors for better tracking and handling."""

    # Data fetches
    FETCH = "fetch"
    NETWORK = "network"
    DATA_PARSING = "data_parsing"

    # System
    CONFIGURATION = "configuration"

    # UI
    RENDERING = "rendering"
    INPUT = "input"

    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Error severity levels for prioritization."""

    LOW = "low"          # Cosmetic, the next frame usually recovers
    MEDIUM = "medium"    # A panel or fetch is affected
    HIGH = "high"        # The dashboard cannot continue as configured


@dataclass
class ErrorInfo:
    """Error record kept in the handler history."""

    exception: Exception
    category: ErrorCategory
    severity: ErrorSeverity
    component: str = ""
    message: str = ""
    traceback_str: str = ""
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "exception_type": type(self.exception).__name__,
            "exception_message": str(self.exception),
            "category": self.category.value,
            "severity": self.severity.value,
            "component": self.component,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "context": self.context,
        }


class ErrorHandler:
    """Bounded, thread-safe error history with per-category counts."""

    def __init__(self, max_errors: int = 200):
        self.logger = logging.getLogger("rinkside.errors")
        self.errors: list[ErrorInfo] = []
        self.max_errors = max_errors
        self._lock = threading.Lock()
        self.category_counts: dict[ErrorCategory, int] = {}

    def handle_error(
        self,
        exception: Exception,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        component: str = "",
        message: str = "",
        context: dict[str, Any] | None = None,
        should_log: bool = True,
    ) -> ErrorInfo:
        """
        Record an error and log it at a level matching its severity.

        Args:
            exception: The exception that occurred
            category: Error category for classification
            severity: Error severity level
            component: Component where error occurred
            message: Additional context message (defaults to str(exception))
            context: Additional context data
            should_log: Whether to log the error

        Returns:
            ErrorInfo object with the recorded details
        """
        error_info = ErrorInfo(
            exception=exception,
            category=category,
            severity=severity,
            component=component,
            message=message or str(exception),
            traceback_str="".join(traceback.format_exception(exception)),
            context=context or {},
        )

        with self._lock:
            self.errors.append(error_info)
            if len(self.errors) > self.max_errors:
                self.errors.pop(0)
            self.category_counts[category] = self.category_counts.get(category, 0) + 1

        if should_log:
            self._log_error(error_info)
        return error_info

    def _log_error(self, error_info: ErrorInfo) -> None:
        log_msg = (
            f"[{error_info.category.value.upper()}] "
            f"{error_info.component}: {error_info.message}"
        )
        if error_info.context:
            log_msg += f" | Context: {error_info.context}"

        if error_info.severity == ErrorSeverity.HIGH:
            self.logger.error(log_msg, exc_info=error_info.exception)
        elif error_info.severity == ErrorSeverity.MEDIUM:
            self.logger.warning(log_msg)
        else:
            self.logger.info(log_msg)

    def get_recent_errors(self, count: int = 50) -> list[ErrorInfo]:
        with self._lock:
            return self.errors[-count:] if self.errors else []

    def get_error_summary(self) -> dict[str, Any]:
        with self._lock:
            return {
                "total_errors": len(self.errors),
                "by_category": {cat.value: n for cat, n in self.category_counts.items()},
            }

    def clear_errors(self) -> None:
        with self._lock:
            self.errors.clear()
            self.category_counts.clear()


_global_error_handler: ErrorHandler | None = None


def get_error_handler() -> ErrorHandler:
    """Get or create the global error handler instance."""
    global _global_error_handler
    if _global_error_handler is None:
        _global_error_handler = ErrorHandler()
    return _global_error_handler


def handle_fetch_error(e: Exception, key: str, component: str = "effects") -> ErrorInfo:
    """Handle a failed data fetch; the key names the entity that failed."""
    category = ErrorCategory.NETWORK if _is_network_error(e) else ErrorCategory.FETCH
    return get_error_handler().handle_error(
        e, category, ErrorSeverity.MEDIUM,
        component=component, context={"key": key},
    )


def handle_ui_error(e: Exception, component: str = "", context: dict[str, Any] | None = None) -> ErrorInfo:
    """Handle UI/rendering errors."""
    return get_error_handler().handle_error(
        e, ErrorCategory.RENDERING, ErrorSeverity.LOW,
        component=component, context=context or {},
    )


def handle_config_error(e: Exception, component: str = "config", context: dict[str, Any] | None = None) -> ErrorInfo:
    """Handle configuration load/save errors."""
    return get_error_handler().handle_error(
        e, ErrorCategory.CONFIGURATION, ErrorSeverity.HIGH,
        component=component, context=context or {},
    )


def _is_network_error(e: Exception) -> bool:
    import httpx

    return isinstance(e, (httpx.TransportError, TimeoutError, ConnectionError))


__all__ = [
    "ErrorCategory",
    "ErrorSeverity",
    "ErrorInfo",
    "ErrorHandler",
    "get_error_handler",
    "handle_fetch_error",
    "handle_ui_error",
    "handle_config_error",
]
