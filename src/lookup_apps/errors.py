"""Error taxonomy, logging and error handling utilities."""

import enum
import logging
import sys
import traceback
from contextlib import contextmanager
from datetime import datetime
from functools import wraps
from typing import Any, Callable, Generator, TypeVar

from .config import AppConfig


T = TypeVar("T")


class ErrorCause(enum.Enum):
    """Closed set of reasons a lookup can fail."""

    VALIDATION_FAILED = "validation_failed"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    SERVICE_UNAVAILABLE = "service_unavailable"
    UNAUTHORIZED = "unauthorized"
    NETWORK_UNREACHABLE = "network_unreachable"
    UNKNOWN = "unknown"


class AppError(Exception):
    """Base exception for application errors."""

    cause = ErrorCause.UNKNOWN

    def __init__(
        self,
        message: str,
        cause: ErrorCause | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if cause is not None:
            self.cause = cause
        self.details = details or {}
        self.timestamp = datetime.now()

    @property
    def code(self) -> str:
        """Upper-case error code derived from the cause."""
        return self.cause.name

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a dictionary."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class ValidationFailed(AppError):
    """Raised when input is rejected before any network call."""

    cause = ErrorCause.VALIDATION_FAILED

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message=message,
            details={"field": field} if field else {},
        )


class NotFound(AppError):
    """Raised when the requested resource does not exist."""

    cause = ErrorCause.NOT_FOUND


class RateLimited(AppError):
    """Raised when the API refuses further requests for now."""

    cause = ErrorCause.RATE_LIMITED


class ServiceUnavailable(AppError):
    """Raised when the remote service reports a server-side failure."""

    cause = ErrorCause.SERVICE_UNAVAILABLE


class Unauthorized(AppError):
    """Raised when credentials are missing or rejected."""

    cause = ErrorCause.UNAUTHORIZED


class NetworkUnreachable(AppError):
    """Raised when the network or a host capability cannot be reached."""

    cause = ErrorCause.NETWORK_UNREACHABLE


class UnknownError(AppError):
    """Raised for any other failure, optionally tagged with an HTTP status."""

    cause = ErrorCause.UNKNOWN

    def __init__(self, message: str, status: int | None = None):
        super().__init__(
            message=message,
            details={"status": status} if status is not None else {},
        )
        self.status = status


def setup_logging(config: AppConfig) -> logging.Logger:
    """Configure logging for the application."""
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    if config.debug:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=log_format,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    logger = logging.getLogger(config.app_name)
    logger.debug("Logging configured: level=%s, debug=%s",
                 config.log_level, config.debug)

    return logger


def log_exceptions(logger: logging.Logger) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator to log exceptions."""
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return func(*args, **kwargs)
            except AppError:
                # Application errors are reported by the caller
                raise
            except Exception as e:
                logger.error(
                    "Unhandled exception in %s: %s\n%s",
                    func.__name__,
                    str(e),
                    traceback.format_exc(),
                )
                raise
        return wrapper
    return decorator


@contextmanager
def error_context(operation: str, logger: logging.Logger | None = None) -> Generator[None, None, None]:
    """Context manager for error handling."""
    try:
        yield
    except AppError:
        raise
    except Exception as e:
        if logger:
            logger.error("Error during %s: %s", operation, str(e))
        raise AppError(
            message=f"Error during {operation}: {str(e)}",
            details={"operation": operation, "original_error": str(e)},
        ) from e
