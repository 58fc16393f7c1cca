import logging
from enum import Enum
from functools import wraps
from itertools import chain
from typing import Any, Callable

from loguru import logger
from returns.io import IOFailure, IOResult, IOSuccess
from returns.result import Failure, Result, Success

from settings import Settings, get_settings


class FailureLevel(Enum):
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


def _debug_function_signature(func: Callable[..., Any], *args, **kwargs) -> None:
    signature = ", ".join(
        chain(
            (repr(arg) for arg in args),
            (f"{key}={value!r}" for key, value in kwargs.items()),
        )
    )
    logger.debug(f"Calling {func.__name__}({signature})")


def log_failure(failure_message: str, failure_level: FailureLevel, error: str) -> None:
    logger.debug(f"{failure_message}: {error}")
    match failure_level:
        case FailureLevel.WARNING:
            logger.warning(failure_message)
        case FailureLevel.ERROR:
            logger.error(failure_message)
        case FailureLevel.CRITICAL:
            logger.critical(failure_message)


def _call_settings(*args, **kwargs) -> Settings:
    """The `Settings` passed to a call, else the process-wide settings."""
    passed = (
        value for value in chain(args, kwargs.values()) if isinstance(value, Settings)
    )
    return next(passed, None) or get_settings()


def log_skipped(kind: str, index: int, reason: Exception | str) -> None:
    """Log an item that was left out of an import."""
    logger.warning(f"Skipping {kind} {index}: {reason}")


def _log_result(
    result: Result | IOResult,
    failure_message: str,
    success_message: str | None,
    failure_level: FailureLevel,
) -> None:
    match result:
        case Success() | IOSuccess():
            if success_message:
                logger.info(success_message)
        case Failure(error) | IOFailure(error):
            log_failure(failure_message, failure_level, str(error))


def log_railway_function(
    failure_message: str,
    success_message: str | None = None,
    failure_level: FailureLevel = FailureLevel.ERROR,
):
    """
    Log the outcome of a function returning a `Result` or `IOResult`.

    Successes are logged at INFO with `success_message`, failures at
    `failure_level` with `failure_message` plus a DEBUG line holding the error.
    In verbose mode the call itself is logged at DEBUG; the flag is read from a
    `Settings` argument of the call when there is one.
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if _call_settings(*args, **kwargs).verbose_logging:
                _debug_function_signature(func, *args, **kwargs)
            result = func(*args, **kwargs)
            if isinstance(result, (Result, IOResult)):
                _log_result(result, failure_message, success_message, failure_level)
            return result

        return wrapper

    return decorator
