"""
Reusable decorator for handling advisory API exceptions.

Wrapped methods return a fallback value instead of raising when the remote
service is slow, unreachable or answers with garbage.
"""

import functools
import logging
from typing import Any, Callable, Optional

import requests

from .exceptions import (
    APIConnectionError,
    APIResponseError,
    APITimeoutError,
    ExternalAPIError,
)


def handle_external_api_errors(
    service: str,
    return_on_error: Any = None,
):
    """
    Decorator that maps request failures to ``ExternalAPIError`` subclasses.

    Usage:
        @handle_external_api_errors(service="Packagist", return_on_error={})
        def fetch(self, names):
            response = self.session.get(url)
            return response.json()

    Args:
        service: Name of the external service
        return_on_error: Value returned instead of raising

    Returns:
        Decorated function
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            logger = getattr(self, "logger", logging.getLogger(func.__name__))
            endpoint = getattr(self, "api_url", None)
            stats = getattr(self, "stats", None)

            try:
                return func(self, *args, **kwargs)

            except requests.exceptions.Timeout as e:
                error = APITimeoutError(
                    message=f"Timeout while calling {service}",
                    service=service,
                    endpoint=endpoint,
                    timeout_duration=getattr(self, "timeout", None),
                    original_exception=e,
                )
                return _handle_error(error, logger, "warning", stats, return_on_error)

            except requests.exceptions.ConnectionError as e:
                error = APIConnectionError(
                    message=f"Connection failed for {service}",
                    service=service,
                    endpoint=endpoint,
                    original_exception=e,
                )
                return _handle_error(error, logger, "warning", stats, return_on_error)

            except requests.exceptions.HTTPError as e:
                status_code = e.response.status_code if e.response is not None else None
                error = APIResponseError(
                    message=f"HTTP error calling {service}",
                    service=service,
                    endpoint=endpoint,
                    status_code=status_code,
                    original_exception=e,
                )
                return _handle_error(error, logger, "error", stats, return_on_error)

            except requests.exceptions.RequestException as e:
                error = ExternalAPIError(
                    message=f"Request failed for {service}",
                    service=service,
                    endpoint=endpoint,
                    original_exception=e,
                    suggested_action="Check network connectivity and retry",
                )
                return _handle_error(error, logger, "error", stats, return_on_error)

            except ValueError as e:
                # requests raises a ValueError subclass for non-JSON bodies
                error = APIResponseError(
                    message=f"Invalid response body from {service}",
                    service=service,
                    endpoint=endpoint,
                    original_exception=e,
                )
                return _handle_error(error, logger, "error", stats, return_on_error)

        return wrapper

    return decorator


def _handle_error(
    error: ExternalAPIError,
    logger: logging.Logger,
    log_level: str,
    stats: Optional[dict],
    return_value: Any,
):
    """Log the error, count it in ``stats`` and return the fallback."""
    if log_level == "warning":
        logger.warning(str(error))
    else:
        logger.error(str(error))

    if stats is not None and "errors" in stats:
        stats["errors"] += 1

    return return_value


__all__ = ["handle_external_api_errors"]
