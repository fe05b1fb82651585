"""
Exception hierarchy for responsibility-aware auditing.

Graph classification itself never raises; these exceptions cover reading
project files, loading configuration, talking to the advisory API and the
one fatal audit outcome: advisories on packages the user owns.
"""

from typing import List, Optional


class DepOwnerError(Exception):
    """Base exception for all depowner errors."""


class ManifestError(DepOwnerError):
    """Problem reading ``composer.json`` or ``composer.lock``."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(f"{message}: {path}" if path else message)


class ManifestNotFoundError(ManifestError):
    """The project manifest does not exist."""


class ManifestParseError(ManifestError):
    """The manifest or lock file is not valid JSON of the expected shape."""


class ConfigError(DepOwnerError):
    """Configuration file missing or unreadable."""


class ConstraintError(ValueError):
    """A version constraint could not be parsed."""


class ExternalAPIError(DepOwnerError):
    """
    Base exception for advisory API failures.

    Carries the service, the endpoint and a suggested action next to the
    original exception so the log line is actionable on its own.
    """

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        endpoint: Optional[str] = None,
        original_exception: Optional[Exception] = None,
        suggested_action: Optional[str] = None,
    ):
        self.message = message
        self.service = service
        self.endpoint = endpoint
        self.original_exception = original_exception
        self.suggested_action = suggested_action

        error_parts = [message]

        if service:
            error_parts.append(f"Service: {service}")

        if endpoint:
            error_parts.append(f"Endpoint: {endpoint}")

        if suggested_action:
            error_parts.append(f"Action: {suggested_action}")

        if original_exception:
            error_parts.append(f"Original error: {str(original_exception)}")

        super().__init__(" | ".join(error_parts))


class APITimeoutError(ExternalAPIError):
    """Raised when an API request times out."""

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        endpoint: Optional[str] = None,
        timeout_duration: Optional[float] = None,
        original_exception: Optional[Exception] = None,
    ):
        self.timeout_duration = timeout_duration

        suggested_action = "Check network connectivity and retry"
        if timeout_duration:
            suggested_action += f" (timeout after {timeout_duration}s)"

        super().__init__(
            message=message,
            service=service,
            endpoint=endpoint,
            original_exception=original_exception,
            suggested_action=suggested_action,
        )


class APIConnectionError(ExternalAPIError):
    """Raised when unable to establish a connection to the API."""

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        endpoint: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            service=service,
            endpoint=endpoint,
            original_exception=original_exception,
            suggested_action="Check network connectivity and verify the service is accessible",
        )


class APIResponseError(ExternalAPIError):
    """Raised when the API answers with an error status or an unreadable body."""

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        endpoint: Optional[str] = None,
        status_code: Optional[int] = None,
        original_exception: Optional[Exception] = None,
    ):
        self.status_code = status_code

        if status_code:
            suggested_action = f"HTTP {status_code} - Check API status or try again later"
        else:
            suggested_action = "Check API status or try again later"

        super().__init__(
            message=message,
            service=service,
            endpoint=endpoint,
            original_exception=original_exception,
            suggested_action=suggested_action,
        )


class UserOwnedAdvisoriesError(DepOwnerError):
    """Security advisories exist for packages the user is responsible for."""

    def __init__(self, advisory_ids: List[str]):
        self.advisory_ids = list(advisory_ids)
        self.count = len(self.advisory_ids)
        super().__init__(
            f"[audit-responsibility] {self.count} security advisory/ies found in "
            f'user-owned dependencies. Run "composer audit" for details.'
        )
