"""Exception hierarchy for the failover tool.

All exceptions inherit from FailoverError for consistent handling.
Specific exceptions provide context for different failure modes.
"""

from typing import Any

# Status-check mode reports API failures in this exit-code band
API_EXIT_CODE_MIN = 100
API_EXIT_CODE_MAX = 255


class FailoverError(Exception):
    """Base exception for all failover tool errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# Configuration Errors
class ConfigError(FailoverError):
    """Base exception for configuration errors."""


class CredentialsError(ConfigError):
    """No credentials file yielded a login and password."""


# API Errors
class ApiError(FailoverError):
    """The Robot API request failed or returned an error status."""

    def __init__(
        self,
        message: str,
        status: int | None = None,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        if status is not None:
            details.setdefault("status", status)
        if code:
            details.setdefault("code", code)
        super().__init__(message, details)
        self.status = status
        self.code = code

    @property
    def exit_code(self) -> int:
        """Process exit code for status-check mode.

        HTTP failures map to ``status - 300`` clamped into the API band;
        failures without a status use the bottom of the band.
        """
        if self.status is None:
            return API_EXIT_CODE_MIN
        return min(max(self.status - 300, API_EXIT_CODE_MIN), API_EXIT_CODE_MAX)


class TransportError(ApiError):
    """The request never produced an HTTP response."""


class ResponseFormatError(ApiError):
    """Response body is not valid JSON or does not match the record schema."""


# Formatting Errors
class NetmaskError(FailoverError):
    """Netmask is not a well-formed IPv4 dotted quad."""

    def __init__(self, netmask: str) -> None:
        super().__init__(f"Malformed netmask: {netmask!r}", {"netmask": netmask})
        self.netmask = netmask


# Command Errors
class UsageError(FailoverError):
    """Option combination does not select exactly one action."""
