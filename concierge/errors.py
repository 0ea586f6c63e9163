"""Error types shared by the API, the dispatcher and the CLI."""

from __future__ import annotations

from enum import Enum

GENERIC_VALIDATION_MESSAGE = "Invalid call parameters were provided."
MISSING_CREDENTIALS_MESSAGE = "Server configuration is missing Twilio credentials."
UPSTREAM_FALLBACK_MESSAGE = "Twilio rejected the call request. Please verify the phone numbers."


class FailureKind(str, Enum):
    CONFIGURATION = "configuration"
    UPSTREAM = "upstream"

    @property
    def status_code(self) -> int:
        return 500 if self is FailureKind.CONFIGURATION else 502


class CallError(Exception):
    """Base class for errors that end a call request."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CallValidationError(CallError):
    """The submitted payload failed validation."""

    status_code = 422


class ProviderError(Exception):
    """Raised by a call provider when the call could not be placed."""
