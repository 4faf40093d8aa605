"""
Google API Exceptions

This module contains the exception classes raised by the Google API request engine.
"""

import logging
from typing import TYPE_CHECKING, Optional

from .enums import Status

if TYPE_CHECKING:
    from .models.base import BaseResponse

logger = logging.getLogger(__name__)


class GoogleApiError(Exception):
    """Base exception for all Google API failures, dood!

    Every failure of a request (API status, HTTP error, network error,
    malformed payload) is normalized into this exception. Original
    exception, if any, is available as ``__cause__``.

    Attributes:
        message: Human-readable error message
        status: API status of the failed response (if available)
        response: Response object of the failed request (if available)
    """

    def __init__(
        self,
        message: str,
        status: Optional[Status] = None,
        response: Optional["BaseResponse"] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.response = response
        logger.debug(f"GoogleApiError: {message} (status: {status})")

    def __str__(self) -> str:
        return self.message

    @classmethod
    def fromResponse(cls, response: "BaseResponse") -> "GoogleApiError":
        """Compose error from a response with non-success status."""
        return cls(f"{response.status}: {response.error_message}", status=response.status, response=response)


class RetriesExhaustedError(GoogleApiError):
    """Raised when every retry attempt of an async call returned INVALID_REQUEST.

    Attributes:
        attempts: Number of attempts made
    """

    def __init__(
        self,
        message: str,
        attempts: int,
        status: Optional[Status] = Status.INVALID_REQUEST,
        response: Optional["BaseResponse"] = None,
    ) -> None:
        super().__init__(message, status, response)
        self.attempts = attempts
