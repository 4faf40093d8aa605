"""
Google API Enums
"""

import logging
from enum import StrEnum
from typing import Optional

logger = logging.getLogger(__name__)


class Status(StrEnum):
    """Status of a Google API response, dood!

    Values match the ``status`` field of the API JSON payload.
    ``HTTP_ERROR`` is never sent by the API, the engine sets it when
    the HTTP request itself failed.
    """

    OK = "OK"
    ZERO_RESULTS = "ZERO_RESULTS"
    NOT_FOUND = "NOT_FOUND"
    INVALID_REQUEST = "INVALID_REQUEST"
    OVER_QUERY_LIMIT = "OVER_QUERY_LIMIT"
    OVER_DAILY_LIMIT = "OVER_DAILY_LIMIT"
    REQUEST_DENIED = "REQUEST_DENIED"
    MAX_ELEMENTS_EXCEEDED = "MAX_ELEMENTS_EXCEEDED"
    MAX_WAYPOINTS_EXCEEDED = "MAX_WAYPOINTS_EXCEEDED"
    MAX_ROUTE_LENGTH_EXCEEDED = "MAX_ROUTE_LENGTH_EXCEEDED"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    HTTP_ERROR = "HTTP_ERROR"

    @classmethod
    def fromStr(cls, value: Optional[str]) -> Optional["Status"]:
        """Parse status string from API response.

        Unknown values are mapped to UNKNOWN_ERROR so that a new status
        introduced by the API is still classified as a failure.
        """
        if value is None:
            return None
        try:
            return cls(value.upper())
        except ValueError:
            logger.warning(f"Unknown API status '{value}', treating as {cls.UNKNOWN_ERROR}")
            return cls.UNKNOWN_ERROR

    def isSuccess(self) -> bool:
        return self in (Status.OK, Status.ZERO_RESULTS)


class Extensions(StrEnum):
    """Additional Place Details fields"""

    NONE = "none"
    REVIEW_SUMMARY = "review_summary"
