"""
Google API Constants

This module contains the constants shared by the Google API request engine.
"""

from typing import Final

VERSION: Final[str] = "0.1.0"

# Transport
DEFAULT_TIMEOUT: Final[float] = 30.0
CONTENT_TYPE_JSON: Final[str] = "application/json"
CONTENT_TYPE_JSON_UTF8: Final[str] = "application/json; charset=utf-8"

# Retry policy of the async path.
# Page tokens are rejected with INVALID_REQUEST for a short while after
# they are issued, so the request is repeated after a small delay
ASYNC_RETRY_COUNT: Final[int] = 6
ASYNC_RETRY_DELAY: Final[float] = 0.35  # seconds

# Base URLs
MAPS_API_HOST: Final[str] = "maps.googleapis.com"
MAPS_API_PATH: Final[str] = "/maps/api/"
