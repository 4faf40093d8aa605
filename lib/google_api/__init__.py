"""
Google API Client Library

This module provides a typed Python client for Google Maps HTTP/JSON APIs
(places, geocoding, directions, imagery...) built around a generic request engine.

Example usage:
    from lib.google_api import HttpEngine, HttpTransport
    from lib.google_api.models import PlacesDetailsRequest, PlacesDetailsResponse

    HttpTransport.setProxy("http://proxy.local:3128")  # optional, before first use
    engine = HttpEngine.instance(PlacesDetailsRequest, PlacesDetailsResponse)

    # Blocking call
    response = engine.query(PlacesDetailsRequest(key="your_api_key", placeId="ChIJN1t_tDeuEmsRUsoyG83frY4"))

    # Async call with cancellation support
    cancelEvent = asyncio.Event()
    response = await engine.queryAsync(request, cancelEvent)
"""

from .engine import HttpEngine
from .enums import Extensions, Status
from .exceptions import GoogleApiError, RetriesExhaustedError
from .models import (
    BaseQueryStringRequest,
    BaseRequest,
    BaseResponse,
    BaseResponseStream,
)
from .serialization import serializeRequest
from .transport import HttpTransport

__all__ = [
    "HttpEngine",
    "HttpTransport",
    "Status",
    "Extensions",
    "GoogleApiError",
    "RetriesExhaustedError",
    "BaseRequest",
    "BaseQueryStringRequest",
    "BaseResponse",
    "BaseResponseStream",
    "serializeRequest",
]
