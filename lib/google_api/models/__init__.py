"""Request and response models for Google API endpoints."""

from .base import (
    BaseQueryStringRequest,
    BaseRequest,
    BaseResponse,
    BaseResponseStream,
    QueryParameters,
    queryOnly,
)
from .places import (
    PlaceResult,
    PlacesDetailsRequest,
    PlacesDetailsResponse,
    PlacesPhotosRequest,
    PlacesPhotosResponse,
)

__all__ = [
    "BaseRequest",
    "BaseQueryStringRequest",
    "BaseResponse",
    "BaseResponseStream",
    "QueryParameters",
    "queryOnly",
    "PlaceResult",
    "PlacesDetailsRequest",
    "PlacesDetailsResponse",
    "PlacesPhotosRequest",
    "PlacesPhotosResponse",
]
