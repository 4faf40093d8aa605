"""
Places API Data Models

Request and response entities of the Places Details and Places Photos endpoints.
"""

import sys
from dataclasses import dataclass, field
from typing import ClassVar, List, Optional

from ..enums import Extensions
from .base import BaseQueryStringRequest, BaseResponse, BaseResponseStream, QueryParameters

if sys.version_info >= (3, 14):
    from typing import TypedDict
else:
    from typing_extensions import TypedDict

PHOTO_MAX_SIZE = 1600


class Location(TypedDict):
    """Latitude/longitude pair, dood!"""

    lat: float
    lng: float


class Geometry(TypedDict, total=False, closed=False):
    location: Location
    viewport: dict


class AddressComponent(TypedDict, total=False, closed=False):
    long_name: str
    short_name: str
    types: List[str]


class Photo(TypedDict, total=False, closed=False):
    photo_reference: str
    height: int
    width: int
    html_attributions: List[str]


class PlaceResult(TypedDict, total=False, closed=False):
    """Single place from /details endpoint, dood!

    All fields are optional, API returns only those the place has.
    """

    place_id: str  # Unique place identifier
    name: str  # Place name
    formatted_address: str  # Full address
    formatted_phone_number: str  # Local phone number
    international_phone_number: str  # Phone number with country code
    address_components: List[AddressComponent]  # Structured address
    geometry: Geometry  # Location and viewport
    types: List[str]  # Place types
    rating: float  # Rating (1.0-5.0)
    url: str  # Google Maps page of the place
    website: str  # Official website
    vicinity: str  # Simplified address
    utc_offset: int  # Offset from UTC in minutes
    photos: List[Photo]  # Photo references
    reviews: List[dict]  # User reviews


@dataclass(frozen=True, kw_only=True)
class PlacesDetailsRequest(BaseQueryStringRequest):
    """Places Details request.

    Attributes:
        placeId: Textual identifier of a place, returned from a Place Search
        language: Language code of the results (optional)
        extensions: Additional fields to include (optional)
    """

    path: ClassVar[str] = "place/details/json"

    placeId: Optional[str] = None
    language: Optional[str] = None
    extensions: Extensions = Extensions.NONE

    def getQueryStringParameters(self) -> QueryParameters:
        parameters = super().getQueryStringParameters()

        if not self.placeId or not self.placeId.strip():
            raise ValueError("placeId must be provided")

        parameters.append(("placeid", self.placeId))

        if self.extensions != Extensions.NONE:
            parameters.append(("extensions", self.extensions.value))
        if self.language and self.language.strip():
            parameters.append(("language", self.language))

        return parameters


@dataclass(kw_only=True)
class PlacesDetailsResponse(BaseResponse):
    """Places Details response."""

    result: Optional[PlaceResult] = None
    html_attributions: List[str] = field(default_factory=list)


@dataclass(frozen=True, kw_only=True)
class PlacesPhotosRequest(BaseQueryStringRequest):
    """Places Photos request.

    Attributes:
        photoReference: Photo reference returned by Search or Details request
        maxWidth: Maximum width of the image (1-1600)
        maxHeight: Maximum height of the image (1-1600)
    """

    path: ClassVar[str] = "place/photo"

    photoReference: Optional[str] = None
    maxWidth: Optional[int] = None
    maxHeight: Optional[int] = None

    def getQueryStringParameters(self) -> QueryParameters:
        parameters = super().getQueryStringParameters()

        if not self.photoReference:
            raise ValueError("photoReference must be provided")
        if self.maxWidth is None and self.maxHeight is None:
            raise ValueError("maxWidth or maxHeight must be provided")

        parameters.append(("photoreference", self.photoReference))

        if self.maxWidth is not None:
            if not 1 <= self.maxWidth <= PHOTO_MAX_SIZE:
                raise ValueError(f"maxWidth must be between 1 and {PHOTO_MAX_SIZE}")
            parameters.append(("maxwidth", str(self.maxWidth)))
        if self.maxHeight is not None:
            if not 1 <= self.maxHeight <= PHOTO_MAX_SIZE:
                raise ValueError(f"maxHeight must be between 1 and {PHOTO_MAX_SIZE}")
            parameters.append(("maxheight", str(self.maxHeight)))

        return parameters


@dataclass(kw_only=True)
class PlacesPhotosResponse(BaseResponseStream):
    """Places Photos response, image bytes are in ``buffer``."""
