"""
Base request and response models for Google API.

Provides the minimal capabilities the request engine relies on:
    - requests produce their full URI and tell whether they are sent as
      query string (GET) or as JSON body (POST)
    - responses carry status, error message, raw payload and the echoed
      request path
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, FrozenSet, List, Optional, Self, Tuple
from urllib.parse import urlencode

from ..constants import MAPS_API_HOST, MAPS_API_PATH
from ..enums import Status

logger = logging.getLogger(__name__)

QueryParameters = List[Tuple[str, str]]


def queryOnly(default: Any = None) -> Any:
    """Dataclass field which is sent in query string and never in JSON body."""
    return field(default=default, metadata={"json": False})


@dataclass(frozen=True, kw_only=True)
class BaseRequest:
    """
    Base class for all Google API requests, dood!

    Body requests (the default) are sent as POST with the request serialized
    into JSON body. Subclass BaseQueryStringRequest for GET requests.

    Attributes:
        key: API key, sent as ``key`` query parameter when set
        channel: Optional channel for usage reports
        useSsl: Use https scheme (default: True)
    """

    isQueryString: ClassVar[bool] = False
    path: ClassVar[str] = ""

    key: Optional[str] = queryOnly()
    channel: Optional[str] = queryOnly()
    useSsl: bool = queryOnly(True)

    @property
    def baseUrl(self) -> str:
        """Host and path of the endpoint, without scheme."""
        return MAPS_API_HOST + MAPS_API_PATH + self.path

    def getQueryStringParameters(self) -> QueryParameters:
        """Get query string parameters of the request.

        Subclasses extend the list returned by super().
        """
        parameters: QueryParameters = []
        if self.key:
            parameters.append(("key", self.key))
        if self.channel:
            parameters.append(("channel", self.channel))
        return parameters

    def getUri(self) -> str:
        """Build full request URI with encoded query parameters."""
        scheme = "https" if self.useSsl else "http"
        uri = f"{scheme}://{self.baseUrl}"
        query = urlencode(self.getQueryStringParameters())
        if query:
            uri = f"{uri}?{query}"
        return uri


@dataclass(frozen=True, kw_only=True)
class BaseQueryStringRequest(BaseRequest):
    """Base class for requests sent as GET with all parameters in the URI."""

    isQueryString: ClassVar[bool] = True


@dataclass(kw_only=True)
class BaseResponse:
    """
    Base class for all Google API responses, dood!

    JSON payload fields are mapped onto dataclass fields with the same name,
    missing fields keep their defaults and unknown fields are kept in
    ``api_kwargs``.

    Attributes:
        status: API status, always resolved by the engine
        error_message: Error message reported by the API
        raw_json: Raw JSON text of the response
        raw_query_string: Path and query of the request
        api_kwargs: JSON fields not mapped onto any attribute
    """

    isStream: ClassVar[bool] = False
    # Fields populated by the engine, never read from payload
    _engineFields: ClassVar[FrozenSet[str]] = frozenset({"raw_json", "raw_query_string", "buffer", "api_kwargs"})

    status: Optional[Status] = None
    error_message: Optional[str] = None
    raw_json: Optional[str] = field(default=None, repr=False)
    raw_query_string: Optional[str] = None
    api_kwargs: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def fromDict(cls, data: Optional[Dict[str, Any]]) -> Self:
        """Create response instance from API response dictionary."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"Expected JSON object for {cls.__name__}, got {type(data).__name__}")

        known = {f.name for f in dataclasses.fields(cls) if f.init} - cls._engineFields
        kwargs: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}
        for k, v in data.items():
            if k in known:
                kwargs[k] = v
            else:
                extra[k] = v

        if "status" in kwargs:
            kwargs["status"] = Status.fromStr(kwargs["status"])

        return cls(**kwargs, api_kwargs=extra)


@dataclass(kw_only=True)
class BaseResponseStream(BaseResponse):
    """Base class for responses carrying raw bytes (images etc.) instead of JSON.

    Attributes:
        buffer: Raw response body
    """

    isStream: ClassVar[bool] = True

    buffer: Optional[bytes] = field(default=None, repr=False)
