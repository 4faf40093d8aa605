"""
Google API Http Engine

This module provides the HttpEngine class which turns typed request objects
into HTTP calls and HTTP responses into typed, status-classified responses.
"""

import asyncio
import json
import logging
from threading import RLock
from typing import Any, ClassVar, Dict, Generic, Optional, Tuple, Type, TypeVar, Union

import httpx

from .constants import ASYNC_RETRY_COUNT, ASYNC_RETRY_DELAY, CONTENT_TYPE_JSON_UTF8
from .enums import Status
from .exceptions import GoogleApiError, RetriesExhaustedError
from .models.base import BaseRequest, BaseResponse
from .serialization import serializeRequest
from .transport import HttpTransport

logger = logging.getLogger(__name__)

TRequest = TypeVar("TRequest", bound=BaseRequest)
TResponse = TypeVar("TResponse", bound=BaseResponse)


class HttpEngine(Generic[TRequest, TResponse]):
    """
    Request engine for a pair of request and response types, dood!

    Sends the request through the shared HttpTransport clients and converts
    the result into ``TResponse``:
        - query string requests are sent as GET, others as POST with JSON body
        - stream responses get raw body bytes, others are parsed from JSON
        - non 2xx HTTP status becomes Status.HTTP_ERROR
        - missing status in successful response becomes Status.OK

    Two entry points are provided:
        - query(): blocking call, no retries
        - queryAsync(): async call, retries INVALID_REQUEST responses up to
          ``retryCount`` attempts with ``retryDelay`` seconds between them
          and supports cancellation via asyncio.Event

    Both raise GoogleApiError for any response with status other than
    OK or ZERO_RESULTS and for any failure during the call.

    Example:
        >>> engine = HttpEngine.instance(PlacesDetailsRequest, PlacesDetailsResponse)
        >>> response = engine.query(PlacesDetailsRequest(key="...", placeId="ChIJ..."))
        >>> response = await engine.queryAsync(PlacesDetailsRequest(key="...", placeId="ChIJ..."))
    """

    defaultRetryCount: ClassVar[int] = ASYNC_RETRY_COUNT
    defaultRetryDelay: ClassVar[float] = ASYNC_RETRY_DELAY

    _instances: ClassVar[Dict[Tuple[type, type], "HttpEngine"]] = {}
    _instancesLock: ClassVar[RLock] = RLock()

    def __init__(
        self,
        responseType: Type[TResponse],
        *,
        retryCount: Optional[int] = None,
        retryDelay: Optional[float] = None,
    ) -> None:
        """Initialize engine.

        Args:
            responseType: Response class to build results of
            retryCount: Total number of attempts of queryAsync() (default: 6)
            retryDelay: Delay between attempts of queryAsync() in seconds (default: 0.35)
        """
        self.responseType = responseType
        self.retryCount = retryCount if retryCount is not None else self.defaultRetryCount
        self.retryDelay = retryDelay if retryDelay is not None else self.defaultRetryDelay
        if self.retryCount < 1:
            raise ValueError(f"retryCount must be positive, got {self.retryCount}")

    @classmethod
    def instance(cls, requestType: Type[TRequest], responseType: Type[TResponse]) -> "HttpEngine[TRequest, TResponse]":
        """Get shared engine for the given request and response types."""
        key = (requestType, responseType)
        engine = cls._instances.get(key)
        if engine is None:
            with cls._instancesLock:
                engine = cls._instances.get(key)
                if engine is None:
                    engine = cls(responseType)
                    cls._instances[key] = engine
                    logger.debug(f"Created engine for {requestType.__name__} -> {responseType.__name__}")
        return engine

    @classmethod
    def clearInstances(cls) -> None:
        with cls._instancesLock:
            cls._instances.clear()

    def query(self, request: TRequest) -> TResponse:
        """Send request and wait for the response.

        Args:
            request: Request to send

        Returns:
            Response with status OK or ZERO_RESULTS

        Raises:
            ValueError: If request is None
            GoogleApiError: On any other failure
        """
        if request is None:
            raise ValueError("request must be provided")

        try:
            httpResponse = self._processRequest(request)
            response = self._processResponse(httpResponse)
        except GoogleApiError:
            raise
        except Exception as e:
            raise self._wrapError(e) from e

        error = self._classify(response)
        if error is not None:
            logger.error(f"Request {response.raw_query_string} failed: {error}")
            raise error

        return response

    async def queryAsync(
        self,
        request: TRequest,
        cancelEvent: Optional[asyncio.Event] = None,
    ) -> Optional[TResponse]:
        """Send request asynchronously, dood!

        INVALID_REQUEST responses are retried (page tokens become valid only
        some time after they were issued). Cancellation is checked after
        each HTTP request completes: already sent request is not aborted,
        its result is discarded.

        Args:
            request: Request to send
            cancelEvent: Event signalling the call is not needed anymore

        Returns:
            Response with status OK or ZERO_RESULTS, None if cancelled

        Raises:
            ValueError: If request is None
            RetriesExhaustedError: If all attempts returned INVALID_REQUEST
            GoogleApiError: On any other failure
        """
        if request is None:
            raise ValueError("request must be provided")

        response: Optional[TResponse] = None
        for attempt in range(1, self.retryCount + 1):
            try:
                httpResponse = await self._processRequestAsync(request)
            except Exception as e:
                if self._isCancelled(cancelEvent):
                    logger.debug(f"Request cancelled, ignoring error: {type(e).__name__}#{e}")
                    return None
                raise self._wrapError(e) from e

            if self._isCancelled(cancelEvent):
                logger.debug(f"Request cancelled on attempt {attempt}, discarding response")
                return None

            try:
                response = self._processResponse(httpResponse)
            except GoogleApiError:
                raise
            except Exception as e:
                raise self._wrapError(e) from e

            if response.status == Status.INVALID_REQUEST:
                if attempt < self.retryCount:
                    logger.warning(
                        f"{Status.INVALID_REQUEST} on attempt {attempt}/{self.retryCount}, "
                        f"retrying in {self.retryDelay} seconds..."
                    )
                    await asyncio.sleep(self.retryDelay)
                continue

            error = self._classify(response)
            if error is not None:
                logger.error(f"Request {response.raw_query_string} failed: {error}")
                raise error

            return response

        logger.error(f"Request failed after {self.retryCount} attempts")
        raise RetriesExhaustedError(
            f"{Status.INVALID_REQUEST}: {response.error_message if response else None} "
            f"(retries exhausted after {self.retryCount} attempts)",
            attempts=self.retryCount,
            response=response,
        )

    @staticmethod
    def _isCancelled(cancelEvent: Optional[asyncio.Event]) -> bool:
        return cancelEvent is not None and cancelEvent.is_set()

    @staticmethod
    def _wrapError(e: Exception) -> GoogleApiError:
        """Normalize unexpected exception into GoogleApiError."""
        message = str(e) or type(e).__name__
        status = Status.HTTP_ERROR if isinstance(e, httpx.HTTPError) else None
        logger.error(f"Unexpected error during request: {type(e).__name__}#{e}")
        return GoogleApiError(message, status=status)

    @staticmethod
    def _classify(response: BaseResponse) -> Optional[GoogleApiError]:
        """Get error for a response with non-success status, None if it succeeded."""
        if response.status is not None and response.status.isSuccess():
            return None
        return GoogleApiError.fromResponse(response)

    def _buildHttpRequest(
        self,
        client: Union[httpx.Client, httpx.AsyncClient],
        request: TRequest,
    ) -> httpx.Request:
        """Build GET or POST request depending on request kind."""
        if request is None:
            raise ValueError("request must be provided")

        uri = request.getUri()

        if request.isQueryString:
            logger.debug(f"Making GET request to {uri}")
            return client.build_request("GET", uri)

        body = serializeRequest(request)
        logger.debug(f"Making POST request to {uri} with body {body!r}")
        return client.build_request(
            "POST",
            uri,
            content=body,
            headers={"Content-Type": CONTENT_TYPE_JSON_UTF8},
        )

    def _processRequest(self, request: TRequest) -> httpx.Response:
        client = HttpTransport.getClient()
        return client.send(self._buildHttpRequest(client, request))

    async def _processRequestAsync(self, request: TRequest) -> httpx.Response:
        client = HttpTransport.getAsyncClient()
        return await client.send(self._buildHttpRequest(client, request))

    def _processResponse(self, httpResponse: httpx.Response) -> TResponse:
        """Convert HTTP response into typed response with resolved status.

        Raises:
            json.JSONDecodeError: If successful JSON response has invalid body
            ValueError: If JSON body is not an object
        """
        if httpResponse is None:
            raise ValueError("httpResponse must be provided")

        response: TResponse
        if not httpResponse.is_success:
            # Body of failed request is not trusted to carry API status
            response = self.responseType()
            response.status = Status.HTTP_ERROR
            response.error_message = f"{httpResponse.status_code} {httpResponse.reason_phrase}"
            if not self.responseType.isStream:
                response.raw_json = httpResponse.text
            logger.warning(f"HTTP error: {response.error_message}")

        elif self.responseType.isStream:
            response = self.responseType()
            response.buffer = httpResponse.content  # type: ignore[attr-defined]
            response.status = Status.OK

        else:
            rawJson = httpResponse.text
            data: Any = json.loads(rawJson)
            response = self.responseType.fromDict(data)
            response.raw_json = rawJson
            if response.status is None:
                response.status = Status.OK

        response.raw_query_string = httpResponse.request.url.raw_path.decode("ascii")
        logger.debug(f"Response for {response.raw_query_string}: {response.status}")
        return response
