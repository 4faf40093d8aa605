"""
Google API HTTP Transport

Process-wide HTTP clients shared by all request engines.
"""

import asyncio
import logging
import weakref
from threading import RLock
from typing import Dict, Optional

import httpx

from .constants import CONTENT_TYPE_JSON, DEFAULT_TIMEOUT, VERSION

logger = logging.getLogger(__name__)


class HttpTransport:
    """
    Lazily built HTTP clients shared across the whole process, dood!

    Both clients are created on first use with:
        - gzip/deflate decoding (handled by httpx)
        - proxy configured at that moment (if any)
        - fixed timeout of 30 seconds
        - ``Accept: application/json`` default header

    Clients are safe to be used concurrently and are never rebuilt
    implicitly: calling setProxy() after a client was built has no effect on
    it until reset() is called. The only exception is the built async client:
    its pooled connections belong to the event loop they were opened in, so
    it is rebuilt when used from another (or after its own loop is closed)
    event loop. Clients passed to setAsyncClient() are never replaced.

    Usage:
        >>> HttpTransport.setProxy("http://proxy.local:3128")
        >>> client = HttpTransport.getClient()
        >>> client is HttpTransport.getClient()
        True
    """

    _lock = RLock()
    _client: Optional[httpx.Client] = None
    _asyncClient: Optional[httpx.AsyncClient] = None
    # Event loop the built async client is bound to, None for injected clients
    _asyncClientLoop: Optional[weakref.ReferenceType] = None
    _asyncClientBuilt: bool = False
    _proxy: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def _clientKwargs(cls) -> Dict:
        kwargs = {
            "timeout": httpx.Timeout(cls.timeout),
            "headers": {
                "Accept": CONTENT_TYPE_JSON,
                "User-Agent": f"GoogleApi-Python/{VERSION}",
            },
            "follow_redirects": True,
        }
        if cls._proxy:
            kwargs["proxy"] = cls._proxy
        return kwargs

    @classmethod
    def getProxy(cls) -> Optional[str]:
        return cls._proxy

    @classmethod
    def setProxy(cls, proxy: Optional[str]) -> None:
        """Set proxy URL used for clients built from now on."""
        with cls._lock:
            if cls._client is not None or cls._asyncClient is not None:
                logger.warning("Proxy changed after HTTP client was created, it will be applied only after reset()")
            cls._proxy = proxy

    @classmethod
    def getClient(cls) -> httpx.Client:
        """Get shared synchronous client, creating it on first use."""
        client = cls._client
        if client is None:
            with cls._lock:
                if cls._client is None:
                    cls._client = httpx.Client(**cls._clientKwargs())
                    logger.debug(f"Created shared HTTP client (proxy: {cls._proxy})")
                client = cls._client
        return client

    @staticmethod
    def _getRunningLoop() -> Optional[asyncio.AbstractEventLoop]:
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None

    @classmethod
    def _isAsyncClientUsable(cls, loop: Optional[asyncio.AbstractEventLoop]) -> bool:
        if cls._asyncClient is None:
            return False
        if not cls._asyncClientBuilt or loop is None:
            return True
        boundLoop = cls._asyncClientLoop() if cls._asyncClientLoop is not None else None
        return boundLoop is loop

    @classmethod
    def getAsyncClient(cls) -> httpx.AsyncClient:
        """Get shared asynchronous client for current event loop, creating it if needed."""
        loop = cls._getRunningLoop()
        client = cls._asyncClient
        if client is not None and cls._isAsyncClientUsable(loop):
            return client

        with cls._lock:
            if not cls._isAsyncClientUsable(loop):
                if cls._asyncClient is not None and cls._asyncClientLoop is None:
                    # Built outside of event loop, so no connections were opened yet
                    cls._asyncClientLoop = weakref.ref(loop)
                else:
                    if cls._asyncClient is not None:
                        # Connections of the old client can't be closed without its loop
                        logger.debug("Event loop changed, rebuilding shared async HTTP client")
                    cls._asyncClient = httpx.AsyncClient(**cls._clientKwargs())
                    cls._asyncClientBuilt = True
                    cls._asyncClientLoop = weakref.ref(loop) if loop is not None else None
                    logger.debug(f"Created shared async HTTP client (proxy: {cls._proxy})")
            return cls._asyncClient

    @classmethod
    def setClient(cls, client: Optional[httpx.Client]) -> None:
        """Override shared synchronous client."""
        with cls._lock:
            cls._client = client

    @classmethod
    def setAsyncClient(cls, client: Optional[httpx.AsyncClient]) -> None:
        """Override shared asynchronous client."""
        with cls._lock:
            cls._asyncClient = client
            cls._asyncClientBuilt = False
            cls._asyncClientLoop = None

    @classmethod
    def reset(cls) -> None:
        """Forget built clients, next call will create new ones.

        Clients are not closed, use close()/aclose() for that.
        """
        with cls._lock:
            cls._client = None
            cls._asyncClient = None
            cls._asyncClientBuilt = False
            cls._asyncClientLoop = None

    @classmethod
    def close(cls) -> None:
        """Close and drop shared synchronous client."""
        with cls._lock:
            client, cls._client = cls._client, None
        if client is not None and not client.is_closed:
            client.close()
            logger.debug("Shared HTTP client closed")

    @classmethod
    async def aclose(cls) -> None:
        """Close and drop shared asynchronous client."""
        with cls._lock:
            client, cls._asyncClient = cls._asyncClient, None
            cls._asyncClientBuilt = False
            cls._asyncClientLoop = None
        if client is not None and not client.is_closed:
            await client.aclose()
            logger.debug("Shared async HTTP client closed")
