"""Type definitions for configuration sections."""

import sys

if sys.version_info >= (3, 14):
    from typing import TypedDict
else:
    from typing_extensions import TypedDict


class HttpConfig(TypedDict, total=False, closed=False):
    """``[http]`` section.

    Attributes:
        proxy: Proxy URL for all requests, e.g. "http://proxy.local:3128"
    """

    proxy: str


# ``[google-api]`` section, keys contain dashes so functional syntax is used.
#   retry-count: Total attempts of async requests
#   retry-delay: Delay between attempts in seconds
GoogleApiConfig = TypedDict(
    "GoogleApiConfig",
    {"retry-count": int, "retry-delay": float},
    total=False,
)
