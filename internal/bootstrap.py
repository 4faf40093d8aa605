"""
Application-level initialization of the Google API library from configuration.
"""

import logging

from internal.config.manager import ConfigManager
from lib.google_api import HttpEngine, HttpTransport
from lib.logging_utils import initLogging

logger = logging.getLogger(__name__)


def initGoogleApi(configManager: ConfigManager) -> None:
    """Apply configuration to logging, shared transport and engine defaults, dood!

    Must be called before the first request: proxy of an already created
    HTTP client is not changed. Engines returned by HttpEngine.instance()
    earlier keep their retry settings, new instance() calls use the
    configured ones.
    """
    initLogging(configManager.getLoggingConfig())

    httpConfig = configManager.getHttpConfig()
    proxy = httpConfig.get("proxy")
    if proxy:
        HttpTransport.setProxy(proxy)
        logger.info(f"Using proxy {proxy} for Google API requests")

    apiConfig = configManager.getGoogleApiConfig()
    if "retry-count" in apiConfig:
        retryCount = int(apiConfig["retry-count"])
        if retryCount < 1:
            raise ValueError(f"google-api.retry-count must be positive, got {retryCount}")
        HttpEngine.defaultRetryCount = retryCount
    if "retry-delay" in apiConfig:
        HttpEngine.defaultRetryDelay = float(apiConfig["retry-delay"])
    # Cached engines captured previous defaults
    HttpEngine.clearInstances()

    logger.info(
        f"Google API initialized: retryCount={HttpEngine.defaultRetryCount}, "
        f"retryDelay={HttpEngine.defaultRetryDelay}"
    )
