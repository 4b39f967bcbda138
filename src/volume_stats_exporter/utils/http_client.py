import logging
from typing import Optional

import httpx

from ..core.config import Config, config

logger = logging.getLogger(__name__)


def get_async_http_client(settings: Optional[Config] = None) -> httpx.AsyncClient:
    """
    Returns a configured httpx.AsyncClient with:
    - A bounded timeout for connect and read.
    - Standard User-Agent header.
    - TLS verification unless the settings ask for insecure mode.
    """
    settings = settings or config
    request_timeout = settings.REQUEST_TIMEOUT_SECONDS
    verify_tls = not settings.INSECURE_SKIP_TLS_VERIFY

    if not verify_tls:
        logger.warning("Creating HTTP client with TLS certificate verification disabled.")

    # Note: no retry logic here, a failed request is simply retried on the next scrape.
    return httpx.AsyncClient(
        timeout=httpx.Timeout(request_timeout),
        headers={"User-Agent": settings.USER_AGENT},
        verify=verify_tls,
        follow_redirects=True,
    )
