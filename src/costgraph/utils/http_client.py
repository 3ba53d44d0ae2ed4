import logging
from typing import Dict, Optional

import httpx

from ..core.config import config

logger = logging.getLogger(__name__)


def get_async_http_client(
    base_url: str = "",
    connect_timeout: float = None,
    read_timeout: float = None,
    verify: bool = True,
    headers: Optional[Dict[str, str]] = None,
) -> httpx.AsyncClient:
    """
    Returns a configured httpx.AsyncClient with:
    - Default timeouts (connect and read).
    - Standard User-Agent header, plus any extra headers given.
    """
    c_timeout = connect_timeout if connect_timeout is not None else config.DEFAULT_TIMEOUT_CONNECT
    r_timeout = read_timeout if read_timeout is not None else config.DEFAULT_TIMEOUT_READ

    timeout = httpx.Timeout(r_timeout, connect=c_timeout)

    all_headers = {"User-Agent": config.USER_AGENT}
    if headers:
        all_headers.update(headers)

    # No retries here: a failed call is reported once and the caller decides.
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=timeout,
        headers=all_headers,
        verify=verify,
        follow_redirects=True,
    )
