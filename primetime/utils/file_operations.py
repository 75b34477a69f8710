"""
Feed download utilities

This module performs the single blocking download of the XMLTV feed.
"""
import logging

import httpx


logger = logging.getLogger(__name__)


class FeedFetchError(Exception):
    """Raised when the feed cannot be downloaded"""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def fetch_feed(
    url: str,
    *,
    timeout: float | None = 30.0,
    check_status: bool = True,
    client: httpx.Client | None = None
) -> bytes:
    """
    Download the feed with a single GET request

    No retries are attempted: any transport error aborts the download.

    Args:
        url: URL to download from
        timeout: HTTP timeout in seconds (0/None disables timeout)
        check_status: Treat non-2xx responses as a fetch failure
        client: Optional preconfigured client (used as-is, not closed)

    Returns:
        Raw response body

    Raises:
        FeedFetchError: If the request fails or, with check_status, the server
            answers with a non-2xx status
    """
    effective_timeout = timeout if timeout and timeout > 0 else None
    logger.info(f"Downloading feed from {url}...")

    try:
        if client is not None:
            response = client.get(url)
        else:
            with httpx.Client(timeout=effective_timeout, follow_redirects=True) as owned_client:
                response = owned_client.get(url)
    except httpx.HTTPError as e:
        logger.error(f"Feed download failed ({type(e).__name__}): {e}")
        raise FeedFetchError(f"Failed to download {url}: {e}") from e

    if check_status and not response.is_success:
        logger.error(f"HTTP {response.status_code} while downloading {url}")
        raise FeedFetchError(
            f"Server answered HTTP {response.status_code} for {url}",
            status_code=response.status_code,
        )

    content = response.content
    logger.info(f"Downloaded {len(content) / 1024:.1f} KB (HTTP {response.status_code})")
    return content
