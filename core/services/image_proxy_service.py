# =============================================================================
# core/services/image_proxy_service.py - Remote Image Passthrough
# =============================================================================
# Fetches a remote image on behalf of the browser so item and logo images from
# third-party hosts can be shown without CORS or mixed-content problems.
#
# Stateless: every request opens its own httpx.AsyncClient. There is no retry
# and no server-side cache; caching is left to the browser/CDN through the
# rewritten Cache-Control header.
# =============================================================================

import logging
from typing import Any
from urllib.parse import urlparse

import httpx

from app.config import settings
from app.exceptions import ImageFetchError, InvalidImageUrlError

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = ("http", "https")
DEFAULT_CONTENT_TYPE = "application/octet-stream"


class ImageProxyService:
    """Fetch and relay remote images."""

    @staticmethod
    def validate_url(url: str | None) -> str:
        """
        Check that a URL may be proxied.

        Raises:
            InvalidImageUrlError: If the URL is missing, not absolute http(s),
                or its host is not on IMAGE_PROXY_ALLOWED_HOSTS (when set)
        """
        if not url or not url.strip():
            raise InvalidImageUrlError("", "url is required")

        url = url.strip()
        parsed = urlparse(url)
        if parsed.scheme.lower() not in ALLOWED_SCHEMES or not parsed.hostname:
            raise InvalidImageUrlError(url, "only absolute http(s) URLs can be proxied")

        allowed_hosts = settings.image_proxy_allowed_hosts_list
        if allowed_hosts and parsed.hostname.lower() not in allowed_hosts:
            raise InvalidImageUrlError(url, f"host {parsed.hostname} is not allowed")

        return url

    @staticmethod
    def cache_control() -> str:
        return f"public, max-age={settings.IMAGE_PROXY_CACHE_SECONDS}"

    @staticmethod
    def _client() -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=settings.IMAGE_PROXY_TIMEOUT_SECONDS,
            follow_redirects=True,
        )

    @staticmethod
    async def fetch(url: str | None) -> dict[str, Any]:
        """
        Fetch an image.

        Returns:
            Dict with content (bytes), content_type and cache_control

        Raises:
            InvalidImageUrlError: If the URL is rejected (400)
            ImageFetchError: With the upstream status for non-2xx responses,
                500 for transport failures and oversized bodies
        """
        url = ImageProxyService.validate_url(url)
        max_bytes = settings.IMAGE_PROXY_MAX_BYTES

        try:
            async with ImageProxyService._client() as client:
                async with client.stream("GET", url) as response:
                    if not response.is_success:
                        logger.warning(f"Upstream returned {response.status_code} for {url}")
                        raise ImageFetchError(
                            url,
                            f"upstream returned {response.status_code}",
                            status_code=response.status_code,
                        )

                    content_type = response.headers.get("content-type", DEFAULT_CONTENT_TYPE)
                    chunks = []
                    size = 0
                    async for chunk in response.aiter_bytes():
                        size += len(chunk)
                        if size > max_bytes:
                            raise ImageFetchError(url, f"image larger than {max_bytes} bytes")
                        chunks.append(chunk)

        except httpx.HTTPError as e:
            logger.error(f"Failed to fetch image {url}: {e}")
            raise ImageFetchError(url, str(e) or e.__class__.__name__)

        logger.debug(f"Proxied {size} bytes ({content_type}) from {url}")
        return {
            "content": b"".join(chunks),
            "content_type": content_type,
            "cache_control": ImageProxyService.cache_control(),
        }
