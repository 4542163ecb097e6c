"""
Image Search Client for Deckforge

Talks to an image search service over HTTP and returns image descriptors.
Only descriptors (url, dimensions, license) are consumed; image bytes are
never downloaded.

API:
    POST {IMAGE_SEARCH_URL}/search   {"keywords": [...], "limit": 3}
    200 -> {"images": [{"url": ..., "width": ..., "height": ..., "license": ..., ...}]}
"""

import httpx
from typing import Any, Dict, List, Optional

from config.settings import get_settings
from deckforge.models.outline import ImageDescriptor
from deckforge.services.collaborators import ImageSearchProvider
from deckforge.utils.logger import setup_logger

logger = setup_logger(__name__)


class ImageSearchClient(ImageSearchProvider):
    """
    Client for an image search service.

    Usage:
        client = ImageSearchClient()
        images = await client.search(["fintech", "payments dashboard"], limit=3)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize image search client.

        Args:
            base_url: Override default image search service URL
            timeout: Override default request timeout (seconds)
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        settings = get_settings()
        self.base_url = (base_url or settings.IMAGE_SEARCH_URL).rstrip("/")
        self.timeout = timeout or settings.IMAGE_SEARCH_TIMEOUT
        self.enabled = settings.IMAGE_SEARCH_ENABLED
        self.transport = transport

        logger.info(
            "ImageSearchClient initialized",
            extra={
                "base_url": self.base_url,
                "timeout": self.timeout,
                "enabled": self.enabled
            }
        )

    def _client(self, timeout: Optional[float] = None) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=timeout or self.timeout, transport=self.transport)

    async def health_check(self) -> bool:
        """
        Check if the image search service is reachable.

        Returns:
            True if service is healthy, False otherwise
        """
        try:
            async with self._client(timeout=5.0) as client:
                response = await client.get(f"{self.base_url}/health")

                if response.status_code == 200:
                    logger.info("Image search health check: OK")
                    return True

                logger.warning(
                    f"Image search health check failed: {response.status_code}",
                    extra={"status_code": response.status_code}
                )
                return False
        except httpx.HTTPError as e:
            logger.error(
                f"Cannot reach image search service: {str(e)}",
                extra={"error": str(e), "url": self.base_url}
            )
            return False

    async def search(self, keywords: List[str], limit: int = 3) -> List[ImageDescriptor]:
        """
        Search for images matching keywords.

        Args:
            keywords: Search keywords, most important first
            limit: Maximum number of images to return

        Returns:
            Image descriptors, at most `limit`

        Raises:
            RuntimeError: If image search is disabled in settings
            httpx.HTTPError: If the request fails or returns a non-200 status
            ValueError: If the response body is not the expected shape
        """
        if not self.enabled:
            raise RuntimeError("Image search is disabled in settings")

        payload = {"keywords": keywords, "limit": limit}
        logger.debug(f"Searching images for {keywords}", extra={"limit": limit})

        async with self._client() as client:
            response = await client.post(f"{self.base_url}/search", json=payload)

            if response.status_code != 200:
                logger.error(
                    f"Image search error: {response.status_code}",
                    extra={"status_code": response.status_code, "keywords": keywords}
                )
                response.raise_for_status()
                # 1xx/3xx responses are not errors to httpx
                raise httpx.HTTPStatusError(
                    f"Unexpected status {response.status_code}",
                    request=response.request,
                    response=response
                )

            body = response.json()

        images = self._parse_images(body)
        logger.info(f"Image search returned {len(images)} image(s) for {keywords}")
        return images[:limit]

    @staticmethod
    def _parse_images(body: Any) -> List[ImageDescriptor]:
        if not isinstance(body, dict) or not isinstance(body.get("images"), list):
            raise ValueError("Image search response missing 'images' list")

        images: List[ImageDescriptor] = []
        for item in body["images"]:
            if not isinstance(item, dict) or not item.get("url"):
                logger.debug(f"Skipping image result without url: {item!r}")
                continue
            images.append(ImageDescriptor(**_descriptor_fields(item)))
        return images


def _descriptor_fields(item: Dict[str, Any]) -> Dict[str, Any]:
    fields = {"url": item["url"]}
    for key in ("width", "height", "license", "source"):
        if item.get(key) is not None:
            fields[key] = item[key]
    fields["alt"] = item.get("alt") or item.get("title") or ""
    return fields
