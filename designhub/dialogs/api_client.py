"""Async HTTP clients used by the submission dialogs."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

import httpx

from designhub.config import settings

logger = logging.getLogger(__name__)


class APIError(Exception):
    """A failed remote call.

    Attributes:
        message: The server's ``error`` message, or None when the server gave none
        status_code: HTTP status, or None for network failures
    """

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message or "Request failed")
        self.message = message
        self.status_code = status_code


@dataclass
class ImageFile:
    """An image picked by the user, not uploaded yet."""
    filename: str
    content: bytes
    content_type: str = "image/png"


def _error_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return None


class APIClient:
    """Thin wrapper around ``httpx.AsyncClient`` for the DesignHub API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url or settings.API_BASE_URL
        self.token = token
        self.transport = transport
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    async def _request(
        self,
        method: str,
        url: str,
        *,
        field: Optional[str] = None,
        field_type: type = dict,
        **kwargs: Any,
    ) -> Any:
        """Send a request and return its JSON object, or ``field`` of it.

        A 2xx body that is not an object, or whose ``field`` is missing or of
        the wrong type, is reported as an ``APIError`` like any other failure.
        """
        async with httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._headers(),
            transport=self.transport,
            timeout=self.timeout,
        ) as client:
            try:
                response = await client.request(method, url, **kwargs)
            except httpx.HTTPError as e:
                raise APIError(status_code=None) from e

        if response.is_error:
            raise APIError(_error_message(response), response.status_code)

        try:
            body = response.json()
        except ValueError as e:
            raise APIError(status_code=response.status_code) from e

        if not isinstance(body, dict):
            logger.warning(f"Unexpected response body from {method} {url}: {type(body).__name__}")
            raise APIError(status_code=response.status_code)
        if field is None:
            return body

        value = body.get(field)
        if not isinstance(value, field_type):
            logger.warning(f"Response from {method} {url} has no valid \"{field}\"")
            raise APIError(status_code=response.status_code)
        return value


class ReviewAPI(APIClient):
    """Client for product reviews."""

    async def create_review(self, product_id: Any, rating: int, comment: str) -> Dict[str, Any]:
        """Submit a review and return the created review object."""
        return await self._request(
            "POST",
            f"/reviews/product/{product_id}",
            field="review",
            json={"rating": rating, "comment": comment},
        )


class CommunityAPI(APIClient):
    """Client for community posts and image uploads."""

    async def upload_images(self, images: Iterable[ImageFile]) -> List[str]:
        files = [("files", (image.filename, image.content, image.content_type)) for image in images]
        return await self._request(
            "POST",
            "/uploads/community-images",
            field="images",
            field_type=list,
            files=files,
        )

    async def share_work(
        self,
        title: str,
        description: str,
        tags: List[str],
        images: List[ImageFile],
    ) -> Dict[str, Any]:
        """Upload the images, then publish them as a showcase post."""
        image_urls = await self.upload_images(images)
        return await self._request(
            "POST",
            "/community",
            json={
                "title": title,
                "content": description,
                "category": "showcase",
                "tags": tags,
                "images": image_urls,
            },
        )
