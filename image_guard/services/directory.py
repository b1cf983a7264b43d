"""Cloudflare Images API wrapper.

Provides the two async calls the remediation pass needs: listing the first
page of images and switching a single image to require signed URLs.
Pagination is not supported; only ``page=1`` is ever requested.
"""
from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from image_guard.config import MAX_PAGE_SIZE
from image_guard.models import ImageListResult, ImagesEnvelope

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.cloudflare.com/client/v4"


class ImageDirectoryError(Exception):
    """Base class for every failed call to the Images API."""


class TransportError(ImageDirectoryError):
    """Raised when the request could not be sent or no response arrived."""


class ProtocolError(ImageDirectoryError):
    """Raised when the API answers with a status other than 200 OK."""

    def __init__(self, status: int) -> None:
        super().__init__(f"unexpected status code: {status}")
        self.status = status


class DecodeError(ImageDirectoryError):
    """Raised when a 200 response body is not a valid API envelope."""


class ServiceError(ImageDirectoryError):
    """Raised when the API envelope reports ``success: false``."""

    def __init__(self, operation: str, status: int, messages: list[str] | None = None) -> None:
        detail = f": {'; '.join(messages)}" if messages else ""
        super().__init__(f"{operation} response not successful{detail}")
        self.operation = operation
        self.status = status
        self.messages = messages or []


class ImageDirectoryClient:
    """Minimal async client for the Cloudflare Images v1 API."""

    def __init__(
        self,
        *,
        account_id: str,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 15.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not account_id or not api_key:
            raise ValueError("account_id and api_key are required")
        self._images_url = f"{base_url.rstrip('/')}/accounts/{account_id}/images/v1"
        self._headers = {"Authorization": f"Bearer {api_key}"}
        # Only clients created here are closed by aclose().
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> ImageDirectoryClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def list_images(self) -> ImageListResult:
        """Fetch the first page of images with their protection flags."""

        params = {"page": 1, "per_page": MAX_PAGE_SIZE}
        logger.debug("GET %s %s", self._images_url, params)
        resp = await self._send("GET", self._images_url, params=params)
        envelope = _check_response(resp, "list images")
        result = envelope.to_list_result()
        if result.is_full_page:
            logger.warning(
                "listed %d images, the page limit: there are probably more pages to go through",
                MAX_PAGE_SIZE,
            )
        return result

    async def list_unprotected_images(self) -> list[str]:
        """Return ids of images that do not require signed URLs, in service order."""

        result = await self.list_images()
        return result.unprotected_ids()

    async def secure_image(self, image_id: str) -> None:
        """Update an image to require signed URLs.

        Only the envelope's success flag is checked; the new flag value is not
        read back from the response.
        """

        if not image_id:
            raise ValueError("image_id must not be empty")
        url = f"{self._images_url}/{image_id}"
        logger.debug("PATCH %s", url)
        resp = await self._send(
            "PATCH",
            url,
            json={"requireSignedURLs": True},
            headers={"Content-Type": "application/json"},
        )
        _check_response(resp, "update image")

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            return await self._client.request(
                method, url, headers={**self._headers, **(headers or {})}, **kwargs
            )
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise TransportError(f"could not send request: {exc!r}") from exc


def _check_response(resp: httpx.Response, operation: str) -> ImagesEnvelope:
    """Classify a response into an envelope or one of the directory errors.

    A well-formed ``success: false`` envelope is a ServiceError whatever the
    status; any other non-200 response is a ProtocolError.
    """

    try:
        envelope = ImagesEnvelope.model_validate_json(resp.content)
    except ValidationError as exc:
        if resp.status_code != httpx.codes.OK:
            raise ProtocolError(resp.status_code) from exc
        raise DecodeError(f"could not decode {operation} response: {exc}") from exc

    if not envelope.success:
        raise ServiceError(operation, resp.status_code, envelope.error_messages())
    if resp.status_code != httpx.codes.OK:
        raise ProtocolError(resp.status_code)
    return envelope
