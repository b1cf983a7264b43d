from __future__ import annotations

import asyncio
from typing import Any, Callable

import httpx
import pytest

from image_guard.config import get_settings
from image_guard.services.directory import ImageDirectoryClient

ACCOUNT_ID = "acct-123"
API_KEY = "secret-key"
BASE_URL = "https://api.test/client/v4"
IMAGES_PATH = f"/client/v4/accounts/{ACCOUNT_ID}/images/v1"


def envelope(
    images: list[dict[str, Any]] | None = None,
    *,
    success: bool = True,
    errors: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    return {
        "success": success,
        "errors": errors or [],
        "messages": [],
        "result": {"images": images or []} if success else None,
    }


def image(image_id: str, signed: bool) -> dict[str, Any]:
    return {"id": image_id, "filename": f"{image_id}.png", "requireSignedURLs": signed}


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_directory() -> Callable[[Callable[[httpx.Request], httpx.Response]], ImageDirectoryClient]:
    def _make(handler):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return ImageDirectoryClient(
            account_id=ACCOUNT_ID,
            api_key=API_KEY,
            base_url=BASE_URL,
            http_client=http_client,
        )

    return _make


class FakeDirectory:
    """In-memory directory with scripted listings and per-image outcomes.

    Each entry of ``listings`` is consumed by one list call; an exception entry
    is raised instead of returned.
    """

    def __init__(
        self,
        listings: list[list[str] | Exception],
        *,
        failures: dict[str, Exception] | None = None,
        delays: dict[str, float] | None = None,
    ) -> None:
        self._listings = list(listings)
        self.failures = failures or {}
        self.delays = delays or {}
        self.secure_calls: list[str] = []
        self.events: list[tuple[str, str]] = []

    async def list_unprotected_images(self) -> list[str]:
        self.events.append(("list", ""))
        item = self._listings.pop(0)
        if isinstance(item, Exception):
            raise item
        return list(item)

    async def secure_image(self, image_id: str) -> None:
        self.secure_calls.append(image_id)
        try:
            await asyncio.sleep(self.delays.get(image_id, 0))
            if image_id in self.failures:
                raise self.failures[image_id]
        finally:
            self.events.append(("finished", image_id))
