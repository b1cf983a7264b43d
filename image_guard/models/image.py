from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from image_guard.config import MAX_PAGE_SIZE


class Image(BaseModel):
    """Snapshot of one hosted image as returned by a list call."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    require_signed_urls: bool = Field(False, alias="requireSignedURLs")

    @field_validator("require_signed_urls", mode="before")
    @classmethod
    def _null_is_unsigned(cls, value: Any) -> Any:
        # Missing and null both mean the image is publicly fetchable.
        return False if value is None else value


class ImageListResult(BaseModel):
    """One page of images, in the order the service returned them."""

    model_config = ConfigDict(frozen=True)

    success: bool
    images: list[Image] = []

    @property
    def is_full_page(self) -> bool:
        return len(self.images) == MAX_PAGE_SIZE

    def unprotected_ids(self) -> list[str]:
        return [image.id for image in self.images if not image.require_signed_urls]
