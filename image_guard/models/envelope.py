"""Wire shapes of the Cloudflare v4 response envelope."""
from __future__ import annotations

from pydantic import BaseModel

from .image import Image, ImageListResult


class APIMessage(BaseModel):
    code: int | None = None
    message: str = ""


class ImagesResult(BaseModel):
    images: list[Image] | None = None


class ImagesEnvelope(BaseModel):
    """``{"success": bool, "errors": [...], "result": {"images": [...]}}``.

    ``result`` is null on failed calls and carries a single image (no
    ``images`` key) on update calls.
    """

    success: bool
    errors: list[APIMessage] | None = None
    result: ImagesResult | None = None

    def error_messages(self) -> list[str]:
        return [err.message for err in self.errors or [] if err.message]

    def to_list_result(self) -> ImageListResult:
        images = self.result.images if self.result and self.result.images else []
        return ImageListResult(success=self.success, images=images)
