"""One remediation pass: list, secure every unprotected image, list again.

Securing is best effort per image. A failure is logged and recorded against
its image id, never retried within the run, and never cancels sibling calls.
Only the two list calls can abort the pass.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from image_guard.models import RemediationOutcome, RemediationReport
from image_guard.services.directory import ImageDirectoryError

logger = logging.getLogger(__name__)


class ImageDirectory(Protocol):
    async def list_unprotected_images(self) -> list[str]: ...

    async def secure_image(self, image_id: str) -> None: ...


class RemediationError(Exception):
    """Raised when a pass cannot complete."""


class ListingError(RemediationError):
    """The initial listing failed; nothing was remediated."""


class VerificationError(RemediationError):
    """The verification listing failed after remediation already ran."""

    def __init__(self, message: str, outcomes: list[RemediationOutcome]) -> None:
        super().__init__(message)
        self.outcomes = outcomes


class RemediationOrchestrator:
    def __init__(self, directory: ImageDirectory) -> None:
        self._directory = directory

    async def run(self) -> RemediationReport:
        try:
            unprotected = await self._directory.list_unprotected_images()
        except ImageDirectoryError as exc:
            raise ListingError(f"failed to get images id: {exc}") from exc

        logger.info("found %d unprotected images", len(unprotected))
        outcomes = await self.secure_all(unprotected)

        try:
            remaining = await self._directory.list_unprotected_images()
        except ImageDirectoryError as exc:
            raise VerificationError(f"failed to get images id: {exc}", outcomes) from exc

        if remaining:
            logger.warning("%d images left unprotected", len(remaining))
        return RemediationReport(outcomes=outcomes, remaining=remaining)

    async def secure_all(self, image_ids: list[str]) -> list[RemediationOutcome]:
        """Secure every image concurrently and wait for all of them."""

        return list(await asyncio.gather(*(self._secure_one(i) for i in image_ids)))

    async def _secure_one(self, image_id: str) -> RemediationOutcome:
        try:
            await self._directory.secure_image(image_id)
        except ImageDirectoryError as exc:
            logger.error("failed to secure image '%s': %s", image_id, exc)
            return RemediationOutcome.failure(image_id, exc)
        except Exception as exc:
            # A bad id from the listing fails only its own image.
            logger.exception("failed to secure image '%s': %s", image_id, exc)
            return RemediationOutcome.failure(image_id, exc)
        logger.info("successfully secured image '%s'", image_id)
        return RemediationOutcome.success(image_id)
