from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class RemediationOutcome(BaseModel):
    """Result of securing a single image: secured, or failed with an error."""

    model_config = ConfigDict(frozen=True)

    image_id: str
    secured: bool
    error: str | None = None

    @classmethod
    def success(cls, image_id: str) -> RemediationOutcome:
        return cls(image_id=image_id, secured=True)

    @classmethod
    def failure(cls, image_id: str, error: Exception | str) -> RemediationOutcome:
        return cls(image_id=image_id, secured=False, error=str(error))


class RemediationReport(BaseModel):
    outcomes: list[RemediationOutcome] = []
    remaining: list[str] = []  # ids still unprotected after the verification list

    @property
    def secured(self) -> list[str]:
        return [o.image_id for o in self.outcomes if o.secured]

    @property
    def failed(self) -> list[RemediationOutcome]:
        return [o for o in self.outcomes if not o.secured]

    @property
    def remaining_count(self) -> int:
        return len(self.remaining)
