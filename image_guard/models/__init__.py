from .envelope import APIMessage, ImagesEnvelope, ImagesResult
from .image import Image, ImageListResult
from .remediation import RemediationOutcome, RemediationReport

__all__ = [
    "APIMessage",
    "ImagesEnvelope",
    "ImagesResult",
    "Image",
    "ImageListResult",
    "RemediationOutcome",
    "RemediationReport",
]
