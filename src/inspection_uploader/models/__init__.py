"""Models package."""

from inspection_uploader.models.schemas import (
    BatchReport,
    BatchRequest,
    BatchResponse,
    BatchResult,
    HealthResponse,
    ItemValidation,
    JourneyType,
    SanitizedIdentity,
    ScreenshotItem,
    SingleUploadResponse,
    UploadOutcome,
)

__all__ = [
    "BatchReport",
    "BatchRequest",
    "BatchResponse",
    "BatchResult",
    "HealthResponse",
    "ItemValidation",
    "JourneyType",
    "SanitizedIdentity",
    "ScreenshotItem",
    "SingleUploadResponse",
    "UploadOutcome",
]
