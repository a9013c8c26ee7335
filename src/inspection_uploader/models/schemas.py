"""Pydantic models for upload requests, outcomes and reports."""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class JourneyType(str, Enum):
    """Selects which identifier names the child folder."""

    PRE_INSPECTION = "PRE_INSPECTION"
    PRE_INSPECTION_PRDP = "PRE_INSPECTION_PRDP"


class BatchRequest(BaseModel):
    """Inbound batch envelope.

    Every field accepts any JSON value; the batch handler performs its own
    envelope checks so bad input is reported as a 400 with a readable message.
    """

    model_config = ConfigDict(populate_by_name=True)

    mobile_number: Any = Field(default=None, alias="mobileNumber")
    inspection_uuid: Any = Field(default=None, alias="inspectionUuid")
    prdp_uuid: Any = Field(default=None, alias="prdpUuid")
    journey_type: Any = Field(default=None, alias="journeyType")
    screenshots: Any = None


class ScreenshotItem(BaseModel):
    """A single image entry of a batch, after validation."""

    filename: str
    image: str
    extension: Any = None
    timestamp: Any = None


class SanitizedIdentity(BaseModel):
    """Key-safe tokens derived from caller identifiers."""

    model_config = ConfigDict(frozen=True)

    mobile_token: str
    inspection_token: str | None = None
    prdp_token: str | None = None


class ItemValidation(BaseModel):
    """Result of checking one batch entry."""

    valid: bool
    error: str | None = None


class UploadOutcome(BaseModel):
    """Per-item upload record, in input order."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    index: int
    filename: str
    status: Literal["success", "failed"]
    key: str | None = None
    size: int | None = None
    size_kb: str | None = Field(default=None, alias="sizeKB")
    error: str | None = None


class BatchReport(BaseModel):
    """Aggregate result of one batch."""

    model_config = ConfigDict(populate_by_name=True)

    successful: int = 0
    failed: int = 0
    total: int = 0
    details: list[UploadOutcome] = Field(default_factory=list)
    folder_path: str = Field(alias="folderPath")
    mobile_number: str = Field(alias="mobileNumber")
    inspection_uuid: str = Field(alias="inspectionUuid")
    prdp_uuid: str | None = Field(default=None, alias="prdpUuid")
    journey_type: Any = Field(default=None, alias="journeyType")
    duration: int = 0
    avg_time_per_file: str = Field(default="0.00", alias="avgTimePerFile")


class BatchResponse(BatchReport):
    """Batch report plus summary fields returned to the caller."""

    message: str
    bucket: str


class BatchResult(BaseModel):
    """HTTP status and JSON body produced by a handler."""

    status_code: int
    body: dict[str, Any]


class SingleUploadResponse(BaseModel):
    """Response for the single-image upload variants."""

    message: str
    key: str
    bucket: str
    size: int
    timestamp: Any = None


class HealthResponse(BaseModel):
    """Health check payload."""

    status: str
    message: str
    bucket: str
    region: str
    endpoint: str
    endpoints: list[str]
