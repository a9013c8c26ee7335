"""Batch upload handler: one request, many independently uploaded images."""

import logging
import time
from typing import Any

from inspection_uploader.config import MAX_BATCH_SIZE
from inspection_uploader.exceptions import BatchValidationError, UploadError
from inspection_uploader.models.schemas import (
    BatchRequest,
    BatchResponse,
    BatchResult,
    ScreenshotItem,
    UploadOutcome,
)
from inspection_uploader.services.item_validator import validate_item
from inspection_uploader.services.key_builder import (
    build_folder_path,
    build_item_key,
    resolve_extension,
)
from inspection_uploader.services.s3_uploader import S3Uploader, resolve_content_type
from inspection_uploader.services.sanitizer import sanitize_identity
from inspection_uploader.services.utils import decode_base64_image, format_kb

logger = logging.getLogger(__name__)


def _failed(index: int, filename: Any, error: str) -> UploadOutcome:
    name = filename if isinstance(filename, str) and filename else "unknown"
    return UploadOutcome(index=index, filename=name, status="failed", error=error)


def process_item(
    raw_item: Any,
    index: int,
    folder_path: str,
    s3_uploader: S3Uploader,
) -> UploadOutcome:
    """
    Validate, decode and upload one screenshot.

    Args:
        raw_item: Entry from the screenshots array, untrusted.
        index: Position in the batch.
        folder_path: Shared key prefix of the batch.
        s3_uploader: S3 uploader service.

    Returns:
        The outcome for this item. Errors never propagate out of this function.
    """
    raw_filename = raw_item.get("filename") if isinstance(raw_item, dict) else None

    validation = validate_item(raw_item, index)
    if not validation.valid:
        return _failed(index, raw_filename, validation.error)

    try:
        item = ScreenshotItem.model_validate(raw_item)

        try:
            body = decode_base64_image(item.image)
        except ValueError as e:
            return _failed(index, item.filename, str(e))

        extension = resolve_extension(item.extension)
        key = build_item_key(folder_path, item.filename, extension)
        s3_uploader.upload(key, body, resolve_content_type(extension))

        return UploadOutcome(
            index=index,
            filename=f"{item.filename}.{extension}",
            status="success",
            key=key,
            size=len(body),
            size_kb=format_kb(len(body)),
        )

    except UploadError as e:
        return _failed(index, raw_filename, e.message)
    except Exception as e:
        logger.error("Unexpected error on item %d: %s", index, e, exc_info=True)
        return _failed(index, raw_filename, str(e))


def _parse_envelope(payload: Any) -> BatchRequest:
    """Check the batch envelope before any per-item work."""
    if not isinstance(payload, dict):
        raise BatchValidationError("Missing or invalid screenshots array")

    request = BatchRequest.model_validate(payload)
    screenshots = request.screenshots

    if not isinstance(screenshots, list) or len(screenshots) == 0:
        raise BatchValidationError("Missing or invalid screenshots array")

    if len(screenshots) > MAX_BATCH_SIZE:
        raise BatchValidationError(
            f"Too many screenshots. Maximum {MAX_BATCH_SIZE} per batch, "
            f"received {len(screenshots)}"
        )

    return request


def process_batch(payload: Any, s3_uploader: S3Uploader) -> BatchResult:
    """
    Upload every screenshot of a batch under a shared folder.

    Envelope problems (bad screenshots array, oversized batch, missing
    inspection UUID) yield 400 before anything is uploaded. Otherwise every
    item is processed in input order and gets exactly one outcome; the batch
    answers 200 when at least one upload succeeded and 500 when none did.

    Args:
        payload: Parsed JSON body of the request.
        s3_uploader: S3 uploader service.

    Returns:
        BatchResult with the HTTP status code and response body.
    """
    try:
        request = _parse_envelope(payload)
        identity = sanitize_identity(
            request.mobile_number, request.inspection_uuid, request.prdp_uuid
        )
        folder_path = build_folder_path(identity, request.journey_type)
    except BatchValidationError as e:
        logger.warning("[BATCH] Rejected: %s", e)
        return BatchResult(status_code=400, body={"error": str(e)})

    screenshots: list = request.screenshots
    total = len(screenshots)
    logger.info("[BATCH] Processing %d screenshots into %s", total, folder_path)

    details: list[UploadOutcome] = []
    start = time.monotonic()

    for index, raw_item in enumerate(screenshots):
        outcome = process_item(raw_item, index, folder_path, s3_uploader)
        details.append(outcome)

        if outcome.status == "success":
            logger.info(
                "  [%d/%d] OK %s (%s KB)",
                index + 1,
                total,
                outcome.filename,
                outcome.size_kb,
            )
        else:
            logger.error(
                "  [%d/%d] FAILED %s: %s",
                index + 1,
                total,
                outcome.filename,
                outcome.error,
            )

    duration = int((time.monotonic() - start) * 1000)
    avg_time_per_file = f"{duration / total:.2f}" if total else "0.00"
    successful = sum(1 for outcome in details if outcome.status == "success")
    failed = total - successful

    logger.info(
        "[BATCH] Complete: %d/%d successful in %dms (%sms/file)",
        successful,
        total,
        duration,
        avg_time_per_file,
    )

    response = BatchResponse(
        message=f"Batch upload: {successful}/{total} successful",
        bucket=s3_uploader.bucket,
        successful=successful,
        failed=failed,
        total=total,
        details=details,
        folder_path=folder_path,
        mobile_number=identity.mobile_token,
        inspection_uuid=identity.inspection_token,
        prdp_uuid=identity.prdp_token,
        journey_type=request.journey_type,
        duration=duration,
        avg_time_per_file=avg_time_per_file,
    )

    return BatchResult(
        status_code=200 if successful > 0 else 500,
        body=response.model_dump(mode="json", by_alias=True, exclude_none=True),
    )
