"""Single-image upload handlers (JSON base64, multipart form, raw binary)."""

import logging
from pathlib import PurePosixPath
from typing import Any

from inspection_uploader.exceptions import UploadError
from inspection_uploader.models.schemas import BatchResult, SingleUploadResponse
from inspection_uploader.services.key_builder import (
    build_timestamped_key,
    resolve_extension,
)
from inspection_uploader.services.s3_uploader import S3Uploader, resolve_content_type
from inspection_uploader.services.utils import decode_base64_image, format_kb, now_ms

logger = logging.getLogger(__name__)


def _upload(
    s3_uploader: S3Uploader,
    key: str,
    body: bytes,
    content_type: str,
    message: str,
    timestamp: Any,
    label: str,
) -> BatchResult:
    try:
        s3_uploader.upload(key, body, content_type)
    except UploadError as e:
        logger.error("[%s] Upload error for %s: %s", label, key, e.message)
        return BatchResult(
            status_code=500, body={"error": "Upload failed", "details": e.message}
        )

    logger.info("[%s] Uploaded %s (%s KB)", label, key, format_kb(len(body)))
    response = SingleUploadResponse(
        message=message,
        key=key,
        bucket=s3_uploader.bucket,
        size=len(body),
        timestamp=timestamp,
    )
    return BatchResult(status_code=200, body=response.model_dump(mode="json"))


def upload_json(payload: Any, s3_uploader: S3Uploader) -> BatchResult:
    """
    Upload one base64 image sent as JSON.

    Args:
        payload: Parsed body with filename, image and optional extension/timestamp.
        s3_uploader: S3 uploader service.
    """
    payload = payload if isinstance(payload, dict) else {}
    filename = payload.get("filename")
    image = payload.get("image")
    if not filename or not isinstance(image, str) or not image:
        return BatchResult(
            status_code=400, body={"error": "Missing filename or image data"}
        )

    try:
        body = decode_base64_image(image)
    except ValueError as e:
        return BatchResult(status_code=400, body={"error": str(e)})

    extension = resolve_extension(payload.get("extension"))
    key = build_timestamped_key(now_ms(), f"{filename}.{extension}")
    return _upload(
        s3_uploader,
        key,
        body,
        resolve_content_type(extension),
        "Upload successful (JSON → S3)",
        payload.get("timestamp"),
        "JSON",
    )


def upload_form(
    original_name: str | None,
    body: bytes | None,
    content_type: str | None,
    timestamp: Any,
    s3_uploader: S3Uploader,
) -> BatchResult:
    """Upload one image received as the "image" part of a multipart form."""
    if body is None or not original_name:
        return BatchResult(status_code=400, body={"error": "No file uploaded"})

    if not content_type:
        suffix = PurePosixPath(original_name).suffix.lstrip(".")
        content_type = resolve_content_type(resolve_extension(suffix))

    key = build_timestamped_key(now_ms(), original_name)
    return _upload(
        s3_uploader,
        key,
        body,
        content_type,
        "Upload successful (FormData → S3)",
        timestamp or now_ms(),
        "FormData",
    )


def upload_binary(
    filename: str | None,
    content_type: str | None,
    body: bytes,
    timestamp: Any,
    s3_uploader: S3Uploader,
) -> BatchResult:
    """Upload a raw request body, named by the X-Filename header."""
    if not filename:
        return BatchResult(
            status_code=400, body={"error": "Missing filename in headers"}
        )

    subtype = content_type.split("/", 1)[1] if content_type and "/" in content_type else ""
    extension = resolve_extension(subtype.split(";", 1)[0].strip())
    key = build_timestamped_key(now_ms(), f"{filename}.{extension}")
    return _upload(
        s3_uploader,
        key,
        body,
        content_type or resolve_content_type(extension),
        "Upload successful (Binary → S3)",
        timestamp,
        "Binary",
    )
