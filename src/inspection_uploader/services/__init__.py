from .item_validator import validate_item
from .key_builder import (
    DEFAULT_EXTENSION,
    build_folder_path,
    build_item_key,
    build_timestamped_key,
    resolve_child_token,
    resolve_extension,
)
from .s3_uploader import CONTENT_TYPES, S3Uploader, resolve_content_type
from .sanitizer import sanitize_identity, sanitize_mobile_number, sanitize_uuid
from .utils import decode_base64_image, format_kb, now_ms

__all__ = [
    "validate_item",
    "DEFAULT_EXTENSION",
    "build_folder_path",
    "build_item_key",
    "build_timestamped_key",
    "resolve_child_token",
    "resolve_extension",
    "CONTENT_TYPES",
    "S3Uploader",
    "resolve_content_type",
    "sanitize_identity",
    "sanitize_mobile_number",
    "sanitize_uuid",
    "decode_base64_image",
    "format_kb",
    "now_ms",
]
