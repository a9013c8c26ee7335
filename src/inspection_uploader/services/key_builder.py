"""Build S3 folder paths and object keys for uploads."""

import logging
from typing import Any

from inspection_uploader.exceptions import MissingInspectionUuidError
from inspection_uploader.models.schemas import JourneyType, SanitizedIdentity

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = "jpg"


def resolve_extension(extension: Any) -> str:
    """Return the extension to use, defaulting to jpg."""
    return str(extension) if extension else DEFAULT_EXTENSION


def resolve_child_token(identity: SanitizedIdentity, journey_type: Any) -> str:
    """
    Pick the token naming the child folder.

    The PRDP journey uses the PRDP UUID when one was supplied; every other
    case falls back to the inspection UUID.
    """
    if journey_type == JourneyType.PRE_INSPECTION_PRDP.value and identity.prdp_token:
        return identity.prdp_token
    return identity.inspection_token or ""


def build_folder_path(identity: SanitizedIdentity, journey_type: Any) -> str:
    """
    Build the shared folder path for a batch.

    Args:
        identity: Sanitized caller identifiers.
        journey_type: Raw journey type from the request.

    Returns:
        "{mobile}/{inspection}/{child}" without a trailing slash.

    Raises:
        MissingInspectionUuidError: If the inspection token is empty.
    """
    if not identity.inspection_token:
        raise MissingInspectionUuidError()

    child_token = resolve_child_token(identity, journey_type)
    folder_path = "/".join(
        [identity.mobile_token, identity.inspection_token, child_token]
    )
    logger.debug("Folder path: %s", folder_path)
    return folder_path


def build_item_key(folder_path: str, filename: str, extension: Any = None) -> str:
    """
    Build the object key of one item.

    Duplicate filenames within a folder map to the same key, so the last
    upload wins.
    """
    return f"{folder_path}/{filename}.{resolve_extension(extension)}"


def build_timestamped_key(timestamp_ms: int, name: str) -> str:
    """Build a bucket-root key for the single-image upload variants."""
    return f"{timestamp_ms}-{name}"
