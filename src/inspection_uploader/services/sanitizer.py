"""Normalize untrusted identifiers into storage-key-safe tokens."""

import re
from typing import Any

from inspection_uploader.models.schemas import SanitizedIdentity

UNKNOWN_MOBILE = "unknown"

_MOBILE_DISALLOWED = re.compile(r"[^a-zA-Z0-9+]")
_UNDERSCORE_RUNS = re.compile(r"_+")
_UUID_DISALLOWED = re.compile(r"[^a-zA-Z0-9\-_ ]")


def sanitize_mobile_number(raw: Any) -> str:
    """
    Convert a mobile number into a token of [a-zA-Z0-9+_].

    Args:
        raw: Caller-supplied mobile number, possibly missing.

    Returns:
        The sanitized token, or "unknown" when nothing usable remains.
    """
    if not isinstance(raw, str):
        return UNKNOWN_MOBILE

    token = _MOBILE_DISALLOWED.sub("_", raw)
    token = _UNDERSCORE_RUNS.sub("_", token).strip("_")
    return token or UNKNOWN_MOBILE


def sanitize_uuid(raw: Any) -> str | None:
    """
    Strip a UUID-like value down to [a-zA-Z0-9-_ ] and trim it.

    Returns None for absent input. The result may be an empty string.
    """
    if not raw:
        return None
    return _UUID_DISALLOWED.sub("", str(raw)).strip()


def sanitize_identity(
    mobile_number: Any,
    inspection_uuid: Any,
    prdp_uuid: Any,
) -> SanitizedIdentity:
    """Sanitize all caller identifiers of a batch at once."""
    return SanitizedIdentity(
        mobile_token=sanitize_mobile_number(mobile_number),
        inspection_token=sanitize_uuid(inspection_uuid),
        prdp_token=sanitize_uuid(prdp_uuid),
    )
