"""Minimal checks on a batch entry before decoding or uploading it."""

from typing import Any

from inspection_uploader.models.schemas import ItemValidation


def _non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def validate_item(item: Any, index: int) -> ItemValidation:
    """
    Validate a single screenshot entry. The first failing rule wins.

    Args:
        item: Raw entry from the screenshots array.
        index: Position of the entry in the batch.

    Returns:
        ItemValidation with the error message when invalid.
    """
    if not isinstance(item, dict):
        return ItemValidation(
            valid=False, error=f"Screenshot at index {index} is not an object"
        )

    if not _non_empty_string(item.get("filename")):
        return ItemValidation(
            valid=False, error=f"Screenshot at index {index} missing filename"
        )

    if not _non_empty_string(item.get("image")):
        return ItemValidation(
            valid=False, error=f"Screenshot at index {index} missing image data"
        )

    return ItemValidation(valid=True)
