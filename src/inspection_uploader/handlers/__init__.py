"""Handlers package."""

from inspection_uploader.handlers.batch_upload import process_batch, process_item
from inspection_uploader.handlers.single_upload import (
    upload_binary,
    upload_form,
    upload_json,
)

__all__ = [
    "process_batch",
    "process_item",
    "upload_binary",
    "upload_form",
    "upload_json",
]
