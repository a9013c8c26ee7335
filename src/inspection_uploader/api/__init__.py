"""HTTP API package."""

from inspection_uploader.api.app import create_app

__all__ = ["create_app"]
