"""Inspection screenshot uploader: batch image uploads into S3."""

__version__ = "1.0.0"
