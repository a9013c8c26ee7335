"""Infrastructure package."""

from inspection_uploader.infrastructure.dependency_injection import DependenciesContainer
from inspection_uploader.infrastructure.s3_client import S3Client

__all__ = [
    "DependenciesContainer",
    "S3Client",
]
