"""S3 upload service for inspection images."""

import logging

from inspection_uploader.exceptions import UploadError
from inspection_uploader.infrastructure.s3_client import S3Client

logger = logging.getLogger(__name__)

CONTENT_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
}


def resolve_content_type(extension: str) -> str:
    """
    Map a file extension to an image content type.

    Unknown extensions become "image/{extension}".
    """
    return CONTENT_TYPES.get(extension.lower(), f"image/{extension}")


class S3Uploader:
    """Uploads image payloads to the configured bucket."""

    def __init__(self, s3_client: S3Client, bucket: str):
        """
        Initialize S3 uploader.

        Args:
            s3_client: S3Client instance.
            bucket: Destination bucket name.
        """
        self._s3_client = s3_client
        self._bucket = bucket

    @property
    def bucket(self) -> str:
        """Get the destination bucket name."""
        return self._bucket

    def upload(self, key: str, body: bytes, content_type: str) -> None:
        """
        Put one object into the bucket. Never retried.

        Args:
            key: Object key.
            body: Image bytes.
            content_type: MIME type stored with the object.

        Raises:
            UploadError: If the backend call fails for any reason.
        """
        try:
            self._s3_client.put_object(
                bucket=self._bucket,
                key=key,
                body=body,
                content_type=content_type,
            )
        except Exception as e:
            raise UploadError(key, str(e)) from e
