"""S3 client wrapper for AWS operations."""

import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


class S3Client:
    """Handles S3 operations."""

    def __init__(self, client: Any):
        """
        Initialize S3 client wrapper.

        Args:
            client: boto3 S3 client instance.
        """
        self._client = client

    def put_object(
        self,
        bucket: str,
        key: str,
        body: bytes,
        content_type: str | None = None,
        metadata: dict | None = None,
    ) -> None:
        """
        Upload bytes to S3 in a single request.

        Args:
            bucket: S3 bucket name.
            key: S3 object key.
            body: Object payload.
            content_type: Optional content type.
            metadata: Optional metadata dict.

        Raises:
            ClientError: If S3 rejects the request.
            BotoCoreError: On transport or credential errors.
        """
        extra_args: dict[str, Any] = {}
        if content_type:
            extra_args["ContentType"] = content_type
        if metadata:
            extra_args["Metadata"] = metadata

        try:
            self._client.put_object(Bucket=bucket, Key=key, Body=body, **extra_args)
            logger.debug("Uploaded: s3://%s/%s (%d bytes)", bucket, key, len(body))
        except (ClientError, BotoCoreError) as e:
            logger.error("Failed to upload s3://%s/%s: %s", bucket, key, e)
            raise
