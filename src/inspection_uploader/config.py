"""Configuration management for the inspection uploader."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_path)

MAX_BATCH_SIZE = 100
MAX_BODY_BYTES = 50 * 1024 * 1024


def _env(name: str, default: str = "") -> str:
    return os.getenv(name, default)


@dataclass
class Config:
    """Server configuration loaded from environment variables."""

    # AWS
    aws_region: str = field(default_factory=lambda: _env("AWS_REGION"))
    aws_access_key_id: str = field(default_factory=lambda: _env("AWS_ACCESS_KEY_ID"))
    aws_secret_access_key: str = field(
        default_factory=lambda: _env("AWS_SECRET_ACCESS_KEY")
    )

    # S3
    bucket_name: str = field(default_factory=lambda: _env("S3_BUCKET_NAME"))
    s3_endpoint_url: str = field(default_factory=lambda: _env("S3_ENDPOINT_URL"))
    connect_timeout: float = field(
        default_factory=lambda: float(_env("S3_CONNECT_TIMEOUT", "10"))
    )
    read_timeout: float = field(
        default_factory=lambda: float(_env("S3_READ_TIMEOUT", "60"))
    )

    # HTTP server
    host: str = field(default_factory=lambda: _env("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(_env("PORT", "5000")))

    @property
    def endpoint(self) -> str:
        """S3 endpoint the client talks to."""
        if self.s3_endpoint_url:
            return self.s3_endpoint_url
        return f"https://s3.{self.aws_region}.amazonaws.com"

    def validate(self) -> None:
        """Validate required configuration."""
        required = {
            "AWS_REGION": self.aws_region,
            "AWS_ACCESS_KEY_ID": self.aws_access_key_id,
            "AWS_SECRET_ACCESS_KEY": self.aws_secret_access_key,
            "S3_BUCKET_NAME": self.bucket_name,
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}"
            )
