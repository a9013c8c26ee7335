"""Dependency injection container for the application."""

import boto3
from botocore.config import Config as BotoConfig
from dependency_injector import providers
from dependency_injector.containers import DeclarativeContainer

from inspection_uploader.config import Config
from inspection_uploader.infrastructure.s3_client import S3Client


def _create_session(config: Config) -> boto3.Session:
    """Create boto3 session from the configured static credentials."""
    return boto3.Session(
        aws_access_key_id=config.aws_access_key_id,
        aws_secret_access_key=config.aws_secret_access_key,
        region_name=config.aws_region,
    )


def _create_s3_boto_client(session: boto3.Session, config: Config):
    """Create the S3 client. A single attempt per call, no retries."""
    boto_config = BotoConfig(
        connect_timeout=config.connect_timeout,
        read_timeout=config.read_timeout,
        retries={"max_attempts": 1, "mode": "standard"},
    )
    return session.client(
        "s3",
        endpoint_url=config.s3_endpoint_url or None,
        config=boto_config,
    )


def _create_s3_uploader(s3_client: S3Client, config: Config):
    """Factory for S3Uploader to avoid circular import."""
    from inspection_uploader.services.s3_uploader import S3Uploader

    return S3Uploader(s3_client, bucket=config.bucket_name)


class DependenciesContainer(DeclarativeContainer):
    """DI container for the application."""

    config = providers.ThreadSafeSingleton(Config)

    session = providers.ThreadSafeSingleton(_create_session, config=config)

    # S3 dependency chain
    s3_boto_client = providers.ThreadSafeSingleton(
        _create_s3_boto_client,
        session=session,
        config=config,
    )

    s3_client = providers.ThreadSafeSingleton(
        S3Client,
        client=s3_boto_client,
    )

    s3_uploader = providers.ThreadSafeSingleton(
        _create_s3_uploader,
        s3_client=s3_client,
        config=config,
    )
