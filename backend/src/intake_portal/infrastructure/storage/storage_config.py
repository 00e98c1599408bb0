"""Storage configuration for S3-compatible object storage.

Builds the storage configuration from application settings and validates it.
Supports both MinIO (development) and AWS S3 (production) with the same
interface.
"""

from dataclasses import dataclass
from typing import Optional

from ...config import Settings, get_settings


@dataclass
class StorageConfig:
    """Configuration for S3-compatible object storage.

    Attributes:
        endpoint_url: S3 endpoint URL (e.g., 'http://localhost:9000' for MinIO,
                      None for AWS S3 which uses default regional endpoints)
        access_key: S3 access key ID
        secret_key: S3 secret access key
        bucket_name: Bucket holding customer documents
        region: AWS region (default: 'us-east-1')
        public_base_url: Base URL public links are built from; derived from
                         the endpoint or region when unset
    """
    endpoint_url: Optional[str]
    access_key: str
    secret_key: str
    bucket_name: str
    region: str = "us-east-1"
    public_base_url: Optional[str] = None


def load_storage_config(settings: Optional[Settings] = None) -> StorageConfig:
    """Load storage configuration from application settings.

    Settings:
        S3_ENDPOINT_URL: Endpoint URL (e.g. 'http://localhost:9000').
                         Empty or unset means AWS S3 regional endpoints.
        S3_ACCESS_KEY_ID / S3_SECRET_ACCESS_KEY: Credentials
        S3_BUCKET_NAME: Bucket name (default: 'customer-documents')
        S3_REGION: AWS region (default: 'us-east-1')
        S3_PUBLIC_BASE_URL: Optional CDN or public bucket URL

    Returns:
        StorageConfig: Validated storage configuration

    Raises:
        ValueError: If the configuration is incomplete or malformed
    """
    settings = settings or get_settings()

    config = StorageConfig(
        endpoint_url=settings.S3_ENDPOINT_URL or None,
        access_key=settings.S3_ACCESS_KEY_ID,
        secret_key=settings.S3_SECRET_ACCESS_KEY,
        bucket_name=settings.S3_BUCKET_NAME,
        region=settings.S3_REGION,
        public_base_url=settings.S3_PUBLIC_BASE_URL or None,
    )
    validate_storage_config(config)
    return config


def validate_storage_config(config: StorageConfig) -> None:
    """Validate storage configuration.

    Args:
        config: Storage configuration to validate

    Raises:
        ValueError: If configuration is invalid
    """
    if not config.access_key:
        raise ValueError("Storage access_key is required")

    if not config.secret_key:
        raise ValueError("Storage secret_key is required")

    if not config.bucket_name:
        raise ValueError("Storage bucket_name is required")

    for name, url in (("endpoint_url", config.endpoint_url), ("public_base_url", config.public_base_url)):
        if url and not url.startswith(("http://", "https://")):
            raise ValueError(
                f"Invalid {name}: {url}. "
                "Must start with http:// or https://"
            )

    if not config.endpoint_url and not config.region:
        raise ValueError("AWS region is required when using S3 (S3_ENDPOINT_URL not set)")
