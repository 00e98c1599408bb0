"""S3 Storage Adapter - Implementation of ObjectStoragePort using boto3.

Provides S3-compatible storage operations for AWS S3, MinIO, and other
S3-compatible services: write-once uploads, existence checks and public URL
resolution.

Architecture: Hexagonal - Adapter implementation in infrastructure layer
"""

import logging
from io import BytesIO
from typing import BinaryIO, Optional
from urllib.parse import quote

import boto3
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from ...domain.documents.ports.object_storage_port import (
    ObjectStoragePort,
    StorageError,
    StoredFile,
)
from .storage_config import StorageConfig

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"

# Returned by a conditional put when the key already holds an object
EXISTING_OBJECT_CODES = ("PreconditionFailed", "412", "ConditionalRequestConflict")


class S3StorageAdapter(ObjectStoragePort):
    """S3-compatible storage adapter using boto3.

    Features:
    - Write-once uploads (existing keys are never overwritten)
    - Public URLs built from the endpoint, region or a configured base URL

    Example:
        storage = S3StorageAdapter.from_config(load_storage_config())

        with open('invoice.pdf', 'rb') as f:
            stored = await storage.store_file(
                file=f,
                storage_key='commercialInvoice/acme_invoice_1700000000000.pdf',
                mime_type='application/pdf',
            )
    """

    def __init__(
        self,
        endpoint_url: Optional[str],
        access_key: str,
        secret_key: str,
        bucket_name: str,
        region: str = "us-east-1",
        public_base_url: Optional[str] = None,
    ):
        """Initialize S3 storage adapter.

        Args:
            endpoint_url: S3 endpoint URL (None for AWS S3, URL for MinIO)
            access_key: S3 access key ID
            secret_key: S3 secret access key
            bucket_name: S3 bucket name
            region: AWS region (default: 'us-east-1')
            public_base_url: Base for public links (default: derived)

        Raises:
            StorageError: If S3 client initialization fails
        """
        try:
            self.s3_client = boto3.client(
                "s3",
                endpoint_url=endpoint_url,
                aws_access_key_id=access_key,
                aws_secret_access_key=secret_key,
                region_name=region,
            )
        except NoCredentialsError as e:
            raise StorageError(f"Invalid S3 credentials: {e}")
        except Exception as e:
            raise StorageError(f"Failed to initialize S3 client: {e}")

        self.endpoint_url = endpoint_url
        self.bucket_name = bucket_name
        self.region = region
        self.public_base_url = (public_base_url or self._default_public_base_url()).rstrip("/")

        logger.info(
            f"Initialized S3 storage adapter: bucket={bucket_name}, "
            f"endpoint={endpoint_url or 'AWS S3'}, region={region}"
        )

    @classmethod
    def from_config(cls, config: StorageConfig) -> "S3StorageAdapter":
        return cls(
            endpoint_url=config.endpoint_url,
            access_key=config.access_key,
            secret_key=config.secret_key,
            bucket_name=config.bucket_name,
            region=config.region,
            public_base_url=config.public_base_url,
        )

    async def store_file(
        self,
        file: BinaryIO,
        storage_key: str,
        mime_type: Optional[str],
    ) -> StoredFile:
        """Write a file to S3 under the given key.

        Implementation:
        1. Reads file in chunks (8KB)
        2. Uploads with the given content type, conditional on the key
           being unused (If-None-Match: *), so an existing object is never
           replaced even when two writers race on the same key

        Args:
            file: Binary file stream
            storage_key: Object key
            mime_type: MIME type (defaults to application/octet-stream)

        Returns:
            StoredFile: Metadata about stored file

        Raises:
            StorageError: If the key exists or the upload fails
            ValueError: If file is empty
        """
        chunks = []
        size_bytes = 0

        chunk_size = 8192  # 8KB chunks
        while True:
            chunk = file.read(chunk_size)
            if not chunk:
                break
            chunks.append(chunk)
            size_bytes += len(chunk)

        if size_bytes == 0:
            raise ValueError("Cannot store empty file")

        content_type = mime_type or DEFAULT_MIME_TYPE

        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=storage_key,
                Body=BytesIO(b"".join(chunks)),
                ContentType=content_type,
                IfNoneMatch="*",
            )
        except ClientError as e:
            error = e.response.get("Error", {})
            error_code = error.get("Code", "Unknown")
            if error_code in EXISTING_OBJECT_CODES:
                logger.warning(f"Refusing to overwrite existing object: storage_key={storage_key}")
                raise StorageError(f"The resource already exists: {storage_key}")
            message = error.get("Message") or str(e)
            logger.error(
                f"S3 upload failed: storage_key={storage_key}, "
                f"error={error_code}, message={message}"
            )
            raise StorageError(f"Failed to upload file: {error_code}: {message}")
        except BotoCoreError as e:
            logger.error(f"S3 upload failed: storage_key={storage_key}, message={e}")
            raise StorageError(f"Failed to upload file: {e}")

        logger.info(
            f"Uploaded file: storage_key={storage_key}, "
            f"size={size_bytes}, mime_type={content_type}"
        )

        return StoredFile(
            storage_key=storage_key,
            size_bytes=size_bytes,
            mime_type=content_type,
        )

    async def file_exists(self, storage_key: str) -> bool:
        """Check if a file exists in S3.

        Uses HEAD request (faster than GET).

        Args:
            storage_key: Storage key to check

        Returns:
            bool: True if exists, False otherwise

        Raises:
            StorageError: If the check fails for any reason other than 404
        """
        try:
            self.s3_client.head_object(
                Bucket=self.bucket_name,
                Key=storage_key,
            )
            return True
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code in ("404", "NoSuchKey", "NotFound"):
                return False
            logger.warning(
                f"Error checking file existence: storage_key={storage_key}, "
                f"error={error_code}"
            )
            raise StorageError(f"Failed to check object: {error_code}")
        except BotoCoreError as e:
            raise StorageError(f"Failed to check object: {e}")

    def get_public_url(self, storage_key: str) -> str:
        """Build the public URL of an object.

        Example:
            >>> adapter.get_public_url('msds/acme_sheet_1700000000000.pdf')
            'http://localhost:9000/customer-documents/msds/acme_sheet_1700000000000.pdf'
        """
        return f"{self.public_base_url}/{quote(storage_key, safe='/')}"

    async def check_health(self) -> None:
        try:
            self.s3_client.head_bucket(Bucket=self.bucket_name)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            raise StorageError(f"Bucket {self.bucket_name} unavailable: {error_code}")
        except BotoCoreError as e:
            raise StorageError(f"Bucket {self.bucket_name} unavailable: {e}")

    def _default_public_base_url(self) -> str:
        if self.endpoint_url:
            # Path-style URL for MinIO and other S3-compatible endpoints
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket_name}"
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com"
