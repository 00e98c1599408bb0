"""Unit tests for S3 Storage Adapter using moto

Covers write-once uploads, existence checks, public URL resolution and
bucket health against a mocked S3 bucket.
"""

import io

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

from intake_portal.domain.documents.ports.object_storage_port import StorageError, StoredFile
from intake_portal.infrastructure.storage import S3StorageAdapter, StorageConfig


TEST_BUCKET = "test-intake-bucket"
TEST_REGION = "us-east-1"
TEST_ACCESS_KEY = "test-access-key"
TEST_SECRET_KEY = "test-secret-key"


class TestS3AdapterInitialization:
    """Test S3 adapter initialization"""

    def test_adapter_creation_success(self):
        """Test successful adapter creation"""
        with mock_aws():
            adapter = S3StorageAdapter(
                endpoint_url=None,
                access_key=TEST_ACCESS_KEY,
                secret_key=TEST_SECRET_KEY,
                bucket_name=TEST_BUCKET,
                region=TEST_REGION,
            )

            assert adapter.bucket_name == TEST_BUCKET
            assert adapter.region == TEST_REGION
            assert adapter.s3_client is not None

    def test_from_config(self):
        """Test adapter creation from StorageConfig"""
        config = StorageConfig(
            endpoint_url="http://localhost:9000",
            access_key=TEST_ACCESS_KEY,
            secret_key=TEST_SECRET_KEY,
            bucket_name=TEST_BUCKET,
            region=TEST_REGION,
            public_base_url="https://cdn.example.com/",
        )

        adapter = S3StorageAdapter.from_config(config)

        assert adapter.endpoint_url == "http://localhost:9000"
        assert adapter.public_base_url == "https://cdn.example.com"


class TestS3AdapterStore:
    """Test file storage operations"""

    @pytest.mark.asyncio
    async def test_store_file_success(self, storage_adapter, s3_client):
        """Test storing a file writes the object with its content type"""
        content = b"%PDF-1.4\ninvoice\n"
        key = "commercialInvoice/acme_co__Invoice_1_1700000000000.pdf"

        stored = await storage_adapter.store_file(
            file=io.BytesIO(content),
            storage_key=key,
            mime_type="application/pdf",
        )

        assert isinstance(stored, StoredFile)
        assert stored.storage_key == key
        assert stored.size_bytes == len(content)
        assert stored.mime_type == "application/pdf"

        obj = s3_client.get_object(Bucket=TEST_BUCKET, Key=key)
        assert obj["Body"].read() == content
        assert obj["ContentType"] == "application/pdf"

    @pytest.mark.asyncio
    async def test_store_file_default_mime_type(self, storage_adapter, s3_client):
        """Test missing content type falls back to application/octet-stream"""
        stored = await storage_adapter.store_file(
            file=io.BytesIO(b"data"),
            storage_key="msds/acme_sheet_1.bin",
            mime_type=None,
        )

        assert stored.mime_type == "application/octet-stream"

    @pytest.mark.asyncio
    async def test_store_large_file_in_chunks(self, storage_adapter, s3_client):
        """Test content larger than one read chunk is stored whole"""
        content = b"x" * (8192 * 3 + 17)

        stored = await storage_adapter.store_file(
            file=io.BytesIO(content),
            storage_key="packingList/acme_list_1.txt",
            mime_type="text/plain",
        )

        assert stored.size_bytes == len(content)
        obj = s3_client.get_object(Bucket=TEST_BUCKET, Key="packingList/acme_list_1.txt")
        assert obj["Body"].read() == content

    @pytest.mark.asyncio
    async def test_store_empty_file_rejected(self, storage_adapter):
        """Test empty content raises ValueError"""
        with pytest.raises(ValueError, match="empty"):
            await storage_adapter.store_file(
                file=io.BytesIO(b""),
                storage_key="msds/empty_1.pdf",
                mime_type="application/pdf",
            )

    @pytest.mark.asyncio
    async def test_existing_key_not_overwritten(self, storage_adapter, s3_client):
        """Test objects are written once"""
        key = "tk10/acme_form_1.pdf"
        await storage_adapter.store_file(io.BytesIO(b"first"), key, "application/pdf")

        with pytest.raises(StorageError, match="already exists"):
            await storage_adapter.store_file(io.BytesIO(b"second"), key, "application/pdf")

        obj = s3_client.get_object(Bucket=TEST_BUCKET, Key=key)
        assert obj["Body"].read() == b"first"

    @pytest.mark.asyncio
    async def test_concurrent_writer_not_overwritten(self, storage_adapter, s3_client, monkeypatch):
        """Test an object written by another writer just before ours is kept"""
        key = "msds/acme_sheet_1700000000000.pdf"
        put_object = storage_adapter.s3_client.put_object

        def racing_put_object(**kwargs):
            # Another worker stores the same key first
            s3_client.put_object(Bucket=TEST_BUCKET, Key=key, Body=b"first")
            return put_object(**kwargs)

        monkeypatch.setattr(storage_adapter.s3_client, "put_object", racing_put_object)

        with pytest.raises(StorageError, match="already exists"):
            await storage_adapter.store_file(io.BytesIO(b"second"), key, "application/pdf")

        obj = s3_client.get_object(Bucket=TEST_BUCKET, Key=key)
        assert obj["Body"].read() == b"first"

    @pytest.mark.asyncio
    async def test_store_without_head_permission(self, storage_adapter, s3_client, monkeypatch):
        """Test uploads do not depend on HEAD, which answers 403 without s3:ListBucket"""
        def forbidden_head_object(**kwargs):
            raise ClientError({"Error": {"Code": "403", "Message": "Forbidden"}}, "HeadObject")

        monkeypatch.setattr(storage_adapter.s3_client, "head_object", forbidden_head_object)

        stored = await storage_adapter.store_file(io.BytesIO(b"data"), "tk11/acme_form_1.pdf", "application/pdf")

        assert stored.storage_key == "tk11/acme_form_1.pdf"
        obj = s3_client.get_object(Bucket=TEST_BUCKET, Key="tk11/acme_form_1.pdf")
        assert obj["Body"].read() == b"data"

    @pytest.mark.asyncio
    async def test_missing_bucket_raises_storage_error(self, s3_client):
        """Test backend errors surface as StorageError"""
        adapter = S3StorageAdapter(
            endpoint_url=None,
            access_key=TEST_ACCESS_KEY,
            secret_key=TEST_SECRET_KEY,
            bucket_name="no-such-bucket",
            region=TEST_REGION,
        )

        with pytest.raises(StorageError):
            await adapter.store_file(io.BytesIO(b"data"), "msds/a_1.pdf", "application/pdf")


class TestS3AdapterExists:
    """Test existence checks"""

    @pytest.mark.asyncio
    async def test_file_exists(self, storage_adapter, s3_client):
        s3_client.put_object(Bucket=TEST_BUCKET, Key="msds/present.pdf", Body=b"data")

        assert await storage_adapter.file_exists("msds/present.pdf") is True

    @pytest.mark.asyncio
    async def test_file_does_not_exist(self, storage_adapter):
        assert await storage_adapter.file_exists("msds/absent.pdf") is False


class TestS3AdapterPublicUrl:
    """Test public URL resolution"""

    def test_aws_virtual_hosted_url(self, storage_adapter):
        url = storage_adapter.get_public_url("msds/acme_sheet_1.pdf")
        assert url == f"https://{TEST_BUCKET}.s3.{TEST_REGION}.amazonaws.com/msds/acme_sheet_1.pdf"

    def test_custom_endpoint_path_style_url(self):
        with mock_aws():
            adapter = S3StorageAdapter(
                endpoint_url="http://localhost:9000/",
                access_key=TEST_ACCESS_KEY,
                secret_key=TEST_SECRET_KEY,
                bucket_name="customer-documents",
            )

            url = adapter.get_public_url("tk11/acme_form_1.pdf")

        assert url == "http://localhost:9000/customer-documents/tk11/acme_form_1.pdf"

    def test_configured_public_base_url(self):
        with mock_aws():
            adapter = S3StorageAdapter(
                endpoint_url="http://minio:9000",
                access_key=TEST_ACCESS_KEY,
                secret_key=TEST_SECRET_KEY,
                bucket_name="customer-documents",
                public_base_url="https://files.example.com/",
            )

            url = adapter.get_public_url("msds/a_1.pdf")

        assert url == "https://files.example.com/msds/a_1.pdf"

    def test_key_is_percent_encoded(self, storage_adapter):
        url = storage_adapter.get_public_url("msds/a b#1.pdf")
        assert url.endswith("/msds/a%20b%231.pdf")


class TestS3AdapterHealth:
    """Test bucket health check"""

    @pytest.mark.asyncio
    async def test_healthy_bucket(self, storage_adapter):
        await storage_adapter.check_health()

    @pytest.mark.asyncio
    async def test_missing_bucket(self, s3_client):
        adapter = S3StorageAdapter(
            endpoint_url=None,
            access_key=TEST_ACCESS_KEY,
            secret_key=TEST_SECRET_KEY,
            bucket_name="no-such-bucket",
            region=TEST_REGION,
        )

        with pytest.raises(StorageError, match="no-such-bucket"):
            await adapter.check_health()
