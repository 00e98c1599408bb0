"""Shared pytest fixtures.

Provides:
- In-memory SQLite database session (tables created per test)
- Moto-backed S3 storage adapter with an existing bucket
- In-memory storage fake that can be told to fail specific uploads
- TestClient with get_db and get_storage overridden

Usage:
    def test_list_submissions(client):
        response = client.get("/api/v1/submissions")
        assert response.status_code == 200
"""

import os

# Set environment variables BEFORE any imports to ensure they take effect
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("S3_ENDPOINT_URL", "")
os.environ.setdefault("S3_ACCESS_KEY_ID", "test-access-key")
os.environ.setdefault("S3_SECRET_ACCESS_KEY", "test-secret-key")
os.environ.setdefault("S3_BUCKET_NAME", "test-intake-bucket")
os.environ.setdefault("S3_REGION", "us-east-1")
os.environ.setdefault("LOG_JSON", "false")

from typing import BinaryIO, Dict, Generator, Iterable, Optional

import boto3
import pytest
from fastapi.testclient import TestClient
from moto import mock_aws
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from intake_portal.database import get_db
from intake_portal.dependencies import get_storage
from intake_portal.domain.documents.ports.object_storage_port import (
    ObjectStoragePort,
    StorageError,
    StoredFile,
)
from intake_portal.infrastructure.storage import S3StorageAdapter
from intake_portal.main import app
from intake_portal.models import Base


TEST_BUCKET = "test-intake-bucket"
TEST_REGION = "us-east-1"
TEST_ACCESS_KEY = "test-access-key"
TEST_SECRET_KEY = "test-secret-key"

# Single shared connection so every session sees the same in-memory database
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


class InMemoryStorage(ObjectStoragePort):
    """Object storage fake keeping objects in a dict.

    Uploads whose key contains one of fail_on raise StorageError.
    """

    def __init__(self, fail_on: Iterable[str] = (), healthy: bool = True):
        self.objects: Dict[str, bytes] = {}
        self.fail_on = list(fail_on)
        self.healthy = healthy

    async def store_file(self, file: BinaryIO, storage_key: str, mime_type: Optional[str]) -> StoredFile:
        if any(marker in storage_key for marker in self.fail_on):
            raise StorageError(f"Simulated backend failure for {storage_key}")
        if storage_key in self.objects:
            raise StorageError(f"The resource already exists: {storage_key}")
        content = file.read()
        if not content:
            raise ValueError("Cannot store empty file")
        self.objects[storage_key] = content
        return StoredFile(
            storage_key=storage_key,
            size_bytes=len(content),
            mime_type=mime_type or "application/octet-stream",
        )

    async def file_exists(self, storage_key: str) -> bool:
        return storage_key in self.objects

    def get_public_url(self, storage_key: str) -> str:
        return f"https://files.example.com/{storage_key}"

    async def check_health(self) -> None:
        if not self.healthy:
            raise StorageError("Bucket unavailable: NoSuchBucket")


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test.

    Creates all tables before the test and drops them after.
    """
    Base.metadata.create_all(bind=test_engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def s3_client():
    """Mock S3 client with the test bucket created"""
    with mock_aws():
        client = boto3.client(
            "s3",
            region_name=TEST_REGION,
            aws_access_key_id=TEST_ACCESS_KEY,
            aws_secret_access_key=TEST_SECRET_KEY,
        )
        client.create_bucket(Bucket=TEST_BUCKET)

        yield client


@pytest.fixture
def storage_adapter(s3_client) -> S3StorageAdapter:
    """S3StorageAdapter pointed at the mocked bucket"""
    return S3StorageAdapter(
        endpoint_url=None,  # AWS S3 (moto mocks this)
        access_key=TEST_ACCESS_KEY,
        secret_key=TEST_SECRET_KEY,
        bucket_name=TEST_BUCKET,
        region=TEST_REGION,
    )


@pytest.fixture
def memory_storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def failing_storage():
    """Build an InMemoryStorage that fails uploads whose key contains a marker"""
    def _make(*fail_on: str) -> InMemoryStorage:
        return InMemoryStorage(fail_on=fail_on)
    return _make


@pytest.fixture
def client(db_session: Session, storage_adapter: S3StorageAdapter) -> Generator[TestClient, None, None]:
    """TestClient backed by the SQLite session and mocked S3 bucket"""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage_adapter

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def make_client(db_session: Session):
    """Build a TestClient around a given storage implementation"""
    clients = []

    def _make(storage: ObjectStoragePort) -> TestClient:
        def override_get_db():
            yield db_session

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_storage] = lambda: storage
        test_client = TestClient(app)
        clients.append(test_client)
        return test_client

    yield _make

    for test_client in clients:
        test_client.close()
    app.dependency_overrides.clear()
