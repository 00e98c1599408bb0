"""Object Storage Port - Domain interface for S3-compatible storage.

This port defines the contract for writing customer documents to object
storage and resolving them to public links. Adapters implement it for S3,
MinIO, or other storage backends.

Architecture: Hexagonal - Port interface in domain layer
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO, Optional


class StorageError(Exception):
    """Raised when the storage backend rejects or fails an operation.

    The message carries the backend's own description of the failure.
    """
    pass


@dataclass
class StoredFile:
    """Metadata for a file written to object storage.

    Attributes:
        storage_key: Key in the bucket (format: {category}/{filename})
        size_bytes: File size in bytes
        mime_type: Content type the object was stored with
    """
    storage_key: str
    size_bytes: int
    mime_type: str


class ObjectStoragePort(ABC):
    """Port interface for S3-compatible object storage operations.

    Objects are written once and never overwritten; there is no update or
    delete path. Reads happen through public URLs, outside the application.

    Example Usage:
        storage = S3StorageAdapter(...)

        with open('invoice.pdf', 'rb') as f:
            stored = await storage.store_file(
                file=f,
                storage_key='commercialInvoice/acme_invoice_1700000000000.pdf',
                mime_type='application/pdf',
            )

        url = storage.get_public_url(stored.storage_key)
    """

    @abstractmethod
    async def store_file(
        self,
        file: BinaryIO,
        storage_key: str,
        mime_type: Optional[str],
    ) -> StoredFile:
        """Write a file under the given key.

        Args:
            file: Binary file stream to store (must be readable)
            storage_key: Full object key, including the category folder
            mime_type: Content type to store with the object

        Returns:
            StoredFile: Metadata about the stored object

        Raises:
            StorageError: If the key is taken, the upload fails or storage
                is unavailable
        """
        pass

    @abstractmethod
    async def file_exists(self, storage_key: str) -> bool:
        """Check if an object exists under the key (HEAD request)."""
        pass

    @abstractmethod
    def get_public_url(self, storage_key: str) -> str:
        """Resolve a storage key to its public URL.

        Pure string construction; does not contact the backend.
        """
        pass

    @abstractmethod
    async def check_health(self) -> None:
        """Verify the bucket is reachable.

        Raises:
            StorageError: If the bucket cannot be reached
        """
        pass
