"""Global FastAPI dependencies.

Provides the process-wide object storage adapter. Database sessions come
from database.get_db.
"""

import logging
from typing import Optional

from .domain.documents.ports.object_storage_port import ObjectStoragePort, StorageError
from .infrastructure.storage.s3_storage_adapter import S3StorageAdapter
from .infrastructure.storage.storage_config import load_storage_config

logger = logging.getLogger(__name__)

# Storage adapter singleton (initialized once)
_storage_adapter: Optional[ObjectStoragePort] = None


def get_storage() -> ObjectStoragePort:
    """Get or create the storage adapter singleton.

    Returns:
        ObjectStoragePort: Configured storage adapter

    Raises:
        StorageError: If storage configuration is invalid
    """
    global _storage_adapter

    if _storage_adapter is None:
        try:
            config = load_storage_config()
        except ValueError as e:
            logger.error(f"Invalid storage configuration: {e}")
            raise StorageError(f"Storage configuration error: {e}")

        _storage_adapter = S3StorageAdapter.from_config(config)
        logger.info("Initialized storage adapter")

    return _storage_adapter
