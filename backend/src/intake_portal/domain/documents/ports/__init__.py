"""Ports (interfaces) for the documents domain"""

from .object_storage_port import ObjectStoragePort, StoredFile, StorageError

__all__ = ["ObjectStoragePort", "StoredFile", "StorageError"]
