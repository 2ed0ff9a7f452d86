"""
Azure Blob Storage filesystem adapter.
"""

from src.storage.adapter import BlobPathAdapter, build_connection_string, get_adapter
from src.storage.errors import (
    InvalidPathError,
    RollbackError,
    StorageError,
    UnsupportedOperationError,
)
from src.storage.interface import FilesystemAdapter
from src.storage.paths import BlobPaths

__all__ = [
    "BlobPathAdapter",
    "build_connection_string",
    "get_adapter",
    "FilesystemAdapter",
    "BlobPaths",
    "StorageError",
    "UnsupportedOperationError",
    "InvalidPathError",
    "RollbackError",
]
