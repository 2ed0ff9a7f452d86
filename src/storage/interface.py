"""
Abstract filesystem contract shared by storage backends.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, BinaryIO

from src.models import ExistenceResult, FileMetadata, WriteOptions


class FilesystemAdapter(ABC):
    """
    Operations every storage backend exposes to filesystem consumers.

    Backends that cannot implement an operation raise
    ``UnsupportedOperationError`` instead of returning a sentinel.
    """

    @abstractmethod
    def write(self, path: str, contents: bytes, options: WriteOptions | None = None) -> FileMetadata:
        """Write a new file, replacing any existing one."""

    @abstractmethod
    def write_stream(
        self, path: str, stream: BinaryIO, options: WriteOptions | None = None
    ) -> FileMetadata:
        """Write a new file from a readable stream."""

    @abstractmethod
    def update(self, path: str, contents: bytes, options: WriteOptions | None = None) -> FileMetadata:
        """Update an existing file."""

    @abstractmethod
    def update_stream(
        self, path: str, stream: BinaryIO, options: WriteOptions | None = None
    ) -> FileMetadata:
        """Update an existing file from a readable stream."""

    @abstractmethod
    def rename(self, path: str, new_path: str) -> bool:
        """Move a file."""

    @abstractmethod
    def copy(self, path: str, new_path: str) -> bool:
        """Copy a file."""

    @abstractmethod
    def delete(self, path: str) -> bool:
        """Delete a file."""

    @abstractmethod
    def delete_dir(self, dirname: str) -> bool:
        """Delete a directory and everything in it."""

    @abstractmethod
    def create_dir(self, dirname: str, options: WriteOptions | None = None) -> FileMetadata:
        """Create a directory."""

    @abstractmethod
    def has(self, path: str) -> ExistenceResult:
        """Check whether a file exists."""

    @abstractmethod
    def read(self, path: str) -> FileMetadata:
        """Read a file into memory."""

    @abstractmethod
    def read_stream(self, path: str) -> FileMetadata:
        """Open a file as a stream."""

    @abstractmethod
    def list_contents(self, directory: str = "", recursive: bool = False) -> list[FileMetadata]:
        """List the contents of a directory."""

    @abstractmethod
    def get_metadata(self, path: str) -> dict[str, Any]:
        """Get all metadata of a file."""

    @abstractmethod
    def get_size(self, path: str) -> int:
        """Get the size of a file in bytes."""

    @abstractmethod
    def get_mimetype(self, path: str) -> str:
        """Get the MIME type of a file."""

    @abstractmethod
    def get_timestamp(self, path: str) -> datetime:
        """Get the last-modified time of a file."""

    @abstractmethod
    def get_visibility(self, path: str) -> str:
        """Get the visibility of a file."""

    @abstractmethod
    def set_visibility(self, path: str, visibility: str) -> bool:
        """Set the visibility of a file."""
