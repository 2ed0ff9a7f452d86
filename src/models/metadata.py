"""
File and directory metadata records.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field

from src.models.base import RecordBaseModel


class EntryType(str, Enum):
    """Kind of filesystem entry."""

    FILE = "file"
    DIRECTORY = "directory"


class FileMetadata(RecordBaseModel):
    """
    Result of read, write, create and list operations.

    Exactly one of ``contents`` or ``stream`` is set for file reads/writes;
    listings and directory records carry neither.
    """

    type: EntryType = Field(..., description="file or directory")
    path: str = Field(..., description="Virtual path, <container>/<blob-name> for files")

    contents: bytes | None = Field(None, description="Buffered blob contents")
    stream: Any | None = Field(None, description="Readable stream handle")

    timestamp: datetime | None = Field(None, description="Last-modified time from the store")
    size: int | None = None
    etag: str | None = None

    @property
    def is_file(self) -> bool:
        return self.type == EntryType.FILE

    @property
    def is_directory(self) -> bool:
        return self.type == EntryType.DIRECTORY


class WriteOptions(RecordBaseModel):
    """Options accepted by write operations and directory creation."""

    content_type: str | None = Field(None, description="MIME type stored with the blob")
    metadata: dict[str, str] | None = Field(None, description="User metadata key/value pairs")
    overwrite: bool = Field(True, description="Replace an existing blob")
