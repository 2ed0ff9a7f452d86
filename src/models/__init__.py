"""
Pydantic models for adapter results and options.
"""

from src.models.existence import ExistenceResult, ExistenceStatus
from src.models.metadata import EntryType, FileMetadata, WriteOptions

__all__ = [
    # Metadata
    "EntryType",
    "FileMetadata",
    "WriteOptions",
    # Existence
    "ExistenceResult",
    "ExistenceStatus",
]
