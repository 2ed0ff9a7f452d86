"""
Errors raised by filesystem adapters.

Remote failures are not wrapped: the Azure SDK raises
``azure.core.exceptions.AzureError`` subclasses and they reach the caller as-is.
"""


class StorageError(Exception):
    """Base class for adapter-level failures."""


class UnsupportedOperationError(StorageError):
    """The backend does not implement this operation."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Operation not supported by this adapter: {operation}")


class InvalidPathError(StorageError, ValueError):
    """A virtual path could not be split into container and blob name."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Invalid blob path {path!r}: {reason}")


class RollbackError(StorageError):
    """
    A rename failed after the destination was written and the destination
    could not be removed again. Both blobs may now exist.
    """

    def __init__(self, source: str, destination: str):
        self.source = source
        self.destination = destination
        super().__init__(
            f"Rename of {source!r} to {destination!r} failed and rollback did not complete; "
            "both blobs may exist"
        )
