"""
Azure Blob Storage filesystem adapter.

Translates filesystem operations on ``<container>/<blob-name>`` paths into
``azure-storage-blob`` calls. Every operation is a synchronous round trip;
retries and timeouts belong to the SDK pipeline.
"""

from datetime import datetime
from functools import lru_cache
from typing import Any, BinaryIO

import structlog
from azure.core.exceptions import AzureError, ResourceNotFoundError
from azure.storage.blob import BlobServiceClient, ContentSettings

from src.config import get_settings
from src.models import (
    EntryType,
    ExistenceResult,
    ExistenceStatus,
    FileMetadata,
    WriteOptions,
)
from src.storage.errors import RollbackError, UnsupportedOperationError
from src.storage.interface import FilesystemAdapter
from src.storage.paths import BlobPaths

logger = structlog.get_logger(__name__)

PROTOCOLS = ("http", "https")


def build_connection_string(
    account_name: str,
    account_key: str,
    protocol: str = "https",
    blob_endpoint: str | None = None,
) -> str:
    """
    Build an Azure Storage connection string from account credentials.

    Args:
        account_name: Storage account name
        account_key: Storage account key
        protocol: "http" or "https"
        blob_endpoint: Optional explicit blob endpoint (e.g. Azurite)

    Returns:
        Connection string accepted by ``BlobServiceClient.from_connection_string``
    """
    if protocol not in PROTOCOLS:
        raise ValueError(f"protocol must be one of {PROTOCOLS}, got {protocol!r}")

    parts = [
        f"DefaultEndpointsProtocol={protocol}",
        f"AccountName={account_name}",
        f"AccountKey={account_key}",
    ]
    if blob_endpoint:
        parts.append(f"BlobEndpoint={blob_endpoint}")
    return ";".join(parts)


class BlobPathAdapter(FilesystemAdapter):
    """
    Filesystem adapter over Azure Blob Storage.

    The first path segment selects the container, the rest is the blob name.
    rename() and copy() are read-then-write and are not atomic: a failure
    part way through can leave the destination written next to the source.
    """

    def __init__(
        self,
        account_name: str | None = None,
        account_key: str | None = None,
        protocol: str = "https",
        *,
        blob_endpoint: str | None = None,
        service_client: BlobServiceClient | None = None,
    ):
        if service_client is not None:
            self.service_client = service_client
        elif account_name and account_key:
            connection_string = build_connection_string(
                account_name, account_key, protocol, blob_endpoint
            )
            self.service_client = BlobServiceClient.from_connection_string(connection_string)
        else:
            raise ValueError("Either account_name and account_key or service_client must be provided")

    @classmethod
    def from_service_client(cls, service_client: BlobServiceClient) -> "BlobPathAdapter":
        """Wrap an already constructed service client."""
        return cls(service_client=service_client)

    @classmethod
    def from_connection_string(cls, connection_string: str) -> "BlobPathAdapter":
        """Create an adapter from a full connection string."""
        return cls.from_service_client(BlobServiceClient.from_connection_string(connection_string))

    @classmethod
    def from_account_url(cls, account_url: str) -> "BlobPathAdapter":
        """Create an adapter authenticated with Managed Identity."""
        from azure.identity import DefaultAzureCredential

        credential = DefaultAzureCredential()
        return cls.from_service_client(BlobServiceClient(account_url, credential=credential))

    def _blob_client(self, path: str):
        container, blob_name = BlobPaths.split(path)
        return self.service_client.get_blob_client(container=container, blob=blob_name)

    # Writing

    def _upload(self, path: str, data: bytes | BinaryIO, options: WriteOptions | None) -> dict:
        options = options or WriteOptions()
        blob_client = self._blob_client(path)

        content_settings = None
        if options.content_type:
            content_settings = ContentSettings(content_type=options.content_type)

        response = blob_client.upload_blob(
            data,
            overwrite=options.overwrite,
            content_settings=content_settings,
            metadata=options.metadata,
        )
        logger.debug(
            "Blob written",
            container=blob_client.container_name,
            blob=blob_client.blob_name,
        )
        return response

    def write(self, path: str, contents: bytes, options: WriteOptions | None = None) -> FileMetadata:
        """
        Create or overwrite a blob.

        Args:
            path: Virtual path like "docs/report.txt"
            contents: Blob content
            options: Content type, metadata and overwrite flag

        Returns:
            File record with the contents and the store's last-modified time

        Raises:
            ResourceNotFoundError: If the container does not exist
        """
        response = self._upload(path, contents, options)
        return FileMetadata(
            type=EntryType.FILE,
            path=path,
            contents=contents,
            timestamp=response.get("last_modified"),
            etag=response.get("etag"),
        )

    def write_stream(
        self, path: str, stream: BinaryIO, options: WriteOptions | None = None
    ) -> FileMetadata:
        """Create or overwrite a blob from a readable stream."""
        response = self._upload(path, stream, options)
        return FileMetadata(
            type=EntryType.FILE,
            path=path,
            stream=stream,
            timestamp=response.get("last_modified"),
            etag=response.get("etag"),
        )

    def update(self, path: str, contents: bytes, options: WriteOptions | None = None) -> FileMetadata:
        # Overwrite is the same call as create; use write()
        raise UnsupportedOperationError("update")

    def update_stream(
        self, path: str, stream: BinaryIO, options: WriteOptions | None = None
    ) -> FileMetadata:
        raise UnsupportedOperationError("update_stream")

    # Moving

    def _transfer(self, path: str, new_path: str) -> None:
        source = self._blob_client(path)
        destination = self._blob_client(new_path)

        downloader = source.download_blob()
        properties = downloader.properties
        content_type = properties.content_settings.content_type

        destination.upload_blob(
            downloader.readall(),
            overwrite=True,
            content_settings=ContentSettings(content_type=content_type) if content_type else None,
            metadata=properties.metadata or None,
        )

    def copy(self, path: str, new_path: str) -> bool:
        """
        Copy a blob by downloading it and uploading it under the new path.

        Content type and user metadata are carried over. Not atomic.
        """
        self._transfer(path, new_path)
        logger.info("Blob copied", source=path, dest=new_path)
        return True

    def rename(self, path: str, new_path: str) -> bool:
        """
        Move a blob: copy it to the new path, then delete the source.

        If the source cannot be deleted the new copy is removed again and the
        original error is re-raised. If that cleanup fails too, RollbackError
        is raised and both blobs remain. A source that has already vanished
        is not rolled back: the new copy is kept.
        """
        if BlobPaths.split(path) == BlobPaths.split(new_path):
            return True

        self._transfer(path, new_path)

        try:
            self._blob_client(path).delete_blob()
        except ResourceNotFoundError:
            # Source removed concurrently; the new copy is now the only one
            logger.warning("Rename source already gone", source=path, dest=new_path)
        except AzureError as exc:
            logger.warning(
                "Failed to delete rename source, rolling back",
                source=path,
                dest=new_path,
                error=str(exc),
            )
            try:
                self._blob_client(new_path).delete_blob()
            except AzureError as rollback_exc:
                logger.error(
                    "Rename rollback failed",
                    source=path,
                    dest=new_path,
                    error=str(rollback_exc),
                )
                raise RollbackError(path, new_path) from rollback_exc
            raise

        logger.info("Blob renamed", source=path, dest=new_path)
        return True

    # Deleting

    def delete(self, path: str) -> bool:
        """
        Delete a blob.

        Returns:
            True if deleted, False if it didn't exist
        """
        try:
            self._blob_client(path).delete_blob()
        except ResourceNotFoundError:
            logger.debug("Blob already absent", path=path)
            return False
        logger.debug("Blob deleted", path=path)
        return True

    def delete_dir(self, dirname: str) -> bool:
        """Delete a whole container and every blob in it."""
        container = BlobPaths.container_name(dirname)
        self.service_client.delete_container(container)
        logger.info("Container deleted", container=container)
        return True

    def create_dir(self, dirname: str, options: WriteOptions | None = None) -> FileMetadata:
        """Create a container."""
        container = BlobPaths.container_name(dirname)
        metadata = options.metadata if options else None
        self.service_client.create_container(container, metadata=metadata)
        logger.info("Container created", container=container)
        return FileMetadata(type=EntryType.DIRECTORY, path=container)

    # Reading

    def has(self, path: str) -> ExistenceResult:
        """
        Probe whether a blob exists.

        Never raises for remote failures: a missing blob or container gives
        NOT_FOUND, any other service or network failure gives TRANSPORT_ERROR.
        """
        blob_client = self._blob_client(path)
        try:
            properties = blob_client.get_blob_properties()
        except ResourceNotFoundError:
            return ExistenceResult(status=ExistenceStatus.NOT_FOUND, path=path)
        except AzureError as exc:
            logger.warning("Existence probe failed", path=path, error=str(exc))
            return ExistenceResult(
                status=ExistenceStatus.TRANSPORT_ERROR,
                path=path,
                error=str(exc),
            )
        return ExistenceResult(status=ExistenceStatus.FOUND, path=path, properties=properties)

    def read(self, path: str) -> FileMetadata:
        """Download a blob into memory."""
        downloader = self._blob_client(path).download_blob()
        contents = downloader.readall()
        return FileMetadata(
            type=EntryType.FILE,
            path=path,
            contents=contents,
            timestamp=downloader.properties.last_modified,
            size=len(contents),
            etag=downloader.properties.etag,
        )

    def read_stream(self, path: str) -> FileMetadata:
        """
        Open a blob for streaming.

        The returned ``stream`` is the SDK downloader; consume it with
        ``readall()``, ``chunks()`` or ``readinto()``.
        """
        downloader = self._blob_client(path).download_blob()
        return FileMetadata(
            type=EntryType.FILE,
            path=path,
            stream=downloader,
            timestamp=downloader.properties.last_modified,
            size=downloader.properties.size,
            etag=downloader.properties.etag,
        )

    def list_contents(
        self,
        directory: str = "",
        recursive: bool = False,
        max_results: int | None = None,
    ) -> list[FileMetadata]:
        """
        List containers, or the blobs in one container.

        Args:
            directory: "" for all containers, "<container>" or
                "<container>/<prefix>" for blobs
            recursive: Accepted for interface compatibility; listings are flat
            max_results: Maximum number of entries to return

        Returns:
            Directory records for containers, file records for blobs. All
            pages of the listing are followed.
        """
        if not directory.strip("/"):
            items = self.service_client.list_containers()
            return self._collect(items, max_results, self._container_record)

        container, prefix = BlobPaths.split_directory(directory)
        container_client = self.service_client.get_container_client(container)
        items = container_client.list_blobs(name_starts_with=prefix)
        return self._collect(
            items, max_results, lambda blob: self._blob_record(container, blob)
        )

    @staticmethod
    def _collect(items, max_results: int | None, to_record) -> list[FileMetadata]:
        records = []
        for item in items:
            records.append(to_record(item))
            if max_results and len(records) >= max_results:
                break
        return records

    @staticmethod
    def _container_record(container) -> FileMetadata:
        return FileMetadata(
            type=EntryType.DIRECTORY,
            path=container.name,
            timestamp=container.last_modified,
            etag=container.etag,
        )

    @staticmethod
    def _blob_record(container: str, blob) -> FileMetadata:
        return FileMetadata(
            type=EntryType.FILE,
            path=BlobPaths.join(container, blob.name),
            timestamp=blob.last_modified,
            size=blob.size,
            etag=blob.etag,
        )

    def get_metadata(self, path: str) -> dict[str, Any]:
        """Get blob properties and user metadata."""
        props = self._blob_client(path).get_blob_properties()
        return {
            "name": props.name,
            "container": props.container,
            "size": props.size,
            "content_type": props.content_settings.content_type,
            "last_modified": props.last_modified,
            "etag": props.etag,
            "metadata": props.metadata,
        }

    def get_timestamp(self, path: str) -> datetime:
        """Get the last-modified time of a blob."""
        return self._blob_client(path).get_blob_properties().last_modified

    def get_size(self, path: str) -> int:
        raise UnsupportedOperationError("get_size")

    def get_mimetype(self, path: str) -> str:
        raise UnsupportedOperationError("get_mimetype")

    def get_visibility(self, path: str) -> str:
        raise UnsupportedOperationError("get_visibility")

    def set_visibility(self, path: str, visibility: str) -> bool:
        raise UnsupportedOperationError("set_visibility")


@lru_cache
def get_adapter() -> BlobPathAdapter:
    """Get cached adapter built from settings."""
    settings = get_settings()

    if settings.azure_connection_string_str:
        return BlobPathAdapter.from_connection_string(settings.azure_connection_string_str)
    if settings.azure_storage_account_name and settings.azure_account_key_str:
        return BlobPathAdapter(
            settings.azure_storage_account_name,
            settings.azure_account_key_str,
            settings.azure_storage_protocol,
            blob_endpoint=settings.azure_storage_blob_endpoint,
        )
    if settings.azure_storage_account_url:
        return BlobPathAdapter.from_account_url(settings.azure_storage_account_url)

    raise ValueError(
        "One of azure_storage_connection_string, azure_storage_account_name/"
        "azure_storage_account_key or azure_storage_account_url must be provided"
    )
