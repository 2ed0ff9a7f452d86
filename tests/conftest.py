"""
Shared fixtures: an in-memory stand-in for the Azure BlobServiceClient.

Only the subset of the SDK surface used by the adapter is modelled. Errors
are the real azure-core exception types.
"""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError

from src.storage import BlobPathAdapter


class FakeClock:
    """Monotonic timestamps, one second apart."""

    def __init__(self):
        self._now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def tick(self) -> datetime:
        self._now += timedelta(seconds=1)
        return self._now


class FakeDownloader:
    """Mimics StorageStreamDownloader."""

    def __init__(self, data: bytes, properties):
        self._data = data
        self.properties = properties

    def readall(self) -> bytes:
        return self._data

    def chunks(self):
        yield self._data


def _to_bytes(data) -> bytes:
    if isinstance(data, bytes):
        return data
    if isinstance(data, str):
        return data.encode("utf-8")
    return data.read()


class FakeBlobClient:
    def __init__(self, service: "FakeBlobServiceClient", container: str, blob: str):
        self._service = service
        self.container_name = container
        self.blob_name = blob

    def _container(self) -> dict:
        try:
            return self._service.containers[self.container_name]["blobs"]
        except KeyError:
            raise ResourceNotFoundError(f"The specified container does not exist: {self.container_name}")

    def _entry(self) -> dict:
        blobs = self._container()
        try:
            return blobs[self.blob_name]
        except KeyError:
            raise ResourceNotFoundError(f"The specified blob does not exist: {self.blob_name}")

    def _properties(self, entry: dict):
        return SimpleNamespace(
            name=self.blob_name,
            container=self.container_name,
            size=len(entry["data"]),
            content_settings=SimpleNamespace(content_type=entry["content_type"]),
            last_modified=entry["last_modified"],
            etag=entry["etag"],
            metadata=dict(entry["metadata"]),
        )

    def upload_blob(self, data, overwrite=False, content_settings=None, metadata=None):
        blobs = self._container()
        if not overwrite and self.blob_name in blobs:
            raise ResourceExistsError("The specified blob already exists.")
        last_modified = self._service.clock.tick()
        etag = f'"0x{len(blobs) + 1:04X}{last_modified.second:02d}"'
        blobs[self.blob_name] = {
            "data": _to_bytes(data),
            "content_type": content_settings.content_type
            if content_settings
            else "application/octet-stream",
            "metadata": dict(metadata or {}),
            "last_modified": last_modified,
            "etag": etag,
        }
        return {"etag": etag, "last_modified": last_modified}

    def download_blob(self):
        entry = self._entry()
        return FakeDownloader(entry["data"], self._properties(entry))

    def get_blob_properties(self):
        return self._properties(self._entry())

    def delete_blob(self):
        self._entry()
        del self._container()[self.blob_name]


class FakeContainerClient:
    def __init__(self, service: "FakeBlobServiceClient", name: str):
        self._service = service
        self.container_name = name

    def list_blobs(self, name_starts_with=None):
        try:
            blobs = self._service.containers[self.container_name]["blobs"]
        except KeyError:
            raise ResourceNotFoundError(f"The specified container does not exist: {self.container_name}")
        for name in sorted(blobs):
            if name_starts_with and not name.startswith(name_starts_with):
                continue
            entry = blobs[name]
            yield SimpleNamespace(
                name=name,
                size=len(entry["data"]),
                last_modified=entry["last_modified"],
                etag=entry["etag"],
            )


class FakeBlobServiceClient:
    def __init__(self):
        self.clock = FakeClock()
        self.containers: dict[str, dict] = {}

    def get_blob_client(self, container, blob):
        return FakeBlobClient(self, container, blob)

    def get_container_client(self, container):
        return FakeContainerClient(self, container)

    def create_container(self, name, metadata=None):
        if name in self.containers:
            raise ResourceExistsError("The specified container already exists.")
        self.containers[name] = {
            "blobs": {},
            "metadata": dict(metadata or {}),
            "last_modified": self.clock.tick(),
            "etag": f'"0x{len(self.containers) + 1:04X}"',
        }
        return FakeContainerClient(self, name)

    def delete_container(self, name):
        if name not in self.containers:
            raise ResourceNotFoundError("The specified container does not exist.")
        del self.containers[name]

    def list_containers(self):
        for name in sorted(self.containers):
            container = self.containers[name]
            yield SimpleNamespace(
                name=name,
                last_modified=container["last_modified"],
                etag=container["etag"],
                metadata=container["metadata"],
            )


@pytest.fixture
def service_client() -> FakeBlobServiceClient:
    service = FakeBlobServiceClient()
    service.create_container("docs")
    service.create_container("archive")
    return service


@pytest.fixture
def adapter(service_client) -> BlobPathAdapter:
    return BlobPathAdapter.from_service_client(service_client)
