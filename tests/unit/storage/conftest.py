"""
Fixtures for storage service tests.

Provides an in-memory stand-in for ``azure.storage.blob.aio.ContainerClient``
and a recording identity provider, so tests run without network access.
"""

import asyncio
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Tuple

import pytest
from azure.core.exceptions import ResourceNotFoundError
from azure.storage.blob import ContentSettings

from blobwrapper.storage.models import StorageOptions
from blobwrapper.storage.service import BlobStorageService


class FakeDownloader:
    """Mimics ``StorageStreamDownloader``."""

    def __init__(self, owner: "FakeContainerClient", data: bytes):
        self._owner = owner
        self._data = data

    async def readall(self) -> bytes:
        return self._data

    async def readinto(self, stream) -> int:
        self._owner.last_stream = stream
        if self._owner.stall_downloads:
            # Write half, then hang until cancelled
            stream.write(self._data[: len(self._data) // 2])
            self._owner.download_started.set()
            await asyncio.Event().wait()
        stream.write(self._data)
        return len(self._data)


class FakeBlobClient:
    """Mimics the subset of ``azure.storage.blob.aio.BlobClient`` in use."""

    def __init__(self, owner: "FakeContainerClient", blob_name: str):
        self._owner = owner
        self.blob_name = blob_name

    async def upload_blob(self, data, overwrite: bool = False, content_settings=None, **kwargs):
        self._owner.record("upload_blob", self.blob_name)
        if hasattr(data, "read"):
            self._owner.last_upload_stream = data
            data = data.read()
        await asyncio.sleep(0)
        if self._owner.fail_after_read is not None:
            raise self._owner.fail_after_read
        if not overwrite and self.blob_name in self._owner.blobs:
            raise AssertionError("upload without overwrite")
        self._owner.last_upload_kwargs = {"overwrite": overwrite, "content_settings": content_settings}
        self._owner.store(self.blob_name, bytes(data), content_settings)

    async def download_blob(self, **kwargs) -> FakeDownloader:
        self._owner.record("download_blob", self.blob_name)
        await asyncio.sleep(0)
        return FakeDownloader(self._owner, self._owner.require(self.blob_name)[0])

    async def get_blob_properties(self, **kwargs):
        self._owner.record("get_blob_properties", self.blob_name)
        await asyncio.sleep(0)
        self._owner.require(self.blob_name)
        return self._owner.properties(self.blob_name)

    async def exists(self, **kwargs) -> bool:
        self._owner.record("exists", self.blob_name)
        await asyncio.sleep(0)
        return self.blob_name in self._owner.blobs

    async def delete_blob(self, **kwargs) -> None:
        self._owner.record("delete_blob", self.blob_name)
        await asyncio.sleep(0)
        self._owner.require(self.blob_name)
        del self._owner.blobs[self.blob_name]


class FakeContainerClient:
    """In-memory container keyed by blob name."""

    def __init__(self, account_url: str, container_name: str, credential: Any):
        self.account_url = account_url
        self.container_name = container_name
        self.credential = credential
        self.blobs: Dict[str, Tuple[bytes, Optional[str], datetime, str]] = {}
        self.calls: List[Tuple[str, Optional[str]]] = []
        self.fail_with: Optional[Exception] = None
        self.fail_after_read: Optional[Exception] = None
        self.fail_on_close: Optional[Exception] = None
        self.page_size = 2
        self.pages_served = 0
        self.closed = False
        self.stall_downloads = False
        self.download_started = asyncio.Event()
        self.last_stream = None
        self.last_upload_stream = None
        self.last_upload_kwargs: Dict[str, Any] = {}
        self._version = 0

    def record(self, operation: str, blob_name: Optional[str]) -> None:
        self.calls.append((operation, blob_name))
        if self.fail_with is not None:
            raise self.fail_with

    def store(self, blob_name: str, data: bytes, content_settings) -> None:
        self._version += 1
        content_type = content_settings.content_type if content_settings else "application/octet-stream"
        self.blobs[blob_name] = (data, content_type, datetime.now(timezone.utc), f'"0x{self._version:08X}"')

    def require(self, blob_name: str):
        if blob_name not in self.blobs:
            raise ResourceNotFoundError("The specified blob does not exist.")
        return self.blobs[blob_name]

    def properties(self, blob_name: str):
        data, content_type, last_modified, etag = self.blobs[blob_name]
        return SimpleNamespace(
            name=blob_name,
            size=len(data),
            last_modified=last_modified,
            content_settings=ContentSettings(content_type=content_type),
            etag=etag,
        )

    def get_blob_client(self, blob: str) -> FakeBlobClient:
        return FakeBlobClient(self, blob)

    def list_blobs(self, name_starts_with: Optional[str] = None, **kwargs):
        self.record("list_blobs", name_starts_with)
        return self._iterate(name_starts_with)

    async def _iterate(self, prefix: Optional[str]):
        names = sorted(n for n in self.blobs if not prefix or n.startswith(prefix))
        for start in range(0, len(names), self.page_size):
            self.pages_served += 1
            await asyncio.sleep(0)
            for name in names[start:start + self.page_size]:
                yield self.properties(name)

    async def close(self) -> None:
        self.closed = True
        if self.fail_on_close is not None:
            raise self.fail_on_close

    def count(self, operation: Optional[str] = None) -> int:
        if operation is None:
            return len(self.calls)
        return sum(1 for op, _ in self.calls if op == operation)


class FakeCredential:
    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.closed = False

    async def get_token(self, *scopes, **kwargs):
        raise AssertionError("token requested during a unit test")

    async def close(self) -> None:
        self.closed = True


class RecordingCredentialProvider:
    """Identity provider double that records every request."""

    def __init__(self):
        self.requests: List[Dict[str, Any]] = []
        self.credentials: List[FakeCredential] = []

    def __call__(self, **kwargs) -> FakeCredential:
        self.requests.append(kwargs)
        credential = FakeCredential(**kwargs)
        self.credentials.append(credential)
        return credential


class RecordingClientFactory:
    """Container client factory returning FakeContainerClient instances."""

    def __init__(self):
        self.clients: List[FakeContainerClient] = []

    def __call__(self, account_url: str, container_name: str, credential: Any) -> FakeContainerClient:
        client = FakeContainerClient(account_url, container_name, credential)
        self.clients.append(client)
        return client


@pytest.fixture
def options():
    return StorageOptions(account_name="teststorage", container_name="test-container")


@pytest.fixture
def credential_provider():
    return RecordingCredentialProvider()


@pytest.fixture
def client_factory():
    return RecordingClientFactory()


@pytest.fixture
def service(options, credential_provider, client_factory):
    """Service bound to an in-memory container."""
    return BlobStorageService(
        options,
        credential_provider=credential_provider,
        client_factory=client_factory,
    )


@pytest.fixture
def container(service, client_factory):
    """The fake container client behind ``service``."""
    return client_factory.clients[0]
