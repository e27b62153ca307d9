"""
Blob Storage Service

Async operations against a single blob container, authenticated with
managed identity credentials.

Every operation validates its arguments first and then makes exactly one
call on the Azure SDK client. Retries, token refresh and transport concerns
belong to the SDK pipeline and to azure-identity. Errors from the SDK are
re-raised unchanged; cancellation is ordinary asyncio task cancellation.

Author: BlobWrapper Team
Date: 2026
"""

import logging
from pathlib import Path
from typing import IO, Any, List, Optional, Protocol, Union, runtime_checkable

from azure.core.exceptions import ResourceNotFoundError
from azure.storage.blob import ContentSettings

from ..core.logging_config import log_with_context
from .credentials import ContainerClientFactory, CredentialProvider, resolve_container_handle
from .exceptions import LocalFileNotFoundError
from .models import BlobDescriptor, StorageOptions
from .validation import ArgumentValidator

logger = logging.getLogger(__name__)

BlobContent = Union[bytes, bytearray, IO[bytes]]


@runtime_checkable
class BlobStorage(Protocol):
    """Operations available on a single blob container."""

    async def upload(
        self, blob_name: str, content: BlobContent, content_type: Optional[str] = None
    ) -> None:
        """Upload content to a blob, replacing any existing blob."""
        ...

    async def download(self, blob_name: str, destination: IO[bytes]) -> None:
        """Write the full content of a blob into a binary stream."""
        ...

    async def download_bytes(self, blob_name: str) -> bytes:
        """Return the full content of a blob."""
        ...

    async def get_blob_info(self, blob_name: str) -> Optional[BlobDescriptor]:
        """Return blob information, or None if the blob does not exist."""
        ...

    async def exists(self, blob_name: str) -> bool:
        """Check whether a blob exists."""
        ...

    async def delete(self, blob_name: str) -> bool:
        """Delete a blob; False if it did not exist."""
        ...

    async def list_blobs(self, prefix: Optional[str] = None) -> List[BlobDescriptor]:
        """List blobs, optionally restricted to names starting with prefix."""
        ...

    async def upload_file(
        self, blob_name: str, file_path: Union[str, Path], content_type: Optional[str] = None
    ) -> None:
        """Upload a local file to a blob."""
        ...

    async def download_to_file(self, blob_name: str, file_path: Union[str, Path]) -> None:
        """Download a blob into a local file."""
        ...


class BlobStorageService:
    """
    BlobStorage implementation backed by ``azure.storage.blob.aio``.

    The container client and its credential are built once, in the
    constructor, and shared by every call. The instance holds no other
    state, so it can be used from concurrent tasks without locking.

    Example:
        options = StorageOptions(account_name="myaccount", container_name="reports")
        async with BlobStorageService(options) as storage:
            await storage.upload("daily.csv", b"a,b,c\\n", content_type="text/csv")
    """

    def __init__(
        self,
        options: StorageOptions,
        *,
        credential_provider: Optional[CredentialProvider] = None,
        client_factory: Optional[ContainerClientFactory] = None,
    ):
        """
        Build the container client for the given options.

        Args:
            options: Account and container to bind to, plus optional identity
            credential_provider: Replaces DefaultAzureCredential
            client_factory: Replaces ContainerClient

        Raises:
            InvalidConfigurationError: If account or container name is missing
        """
        self._container, self._credential = resolve_container_handle(
            options, credential_provider, client_factory
        )
        self._options = options

    @property
    def options(self) -> StorageOptions:
        return self._options

    @property
    def container_name(self) -> str:
        return self._options.container_name

    # ============================================================================
    # Lifecycle
    # ============================================================================

    async def close(self) -> None:
        """Close the container client and the credential it was built with."""
        try:
            await self._container.close()
        finally:
            close_credential = getattr(self._credential, "close", None)
            if close_credential is not None:
                await close_credential()

    async def __aenter__(self) -> "BlobStorageService":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    # ============================================================================
    # Upload
    # ============================================================================

    async def upload(
        self, blob_name: str, content: BlobContent, content_type: Optional[str] = None
    ) -> None:
        """
        Upload content to a blob, overwriting it unconditionally.

        Args:
            blob_name: Blob name
            content: Bytes or a readable binary stream
            content_type: Content-Type header to set, if not blank

        Raises:
            InvalidArgumentError: If blob_name is blank or content is None
        """
        ArgumentValidator.require_blob_name(blob_name)
        ArgumentValidator.require_stream(content, "content")

        upload_kwargs: dict = {"overwrite": True}
        if content_type and content_type.strip():
            upload_kwargs["content_settings"] = ContentSettings(content_type=content_type)

        logger.debug(f"Uploading blob '{blob_name}' to container '{self.container_name}'")
        blob_client = self._container.get_blob_client(blob_name)
        await blob_client.upload_blob(content, **upload_kwargs)

    async def upload_file(
        self, blob_name: str, file_path: Union[str, Path], content_type: Optional[str] = None
    ) -> None:
        """
        Upload a local file to a blob.

        The file stays open only for the duration of the transfer.

        Raises:
            InvalidArgumentError: If blob_name or file_path is blank
            LocalFileNotFoundError: If file_path is not an existing file
        """
        ArgumentValidator.require_blob_name(blob_name)
        path = Path(ArgumentValidator.require_file_path(file_path))

        if not path.is_file():
            raise LocalFileNotFoundError(str(path))

        with open(path, "rb") as stream:
            await self.upload(blob_name, stream, content_type)

    # ============================================================================
    # Download
    # ============================================================================

    async def download(self, blob_name: str, destination: IO[bytes]) -> None:
        """
        Stream the full content of a blob into a writable binary stream.

        Raises:
            InvalidArgumentError: If blob_name is blank or destination is None
            ResourceNotFoundError: If the blob does not exist
        """
        ArgumentValidator.require_blob_name(blob_name)
        ArgumentValidator.require_stream(destination, "destination")

        logger.debug(f"Downloading blob '{blob_name}' from container '{self.container_name}'")
        blob_client = self._container.get_blob_client(blob_name)
        downloader = await blob_client.download_blob()
        await downloader.readinto(destination)

    async def download_to_file(self, blob_name: str, file_path: Union[str, Path]) -> None:
        """
        Download a blob into a local file.

        Missing parent directories are created and an existing file is
        truncated. If the download fails or is cancelled, whatever was
        written so far is left on disk.

        Raises:
            InvalidArgumentError: If blob_name or file_path is blank
            ResourceNotFoundError: If the blob does not exist
        """
        ArgumentValidator.require_blob_name(blob_name)
        path = Path(ArgumentValidator.require_file_path(file_path))

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "wb") as stream:
            await self.download(blob_name, stream)

    async def download_bytes(self, blob_name: str) -> bytes:
        """
        Download the full content of a blob into memory.

        No size limit is applied.

        Raises:
            InvalidArgumentError: If blob_name is blank
            ResourceNotFoundError: If the blob does not exist
        """
        ArgumentValidator.require_blob_name(blob_name)

        logger.debug(f"Reading blob '{blob_name}' from container '{self.container_name}'")
        blob_client = self._container.get_blob_client(blob_name)
        downloader = await blob_client.download_blob()
        return bytes(await downloader.readall())

    # ============================================================================
    # Metadata
    # ============================================================================

    async def get_blob_info(self, blob_name: str) -> Optional[BlobDescriptor]:
        """
        Get information about a blob.

        Returns:
            BlobDescriptor, or None if the blob does not exist
        """
        ArgumentValidator.require_blob_name(blob_name)

        blob_client = self._container.get_blob_client(blob_name)
        try:
            properties = await blob_client.get_blob_properties()
        except ResourceNotFoundError:
            return None

        return BlobDescriptor.from_properties(properties, name=blob_name)

    async def exists(self, blob_name: str) -> bool:
        ArgumentValidator.require_blob_name(blob_name)

        blob_client = self._container.get_blob_client(blob_name)
        return bool(await blob_client.exists())

    async def delete(self, blob_name: str) -> bool:
        """
        Delete a blob if it exists.

        Returns:
            True if a blob was deleted, False if it was already absent
        """
        ArgumentValidator.require_blob_name(blob_name)

        logger.debug(f"Deleting blob '{blob_name}' from container '{self.container_name}'")
        blob_client = self._container.get_blob_client(blob_name)
        try:
            await blob_client.delete_blob()
        except ResourceNotFoundError:
            return False
        return True

    async def list_blobs(self, prefix: Optional[str] = None) -> List[BlobDescriptor]:
        """
        List blobs in the container.

        All result pages are fetched before returning. Order is whatever the
        service returns (lexicographic by name for Azure).

        Args:
            prefix: Only include blobs whose names start with this prefix

        Returns:
            List of BlobDescriptor
        """
        blobs: List[BlobDescriptor] = []
        async for properties in self._container.list_blobs(name_starts_with=prefix or None):
            blobs.append(BlobDescriptor.from_properties(properties))

        log_with_context(
            logger,
            logging.DEBUG,
            f"Listed {len(blobs)} blobs in container '{self.container_name}'",
            container=self.container_name,
            prefix=prefix,
            count=len(blobs),
        )
        return blobs
