"""
Blob Storage Models

Pydantic models for connection options and the blob metadata records
returned by read operations.

Author: BlobWrapper Team
Date: 2026
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StorageOptions(BaseModel):
    """
    Connection options for one storage account container.

    ``account_name`` and ``container_name`` are checked when a service is
    built from the options, not here, so partially filled options can be
    assembled from several configuration sources first.

    Blank ``tenant_id`` / ``client_id`` values are treated as absent.
    """

    model_config = ConfigDict(frozen=True)

    account_name: Optional[str] = Field(default=None, description="Azure Storage account name")
    container_name: Optional[str] = Field(default=None, description="Blob container name")
    tenant_id: Optional[str] = Field(
        default=None,
        description="Tenant to scope the identity request to; default tenant when absent",
    )
    client_id: Optional[str] = Field(
        default=None,
        description="Client ID of a user-assigned managed identity; system-assigned when absent",
    )

    @field_validator('account_name', 'container_name')
    @classmethod
    def strip_names(cls, v: Optional[str]) -> Optional[str]:
        """Trim surrounding whitespace from required names."""
        return v.strip() if isinstance(v, str) else v

    @field_validator('tenant_id', 'client_id')
    @classmethod
    def blank_as_absent(cls, v: Optional[str]) -> Optional[str]:
        """Normalise blank optional identifiers to None."""
        if v is None:
            return None
        v = v.strip()
        return v or None


class BlobDescriptor(BaseModel):
    """
    Basic information about a blob.

    Produced by ``get_blob_info`` and ``list_blobs``; never mutated.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Blob name")
    size: int = Field(default=0, ge=0, description="Blob size in bytes")
    last_modified: Optional[datetime] = Field(default=None, description="Last modified timestamp")
    content_type: Optional[str] = Field(default=None, description="Content-Type of the blob")
    etag: Optional[str] = Field(default=None, description="Entity tag of the blob")

    @classmethod
    def from_properties(cls, properties: Any, name: Optional[str] = None) -> 'BlobDescriptor':
        """
        Build a descriptor from an SDK ``BlobProperties`` object.

        Args:
            properties: ``azure.storage.blob.BlobProperties`` (or any object
                with the same attributes)
            name: Name to report; defaults to ``properties.name``

        Returns:
            BlobDescriptor
        """
        content_settings = getattr(properties, 'content_settings', None)
        content_type = getattr(content_settings, 'content_type', None) if content_settings else None
        etag = getattr(properties, 'etag', None)
        return cls(
            name=name if name is not None else properties.name,
            size=getattr(properties, 'size', None) or 0,
            last_modified=getattr(properties, 'last_modified', None),
            content_type=content_type,
            etag=str(etag) if etag is not None else None,
        )
