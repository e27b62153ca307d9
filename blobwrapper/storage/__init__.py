"""
BlobWrapper Storage

Managed identity blob container access: credential resolution, the
BlobStorage protocol and its Azure SDK implementation.
"""

from .credentials import (
    BLOB_SERVICE_DOMAIN,
    CredentialRequest,
    IdentityMode,
    build_account_url,
    build_credential_request,
    resolve_container_handle,
)
from .exceptions import (
    BlobWrapperError,
    InvalidArgumentError,
    InvalidConfigurationError,
    LocalFileNotFoundError,
)
from .models import BlobDescriptor, StorageOptions
from .service import BlobStorage, BlobStorageService

__all__ = [
    "BLOB_SERVICE_DOMAIN",
    "BlobDescriptor",
    "BlobStorage",
    "BlobStorageService",
    "BlobWrapperError",
    "CredentialRequest",
    "IdentityMode",
    "InvalidArgumentError",
    "InvalidConfigurationError",
    "LocalFileNotFoundError",
    "StorageOptions",
    "build_account_url",
    "build_credential_request",
    "resolve_container_handle",
]
