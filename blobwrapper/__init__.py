"""
BlobWrapper: Azure Blob Storage access with managed identity

A small async facade over azure-storage-blob for a single container,
authenticated through azure-identity instead of account keys.
"""

__version__ = "0.1.0"

from .storage import (
    BlobDescriptor,
    BlobStorage,
    BlobStorageService,
    BlobWrapperError,
    InvalidArgumentError,
    InvalidConfigurationError,
    LocalFileNotFoundError,
    StorageOptions,
)

__all__ = [
    "BlobDescriptor",
    "BlobStorage",
    "BlobStorageService",
    "BlobWrapperError",
    "InvalidArgumentError",
    "InvalidConfigurationError",
    "LocalFileNotFoundError",
    "StorageOptions",
    "__version__",
]
