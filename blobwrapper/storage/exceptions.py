"""
BlobWrapper Exception Hierarchy

Errors raised by this layer before a request reaches Azure. Errors coming
back from the SDK (``azure.core.exceptions.ResourceNotFoundError``,
``HttpResponseError``, ``ClientAuthenticationError``, ...) and
``asyncio.CancelledError`` are passed through unchanged.

Author: BlobWrapper Team
Date: 2026
"""

from typing import Any, Dict, Optional


class BlobWrapperError(Exception):
    """
    Base exception for errors raised by BlobWrapper itself.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code (e.g., 'InvalidArgument')
        details: Additional context (parameter name, path, ...)
    """

    error_code: str = "BlobWrapperError"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.error_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details
            }
        }


class InvalidConfigurationError(BlobWrapperError, ValueError):
    """Raised when a required connection option is missing or blank."""
    error_code = "InvalidConfiguration"

    def __init__(self, option: str, message: Optional[str] = None):
        super().__init__(
            message or f"{option} is required",
            details={"option": option}
        )
        self.option = option


class InvalidArgumentError(BlobWrapperError, ValueError):
    """Raised when a required call argument is missing or blank."""
    error_code = "InvalidArgument"

    def __init__(self, parameter: str, message: Optional[str] = None):
        super().__init__(
            message or f"{parameter} cannot be empty",
            details={"parameter": parameter}
        )
        self.parameter = parameter


class LocalFileNotFoundError(BlobWrapperError, FileNotFoundError):
    """Raised when a local file to upload does not exist."""
    error_code = "LocalFileNotFound"

    def __init__(self, path: str):
        super().__init__(
            f"File not found: {path}",
            details={"path": path}
        )
        self.filename = path
