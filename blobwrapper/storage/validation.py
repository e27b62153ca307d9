"""
Argument validation for blob operations.

Every check runs before any request is sent, so a failed check never
reaches the network.
"""

from typing import Any, Optional

from .exceptions import InvalidArgumentError, InvalidConfigurationError
from .models import StorageOptions


class ArgumentValidator:
    """Checks for the string and stream arguments of facade operations."""

    @classmethod
    def require_text(cls, value: Optional[str], parameter: str, label: Optional[str] = None) -> str:
        """
        Ensure a string argument is present and not blank.

        Args:
            value: Argument value
            parameter: Parameter name reported in the error
            label: Human readable name used in the message

        Returns:
            The value, unchanged

        Raises:
            InvalidArgumentError: If value is None, not a string, or blank
        """
        if not isinstance(value, str) or not value.strip():
            raise InvalidArgumentError(parameter, f"{label or parameter} cannot be empty")
        return value

    @classmethod
    def require_blob_name(cls, blob_name: Optional[str]) -> str:
        return cls.require_text(blob_name, "blob_name", "Blob name")

    @classmethod
    def require_file_path(cls, file_path: Any) -> str:
        # Accept os.PathLike as well as str
        if file_path is not None and not isinstance(file_path, str) and hasattr(file_path, "__fspath__"):
            file_path = file_path.__fspath__()
        return cls.require_text(file_path, "file_path", "File path")

    @classmethod
    def require_stream(cls, stream: Any, parameter: str) -> Any:
        """Ensure a stream (or bytes) argument was supplied."""
        if stream is None:
            raise InvalidArgumentError(parameter, f"{parameter} cannot be None")
        return stream


def validate_options(options: Optional[StorageOptions]) -> StorageOptions:
    """
    Check that the options name both an account and a container.

    Raises:
        InvalidConfigurationError: If options are missing or a required
            name is blank
    """
    if options is None:
        raise InvalidConfigurationError("options", "Storage options are required")
    if not options.account_name:
        raise InvalidConfigurationError("account_name")
    if not options.container_name:
        raise InvalidConfigurationError("container_name")
    return options
