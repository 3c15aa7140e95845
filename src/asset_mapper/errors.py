"""Exceptions raised while building and persisting asset mappings.

Every failure of a build step surfaces as a subclass of `AssetMappingError`.
None of them are retried; the caller decides whether the build proceeds.
"""
from __future__ import annotations

from typing import Optional, Sequence


class AssetMappingError(Exception):
    """Base class for all asset mapping build failures."""


class TraversalError(AssetMappingError):
    """Raised when the asset tree cannot be walked.

    Attributes:
        path: The file or directory that could not be read.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class EncodingError(AssetMappingError):
    """Raised when the mapping cannot be serialized or rendered."""


class WriteError(AssetMappingError):
    """Raised when the destination artifact cannot be created or written.

    Attributes:
        path: The destination that failed.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class FormatToolError(AssetMappingError):
    """Raised when the external source formatter fails.

    Attributes:
        command: The argv that was executed.
        returncode: Exit status of the formatter (None if it never started).
        stderr: Captured diagnostic output.
    """

    def __init__(
        self,
        message: str,
        command: Sequence[str] = (),
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        super().__init__(message)
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr

    def to_dict(self) -> dict:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": "FormatToolError",
            "message": str(self),
            "command": self.command,
            "returncode": self.returncode,
            "stderr": self.stderr,
        }


__all__ = [
    "AssetMappingError",
    "TraversalError",
    "EncodingError",
    "WriteError",
    "FormatToolError",
]
