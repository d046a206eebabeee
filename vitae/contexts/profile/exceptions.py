"""Custom exceptions for the profile context."""

from pathlib import Path
from typing import Optional


class InvalidProfileError(ValueError):
    """
    Exception raised when a JSON profile is malformed or missing required fields.

    Attributes:
        message: Error description
        source_path: File the profile was read from, if any
        field_name: Offending field, if the failure is field-specific
    """

    def __init__(
        self,
        message: str,
        source_path: Optional[Path] = None,
        field_name: Optional[str] = None,
    ):
        self.message = message
        self.source_path = source_path
        self.field_name = field_name

        parts = [message]
        if field_name:
            parts.append(f"Field: {field_name}")
        if source_path:
            parts.append(f"Source: {source_path}")

        super().__init__("\n".join(parts))
