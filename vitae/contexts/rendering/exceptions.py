"""Custom exceptions for the rendering context."""

from typing import Optional


class ExportError(Exception):
    """
    Base exception for a failed export.

    Attributes:
        message: Error description
        stage: Assembler stage where the failure happened (e.g., "content")
        original_error: The underlying exception, if any
    """

    def __init__(
        self,
        message: str,
        stage: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ):
        self.message = message
        self.stage = stage
        self.original_error = original_error

        parts = [message]
        if stage:
            parts.append(f"Stage: {stage}")
        if original_error:
            parts.append(f"Original error: {type(original_error).__name__}: {original_error}")

        super().__init__("\n".join(parts))


class SurfaceUnavailableError(ExportError):
    """Raised when the rendering backend never became ready."""

    pass


class InvalidInputError(ExportError, ValueError):
    """Raised when the document handed to the assembler lacks required fields."""

    pass


class LayoutFailureError(ExportError):
    """Raised when an unexpected error interrupts layout of the document."""

    pass
