"""exceptions.py
Defines custom exceptions for this project.
"""
from typing import Optional, List


# ------------------------ File Validation Errors ------------------------
class FileValidationError(Exception):
    """Base exception for upload validation errors."""
    pass


class UnsupportedFileTypeError(FileValidationError):
    """Raised when an upload has a mimetype the pipeline cannot parse."""
    def __init__(
        self,
        mimetype: str,
        supported_mimetypes: List[str],
        context: Optional[str] = None
    ):
        self.mimetype = mimetype
        self.supported_mimetypes = supported_mimetypes
        message = (
            f"Unsupported file type: {mimetype}. "
            "Supported types: PDF, DOCX, DOC"
        )
        if context:
            message += f" Context: {context}"
        super().__init__(message)


class FileTooLargeError(FileValidationError):
    """Raised when a file exceeds the allowed file size."""
    def __init__(self, max_size: int, actual_size: int):
        super().__init__(
            f"File size is {actual_size} bytes, which exceeds the max allowed {max_size} bytes."
        )
        self.max_size = max_size
        self.actual_size = actual_size


class MissingFilenameError(FileValidationError):
    """Raised when an upload arrives without a filename."""
    def __init__(self):
        super().__init__("Filename is required")


# ------------------------ Content Extraction Errors ------------------------
class ExtractionFailureError(Exception):
    """
    Raised when a buffer cannot be decoded as its declared format, or when
    decoding succeeds but yields no text.

    Attributes:
        filename (str): Name of the upload that failed.
        original_error (str | None): Message of the underlying library error.
    """
    def __init__(
        self,
        filename: str,
        original_error: Optional[str] = None,
        message: Optional[str] = None,
    ):
        self.filename = filename
        self.original_error = original_error
        if message is None:
            message = f"Failed to extract text from `{filename}`"
            if original_error:
                message += f". Original error: {original_error}"
        super().__init__(message)


# ------------------------ Field Extraction Errors ------------------------
class FieldExtractionError(Exception):
    """
    Raised when a FieldExtractor fails to extract a value from the header text.

    Attributes:
        field_name (str | None): The name of the field being extracted (optional).
        message (str): Human-readable description of the error.
    """

    def __init__(
        self,
        field_name: str | None = None,
        message: str = "Failed to extract field",
    ):
        self.field_name = field_name
        self.message = message
        super().__init__(self.full_message)

    @property
    def full_message(self) -> str:
        """Construct the complete error message."""
        if self.field_name:
            return f"{self.message}: {self.field_name}"
        return self.message


class FieldExtractionConfigError(Exception):
    """
    Raised when a FieldExtractor instance is configured incorrectly.

    Attributes:
        field_name (str | None): The name of the field being extracted (optional).
        message (str): Human-readable description of the error.
    """
    def __init__(self, field_name: str | None = None, message: str = "Failed to extract field"):
        self.field_name = field_name
        self.message = message
        super().__init__(self.full_message)

    @property
    def full_message(self) -> str:
        if self.field_name:
            return f"{self.message}: {self.field_name}"
        return self.message


# ------------------------ Wiring Errors ------------------------
class ExtractorMapConfigError(Exception):
    """
    Raised when the extractor_map configuration is invalid.
    Provides a clear message about what went wrong.
    """
    def __init__(self, message: str):
        super().__init__(f"ExtractorMapConfigError: {message}")


class SectionParserMapConfigError(Exception):
    """
    Raised when the section parser map does not cover every SectionType
    or holds something other than SectionItemParser instances.
    """
    def __init__(self, message: str):
        super().__init__(f"SectionParserMapConfigError: {message}")


# ------------------------ ResumeParserFramework Errors ------------------------
class ParseOptionsConfigError(Exception):
    """
    Raised when caller supplied ParseOptions are malformed. This is the only
    error the parsing pipeline lets escape to its caller.
    """
    def __init__(self, option_name: str, message: str):
        self.option_name = option_name
        super().__init__(f"ParseOptionsConfigError: `{option_name}` {message}")


class BatchSizeExceededError(Exception):
    """Raised by the request boundary when too many files arrive in one batch."""
    def __init__(self, max_batch_size: int, actual_size: int):
        self.max_batch_size = max_batch_size
        self.actual_size = actual_size
        super().__init__(f"Batch size exceeds limit of {max_batch_size} files")
