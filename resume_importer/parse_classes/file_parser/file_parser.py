"""file_parser.py

Holds abstract FileParser class inherited by format-specific parsers.
"""

from typing import List
from abc import ABC, abstractmethod

from resume_importer.models import FileUpload, ExtractedText
from resume_importer.exceptions import UnsupportedFileTypeError, ExtractionFailureError


class FileParser(ABC):
    """
    Abstract base class representing a generic in-memory file parser.

    All concrete parsers must implement the `parse` method.

    Args:
        file (FileUpload): Upload whose buffer will be decoded.

    Attributes:
        file (FileUpload): The upload being parsed.
    """
    # Mimetypes handled by a specific concrete class (to be overwritten by children)
    SUPPORTED_MIMETYPES: List[str] = []

    # Short format name reported in ExtractedText.file_format (to be overwritten by children)
    FILE_FORMAT: str = ""

    def __init__(self, file: FileUpload):
        self.file = file
        if file.mimetype not in self.SUPPORTED_MIMETYPES:
            raise UnsupportedFileTypeError(
                mimetype=file.mimetype,
                supported_mimetypes=self.SUPPORTED_MIMETYPES,
                context=f"{self.__class__.__name__} cannot decode this file.",
            )

    def _check_final_text(self, full_text: str) -> str:
        """
        Validate that extraction produced readable content.

        Args:
            full_text (str): The complete text extracted from the buffer.

        Returns:
            str: The same text, untouched.

        Raises:
            ExtractionFailureError: If `full_text` is empty or whitespace-only.
        """
        if not full_text or not full_text.strip():
            raise ExtractionFailureError(
                filename=self.file.filename,
                message=f"File `{self.file.filename}` contains no parsable text",
            )
        return full_text

    @abstractmethod
    def parse(self) -> ExtractedText:
        """
        Decode `self.file.buffer` and return its raw text plus format metadata.

        Returns:
            ExtractedText: Raw text with line breaks and bullet markers preserved.

        Raises:
            ExtractionFailureError: If the buffer cannot be decoded or holds no text.
        """
        pass
