"""file_validator.py
Holds FileValidator class which enforces upload constraints before any parsing work.
"""
from typing import List, Optional

from resume_importer.config import SCANNER_DEFAULTS
from resume_importer.models import FileUpload
from resume_importer.exceptions import (
    UnsupportedFileTypeError,
    FileTooLargeError,
    MissingFilenameError,
)


class FileValidator:
    """
    Validates upload metadata (mimetype, size, filename). The buffer itself is
    never read here.

    Args:
        max_file_size_mb (float | None, optional): Maximum allowed upload size in
            megabytes. If None, no size limit is enforced.
        supported_mimetypes (List[str] | None, optional): Accepted mimetypes.
            Defaults to ``SCANNER_DEFAULTS.SUPPORTED_MIMETYPES``.
    """

    def __init__(
        self,
        max_file_size_mb: Optional[float] = SCANNER_DEFAULTS.MAX_FILE_SIZE_MB,
        supported_mimetypes: Optional[List[str]] = None,
    ):
        self.max_file_size_mb = max_file_size_mb
        self.supported_mimetypes = list(
            supported_mimetypes or SCANNER_DEFAULTS.SUPPORTED_MIMETYPES
        )

    @property
    def max_size_bytes(self) -> Optional[int]:
        if self.max_file_size_mb is None:
            return None
        # Convert MB to bytes (1 MB = 1024 * 1024 bytes)
        return int(self.max_file_size_mb * 1024 * 1024)

    def validate(self, file: FileUpload) -> None:
        """
        Check an upload against the pipeline constraints.

        Args:
            file (FileUpload): The upload to check.

        Raises:
            UnsupportedFileTypeError: If the mimetype is not supported.
            FileTooLargeError: If the declared size exceeds the maximum.
            MissingFilenameError: If the filename is empty.
        """
        if not self.is_supported_file_type(file.mimetype):
            raise UnsupportedFileTypeError(
                mimetype=file.mimetype,
                supported_mimetypes=self.supported_mimetypes,
            )

        max_size_bytes = self.max_size_bytes
        if max_size_bytes is not None and file.size > max_size_bytes:
            raise FileTooLargeError(max_size=max_size_bytes, actual_size=file.size)

        if not file.filename or not file.filename.strip():
            raise MissingFilenameError()

    def get_supported_file_types(self) -> List[str]:
        return list(self.supported_mimetypes)

    def is_supported_file_type(self, mimetype: str) -> bool:
        return mimetype in self.supported_mimetypes
