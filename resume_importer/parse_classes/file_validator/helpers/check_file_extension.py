"""check_file_extension.py
Checks a filename's extension and maps it to the mimetype the pipeline expects.
"""

import os
from typing import Dict, Optional

from resume_importer.config import SCANNER_DEFAULTS
from resume_importer.exceptions import UnsupportedFileTypeError


def check_file_extension(filename: str, extension_mimetypes: Optional[Dict[str, str]] = None) -> str:
    """
    Validate and return the lowercase file extension for a given filename.

    Raises:
        UnsupportedFileTypeError: If the extension has no known mimetype.
    """
    extension_mimetypes = extension_mimetypes or SCANNER_DEFAULTS.EXTENSION_MIMETYPES
    file_name = os.path.basename(filename).lower()

    # Try to match the longest supported extension
    for ext in sorted(extension_mimetypes, key=len, reverse=True):
        if file_name.endswith(ext.lower()):
            return ext.lower()

    ext = os.path.splitext(file_name)[1]
    raise UnsupportedFileTypeError(
        mimetype=ext or file_name,
        supported_mimetypes=SCANNER_DEFAULTS.SUPPORTED_MIMETYPES,
        context="Failed in check_file_extension() call.",
    )


def mimetype_from_filename(filename: str) -> str:
    """
    Guess the upload mimetype for a local file from its extension.
    Unknown extensions map to `application/octet-stream` so the FileValidator
    rejects them with a typed error instead of failing here.
    """
    try:
        ext = check_file_extension(filename)
    except UnsupportedFileTypeError:
        return "application/octet-stream"
    return SCANNER_DEFAULTS.EXTENSION_MIMETYPES[ext]
