"""word_document_parser.py

Holds WordDocumentParser class using docx2txt for text extraction.
"""
import io
import re

import docx2txt

from resume_importer.config import DOCX_MIMETYPE, DOC_MIMETYPE
from resume_importer.exceptions import ExtractionFailureError
from resume_importer.models import ExtractedText
from resume_importer.parse_classes.file_parser.file_parser import FileParser


class WordDocumentParser(FileParser):
    """
    Concrete parser for Microsoft Word documents.

    Uses ``docx2txt`` to extract paragraph text (including textboxes) in
    document order from an in-memory stream. Legacy ``.doc`` uploads are tried
    the same way on a best-effort basis: OLE binaries cannot be opened as a
    zip package and fail with ``ExtractionFailureError``.

    Attributes:
        SUPPORTED_MIMETYPES (List[str]): DOCX and legacy DOC mimetypes.
    """

    SUPPORTED_MIMETYPES = [DOCX_MIMETYPE, DOC_MIMETYPE]

    @property
    def FILE_FORMAT(self) -> str:
        return "doc" if self.file.mimetype == DOC_MIMETYPE else "docx"

    def parse(self) -> ExtractedText:
        """
        Parses the Word document buffer and returns its text.

        Returns:
            ExtractedText: Paragraph text joined by newlines.

        Raises:
            ExtractionFailureError: If the buffer cannot be read or holds no text.
        """
        full_text = self._check_final_text(self._get_docx_contents())

        return ExtractedText(
            text=full_text,
            file_format=self.FILE_FORMAT,
            page_count=None,
            metadata={"source_mimetype": self.file.mimetype},
        )

    def _get_docx_contents(self) -> str:
        """
        Opens the Word document with docx2txt and extracts all text content.

        docx2txt ends every paragraph with a blank line, so single blank lines
        are folded back into line breaks. Empty paragraphs still show up as a
        blank line.

        Raises:
            ExtractionFailureError: If the Word document cannot be opened or read.
        """
        try:
            full_text = docx2txt.process(io.BytesIO(self.file.buffer))
        except Exception as e:
            raise ExtractionFailureError(self.file.filename, str(e))

        return re.sub(r"\n\n", "\n", full_text or "").strip()
