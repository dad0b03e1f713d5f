"""pdf_parser.py

Holds PDFParser class.
"""
from typing import Any, Dict, List, Tuple

import pymupdf

from resume_importer.config import PDF_MIMETYPE
from resume_importer.exceptions import ExtractionFailureError
from resume_importer.models import ExtractedText

from resume_importer.parse_classes.file_parser.file_parser import FileParser


class PDFParser(FileParser):
    """
    Concrete parser for PDF documents.

    Uses PyMuPDF to open the upload buffer in memory and extract text page by
    page, with a newline between visual lines.

    Attributes:
        SUPPORTED_MIMETYPES (List[str]): Only ``application/pdf``.
    """
    SUPPORTED_MIMETYPES = [PDF_MIMETYPE]
    FILE_FORMAT = "pdf"

    def parse(self) -> ExtractedText:
        """
        Parses the PDF buffer and returns its text.

        Returns:
            ExtractedText: Text of every page, in page order.

        Raises:
            ExtractionFailureError: If the buffer is not a readable PDF or holds no text.
        """
        page_texts, metadata = self._get_pdf_contents()
        full_text = self._check_final_text("\n".join(page_texts))

        return ExtractedText(
            text=full_text,
            file_format=self.FILE_FORMAT,
            page_count=len(page_texts),
            metadata=metadata,
        )

    def _get_pdf_contents(self) -> Tuple[List[str], Dict[str, Any]]:
        """
        Opens the PDF buffer using PyMuPDF and returns the text of each page
        together with the document metadata.

        Raises:
            ExtractionFailureError: If the PDF cannot be opened or is encrypted.
        """
        try:
            doc = pymupdf.open(stream=self.file.buffer, filetype="pdf")
        except Exception as e:
            raise ExtractionFailureError(self.file.filename, str(e))

        try:
            if doc.needs_pass:
                raise ExtractionFailureError(
                    self.file.filename,
                    message=f"File `{self.file.filename}` is password protected",
                )

            page_texts = []
            for page_number in range(doc.page_count):
                page = doc.load_page(page_number)
                page_texts.append(page.get_text("text"))

            metadata = {
                key: value
                for key, value in (doc.metadata or {}).items()
                if value
            }
        finally:
            doc.close()

        return page_texts, metadata
