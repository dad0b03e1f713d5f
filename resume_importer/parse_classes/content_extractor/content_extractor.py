"""content_extractor.py
Holds ContentExtractor class which turns a validated upload into raw text.
"""
from typing import Dict, Optional, Type

from resume_importer.config import PDF_MIMETYPE, DOCX_MIMETYPE, DOC_MIMETYPE
from resume_importer.exceptions import UnsupportedFileTypeError
from resume_importer.models import FileUpload, ExtractedText

from resume_importer.parse_classes.file_parser.file_parser import FileParser
from resume_importer.parse_classes.file_parser.pdf_parser import PDFParser
from resume_importer.parse_classes.file_parser.word_document_parser import WordDocumentParser


class ContentExtractor:
    """
    Selects the ``FileParser`` subclass for an upload's mimetype and runs it.

    Args:
        mimetype_parser_map (Dict[str, Type[FileParser]] | None): Optional override
            of the mimetype to parser lookup (useful for testing).
    """

    MIMETYPE_PARSER_MAP: Dict[str, Type[FileParser]] = {
        PDF_MIMETYPE: PDFParser,
        DOCX_MIMETYPE: WordDocumentParser,
        DOC_MIMETYPE: WordDocumentParser,
    }

    def __init__(self, mimetype_parser_map: Optional[Dict[str, Type[FileParser]]] = None):
        self.mimetype_parser_map = dict(mimetype_parser_map or self.MIMETYPE_PARSER_MAP)

    def extract_content(self, file: FileUpload) -> ExtractedText:
        """
        Decode the upload buffer into raw text.

        Args:
            file (FileUpload): An upload that already passed FileValidator.

        Returns:
            ExtractedText: Raw text and format metadata.

        Raises:
            UnsupportedFileTypeError: If no parser is registered for the mimetype.
            ExtractionFailureError: If decoding fails or yields only whitespace.
        """
        parser_class = self.mimetype_parser_map.get(file.mimetype)
        if parser_class is None:
            raise UnsupportedFileTypeError(
                mimetype=file.mimetype,
                supported_mimetypes=list(self.mimetype_parser_map),
                context="No FileParser registered in ContentExtractor.",
            )

        return parser_class(file).parse()
