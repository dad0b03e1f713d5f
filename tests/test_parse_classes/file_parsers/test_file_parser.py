"""test_file_parser.py
Comprehensive test suite for:
  - FileParser (abstract base)
"""
import pytest

from resume_importer.exceptions import ExtractionFailureError, UnsupportedFileTypeError
from resume_importer.models import ExtractedText, FileUpload

from resume_importer.parse_classes.file_parser.file_parser import FileParser


class DummyTxtParser(FileParser):
    """Minimal concrete parser decoding UTF-8 text buffers."""
    SUPPORTED_MIMETYPES = ["text/plain"]
    FILE_FORMAT = "txt"

    def parse(self) -> ExtractedText:
        text = self._check_final_text(self.file.buffer.decode("utf-8"))
        return ExtractedText(text=text, file_format=self.FILE_FORMAT)


def make_upload(buffer=b"some content", mimetype="text/plain"):
    return FileUpload(filename="test.txt", mimetype=mimetype, buffer=buffer, size=len(buffer))


class TestFileParser:
    """Unit tests for FileParser validation and abstract behavior."""

    def test_cannot_instantiate_directly(self):
        """Cannot instantiate abstract FileParser directly."""
        with pytest.raises(TypeError):
            FileParser(make_upload())

    def test_unsupported_mimetype_error(self):
        """Raises UnsupportedFileTypeError if the mimetype is not in SUPPORTED_MIMETYPES."""
        with pytest.raises(UnsupportedFileTypeError):
            DummyTxtParser(make_upload(mimetype="application/pdf"))

    def test_valid_file_parses(self):
        parser = DummyTxtParser(make_upload())
        assert parser.file.filename == "test.txt"
        assert parser.parse().text == "some content"

    @pytest.mark.parametrize("buffer", [b"", b"   \n\t  "])
    def test_empty_text_raises_extraction_failure(self, buffer):
        """_check_final_text should raise ExtractionFailureError for blank text."""
        with pytest.raises(ExtractionFailureError) as exc_info:
            DummyTxtParser(make_upload(buffer=buffer)).parse()
        assert "no parsable text" in str(exc_info.value).lower()
        assert exc_info.value.filename == "test.txt"

    def test_check_final_text_returns_text_untouched(self):
        parser = DummyTxtParser(make_upload())
        assert parser._check_final_text("  John Doe\n• Python  ") == "  John Doe\n• Python  "
