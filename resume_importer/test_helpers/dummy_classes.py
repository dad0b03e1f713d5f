"""dummy_classes.py
Holds dummy subclasses of pipeline collaborators to inject in tests.
"""
import time
from typing import List

from resume_importer.exceptions import FieldExtractionError
from resume_importer.models import ExtractedText, FieldCandidate, FileUpload, RawSection
from resume_importer.parse_classes.content_extractor.content_extractor import ContentExtractor
from resume_importer.parse_classes.field_extractor.field_extractor import FieldExtractor
from resume_importer.parse_classes.section_parser.section_item_parser import (
    ParsedItem,
    SectionItemParser,
)


# Dummy subclass for testing where needed
class DummyExtractor(FieldExtractor):
    """A dummy FieldExtractor subclass for testing."""
    SUPPORTED_EXTRACTION_METHODS = ["regex", "ner"]
    DEFAULT_EXTRACTION_METHOD = "regex"
    FIELD_NAME = "full_name"

    REQUIRED_ML_MODELS = {
        "ner": {
            "spacy": ["en_core_web_sm"],
        },
    }

    def __init__(self, value: str = "dummy", confidence: float = 1.0, **kwargs):
        self.value = value
        self.confidence = confidence
        super().__init__(**kwargs)

    def extract(self, header_text: str = "", full_text: str = "") -> FieldCandidate:
        # Minimal implementation for testing
        return FieldCandidate(value=self.value, confidence=self.confidence)


class FailingExtractor(FieldExtractor):
    """A FieldExtractor that always fails (exercises extractor fallbacks)."""
    SUPPORTED_EXTRACTION_METHODS = ["regex"]
    DEFAULT_EXTRACTION_METHOD = "regex"
    FIELD_NAME = "full_name"

    def extract(self, header_text: str = "", full_text: str = "") -> FieldCandidate:
        raise FieldExtractionError(field_name=self.FIELD_NAME, message="Dummy failure")


class FailingSectionParser(SectionItemParser):
    """A SectionItemParser that always raises."""

    def _parse_content(self, content: str, section: RawSection) -> List[ParsedItem]:
        raise RuntimeError("Dummy section parser failure")


class SpyContentExtractor(ContentExtractor):
    """ContentExtractor that records every file it is asked to extract."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls: List[str] = []

    def extract_content(self, file: FileUpload) -> ExtractedText:
        self.calls.append(file.filename)
        return super().extract_content(file)


class FixedTextContentExtractor(ContentExtractor):
    """
    ContentExtractor that skips decoding and returns a fixed text. An optional
    per-filename delay simulates slow files.
    """

    def __init__(self, text: str, delays: dict = None):
        super().__init__()
        self.text = text
        self.delays = delays or {}

    def extract_content(self, file: FileUpload) -> ExtractedText:
        delay = self.delays.get(file.filename)
        if delay:
            time.sleep(delay)
        return ExtractedText(text=self.text, file_format="pdf", page_count=1)
