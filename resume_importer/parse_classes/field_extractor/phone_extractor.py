"""phone_extractor.py
Extracts phone numbers from resume text.
"""
from resume_importer.models import FieldCandidate
from resume_importer.parse_classes.field_extractor.field_extractor import FieldExtractor
from resume_importer.parse_classes.field_extractor.helper_functions.normalize import (
    normalize_phone_number
)


class PhoneExtractor(FieldExtractor):
    """
    Extracts the candidate's phone number with COMMON_REGEX['phone_number'] and
    formats US numbers as `(555) 123-4567`.
    """

    SUPPORTED_EXTRACTION_METHODS = ["regex"]
    DEFAULT_EXTRACTION_METHOD = "regex"
    FIELD_NAME = "phone"

    def extract(self, header_text: str = "", full_text: str = "") -> FieldCandidate:
        pattern = self.COMMON_REGEX["phone_number"]
        return self._best_candidate(
            header_values=self._regex_find_all(pattern, header_text),
            full_text_values=self._regex_find_all(pattern, full_text),
            normalize=normalize_phone_number,
        )
