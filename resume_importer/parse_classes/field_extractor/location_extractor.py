"""location_extractor.py
Extracts the candidate's location from the resume header.
"""
import re
from typing import List

from resume_importer.models import FieldCandidate
from resume_importer.parse_classes.field_extractor.field_extractor import FieldExtractor

_CITY = r"\b[A-Z][A-Za-z.'-]+(?: [A-Z][A-Za-z.'-]+){0,3}"

# "San Diego, CA" / "Austin, TX 78701"
US_LOCATION_REGEX = _CITY + r", ?[A-Z]{2}\b(?: \d{5})?"
# "London, United Kingdom"
CITY_REGION_REGEX = _CITY + r", ?[A-Z][a-z]+(?: [A-Z][a-z]+){0,2}\b"
REMOTE_REGEX = r"\bRemote\b"


class LocationExtractor(FieldExtractor):
    """
    Extracts a `City, Region` location from the header region only. Locations
    further down the document usually belong to jobs or schools.

    `City, ST` matches are preferred. `City, Region` and "Remote" are only
    used when no such match exists, since lines like "Engineer, Acme Corp"
    share their shape.
    """

    SUPPORTED_EXTRACTION_METHODS = ["regex"]
    DEFAULT_EXTRACTION_METHOD = "regex"
    FIELD_NAME = "location"
    SEARCH_FULL_TEXT = False

    def extract(self, header_text: str = "", full_text: str = "") -> FieldCandidate:
        segments = self._header_segments(header_text)
        for pattern in (US_LOCATION_REGEX, CITY_REGION_REGEX, REMOTE_REGEX):
            locations = self._find_all_in_segments(pattern, segments)
            if locations:
                return self._best_candidate(header_values=locations, full_text_values=[])
        return self._best_candidate(header_values=[], full_text_values=[])

    def _header_segments(self, text: str) -> List[str]:
        segments = []
        for line in text.split("\n"):
            # Keep email/URL fragments out of the search
            cleaned = re.sub(self.COMMON_REGEX["email_address"], " ", line)
            cleaned = re.sub(self.COMMON_REGEX["url"], " ", cleaned)
            segments.extend(re.split(r"\s*(?:\||•|·|\s[-–—]\s)\s*", cleaned))
        return [segment for segment in segments if segment.strip()]

    @staticmethod
    def _find_all_in_segments(pattern: str, segments: List[str]) -> List[str]:
        matches = []
        for segment in segments:
            match = re.search(pattern, segment)
            if match:
                matches.append(match.group(0))
        return matches
