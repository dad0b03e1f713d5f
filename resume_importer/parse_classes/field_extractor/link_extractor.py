"""link_extractor.py
Extracts profile links (LinkedIn, GitHub, personal website) from resume text.
"""
import re
from typing import List, Literal

from resume_importer.exceptions import FieldExtractionConfigError
from resume_importer.models import FieldCandidate
from resume_importer.parse_classes.field_extractor.field_extractor import FieldExtractor
from resume_importer.parse_classes.field_extractor.helper_functions.normalize import (
    normalize_url,
    normalize_linkedin_url,
)

LINK_TYPES = Literal["linkedin", "github", "website"]

_URL_TAIL = r"[^\s|,;()<>]*"

LINK_REGEX = {
    "linkedin": rf"(?:https?://)?(?:[a-z]{{2,3}}\.)?linkedin\.com/{_URL_TAIL}",
    "github": rf"(?:https?://)?(?:www\.)?github\.com/{_URL_TAIL}",
    # Bare domains are accepted for common personal-site TLDs, but never the
    # domain part of an email address
    "website": (
        r"(?<![@\w.])(?:https?://)?(?:www\.)?[A-Za-z0-9-]+(?:\.[A-Za-z0-9-]+)*"
        r"\.(?:com|io|dev|me|net|org|co|app|tech|ai|site|xyz|info|page|blog|design)\b"
        rf"(?:/{_URL_TAIL})?"
    ),
}

_EXCLUDED_WEBSITE_HOSTS = ("linkedin.com", "github.com")


class LinkExtractor(FieldExtractor):
    """
    Extracts one kind of profile link, selected with `link_type`.

    Args:
        link_type ("linkedin" | "github" | "website"): Which link to extract.
            Also the PersonalInfo field it fills.
    """

    SUPPORTED_EXTRACTION_METHODS = ["regex"]
    DEFAULT_EXTRACTION_METHOD = "regex"

    def __init__(self, link_type: LINK_TYPES, **kwargs):
        if link_type not in LINK_REGEX:
            raise FieldExtractionConfigError(
                field_name=str(link_type),
                message=f"link_type must be one of {list(LINK_REGEX)}",
            )
        self.link_type = link_type
        self.FIELD_NAME = link_type
        super().__init__(**kwargs)

    def extract(self, header_text: str = "", full_text: str = "") -> FieldCandidate:
        normalize = normalize_linkedin_url if self.link_type == "linkedin" else normalize_url
        return self._best_candidate(
            header_values=self._find_links(header_text),
            full_text_values=self._find_links(full_text),
            normalize=normalize,
        )

    def _find_links(self, text: str) -> List[str]:
        links = self._regex_find_all(LINK_REGEX[self.link_type], text, flags=re.IGNORECASE)
        links = [link.rstrip(".,;:") for link in links]
        if self.link_type == "website":
            links = [
                link for link in links
                if not any(host in link.lower() for host in _EXCLUDED_WEBSITE_HOSTS)
            ]
        return [link for link in links if link]
