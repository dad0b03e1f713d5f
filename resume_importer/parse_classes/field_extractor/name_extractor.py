"""name_extractor.py
Extracts the candidate's full name from the top of a resume.
"""
import re
from typing import List, Optional

from resume_importer.config import SCANNER_DEFAULTS
from resume_importer.models import FieldCandidate
from resume_importer.parse_classes.field_extractor.field_extractor import FieldExtractor
from resume_importer.parse_classes.field_extractor.helper_functions.normalize import normalize_full_name
from resume_importer.parse_classes.field_extractor.location_extractor import (
    CITY_REGION_REGEX,
    US_LOCATION_REGEX,
)
from resume_importer.parse_classes.section_segmenter.helpers.heading_vocabulary import lookup_heading

# Separators commonly used to put contact details on the name line
_CONTACT_SEPARATOR_RE = re.compile(r"\s*(?:\||•|·|◦|\s[-–—]\s)\s*")

# Letters (any script), apostrophes, hyphens and initials
_NAME_WORD_RE = re.compile(r"^[^\W\d_][^\W\d_'’.-]*(?:['’.-][^\W\d_]*)*\.?$")

# Suffixes written after a comma on the name line ("John Doe, PhD, PMP")
CREDENTIAL_SUFFIXES = {
    "phd", "md", "do", "dds", "pharmd", "jd", "esq", "mba", "ma", "ms", "msc", "ba", "bs", "bsc",
    "cpa", "cfa", "pmp", "pe", "rn", "lpn", "np", "cissp", "shrm-cp", "jr", "sr", "ii", "iii", "iv",
}

# Lines considered when there is no header region at all
_FULL_TEXT_LINE_LIMIT = 5


class NameExtractor(FieldExtractor):
    """
    Extracts the candidate's name.

    Supports:
        - 'rule': First header line (or leading segment of it) that is not a
          contact detail, location or section heading. Credential suffixes
          after a comma are dropped.
        - 'ner': SpaCy Named Entity Recognition (PERSON entity).

    Only the header region is searched. The top of the full text is used when
    the header region is empty and only up to the first section heading, so
    job titles inside sections never become the name.
    """

    SUPPORTED_EXTRACTION_METHODS = ["rule", "ner"]
    DEFAULT_EXTRACTION_METHOD = "rule"
    FIELD_NAME = "full_name"

    REQUIRED_ML_MODELS = {
        "ner": {
            "spacy": [SCANNER_DEFAULTS.SPACY_MODEL_NAME],
        }
    }

    def extract(self, header_text: str = "", full_text: str = "") -> FieldCandidate:
        """
        Extract the name using the chosen extraction method. Names written
        fully upper or lower case are title-cased.

        Raises:
            NotImplementedError: If extraction method is unsupported.
            FieldExtractionError: If no name-like text could be found.
        """
        if self.extraction_method == "rule":
            search = self._rule_extract
        elif self.extraction_method == "ner":
            search = self._ner_extract
        else:
            raise NotImplementedError(
                f"Extraction method '{self.extraction_method}' is not implemented for NameExtractor."
            )

        top_of_document = "" if header_text.strip() else self._lines_before_first_heading(full_text)

        return self._best_candidate(
            header_values=search(header_text),
            full_text_values=search(top_of_document),
            normalize=normalize_full_name,
        )

    @staticmethod
    def _lines_before_first_heading(full_text: str) -> str:
        lines = []
        for line in full_text.split("\n"):
            if not line.strip():
                continue
            if lookup_heading(line) or len(lines) == _FULL_TEXT_LINE_LIMIT:
                break
            lines.append(line)
        return "\n".join(lines)

    # -------------------
    # Rule extraction
    # -------------------
    def _rule_extract(self, text: str) -> List[str]:
        """
        The first usable line is the name. Later lines only count towards the
        candidate total (and so lower confidence) when they are name-shaped.
        """
        candidates = [name for name in map(self._name_from_line, text.split("\n")) if name]
        if not candidates:
            return []
        return candidates[:1] + [name for name in candidates[1:] if self._looks_like_name(name)]

    def _name_from_line(self, line: str) -> Optional[str]:
        """Return the leading non-contact segment of `line`, if any."""
        line = line.strip()
        if not line or lookup_heading(line):
            return None

        segment = _CONTACT_SEPARATOR_RE.split(line)[0].strip().rstrip(",")
        segment = strip_credentials(segment)
        if self._is_contact_detail(segment):
            return None
        return segment

    def _is_contact_detail(self, text: str) -> bool:
        """Emails, phones, URLs, locations and anything too short/long or digit heavy."""
        if not 3 <= len(text) < 50 or not any(c.isalpha() for c in text):
            return True
        if re.search(self.COMMON_REGEX["email_address"], text) or "@" in text:
            return True
        if re.search(self.COMMON_REGEX["url"], text) or "/" in text or ".com" in text.lower():
            return True
        if re.search(r"\d{3}", text) or re.search(self.COMMON_REGEX["phone_number"], text):
            return True
        return bool(
            re.fullmatch(US_LOCATION_REGEX, text)
            or re.fullmatch(CITY_REGION_REGEX, text)
            or text.lower() == "remote"
        )

    @staticmethod
    def _looks_like_name(text: str) -> bool:
        """A plain 2-4 word personal name."""
        if not text or any(c.isdigit() for c in text):
            return False
        words = text.split()
        if not 2 <= len(words) <= 4:
            return False
        return all(_NAME_WORD_RE.match(word) for word in words)

    # -------------------
    # NER extraction
    # -------------------
    def _ner_extract(self, text: str) -> List[str]:
        """
        Identify PERSON entities with spaCy and keep only multi-word names that
        pass the name shape check.
        """
        entities = self._spacy_search(
            text=text,
            model_name=SCANNER_DEFAULTS.SPACY_MODEL_NAME,
            ner_label="PERSON",
        )
        return [
            entity.strip() for entity in entities
            if self._looks_like_name(entity.strip())
        ]


def strip_credentials(text: str) -> str:
    """`"John Doe, PhD, PMP"` -> `"John Doe"`. Text is kept whole if any suffix is not a credential."""
    name, *suffixes = [part.strip() for part in text.split(",")]
    if suffixes and all(suffix.replace(".", "").lower() in CREDENTIAL_SUFFIXES for suffix in suffixes):
        return name
    return text
