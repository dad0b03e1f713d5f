"""email_extractor.py
Extracts email addresses from resume text.
"""
import re

from resume_importer.config import SCANNER_DEFAULTS
from resume_importer.models import FieldCandidate
from resume_importer.parse_classes.field_extractor.field_extractor import FieldExtractor
from resume_importer.parse_classes.field_extractor.helper_functions.normalize import normalize_email


class EmailExtractor(FieldExtractor):
    """
    Extracts the candidate's email address.

    Supports:
        - 'regex': Pattern-based extraction using COMMON_REGEX['email_address'].
        - 'rule': Token-level SpaCy heuristic using `token.like_email`.
    """

    SUPPORTED_EXTRACTION_METHODS = ["regex", "rule"]
    DEFAULT_EXTRACTION_METHOD = "regex"
    FIELD_NAME = "email"

    REQUIRED_ML_MODELS = {
        "rule": {
            "spacy": [SCANNER_DEFAULTS.SPACY_MODEL_NAME],
        }
    }

    def extract(self, header_text: str = "", full_text: str = "") -> FieldCandidate:
        """
        Extract the email address using the chosen extraction method.

        Returns:
            FieldCandidate: The first detected email address, lower-cased.

        Raises:
            NotImplementedError: If extraction method is unsupported.
            FieldExtractionError: If no email could be extracted.
        """
        if self.extraction_method == "regex":
            search = self._regex_extract
        elif self.extraction_method == "rule":
            search = self._rule_extract
        else:
            raise NotImplementedError(
                f"Extraction method '{self.extraction_method}' is not implemented for EmailExtractor."
            )

        return self._best_candidate(
            header_values=search(header_text),
            full_text_values=search(full_text) if self.SEARCH_FULL_TEXT else [],
            normalize=normalize_email,
        )

    def _regex_extract(self, text: str):
        return self._regex_find_all(self.COMMON_REGEX["email_address"], text)

    def _rule_extract(self, text: str):
        """
        Uses SpaCy's `token.like_email` attribute, which identifies tokens
        resembling valid email addresses.
        """
        return [
            token for token in self._spacy_search(
                text=text,
                model_name=SCANNER_DEFAULTS.SPACY_MODEL_NAME,
                token_attr="like_email",
            )
            if re.fullmatch(self.COMMON_REGEX["email_address"], token)
        ]
