"""field_extractor.py
Holds abstract FieldExtractor class inherited by field-specific extractors.
"""
import re
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Literal, Optional

from resume_importer.models import FieldCandidate
from resume_importer.exceptions import FieldExtractionError, FieldExtractionConfigError

# Define allowed extraction methods (if implemented)
EXTRACTION_METHODS = Literal[
    "regex",
    "ner",
    "rule",
]

# Confidence multiplier for values found outside the header region
OUTSIDE_HEADER_FACTOR = 0.8


class FieldExtractor(ABC):
    """
    Abstract base class for extracting a single personal-info field from a resume.
    Concrete extractors must implement the `extract` method.

    Extractors hold configuration only. The text to search is passed to every
    `extract` call so one instance can serve parallel parses.

    Extraction Methods:
        - regex: Uses regular expressions to identify patterns in text.
        - ner: Uses a spaCy Named Entity Recognition model to extract entities.
        - rule: Uses simple rule-based logic, keyword matching, or heuristics.
    """
    # Define supported methods and a default method in each subclass (define in each child)
    SUPPORTED_EXTRACTION_METHODS: List[str] = []
    DEFAULT_EXTRACTION_METHOD = None

    # PersonalInfo attribute filled by this extractor (define in each child)
    FIELD_NAME: str = ""

    # Search the whole document when the header region has no match
    SEARCH_FULL_TEXT = True

    # Define which models are required to run different extraction methods (define in each child)
    # Retrieved when pre-loading models.
    REQUIRED_ML_MODELS = {}
    # Example:
        # REQUIRED_ML_MODELS = {
        #     "ner": {
        #         "spacy": ["en_core_web_sm"],
        #     }
        # }

    # Define common regex queries that might be used in different subclasses
    COMMON_REGEX: dict = {
        # Email address: Covers standardized email format
        "email_address": r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b",
        # Phone Number: Covers common phone formats:
        # -> `+1 123-456-7890`, `(123) 456-7890`, `123-456-7890`, `123.456.7890`, `1234567890`
        "phone_number": (
            r"(?<![\d\w])"
            r"(\+?\d{1,3}[\s.-]?)?"           # Optional country code
            r"(\(?\d{3}\)?[\s.-]?)"           # Area code with optional parentheses
            r"\d{3}[\s.-]?\d{4}"              # Local number
            r"(?!\d)"
        ),
        # URL with an explicit scheme or www prefix
        "url": r"(?:https?://|www\.)[^\s|,;()<>]+",
    }

    def __init__(
        self,
        extraction_method: Optional[EXTRACTION_METHODS] = None,
        loaded_spacy_models: Optional[Dict[str, "spacy.language.Language"]] = None,
    ):
        """
        Args:
            extraction_method (EXTRACTION_METHODS | None): Which extraction strategy to use.
                Defaults to the subclass's default method.
            loaded_spacy_models (Optional[Dict[str, spacy.language.Language]] default = None): Optional
                cache of SpaCy models to use instead of loading from scratch. If not provided then
                models will be loaded every time they are needed.
        """
        self.extraction_method = extraction_method
        self.loaded_spacy_models = loaded_spacy_models

        # Check that the current extraction method is valid (for subclass)
        self._validate_extraction_method()

    @staticmethod
    def _requires_text(func):
        """Decorator to ensure there is some text to search before execution."""
        def wrapper(self, header_text: str = "", full_text: str = "", *args, **kwargs):
            if not (header_text or "").strip() and not (full_text or "").strip():
                raise FieldExtractionConfigError(
                    field_name=self.FIELD_NAME,
                    message=f"{func.__name__} requires header_text or full_text to be set",
                )
            return func(self, header_text or "", full_text or "", *args, **kwargs)
        return wrapper

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if "extract" in cls.__dict__:
            cls.extract = cls._requires_text(cls.extract)

    def _validate_extraction_method(self) -> None:
        """
        Validate and set the extraction method for the FieldExtractor instance.

        If no method is provided, it defaults to the class's `DEFAULT_EXTRACTION_METHOD`.

        Raises:
            NotImplementedError: If `extraction_method` is not in
                `SUPPORTED_EXTRACTION_METHODS`.
            ValueError: If no `SUPPORTED_EXTRACTION_METHODS` are defined in the
                subclass.
        """
        if self.extraction_method:
            # Non acceptable extraction method for specific FieldExtractor subclass
            if self.extraction_method not in self.SUPPORTED_EXTRACTION_METHODS:
                raise NotImplementedError(
                    f"Unsupported extraction_method '{self.extraction_method}' for {self.__class__.__name__}"
                )
        else:
            # No SUPPORTED_EXTRACTION_METHODS defined in subclass
            if not self.SUPPORTED_EXTRACTION_METHODS:
                raise ValueError(f"{self.__class__.__name__} must define SUPPORTED_EXTRACTION_METHODS")
            self.extraction_method = self.DEFAULT_EXTRACTION_METHOD

    @abstractmethod
    def extract(self, header_text: str = "", full_text: str = "") -> FieldCandidate:
        """
        Extract the field using the chosen `extraction_method`.

        The header region is searched first. When it has no match and
        `SEARCH_FULL_TEXT` is set, the whole document is searched and the
        resulting confidence is scaled down.

        Args:
            header_text (str): Text above the first section heading.
            full_text (str): The complete resume text.

        Returns:
            FieldCandidate: The extracted (normalized) value and its confidence.

        Raises:
            NotImplementedError: If the subclass has not implemented this method.
            FieldExtractionError: If extraction fails (e.g., no value found).
            FieldExtractionConfigError: If extraction fails due to invalid configuration.
        """
        pass

    # ----------------------
    # CANDIDATE SCORING
    # ----------------------
    @staticmethod
    def candidate_count_confidence(candidate_count: int) -> float:
        """1.0 for a single clean hit, lower when several distinct candidates compete."""
        if candidate_count <= 1:
            return 1.0
        if candidate_count <= 3:
            return 0.85
        return 0.6

    def _best_candidate(
        self,
        header_values: List[str],
        full_text_values: List[str],
        normalize: Optional[Callable[[str], str]] = None,
    ) -> FieldCandidate:
        """
        Pick the first value (header first) and score it by how many distinct
        candidates were found in the searched region.

        Raises:
            FieldExtractionError: If neither region produced a value.
        """
        normalize = normalize or (lambda value: value.strip())

        if header_values:
            values, scope_factor = header_values, 1.0
        elif full_text_values and self.SEARCH_FULL_TEXT:
            values, scope_factor = full_text_values, OUTSIDE_HEADER_FACTOR
        else:
            raise FieldExtractionError(
                field_name=self.FIELD_NAME,
                message=(
                    "Could not extract a value from the resume using the "
                    f"`{self.extraction_method}` extraction method"
                ),
            )

        distinct = list(dict.fromkeys(normalize(value) for value in values if value.strip()))
        confidence = self.candidate_count_confidence(len(distinct)) * scope_factor
        return FieldCandidate(value=distinct[0], confidence=round(confidence, 4))

    # ----------------------
    # REGEX HANDLING
    # ----------------------
    @staticmethod
    def _regex_find_all(pattern: str, text: str, flags: int = 0) -> List[str]:
        """Return every full match of `pattern` in `text`, in order of appearance."""
        return [match.group(0).strip() for match in re.finditer(pattern, text or "", flags)]

    # ----------------------
    # SPACY HANDLING
    # ----------------------
    def _spacy_search(
        self,
        text: str,
        model_name: str,
        ner_label: Optional[str] = None,
        token_attr: Optional[str] = None,
    ) -> List[str]:
        """
        Run SpaCy extraction over `text`. Runs `load_spacy_model` to either load a
        model or utilize the `self.loaded_spacy_models` cache to retrieve the model
        if it was pre-loaded.

        Supports:
            1. NER-based search for entities matching `ner_label`.
            2. Rule-based token attribute search using `token_attr`.

        Args:
            text (str): Text to run the model on.
            model_name (str): SpaCy model to load.
            ner_label (str | None): The target NER entity label to search for (e.g., "PERSON").
            token_attr (str | None): SpaCy token attribute to check (e.g., "like_email").

        Returns:
            List[str]: Every matching entity or token text, in document order.
        """
        if not ner_label and not token_attr:
            raise FieldExtractionConfigError(
                field_name=self.FIELD_NAME,
                message="Either `ner_label` or `token_attr` is required to run a spacy search",
            )
        from resume_importer.parse_classes.field_extractor.helper_functions.ml.spacy_loader import (
            load_spacy_model
        )

        if not text.strip():
            return []

        # Load the model (either fresh or from self.loaded_spacy_models cache)
        nlp = load_spacy_model(model_name, self.loaded_spacy_models)
        doc = nlp(text)

        matches = []
        if ner_label:
            matches.extend(
                ent.text for ent in doc.ents if ent.label_.upper() == ner_label.upper()
            )
        if token_attr:
            matches.extend(token.text for token in doc if getattr(token, token_attr, False))
        return matches
