"""extractor_map.py
Builds the "extractor_map" dictionary used by ContentMapper to decide which
FieldExtractors fill each PersonalInfo field.
"""

import dataclasses
from typing import Dict, List, Optional

from resume_importer.exceptions import ExtractorMapConfigError
from resume_importer.models import PersonalInfo

from resume_importer.parse_classes.field_extractor.field_extractor import FieldExtractor
from resume_importer.parse_classes.field_extractor.name_extractor import NameExtractor
from resume_importer.parse_classes.field_extractor.email_extractor import EmailExtractor
from resume_importer.parse_classes.field_extractor.phone_extractor import PhoneExtractor
from resume_importer.parse_classes.field_extractor.link_extractor import LinkExtractor
from resume_importer.parse_classes.field_extractor.location_extractor import LocationExtractor
from resume_importer.parse_classes.field_extractor.helper_functions.ml.spacy_loader import (
    preload_spacy_models
)

PERSONAL_INFO_FIELDS = [f.name for f in dataclasses.fields(PersonalInfo)]


def build_default_extractor_map(
    use_ner_name_fallback: bool = False,
    loaded_spacy_models: Optional[dict] = None,
) -> Dict[str, List[FieldExtractor]]:
    """
    Builds the default extractor map used by ContentMapper.

    Each field maps to an ordered list of extractors. The first extractor that
    returns a value wins; the rest are fallbacks.

    Args:
        use_ner_name_fallback (bool, default=False): Append a spaCy NER based
            NameExtractor behind the rule-based one.
        loaded_spacy_models (Optional[dict], default=None):
            A cache of preloaded spaCy models shared across extractors.

    Returns:
        dict: Mapping of PersonalInfo field names -> list of extractor instances.

    Example:
        {
            "full_name": [
                NameExtractor(extraction_method="rule"),
                NameExtractor(extraction_method="ner"),
            ],
            "email": [EmailExtractor()],
            ...
        }
    """
    default_extractor_classes_map = {
        "full_name": [
            {"model": NameExtractor, "extraction_method": "rule"},
        ],
        "email": [
            {"model": EmailExtractor, "extraction_method": None},
        ],
        "phone": [
            {"model": PhoneExtractor, "extraction_method": None},
        ],
        "location": [
            {"model": LocationExtractor, "extraction_method": None},
        ],
        "linkedin": [
            {"model": LinkExtractor, "extraction_method": None, "kwargs": {"link_type": "linkedin"}},
        ],
        "github": [
            {"model": LinkExtractor, "extraction_method": None, "kwargs": {"link_type": "github"}},
        ],
        "website": [
            {"model": LinkExtractor, "extraction_method": None, "kwargs": {"link_type": "website"}},
        ],
    }
    if use_ner_name_fallback:
        default_extractor_classes_map["full_name"].append(
            {"model": NameExtractor, "extraction_method": "ner"}
        )

    # Instantiate extractors
    extractor_map = {}
    for field, entries in default_extractor_classes_map.items():
        extractor_map[field] = []
        for entry in entries:
            model_cls = entry["model"]
            extraction_method = entry.get("extraction_method") or model_cls.DEFAULT_EXTRACTION_METHOD
            extractor_map[field].append(
                model_cls(
                    extraction_method=extraction_method,
                    loaded_spacy_models=loaded_spacy_models,
                    **entry.get("kwargs", {}),
                )
            )

    verify_extractor_map(extractor_map)

    return extractor_map


def verify_extractor_map(
    extractor_map: Optional[Dict[str, List[FieldExtractor]]]
) -> None:
    """
    Verifies the format and content of the extractor map.

    Args:
        extractor_map (Dict[str, List[FieldExtractor]]):
            Maps field names to extract to a list of extractor instances to try in order
            if the previous instance fails.

    This method checks that:
    1. The extractor_map is a dictionary
    2. All keys are PersonalInfo field names
    3. All values are lists
    4. All items in the lists are FieldExtractor instances

    Raises:
        ExtractorMapConfigError: If any of the conditions above is not met.
    """
    if not isinstance(extractor_map, dict):
        raise ExtractorMapConfigError(
            f"extractor_map must be a dictionary, got {type(extractor_map).__name__}"
        )
    for field, extractors in extractor_map.items():
        if not isinstance(field, str):
            raise ExtractorMapConfigError(
                f"Field names in extractor_map must be strings, got {type(field).__name__}"
            )
        if field not in PERSONAL_INFO_FIELDS:
            raise ExtractorMapConfigError(
                f"Unknown field '{field}' in extractor_map. Expected one of {PERSONAL_INFO_FIELDS}"
            )
        if not isinstance(extractors, list):
            raise ExtractorMapConfigError(
                f"Value for field '{field}' must be a list, got {type(extractors).__name__}"
            )
        for extractor in extractors:
            if not isinstance(extractor, FieldExtractor):
                raise ExtractorMapConfigError(
                    f"All items in extractor list for field '{field}' must be "
                    f"FieldExtractor instances, got {type(extractor).__name__}"
                )


def unify_extractor_map_model_references(
    extractor_map: Dict[str, List[FieldExtractor]],
    loaded_spacy_models: Dict[str, "spacy.language.Language"],
) -> None:
    """
    Share one spaCy model cache across every extractor in the map and preload
    the models their extraction methods need. Extractors that already carry
    a non-empty cache keep it.
    """
    for extractors in extractor_map.values():
        for extractor in extractors:
            existing_spacy_models = getattr(extractor, "loaded_spacy_models", None)
            if not existing_spacy_models:
                extractor.loaded_spacy_models = loaded_spacy_models

            preload_spacy_models(
                field_extractor=extractor,
                loaded_spacy_models=extractor.loaded_spacy_models,
            )
