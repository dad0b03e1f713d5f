"""content_mapper.py
Utilizes FieldExtractor and SectionItemParser subclasses to turn a segmented
resume (header text + RawSections) into ResumeData.
"""
from typing import Dict, List, Optional, Tuple

from resume_importer.config import SCANNER_DEFAULTS
from resume_importer.logging import LoggerFactory, running_under_pytest
from resume_importer.models import (
    ExperienceItem,
    FieldCandidate,
    FieldError,
    MappingResult,
    PersonalInfo,
    RawSection,
    ResumeData,
    ResumeSection,
    SectionType,
    to_camel_case,
)

from resume_importer.parse_classes.field_extractor.field_extractor import FieldExtractor
from resume_importer.parse_classes.section_parser.section_item_parser import SectionItemParser
from resume_importer.parse_classes.scoring.confidence_scorer import (
    ConfidenceScorer,
    WeightedConfidenceScorer,
)
from resume_importer.parse_classes.content_mapper.helpers.extractor_map import (
    PERSONAL_INFO_FIELDS,
    build_default_extractor_map,
    unify_extractor_map_model_references,
    verify_extractor_map,
)
from resume_importer.parse_classes.section_parser.helpers.section_parser_map import (
    build_default_section_parser_map,
    verify_section_parser_map,
)
from resume_importer.parse_classes.resume_validator.helpers.validation_messages import (
    INVALID_EMAIL,
    MISSING_LOCATION_WARNING,
    MISSING_NAME,
    MISSING_PHONE_WARNING,
    empty_section_warning,
    missing_description_warning,
)

# Field failures go to per-field logs, section failures to the shared one
logger_factory = LoggerFactory()
section_failure_logger = logger_factory.get_logger(
    name="section_parse_failures",
    logger_type="parser",
    console=False,
)


class ContentMapper:
    """
    Maps segmented resume text into ResumeData and scores the result.

    The extractor_map allows multiple "backup" extractors per personal-info
    field. If one extractor raises an exception, the next in the list is
    attempted. The section_parser_map routes every SectionType to the parser
    that builds its items.

    Attributes:
        extractor_map (Dict[str, List[FieldExtractor]]):
            Maps PersonalInfo field names to a list of extractor instances to try in order.
        section_parser_map (Dict[SectionType, SectionItemParser]):
            Maps every SectionType to its item parser.
        scorer (ConfidenceScorer): Combines field and item confidences.
        min_field_weight (int): Floor on the content-length weight of one entry.
    """

    def __init__(
        self,
        extractor_map: Optional[Dict[str, List[FieldExtractor]]] = None,
        section_parser_map: Optional[Dict[SectionType, SectionItemParser]] = None,
        scorer: Optional[ConfidenceScorer] = None,
        min_field_weight: int = SCANNER_DEFAULTS.MIN_FIELD_WEIGHT,
        loaded_spacy_models: Optional[Dict[str, "spacy.language.Language"]] = None,
    ):
        """
        Args:
            extractor_map (Optional[Dict[str, List[FieldExtractor]]]):
                Map of PersonalInfo field names to fallback extractor lists. If None,
                build_default_extractor_map() is used.

                Example:
                    {
                        "full_name": [NameExtractor("rule"), NameExtractor("ner")],
                        "email": [EmailExtractor()],
                    }
            section_parser_map (Optional[Dict[SectionType, SectionItemParser]]):
                Must cover every SectionType. If None, build_default_section_parser_map()
                is used.
            scorer (Optional[ConfidenceScorer]): Defaults to WeightedConfidenceScorer().
            min_field_weight (int): Minimum scoring weight of one entry.
            loaded_spacy_models (Optional[Dict[str, spacy.language.Language]]): Optional
                cache of spaCy models shared across extractors.
        """
        self.loaded_spacy_models = loaded_spacy_models if loaded_spacy_models is not None else {}

        if extractor_map is None:
            extractor_map = build_default_extractor_map(loaded_spacy_models=self.loaded_spacy_models)
        else:
            verify_extractor_map(extractor_map)
            unify_extractor_map_model_references(
                extractor_map=extractor_map,
                loaded_spacy_models=self.loaded_spacy_models,
            )
        self.extractor_map = extractor_map

        if section_parser_map is None:
            section_parser_map = build_default_section_parser_map()
        else:
            verify_section_parser_map(section_parser_map)
        self.section_parser_map = section_parser_map

        self.scorer = scorer or WeightedConfidenceScorer()
        self.min_field_weight = min_field_weight

    # ----------------------
    # Public interface
    # ----------------------
    def map(
        self,
        header_text: str,
        sections: List[RawSection],
        raw_text: str = "",
    ) -> MappingResult:
        """
        Build ResumeData from the header region and sections.

        Args:
            header_text (str): Text before the first section heading.
            sections (List[RawSection]): Ordered sections from the SectionSegmenter.
            raw_text (str): Whole document text. Extractors fall back to it when a
                field is not in the header. Rebuilt from the inputs when empty.

        Returns:
            MappingResult: ResumeData plus per-field confidences, the overall mapping
            confidence and mapper errors/warnings.
        """
        full_text = raw_text or "\n\n".join(
            [header_text] + [f"{s.title}\n{s.raw_content}" for s in sections]
        )

        entries: List[Tuple[float, float]] = []
        field_confidence: Dict[str, float] = {}
        errors: List[FieldError] = []
        warnings: List[str] = []

        personal_info = self._map_personal_info(
            header_text, full_text, entries, field_confidence
        )

        if not personal_info.full_name:
            errors.append(FieldError(field="fullName", message=MISSING_NAME))
            entries.append((self.min_field_weight, 0.0))
        if not personal_info.email:
            errors.append(FieldError(field="email", message=INVALID_EMAIL))
            entries.append((self.min_field_weight, 0.0))
        if not personal_info.phone:
            warnings.append(MISSING_PHONE_WARNING)
        if not personal_info.location:
            warnings.append(MISSING_LOCATION_WARNING)

        resume_sections = [
            self._map_section(index, raw_section, entries, field_confidence, warnings)
            for index, raw_section in enumerate(sections)
        ]

        return MappingResult(
            resume_data=ResumeData(personal_info=personal_info, sections=resume_sections),
            field_confidence=field_confidence,
            confidence=round(self.scorer.score_entries(entries), 4),
            errors=errors,
            warnings=warnings,
        )

    # ----------------------
    # Personal info
    # ----------------------
    def _map_personal_info(
        self,
        header_text: str,
        full_text: str,
        entries: List[Tuple[float, float]],
        field_confidence: Dict[str, float],
    ) -> PersonalInfo:
        personal_info = PersonalInfo()
        for field_name in PERSONAL_INFO_FIELDS:
            if field_name not in self.extractor_map:
                continue
            candidate = self._extract_field_with_fallback(field_name, header_text, full_text)
            if candidate is None or not candidate.value:
                continue

            setattr(personal_info, field_name, candidate.value)
            entries.append((max(len(candidate.value), self.min_field_weight), candidate.confidence))
            field_confidence[f"personalInfo.{to_camel_case(field_name)}"] = candidate.confidence
        return personal_info

    def _extract_field_with_fallback(
        self,
        field_name: str,
        header_text: str,
        full_text: str,
    ) -> Optional[FieldCandidate]:
        """
        Attempt to extract a single field using all configured extractors.

        Extraction is attempted in the order defined in self.extractor_map[field_name].
        - If an extractor succeeds, its candidate is returned immediately.
        - If all extractors fail, returns None (the PersonalInfo default stays).

        Logs extractor failures to the field's own failure log, unless running under pytest.
        """
        for extractor in self.extractor_map.get(field_name, []):
            try:
                return extractor.extract(header_text=header_text, full_text=full_text)
            except Exception as e:
                if not running_under_pytest():
                    logger_factory.get_field_logger(to_camel_case(field_name)).warning(
                        f"Extractor '{type(extractor).__name__}' failed: {str(e)}"
                    )
                # Continue to next extractor
        return None

    # ----------------------
    # Sections
    # ----------------------
    def _map_section(
        self,
        index: int,
        raw_section: RawSection,
        entries: List[Tuple[float, float]],
        field_confidence: Dict[str, float],
        warnings: List[str],
    ) -> ResumeSection:
        entries.append(
            (max(len(raw_section.raw_content), self.min_field_weight), raw_section.heading_confidence)
        )
        field_confidence[f"sections[{index}].heading"] = raw_section.heading_confidence

        parser = (
            self.section_parser_map.get(raw_section.guessed_type)
            or self.section_parser_map[SectionType.CUSTOM]
        )
        try:
            parsed_items = parser.parse(raw_section)
        except Exception as e:
            if not running_under_pytest():
                section_failure_logger.warning(
                    f"Section '{raw_section.title}' failed in parser '{type(parser).__name__}': {str(e)}"
                )
            warnings.append(f"Section '{raw_section.title}' could not be parsed: {str(e)}")
            parsed_items = []

        if not parsed_items:
            warnings.append(empty_section_warning(raw_section.title))

        for item_index, parsed in enumerate(parsed_items):
            entries.append(
                (max(len(parsed.source_text), self.min_field_weight), parsed.confidence)
            )
            field_confidence[f"sections[{index}].items[{item_index}]"] = parsed.confidence
            if isinstance(parsed.item, ExperienceItem) and not parsed.item.description:
                warnings.append(missing_description_warning(raw_section.title, item_index))

        return ResumeSection(
            type=raw_section.guessed_type,
            title=raw_section.title,
            items=[parsed.item for parsed in parsed_items],
            visible=True,
            order=raw_section.order,
        )
