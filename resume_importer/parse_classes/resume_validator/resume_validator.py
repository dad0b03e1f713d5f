"""resume_validator.py
Holds ResumeValidator which checks mapped ResumeData for hard requirements,
structure and advisory quality issues, and scores how complete it is.
"""
import re
import dataclasses
from typing import List, Optional, Tuple

from pydantic import HttpUrl, TypeAdapter, ValidationError

from resume_importer.models import (
    EducationItem,
    ExperienceItem,
    FieldError,
    PersonalInfo,
    ProjectItem,
    ResumeData,
    SectionType,
    SkillsItem,
    ValidationResult,
)
from resume_importer.parse_classes.scoring.confidence_scorer import (
    ConfidenceScorer,
    WeightedConfidenceScorer,
)
from resume_importer.parse_classes.resume_validator.helpers.validation_messages import (
    INVALID_EMAIL,
    MISSING_LOCATION_WARNING,
    MISSING_NAME,
    MISSING_PHONE_WARNING,
)

EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9-]+(?:\.[A-Za-z0-9-]+)*\.[A-Za-z]{2,}$")
URL_FIELD_HOSTS = {
    "linkedin": "linkedin.com",
    "github": "github.com",
    "website": None,
}
RECOMMENDED_SECTIONS = (SectionType.EXPERIENCE, SectionType.EDUCATION)
MIN_SKILLS_PER_GROUP = 3
MIN_DESCRIPTION_LINES = 2
PERSONAL_INFO_FIELD_COUNT = len(dataclasses.fields(PersonalInfo))

_HTTP_URL_ADAPTER = TypeAdapter(HttpUrl)


class ResumeValidator:
    """
    Validates ResumeData produced by the ContentMapper.

    Errors (make the data invalid):
        - empty full name, missing or malformed email
        - linkedin / github / website values that are not valid http(s) URLs
        - a section whose items are None

    Warnings (advisory only): missing phone or location, unrecognized section
    types, missing experience/education sections, and thin section items.

    Args:
        scorer (ConfidenceScorer | None): Formula for the validation confidence.
            Defaults to WeightedConfidenceScorer().
    """

    def __init__(self, scorer: Optional[ConfidenceScorer] = None):
        self.scorer = scorer or WeightedConfidenceScorer()

    def validate_resume_data(self, resume_data: ResumeData) -> ValidationResult:
        """
        Validate a ResumeData instance.

        Args:
            resume_data (ResumeData): Structured resume to check.

        Returns:
            ValidationResult: `is_valid` is True when no errors were found. The
            confidence is `0.5 * completeness + 0.3 * recognized/total sections +
            0.2 * content richness` by default.
        """
        errors: List[FieldError] = []
        warnings: List[str] = []

        self._validate_personal_info(resume_data.personal_info, errors, warnings)
        recognized_count = self._validate_sections(resume_data, errors, warnings)

        completeness = field_completeness(resume_data)
        section_count = len(resume_data.sections)
        recognized_ratio = recognized_count / section_count if section_count else 0.0
        richness = self._richness(resume_data)

        confidence = self.scorer.score_validation(
            completeness=completeness,
            recognized_ratio=recognized_ratio,
            richness=richness,
        )
        return ValidationResult(
            is_valid=not errors,
            confidence=round(confidence, 4),
            completeness=round(completeness, 4),
            errors=errors,
            warnings=warnings,
        )

    # ----------------------
    # Personal info
    # ----------------------
    def _validate_personal_info(
        self,
        personal_info: PersonalInfo,
        errors: List[FieldError],
        warnings: List[str],
    ) -> None:
        if not personal_info.full_name or not personal_info.full_name.strip():
            errors.append(FieldError(field="fullName", message=MISSING_NAME))
        if not is_valid_email(personal_info.email):
            errors.append(FieldError(field="email", message=INVALID_EMAIL))

        for field_name, expected_host in URL_FIELD_HOSTS.items():
            value = getattr(personal_info, field_name)
            if value and not is_valid_url(value, expected_host):
                errors.append(FieldError(field=field_name, message=f"Invalid URL: {value}"))

        if not personal_info.phone:
            warnings.append(MISSING_PHONE_WARNING)
        if not personal_info.location:
            warnings.append(MISSING_LOCATION_WARNING)

    # ----------------------
    # Sections
    # ----------------------
    def _validate_sections(
        self,
        resume_data: ResumeData,
        errors: List[FieldError],
        warnings: List[str],
    ) -> int:
        """Validate every section and return how many have a recognized type."""
        recognized_count = 0
        present_types = set()

        for index, section in enumerate(resume_data.sections):
            if SectionType.is_recognized(section.type):
                recognized_count += 1
                present_types.add(SectionType(section.type))
            else:
                warnings.append(f"Unrecognized section type '{section.type}' in '{section.title}'")

            if section.items is None:
                errors.append(
                    FieldError(field=f"sections[{index}].items", message="Section items must be a list")
                )
                continue

            for item_index, item in enumerate(section.items):
                warnings.extend(self._item_warnings(section.title, item_index, item))

        for section_type in RECOMMENDED_SECTIONS:
            if section_type not in present_types:
                warnings.append(f"Missing recommended section: {section_type.value}")

        return recognized_count

    @staticmethod
    def _item_warnings(title: str, index: int, item) -> List[str]:
        label = f"item {index + 1} in '{title}'"
        if isinstance(item, ExperienceItem):
            found = []
            if not item.start_date:
                found.append(f"Experience {label} is missing a start date")
            if 0 < len(item.description) < MIN_DESCRIPTION_LINES:
                found.append(f"Experience {label} has a brief description")
            return found
        if isinstance(item, EducationItem) and not item.graduation_date:
            return [f"Education {label} is missing a graduation date"]
        if isinstance(item, SkillsItem) and len(item.skills) < MIN_SKILLS_PER_GROUP:
            return [f"Skills group '{item.category}' in '{title}' lists very few skills"]
        if isinstance(item, ProjectItem) and not item.description:
            return [f"Project {label} has no description"]
        return []

    # ----------------------
    # Scoring inputs
    # ----------------------
    @staticmethod
    def _richness(resume_data: ResumeData) -> float:
        """
        Share of rich units among experience items, project items and skill groups.
        Rich means at least two description lines, or at least three skills.
        """
        rich, units = _count_rich_units(resume_data)
        return rich / units if units else 0.0


def field_completeness(resume_data: ResumeData) -> float:
    """(filled personal fields + sections with items) / (7 + number of sections)."""
    personal_info = resume_data.personal_info
    filled_fields = sum(
        1 for f in dataclasses.fields(PersonalInfo) if getattr(personal_info, f.name)
    )
    filled_sections = sum(1 for section in resume_data.sections if section.items)
    total = PERSONAL_INFO_FIELD_COUNT + len(resume_data.sections)
    return (filled_fields + filled_sections) / total


def _count_rich_units(resume_data: ResumeData) -> Tuple[int, int]:
    rich = units = 0
    for section in resume_data.sections:
        for item in section.items or []:
            if isinstance(item, ExperienceItem):
                units += 1
                rich += len(item.description) >= MIN_DESCRIPTION_LINES
            elif isinstance(item, ProjectItem):
                units += 1
                lines = [line for line in item.description.split("\n") if line.strip()]
                rich += len(lines) >= MIN_DESCRIPTION_LINES
            elif isinstance(item, SkillsItem):
                units += 1
                rich += len(item.skills) >= MIN_SKILLS_PER_GROUP
    return rich, units


def is_valid_email(value: str) -> bool:
    return bool(value) and bool(EMAIL_RE.fullmatch(value.strip()))


def is_valid_url(value: str, expected_host: Optional[str] = None) -> bool:
    """True when `value` is an http(s) URL (on `expected_host` when given)."""
    try:
        url = _HTTP_URL_ADAPTER.validate_python(value)
    except ValidationError:
        return False
    if expected_host is None:
        return True
    host = (url.host or "").lower()
    return host == expected_host or host.endswith(f".{expected_host}")
