"""models.py
Holds standardized data models used across the parsing pipeline.
"""
import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from resume_importer.config import SCANNER_DEFAULTS
from resume_importer.exceptions import ParseOptionsConfigError


# --------------------------------------------------------------
# INPUT MODELS
# --------------------------------------------------------------
@dataclass(frozen=True)
class FileUpload:
    """
    A single uploaded resume. Owned by exactly one pipeline invocation and
    never mutated.

    Attributes:
        filename (str): Original name of the uploaded file.
        mimetype (str): Declared mimetype of the upload.
        buffer (bytes): Raw file contents.
        size (int): Declared size of the upload in bytes.
    """
    filename: str
    mimetype: str
    buffer: bytes = field(repr=False)
    size: int

    @classmethod
    def from_path(cls, file_path: Union[str, Path], mimetype: Optional[str] = None) -> "FileUpload":
        """
        Build a FileUpload from a local file. The mimetype is guessed from the
        file extension when not provided.
        """
        from resume_importer.parse_classes.file_validator.helpers.check_file_extension import (
            mimetype_from_filename
        )

        path = Path(file_path)
        buffer = path.read_bytes()
        return cls(
            filename=path.name,
            mimetype=mimetype or mimetype_from_filename(path.name),
            buffer=buffer,
            size=len(buffer),
        )


_OPTION_ALIASES = {
    "strictValidation": "strict_validation",
    "includeRawText": "include_raw_text",
    "confidenceThreshold": "confidence_threshold",
    "sectionMapping": "section_mapping",
}


@dataclass
class ParseOptions:
    """
    Caller supplied settings for a parse.

    Attributes:
        strict_validation (bool): Fail the parse whenever any FieldError exists.
        include_raw_text (bool): Attach the extracted raw text to the result.
        confidence_threshold (float): Minimum final confidence for success, in [0, 1].
        section_mapping (Optional[Dict[str, str]]): Overrides for section
            classification. Keys are heading texts (case-insensitive) or section
            type names, values are section type names.

    Raises:
        ParseOptionsConfigError: If any option has the wrong type or range.
    """
    strict_validation: bool = False
    include_raw_text: bool = False
    confidence_threshold: float = SCANNER_DEFAULTS.DEFAULT_CONFIDENCE_THRESHOLD
    section_mapping: Optional[Dict[str, str]] = None

    def __post_init__(self):
        for flag in ("strict_validation", "include_raw_text"):
            if not isinstance(getattr(self, flag), bool):
                raise ParseOptionsConfigError(flag, "must be a bool")

        threshold = self.confidence_threshold
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            raise ParseOptionsConfigError("confidence_threshold", "must be a number")
        if not 0.0 <= threshold <= 1.0:
            raise ParseOptionsConfigError(
                "confidence_threshold", f"must be within [0, 1] (got {threshold})"
            )
        self.confidence_threshold = float(threshold)

        if self.section_mapping is None:
            return
        if not isinstance(self.section_mapping, dict):
            raise ParseOptionsConfigError("section_mapping", "must be a dict of str -> str")
        for heading, section_type in self.section_mapping.items():
            if not isinstance(heading, str) or not isinstance(section_type, str):
                raise ParseOptionsConfigError("section_mapping", "must be a dict of str -> str")
            if not SectionType.is_recognized(section_type):
                raise ParseOptionsConfigError(
                    "section_mapping",
                    f"maps `{heading}` to unknown section type `{section_type}`",
                )

    @classmethod
    def from_dict(cls, options: Optional[Dict[str, Any]]) -> "ParseOptions":
        """
        Build ParseOptions from a plain dict (e.g. decoded request JSON).
        Accepts both snake_case and camelCase keys.
        """
        if options is None:
            return cls()
        if not isinstance(options, dict):
            raise ParseOptionsConfigError("options", "must be a JSON object")

        known = {f.name for f in dataclasses.fields(cls)}
        kwargs = {}
        for key, value in options.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ParseOptionsConfigError(key, "is not a recognized parse option")
            kwargs[name] = value
        return cls(**kwargs)


# --------------------------------------------------------------
# INTERMEDIATE MODELS
# --------------------------------------------------------------
class SectionType(str, Enum):
    """Closed set of resume section types."""
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    PROJECTS = "projects"
    CERTIFICATIONS = "certifications"
    SUMMARY = "summary"
    CUSTOM = "custom"

    @classmethod
    def is_recognized(cls, value: Any) -> bool:
        return isinstance(value, cls) or value in {member.value for member in cls}


@dataclass
class ExtractedText:
    """
    Raw text pulled out of an uploaded file.

    Attributes:
        text (str): Raw text with line breaks and bullet markers preserved.
        file_format (str): Short format name ("pdf", "docx", "doc").
        page_count (Optional[int]): Number of pages when the format has pages.
        metadata (Dict[str, Any]): Format metadata reported by the decoder.
    """
    text: str
    file_format: str
    page_count: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RawSection:
    """
    A block of resume text found under one heading.

    Attributes:
        guessed_type (SectionType): Section type guessed from the heading.
        title (str): Heading text as written in the document.
        raw_content (str): Lines below the heading, newline separated.
        order (int): Position of the section within the document, from 0.
        heading_confidence (float): Confidence that the heading is a real heading.
    """
    guessed_type: SectionType
    title: str
    raw_content: str
    order: int
    heading_confidence: float


@dataclass
class SegmentedDocument:
    """Header region plus the ordered sections below it."""
    header_text: str
    sections: List[RawSection] = field(default_factory=list)


@dataclass
class FieldCandidate:
    """A value produced by a FieldExtractor together with its confidence."""
    value: str
    confidence: float


# --------------------------------------------------------------
# RESUME DATA MODELS
# --------------------------------------------------------------
@dataclass
class PersonalInfo:
    """Contact details found in the header of a resume."""
    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    github: str = ""
    website: str = ""


@dataclass
class ExperienceItem:
    title: str = ""
    company: str = ""
    location: str = ""
    start_date: str = ""
    end_date: Optional[str] = None
    current: bool = False
    description: List[str] = field(default_factory=list)
    kind: SectionType = field(default=SectionType.EXPERIENCE, init=False)


@dataclass
class EducationItem:
    degree: str = ""
    school: str = ""
    location: str = ""
    graduation_date: str = ""
    gpa: str = ""
    honors: List[str] = field(default_factory=list)
    kind: SectionType = field(default=SectionType.EDUCATION, init=False)


@dataclass
class SkillsItem:
    category: str = "Skills"
    skills: List[str] = field(default_factory=list)
    kind: SectionType = field(default=SectionType.SKILLS, init=False)


@dataclass
class ProjectItem:
    name: str = ""
    description: str = ""
    technologies: List[str] = field(default_factory=list)
    start_date: str = ""
    end_date: Optional[str] = None
    url: str = ""
    github: str = ""
    kind: SectionType = field(default=SectionType.PROJECTS, init=False)


@dataclass
class CertificationItem:
    name: str = ""
    issuer: str = ""
    date: str = ""
    url: str = ""
    kind: SectionType = field(default=SectionType.CERTIFICATIONS, init=False)


@dataclass
class CustomItem:
    content: str = ""
    kind: SectionType = field(default=SectionType.CUSTOM, init=False)


ResumeItem = Union[
    ExperienceItem,
    EducationItem,
    SkillsItem,
    ProjectItem,
    CertificationItem,
    CustomItem,
]


@dataclass
class ResumeSection:
    type: SectionType
    title: str
    items: List[ResumeItem] = field(default_factory=list)
    visible: bool = True
    order: int = 0


@dataclass
class ResumeData:
    """
    Stores structured information extracted from a resume. Always fully
    populated: missing content is an empty string or list.
    """
    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    sections: List[ResumeSection] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return to_camel_dict(self)


# --------------------------------------------------------------
# RESULT MODELS
# --------------------------------------------------------------
@dataclass(frozen=True)
class FieldError:
    """A problem tied to one field of the parsed resume."""
    field: str
    message: str


@dataclass
class MappingResult:
    resume_data: ResumeData
    field_confidence: Dict[str, float] = field(default_factory=dict)
    confidence: float = 0.0
    errors: List[FieldError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass
class ValidationResult:
    is_valid: bool
    confidence: float
    completeness: float = 0.0
    errors: List[FieldError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass
class ParseResult:
    """
    Outcome of parsing one file.

    Attributes:
        success (bool): Whether the parse passed confidence and validation policy.
        confidence (float): Final confidence in [0, 1].
        data (Optional[ResumeData]): Structured resume. Present whenever mapping
            ran, including low-confidence failures.
        parsed (Optional[Dict[str, str]]): `{"raw_text": ...}` when requested.
        errors (List[FieldError]): Field-scoped problems.
        warnings (List[str]): Advisory messages.
    """
    success: bool
    confidence: float = 0.0
    data: Optional[ResumeData] = None
    parsed: Optional[Dict[str, str]] = None
    errors: List[FieldError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return to_camel_dict(self)


@dataclass(frozen=True)
class ParsingStats:
    confidence: float
    sections_found: int
    errors_count: int
    warnings_count: int
    completeness: float

    def to_dict(self) -> Dict[str, Any]:
        return to_camel_dict(self)


# --------------------------------------------------------------
# SERIALIZATION HELPERS
# --------------------------------------------------------------
def to_camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def to_camel_dict(value: Any) -> Any:
    """
    Recursively convert dataclasses (and dict keys) into JSON-ready values with
    camelCase keys, the shape consumed by the import review UI.
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            to_camel_case(f.name): to_camel_dict(getattr(value, f.name))
            for f in dataclasses.fields(value)
        }
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {
            (to_camel_case(k) if isinstance(k, str) else k): to_camel_dict(v)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [to_camel_dict(v) for v in value]
    return value
