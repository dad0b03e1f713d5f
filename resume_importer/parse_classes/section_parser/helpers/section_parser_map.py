"""section_parser_map.py
Builds the "section_parser_map" dictionary used by ContentMapper to decide which
SectionItemParser turns each section type into items.
"""
from typing import Dict, Optional

from resume_importer.exceptions import SectionParserMapConfigError
from resume_importer.models import SectionType

from resume_importer.parse_classes.section_parser.section_item_parser import SectionItemParser
from resume_importer.parse_classes.section_parser.experience_parser import ExperienceParser
from resume_importer.parse_classes.section_parser.education_parser import EducationParser
from resume_importer.parse_classes.section_parser.skills_parser import SkillsParser
from resume_importer.parse_classes.section_parser.project_parser import ProjectsParser
from resume_importer.parse_classes.section_parser.certification_parser import CertificationsParser
from resume_importer.parse_classes.section_parser.custom_parser import CustomParser


def build_default_section_parser_map() -> Dict[SectionType, SectionItemParser]:
    """
    Builds the default section parser map used by ContentMapper.

    Returns:
        dict: Mapping of every SectionType -> parser instance.
    """
    section_parser_map = {
        SectionType.SUMMARY: CustomParser(section_type=SectionType.SUMMARY),
        SectionType.EXPERIENCE: ExperienceParser(),
        SectionType.EDUCATION: EducationParser(),
        SectionType.SKILLS: SkillsParser(),
        SectionType.PROJECTS: ProjectsParser(),
        SectionType.CERTIFICATIONS: CertificationsParser(),
        SectionType.CUSTOM: CustomParser(),
    }
    verify_section_parser_map(section_parser_map)
    return section_parser_map


def verify_section_parser_map(
    section_parser_map: Optional[Dict[SectionType, SectionItemParser]]
) -> None:
    """
    Verifies the format and content of the section parser map.

    This method checks that:
    1. The section_parser_map is a dictionary
    2. Every SectionType has an entry
    3. All values are SectionItemParser instances

    Raises:
        SectionParserMapConfigError: If any of the conditions above is not met.
    """
    if not isinstance(section_parser_map, dict):
        raise SectionParserMapConfigError(
            f"section_parser_map must be a dictionary, got {type(section_parser_map).__name__}"
        )
    missing = [section_type.value for section_type in SectionType if section_type not in section_parser_map]
    if missing:
        raise SectionParserMapConfigError(
            f"section_parser_map is missing parsers for section types: {missing}"
        )
    for section_type, parser in section_parser_map.items():
        if not isinstance(parser, SectionItemParser):
            raise SectionParserMapConfigError(
                f"Parser for section type '{section_type}' must be a SectionItemParser "
                f"instance, got {type(parser).__name__}"
            )
