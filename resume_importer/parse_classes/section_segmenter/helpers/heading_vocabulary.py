"""heading_vocabulary.py
Known resume section headings and the SectionType each one maps to.
"""
import re
from typing import Dict, Optional, Tuple

from resume_importer.models import SectionType

CANONICAL_HEADING_CONFIDENCE = 0.95
ALIAS_HEADING_CONFIDENCE = 0.85
INLINE_HEADING_CONFIDENCE = 0.75
ALL_CAPS_HEADING_CONFIDENCE = 0.6
TITLE_CASE_HEADING_CONFIDENCE = 0.45
NO_HEADING_CONFIDENCE = 0.2

CANONICAL_HEADINGS: Dict[str, SectionType] = {
    "EXPERIENCE": SectionType.EXPERIENCE,
    "WORK EXPERIENCE": SectionType.EXPERIENCE,
    "EDUCATION": SectionType.EDUCATION,
    "SKILLS": SectionType.SKILLS,
    "PROJECTS": SectionType.PROJECTS,
    "CERTIFICATIONS": SectionType.CERTIFICATIONS,
}

ALIAS_HEADINGS: Dict[str, SectionType] = {
    # Experience
    "PROFESSIONAL EXPERIENCE": SectionType.EXPERIENCE,
    "RELEVANT EXPERIENCE": SectionType.EXPERIENCE,
    "EMPLOYMENT HISTORY": SectionType.EXPERIENCE,
    "EMPLOYMENT": SectionType.EXPERIENCE,
    "WORK HISTORY": SectionType.EXPERIENCE,
    "CAREER HISTORY": SectionType.EXPERIENCE,
    "PROFESSIONAL BACKGROUND": SectionType.EXPERIENCE,
    "EXPERIENCES": SectionType.EXPERIENCE,
    # Education
    "ACADEMIC BACKGROUND": SectionType.EDUCATION,
    "EDUCATIONAL BACKGROUND": SectionType.EDUCATION,
    "EDUCATION & TRAINING": SectionType.EDUCATION,
    "ACADEMICS": SectionType.EDUCATION,
    # Skills
    "TECHNICAL SKILLS": SectionType.SKILLS,
    "KEY SKILLS": SectionType.SKILLS,
    "CORE SKILLS": SectionType.SKILLS,
    "SKILLS SUMMARY": SectionType.SKILLS,
    "SKILLS & ABILITIES": SectionType.SKILLS,
    "CORE COMPETENCIES": SectionType.SKILLS,
    "COMPETENCIES": SectionType.SKILLS,
    "AREAS OF EXPERTISE": SectionType.SKILLS,
    "EXPERTISE": SectionType.SKILLS,
    "SKILL": SectionType.SKILLS,
    # Projects
    "PERSONAL PROJECTS": SectionType.PROJECTS,
    "KEY PROJECTS": SectionType.PROJECTS,
    "SELECTED PROJECTS": SectionType.PROJECTS,
    "ACADEMIC PROJECTS": SectionType.PROJECTS,
    "PROJECT EXPERIENCE": SectionType.PROJECTS,
    "PROJECT": SectionType.PROJECTS,
    # Certifications
    "LICENSES & CERTIFICATIONS": SectionType.CERTIFICATIONS,
    "CERTIFICATIONS & LICENSES": SectionType.CERTIFICATIONS,
    "CERTIFICATES": SectionType.CERTIFICATIONS,
    "CERTIFICATION": SectionType.CERTIFICATIONS,
    "LICENSES": SectionType.CERTIFICATIONS,
    "CREDENTIALS": SectionType.CERTIFICATIONS,
    # Summary
    "SUMMARY": SectionType.SUMMARY,
    "PROFESSIONAL SUMMARY": SectionType.SUMMARY,
    "CAREER SUMMARY": SectionType.SUMMARY,
    "EXECUTIVE SUMMARY": SectionType.SUMMARY,
    "PROFILE": SectionType.SUMMARY,
    "PROFESSIONAL PROFILE": SectionType.SUMMARY,
    "OBJECTIVE": SectionType.SUMMARY,
    "CAREER OBJECTIVE": SectionType.SUMMARY,
    "ABOUT ME": SectionType.SUMMARY,
}


def heading_key(line: str) -> str:
    """
    Normalize a candidate heading line for vocabulary lookup.

    Example:
        "  Licenses and Certifications: " -> "LICENSES & CERTIFICATIONS"
    """
    key = line.strip().rstrip(":").strip().strip("*#=_").strip()
    key = re.sub(r"\s+", " ", key).upper()
    return re.sub(r"\s+AND\s+", " & ", key)


def lookup_heading(line: str) -> Optional[Tuple[SectionType, float]]:
    """
    Return the (section_type, heading_confidence) for a known heading line, or
    None when the line is not in the vocabulary.
    """
    key = heading_key(line)
    if key in CANONICAL_HEADINGS:
        return CANONICAL_HEADINGS[key], CANONICAL_HEADING_CONFIDENCE
    if key in ALIAS_HEADINGS:
        return ALIAS_HEADINGS[key], ALIAS_HEADING_CONFIDENCE
    return None
