"""education_parser.py
Turns education section text into EducationItems.
"""
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from resume_importer.models import EducationItem, RawSection, SectionType
from resume_importer.parse_classes.section_parser.section_item_parser import (
    ParsedItem,
    SectionItemParser,
)
from resume_importer.parse_classes.section_parser.helpers.line_helpers import (
    find_dates,
    is_bullet,
    looks_like_location,
    split_trailing_location,
    strip_bullet,
)

DEGREE_RE = re.compile(
    r"(?<![A-Za-z])(?:"
    r"bachelor\w*|master\w*|associate'?s?\s+(?:degree|of|in)|doctor\w*|diploma|certificate"
    r"|ph\.?\s?d\.?|mba|bba|b\.?\s?eng\.?|m\.?\s?eng\.?|b\.?\s?tech\.?|m\.?\s?tech\.?"
    r"|b\.?\s?sc?\.?|m\.?\s?sc?\.?|b\.a\.?|m\.a\.?|j\.?d\.|m\.?d\.|ged|degree"
    r")(?=[\s,.;:|()–-]|$)",
    re.IGNORECASE,
)
SCHOOL_RE = re.compile(
    r"\b(?:university|universidad|college|institute|school|academy|polytechnic|conservatory)\b",
    re.IGNORECASE,
)
GPA_RE = re.compile(
    r"[,|(–-]?\s*\bGPA\b\s*:?\s*(?P<gpa>\d\.\d{1,2}(?:\s*/\s*\d(?:\.\d{1,2})?)?)\s*\)?",
    re.IGNORECASE,
)
HONORS_RE = re.compile(
    r"\b(?:honou?rs?|cum laude|dean'?s list|scholarship|award|valedictorian|thesis|coursework)\b",
    re.IGNORECASE,
)
_PART_SEPARATOR_RE = re.compile(r"\s*[,|–—]\s*|\s+-\s+|\s+at\s+")


@dataclass
class _EducationDraft:
    item: EducationItem = field(default_factory=EducationItem)
    lines: List[str] = field(default_factory=list)
    has_date: bool = False


class EducationParser(SectionItemParser):
    """
    Groups education lines into entries.

    Degree and school are told apart by keyword ("Bachelor", "B.S.", "MBA" vs
    "University", "College", ...). Lines that carry both are split on commas,
    pipes and dashes. GPA is pulled out of any line; honors come from bullets or
    lines mentioning honors, awards or coursework.
    """
    SECTION_TYPE = SectionType.EDUCATION

    def _parse_content(self, content: str, section: RawSection) -> List[ParsedItem]:
        drafts: List[_EducationDraft] = []
        current: Optional[_EducationDraft] = None
        after_blank = False

        for raw_line in content.split("\n"):
            line = raw_line.strip()
            if not line:
                after_blank = True
                continue

            if is_bullet(line):
                current = current or self._new_draft(drafts)
                current.lines.append(line)
                self._apply_detail_line(current, strip_bullet(line))
                after_blank = False
                continue

            if after_blank and current is not None and (current.item.degree or current.item.school):
                current = None
            after_blank = False

            gpa, line_without_gpa = self._pop_gpa(line)
            if gpa:
                current = current or self._new_draft(drafts)
                current.item.gpa = gpa
                current.lines.append(line)
                if not line_without_gpa:
                    continue
            elif current is not None:
                current.lines.append(line)
            line = line_without_gpa

            span = find_dates(line)
            if span is not None:
                if current is None or current.has_date:
                    current = self._new_draft(drafts)
                    current.lines.append(line)
                current.has_date = True
                if span.current:
                    current.item.graduation_date = "Present"
                else:
                    current.item.graduation_date = span.end or span.start
                line = span.remainder
                if not line:
                    continue
                if looks_like_location(line) and not current.item.location:
                    current.item.location = line
                    continue

            if current is None:
                current = self._new_draft(drafts)
                current.lines.append(line)
            current = self._apply_text_line(current, line, drafts)

        return [
            ParsedItem(
                item=draft.item,
                confidence=round(
                    0.4 + 0.6 * self._filled_ratio(
                        draft.item.degree,
                        draft.item.school,
                        draft.item.graduation_date,
                    ),
                    4,
                ),
                source_text="\n".join(draft.lines),
            )
            for draft in drafts
        ]

    # ----------------------
    # Helpers
    # ----------------------
    @staticmethod
    def _new_draft(drafts: List[_EducationDraft]) -> _EducationDraft:
        draft = _EducationDraft()
        drafts.append(draft)
        return draft

    @staticmethod
    def _pop_gpa(line: str) -> Tuple[str, str]:
        match = GPA_RE.search(line)
        if not match:
            return "", line
        remainder = (line[: match.start()] + " " + line[match.end():]).strip(" ,|;–-")
        return match.group("gpa").replace(" ", ""), re.sub(r"\s{2,}", " ", remainder)

    @staticmethod
    def _apply_detail_line(draft: _EducationDraft, text: str) -> None:
        if not text:
            return
        gpa, text = EducationParser._pop_gpa(text)
        if gpa:
            draft.item.gpa = gpa
        if text:
            draft.item.honors.append(text)

    def _apply_text_line(
        self,
        draft: _EducationDraft,
        line: str,
        drafts: List[_EducationDraft],
    ) -> _EducationDraft:
        """
        Assign a plain line to degree, school, location or honors. Starts a new
        entry (and returns it) when the field the line fills is already taken.
        """
        item = draft.item
        has_degree = bool(DEGREE_RE.search(line))
        has_school = bool(SCHOOL_RE.search(line))

        if has_degree and has_school:
            degree, school, location = self._split_degree_school(line)
            if item.degree or item.school:
                draft = self._new_draft(drafts)
                draft.lines.append(line)
                item = draft.item
            item.degree, item.school = degree, school
            if location and not item.location:
                item.location = location
        elif has_degree and not HONORS_RE.search(line):
            if item.degree:
                draft = self._new_draft(drafts)
                draft.lines.append(line)
                item = draft.item
            item.degree = line
        elif has_school:
            school, location = split_trailing_location(line)
            if item.school:
                draft = self._new_draft(drafts)
                draft.lines.append(line)
                item = draft.item
            item.school = school
            if location and not item.location:
                item.location = location
        elif HONORS_RE.search(line):
            item.honors.append(line)
        elif looks_like_location(line) and not item.location:
            item.location = line
        elif not item.school and item.degree:
            item.school = line
        elif not item.degree and item.school:
            item.degree = line
        elif not item.school and not item.degree:
            item.school = line
        else:
            item.honors.append(line)
        return draft

    @staticmethod
    def _split_degree_school(line: str) -> Tuple[str, str, str]:
        """Split "B.S. Computer Science, State University, Austin, TX" into its parts."""
        parts = [part.strip() for part in _PART_SEPARATOR_RE.split(line) if part.strip()]
        school_parts = [p for p in parts if SCHOOL_RE.search(p) and not DEGREE_RE.search(p)]
        degree_parts = [p for p in parts if DEGREE_RE.search(p)]

        if school_parts:
            school = school_parts[0]
            degree = next((p for p in degree_parts if p != school), "")
        else:
            degree = degree_parts[0] if degree_parts else parts[0]
            school = next((p for p in parts if p != degree), "")

        leftovers = [p for p in parts if p not in (degree, school)]
        location = ""
        if len(leftovers) >= 2 and looks_like_location(", ".join(leftovers[-2:])):
            location = ", ".join(leftovers[-2:])
            leftovers = leftovers[:-2]
        elif leftovers and looks_like_location(leftovers[-1]):
            location = leftovers.pop()

        # "University of California, Berkeley"
        if leftovers and school:
            school = ", ".join([school] + leftovers)
        return degree, school, location
