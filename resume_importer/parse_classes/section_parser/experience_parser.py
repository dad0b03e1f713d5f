"""experience_parser.py
Turns work-experience section text into ExperienceItems.
"""
import re
from dataclasses import dataclass, field
from typing import List, Tuple

from resume_importer.models import ExperienceItem, RawSection, SectionType
from resume_importer.parse_classes.section_parser.section_item_parser import (
    ParsedItem,
    SectionItemParser,
)
from resume_importer.parse_classes.section_parser.helpers.line_helpers import (
    find_date_range,
    find_single_date,
    is_bullet,
    looks_like_location,
    split_trailing_location,
    strip_bullet,
)

_TITLE_AT_COMPANY_RE = re.compile(r"^(?P<title>.+?)\s+(?:at|@)\s+(?P<company>.+)$", re.IGNORECASE)
_DASH_SEPARATOR_RE = re.compile(r"\s+[-–—]\s+")


@dataclass
class _ExperienceDraft:
    item: ExperienceItem = field(default_factory=ExperienceItem)
    lines: List[str] = field(default_factory=list)
    has_dates: bool = False


class ExperienceParser(SectionItemParser):
    """
    Groups experience lines into roles.

    Recognized shapes (in any order within a role):
        - title line: "Software Engineer", "Software Engineer at Tech Corp",
          "Data Scientist | Comcast | San Diego, CA"
        - company line: "Tech Corp", "Tech Corp, San Francisco, CA"
        - date line: "2020-2023", "May 2018 - current Colorado Springs, CO"
        - bullets: "• Led team of 5 developers" (lower-case continuation lines
          are joined onto the previous bullet)

    A plain line starts a new role once the current one has a title plus
    company, dates or bullets.
    """
    SECTION_TYPE = SectionType.EXPERIENCE

    def _parse_content(self, content: str, section: RawSection) -> List[ParsedItem]:
        drafts: List[_ExperienceDraft] = []
        current = None
        after_blank = False

        for raw_line in content.split("\n"):
            line = raw_line.strip()
            if not line:
                after_blank = True
                continue

            # Bullets always belong to the current role
            if is_bullet(line):
                current = current or self._new_draft(drafts)
                current.lines.append(line)
                bullet_text = strip_bullet(line)
                if bullet_text:
                    current.item.description.append(bullet_text)
                after_blank = False
                continue

            span = find_date_range(line)
            if span is None:
                single = find_single_date(line)
                if single and (not single.remainder or looks_like_location(single.remainder)):
                    span = single

            if span is not None:
                if current is None or current.has_dates or current.item.description:
                    current = self._new_draft(drafts)
                current.lines.append(line)
                current.has_dates = True
                current.item.start_date = span.start
                current.item.end_date = span.end
                current.item.current = span.current

                if span.remainder:
                    if looks_like_location(span.remainder) and not current.item.location:
                        current.item.location = span.remainder
                    else:
                        self._apply_header_line(current, span.remainder)
                after_blank = False
                continue

            # Wrapped bullet text
            if current is not None and current.item.description and line[0].islower():
                current.item.description[-1] = f"{current.item.description[-1]} {line}"
                current.lines.append(line)
                continue

            if current is not None and self._is_complete(current, after_blank):
                if self._is_paragraph(line) and not after_blank:
                    current.item.description.append(line)
                    current.lines.append(line)
                    continue
                current = None

            current = current or self._new_draft(drafts)
            current.lines.append(line)
            self._apply_header_line(current, line)
            after_blank = False

        return [
            ParsedItem(
                item=draft.item,
                confidence=round(
                    0.4 + 0.6 * self._filled_ratio(
                        draft.item.title,
                        draft.item.company,
                        draft.item.start_date,
                        draft.item.description,
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
    def _new_draft(drafts: List[_ExperienceDraft]) -> _ExperienceDraft:
        draft = _ExperienceDraft()
        drafts.append(draft)
        return draft

    @staticmethod
    def _is_complete(draft: _ExperienceDraft, after_blank: bool) -> bool:
        item = draft.item
        has_body = draft.has_dates or bool(item.description)
        if item.title and item.company and has_body:
            return True
        return after_blank and bool(item.title) and has_body

    @staticmethod
    def _is_paragraph(line: str) -> bool:
        return len(line.split()) > 8 or line.endswith(".")

    def _apply_header_line(self, draft: _ExperienceDraft, line: str) -> None:
        """Fill the next empty header field (title, company, location) from `line`."""
        item = draft.item
        if not item.title:
            title, company, location = self._split_title_line(line)
            item.title = title
            if company and not item.company:
                item.company = company
            if location and not item.location:
                item.location = location
        elif not item.company:
            company, location = split_trailing_location(line)
            if "|" in company:
                company = company.split("|")[0].strip()
            item.company = company
            if location and not item.location:
                item.location = location
        elif not item.location and looks_like_location(line):
            item.location = line
        else:
            item.description.append(line)

    @staticmethod
    def _split_title_line(line: str) -> Tuple[str, str, str]:
        """Split a title line into (title, company, location); missing parts are ""."""
        match = _TITLE_AT_COMPANY_RE.match(line)
        if match:
            company, location = split_trailing_location(match.group("company"))
            return match.group("title").strip(), company, location

        if "|" in line or _DASH_SEPARATOR_RE.search(line):
            parts = [part.strip() for part in re.split(r"\s*\|\s*|\s+[-–—]\s+", line) if part.strip()]
            title = parts[0]
            company = parts[1] if len(parts) > 1 else ""
            location = ""
            if len(parts) > 2:
                location = ", ".join(parts[2:])
                if not looks_like_location(location):
                    company = " | ".join(parts[1:])
                    location = ""
            return title, company, location

        if "," in line and not looks_like_location(line):
            rest, location = split_trailing_location(line)
            title, _, company = rest.partition(",")
            return title.strip(), company.strip(), location

        return line, "", ""
