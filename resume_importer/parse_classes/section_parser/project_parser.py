"""project_parser.py
Turns projects section text into ProjectItems.
"""
import re
from dataclasses import dataclass, field
from typing import List, Optional

from resume_importer.models import ProjectItem, RawSection, SectionType
from resume_importer.parse_classes.section_parser.section_item_parser import (
    ParsedItem,
    SectionItemParser,
)
from resume_importer.parse_classes.section_parser.helpers.line_helpers import (
    find_date_range,
    find_single_date,
    is_bullet,
    pop_urls,
    split_list,
    strip_bullet,
)

TECHNOLOGIES_RE = re.compile(
    r"^(?:technologies|tech stack|stack|tools|built with|tech)(?:\s+used)?\s*:\s*(?P<rest>.+)$",
    re.IGNORECASE,
)
_NAME_SEPARATOR_RE = re.compile(r"\s+[-–—|]\s+|:\s+")


@dataclass
class _ProjectDraft:
    item: ProjectItem = field(default_factory=ProjectItem)
    description: List[str] = field(default_factory=list)
    lines: List[str] = field(default_factory=list)

    @property
    def has_body(self) -> bool:
        return bool(self.description or self.item.technologies or self.item.url or self.item.github)


class ProjectsParser(SectionItemParser):
    """
    Groups project lines into ProjectItems.

    A project starts with a name line ("Resume Parser - CLI for parsing resumes").
    Bullets and follow-up sentences become the description, "Technologies:" lines
    fill technologies, and URLs are sorted into github or url.
    """
    SECTION_TYPE = SectionType.PROJECTS

    def _parse_content(self, content: str, section: RawSection) -> List[ParsedItem]:
        drafts: List[_ProjectDraft] = []
        current: Optional[_ProjectDraft] = None
        after_blank = False

        for raw_line in content.split("\n"):
            line = raw_line.strip()
            if not line:
                after_blank = True
                continue

            bullet = is_bullet(line)
            text = strip_bullet(line) if bullet else line
            if bullet or current is None or not after_blank:
                current = current or self._new_draft(drafts)
            else:
                current = self._new_draft(drafts)
            after_blank = False
            current.lines.append(line)

            tech_match = TECHNOLOGIES_RE.match(text)
            if tech_match:
                current.item.technologies.extend(split_list(tech_match.group("rest")))
                continue

            urls, text = pop_urls(text)
            for url in urls:
                if "github.com" in url.lower():
                    current.item.github = current.item.github or url
                else:
                    current.item.url = current.item.url or url
            if not text:
                continue

            if bullet:
                current.description.append(text)
                continue

            span = find_date_range(text) or find_single_date(text)
            if span is not None and not current.item.start_date:
                current.item.start_date = span.start
                current.item.end_date = span.end
                text = span.remainder
                if not text:
                    continue

            if not current.item.name:
                self._apply_name_line(current, text)
            elif current.has_body and not (text[0].islower() or text.endswith(".")):
                # A new name line directly after the previous project's body
                current = self._new_draft(drafts)
                current.lines.append(line)
                self._apply_name_line(current, text)
            else:
                current.description.append(text)

        items = []
        for draft in drafts:
            draft.item.description = "\n".join(draft.description)
            if not (draft.item.name or draft.item.description):
                continue
            items.append(
                ParsedItem(
                    item=draft.item,
                    confidence=round(
                        0.4 + 0.6 * self._filled_ratio(
                            draft.item.name,
                            draft.item.description,
                            draft.item.technologies or draft.item.url or draft.item.github,
                        ),
                        4,
                    ),
                    source_text="\n".join(draft.lines),
                )
            )
        return items

    @staticmethod
    def _new_draft(drafts: List[_ProjectDraft]) -> _ProjectDraft:
        draft = _ProjectDraft()
        drafts.append(draft)
        return draft

    @staticmethod
    def _apply_name_line(draft: _ProjectDraft, text: str) -> None:
        parts = _NAME_SEPARATOR_RE.split(text, maxsplit=1)
        draft.item.name = parts[0].strip()
        if len(parts) > 1 and parts[1].strip():
            draft.description.append(parts[1].strip())
