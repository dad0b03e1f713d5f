"""skills_parser.py
Turns skills section text into SkillsItem groups.
"""
import re
from typing import Dict, List

from resume_importer.models import RawSection, SectionType, SkillsItem
from resume_importer.parse_classes.section_parser.section_item_parser import (
    ParsedItem,
    SectionItemParser,
)
from resume_importer.parse_classes.section_parser.helpers.line_helpers import (
    dedupe,
    is_bullet,
    split_list,
    strip_bullet,
)

DEFAULT_CATEGORY = "Skills"
CATEGORY_LABEL_RE = re.compile(r"^(?P<label>[A-Za-z][\w &/+#.()'-]{0,40}?)\s*:\s*(?P<rest>.*)$")
MAX_LABEL_WORDS = 4


class SkillsParser(SectionItemParser):
    """
    Splits a skills section into groups.

    "Languages: Python, Java" style lines define a category. With two or more
    categories each becomes its own SkillsItem (unlabelled skills land in a
    leading "Skills" group). Otherwise everything is one group named after the
    lone label, or "Skills".
    """
    SECTION_TYPE = SectionType.SKILLS

    def _parse_content(self, content: str, section: RawSection) -> List[ParsedItem]:
        groups: Dict[str, List[str]] = {}
        group_lines: Dict[str, List[str]] = {}
        unlabelled: List[str] = []
        unlabelled_lines: List[str] = []
        current_label = None

        for raw_line in content.split("\n"):
            line = raw_line.strip()
            if not line:
                continue
            text = strip_bullet(line) if is_bullet(line) else line

            match = CATEGORY_LABEL_RE.match(text)
            if match and self._is_label(match.group("label"), match.group("rest")):
                current_label = match.group("label").strip()
                groups.setdefault(current_label, []).extend(split_list(match.group("rest")))
                group_lines.setdefault(current_label, []).append(line)
            elif current_label is not None:
                groups[current_label].extend(split_list(text))
                group_lines[current_label].append(line)
            else:
                unlabelled.extend(split_list(text))
                unlabelled_lines.append(line)

        labelled = [(label, skills) for label, skills in groups.items() if skills]

        parsed: List[tuple] = []
        if len(labelled) >= 2:
            if unlabelled:
                parsed.append((DEFAULT_CATEGORY, unlabelled, unlabelled_lines))
            parsed.extend((label, skills, group_lines[label]) for label, skills in labelled)
        else:
            all_skills = unlabelled + [skill for _, skills in labelled for skill in skills]
            category = labelled[0][0] if labelled and not unlabelled else DEFAULT_CATEGORY
            all_lines = unlabelled_lines + [line for lines in group_lines.values() for line in lines]
            if all_skills:
                parsed.append((category, all_skills, all_lines))

        items = []
        for category, skills, lines in parsed:
            skills = dedupe(skills)
            items.append(
                ParsedItem(
                    item=SkillsItem(category=category, skills=skills),
                    confidence=round(0.6 + 0.4 * min(len(skills), 3) / 3, 4),
                    source_text="\n".join(lines),
                )
            )
        return items

    @staticmethod
    def _is_label(label: str, rest: str) -> bool:
        # "https://..." is a URL, not a category
        if rest.startswith("//"):
            return False
        return len(label.split()) <= MAX_LABEL_WORDS
