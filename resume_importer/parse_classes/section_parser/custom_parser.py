"""custom_parser.py
Free-text sections (summary and anything without a dedicated parser).
"""
from typing import List

from resume_importer.models import CustomItem, RawSection, SectionType
from resume_importer.parse_classes.section_parser.section_item_parser import (
    ParsedItem,
    SectionItemParser,
)
from resume_importer.parse_classes.section_parser.helpers.line_helpers import split_blocks

FREE_TEXT_CONFIDENCE = 0.8


class CustomParser(SectionItemParser):
    """One CustomItem per paragraph, keeping line breaks inside a paragraph."""
    SECTION_TYPE = SectionType.CUSTOM

    def __init__(self, section_type: SectionType = SectionType.CUSTOM):
        self.SECTION_TYPE = section_type

    def _parse_content(self, content: str, section: RawSection) -> List[ParsedItem]:
        return [
            ParsedItem(
                item=CustomItem(content="\n".join(block)),
                confidence=FREE_TEXT_CONFIDENCE,
                source_text="\n".join(block),
            )
            for block in split_blocks(content)
        ]
