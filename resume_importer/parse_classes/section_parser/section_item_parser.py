"""section_item_parser.py
Holds abstract SectionItemParser class inherited by per-section item parsers.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from resume_importer.models import RawSection, ResumeItem, SectionType


@dataclass
class ParsedItem:
    """
    A typed item produced from section text.

    Attributes:
        item (ResumeItem): The typed item.
        confidence (float): How completely the item's key fields were filled, in [0, 1].
        source_text (str): The lines the item was built from (used as scoring weight).
    """
    item: ResumeItem
    confidence: float
    source_text: str


class SectionItemParser(ABC):
    """
    Abstract base class for turning the raw content of one section into typed items.

    Each concrete parser handles exactly one SectionType (set SECTION_TYPE in
    the child). Parsers are stateless, so one instance can serve parallel parses.
    """
    SECTION_TYPE: Optional[SectionType] = None

    def parse(self, section: RawSection) -> List[ParsedItem]:
        """
        Parse a section's raw content into items.

        Args:
            section (RawSection): Section produced by the SectionSegmenter.

        Returns:
            List[ParsedItem]: Items in source order (empty when nothing usable was found).
        """
        if not section.raw_content or not section.raw_content.strip():
            return []
        return self._parse_content(section.raw_content, section)

    @abstractmethod
    def _parse_content(self, content: str, section: RawSection) -> List[ParsedItem]:
        """Parse non-empty section content (define in each child)."""
        pass

    @staticmethod
    def _filled_ratio(*values) -> float:
        """Share of the given values that are non-empty."""
        if not values:
            return 0.0
        return sum(1 for value in values if value) / len(values)
