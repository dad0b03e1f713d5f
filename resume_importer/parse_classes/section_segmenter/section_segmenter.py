"""section_segmenter.py
Holds SectionSegmenter class which splits raw resume text into a header region
and ordered, typed sections.
"""
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from resume_importer.config import SCANNER_DEFAULTS
from resume_importer.models import RawSection, SectionType, SegmentedDocument

from resume_importer.parse_classes.section_segmenter.helpers.heading_vocabulary import (
    ALL_CAPS_HEADING_CONFIDENCE,
    INLINE_HEADING_CONFIDENCE,
    NO_HEADING_CONFIDENCE,
    TITLE_CASE_HEADING_CONFIDENCE,
    lookup_heading,
)

BULLET_CHARS = "•●◦▪■▸►‣⁃∙·*-–—"

# Unicode spaces that PDF/DOCX decoders leave behind
_ODD_SPACES_RE = re.compile("[\t\u00a0\u2000-\u200a\u202f\u205f\u3000]")
_ZERO_WIDTH_RE = re.compile("[\u200b\u200c\u200d\ufeff]")
_INLINE_HEADING_RE = re.compile(r"^([A-Za-z][A-Za-z &/]{1,38}?)\s*:\s*(\S.*)$")

# Small words allowed in lower case inside a title-case heading
_MINOR_WORDS = {"a", "an", "and", "&", "of", "in", "on", "the", "for", "to", "at", "with"}

# Title-case headings are not trusted inside sections whose items start with title-case lines
_TITLE_CASE_ITEM_SECTIONS = {
    SectionType.EXPERIENCE,
    SectionType.EDUCATION,
    SectionType.PROJECTS,
}


@dataclass
class _Heading:
    line_index: int
    title: str
    section_type: SectionType
    confidence: float
    inline_content: Optional[str] = None


class SectionSegmenter:
    """
    Splits raw resume text on detected headings.

    Headings are found in three passes per line, first hit wins:
        1. Vocabulary match on the whole line ("EXPERIENCE", "Technical Skills:").
        2. Inline vocabulary label followed by content ("Skills: Python, SQL").
        3. Layout heuristic for unlabelled headings (short, isolated, all caps
           or title case, followed by denser text) -> `custom` sections.

    Text before the first heading is the header region and never becomes a
    RawSection.

    Args:
        heading_max_length (int): Longest line treated as an unlabelled heading.
        heading_max_words (int): Most words an unlabelled heading may contain.
    """

    def __init__(
        self,
        heading_max_length: int = SCANNER_DEFAULTS.HEADING_MAX_LENGTH,
        heading_max_words: int = SCANNER_DEFAULTS.HEADING_MAX_WORDS,
    ):
        self.heading_max_length = heading_max_length
        self.heading_max_words = heading_max_words

    # ----------------------
    # Public interface
    # ----------------------
    def segment(
        self,
        raw_text: str,
        section_mapping: Optional[Dict[str, str]] = None,
    ) -> List[RawSection]:
        """Return only the ordered sections of `raw_text`."""
        return self.segment_document(raw_text, section_mapping).sections

    def segment_document(
        self,
        raw_text: str,
        section_mapping: Optional[Dict[str, str]] = None,
    ) -> SegmentedDocument:
        """
        Split `raw_text` into a header region and ordered sections.

        Args:
            raw_text (str): Text produced by the ContentExtractor.
            section_mapping (Dict[str, str] | None): Caller overrides. Keys are
                heading texts (case-insensitive) or section type names.

        Returns:
            SegmentedDocument: Header text plus sections in source order. Sections
            of the same type are merged into one. Text without any heading
            (empty text included) is a single low-confidence summary section.
        """
        lines = normalize_text(raw_text).split("\n")
        headings = self._find_headings(lines)

        if not headings:
            whole_text = _join_block(lines)
            return SegmentedDocument(
                header_text=whole_text,
                sections=[
                    RawSection(
                        guessed_type=SectionType.SUMMARY,
                        title="Summary",
                        raw_content=whole_text,
                        order=0,
                        heading_confidence=NO_HEADING_CONFIDENCE,
                    )
                ],
            )

        header_text = _join_block(lines[: headings[0].line_index])

        sections = []
        for idx, heading in enumerate(headings):
            end = headings[idx + 1].line_index if idx + 1 < len(headings) else len(lines)
            body = lines[heading.line_index + 1 : end]
            if heading.inline_content:
                body = [heading.inline_content] + body

            sections.append(
                RawSection(
                    guessed_type=self._apply_section_mapping(
                        heading.section_type, heading.title, section_mapping
                    ),
                    title=heading.title,
                    raw_content=_join_block(body),
                    order=idx,
                    heading_confidence=heading.confidence,
                )
            )

        return SegmentedDocument(
            header_text=header_text,
            sections=self._merge_sections(sections),
        )

    # ----------------------
    # Heading detection
    # ----------------------
    def _find_headings(self, lines: List[str]) -> List[_Heading]:
        headings: List[_Heading] = []
        current_type: Optional[SectionType] = None

        for i, line in enumerate(lines):
            if not line:
                continue
            heading = self._match_heading(lines, i, current_type)
            if heading is not None:
                headings.append(heading)
                current_type = heading.section_type

        return headings

    def _match_heading(
        self,
        lines: List[str],
        i: int,
        current_type: Optional[SectionType],
    ) -> Optional[_Heading]:
        line = lines[i]
        title = line.rstrip(":").strip()

        # 1. Whole line is a known heading
        known = lookup_heading(line)
        if known is not None:
            section_type, confidence = known
            return _Heading(i, title, section_type, confidence)

        # 2. Known heading label with content on the same line
        inline = _INLINE_HEADING_RE.match(line)
        if inline:
            known = lookup_heading(inline.group(1))
            if known is not None:
                return _Heading(
                    line_index=i,
                    title=inline.group(1).strip(),
                    section_type=known[0],
                    confidence=INLINE_HEADING_CONFIDENCE,
                    inline_content=inline.group(2).strip(),
                )

        # 3. Layout heuristic
        confidence = self._heuristic_heading_confidence(lines, i, current_type)
        if confidence is not None:
            return _Heading(i, title, SectionType.CUSTOM, confidence)

        return None

    def _heuristic_heading_confidence(
        self,
        lines: List[str],
        i: int,
        current_type: Optional[SectionType],
    ) -> Optional[float]:
        """
        Score a line as an unlabelled heading, or return None if it is not one.
        A heading must sit after a blank line, so nothing in the first text
        block of the document can qualify.
        """
        line = lines[i]
        if i == 0 or lines[i - 1]:
            return None
        if i + 1 >= len(lines) or not lines[i + 1]:
            return None
        if not self._looks_like_heading_text(line):
            return None

        next_line = lines[i + 1]
        next_is_denser = (
            next_line[0] in BULLET_CHARS
            or len(next_line.split()) > len(line.split())
        )
        if not next_is_denser:
            return None

        letters = [c for c in line if c.isalpha()]
        if all(c.isupper() for c in letters):
            return ALL_CAPS_HEADING_CONFIDENCE

        if current_type in _TITLE_CASE_ITEM_SECTIONS:
            return None
        if _is_title_case(line):
            return TITLE_CASE_HEADING_CONFIDENCE
        return None

    def _looks_like_heading_text(self, line: str) -> bool:
        text = line.rstrip(":").strip()
        if not text or len(text) > self.heading_max_length:
            return False
        if len(text.split()) > self.heading_max_words:
            return False
        if text[0] in BULLET_CHARS:
            return False
        if any(c.isdigit() for c in text):
            return False
        if any(c in text for c in "@|,;()/.") or "www" in text.lower():
            return False
        return any(c.isalpha() for c in text)

    # ----------------------
    # Classification overrides and merging
    # ----------------------
    @staticmethod
    def _apply_section_mapping(
        section_type: SectionType,
        title: str,
        section_mapping: Optional[Dict[str, str]],
    ) -> SectionType:
        """Heading-text keys win over section-type keys."""
        if not section_mapping:
            return section_type

        lowered = {key.strip().lower(): value for key, value in section_mapping.items()}
        title_key = title.strip().rstrip(":").strip().lower()
        if title_key in lowered:
            return SectionType(lowered[title_key])
        if section_type.value in lowered:
            return SectionType(lowered[section_type.value])
        return section_type

    @staticmethod
    def _merge_sections(sections: List[RawSection]) -> List[RawSection]:
        """
        Merge sections sharing a type (custom sections merge only when their
        titles match). The merged section keeps the position of its first
        occurrence and the lowest heading confidence.
        """
        merged: Dict[tuple, RawSection] = {}
        for section in sections:
            if section.guessed_type == SectionType.CUSTOM:
                key = (section.guessed_type, section.title.lower())
            else:
                key = (section.guessed_type,)

            existing = merged.get(key)
            if existing is None:
                merged[key] = RawSection(
                    guessed_type=section.guessed_type,
                    title=section.title,
                    raw_content=section.raw_content,
                    order=section.order,
                    heading_confidence=section.heading_confidence,
                )
                continue

            existing.raw_content = "\n\n".join(
                part for part in (existing.raw_content, section.raw_content) if part
            )
            existing.heading_confidence = min(
                existing.heading_confidence, section.heading_confidence
            )

        ordered = sorted(merged.values(), key=lambda s: s.order)
        for order, section in enumerate(ordered):
            section.order = order
        return ordered


# ----------------------
# Text helpers
# ----------------------
def normalize_text(raw_text: str) -> str:
    """
    Normalize line endings and whitespace: odd unicode spaces become plain
    spaces, runs of spaces collapse, lines are stripped, and runs of blank
    lines collapse to a single blank line.
    """
    text = (raw_text or "").replace("\r\n", "\n").replace("\r", "\n").replace("\f", "\n")
    text = _ZERO_WIDTH_RE.sub("", _ODD_SPACES_RE.sub(" ", text))

    lines = [re.sub(r" {2,}", " ", line).strip() for line in text.split("\n")]
    return re.sub(r"\n{3,}", "\n\n", "\n".join(lines)).strip("\n")


def _join_block(lines: List[str]) -> str:
    return "\n".join(lines).strip("\n")


def _is_title_case(line: str) -> bool:
    words = line.rstrip(":").split()
    if not words or not words[0][0].isupper():
        return False
    return all(
        word.lower() in _MINOR_WORDS or word[0].isupper()
        for word in words
    )
