"""certification_parser.py
Turns certifications section text into CertificationItems (one per line).
"""
import re
from typing import List, Tuple

from resume_importer.models import CertificationItem, RawSection, SectionType
from resume_importer.parse_classes.section_parser.section_item_parser import (
    ParsedItem,
    SectionItemParser,
)
from resume_importer.parse_classes.section_parser.helpers.line_helpers import (
    find_dates,
    is_bullet,
    pop_urls,
    strip_bullet,
)

ISSUER_LINE_RE = re.compile(r"^(?:issued by|issuer|issuing organization|by|from)\s*:?\s*(?P<issuer>.+)$", re.IGNORECASE)
_NAME_ISSUER_SEPARATOR_RE = re.compile(r"\s+[-–—]\s+|\s*\|\s*|,\s+|\s+by\s+|\s+from\s+", re.IGNORECASE)


class CertificationsParser(SectionItemParser):
    """
    Parses certification lines such as
    "AWS Certified Solutions Architect - Amazon Web Services (2022)".

    Date-only, "Issued by ..." and URL-only lines attach to the previous
    certification.
    """
    SECTION_TYPE = SectionType.CERTIFICATIONS

    def _parse_content(self, content: str, section: RawSection) -> List[ParsedItem]:
        entries: List[Tuple[CertificationItem, List[str]]] = []

        for raw_line in content.split("\n"):
            line = raw_line.strip()
            if not line:
                continue
            text = strip_bullet(line) if is_bullet(line) else line

            urls, text = pop_urls(text)
            previous = entries[-1][0] if entries else None

            if not text:
                if previous is not None and urls and not previous.url:
                    previous.url = urls[0]
                    entries[-1][1].append(line)
                continue

            span = find_dates(text)
            if span is not None and not span.remainder and previous is not None and not previous.date:
                previous.date = span.start
                entries[-1][1].append(line)
                continue

            issuer_match = ISSUER_LINE_RE.match(text)
            if issuer_match and previous is not None and not previous.issuer:
                previous.issuer = issuer_match.group("issuer").strip()
                entries[-1][1].append(line)
                continue

            certification = CertificationItem(url=urls[0] if urls else "")
            if span is not None:
                certification.date = span.start
                text = span.remainder
            certification.name, certification.issuer = self._split_name_issuer(text)
            entries.append((certification, [line]))

        return [
            ParsedItem(
                item=certification,
                confidence=round(
                    0.6 + 0.4 * self._filled_ratio(certification.issuer, certification.date), 4
                ),
                source_text="\n".join(lines),
            )
            for certification, lines in entries
            if certification.name
        ]

    @staticmethod
    def _split_name_issuer(text: str) -> Tuple[str, str]:
        parts = _NAME_ISSUER_SEPARATOR_RE.split(text, maxsplit=1)
        name = parts[0].strip(" ,;:-")
        issuer = parts[1].strip(" ,;:-()") if len(parts) > 1 else ""
        return name, issuer
