"""line_helpers.py
Line-level helpers shared by the section item parsers: bullets, date ranges,
locations, URLs and delimited lists.
"""
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

# ------------------------ Bullets ------------------------
BULLET_RE = re.compile(r"^(?:[•●◦▪■▸►‣⁃∙·*–—]|-(?!\d))\s*")


def is_bullet(line: str) -> bool:
    return bool(line) and bool(BULLET_RE.match(line))


def strip_bullet(line: str) -> str:
    return BULLET_RE.sub("", line, count=1).strip()


def split_blocks(content: str) -> List[List[str]]:
    """Split section content into blocks of non-blank lines."""
    blocks, current = [], []
    for line in content.split("\n"):
        line = line.strip()
        if line:
            current.append(line)
        elif current:
            blocks.append(current)
            current = []
    if current:
        blocks.append(current)
    return blocks


# ------------------------ Dates ------------------------
_MONTH = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|"
    r"aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
)
_SEASON = r"(?:spring|summer|fall|autumn|winter)"
DATE_TOKEN = (
    rf"(?:(?:{_MONTH}|{_SEASON})\.?,?\s+(?:19|20)\d{{2}}"
    r"|(?:0?[1-9]|1[0-2])/(?:19|20)\d{2}"
    r"|(?:19|20)\d{2})"
)
PRESENT_TOKEN = r"(?:present|current|now|today|ongoing)"

DATE_RANGE_RE = re.compile(
    rf"(?<![\w/])(?P<start>{DATE_TOKEN})\s*(?:-|–|—|to|until|through)\s*"
    rf"(?P<end>{DATE_TOKEN}|{PRESENT_TOKEN})(?![\w/])",
    re.IGNORECASE,
)
SINGLE_DATE_RE = re.compile(
    rf"(?<![\w/])(?:(?:expected|graduated|issued|completed)\s*:?\s*)?(?P<date>{DATE_TOKEN})(?![\w/])",
    re.IGNORECASE,
)


@dataclass
class DateSpan:
    """Dates found on a line plus whatever text remains once they are removed."""
    start: str
    end: Optional[str]
    current: bool
    remainder: str


def _clean_remainder(text: str) -> str:
    text = re.sub(r"\(\s*\)", "", text)
    text = re.sub(r"\s{2,}", " ", text)
    return text.strip(" \t|,;:–—-()")


def find_date_range(line: str) -> Optional[DateSpan]:
    """
    Find a `start - end` range on the line. `present`, `current` and `now`
    mark an ongoing role (end=None, current=True).
    """
    match = DATE_RANGE_RE.search(line)
    if not match:
        return None

    end = match.group("end")
    current = bool(re.fullmatch(PRESENT_TOKEN, end, re.IGNORECASE))
    remainder = _clean_remainder(line[: match.start()] + " " + line[match.end():])
    return DateSpan(
        start=match.group("start").strip(),
        end=None if current else end.strip(),
        current=current,
        remainder=remainder,
    )


def find_single_date(line: str) -> Optional[DateSpan]:
    match = SINGLE_DATE_RE.search(line)
    if not match:
        return None
    remainder = _clean_remainder(line[: match.start()] + " " + line[match.end():])
    return DateSpan(start=match.group("date").strip(), end=None, current=False, remainder=remainder)


def find_dates(line: str) -> Optional[DateSpan]:
    return find_date_range(line) or find_single_date(line)


# ------------------------ Locations ------------------------
_CITY = r"[A-Z][A-Za-z.'-]+(?: [A-Z][A-Za-z.'-]+){0,3}"
LOCATION_RE = re.compile(
    rf"^(?:{_CITY}, ?(?:[A-Z]{{2}}|[A-Z][a-z]+(?: [A-Z][a-z]+){{0,2}})(?: \d{{5}})?|Remote|Hybrid)$"
)
TRAILING_LOCATION_RE = re.compile(
    rf"^(?P<rest>.+?)(?:,\s*|\s*[|–—]\s*|\s+-\s+)(?P<location>{_CITY}, ?[A-Z]{{2}}|Remote|Hybrid)$"
)


def looks_like_location(text: str) -> bool:
    return bool(LOCATION_RE.match(text.strip()))


def split_trailing_location(text: str) -> Tuple[str, str]:
    """
    Split "Tech Corp, San Francisco, CA" into ("Tech Corp", "San Francisco, CA").
    Returns (text, "") when no trailing location is present.
    """
    match = TRAILING_LOCATION_RE.match(text.strip())
    if not match:
        return text.strip(), ""
    return match.group("rest").strip(), match.group("location").strip()


# ------------------------ URLs ------------------------
URL_RE = re.compile(
    r"(?:https?://|www\.)[^\s|,;()<>]+|\b(?:github|gitlab)\.com/[^\s|,;()<>]+",
    re.IGNORECASE,
)


def pop_urls(line: str) -> Tuple[List[str], str]:
    """Return the URLs on a line and the line with them removed."""
    urls = [url.rstrip(".,;:") for url in URL_RE.findall(line)]
    return urls, _clean_remainder(URL_RE.sub(" ", line))


# ------------------------ Lists ------------------------
def split_list(text: str) -> List[str]:
    """
    Split a delimited list on commas, semicolons, pipes and bullets, ignoring
    delimiters inside parentheses: "Python (Django, Flask), SQL" -> 2 entries.
    """
    parts, current, depth = [], [], 0
    for char in text:
        if char in "([":
            depth += 1
        elif char in ")]":
            depth = max(depth - 1, 0)

        if depth == 0 and char in ",;|•·●▪":
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))

    return [
        part.strip().strip(".").strip()
        for part in parts
        if part.strip().strip(".").strip()
    ]


def dedupe(values: List[str]) -> List[str]:
    """Drop case-insensitive duplicates, keeping the first spelling and order."""
    seen, result = set(), []
    for value in values:
        key = value.lower()
        if key not in seen:
            seen.add(key)
            result.append(value)
    return result
