"""normalize.py
Post-processing applied to extracted contact fields.
"""
import re


def normalize_email(email: str) -> str:
    return email.strip().strip(".").lower()


def normalize_phone_number(phone: str) -> str:
    """
    Format US numbers as `(555) 123-4567` (or `+1 (555) 123-4567` when a
    leading country code is present). Anything else is returned trimmed.
    """
    cleaned = re.sub(r"[^\d+]", "", phone)
    digits = cleaned.lstrip("+")

    if len(digits) == 10 and not cleaned.startswith("+"):
        return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"
    if len(digits) == 11 and digits.startswith("1"):
        return f"+1 ({digits[1:4]}) {digits[4:7]}-{digits[7:]}"

    return phone.strip()


def normalize_full_name(name: str) -> str:
    """
    Title-case a name only when it is written fully upper or fully lower case,
    so that names like `McDonald` or `de la Cruz` survive untouched.
    """
    name = re.sub(r"\s+", " ", name).strip()
    if name.isupper() or name.islower():
        return " ".join(part.capitalize() for part in name.split(" "))
    return name


def normalize_url(url: str) -> str:
    url = url.strip().rstrip(".,;:)")
    if not url.lower().startswith(("http://", "https://")):
        url = "https://" + url
    return url


def normalize_linkedin_url(url: str) -> str:
    """Normalize LinkedIn profile URLs to `https://linkedin.com/in/<handle>` where possible."""
    url = normalize_url(url)
    if "linkedin.com/in/" in url.lower():
        return url

    match = re.search(r"linkedin\.com/(?:pub/|profile/view\?id=)?([A-Za-z0-9_-]+)", url, re.IGNORECASE)
    if match:
        return f"https://linkedin.com/in/{match.group(1)}"
    return url
