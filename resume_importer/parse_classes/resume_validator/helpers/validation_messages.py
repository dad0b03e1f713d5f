"""validation_messages.py
Messages shared by ContentMapper and ResumeValidator so duplicates can be
dropped when their findings are merged.
"""

MISSING_NAME = "Full name is required"
INVALID_EMAIL = "A valid email address is required"
MISSING_PHONE_WARNING = "Phone number is recommended"
MISSING_LOCATION_WARNING = "Location is recommended"


def empty_section_warning(title: str) -> str:
    return f"Section '{title}' produced no items"


def missing_description_warning(title: str, index: int) -> str:
    return f"Experience item {index + 1} in '{title}' has no description"
