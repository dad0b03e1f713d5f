"""test_email_extractor.py
Run tests on EmailExtractor
"""
import pytest

from resume_importer.exceptions import FieldExtractionError

from resume_importer.parse_classes.field_extractor.email_extractor import EmailExtractor

from resume_importer.test_helpers.mock_resume_generator import ResumeTemplates, ResumeValues
from resume_importer.test_helpers.dummy_variables.dummy_resumes import (
    MOCK_RESUME_GENERATOR_0,
    MOCK_RESUME_GENERATOR_1,
    MOCK_RESUME_GENERATOR_2,
)

# ==============================================================
# EDGE CASE RESUME EXAMPLES
# ==============================================================
# Noise / extra text around email
EMAIL_HEADER_NOISE = MOCK_RESUME_GENERATOR_0.clone(
    templates=ResumeTemplates(
        contact_info="Please reach out (email: {email}).\nMy LinkedIn: linkedin.com/in/{linkedin_name}, Website: www.johndoe.com"
    ),
    section_order=["contact_info"],
).generate_text()

# Uncommon email format
EMAIL_HEADER_UNCOMMON = MOCK_RESUME_GENERATOR_0.clone(
    values=ResumeValues(email="user+tag@subdomain.example.co.uk"),
    section_order=["contact_info"],
).generate_text()

# Invalid email formats
EMAIL_HEADER_INVALID = "John Doe\njohn.doe[at]example.com, john.doe_example.com"


class TestEmailExtractor:
    """Tests for EmailExtractor."""

    @pytest.mark.parametrize("generator, expected", [
        (MOCK_RESUME_GENERATOR_0, "john.doe@example.com"),
        (MOCK_RESUME_GENERATOR_1, "c.mendez@company.net"),
        (MOCK_RESUME_GENERATOR_2, "alice.lee@example.co.uk"),
    ])
    def test_mock_resumes(self, generator, expected):
        header = generator.clone(section_order=["contact_info"]).generate_text()
        candidate = EmailExtractor().extract(header_text=header, full_text=generator.generate_text())
        assert candidate.value == expected
        assert candidate.confidence == 1.0

    def test_noise_around_email(self):
        candidate = EmailExtractor().extract(header_text=EMAIL_HEADER_NOISE)
        assert candidate.value == "john.doe@example.com"

    def test_uncommon_email(self):
        candidate = EmailExtractor().extract(header_text=EMAIL_HEADER_UNCOMMON)
        assert candidate.value == "user+tag@subdomain.example.co.uk"

    def test_email_is_lower_cased(self):
        candidate = EmailExtractor().extract(header_text="John Doe\nJohn.Doe@Example.COM")
        assert candidate.value == "john.doe@example.com"

    def test_invalid_email_raises(self):
        with pytest.raises(FieldExtractionError):
            EmailExtractor().extract(header_text=EMAIL_HEADER_INVALID, full_text=EMAIL_HEADER_INVALID)

    def test_multiple_emails_first_wins_with_lower_confidence(self):
        candidate = EmailExtractor().extract(
            header_text="first.email@example.com, second.email@example.org"
        )
        assert candidate.value == "first.email@example.com"
        assert candidate.confidence == 0.85

    def test_email_outside_header(self):
        full_text = "John Doe\n\nEXPERIENCE\nContact: john@example.com"
        candidate = EmailExtractor().extract(header_text="John Doe", full_text=full_text)
        assert candidate.value == "john@example.com"
        assert candidate.confidence == 0.8

    def test_rule_method_uses_spacy_tokens(self, mocker):
        spacy_search = mocker.patch.object(
            EmailExtractor, "_spacy_search", return_value=["john@example.com", "not-an-email"]
        )
        candidate = EmailExtractor(extraction_method="rule").extract(header_text="John john@example.com")
        assert candidate.value == "john@example.com"
        assert spacy_search.call_args.kwargs["token_attr"] == "like_email"

    def test_unsupported_method_raises(self):
        with pytest.raises(NotImplementedError):
            EmailExtractor(extraction_method="ner")
