"""test_phone_extractor.py
Run tests on PhoneExtractor
"""
import pytest

from resume_importer.exceptions import FieldExtractionError

from resume_importer.parse_classes.field_extractor.phone_extractor import PhoneExtractor

from resume_importer.test_helpers.dummy_variables.dummy_resumes import (
    MOCK_RESUME_GENERATOR_0,
    MOCK_RESUME_GENERATOR_1,
)


class TestPhoneExtractor:
    """Tests for PhoneExtractor."""

    @pytest.mark.parametrize("generator, expected", [
        (MOCK_RESUME_GENERATOR_0, "(555) 123-4567"),
        (MOCK_RESUME_GENERATOR_1, "(619) 555-0182"),
    ])
    def test_mock_resumes(self, generator, expected):
        header = generator.clone(section_order=["contact_info"]).generate_text()
        assert PhoneExtractor().extract(header_text=header).value == expected

    @pytest.mark.parametrize("raw, expected", [
        ("555.123.4567", "(555) 123-4567"),
        ("5551234567", "(555) 123-4567"),
        ("+1 555 123 4567", "+1 (555) 123-4567"),
        ("+1-555-123-4567", "+1 (555) 123-4567"),
    ])
    def test_normalization(self, raw, expected):
        assert PhoneExtractor().extract(header_text=f"Phone: {raw}").value == expected

    def test_no_phone_raises(self):
        with pytest.raises(FieldExtractionError):
            PhoneExtractor().extract(header_text="John Doe", full_text="John Doe\n2019-2023")
