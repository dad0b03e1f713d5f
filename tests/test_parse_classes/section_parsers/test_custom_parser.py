"""test_custom_parser.py
Run tests on CustomParser
"""
from resume_importer.models import CustomItem, RawSection, SectionType
from resume_importer.parse_classes.section_parser.custom_parser import (
    FREE_TEXT_CONFIDENCE,
    CustomParser,
)


class TestCustomParser:
    """Tests for CustomParser."""

    def test_one_item_per_paragraph(self):
        section = RawSection(
            guessed_type=SectionType.CUSTOM,
            title="VOLUNTEER WORK",
            raw_content="Food bank driver\nevery weekend\n\nAnimal shelter helper",
            order=3,
            heading_confidence=0.6,
        )
        items = CustomParser().parse(section)
        assert [parsed.item for parsed in items] == [
            CustomItem(content="Food bank driver\nevery weekend"),
            CustomItem(content="Animal shelter helper"),
        ]
        assert all(parsed.confidence == FREE_TEXT_CONFIDENCE for parsed in items)

    def test_section_type_is_configurable(self):
        assert CustomParser().SECTION_TYPE == SectionType.CUSTOM
        assert CustomParser(section_type=SectionType.SUMMARY).SECTION_TYPE == SectionType.SUMMARY
