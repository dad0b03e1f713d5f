"""test_skills_parser.py
Run tests on SkillsParser
"""
import pytest

from resume_importer.models import RawSection, SectionType, SkillsItem
from resume_importer.parse_classes.section_parser.skills_parser import SkillsParser


def skills_section(content: str) -> RawSection:
    return RawSection(
        guessed_type=SectionType.SKILLS,
        title="SKILLS",
        raw_content=content,
        order=0,
        heading_confidence=0.95,
    )


@pytest.fixture
def parser():
    return SkillsParser()


class TestSkillsParser:
    """Tests for SkillsParser."""

    def test_single_comma_list(self, parser):
        items = parser.parse(skills_section("Python, SQL, Google Analytics, Power BI, Data Cleaning"))
        assert len(items) == 1
        item = items[0].item
        assert isinstance(item, SkillsItem)
        assert item.category == "Skills"
        assert item.skills == ["Python", "SQL", "Google Analytics", "Power BI", "Data Cleaning"]
        assert items[0].confidence == 1.0

    def test_labelled_groups(self, parser):
        items = parser.parse(skills_section("Languages: Python, SQL, Java\nTools: Power BI, Tableau; Git"))
        assert [(i.item.category, i.item.skills) for i in items] == [
            ("Languages", ["Python", "SQL", "Java"]),
            ("Tools", ["Power BI", "Tableau", "Git"]),
        ]

    def test_bullet_list(self, parser):
        items = parser.parse(skills_section("• Zendesk\n• Intercom\n• Skype"))
        assert items[0].item.skills == ["Zendesk", "Intercom", "Skype"]

    def test_single_label_names_the_group(self, parser):
        items = parser.parse(skills_section("Programming Languages: Python, Go"))
        assert len(items) == 1
        assert items[0].item.category == "Programming Languages"
        assert items[0].item.skills == ["Python", "Go"]
        assert items[0].confidence == pytest.approx(0.8667)

    def test_unlabelled_skills_lead_when_groups_exist(self, parser):
        items = parser.parse(skills_section("Excel, Word\nLanguages: Python\nTools: Git"))
        assert [i.item.category for i in items] == ["Skills", "Languages", "Tools"]
        assert items[0].item.skills == ["Excel", "Word"]

    def test_duplicates_are_dropped(self, parser):
        items = parser.parse(skills_section("Python, python, SQL"))
        assert items[0].item.skills == ["Python", "SQL"]

    def test_delimiters_inside_parentheses(self, parser):
        items = parser.parse(skills_section("Python (Django, Flask), SQL"))
        assert items[0].item.skills == ["Python (Django, Flask)", "SQL"]

    def test_empty_section(self, parser):
        assert parser.parse(skills_section("\n")) == []
