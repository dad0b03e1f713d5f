"""test_experience_parser.py
Run tests on ExperienceParser
"""
import pytest

from resume_importer.models import ExperienceItem, RawSection, SectionType
from resume_importer.parse_classes.section_parser.experience_parser import ExperienceParser

from resume_importer.test_helpers.mock_resume_generator import DUMMY_RESUME_BLOCKS, ResumeValues


def experience_section(content: str) -> RawSection:
    return RawSection(
        guessed_type=SectionType.EXPERIENCE,
        title="EXPERIENCE",
        raw_content=content,
        order=0,
        heading_confidence=0.95,
    )


def block_content(index: int, company_name: str) -> str:
    """Mock resume experience block without its heading line."""
    block = DUMMY_RESUME_BLOCKS["work_experience"][index].format(
        **vars(ResumeValues(company_name=company_name))
    )
    return block.split("\n", 1)[1]


@pytest.fixture
def parser():
    return ExperienceParser()


class TestExperienceParser:
    """Tests for ExperienceParser."""

    def test_title_at_company(self, parser):
        items = parser.parse(experience_section(
            "Software Engineer at Tech Corp\n2020-2023\n• Led team of 5 developers"
        ))
        assert len(items) == 1
        item = items[0].item
        assert isinstance(item, ExperienceItem)
        assert item.title == "Software Engineer"
        assert item.company == "Tech Corp"
        assert item.start_date == "2020"
        assert item.end_date == "2023"
        assert item.current is False
        assert item.description == ["Led team of 5 developers"]
        assert items[0].confidence == 1.0
        assert items[0].source_text == "Software Engineer at Tech Corp\n2020-2023\n• Led team of 5 developers"

    def test_stacked_lines_with_current_role_and_wrapped_bullets(self, parser):
        items = parser.parse(experience_section(block_content(0, "Comcast")))
        assert len(items) == 1
        item = items[0].item
        assert item.title == "Director of Product Management"
        assert item.company == "Comcast"
        assert item.start_date == "May 2018"
        assert item.end_date is None
        assert item.current is True
        assert item.location == "Colorado Springs, CO"
        assert item.description == [
            "Streamlined customer support process by using SysAid for ticket "
            "management, boosting satisfaction ratings by 27%.",
            "Upsold products and services to 20% of inbound callers, "
            "contributing to a 7% increase in quarterly sales.",
        ]

    def test_dates_first_and_pipe_separated_title(self, parser):
        items = parser.parse(experience_section(block_content(1, "Qualcomm")))
        assert len(items) == 1
        item = items[0].item
        assert item.start_date == "MARCH 2021"
        assert item.current is True
        assert item.title == "Data Scientist"
        assert item.company == "Qualcomm"
        assert item.location == "San Diego, CA"
        assert len(item.description) == 2

    def test_multiple_roles(self, parser):
        content = (
            "Senior Engineer\n"
            "Globex, Denver, CO\n"
            "Jan 2021 - Present\n"
            "• Built APIs\n"
            "\n"
            "Engineer\n"
            "Initech\n"
            "2018 - 2020\n"
            "• Fixed bugs"
        )
        items = [parsed.item for parsed in parser.parse(experience_section(content))]
        assert [(i.title, i.company) for i in items] == [
            ("Senior Engineer", "Globex"),
            ("Engineer", "Initech"),
        ]
        assert items[0].location == "Denver, CO"
        assert items[0].current is True
        assert (items[1].start_date, items[1].end_date) == ("2018", "2020")
        assert items[1].description == ["Fixed bugs"]

    def test_bullets_only_gives_low_confidence_item(self, parser):
        items = parser.parse(experience_section("• Did many things"))
        assert len(items) == 1
        assert items[0].item.title == ""
        assert items[0].item.description == ["Did many things"]
        assert items[0].confidence == pytest.approx(0.55)

    @pytest.mark.parametrize("content", ["", "   \n\n  "])
    def test_empty_section(self, parser, content):
        assert parser.parse(experience_section(content)) == []

    def test_parser_is_stateless(self, parser):
        section = experience_section("Software Engineer at Tech Corp\n2020-2023\n• Led team")
        assert parser.parse(section) == parser.parse(section)
