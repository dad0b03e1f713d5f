"""test_education_parser.py
Run tests on EducationParser
"""
import pytest

from resume_importer.models import EducationItem, RawSection, SectionType
from resume_importer.parse_classes.section_parser.education_parser import EducationParser

from resume_importer.test_helpers.mock_resume_generator import DUMMY_RESUME_BLOCKS


def education_section(content: str) -> RawSection:
    return RawSection(
        guessed_type=SectionType.EDUCATION,
        title="EDUCATION",
        raw_content=content,
        order=0,
        heading_confidence=0.95,
    )


def block_content(index: int) -> str:
    return DUMMY_RESUME_BLOCKS["education"][index].split("\n", 1)[1]


@pytest.fixture
def parser():
    return EducationParser()


class TestEducationParser:
    """Tests for EducationParser."""

    def test_degree_and_school_on_one_line(self, parser):
        items = parser.parse(education_section(block_content(0)))
        assert len(items) == 1
        item = items[0].item
        assert isinstance(item, EducationItem)
        assert item.degree == "M.S. Computer Science"
        assert item.school == "San Diego State University"
        assert item.graduation_date == "June 2018"
        assert items[0].confidence == 1.0

    def test_ongoing_education_with_location(self, parser):
        item = parser.parse(education_section(block_content(1)))[0].item
        assert item.school == "The Collegiate School"
        assert item.degree == "High school diploma"
        assert item.graduation_date == "Present"
        assert item.location == "Richmond, VA"

    def test_gpa_and_honors(self, parser):
        items = parser.parse(education_section(block_content(2)))
        assert len(items) == 1
        item = items[0].item
        assert item.degree == "Bachelor of Arts in English"
        assert item.school == "University of Texas at San Antonio"
        assert item.graduation_date == "May 2015"
        assert item.gpa == "3.8/4.0"
        assert item.honors == ["Dean's List"]

    def test_multiple_entries(self, parser):
        content = (
            "B.S. Computer Science, State University, Austin, TX\n"
            "2016 - 2020\n"
            "\n"
            "High School Diploma, Lincoln High School\n"
            "2016"
        )
        items = [parsed.item for parsed in parser.parse(education_section(content))]
        assert len(items) == 2
        assert items[0].degree == "B.S. Computer Science"
        assert items[0].school == "State University"
        assert items[0].location == "Austin, TX"
        assert items[0].graduation_date == "2020"
        assert items[1].degree == "High School Diploma"
        assert items[1].school == "Lincoln High School"
        assert items[1].graduation_date == "2016"

    def test_school_only_scores_lower(self, parser):
        items = parser.parse(education_section("Springfield Community College"))
        assert items[0].item.school == "Springfield Community College"
        assert items[0].item.degree == ""
        assert items[0].confidence == pytest.approx(0.6)

    def test_empty_section(self, parser):
        assert parser.parse(education_section("")) == []
