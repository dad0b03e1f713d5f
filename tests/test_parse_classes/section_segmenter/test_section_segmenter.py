"""test_section_segmenter.py
Test SectionSegmenter heading detection, header split, overrides and merging.
"""
import pytest

from resume_importer.models import RawSection, SectionType, SegmentedDocument

from resume_importer.parse_classes.section_segmenter.section_segmenter import (
    SectionSegmenter,
    normalize_text,
)
from resume_importer.parse_classes.section_segmenter.helpers.heading_vocabulary import (
    ALIAS_HEADING_CONFIDENCE,
    ALL_CAPS_HEADING_CONFIDENCE,
    CANONICAL_HEADING_CONFIDENCE,
    INLINE_HEADING_CONFIDENCE,
    NO_HEADING_CONFIDENCE,
    TITLE_CASE_HEADING_CONFIDENCE,
    heading_key,
    lookup_heading,
)
from resume_importer.test_helpers.dummy_variables.dummy_resumes import (
    EXAMPLE_RESUME_TEXT,
    NO_HEADING_RESUME_TEXT,
    MOCK_RESUME_GENERATOR_0,
    MOCK_RESUME_GENERATOR_1,
)


@pytest.fixture
def segmenter():
    return SectionSegmenter()


class TestHeadingVocabulary:
    """Tests for heading_key / lookup_heading."""

    @pytest.mark.parametrize("line, expected", [
        ("  Licenses and Certifications: ", "LICENSES & CERTIFICATIONS"),
        ("work   experience", "WORK EXPERIENCE"),
        ("**SKILLS**", "SKILLS"),
    ])
    def test_heading_key(self, line, expected):
        assert heading_key(line) == expected

    @pytest.mark.parametrize("line, section_type", [
        ("EXPERIENCE", SectionType.EXPERIENCE),
        ("Work Experience", SectionType.EXPERIENCE),
        ("education", SectionType.EDUCATION),
        ("Skills:", SectionType.SKILLS),
        ("PROJECTS", SectionType.PROJECTS),
        ("Certifications", SectionType.CERTIFICATIONS),
    ])
    def test_canonical_headings(self, line, section_type):
        assert lookup_heading(line) == (section_type, CANONICAL_HEADING_CONFIDENCE)

    @pytest.mark.parametrize("line, section_type", [
        ("Professional Experience", SectionType.EXPERIENCE),
        ("Technical Skills", SectionType.SKILLS),
        ("Licenses and Certifications", SectionType.CERTIFICATIONS),
        ("Professional Summary", SectionType.SUMMARY),
        ("Personal Projects", SectionType.PROJECTS),
    ])
    def test_alias_headings(self, line, section_type):
        assert lookup_heading(line) == (section_type, ALIAS_HEADING_CONFIDENCE)

    def test_unknown_heading(self):
        assert lookup_heading("Volunteer Work") is None


class TestNormalizeText:
    """Tests for normalize_text."""

    def test_line_endings_and_spaces(self):
        raw = "John  Doe\r\n\r\n\r\n\r\nEXPERIENCE\t\r\n  Engineer\u00a0 at   Acme \u200b"
        assert normalize_text(raw) == "John Doe\n\nEXPERIENCE\nEngineer at Acme"

    def test_form_feed_is_a_line_break(self):
        assert normalize_text("Page one\fPage two") == "Page one\nPage two"

    def test_none_is_empty(self):
        assert normalize_text(None) == ""


class TestSectionSegmenter:
    """Tests for SectionSegmenter.segment_document / segment."""

    def test_example_resume(self, segmenter):
        document = segmenter.segment_document(EXAMPLE_RESUME_TEXT)
        assert isinstance(document, SegmentedDocument)
        assert document.header_text == "John Doe\njohn@example.com"
        assert len(document.sections) == 1

        section = document.sections[0]
        assert isinstance(section, RawSection)
        assert section.guessed_type == SectionType.EXPERIENCE
        assert section.title == "EXPERIENCE"
        assert section.order == 0
        assert section.heading_confidence == CANONICAL_HEADING_CONFIDENCE
        assert section.raw_content == (
            "Software Engineer at Tech Corp\n2020-2023\n• Led team of 5 developers"
        )

    def test_segment_returns_sections_only(self, segmenter):
        sections = segmenter.segment(EXAMPLE_RESUME_TEXT)
        assert [s.guessed_type for s in sections] == [SectionType.EXPERIENCE]

    def test_header_never_becomes_section(self, segmenter):
        sections = segmenter.segment(EXAMPLE_RESUME_TEXT)
        assert all("john@example.com" not in s.raw_content for s in sections)

    def test_no_headings_gives_single_summary(self, segmenter):
        document = segmenter.segment_document(NO_HEADING_RESUME_TEXT)
        assert document.header_text == NO_HEADING_RESUME_TEXT
        assert len(document.sections) == 1
        section = document.sections[0]
        assert section.guessed_type == SectionType.SUMMARY
        assert section.heading_confidence == NO_HEADING_CONFIDENCE
        assert section.raw_content == NO_HEADING_RESUME_TEXT

    @pytest.mark.parametrize("raw_text", ["", "   \n\n\t  "])
    def test_empty_text_gives_summary_fallback(self, segmenter, raw_text):
        document = segmenter.segment_document(raw_text)
        assert document.header_text == ""
        assert len(document.sections) == 1
        section = document.sections[0]
        assert section.guessed_type == SectionType.SUMMARY
        assert section.heading_confidence == NO_HEADING_CONFIDENCE
        assert section.raw_content == ""

    def test_mock_resume_sections_in_order(self, segmenter):
        sections = segmenter.segment(MOCK_RESUME_GENERATOR_0.generate_text())
        assert [s.guessed_type for s in sections] == [
            SectionType.SUMMARY,
            SectionType.EXPERIENCE,
            SectionType.EDUCATION,
            SectionType.PROJECTS,
            SectionType.SKILLS,
            SectionType.CERTIFICATIONS,
        ]
        assert [s.order for s in sections] == list(range(6))

    def test_alias_heading_confidence(self, segmenter):
        sections = segmenter.segment(MOCK_RESUME_GENERATOR_1.generate_text())
        skills = next(s for s in sections if s.guessed_type == SectionType.SKILLS)
        assert skills.title == "TECHNICAL SKILLS"
        assert skills.heading_confidence == ALIAS_HEADING_CONFIDENCE

    def test_heading_with_trailing_colon(self, segmenter):
        sections = segmenter.segment("Jane Smith\n\nTechnical Skills:\nPython, SQL")
        assert sections[0].title == "Technical Skills"
        assert sections[0].guessed_type == SectionType.SKILLS

    def test_inline_heading(self, segmenter):
        document = segmenter.segment_document("Jane Smith\njane@example.com\n\nSkills: Python, SQL, Excel")
        section = document.sections[0]
        assert section.guessed_type == SectionType.SKILLS
        assert section.title == "Skills"
        assert section.raw_content == "Python, SQL, Excel"
        assert section.heading_confidence == INLINE_HEADING_CONFIDENCE

    def test_all_caps_unlabelled_heading(self, segmenter):
        text = (
            "John Doe\njohn@example.com\n\n"
            "EXPERIENCE\nEngineer at Acme\n2020-2023\n\n"
            "VOLUNTEER WORK\n• Food bank driver every weekend"
        )
        sections = segmenter.segment(text)
        assert len(sections) == 2
        custom = sections[1]
        assert custom.guessed_type == SectionType.CUSTOM
        assert custom.title == "VOLUNTEER WORK"
        assert custom.heading_confidence == ALL_CAPS_HEADING_CONFIDENCE
        assert custom.raw_content == "• Food bank driver every weekend"

    def test_title_case_unlabelled_heading(self, segmenter):
        text = (
            "John Doe\n\nSKILLS\nPython, SQL\n\n"
            "Volunteer Work\nDrove for the food bank every weekend"
        )
        sections = segmenter.segment(text)
        assert sections[-1].guessed_type == SectionType.CUSTOM
        assert sections[-1].title == "Volunteer Work"
        assert sections[-1].heading_confidence == TITLE_CASE_HEADING_CONFIDENCE

    def test_title_case_line_inside_experience_is_not_a_heading(self, segmenter):
        text = (
            "John Doe\n\nEXPERIENCE\nEngineer at Acme\n2020-2023\n\n"
            "Globex Corporation\nBuilt internal tools for the finance team"
        )
        sections = segmenter.segment(text)
        assert len(sections) == 1
        assert "Globex Corporation" in sections[0].raw_content

    @pytest.mark.parametrize("line", [
        "john@example.com",
        "May 2018 - 2020",
        "Acme Corp | Denver",
        "• Bullet Point",
        "This Line Has Far Too Many Words To Be A Heading",
        "mixed case words",
    ])
    def test_lines_that_are_never_unlabelled_headings(self, segmenter, line):
        text = f"John Doe\n\nSKILLS\nPython\n\n{line}\nSomething much longer follows this line"
        sections = segmenter.segment(text)
        assert len(sections) == 1

    def test_heading_needs_denser_next_line(self, segmenter):
        text = "John Doe\n\nSKILLS\nPython\n\nVOLUNTEER WORK\nYes"
        assert len(segmenter.segment(text)) == 1

    def test_duplicate_types_are_merged(self, segmenter):
        text = (
            "Jane Smith\n\nEXPERIENCE\nJob one at Acme\n\n"
            "EDUCATION\nState University\n\n"
            "WORK HISTORY\nJob two at Globex"
        )
        sections = segmenter.segment(text)
        assert [s.guessed_type for s in sections] == [SectionType.EXPERIENCE, SectionType.EDUCATION]
        experience = sections[0]
        assert experience.title == "EXPERIENCE"
        assert experience.raw_content == "Job one at Acme\n\nJob two at Globex"
        assert experience.heading_confidence == ALIAS_HEADING_CONFIDENCE
        assert [s.order for s in sections] == [0, 1]

    def test_custom_sections_merge_only_by_title(self, segmenter):
        text = (
            "Jane Smith\n\nSKILLS\nPython\n\n"
            "VOLUNTEER WORK\n• Food bank driver\n\n"
            "AWARDS WON\n• Employee of the month\n\n"
            "VOLUNTEER WORK\n• Animal shelter helper"
        )
        sections = segmenter.segment(text)
        custom = [s for s in sections if s.guessed_type == SectionType.CUSTOM]
        assert [s.title for s in custom] == ["VOLUNTEER WORK", "AWARDS WON"]
        assert custom[0].raw_content == "• Food bank driver\n\n• Animal shelter helper"

    def test_section_mapping_by_heading_text(self, segmenter):
        text = "Jane Smith\n\nSKILLS\nPython\n\nVOLUNTEER WORK\n• Food bank driver every weekend"
        sections = segmenter.segment(text, section_mapping={"volunteer work": "experience"})
        assert sections[-1].guessed_type == SectionType.EXPERIENCE
        assert sections[-1].title == "VOLUNTEER WORK"

    def test_section_mapping_by_type_name(self, segmenter):
        text = "John Doe\n\nWORK EXPERIENCE\nEngineer at Acme"
        sections = segmenter.segment(text, section_mapping={"experience": "projects"})
        assert sections[0].guessed_type == SectionType.PROJECTS

    def test_heading_text_key_wins_over_type_key(self, segmenter):
        text = "John Doe\n\nWORK EXPERIENCE\nEngineer at Acme"
        sections = segmenter.segment(
            text,
            section_mapping={"experience": "projects", "Work Experience": "custom"},
        )
        assert sections[0].guessed_type == SectionType.CUSTOM

    def test_segmentation_is_deterministic(self, segmenter):
        text = MOCK_RESUME_GENERATOR_0.generate_text()
        assert segmenter.segment_document(text) == segmenter.segment_document(text)
