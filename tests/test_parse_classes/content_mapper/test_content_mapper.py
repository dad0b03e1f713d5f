"""test_content_mapper.py
Test ContentMapper personal-info fallbacks, section parsing, warnings and scoring.
"""
import pytest

from resume_importer.exceptions import ExtractorMapConfigError, SectionParserMapConfigError
from resume_importer.models import (
    ExperienceItem,
    FieldError,
    MappingResult,
    RawSection,
    SectionType,
)
from resume_importer.parse_classes.content_mapper import content_mapper as content_mapper_module
from resume_importer.parse_classes.content_mapper.content_mapper import ContentMapper
from resume_importer.parse_classes.section_segmenter.section_segmenter import SectionSegmenter
from resume_importer.parse_classes.section_parser.helpers.section_parser_map import (
    build_default_section_parser_map,
)
from resume_importer.parse_classes.resume_validator.helpers.validation_messages import (
    INVALID_EMAIL,
    MISSING_LOCATION_WARNING,
    MISSING_NAME,
    MISSING_PHONE_WARNING,
    empty_section_warning,
    missing_description_warning,
)

from resume_importer.test_helpers.dummy_classes import (
    DummyExtractor,
    FailingExtractor,
    FailingSectionParser,
)
from resume_importer.test_helpers.dummy_variables.dummy_resumes import (
    EXAMPLE_RESUME_TEXT,
    MOCK_RESUME_GENERATOR_0,
)


@pytest.fixture(scope="module")
def mapper():
    return ContentMapper()


def segment_and_map(mapper: ContentMapper, text: str) -> MappingResult:
    document = SectionSegmenter().segment_document(text)
    return mapper.map(document.header_text, document.sections, text)


def experience_section(content: str) -> RawSection:
    return RawSection(
        guessed_type=SectionType.EXPERIENCE,
        title="EXPERIENCE",
        raw_content=content,
        order=0,
        heading_confidence=0.95,
    )


class TestContentMapperPersonalInfo:

    def test_example_resume(self, mapper):
        result = segment_and_map(mapper, EXAMPLE_RESUME_TEXT)
        personal_info = result.resume_data.personal_info
        assert personal_info.full_name == "John Doe"
        assert personal_info.email == "john@example.com"
        assert personal_info.phone == ""
        assert result.errors == []
        assert MISSING_PHONE_WARNING in result.warnings
        assert MISSING_LOCATION_WARNING in result.warnings
        assert result.field_confidence["personalInfo.fullName"] == 1.0
        assert result.field_confidence["personalInfo.email"] == 1.0
        assert "personalInfo.phone" not in result.field_confidence

    def test_full_mock_resume(self, mapper):
        result = segment_and_map(mapper, MOCK_RESUME_GENERATOR_0.generate_text())
        personal_info = result.resume_data.personal_info
        assert personal_info.full_name == "John Doe"
        assert personal_info.email == "john.doe@example.com"
        assert personal_info.phone == "(555) 123-4567"
        assert personal_info.location == "San Diego, CA"
        assert personal_info.linkedin == "https://linkedin.com/in/john-doe23"
        assert personal_info.github == "https://github.com/johndoe"
        assert personal_info.website == ""
        assert result.errors == []
        assert MISSING_PHONE_WARNING not in result.warnings

    def test_missing_name_is_an_error(self, mapper):
        result = mapper.map(header_text="john@example.com", sections=[])
        assert FieldError(field="fullName", message=MISSING_NAME) in result.errors
        assert result.resume_data.personal_info.full_name == ""

    def test_missing_email_is_an_error(self, mapper):
        result = mapper.map(header_text="John Doe", sections=[])
        assert FieldError(field="email", message=INVALID_EMAIL) in result.errors

    def test_extractor_fallback(self):
        mapper = ContentMapper(extractor_map={
            "full_name": [FailingExtractor(), DummyExtractor(value="Jane Roe", confidence=0.9)],
        })
        result = mapper.map(header_text="Jane Roe", sections=[])
        assert result.resume_data.personal_info.full_name == "Jane Roe"
        assert result.field_confidence == {"personalInfo.fullName": 0.9}

    def test_all_extractors_failing_leaves_default(self):
        mapper = ContentMapper(extractor_map={"full_name": [FailingExtractor()]})
        result = mapper.map(header_text="Jane Roe", sections=[])
        assert result.resume_data.personal_info.full_name == ""
        assert FieldError(field="fullName", message=MISSING_NAME) in result.errors

    def test_extractor_failures_go_to_field_logger(self, mocker):
        mocker.patch.object(content_mapper_module, "running_under_pytest", return_value=False)
        get_field_logger = mocker.patch.object(content_mapper_module.logger_factory, "get_field_logger")

        mapper = ContentMapper(extractor_map={"full_name": [FailingExtractor()]})
        mapper.map(header_text="Jane Roe", sections=[])

        get_field_logger.assert_called_once_with("fullName")
        message = get_field_logger.return_value.warning.call_args.args[0]
        assert "FailingExtractor" in message

    def test_invalid_extractor_map(self):
        with pytest.raises(ExtractorMapConfigError):
            ContentMapper(extractor_map={"nickname": [DummyExtractor()]})


class TestContentMapperSections:

    def test_sections_keep_order_and_titles(self, mapper):
        result = segment_and_map(mapper, MOCK_RESUME_GENERATOR_0.generate_text())
        sections = result.resume_data.sections
        assert [s.type for s in sections] == [
            SectionType.SUMMARY,
            SectionType.EXPERIENCE,
            SectionType.EDUCATION,
            SectionType.PROJECTS,
            SectionType.SKILLS,
            SectionType.CERTIFICATIONS,
        ]
        assert [s.order for s in sections] == list(range(6))
        assert all(s.visible for s in sections)
        assert all(s.items for s in sections)

    def test_field_confidence_keys(self, mapper):
        result = segment_and_map(mapper, EXAMPLE_RESUME_TEXT)
        assert result.field_confidence["sections[0].heading"] == 0.95
        assert result.field_confidence["sections[0].items[0]"] == 1.0

    def test_experience_item(self, mapper):
        result = segment_and_map(mapper, EXAMPLE_RESUME_TEXT)
        item = result.resume_data.sections[0].items[0]
        assert isinstance(item, ExperienceItem)
        assert (item.title, item.company, item.start_date, item.end_date) == (
            "Software Engineer", "Tech Corp", "2020", "2023"
        )

    def test_missing_description_warning(self, mapper):
        result = mapper.map(
            header_text="John Doe\njohn@example.com",
            sections=[experience_section("Software Engineer at Tech Corp\n2020-2023")],
        )
        assert missing_description_warning("EXPERIENCE", 0) in result.warnings

    def test_empty_section_warning(self, mapper):
        result = mapper.map(
            header_text="John Doe\njohn@example.com",
            sections=[experience_section("")],
        )
        assert result.resume_data.sections[0].items == []
        assert empty_section_warning("EXPERIENCE") in result.warnings

    def test_failing_section_parser_becomes_warning(self):
        section_parser_map = build_default_section_parser_map()
        section_parser_map[SectionType.EXPERIENCE] = FailingSectionParser()
        mapper = ContentMapper(section_parser_map=section_parser_map)

        result = segment_and_map(mapper, EXAMPLE_RESUME_TEXT)

        assert result.resume_data.sections[0].items == []
        assert (
            "Section 'EXPERIENCE' could not be parsed: Dummy section parser failure"
            in result.warnings
        )
        assert empty_section_warning("EXPERIENCE") in result.warnings

    def test_invalid_section_parser_map(self):
        with pytest.raises(SectionParserMapConfigError):
            ContentMapper(section_parser_map={SectionType.CUSTOM: FailingSectionParser()})


class TestContentMapperConfidence:

    def test_confidence_in_range(self, mapper):
        result = segment_and_map(mapper, EXAMPLE_RESUME_TEXT)
        assert 0.0 < result.confidence <= 1.0

    def test_missing_fields_lower_confidence(self, mapper):
        complete = mapper.map(header_text="John Doe\njohn@example.com", sections=[])
        missing = mapper.map(header_text="john@example.com", sections=[])
        assert complete.confidence == 1.0
        assert missing.confidence < complete.confidence

    def test_mapping_is_deterministic(self, mapper):
        text = MOCK_RESUME_GENERATOR_0.generate_text()
        assert segment_and_map(mapper, text) == segment_and_map(mapper, text)
