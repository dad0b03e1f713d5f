"""test_extractor_map.py
Test build_default_extractor_map, verify_extractor_map and
unify_extractor_map_model_references.
"""
import pytest

from resume_importer.exceptions import ExtractorMapConfigError
from resume_importer.parse_classes.content_mapper.helpers import extractor_map as extractor_map_module
from resume_importer.parse_classes.content_mapper.helpers.extractor_map import (
    PERSONAL_INFO_FIELDS,
    build_default_extractor_map,
    unify_extractor_map_model_references,
    verify_extractor_map,
)
from resume_importer.parse_classes.field_extractor.email_extractor import EmailExtractor
from resume_importer.parse_classes.field_extractor.link_extractor import LinkExtractor
from resume_importer.parse_classes.field_extractor.name_extractor import NameExtractor

from resume_importer.test_helpers.dummy_classes import DummyExtractor


class TestBuildDefaultExtractorMap:

    def test_covers_every_personal_info_field(self):
        extractor_map = build_default_extractor_map()
        assert list(extractor_map) == PERSONAL_INFO_FIELDS
        assert all(len(extractors) == 1 for extractors in extractor_map.values())

    def test_default_extractors(self):
        extractor_map = build_default_extractor_map()
        name_extractor = extractor_map["full_name"][0]
        assert isinstance(name_extractor, NameExtractor)
        assert name_extractor.extraction_method == "rule"
        assert isinstance(extractor_map["email"][0], EmailExtractor)
        assert extractor_map["email"][0].extraction_method == "regex"
        for link_type in ("linkedin", "github", "website"):
            extractor = extractor_map[link_type][0]
            assert isinstance(extractor, LinkExtractor)
            assert extractor.link_type == link_type

    def test_ner_name_fallback(self):
        extractor_map = build_default_extractor_map(use_ner_name_fallback=True)
        assert [e.extraction_method for e in extractor_map["full_name"]] == ["rule", "ner"]

    def test_shared_model_cache(self):
        cache = {}
        extractor_map = build_default_extractor_map(loaded_spacy_models=cache)
        assert all(
            extractor.loaded_spacy_models is cache
            for extractors in extractor_map.values()
            for extractor in extractors
        )


class TestVerifyExtractorMap:

    def test_valid_map(self):
        verify_extractor_map({"full_name": [DummyExtractor()], "email": []})

    @pytest.mark.parametrize("extractor_map", [
        None,
        [DummyExtractor()],
        {1: [DummyExtractor()]},
        {"nickname": [DummyExtractor()]},
        {"full_name": DummyExtractor()},
        {"full_name": ["not an extractor"]},
    ])
    def test_invalid_maps(self, extractor_map):
        with pytest.raises(ExtractorMapConfigError):
            verify_extractor_map(extractor_map)


class TestUnifyExtractorMapModelReferences:

    def test_cache_is_shared_and_models_preloaded(self, mocker):
        preload = mocker.patch.object(extractor_map_module, "preload_spacy_models")
        first, second = DummyExtractor(), DummyExtractor()
        cache = {}

        unify_extractor_map_model_references({"full_name": [first, second]}, cache)

        assert first.loaded_spacy_models is cache
        assert second.loaded_spacy_models is cache
        assert preload.call_count == 2
        preload.assert_called_with(field_extractor=second, loaded_spacy_models=cache)

    def test_existing_cache_is_kept(self, mocker):
        mocker.patch.object(extractor_map_module, "preload_spacy_models")
        own_cache = {"en_core_web_sm": object()}
        extractor = DummyExtractor(loaded_spacy_models=own_cache)

        unify_extractor_map_model_references({"full_name": [extractor]}, {})

        assert extractor.loaded_spacy_models is own_cache
