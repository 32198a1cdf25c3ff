"""Tests for LocaleTag parsing, normalisation and comparison."""

import pytest

from localefly.kernel.exceptions import ConfigurationException, LocaleParseException
from localefly.negotiation.tag import LocaleTag, parse_preference, parse_supported_tag


class TestLocaleTagParse:
    def test_language_only(self):
        tag = LocaleTag.parse("en")
        assert tag.language == "en"
        assert tag.region is None
        assert str(tag) == "en"

    def test_language_and_region(self):
        tag = LocaleTag.parse("en-US")
        assert tag.language == "en"
        assert tag.region == "US"
        assert str(tag) == "en-US"

    def test_underscore_separator_is_canonicalised(self):
        assert str(LocaleTag.parse("fr_CA")) == "fr-CA"

    def test_separators_parse_to_identical_tags(self):
        assert LocaleTag.parse("fr_CA") == LocaleTag.parse("fr-CA")

    def test_case_is_normalised(self):
        tag = LocaleTag.parse("EN-gb")
        assert tag.language == "en"
        assert tag.region == "GB"
        assert str(tag) == "en-GB"

    def test_surrounding_whitespace_is_trimmed(self):
        assert str(LocaleTag.parse("  de-AT ")) == "de-AT"

    @pytest.mark.parametrize(
        "raw",
        ["", "   ", "-", "en-", "-US", "en--US", "en-US-x", "zh-Hans-CN", "*", "en US", "é"],
    )
    def test_malformed_tags_raise(self, raw):
        with pytest.raises(LocaleParseException):
            LocaleTag.parse(raw)

    def test_non_string_raises(self):
        with pytest.raises(LocaleParseException):
            LocaleTag.parse(None)  # type: ignore[arg-type]

    def test_parse_error_carries_raw_input(self):
        with pytest.raises(LocaleParseException) as exc_info:
            LocaleTag.parse("en--US")
        assert exc_info.value.raw == "en--US"
        assert exc_info.value.code == "LOCALE_PARSE"


class TestLocaleTagConstruction:
    def test_direct_construction_normalises_case(self):
        assert LocaleTag("PT", "br") == LocaleTag.parse("pt-BR")

    def test_empty_region_is_rejected(self):
        with pytest.raises(LocaleParseException):
            LocaleTag("en", "")

    def test_empty_language_is_rejected(self):
        with pytest.raises(LocaleParseException):
            LocaleTag("")

    def test_is_immutable(self):
        tag = LocaleTag.parse("en-US")
        with pytest.raises(AttributeError):
            tag.language = "fr"  # type: ignore[misc]

    def test_is_hashable(self):
        assert len({LocaleTag.parse("en-US"), LocaleTag.parse("en_us")}) == 1


class TestLocaleTagComparison:
    def test_matches_exact_same_language_and_region(self):
        assert LocaleTag.parse("en-US").matches_exact(LocaleTag.parse("en_us"))

    def test_matches_exact_both_regionless(self):
        assert LocaleTag.parse("ja").matches_exact(LocaleTag.parse("JA"))

    def test_matches_exact_rejects_region_mismatch(self):
        assert not LocaleTag.parse("en-US").matches_exact(LocaleTag.parse("en-GB"))

    def test_matches_exact_rejects_one_sided_region(self):
        assert not LocaleTag.parse("da").matches_exact(LocaleTag.parse("da-DK"))

    def test_matches_language_ignores_region(self):
        assert LocaleTag.parse("da").matches_language(LocaleTag.parse("da-DK"))
        assert LocaleTag.parse("en-GB").matches_language(LocaleTag.parse("en-US"))

    def test_matches_language_rejects_other_language(self):
        assert not LocaleTag.parse("en").matches_language(LocaleTag.parse("fr"))


class TestParseEntryPoints:
    def test_parse_preference_returns_tag(self):
        assert parse_preference("fr_CA") == LocaleTag("fr", "CA")

    def test_parse_preference_returns_none_for_junk(self):
        assert parse_preference("not a tag") is None
        assert parse_preference("") is None

    def test_parse_supported_tag_returns_tag(self):
        assert parse_supported_tag("da-DK") == LocaleTag("da", "DK")

    def test_parse_supported_tag_raises_configuration_exception(self):
        with pytest.raises(ConfigurationException) as exc_info:
            parse_supported_tag("en--US")
        assert isinstance(exc_info.value.__cause__, LocaleParseException)
        assert exc_info.value.context["tag"] == "en--US"
