"""Tests for the locale resolvers."""

from types import SimpleNamespace

import pytest

from localefly.kernel.exceptions import ConfigurationException
from localefly.negotiation.negotiator import MatchPriority, Negotiator
from localefly.negotiation.resolver import (
    AcceptHeaderLocaleResolver,
    FixedLocaleResolver,
    LocaleResolver,
)
from localefly.negotiation.supported import SupportedSet


@pytest.fixture
def resolver() -> AcceptHeaderLocaleResolver:
    supported = SupportedSet.build(["en-US", "fr", "fr-CA", "en", "ja", "de", "da-DK"], "en-US")
    return AcceptHeaderLocaleResolver(supported)


class TestAcceptHeaderLocaleResolver:
    def test_implements_protocol(self, resolver):
        assert isinstance(resolver, LocaleResolver)

    def test_reads_accept_language_attribute(self, resolver):
        request = SimpleNamespace(accept_language="fr_CA")
        assert resolver.resolve_locale(request) == "fr-CA"

    def test_reads_headers_mapping(self, resolver):
        request = SimpleNamespace(headers={"accept-language": "en-GB"})
        assert resolver.resolve_locale(request) == "en"

    def test_reads_capitalised_header_name(self, resolver):
        request = SimpleNamespace(headers={"Accept-Language": "ja"})
        assert resolver.resolve_locale(request) == "ja"

    def test_missing_header_is_defaulted(self, resolver):
        result = resolver.resolve(SimpleNamespace(headers={}))
        assert str(result.matched_tag) == "en-US"
        assert result.used_default is True

    def test_request_without_headers(self, resolver):
        assert resolver.resolve_locale(object()) == "en-US"

    def test_resolve_exposes_defaulted_flag(self, resolver):
        result = resolver.resolve(SimpleNamespace(accept_language="da"))
        assert str(result.matched_tag) == "da-DK"
        assert result.used_default is False

    def test_uses_supplied_negotiator(self):
        supported = SupportedSet.build(["fr", "ja"], "ja")
        request = SimpleNamespace(accept_language="fr-FR, ja;q=0.5")
        assert AcceptHeaderLocaleResolver(supported).resolve_locale(request) == "ja"
        quality_first = AcceptHeaderLocaleResolver(supported, Negotiator(MatchPriority.QUALITY))
        assert quality_first.resolve_locale(request) == "fr"


class TestFixedLocaleResolver:
    def test_ignores_request(self):
        resolver = FixedLocaleResolver("pt_br")
        assert resolver.resolve_locale(SimpleNamespace(accept_language="fr")) == "pt-BR"

    def test_implements_protocol(self):
        assert isinstance(FixedLocaleResolver(), LocaleResolver)

    def test_malformed_locale_is_fatal(self):
        with pytest.raises(ConfigurationException):
            FixedLocaleResolver("not valid")
