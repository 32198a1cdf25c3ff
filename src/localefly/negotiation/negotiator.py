# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Negotiator — picks the best supported locale for a preference list.

The default strategy runs two full sweeps over the preferences:

1. exact sweep: first preference (in quality order) whose language *and*
   region equal a supported tag. A preference without a region (``da``)
   also takes the first country-specific tag of its language (``da-DK``)
   when the server declares no regionless tag for that language;
2. language sweep: first preference whose language equals a supported
   tag's language, regions ignored. A supported tag without a region
   (``en`` for a request of ``en-GB``) is taken before region-specific
   ones; among those, declaration order decides.

Only when both sweeps come up empty is the configured default returned.
An exact match for a low-quality preference therefore beats a
language-only match for a high-quality one.

``MatchPriority.QUALITY`` instead finishes each preference (exact, then
language) before moving on to the next, so stated quality beats
specificity.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from localefly.negotiation.preferences import PreferenceEntry, parse_preferences
from localefly.negotiation.supported import SupportedSet
from localefly.negotiation.tag import LocaleTag

logger = logging.getLogger(__name__)

_Finder = Callable[[LocaleTag, SupportedSet], LocaleTag | None]


class MatchPriority(Enum):
    """Ordering of exact and language-only matching across preferences."""

    SPECIFICITY = "specificity"
    QUALITY = "quality"


@dataclass(frozen=True)
class NegotiationResult:
    """Outcome of a negotiation: the chosen tag and whether it is the fallback."""

    matched_tag: LocaleTag
    used_default: bool

    def __str__(self) -> str:
        return str(self.matched_tag)


def _find_exact(wanted: LocaleTag, supported: SupportedSet) -> LocaleTag | None:
    country_specific: LocaleTag | None = None
    for candidate in supported:
        if candidate.matches_exact(wanted):
            return candidate
        if wanted.region is None and country_specific is None and candidate.matches_language(wanted):
            country_specific = candidate
    # Only reached when no regionless tag of the language is declared.
    return country_specific


def _find_language(wanted: LocaleTag, supported: SupportedSet) -> LocaleTag | None:
    first: LocaleTag | None = None
    for candidate in supported:
        if not candidate.matches_language(wanted):
            continue
        if candidate.region is None:
            return candidate
        if first is None:
            first = candidate
    return first


def _sweep(
    preferences: Sequence[PreferenceEntry],
    supported: SupportedSet,
    finder: _Finder,
) -> LocaleTag | None:
    for preference in preferences:
        match = finder(preference.tag, supported)
        if match is not None:
            return match
    return None


class Negotiator:
    """Stateless locale matcher; one instance can serve any number of calls."""

    def __init__(self, priority: MatchPriority = MatchPriority.SPECIFICITY) -> None:
        self._priority = priority

    @property
    def priority(self) -> MatchPriority:
        return self._priority

    @staticmethod
    def exact_match(
        preferences: Sequence[PreferenceEntry],
        supported: SupportedSet,
    ) -> LocaleTag | None:
        """First supported tag equal in language and region to any preference.

        A regionless preference stands in for the only country variants
        the server offers: ``da`` matches ``da-DK`` unless ``da`` itself is
        declared.
        """
        return _sweep(preferences, supported, _find_exact)

    @staticmethod
    def language_match(
        preferences: Sequence[PreferenceEntry],
        supported: SupportedSet,
    ) -> LocaleTag | None:
        """First supported tag sharing a language with any preference."""
        return _sweep(preferences, supported, _find_language)

    def resolve(
        self,
        preferences: Sequence[PreferenceEntry],
        supported: SupportedSet,
    ) -> NegotiationResult:
        """Select the best supported locale; never raises."""
        if self._priority is MatchPriority.QUALITY:
            match = _sweep(preferences, supported, _find_exact_then_language)
        else:
            match = self.exact_match(preferences, supported)
            if match is None:
                match = self.language_match(preferences, supported)

        if match is None:
            logger.debug("No supported locale matched %d preference(s); using default", len(preferences))
            return NegotiationResult(matched_tag=supported.default_tag, used_default=True)

        logger.debug("Negotiated locale %s", match)
        return NegotiationResult(matched_tag=match, used_default=False)

    def negotiate(self, header: str | None, supported: SupportedSet) -> NegotiationResult:
        """Parse a raw preference header and resolve it against *supported*."""
        return self.resolve(parse_preferences(header), supported)


def _find_exact_then_language(wanted: LocaleTag, supported: SupportedSet) -> LocaleTag | None:
    match = _find_exact(wanted, supported)
    if match is None:
        match = _find_language(wanted, supported)
    return match


_default_negotiator = Negotiator()


def negotiate(header: str | None, supported: SupportedSet) -> NegotiationResult:
    """Negotiate with the default (specificity-first) strategy."""
    return _default_negotiator.negotiate(header, supported)
