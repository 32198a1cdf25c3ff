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
"""Locale negotiation — tags, preference lists, supported sets, matching.

Typical setup::

    from localefly.negotiation import SupportedSet, negotiate

    supported = SupportedSet.build(["en-US", "fr", "fr-CA"], default_override="en-US")
    result = negotiate("fr_CA, en;q=0.5", supported)
    str(result.matched_tag), result.used_default   # ("fr-CA", False)
"""

from localefly.negotiation.environment import detect_default_locale
from localefly.negotiation.negotiator import (
    MatchPriority,
    NegotiationResult,
    Negotiator,
    negotiate,
)
from localefly.negotiation.preferences import PreferenceEntry, parse_preferences
from localefly.negotiation.resolver import (
    AcceptHeaderLocaleResolver,
    FixedLocaleResolver,
    LocaleResolver,
)
from localefly.negotiation.supported import FALLBACK_LOCALE, SupportedSet
from localefly.negotiation.tag import LocaleTag, parse_preference, parse_supported_tag

__all__ = [
    "FALLBACK_LOCALE",
    "AcceptHeaderLocaleResolver",
    "FixedLocaleResolver",
    "LocaleResolver",
    "LocaleTag",
    "MatchPriority",
    "NegotiationResult",
    "Negotiator",
    "PreferenceEntry",
    "SupportedSet",
    "detect_default_locale",
    "negotiate",
    "parse_preference",
    "parse_preferences",
    "parse_supported_tag",
]
