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
"""Exception hierarchy for locale negotiation.

All library exceptions inherit from LocaleFlyException, so callers can
catch a single type at their setup boundary.

Categories:
- ConfigurationException: server-side setup is unusable (fatal at startup)
- LocaleParseException: a string is not a well-formed locale tag

Malformed client input never surfaces as an exception; the negotiation
core skips unparseable preference tokens instead.
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class LocaleFlyException(Exception):
    """Base exception for all localefly errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "LOCALE_CONFIG").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    default_code: str | None = None

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code if code is not None else self.default_code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Concrete Exceptions
# =============================================================================


class ConfigurationException(LocaleFlyException):
    """Supported locales or the default locale are missing or malformed."""

    default_code = "LOCALE_CONFIG"


class LocaleParseException(LocaleFlyException):
    """A string could not be parsed as a ``language[-REGION]`` tag."""

    default_code = "LOCALE_PARSE"

    def __init__(self, raw: object, reason: str) -> None:
        super().__init__(
            f"Invalid locale tag {raw!r}: {reason}",
            context={"raw": raw, "reason": reason},
        )
        self.raw = raw
        self.reason = reason
