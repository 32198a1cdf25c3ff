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
"""LocaleTag — immutable ``language[-REGION]`` identifier.

Tags are accepted with either ``-`` or ``_`` between language and region
and are always rendered in canonical form (``fr-CA``). Two entry points
exist because client input and server configuration fail differently:

- :func:`parse_preference` never raises and returns ``None`` for junk.
- :func:`parse_supported_tag` raises :class:`ConfigurationException`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from localefly.kernel.exceptions import ConfigurationException, LocaleParseException

_TAG_RE = re.compile(r"^(?P<language>[A-Za-z0-9]+)(?:[-_](?P<region>[A-Za-z0-9]+))?$")
_SUBTAG_RE = re.compile(r"[A-Za-z0-9]+")


@dataclass(frozen=True)
class LocaleTag:
    """A parsed locale identifier: lowercase language, optional uppercase region."""

    language: str
    region: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.language, str) or _SUBTAG_RE.fullmatch(self.language) is None:
            raise LocaleParseException(self.language, "language subtag must be non-empty alphanumerics")
        if self.region is not None and (
            not isinstance(self.region, str) or _SUBTAG_RE.fullmatch(self.region) is None
        ):
            raise LocaleParseException(self.region, "region subtag must be non-empty alphanumerics")
        object.__setattr__(self, "language", self.language.lower())
        if self.region is not None:
            object.__setattr__(self, "region", self.region.upper())

    @classmethod
    def parse(cls, raw: str) -> LocaleTag:
        """Parse *raw* strictly, raising :class:`LocaleParseException`."""
        if not isinstance(raw, str):
            raise LocaleParseException(raw, "expected a string")
        text = raw.strip()
        if not text:
            raise LocaleParseException(raw, "tag is empty")
        match = _TAG_RE.match(text)
        if match is None:
            raise LocaleParseException(raw, "expected 'language' or 'language-REGION'")
        return cls(match.group("language"), match.group("region"))

    def matches_language(self, other: LocaleTag) -> bool:
        """True when both tags share a language, regardless of region."""
        return self.language == other.language

    def matches_exact(self, other: LocaleTag) -> bool:
        """True when language and region agree (both regionless counts)."""
        return self.language == other.language and self.region == other.region

    def __str__(self) -> str:
        if self.region is None:
            return self.language
        return f"{self.language}-{self.region}"


def parse_preference(raw: str) -> LocaleTag | None:
    """Lenient parse for client-supplied tokens; ``None`` when malformed."""
    try:
        return LocaleTag.parse(raw)
    except LocaleParseException:
        return None


def parse_supported_tag(raw: str) -> LocaleTag:
    """Strict parse for server-declared tags.

    Raises:
        ConfigurationException: when *raw* is not a well-formed tag.
    """
    try:
        return LocaleTag.parse(raw)
    except LocaleParseException as exc:
        raise ConfigurationException(
            f"Supported locale {raw!r} is not a valid tag: {exc.reason}",
            context={"tag": raw},
        ) from exc
