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
"""SupportedSet — the server's declared locales plus its fallback."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from localefly.kernel.exceptions import ConfigurationException
from localefly.negotiation.tag import LocaleTag, parse_preference, parse_supported_tag

logger = logging.getLogger(__name__)

FALLBACK_LOCALE = "en-US"


class SupportedSet:
    """Immutable, ordered collection of supported locales.

    Declaration order is significant: when several supported tags match a
    preference equally well, the one declared first wins. ``default_tag``
    is returned when nothing matches and need not be one of ``tags``.

    Build instances with :meth:`build`; the constructor expects
    already-parsed tags.
    """

    __slots__ = ("_tags", "_default_tag")

    def __init__(self, tags: Iterable[LocaleTag], default_tag: LocaleTag) -> None:
        unique: list[LocaleTag] = []
        for tag in tags:
            if tag not in unique:
                unique.append(tag)
        if not unique:
            raise ConfigurationException("At least one supported locale must be declared")
        self._tags: tuple[LocaleTag, ...] = tuple(unique)
        self._default_tag = default_tag

    @classmethod
    def build(
        cls,
        tags: str | Iterable[str],
        default_override: str | None = None,
        ambient_default: str | None = None,
    ) -> SupportedSet:
        """Parse server-declared tags into a SupportedSet.

        Args:
            tags: Supported tag strings in order of declaration. A single
                string is treated as a one-element list.
            default_override: Explicit default locale, wins when given.
            ambient_default: Runtime locale supplied by the caller (see
                :func:`localefly.negotiation.environment.detect_default_locale`).
                Used when there is no override; ``en-US`` otherwise.

        Raises:
            ConfigurationException: a tag or the default is malformed, or
                no tags were given.
        """
        if isinstance(tags, str):
            tags = [tags]
        parsed = [parse_supported_tag(raw) for raw in tags]

        if default_override:
            default_raw = default_override
        elif ambient_default:
            default_raw = ambient_default
        else:
            default_raw = FALLBACK_LOCALE
        default_tag = parse_supported_tag(default_raw)

        supported = cls(parsed, default_tag)
        logger.info(
            "Supported locales: %s (default %s)",
            ", ".join(str(tag) for tag in supported.tags),
            supported.default_tag,
        )
        return supported

    @property
    def tags(self) -> tuple[LocaleTag, ...]:
        return self._tags

    @property
    def default_tag(self) -> LocaleTag:
        return self._default_tag

    def __iter__(self) -> Iterator[LocaleTag]:
        return iter(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            item = parse_preference(item)
        return item in self._tags

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SupportedSet):
            return NotImplemented
        return self._tags == other._tags and self._default_tag == other._default_tag

    def __hash__(self) -> int:
        return hash((self._tags, self._default_tag))

    def __repr__(self) -> str:
        tags = ", ".join(str(tag) for tag in self._tags)
        return f"SupportedSet([{tags}], default={self._default_tag})"
