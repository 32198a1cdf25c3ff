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
"""Accept-Language style preference parsing.

Turns ``"en;q=.8, da, fr_CA;q=0.5"`` into an ordered list of
:class:`PreferenceEntry` items. Client input is untrusted: unparseable
tokens are skipped and an unusable header simply yields ``[]``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from localefly.negotiation.tag import LocaleTag, parse_preference

logger = logging.getLogger(__name__)

DEFAULT_QUALITY = 1.0


@dataclass(frozen=True)
class PreferenceEntry:
    """One acceptable locale from the client, with its weight and position."""

    tag: LocaleTag
    quality: float = DEFAULT_QUALITY
    original_order: int = 0

    def __str__(self) -> str:
        if self.quality == DEFAULT_QUALITY:
            return str(self.tag)
        return f"{self.tag};q={self.quality:g}"


def parse_preferences(header: str | None) -> list[PreferenceEntry]:
    """Parse a raw preference header into quality-sorted entries.

    Entries are ordered by quality (highest first); equal qualities keep
    the order in which the client listed them. Entries with ``q=0`` are
    explicit rejections and are left out.
    """
    if not header:
        return []

    entries: list[PreferenceEntry] = []
    for position, token in enumerate(header.split(",")):
        raw_tag, _, raw_params = token.partition(";")
        raw_tag = raw_tag.strip()
        if not raw_tag:
            continue

        tag = parse_preference(raw_tag)
        if tag is None:
            logger.debug("Skipping unparseable preference token %r", raw_tag)
            continue

        quality = _parse_quality(raw_params)
        if quality <= 0:
            continue

        entries.append(PreferenceEntry(tag=tag, quality=quality, original_order=position))

    # sorted() is stable, so ties stay in header order.
    return sorted(entries, key=lambda entry: -entry.quality)


def _parse_quality(raw_params: str) -> float:
    """Extract ``q`` from ``;``-separated parameters, defaulting to 1.0."""
    for param in raw_params.split(";"):
        name, sep, value = param.partition("=")
        if not sep or name.strip().lower() != "q":
            continue
        try:
            quality = float(value.strip())
        except ValueError:
            return DEFAULT_QUALITY
        if math.isnan(quality) or quality > DEFAULT_QUALITY:
            return DEFAULT_QUALITY
        return quality
    return DEFAULT_QUALITY
