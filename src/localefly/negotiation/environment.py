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
"""Derive a default locale from the process environment.

Nothing in the negotiation core calls this on its own. Setup code reads
the environment once and hands the result to ``SupportedSet.build`` as
``ambient_default``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from localefly.negotiation.tag import parse_preference

logger = logging.getLogger(__name__)

# Checked in order; the first usable value wins.
LOCALE_ENV_VARS = ("LC_ALL", "LC_MESSAGES", "LANG", "LANGUAGE")

_NO_LOCALE = {"c", "posix"}


def detect_default_locale(environ: Mapping[str, str] | None = None) -> str | None:
    """Return the canonical locale named by the environment, if any.

    ``de_DE.UTF-8`` becomes ``de-DE``; ``C`` and ``POSIX`` count as unset.
    ``LANGUAGE`` may hold a colon-separated list, of which the first usable
    entry is taken.
    """
    env = os.environ if environ is None else environ
    for name in LOCALE_ENV_VARS:
        value = env.get(name)
        if not value:
            continue
        usable = [c for c in value.split(":") if not _is_no_locale(c)]
        if not usable:
            continue
        for candidate in usable:
            tag = _locale_from_posix(candidate)
            if tag is not None:
                return tag
        logger.warning("Ignoring unusable locale in %s: %r", name, value)
    return None


def _base_name(value: str) -> str:
    """Strip ``.codeset`` and ``@modifier`` from a POSIX locale name."""
    return value.split(".", 1)[0].split("@", 1)[0].strip()


def _is_no_locale(value: str) -> bool:
    base = _base_name(value)
    return not base or base.lower() in _NO_LOCALE


def _locale_from_posix(value: str) -> str | None:
    base = _base_name(value)
    tag = parse_preference(base)
    return str(tag) if tag is not None else None
