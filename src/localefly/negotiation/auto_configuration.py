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
"""Negotiation auto-configuration — builds the core objects from Config."""

from __future__ import annotations

import os
from collections.abc import Mapping

from localefly.config.properties import LocaleProperties
from localefly.core.config import Config
from localefly.kernel.exceptions import ConfigurationException
from localefly.negotiation.environment import detect_default_locale
from localefly.negotiation.negotiator import MatchPriority, Negotiator
from localefly.negotiation.resolver import AcceptHeaderLocaleResolver
from localefly.negotiation.supported import SupportedSet


def parse_priority(value: str | MatchPriority) -> MatchPriority:
    """Map a config string (``specificity`` / ``quality``) to MatchPriority."""
    if isinstance(value, MatchPriority):
        return value
    try:
        return MatchPriority(str(value).strip().lower())
    except ValueError as exc:
        choices = ", ".join(p.value for p in MatchPriority)
        raise ConfigurationException(
            f"Unknown match priority {value!r}; expected one of: {choices}",
            context={"priority": value},
        ) from exc


class NegotiationAutoConfiguration:
    """Creates the SupportedSet, Negotiator and resolver for an application.

    The environment is consulted here, once, and only when
    ``localefly.locale.detect-environment`` is on and no explicit default
    is configured.
    """

    def __init__(
        self,
        properties: LocaleProperties,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._properties = properties
        self._environ = os.environ if environ is None else environ

    @classmethod
    def from_config(
        cls,
        config: Config,
        environ: Mapping[str, str] | None = None,
    ) -> NegotiationAutoConfiguration:
        return cls(config.bind(LocaleProperties), environ)

    @property
    def properties(self) -> LocaleProperties:
        return self._properties

    def supported_set(self) -> SupportedSet:
        props = self._properties
        if not props.supported:
            raise ConfigurationException(
                "No supported locales configured; set localefly.locale.supported",
            )
        ambient = None
        if not props.default and props.detect_environment:
            ambient = detect_default_locale(self._environ)
        return SupportedSet.build(
            props.supported,
            default_override=props.default,
            ambient_default=ambient,
        )

    def negotiator(self) -> Negotiator:
        return Negotiator(parse_priority(self._properties.priority))

    def locale_resolver(self) -> AcceptHeaderLocaleResolver:
        return AcceptHeaderLocaleResolver(self.supported_set(), self.negotiator())
