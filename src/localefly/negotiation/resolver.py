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
"""Locale resolution — protocol and built-in resolvers.

Resolvers are the thin seam between a host framework's request object
and the negotiation core. They only read a header value; attaching the
outcome to a response is left to the caller.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from localefly.negotiation.negotiator import NegotiationResult, Negotiator
from localefly.negotiation.supported import SupportedSet
from localefly.negotiation.tag import LocaleTag, parse_supported_tag


@runtime_checkable
class LocaleResolver(Protocol):
    """Port for determining the locale from an incoming request."""

    def resolve_locale(self, request: Any) -> str: ...


class AcceptHeaderLocaleResolver:
    """Negotiates the ``Accept-Language`` header against supported locales.

    The header is read from ``request.accept_language`` when present,
    otherwise from ``request.headers["accept-language"]``. A request with
    no usable header resolves to the supported set's default.
    """

    def __init__(self, supported: SupportedSet, negotiator: Negotiator | None = None) -> None:
        self._supported = supported
        self._negotiator = negotiator or Negotiator()

    @property
    def supported(self) -> SupportedSet:
        return self._supported

    def resolve(self, request: Any) -> NegotiationResult:
        """Negotiate and return the full result, including ``used_default``."""
        return self._negotiator.negotiate(_accept_language(request), self._supported)

    def resolve_locale(self, request: Any) -> str:
        return str(self.resolve(request).matched_tag)


class FixedLocaleResolver:
    """Always returns a pre-configured locale, ignoring the request."""

    def __init__(self, locale: str = "en") -> None:
        self._locale: LocaleTag = parse_supported_tag(locale)

    def resolve_locale(self, request: Any) -> str:  # noqa: ARG002
        return str(self._locale)


def _accept_language(request: Any) -> str:
    header: str = getattr(request, "accept_language", "") or ""
    if header:
        return header
    headers = getattr(request, "headers", None)
    if headers is None:
        return ""
    return headers.get("accept-language") or headers.get("Accept-Language") or ""
