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
"""Locale negotiation configuration properties."""

from __future__ import annotations

from dataclasses import dataclass, field

from localefly.core.config import config_properties


@config_properties(prefix="localefly.locale")
@dataclass
class LocaleProperties:
    """Configuration for locale negotiation (localefly.locale.*)."""

    supported: list[str] = field(default_factory=list)
    default: str | None = None
    priority: str = "specificity"
    detect_environment: bool = True
