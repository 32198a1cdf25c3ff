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
"""localefly CLI — negotiate and inspect Accept-Language headers."""

from __future__ import annotations

import click


@click.group()
@click.version_option(package_name="localefly")
def cli() -> None:
    """localefly — Accept-Language locale negotiation."""


from localefly.cli.info import info_command  # noqa: E402
from localefly.cli.negotiate import negotiate_command, parse_command  # noqa: E402

cli.add_command(negotiate_command, name="negotiate")
cli.add_command(parse_command, name="parse")
cli.add_command(info_command, name="info")
