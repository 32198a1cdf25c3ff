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
"""'localefly info' — Display version and environment locale information."""

from __future__ import annotations

import os
import platform
import sys

import click
from rich.table import Table

from localefly import __version__
from localefly.cli.console import console
from localefly.negotiation.environment import LOCALE_ENV_VARS, detect_default_locale
from localefly.negotiation.supported import FALLBACK_LOCALE


@click.command()
def info_command() -> None:
    """Display localefly and environment locale information."""
    console.print(f"\n[localefly]localefly[/localefly] [dim]v{__version__}[/dim]\n")

    env_table = Table(title="Environment", show_header=False, border_style="dim")
    env_table.add_column("Key", style="info")
    env_table.add_column("Value")
    env_table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    env_table.add_row("Platform", platform.platform())
    console.print(env_table)

    locale_table = Table(title="\nLocale", show_header=False, border_style="dim")
    locale_table.add_column("Key", style="info")
    locale_table.add_column("Value")
    for name in LOCALE_ENV_VARS:
        locale_table.add_row(name, os.environ.get(name, "[dim]unset[/dim]"))
    detected = detect_default_locale()
    if detected is None:
        locale_table.add_row("Default", f"{FALLBACK_LOCALE} [dim](fallback)[/dim]")
    else:
        locale_table.add_row("Default", detected)
    console.print(locale_table)
    console.print()
