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
"""'localefly negotiate' and 'localefly parse' commands."""

from __future__ import annotations

import dataclasses
import json
from pathlib import Path

import click
from rich.table import Table

from localefly.cli.console import console, print_error
from localefly.config.properties import LocaleProperties
from localefly.core.config import Config
from localefly.kernel.exceptions import LocaleFlyException
from localefly.logging.port import LoggingPort
from localefly.logging.structlog_adapter import StructlogAdapter
from localefly.negotiation.auto_configuration import NegotiationAutoConfiguration
from localefly.negotiation.negotiator import MatchPriority
from localefly.negotiation.preferences import parse_preferences


def _load_config(config_path: Path | None) -> Config:
    if config_path is not None:
        return Config.from_file(config_path)
    return Config.from_sources(Path.cwd())


def _configure_logging(config: Config, port: LoggingPort | None = None) -> LoggingPort:
    port = port or StructlogAdapter()
    port.configure(config)
    return port


@click.command()
@click.argument("header", default="")
@click.option(
    "--supported",
    "-s",
    multiple=True,
    help="Supported locale, in order of preference. Repeatable; overrides config.",
)
@click.option("--default", "-d", "default", default=None, help="Default locale when nothing matches.")
@click.option(
    "--priority",
    type=click.Choice([p.value for p in MatchPriority]),
    default=None,
    help="Whether an exact match beats stated quality (specificity) or not (quality).",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to a localefly YAML/TOML config file.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
def negotiate_command(
    header: str,
    supported: tuple[str, ...],
    default: str | None,
    priority: str | None,
    config_path: Path | None,
    as_json: bool,
) -> None:
    """Negotiate HEADER against the supported locales."""
    try:
        config = _load_config(config_path)
        _configure_logging(config)

        props = config.bind(LocaleProperties)
        overrides: dict[str, object] = {}
        if supported:
            overrides["supported"] = list(supported)
        if default is not None:
            overrides["default"] = default
        if priority is not None:
            overrides["priority"] = priority
        props = dataclasses.replace(props, **overrides)

        auto = NegotiationAutoConfiguration(props)
        result = auto.negotiator().negotiate(header, auto.supported_set())
    except LocaleFlyException as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    if as_json:
        click.echo(json.dumps({"locale": str(result.matched_tag), "defaulted": result.used_default}))
        return

    console.print(f"[success]{result.matched_tag}[/success]")
    if result.used_default:
        console.print("[dim](default: no supported locale matched)[/dim]")


@click.command()
@click.argument("header")
def parse_command(header: str) -> None:
    """Show how HEADER is parsed and ranked."""
    entries = parse_preferences(header)
    if not entries:
        console.print("[warning]No usable locale preferences.[/warning]")
        return

    table = Table(border_style="dim")
    table.add_column("Rank", justify="right")
    table.add_column("Locale", style="info")
    table.add_column("Quality", justify="right")
    table.add_column("Position", justify="right", style="dim")
    for rank, entry in enumerate(entries, start=1):
        table.add_row(str(rank), str(entry.tag), f"{entry.quality:g}", str(entry.original_order))
    console.print(table)
