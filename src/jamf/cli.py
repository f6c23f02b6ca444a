"""CLI interface for jamf using Typer framework."""

import json as jsonlib
import logging
from pathlib import Path
from typing import Annotated, Any, List, Optional

import typer
from bson import json_util
from rich.console import Console
from rich.table import Table

from jamf import __description__, __version__
from jamf.bson_types import dbref, objectid
from jamf.config import LogLevel, load_config
from jamf.validation.result import SafeParseFailure

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="jamf",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

SCHEMAS = {
    "objectid": objectid,
    "dbref": dbref,
}

EXIT_INVALID = 1
EXIT_USAGE = 2


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"jamf version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """jamf - BSON-aware value validation."""


def _setup_logging(level: LogLevel) -> None:
    logging.basicConfig(
        level=level.numeric,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    logging.getLogger("jamf").setLevel(level.numeric)


def _parse_path(segments: list[str] | None) -> list[str | int]:
    """Numeric segments address list positions."""
    return [int(segment) if segment.isdigit() else segment for segment in segments or []]


def _load_value(value: str) -> Any:
    """Read VALUE as a JSON object, array or string; anything else is a bare string.

    Numbers are never decoded, so hex ids such as ``1234...`` or ``1e00...``
    stay strings.
    """
    if not value.lstrip().startswith(("{", "[", '"')):
        return value
    try:
        return jsonlib.loads(value)
    except jsonlib.JSONDecodeError:
        return value


def _print_plain(text: str) -> None:
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def _output_failure(result: SafeParseFailure, format: str) -> None:
    if format == "json":
        _print_plain(jsonlib.dumps({"success": False, **result.error.to_dict()}, indent=2))
        return

    console.print(f"[red]Validation failed with {len(result.issues)} issue(s)[/red]")
    issues_table = Table()
    issues_table.add_column("Code", style="cyan")
    issues_table.add_column("Path", style="dim")
    issues_table.add_column("Message", style="white")

    for issue in result.issues:
        issues_table.add_row(
            issue.code.value,
            ".".join(str(segment) for segment in issue.path) or "(root)",
            issue.message,
        )

    console.print(issues_table)


@app.command()
def check(
    kind: Annotated[
        str,
        typer.Argument(help="Validator to run: objectid, dbref")
    ],
    value: Annotated[
        str,
        typer.Argument(help="JSON document to validate (a bare hex string is accepted as is)")
    ],
    bson_output: Annotated[
        Optional[bool],
        typer.Option("--bson/--plain", help="Return native BSON values (default: from config)")
    ] = None,
    path: Annotated[
        Optional[List[str]],
        typer.Option("--path", "-p", help="Path prefix segment for reported issues (repeatable)")
    ] = None,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: table, json (default: table)")
    ] = "table",
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .jamf.json)")
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="Logging level: error, warn, info, debug")
    ] = None,
) -> None:
    """Validate a value and report the result or the issues found."""
    valid_formats = ["table", "json"]

    if kind not in SCHEMAS:
        console.print(f"[red]Error:[/red] Invalid kind '{kind}'. Must be one of: {', '.join(SCHEMAS)}")
        raise typer.Exit(EXIT_USAGE)

    if format not in valid_formats:
        console.print(f"[red]Error:[/red] Invalid format '{format}'. Must be one of: {', '.join(valid_formats)}")
        raise typer.Exit(EXIT_USAGE)

    try:
        jamf_config = load_config(config)
        level = LogLevel(log_level) if log_level else jamf_config.logging.level
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_USAGE)

    _setup_logging(level)

    parse_to_bson = jamf_config.parse_to_bson if bson_output is None else bson_output
    schema = SCHEMAS[kind]()
    result = schema.safe_parse(
        _load_value(value),
        path=_parse_path(path),
        parse_to_bson=parse_to_bson,
    )

    if not result.success:
        logger.info(f"{kind} validation failed with {len(result.issues)} issue(s)")
        _output_failure(result, format)
        raise typer.Exit(EXIT_INVALID)

    if format == "json":
        _print_plain(json_util.dumps({"success": True, "data": result.data}, indent=2))
    else:
        console.print(f"[green]Valid {kind}[/green]")
        _print_plain(json_util.dumps(result.data))
