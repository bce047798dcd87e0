"""
Command-line interface: build the plugin jar for one stub release.

    phalconautocomplete -v 5.0.0
"""

import logging
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from phalconautocomplete.core.config import get_settings
from phalconautocomplete.core.errors import PackagingError
from phalconautocomplete.core.settings import USAGE
from phalconautocomplete.core.utils import configure_logging
from phalconautocomplete.packaging import PackageResult, build_package, request_for
from phalconautocomplete.packaging.archive import list_entries

logger = logging.getLogger(__name__)
console = Console()

app = typer.Typer(help="Package a Phalcon IDE stubs release as a PhpStorm plugin jar.", add_completion=False)

# Usage errors are raised from the click copy typer was built against
_USAGE_ERROR = next(cls for cls in typer.BadParameter.__mro__ if cls.__name__ == "UsageError")


def prompt_version() -> str:
    """Ask for the version until a non-blank line is entered."""
    while True:
        version = typer.prompt("Enter the version number").strip()
        if version:
            return version


def print_summary(result: PackageResult) -> None:
    table = Table(title=result.artifact.name)
    table.add_column("Item", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Artifact", str(result.artifact))
    table.add_row("Version", result.version)
    table.add_row("Major version", result.major_version)
    table.add_row("Source entries", str(result.source_entries))
    table.add_row("Jar entries", str(len(list_entries(result.artifact))))
    table.add_row("Size", f"{result.artifact.stat().st_size // 1024} KB")
    console.print(table)


@app.command()
def build(
    version: Optional[str] = typer.Option(
        None, "-v", "--release", help="Release version to package, prompted for when omitted"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
    summary: bool = typer.Option(False, "--summary", "-s", help="Print a summary table of the built jar"),
):
    """
    Download a tagged ide-stubs release and package it with the local meta files.
    """
    configure_logging(verbose)

    if not version or not version.strip():
        version = prompt_version()

    try:
        settings = get_settings()
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        raise typer.Exit(1)

    try:
        request = request_for(version, settings)
    except ValueError as e:
        logger.error(str(e))
        raise typer.Exit(1)

    try:
        result = build_package(request, settings)
    except PackagingError as e:
        logger.error(e.message)
        raise typer.Exit(1)

    if summary:
        print_summary(result)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI and return its exit status.

    Usage errors print the short usage line and return 1.
    """
    try:
        status = app(args=argv, prog_name="phalconautocomplete", standalone_mode=False)
    except _USAGE_ERROR:
        typer.echo(USAGE)
        return 1
    except typer.Abort:
        return 1
    return status or 0


if __name__ == "__main__":
    raise SystemExit(main())
