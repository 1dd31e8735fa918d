"""CLI command: geocss validate -- parse a stylesheet and report errors."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from geocss.config import ParserConfig
from geocss.errors import ParseError
from geocss.parser import CssParser


@click.command()
@click.argument("stylesheet", type=click.Path(exists=True, dir_okay=False))
@click.option("--encoding", default="utf-8", show_default=True, help="Stylesheet encoding.")
def validate(stylesheet: str, encoding: str) -> None:
    """Parse a stylesheet and exit with code 0 if it is well-formed, 1 otherwise."""
    path = Path(stylesheet)
    parser = CssParser(ParserConfig(encoding=encoding))

    try:
        rules = parser.parse_file(path)
    except (ParseError, UnicodeDecodeError, OSError) as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    click.echo(f"OK: {path.name} ({len(rules)} rules)")
