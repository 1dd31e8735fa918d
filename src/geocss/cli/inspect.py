"""CLI command: geocss inspect -- display the rules of a stylesheet."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from geocss.config import ParserConfig
from geocss.errors import ParseError
from geocss.grouping import rule_specificity, sort_by_specificity
from geocss.parser import CssParser


@click.command()
@click.argument("stylesheet", type=click.Path(exists=True, dir_okay=False))
@click.option("--encoding", default="utf-8", show_default=True, help="Stylesheet encoding.")
@click.option("--cascade", is_flag=True, help="List rules in ascending specificity order.")
def inspect(stylesheet: str, encoding: str, cascade: bool) -> None:
    """Parse a stylesheet and display its rules.

    Shows each rule's title, selector, and specificity, followed by one line
    per rendering context with the bound properties.
    """
    path = Path(stylesheet)
    parser = CssParser(ParserConfig(encoding=encoding))

    try:
        rules = parser.parse_file(path)
    except (ParseError, UnicodeDecodeError, OSError) as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    if cascade:
        rules = sort_by_specificity(rules)

    click.echo(f"Stylesheet: {path.name}")
    click.echo(f"Rules: {len(rules)}")

    for index, rule in enumerate(rules, start=1):
        click.echo()
        header = f"Rule {index}"
        if rule.description:
            header += f': "{rule.description.title}"'
        click.echo(header)
        click.echo(f"  selector:    {rule.selector}")
        click.echo(f"  specificity: {rule_specificity(rule)}")
        for context, properties in rule.bindings:
            label = str(context) if context is not None else "(default)"
            click.echo(f"  {label}")
            for prop in properties:
                click.echo(f"    {prop}")
