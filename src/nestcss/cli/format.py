"""CLI command: nestcss format -- flatten nested rule text."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from nestcss.errors import StyleSyntaxError
from nestcss.rules import parse_rules, stringify


@click.command("format")
@click.argument("rulefile", type=click.Path(exists=True))
@click.option("--indent", default=2, show_default=True, help="Spaces per nesting level; 0 for one line per rule")
def format_rules(rulefile: str, indent: int) -> None:
    """Parse a rule file and print the flattened rules.

    Nested selectors are combined and at-rules are moved to the top level.
    """
    try:
        source = Path(rulefile).read_text(encoding="utf-8")
        rules = parse_rules(source)
    except StyleSyntaxError as exc:
        click.echo(f"Syntax error: {exc}", err=True)
        sys.exit(1)

    for segment in stringify(rules, indentation=indent):
        click.echo(segment.rstrip())
