"""CLI command: nestcss parse -- print the rule tree as JSON."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from nestcss.errors import StyleSyntaxError
from nestcss.rules import parse_rules


@click.command("parse")
@click.argument("rulefile", type=click.Path(exists=True))
def tree(rulefile: str) -> None:
    """Parse a rule file and print its rule tree as JSON."""
    try:
        source = Path(rulefile).read_text(encoding="utf-8")
        rules = parse_rules(source)
    except StyleSyntaxError as exc:
        click.echo(f"Syntax error: {exc}", err=True)
        sys.exit(1)

    click.echo(json.dumps(rules or {}, indent=2))
