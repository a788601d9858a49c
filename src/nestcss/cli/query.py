"""CLI command: nestcss query -- list the rules matching a query."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from nestcss.errors import StyleSyntaxError
from nestcss.store import Stylesheet


@click.command()
@click.argument("rulefile", type=click.Path(exists=True))
@click.argument("query_text")
def query(rulefile: str, query_text: str) -> None:
    """Print the rules in RULEFILE that match QUERY_TEXT.

    QUERY_TEXT is selector text, optionally followed by a style block, e.g.
    '.foo { width: 10rem; }'. Exits with code 1 when nothing matches.
    """
    stylesheet = Stylesheet()
    try:
        stylesheet.extend(Path(rulefile).read_text(encoding="utf-8"))
        matches = stylesheet.rules(query_text)
    except StyleSyntaxError as exc:
        click.echo(f"Syntax error: {exc}", err=True)
        sys.exit(1)

    for rule in matches:
        click.echo(rule.css_text)

    if not matches:
        click.echo(f"No rules match {query_text!r}", err=True)
        sys.exit(1)
