"""CLI command: cssif check -- report if() expressions that cannot be rewritten."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from cssif.model.diagnostic import Severity
from cssif.transforms.build import transform


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
def check(cssfile: str) -> None:
    """Check the if() functions in a stylesheet.

    Prints diagnostics (errors, warnings, info) and exits with code 0 if
    no errors are found, or code 1 if there are errors.
    """
    css_path = Path(cssfile)
    result = transform(css_path.read_text(encoding="utf-8"))
    diagnostics = result.diagnostics

    if not diagnostics:
        click.echo(f"OK: {css_path.name} is fully native ({result.stats.transformed_rules} rule(s) with if())")
        sys.exit(0)

    errors = [d for d in diagnostics if d.severity is Severity.ERROR]
    warnings = [d for d in diagnostics if d.severity is Severity.WARNING]
    infos = [d for d in diagnostics if d.severity is Severity.INFO]

    for diag in diagnostics:
        click.echo(str(diag))

    click.echo()
    click.echo(
        f"Summary: {len(errors)} error(s), {len(warnings)} warning(s), {len(infos)} info"
    )

    if errors:
        sys.exit(1)
    sys.exit(0)
