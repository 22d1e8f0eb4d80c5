"""CLI command: cssif transform -- rewrite a stylesheet's if() functions."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from cssif.model.config import TransformOptions
from cssif.model.result import TransformResult
from cssif.transforms.build import transform as run_transform

RUNTIME_HEADER = "/* Runtime-processed rules (require polyfill) */"


def combine_output(result: TransformResult) -> str:
    """Native CSS followed by any runtime rules under a marker comment."""
    css = result.native_css
    if result.has_runtime_rules and result.runtime_css:
        css += f"\n\n{RUNTIME_HEADER}\n{result.runtime_css}"
    return css


def _print_stats(result: TransformResult) -> None:
    click.echo("Transformation statistics:", err=True)
    click.echo(f"  Total rules processed: {result.stats.total_rules}", err=True)
    click.echo(f"  Rules with if() transformed: {result.stats.transformed_rules}", err=True)
    click.echo(f"  Has runtime rules: {'yes' if result.has_runtime_rules else 'no'}", err=True)
    for diag in result.diagnostics:
        click.echo(f"  {diag}", err=True)


@click.command()
@click.argument("input_file", type=click.Path(dir_okay=False))
@click.argument("output_file", type=click.Path(dir_okay=False), required=False)
@click.option("--minify", is_flag=True, default=False, help="Minify the native CSS.")
@click.option("--stats", "show_stats", is_flag=True, default=False, help="Show transformation statistics.")
def transform(input_file: str, output_file: str | None, minify: bool, show_stats: bool) -> None:
    """Transform INPUT_FILE, writing to OUTPUT_FILE or stdout.

    Exits with code 1 if the input cannot be read or the output written.
    """
    try:
        source = Path(input_file).read_text(encoding="utf-8")
    except OSError as exc:
        click.echo(f"Error: cannot read {input_file}: {exc}", err=True)
        sys.exit(1)

    result = run_transform(source, TransformOptions(minify=minify))

    if show_stats:
        _print_stats(result)

    css = combine_output(result)
    if output_file:
        try:
            Path(output_file).write_text(css, encoding="utf-8")
        except OSError as exc:
            click.echo(f"Error: cannot write {output_file}: {exc}", err=True)
            sys.exit(1)
        click.echo(f"Transformed CSS written to: {output_file}", err=True)
    else:
        click.echo(css)

    if result.has_runtime_rules:
        click.echo(
            "Warning: some if() functions still require runtime processing.",
            err=True,
        )
    sys.exit(0)
