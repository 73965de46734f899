"""
Configuration file command for the nuget-promote CLI.

The YAML file lists the packages to promote and, optionally, the license
compliance policy that every promoted package must satisfy.
"""

from pathlib import Path

import click

from ..utils.constants import EXIT_GENERAL_ERROR
from ..utils.promote_config import load_promote_config
from .common import promote_options, run_promotion


@click.command(name="from-config")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@promote_options
@click.pass_context
def from_config(ctx: click.Context, file: str, **options) -> None:
    """Promote the packages described in a YAML configuration file."""
    try:
        promote_config = load_promote_config(file)
    except (ValueError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(EXIT_GENERAL_ERROR)

    # Accepted license files are relative to the configuration file
    license_settings = promote_config.to_license_settings(Path(file).resolve().parent)
    run_promotion(ctx, promote_config.to_requests(), license_settings, **options)


__all__ = ["from_config"]
