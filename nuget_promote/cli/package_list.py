"""
Package list command for the nuget-promote CLI.

The file holds one package per line in any of these forms:

    System.Runtime 4.3.1
    Install-Package System.Runtime -Version 4.3.1
    <PackageReference Include="System.Runtime" Version="4.3.1" />
"""

import click

from ..utils.constants import EXIT_GENERAL_ERROR
from ..utils.package_list import load_package_list
from .common import promote_options, run_promotion


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@promote_options
@click.pass_context
def package_list(ctx: click.Context, file: str, **options) -> None:
    """Promote the packages listed in a file, with their dependencies."""
    try:
        requests = load_package_list(file)
    except (ValueError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(EXIT_GENERAL_ERROR)

    run_promotion(ctx, requests, **options)


__all__ = ["package_list"]
