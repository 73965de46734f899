"""
Single package command for the nuget-promote CLI.
"""

import click

from ..models.requests import LATEST_KEYWORD, PackageRequest, parse_version_policy
from ..utils.constants import EXIT_GENERAL_ERROR
from .common import promote_options, run_promotion


@click.command()
@click.argument("package_id", metavar="ID")
@click.option(
    "-V",
    "--version",
    "version",
    default=LATEST_KEYWORD,
    show_default=True,
    help="Exact version, version range (e.g. '[1.0.0,2.0.0)') or 'latest'",
)
@promote_options
@click.pass_context
def package(ctx: click.Context, package_id: str, version: str, **options) -> None:
    """Promote a package and its dependencies."""
    try:
        request = PackageRequest(id=package_id, policies=[parse_version_policy(version)])
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(EXIT_GENERAL_ERROR)

    run_promotion(ctx, [request], **options)


__all__ = ["package"]
