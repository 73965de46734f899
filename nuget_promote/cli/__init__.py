"""
Unified CLI entry point for nuget-promote using Click.

This module provides the main CLI group and the promote sub-group.
"""

import sys

import click

from . import from_config, package, package_list
from .._version import __version__
from ..utils.constants import EXIT_USER_INTERRUPT

# ============================================================================
# CLI Group
# ============================================================================


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="nuget-promote")
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (use -v for INFO, -vv for DEBUG, -vvv for DEBUG with HTTP logs)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: int) -> None:
    """nuget-promote - Promote NuGet packages and their dependencies between feeds."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@cli.group()
def promote() -> None:
    """Promote packages from a source feed to a destination feed."""


# Register subcommands
promote.add_command(package.package)
promote.add_command(package_list.package_list, name="list")
promote.add_command(package_list.package_list, name="from-file")
promote.add_command(from_config.from_config)


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()  # pylint: disable=no-value-for-parameter  # Click handles parameters
    except KeyboardInterrupt:
        click.echo("\n\nOperation cancelled by user", err=True)
        sys.exit(EXIT_USER_INTERRUPT)


__all__ = ["cli", "main"]
