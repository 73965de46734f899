"""
Shared options and execution for the promote subcommands.

Every promote subcommand accepts the same feed and run options; they only
differ in how the package requests are obtained.
"""

import asyncio
import logging
import signal
import sys
from typing import Any, Callable, Dict, List, Optional, TypeVar

import click
import httpx
from pydantic import ValidationError

from ..api.nuget_client import NuGetFeedClient
from ..exceptions import LicenseComplianceError, PromoteError, PromotionCancelledError, TransferError
from ..models.context import NUGET_ORG_V3_URL, FeedSettings, PromoteOptions
from ..models.licensing import LicenseComplianceSettings
from ..models.requests import PackageRequest
from ..models.results import PromoteResult
from ..services.promote_service import PromoteService
from ..utils import setup_logging
from ..utils.cancellation import CancellationToken
from ..utils.config_manager import ConfigManager
from ..utils.constants import DEFAULT_CONFIG_PATH, EXIT_GENERAL_ERROR, EXIT_USER_INTERRUPT
from ..utils.error_handling import handle_generic_error, handle_http_error
from ..versioning import BestMatchStrategy

F = TypeVar("F", bound=Callable[..., Any])


# ============================================================================
# Common Click Options
# ============================================================================


_PROMOTE_OPTIONS = [
    click.option(
        "-s",
        "--source",
        help=f"Source feed V3 service index URL (default: {NUGET_ORG_V3_URL})",
    ),
    click.option("--source-api-key", help="API key for the source feed"),
    click.option("-d", "--destination", help="Destination feed V3 service index URL"),
    click.option("--destination-api-key", help="API key used to push packages to the destination feed"),
    click.option("--destination-username", help="Basic auth user for the destination feed"),
    click.option("--destination-password", help="Basic auth password for the destination feed"),
    click.option(
        "--config",
        type=click.Path(exists=True, dir_okay=False),
        help=f"Path to a TOML file with feed settings (default: {DEFAULT_CONFIG_PATH})",
    ),
    click.option("--no-cache", is_flag=True, help="Do not cache package version lookups"),
    click.option("--dry-run", is_flag=True, help="Resolve and report packages without promoting them"),
    click.option(
        "--always-resolve-deps",
        is_flag=True,
        help="Resolve dependencies of packages that already exist in the destination feed",
    ),
    click.option(
        "--force-push",
        is_flag=True,
        help="Push packages even if they already exist in the destination feed (implies --always-resolve-deps)",
    ),
    click.option(
        "--dependency-version",
        type=click.Choice([strategy.value for strategy in BestMatchStrategy]),
        default=BestMatchStrategy.HIGHEST.value,
        show_default=True,
        help="Which version satisfying a dependency range is promoted",
    ),
]


def promote_options(func: F) -> F:
    """Attach the shared feed and run options to a promote subcommand."""
    for option in reversed(_PROMOTE_OPTIONS):
        func = option(func)
    return func


# ============================================================================
# Feed settings
# ============================================================================


def build_feed_settings(section: str, config: Optional[str], **explicit: Optional[str]) -> Optional[FeedSettings]:
    """
    Merge feed settings from the config file with explicit CLI values.

    Explicit values win over the config file. The default config file is only
    read when it exists.

    Args:
        section: Config section, "source" or "destination"
        config: Path of the TOML config file, or None for the default path
        explicit: url, api_key, username and password from the command line

    Returns:
        FeedSettings, or None when no URL is configured
    """
    values: Dict[str, str] = {}
    manager = ConfigManager(config)
    if config or manager.exists:
        values.update(manager.get_feed(section))
    values.update({key: value for key, value in explicit.items() if value})

    if "url" not in values:
        return None
    return FeedSettings(**values)


# ============================================================================
# Execution
# ============================================================================


async def _promote_async(
    source_settings: FeedSettings,
    destination_settings: FeedSettings,
    options: PromoteOptions,
    requests: List[PackageRequest],
    license_settings: Optional[LicenseComplianceSettings],
) -> PromoteResult:
    token = CancellationToken()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, token.cancel, "Operation cancelled by user")
        handles_sigint = True
    except (NotImplementedError, RuntimeError):
        logging.debug("SIGINT handler not available, Ctrl+C aborts immediately")
        handles_sigint = False

    try:
        async with NuGetFeedClient(source_settings) as source, NuGetFeedClient(destination_settings) as destination:
            service = PromoteService(source, destination, options)
            return await service.promote(requests, license_settings, token)
    finally:
        if handles_sigint:
            loop.remove_signal_handler(signal.SIGINT)


def run_promotion(
    ctx: click.Context,
    requests: List[PackageRequest],
    license_settings: Optional[LicenseComplianceSettings] = None,
    **options: Any,
) -> PromoteResult:
    """
    Run a promotion with the shared command line options.

    Exits the process with 1 on any failure and 130 on cancellation.

    Args:
        ctx: Click context of the subcommand
        requests: Package requests to promote
        license_settings: License policy, when the command has one
        options: Values of the shared promote options
    """
    setup_logging(ctx.obj.get("verbose", 0) if ctx.obj else 0, use_wrapping=True)

    config = options.get("config")
    try:
        source_settings = build_feed_settings(
            "source", config, url=options.get("source"), api_key=options.get("source_api_key")
        ) or FeedSettings(url=NUGET_ORG_V3_URL, api_key=options.get("source_api_key"))
        destination_settings = build_feed_settings(
            "destination",
            config,
            url=options.get("destination"),
            api_key=options.get("destination_api_key"),
            username=options.get("destination_username"),
            password=options.get("destination_password"),
        )
    except (ValueError, ValidationError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(EXIT_GENERAL_ERROR)

    if destination_settings is None:
        click.echo("Error: --destination is required (or set destination.url in the config file)", err=True)
        ctx.exit(EXIT_GENERAL_ERROR)

    promote_opts = PromoteOptions(
        dry_run=options.get("dry_run", False),
        always_resolve_deps=options.get("always_resolve_deps", False),
        force_push=options.get("force_push", False),
        dependency_version=options.get("dependency_version", BestMatchStrategy.HIGHEST.value),
        use_cache=not options.get("no_cache", False),
    )
    logging.debug("Promoting from %s to %s", source_settings.url, destination_settings.url)

    try:
        return asyncio.run(
            _promote_async(source_settings, destination_settings, promote_opts, requests, license_settings)
        )
    except PromotionCancelledError as e:
        logging.error("%s", e)
        sys.exit(EXIT_USER_INTERRUPT)
    except LicenseComplianceError as e:
        logging.error("%s", e)
        sys.exit(EXIT_GENERAL_ERROR)
    except TransferError as e:
        logging.error("%s (%d package(s) promoted before the failure)", e, e.completed)
        sys.exit(EXIT_GENERAL_ERROR)
    except PromoteError as e:
        handle_generic_error(e, "promotion")
        sys.exit(EXIT_GENERAL_ERROR)
    except httpx.HTTPError as e:
        handle_http_error(e, "promotion")
        sys.exit(EXIT_GENERAL_ERROR)
    except Exception as e:  # pylint: disable=broad-except
        handle_generic_error(e, "promotion")
        sys.exit(EXIT_GENERAL_ERROR)


__all__ = ["promote_options", "build_feed_settings", "run_promotion"]
