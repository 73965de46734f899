"""
nuget-promote - Promote NuGet packages between feeds.

This package resolves package requests and their dependency graphs against a
source feed, checks license compliance and copies whatever is missing to a
destination feed.
"""

from ._version import __version__

# Import main classes and functions for easy access
from .api import CachedFeedAccessor, NuGetFeedClient
from .exceptions import PromoteError
from .models import FeedSettings, PackageIdentity, PackageRequest, PromoteOptions
from .services import PromoteService
from .utils import setup_logging
from .cli import main as cli_main, cli as cli_group

__all__ = [
    "__version__",
    "NuGetFeedClient",
    "CachedFeedAccessor",
    "PromoteError",
    "FeedSettings",
    "PackageIdentity",
    "PackageRequest",
    "PromoteOptions",
    "PromoteService",
    "setup_logging",
    "cli_main",
    "cli_group",
]
