"""
Central constants for the nuget-promote package.

This module consolidates constants used throughout the codebase.
"""

from .._version import __version__

# ============================================================================
# NuGet V3 Service Index Resources
# ============================================================================

# Flat container: version lists and .nupkg downloads
PACKAGE_BASE_ADDRESS_TYPES = ["PackageBaseAddress/3.0.0"]

# Registration index: listed flag, dependencies and license metadata.
# Ordered by preference; the gzip/semver2 variants carry prerelease data too.
REGISTRATIONS_BASE_URL_TYPES = [
    "RegistrationsBaseUrl/3.6.0",
    "RegistrationsBaseUrl/3.4.0",
    "RegistrationsBaseUrl/3.0.0-rc",
    "RegistrationsBaseUrl",
]

# Push endpoint
PACKAGE_PUBLISH_TYPES = ["PackagePublish/2.0.0"]

# Header carrying the API key on push
API_KEY_HEADER = "X-NuGet-ApiKey"

# ============================================================================
# API and Network Constants
# ============================================================================

# Default timeout for HTTP requests (seconds); package archives can be large
DEFAULT_TIMEOUT = 120

USER_AGENT = f"nuget-promote/{__version__}"

# Chunk size used when streaming package archives to disk
DOWNLOAD_CHUNK_SIZE = 64 * 1024

# ============================================================================
# Licensing
# ============================================================================

# License reported for well-known Microsoft .NET library license URLs
MS_NET_LIBRARY_LICENSE = "MICROSOFT .NET LIBRARY"

MS_NET_LIBRARY_LICENSE_URLS = frozenset(
    [
        "http://go.microsoft.com/fwlink/?LinkId=329770",
        "https://go.microsoft.com/fwlink/?LinkId=329770",
        "https://dotnet.microsoft.com/en-us/dotnet_library_license.htm",
    ]
)

# ============================================================================
# Exit Codes
# ============================================================================

EXIT_GENERAL_ERROR = 1
EXIT_USER_INTERRUPT = 130  # User pressed Ctrl+C

# ============================================================================
# Default Paths
# ============================================================================

# Default feed credentials file
DEFAULT_CONFIG_PATH = "~/.config/nuget-promote/config.toml"
