"""
NuGet V3 feed client.

This module implements the FeedAccessor protocol over the NuGet V3 HTTP API.

API documentation:
- https://learn.microsoft.com/nuget/api/overview
- https://learn.microsoft.com/nuget/api/package-base-address-resource
- https://learn.microsoft.com/nuget/api/registration-base-url-resource
- https://learn.microsoft.com/nuget/api/package-publish-resource

Resources are discovered from the service index on first use:
- PackageBaseAddress (flat container) lists versions and serves .nupkg files
- RegistrationsBaseUrl provides the listed flag, dependencies and licenses
- PackagePublish accepts pushes
"""

import io
import logging
import os
from typing import Any, BinaryIO, Dict, List, Optional, Set

import httpx

from ..exceptions import FeedError, PackageNotFoundError
from ..models.context import FeedSettings
from ..models.package import DependencyGroup, PackageDependency, PackageIdentity, PackageMetadata
from ..utils.cancellation import CancellationToken, ensure_token
from ..utils.constants import (
    API_KEY_HEADER,
    DOWNLOAD_CHUNK_SIZE,
    PACKAGE_BASE_ADDRESS_TYPES,
    PACKAGE_PUBLISH_TYPES,
    REGISTRATIONS_BASE_URL_TYPES,
)
from ..utils.error_handling import handle_http_error
from ..utils.session import create_async_session
from ..versioning import NuGetVersion, VersionRange
from .archive import ZipArchiveReader

# Registration leaves published at this date are unlisted on nuget.org
UNLISTED_PUBLISH_PREFIX = "1900-01-01"


def _parse_dependency_range(value: Optional[str]) -> VersionRange:
    """Parse a registration dependency range; a missing range allows every version."""
    if not value or value.replace(" ", "") in ("(,)", "[,]", "*"):
        return VersionRange()
    return VersionRange.parse(value)


def _is_listed(entry: Dict[str, Any]) -> bool:
    if "listed" in entry:
        return bool(entry["listed"])
    return not str(entry.get("published", "")).startswith(UNLISTED_PUBLISH_PREFIX)


class NuGetFeedClient:
    """
    A client for one NuGet V3 feed.

    The client owns its httpx.AsyncClient unless one is passed in. Use it as
    an async context manager or call ``aclose`` when done.
    """

    def __init__(self, settings: FeedSettings, session: Optional[httpx.AsyncClient] = None) -> None:
        """
        Initialize the feed client.

        Args:
            settings: Feed URL and credentials
            session: Optional pre-configured async HTTP client
        """
        self.settings = settings
        self._owns_session = session is None
        auth = (settings.username, settings.password) if settings.has_credentials else None
        self.session = session or create_async_session(auth=auth)  # type: ignore[arg-type]
        self._resources: Optional[Dict[str, str]] = None

    @property
    def source(self) -> str:
        return self.settings.url

    async def aclose(self) -> None:
        """Close the session and release all connections."""
        if self._owns_session and not self.session.is_closed:
            await self.session.aclose()
            logging.debug("Feed client for %s closed", self.source)

    async def __aenter__(self) -> "NuGetFeedClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    # ========================================================================
    # HTTP helpers
    # ========================================================================

    async def _send(self, method: str, url: str, operation: str, **kwargs) -> httpx.Response:
        """Send a request, converting transport failures into FeedError."""
        logging.debug("%s %s", method, url)
        try:
            return await self.session.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            handle_http_error(e, operation)
            raise FeedError(f"Failed to {operation}: {e}") from e

    def _check_response(self, response: httpx.Response, operation: str) -> None:
        """Raise FeedError for any unsuccessful response."""
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            handle_http_error(e, operation, log_traceback=False)
            raise FeedError(f"Failed to {operation}: {response.status_code} {response.reason_phrase}") from e

    async def _get_json(self, url: str, operation: str) -> Optional[Dict[str, Any]]:
        """GET a JSON document; returns None on 404."""
        response = await self._send("GET", url, operation)
        if response.status_code == 404:
            return None
        self._check_response(response, operation)
        try:
            return response.json()
        except ValueError as e:
            raise FeedError(f"Invalid JSON response during {operation}: {e}") from e

    # ========================================================================
    # Service index
    # ========================================================================

    async def _get_resources(self) -> Dict[str, str]:
        if self._resources is None:
            index = await self._get_json(self.source, f"read service index {self.source}")
            if index is None:
                raise FeedError(f"Service index not found at {self.source}")
            self._resources = {}
            for resource in index.get("resources", []):
                resource_type = resource.get("@type")
                resource_id = resource.get("@id")
                types = resource_type if isinstance(resource_type, list) else [resource_type]
                for item in types:
                    if item and resource_id:
                        self._resources.setdefault(item, resource_id)
            logging.debug("Discovered %d resources at %s", len(self._resources), self.source)
        return self._resources

    async def _get_resource_url(self, resource_types: List[str]) -> str:
        resources = await self._get_resources()
        for resource_type in resource_types:
            if resource_type in resources:
                return resources[resource_type].rstrip("/")
        raise FeedError(f"Feed {self.source} does not provide any of {', '.join(resource_types)}")

    async def _package_url(self, identity: PackageIdentity) -> str:
        base = await self._get_resource_url(PACKAGE_BASE_ADDRESS_TYPES)
        package_id = identity.id.lower()
        version = identity.version.to_normalized_string().lower()
        return f"{base}/{package_id}/{version}/{package_id}.{version}.nupkg"

    # ========================================================================
    # FeedAccessor operations
    # ========================================================================

    async def get_all_versions(
        self, package_id: str, token: Optional[CancellationToken] = None
    ) -> Set[NuGetVersion]:
        """
        List every version of a package from the flat container.

        Raises:
            PackageNotFoundError: If the feed does not know the package id
        """
        ensure_token(token).raise_if_cancelled()
        base = await self._get_resource_url(PACKAGE_BASE_ADDRESS_TYPES)
        data = await self._get_json(f"{base}/{package_id.lower()}/index.json", f"list versions of {package_id}")
        if data is None:
            raise PackageNotFoundError(f"Package {package_id} not found")

        versions: Set[NuGetVersion] = set()
        for value in data.get("versions", []):
            version = NuGetVersion.try_parse(value)
            if version is None:
                logging.debug("Ignoring unparseable version '%s' of %s", value, package_id)
                continue
            versions.add(version)
        return versions

    async def _get_registration_leaves(self, package_id: str, version: NuGetVersion) -> List[Dict[str, Any]]:
        base = await self._get_resource_url(REGISTRATIONS_BASE_URL_TYPES)
        operation = f"read registration of {package_id}"
        index = await self._get_json(f"{base}/{package_id.lower()}/index.json", operation)
        if index is None:
            return []

        leaves: List[Dict[str, Any]] = []
        for page in index.get("items", []):
            lower = NuGetVersion.try_parse(page.get("lower", ""))
            upper = NuGetVersion.try_parse(page.get("upper", ""))
            if (lower is not None and version < lower) or (upper is not None and version > upper):
                continue
            items = page.get("items")
            if items is None:
                page_data = await self._get_json(page["@id"], operation)
                items = (page_data or {}).get("items", [])
            leaves.extend(items)
        return leaves

    async def get_metadata(
        self, identity: PackageIdentity, token: Optional[CancellationToken] = None
    ) -> PackageMetadata:
        """
        Fetch metadata for one package version from the registration index.

        Raises:
            PackageNotFoundError: If the version does not exist
        """
        ensure_token(token).raise_if_cancelled()
        if identity.version is None:
            raise ValueError(f"Cannot fetch metadata without a version: {identity.id}")

        for leaf in await self._get_registration_leaves(identity.id, identity.version):
            entry = leaf.get("catalogEntry", {})
            if isinstance(entry, str):
                entry = await self._get_json(entry, f"read catalog entry of {identity}") or {}
            if NuGetVersion.try_parse(entry.get("version", "")) == identity.version:
                return self._metadata_from_entry(identity, entry)

        raise PackageNotFoundError(f"Package {identity} not found")

    @staticmethod
    def _metadata_from_entry(identity: PackageIdentity, entry: Dict[str, Any]) -> PackageMetadata:
        groups = []
        for group in entry.get("dependencyGroups") or []:
            dependencies = [
                PackageDependency(id=dependency["id"], version_range=_parse_dependency_range(dependency.get("range")))
                for dependency in group.get("dependencies") or []
            ]
            groups.append(DependencyGroup(target_framework=group.get("targetFramework"), dependencies=dependencies))

        return PackageMetadata(
            identity=PackageIdentity(id=entry.get("id") or identity.id, version=identity.version),
            listed=_is_listed(entry),
            dependency_groups=groups,
            license_expression=entry.get("licenseExpression") or None,
            license_file=entry.get("licenseFile") or None,
            license_url=entry.get("licenseUrl") or None,
        )

    async def does_exist(self, identity: PackageIdentity, token: Optional[CancellationToken] = None) -> bool:
        """Check whether the exact version is present in the flat container."""
        ensure_token(token).raise_if_cancelled()
        operation = f"check package {identity}"
        response = await self._send("HEAD", await self._package_url(identity), operation)
        if response.status_code == 404:
            return False
        self._check_response(response, operation)
        return True

    async def copy_archive_to_stream(
        self, identity: PackageIdentity, stream: BinaryIO, token: Optional[CancellationToken] = None
    ) -> None:
        """
        Stream the .nupkg of a package version into a binary stream.

        Raises:
            PackageNotFoundError: If the archive does not exist
            FeedError: If the download fails
        """
        token = ensure_token(token)
        token.raise_if_cancelled()
        url = await self._package_url(identity)
        operation = f"download package {identity}"
        logging.debug("GET %s", url)
        try:
            async with self.session.stream("GET", url) as response:
                if response.status_code == 404:
                    raise PackageNotFoundError(f"Package {identity} not found")
                self._check_response(response, operation)
                async for chunk in response.aiter_bytes(DOWNLOAD_CHUNK_SIZE):
                    token.raise_if_cancelled()
                    stream.write(chunk)
        except httpx.HTTPError as e:
            handle_http_error(e, operation)
            raise FeedError(f"Failed to {operation}: {e}") from e

    async def push_archive(
        self, file_path: str, skip_duplicate: bool = True, token: Optional[CancellationToken] = None
    ) -> None:
        """
        Publish a package archive with the PackagePublish resource.

        Args:
            file_path: Path of the .nupkg file
            skip_duplicate: Treat "version already exists" (409) as success
            token: Optional cancellation token

        Raises:
            FeedError: If the feed rejects the package
        """
        ensure_token(token).raise_if_cancelled()
        url = await self._get_resource_url(PACKAGE_PUBLISH_TYPES)
        file_name = os.path.basename(file_path)
        operation = f"push {file_name}"

        headers = {API_KEY_HEADER: self.settings.api_key} if self.settings.api_key else {}
        with open(file_path, "rb") as f:
            content = f.read()

        response = await self._send(
            "PUT",
            url,
            operation,
            headers=headers,
            files={"package": (file_name, content, "application/octet-stream")},
        )
        if response.status_code == 409 and skip_duplicate:
            logging.info("Package %s already exists at %s, skipping", file_name, self.source)
            return
        self._check_response(response, operation)
        logging.debug("Pushed %s to %s (%d)", file_name, self.source, response.status_code)

    async def open_archive_reader(
        self, identity: PackageIdentity, token: Optional[CancellationToken] = None
    ) -> ZipArchiveReader:
        """Download a package archive into memory and open it."""
        buffer = io.BytesIO()
        await self.copy_archive_to_stream(identity, buffer, token)
        buffer.seek(0)
        return ZipArchiveReader(buffer)


__all__ = ["NuGetFeedClient"]
