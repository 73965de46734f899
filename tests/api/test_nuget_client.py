"""
Tests for NuGetFeedClient.

HTTP traffic is mocked with respx; the source feed's service index is
registered by the mock_feed fixture.
"""

import io
import zipfile

import httpx
import pytest

from fakes import FLAT_BASE, PUBLISH_URL, REGISTRATION_BASE, SOURCE_URL, identity, registration_leaf

from nuget_promote.api import NuGetFeedClient, ZipArchiveReader
from nuget_promote.exceptions import FeedError, PackageNotFoundError, PromotionCancelledError
from nuget_promote.models.context import FeedSettings
from nuget_promote.utils.cancellation import CancellationToken
from nuget_promote.versioning import NuGetVersion


def nupkg_bytes(files):
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, text in files.items():
            archive.writestr(name, text)
    return buffer.getvalue()


class TestClientSetup:
    """Tests for client construction and service index discovery."""

    @pytest.mark.asyncio
    async def test_context_manager_closes_session(self, source_settings):
        """Test that the owned session is closed on exit."""
        async with NuGetFeedClient(source_settings) as client:
            session = client.session

        assert session.is_closed

    @pytest.mark.asyncio
    async def test_shared_session_not_closed(self, source_settings):
        """Test that a session passed in is left open."""
        session = httpx.AsyncClient()
        async with NuGetFeedClient(source_settings, session=session):
            pass

        assert not session.is_closed
        await session.aclose()

    def test_basic_auth(self):
        """Test that username and password configure basic auth."""
        client = NuGetFeedClient(FeedSettings(url=SOURCE_URL, username="user", password="secret"))

        assert isinstance(client.session.auth, httpx.BasicAuth)

    @pytest.mark.asyncio
    async def test_service_index_read_once(self, mock_feed, source_settings):
        """Test that resources are discovered once per client."""
        mock_feed.get(f"{FLAT_BASE}/a/index.json").respond(200, json={"versions": ["1.0.0"]})

        async with NuGetFeedClient(source_settings) as client:
            await client.get_all_versions("A")
            await client.get_all_versions("A")

        assert mock_feed.calls.call_count == 3

    @pytest.mark.asyncio
    async def test_missing_service_index(self, httpx_mock, source_settings):
        """Test that a missing service index is a feed error."""
        httpx_mock.get(SOURCE_URL).respond(404)

        async with NuGetFeedClient(source_settings) as client:
            with pytest.raises(FeedError, match="Service index not found"):
                await client.get_all_versions("A")

    @pytest.mark.asyncio
    async def test_missing_resource(self, httpx_mock, source_settings):
        """Test that a feed without the needed resource is a feed error."""
        httpx_mock.get(SOURCE_URL).respond(200, json={"version": "3.0.0", "resources": []})

        async with NuGetFeedClient(source_settings) as client:
            with pytest.raises(FeedError, match="does not provide"):
                await client.get_all_versions("A")


class TestVersions:
    """Tests for get_all_versions()."""

    @pytest.mark.asyncio
    async def test_versions(self, mock_feed, source_settings):
        """Test that versions are parsed and bad ones skipped."""
        mock_feed.get(f"{FLAT_BASE}/newtonsoft.json/index.json").respond(
            200, json={"versions": ["12.0.1", "13.0.1", "13.0.2-beta1", "not-a-version"]}
        )

        async with NuGetFeedClient(source_settings) as client:
            versions = await client.get_all_versions("Newtonsoft.Json")

        assert versions == {NuGetVersion.parse(v) for v in ("12.0.1", "13.0.1", "13.0.2-beta1")}

    @pytest.mark.asyncio
    async def test_unknown_package(self, mock_feed, source_settings):
        """Test that a 404 means the package does not exist."""
        mock_feed.get(f"{FLAT_BASE}/missing/index.json").respond(404)

        async with NuGetFeedClient(source_settings) as client:
            with pytest.raises(PackageNotFoundError, match="Package Missing not found"):
                await client.get_all_versions("Missing")

    @pytest.mark.asyncio
    async def test_server_error(self, mock_feed, source_settings):
        """Test that a 5xx response is a feed error."""
        mock_feed.get(f"{FLAT_BASE}/a/index.json").respond(500)

        async with NuGetFeedClient(source_settings) as client:
            with pytest.raises(FeedError, match="500"):
                await client.get_all_versions("A")

    @pytest.mark.asyncio
    async def test_transport_error(self, mock_feed, source_settings):
        """Test that connection failures are feed errors."""
        mock_feed.get(f"{FLAT_BASE}/a/index.json").mock(side_effect=httpx.ConnectError("connection refused"))

        async with NuGetFeedClient(source_settings) as client:
            with pytest.raises(FeedError, match="connection refused"):
                await client.get_all_versions("A")

    @pytest.mark.asyncio
    async def test_cancelled(self, source_settings):
        """Test that a cancelled token stops before any request."""
        token = CancellationToken()
        token.cancel()

        async with NuGetFeedClient(source_settings) as client:
            with pytest.raises(PromotionCancelledError):
                await client.get_all_versions("A", token)


class TestMetadata:
    """Tests for get_metadata()."""

    @pytest.mark.asyncio
    async def test_inline_page(self, mock_feed, source_settings):
        """Test metadata from a registration page with inline leaves."""
        leaf = registration_leaf(
            "Contoso.Lib",
            "2.0.0",
            dependencies=[{"id": "Contoso.Core", "range": "[1.0.0, )"}, {"id": "Contoso.Any"}],
            licenseExpression="MIT",
            licenseUrl="https://licenses.nuget.org/MIT",
        )
        mock_feed.get(f"{REGISTRATION_BASE}/contoso.lib/index.json").respond(
            200, json={"items": [{"lower": "1.0.0", "upper": "2.0.0", "items": [leaf]}]}
        )

        async with NuGetFeedClient(source_settings) as client:
            metadata = await client.get_metadata(identity("contoso.lib", "2.0.0"))

        assert metadata.identity.id == "Contoso.Lib"
        assert metadata.listed
        assert metadata.license_expression == "MIT"
        assert metadata.license_url == "https://licenses.nuget.org/MIT"
        dependencies = metadata.dependency_groups[0].dependencies
        assert [d.id for d in dependencies] == ["Contoso.Core", "Contoso.Any"]
        assert dependencies[0].version_range.pretty_print() == "(>= 1.0.0)"
        assert dependencies[1].version_range.pretty_print() == "(all versions)"

    @pytest.mark.asyncio
    async def test_paged_registration(self, mock_feed, source_settings):
        """Test that pages without inline leaves are fetched, and only the matching one."""
        page_one = f"{REGISTRATION_BASE}/a/page/1.0.0/1.9.0.json"
        page_two = f"{REGISTRATION_BASE}/a/page/2.0.0/3.0.0.json"
        mock_feed.get(f"{REGISTRATION_BASE}/a/index.json").respond(
            200,
            json={
                "items": [
                    {"@id": page_one, "lower": "1.0.0", "upper": "1.9.0"},
                    {"@id": page_two, "lower": "2.0.0", "upper": "3.0.0"},
                ]
            },
        )
        first = mock_feed.get(page_one).respond(200, json={"items": []})
        mock_feed.get(page_two).respond(
            200, json={"items": [registration_leaf("A", "2.5.0", licenseFile="LICENSE.txt")]}
        )

        async with NuGetFeedClient(source_settings) as client:
            metadata = await client.get_metadata(identity("A", "2.5.0"))

        assert metadata.license_file == "LICENSE.txt"
        assert not first.called

    @pytest.mark.asyncio
    async def test_unlisted(self, mock_feed, source_settings):
        """Test that the listed flag and the 1900 publish date mark unlisted versions."""
        mock_feed.get(f"{REGISTRATION_BASE}/a/index.json").respond(
            200,
            json={
                "items": [
                    {
                        "items": [
                            registration_leaf("A", "1.0.0", listed=False),
                            registration_leaf("A", "1.1.0", published="1900-01-01T00:00:00+00:00"),
                            registration_leaf("A", "1.2.0", published="2023-05-01T00:00:00+00:00"),
                        ]
                    }
                ]
            },
        )

        async with NuGetFeedClient(source_settings) as client:
            assert not (await client.get_metadata(identity("A", "1.0.0"))).listed
            assert not (await client.get_metadata(identity("A", "1.1.0"))).listed
            assert (await client.get_metadata(identity("A", "1.2.0"))).listed

    @pytest.mark.asyncio
    async def test_version_not_found(self, mock_feed, source_settings):
        """Test that a missing version raises PackageNotFoundError."""
        mock_feed.get(f"{REGISTRATION_BASE}/a/index.json").respond(
            200, json={"items": [{"items": [registration_leaf("A", "1.0.0")]}]}
        )

        async with NuGetFeedClient(source_settings) as client:
            with pytest.raises(PackageNotFoundError, match="Package A 2.0.0 not found"):
                await client.get_metadata(identity("A", "2.0.0"))


class TestExistence:
    """Tests for does_exist()."""

    @pytest.mark.asyncio
    async def test_exists(self, mock_feed, source_settings):
        """Test that a 200 on the archive URL means the package exists."""
        route = mock_feed.head(f"{FLAT_BASE}/a/1.0.0-beta/a.1.0.0-beta.nupkg").respond(200)

        async with NuGetFeedClient(source_settings) as client:
            assert await client.does_exist(identity("A", "1.0-Beta"))

        assert route.called

    @pytest.mark.asyncio
    async def test_missing(self, mock_feed, source_settings):
        """Test that a 404 means the package is missing."""
        mock_feed.head(f"{FLAT_BASE}/a/1.0.0/a.1.0.0.nupkg").respond(404)

        async with NuGetFeedClient(source_settings) as client:
            assert not await client.does_exist(identity("A", "1.0.0"))

    @pytest.mark.asyncio
    async def test_unauthorized(self, mock_feed, source_settings):
        """Test that other failures are feed errors."""
        mock_feed.head(f"{FLAT_BASE}/a/1.0.0/a.1.0.0.nupkg").respond(401)

        async with NuGetFeedClient(source_settings) as client:
            with pytest.raises(FeedError, match="401"):
                await client.does_exist(identity("A", "1.0.0"))


class TestArchives:
    """Tests for downloading and pushing archives."""

    @pytest.mark.asyncio
    async def test_copy_archive_to_stream(self, mock_feed, source_settings):
        """Test that the archive body is streamed into the target."""
        mock_feed.get(f"{FLAT_BASE}/a/1.0.0/a.1.0.0.nupkg").respond(200, content=b"archive-bytes")
        stream = io.BytesIO()

        async with NuGetFeedClient(source_settings) as client:
            await client.copy_archive_to_stream(identity("A", "1.0.0"), stream)

        assert stream.getvalue() == b"archive-bytes"

    @pytest.mark.asyncio
    async def test_copy_missing_archive(self, mock_feed, source_settings):
        """Test that a missing archive raises PackageNotFoundError."""
        mock_feed.get(f"{FLAT_BASE}/a/1.0.0/a.1.0.0.nupkg").respond(404)

        async with NuGetFeedClient(source_settings) as client:
            with pytest.raises(PackageNotFoundError):
                await client.copy_archive_to_stream(identity("A", "1.0.0"), io.BytesIO())

    @pytest.mark.asyncio
    async def test_open_archive_reader(self, mock_feed, source_settings):
        """Test that a downloaded archive can be read."""
        content = nupkg_bytes({"A.nuspec": "<package/>", "docs/LICENSE.txt": "MIT License"})
        mock_feed.get(f"{FLAT_BASE}/a/1.0.0/a.1.0.0.nupkg").respond(200, content=content)

        async with NuGetFeedClient(source_settings) as client:
            reader = await client.open_archive_reader(identity("A", "1.0.0"))

        with reader:
            assert isinstance(reader, ZipArchiveReader)
            assert reader.read_text("docs/LICENSE.txt") == "MIT License"

    @pytest.mark.asyncio
    async def test_push(self, mock_feed, source_settings, create_temp_file):
        """Test that pushes send the API key and the archive."""
        path = create_temp_file("a.1.0.0.nupkg", b"archive-bytes", binary=True)
        route = mock_feed.put(PUBLISH_URL).respond(201)

        async with NuGetFeedClient(source_settings) as client:
            await client.push_archive(str(path))

        request = route.calls.last.request
        assert request.headers["X-NuGet-ApiKey"] == "source-key"
        assert b"archive-bytes" in request.content
        assert b'filename="a.1.0.0.nupkg"' in request.content

    @pytest.mark.asyncio
    async def test_push_duplicate_skipped(self, mock_feed, source_settings, create_temp_file):
        """Test that 409 is accepted when skipping duplicates."""
        path = create_temp_file("a.1.0.0.nupkg", b"archive-bytes", binary=True)
        mock_feed.put(PUBLISH_URL).respond(409)

        async with NuGetFeedClient(source_settings) as client:
            await client.push_archive(str(path), skip_duplicate=True)
            with pytest.raises(FeedError, match="409"):
                await client.push_archive(str(path), skip_duplicate=False)

    @pytest.mark.asyncio
    async def test_push_rejected(self, mock_feed, source_settings, create_temp_file):
        """Test that a rejected push is a feed error."""
        path = create_temp_file("a.1.0.0.nupkg", b"archive-bytes", binary=True)
        mock_feed.put(PUBLISH_URL).respond(403)

        async with NuGetFeedClient(source_settings) as client:
            with pytest.raises(FeedError, match="403"):
                await client.push_archive(str(path))
