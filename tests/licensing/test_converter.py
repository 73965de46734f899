"""Tests for license_info_from_metadata."""

from fakes import identity

from nuget_promote.licensing import license_info_from_metadata
from nuget_promote.models import NO_LICENSE, PackageLicenseKind, PackageMetadata


def metadata(**licenses):
    return PackageMetadata(identity=identity("A", "1.0.0"), **licenses)


class TestLicenseInfoFromMetadata:
    """Tests for classifying package licenses."""

    def test_expression_wins(self):
        """Test that an expression takes priority over file and URL."""
        info = license_info_from_metadata(
            metadata(license_expression="MIT", license_file="LICENSE.txt", license_url="https://licenses.nuget.org/MIT")
        )

        assert info.kind == PackageLicenseKind.EXPRESSION
        assert info.license == "MIT"
        assert info.url == "https://licenses.nuget.org/MIT"

    def test_file(self):
        """Test that a license file is reported by its archive path."""
        info = license_info_from_metadata(metadata(license_file="docs\\LICENSE.txt", license_url="https://aka.ms/x"))

        assert info.kind == PackageLicenseKind.FILE
        assert info.license == "docs\\LICENSE.txt"
        assert info.url is None

    def test_url(self):
        """Test that a plain license URL is reported as-is."""
        info = license_info_from_metadata(metadata(license_url="https://example.com/license"))

        assert info.kind == PackageLicenseKind.URL
        assert info.license == "https://example.com/license"

    def test_microsoft_net_library_url(self):
        """Test that known .NET library license URLs get a readable name."""
        url = "http://go.microsoft.com/fwlink/?LinkId=329770"

        info = license_info_from_metadata(metadata(license_url=url))

        assert info.kind == PackageLicenseKind.URL
        assert info.license == "MICROSOFT .NET LIBRARY"
        assert info.url == url

    def test_no_license(self):
        """Test a package without any license information."""
        info = license_info_from_metadata(metadata())

        assert info.kind == PackageLicenseKind.NONE
        assert info.license == NO_LICENSE == "<not set>"
