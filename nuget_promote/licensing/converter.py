"""Derive PackageLicenseInfo from feed metadata."""

from ..models.licensing import NO_LICENSE, PackageLicenseInfo, PackageLicenseKind
from ..models.package import PackageMetadata
from ..utils.constants import MS_NET_LIBRARY_LICENSE, MS_NET_LIBRARY_LICENSE_URLS


def license_info_from_metadata(metadata: PackageMetadata) -> PackageLicenseInfo:
    """
    Classify the license a package declares.

    Priority order is expression, file, URL. A package declaring none of
    them gets kind NONE and the license text ``<not set>``.

    Args:
        metadata: Package metadata from the source feed

    Returns:
        License info for the package
    """
    if metadata.license_expression:
        return PackageLicenseInfo(
            kind=PackageLicenseKind.EXPRESSION,
            license=metadata.license_expression,
            url=metadata.license_url,
        )

    if metadata.license_file:
        return PackageLicenseInfo(kind=PackageLicenseKind.FILE, license=metadata.license_file)

    if metadata.license_url:
        license_text = metadata.license_url
        if metadata.license_url in MS_NET_LIBRARY_LICENSE_URLS:
            license_text = MS_NET_LIBRARY_LICENSE
        return PackageLicenseInfo(kind=PackageLicenseKind.URL, license=license_text, url=metadata.license_url)

    return PackageLicenseInfo(kind=PackageLicenseKind.NONE, license=NO_LICENSE)


__all__ = ["license_info_from_metadata"]
