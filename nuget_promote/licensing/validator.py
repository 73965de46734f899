"""
License compliance checks.

The validator classifies each package's license and checks it against the
configured whitelists. It records every violation before failing so the
operator sees the full list in one run.
"""

import logging
from typing import Dict, Iterable, List, Optional, Set

from ..exceptions import ArchiveEntryNotFoundError, FeedError, LicenseComplianceError, PackageNotFoundError
from ..models.licensing import (
    LicenseComplianceSettings,
    LicenseComplianceViolation,
    PackageInfo,
    PackageLicenseKind,
)
from ..models.package import PackageIdentity
from ..protocols.feed_protocol import ArchiveReader, FeedAccessor
from ..utils.cancellation import CancellationToken, ensure_token
from ..utils.logging_utils import format_count_with_unit, log_block
from ..versioning import NuGetVersion
from .normalizer import normalize_license_text

# Violation reasons
REASON_NO_LICENSE = "License in not configured for the package."
REASON_URL_NOT_WHITELISTED = "The license url is not whitelisted."
REASON_EXPRESSION_NOT_WHITELISTED = "The license expression is not whitelisted."
REASON_FILE_NOT_WHITELISTED = "The license file does not match any accepted license."
REASON_FILE_MISSING = "The license file is not found in the package."
REASON_DOWNLOAD_FAILED = "Failed to download package."


class LicenseComplianceValidator:
    """
    Check resolved packages against a license policy.

    Args:
        feed: Feed the packages are downloaded from when a license file
            has to be inspected
    """

    def __init__(self, feed: FeedAccessor) -> None:
        self.feed = feed
        self._accepted_texts: Optional[Dict[str, str]] = None

    async def check_compliance(
        self,
        packages: Iterable[PackageInfo],
        settings: LicenseComplianceSettings,
        token: Optional[CancellationToken] = None,
    ) -> None:
        """
        Validate every package's license.

        Args:
            packages: Packages to check
            settings: Whitelists; nothing is checked when ``enabled`` is false
            token: Optional cancellation token

        Raises:
            LicenseComplianceError: If at least one violation was found
            PromotionCancelledError: If the token is cancelled
        """
        if not settings.enabled:
            logging.warning("License compliance checks are disabled.")
            return

        token = ensure_token(token)
        packages = list(packages)
        logging.info("Checking license compliance of %s", format_count_with_unit(len(packages), "package"))

        self._accepted_texts = None
        violations: List[LicenseComplianceViolation] = []

        for package in packages:
            token.raise_if_cancelled()
            logging.debug("Checking license compliance for %s", package.identity)
            violation = await self._check_package(package, settings, token)
            if violation is not None:
                logging.info("License violation: %s", violation)
                violations.append(violation)

        log_block(
            "License summary:",
            [f"{package.identity}: [{package.license.kind.value}] {package.license.license}" for package in packages],
        )

        if violations:
            log_block("License violations found:", [str(violation) for violation in violations], level=logging.ERROR)
            raise LicenseComplianceError(violations)

        logging.info("No license violations found.")

    async def _check_package(
        self, package: PackageInfo, settings: LicenseComplianceSettings, token: CancellationToken
    ) -> Optional[LicenseComplianceViolation]:
        license_info = package.license

        def violation(reason: str) -> LicenseComplianceViolation:
            return LicenseComplianceViolation(
                identity=package.identity,
                license_kind=license_info.kind,
                license=license_info.license,
                reason=reason,
            )

        match license_info.kind:
            case PackageLicenseKind.EXPRESSION:
                if license_info.license in settings.accept_expressions:
                    logging.debug("The license expression is in whitelist.")
                    return None
                return violation(REASON_EXPRESSION_NOT_WHITELISTED)

            case PackageLicenseKind.URL:
                url = license_info.url or license_info.license
                if url in settings.accept_urls:
                    logging.debug("The license url is in whitelist.")
                    return None
                return violation(REASON_URL_NOT_WHITELISTED)

            case PackageLicenseKind.FILE:
                return await self._check_license_file(package, settings, token, violation)

        if package.identity in _no_license_identities(settings.accept_no_license):
            logging.debug("The package is allowed to have no license.")
            return None
        return violation(REASON_NO_LICENSE)

    async def _check_license_file(self, package: PackageInfo, settings, token, violation):
        try:
            reader = await self.feed.open_archive_reader(package.identity, token)
        except (FeedError, PackageNotFoundError) as e:
            logging.error("Failed to download package %s: %s", package.identity, e)
            return violation(REASON_DOWNLOAD_FAILED)

        try:
            text = _read_license_file(reader, package.license.license)
        finally:
            reader.close()

        if text is None:
            return violation(REASON_FILE_MISSING)

        normalized = normalize_license_text(text)
        for path, accepted_text in self._load_accepted_texts(settings.accept_files).items():
            if normalized == accepted_text:
                logging.debug("The license file matches %s", path)
                return None
        return violation(REASON_FILE_NOT_WHITELISTED)

    def _load_accepted_texts(self, paths: List[str]) -> Dict[str, str]:
        """Read and normalize accepted license files once per check."""
        if self._accepted_texts is None:
            self._accepted_texts = {}
            for path in paths:
                try:
                    with open(path, encoding="utf-8-sig") as f:
                        self._accepted_texts[path] = normalize_license_text(f.read())
                except (OSError, UnicodeDecodeError) as e:
                    logging.warning("Failed to read accepted license file %s: %s", path, e)
        return self._accepted_texts


def _read_license_file(reader: ArchiveReader, path: str) -> Optional[str]:
    """Read a license file by its declared path, falling back to forward slashes."""
    candidates = [path]
    if "\\" in path:
        candidates.append(path.replace("\\", "/"))

    for candidate in candidates:
        try:
            return reader.read_text(candidate)
        except ArchiveEntryNotFoundError:
            logging.debug("License file %s not found in the archive", candidate)
    return None


def _no_license_identities(entries: Iterable[str]) -> Set[PackageIdentity]:
    """Parse "<id> <version>" entries so that ``1.0`` matches ``1.0.0``."""
    identities: Set[PackageIdentity] = set()
    for entry in entries:
        parts = entry.split()
        version = NuGetVersion.try_parse(parts[1]) if len(parts) == 2 else None
        if version is None:
            logging.warning("Ignoring accept-no-license entry '%s': expected '<id> <version>'", entry)
            continue
        identities.add(PackageIdentity(id=parts[0], version=version))
    return identities


__all__ = ["LicenseComplianceValidator"]
