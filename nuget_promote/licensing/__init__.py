"""License classification, normalization and compliance checks."""

from .converter import license_info_from_metadata
from .normalizer import normalize_license_text
from .validator import LicenseComplianceValidator

__all__ = [
    "LicenseComplianceValidator",
    "license_info_from_metadata",
    "normalize_license_text",
]
