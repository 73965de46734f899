"""
License text normalization.

Two copies of the same license rarely match byte for byte: line endings,
indentation and the copyright year differ between packages. Texts are
compared after normalize_license_text.
"""

import re

_WHITESPACE_RE = re.compile(r"\s+")

# A 4-digit year or year span following "copyright", "copyright (c)" or "copyright ©"
_COPYRIGHT_YEAR_RE = re.compile(r"(copyright\s?(?:\(c\)|©)?\s?)\d{4}(?:\s?-\s?\d{4})?(?=$|\D)")

YEAR_PLACEHOLDER = "<year>"


def normalize_license_text(text: str) -> str:
    """
    Normalize a license text for comparison.

    Whitespace runs collapse to one space, the text is trimmed and
    lowercased, and copyright years are replaced by ``<year>``.

    Examples:
        >>> normalize_license_text("  MIT\\r\\n License ")
        'mit license'
        >>> normalize_license_text("Copyright (c) 2019-2024 Someone")
        'copyright (c) <year> someone'
    """
    collapsed = _WHITESPACE_RE.sub(" ", text).strip().lower()
    return _COPYRIGHT_YEAR_RE.sub(lambda match: match.group(1) + YEAR_PLACEHOLDER, collapsed)


__all__ = ["normalize_license_text", "YEAR_PLACEHOLDER"]
