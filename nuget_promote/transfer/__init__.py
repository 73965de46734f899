"""
Transfer operations for promoting packages between feeds.

Modules:
    - download: Stream package archives from the source feed to disk
    - upload: Push archives to the destination feed
    - mirroring: Ordered, stop-on-first-failure promotion of package batches
    - reporting: Summaries of resolution and promotion
"""

from .download import download_package
from .mirroring import mirror_packages, promote_package
from .reporting import log_packages_to_promote, log_promote_summary, log_resolution_tree
from .upload import push_package

__all__ = [
    "download_package",
    "push_package",
    "promote_package",
    "mirror_packages",
    "log_resolution_tree",
    "log_packages_to_promote",
    "log_promote_summary",
]
