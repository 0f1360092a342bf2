# File: site_parity/comparator.py
"""site_parity.comparator: link-inventory diff between an old and a new page."""

from __future__ import annotations

from site_parity.models import ComparisonResult, ExtractionResult

__all__ = ["compare", "similarity_percent"]


def similarity_percent(shared: int, total: int) -> int:
    """``round(100 * shared / total)`` with halves rounded up; 0 when *total* is 0."""
    if total <= 0:
        return 0
    return (200 * shared + total) // (2 * total)


def compare(old: ExtractionResult, new: ExtractionResult) -> ComparisonResult:
    """Which links of *old* survive on *new*, and which are gone.

    Links match by canonical URL only. ``shared`` holds the new page's
    records (in new-page order), ``missing`` the old page's records absent
    from the new page (in old-page order).
    """
    old_urls = {link.url for link in old.links}
    new_urls = {link.url for link in new.links}
    shared = tuple(link for link in new.links if link.url in old_urls)
    missing = tuple(link for link in old.links if link.url not in new_urls)
    return ComparisonResult(
        shared=shared,
        missing=missing,
        similarity=similarity_percent(len(shared), len(old_urls)),
    )
