# File: site_parity/errors.py
"""site_parity.errors: exception taxonomy shared by the extraction engine."""

from __future__ import annotations

__all__ = [
    "SiteParityError",
    "InvalidReference",
    "NonNavigableReference",
    "FetchFailure",
    "ParseFailure",
    "MissingInput",
]


class SiteParityError(Exception):
    """Base class for every error raised by SiteParity."""


class InvalidReference(SiteParityError):
    """A single link reference could not be resolved to a canonical URL."""


class FetchFailure(SiteParityError):
    """Network error, timeout or non-success HTTP status while fetching a page."""


class ParseFailure(SiteParityError):
    """The markup could not be turned into a document tree."""


class MissingInput(SiteParityError):
    """A required URL was not supplied at the service boundary."""


class NonNavigableReference(Exception):
    """Reference points at a non-navigable target (``mailto:``, ``tel:`` ...).

    Not an error: callers skip the link, or render its text without a marker.
    """

    def __init__(self, reference: str) -> None:
        super().__init__(reference)
        self.reference = reference
