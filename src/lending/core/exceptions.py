"""Catalog error taxonomy.

Every error carries a stable ``code`` so API clients can tell the failure
kinds apart without parsing messages.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for all catalog errors."""

    code = "CATALOG_ERROR"
    status_code = 500

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__ or self.code


class InvalidCategory(CatalogError):
    """Category id does not map to a known shelf prefix."""

    code = "INVALID_CATEGORY_ID"
    status_code = 400

    def __init__(self, category_id: object) -> None:
        super().__init__(f"Unknown category id: {category_id!r}")
        self.category_id = category_id


class UnknownDonator(CatalogError):
    """Donator identifier matches no owner record."""

    code = "UNKNOWN_DONATOR"
    status_code = 400

    def __init__(self, donator: str) -> None:
        super().__init__(f"No owner found for donator {donator!r}")
        self.donator = donator


class IntakeFailed(CatalogError):
    """The book intake transaction failed and was rolled back."""

    code = "FAIL_CREATE_BOOK_BY_UNEXPECTED"
    status_code = 500


class LookupFailed(CatalogError):
    """An external book metadata lookup failed."""

    code = "ISBN_SEARCH_FAILED"
    status_code = 502

    def __init__(self, isbn: str, reason: str | None = None) -> None:
        detail = f"{self.__class__.__doc__} (isbn={isbn})"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(detail)
        self.isbn = isbn


class NationalLibraryLookupFailed(LookupFailed):
    """National library ISBN search failed."""

    code = "ISBN_SEARCH_FAILED"


class AuthorLookupFailed(LookupFailed):
    """Author search by ISBN failed."""

    code = "ISBN_SEARCH_FAILED_IN_NAVER"


class TitleNotFound(CatalogError):
    """No book info with the given id."""

    code = "NO_BOOK_INFO_ID"
    status_code = 404


class CopyNotFound(CatalogError):
    """No book copy with the given id."""

    code = "NO_BOOK_ID"
    status_code = 404
