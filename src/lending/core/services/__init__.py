"""Core services exports."""

# Database Services
from .database.db_session import DbSessionService
from .database.db_manage import DbManageService

# Metadata Lookup
from .lookup import BookMetadata, BookMetadataService

__all__ = [
    # Database Services
    "DbSessionService",
    "DbManageService",
    # Metadata Lookup
    "BookMetadata",
    "BookMetadataService",
]
