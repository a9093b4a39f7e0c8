"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.lending.api.http.app_data import ApplicationDependencies
from src.lending.core.services import BookMetadataService, DbSessionService
from src.lending.core.services.catalog import (
    BookIntakeTransaction,
    CatalogQueryService,
    CategoryTable,
)


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the application-wide services created at startup."""
    return request.app.state.app_dependencies


def get_database_service(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> DbSessionService:
    return app_deps.database_service


def get_categories(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> CategoryTable:
    return app_deps.categories


def get_metadata_service(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> BookMetadataService:
    return app_deps.metadata_service


def get_session(
    db_service: DbSessionService = Depends(get_database_service),
) -> Iterator[Session]:
    """Yield a read session that is closed after the request."""
    session = db_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_intake_transaction(
    db_service: DbSessionService = Depends(get_database_service),
    categories: CategoryTable = Depends(get_categories),
) -> BookIntakeTransaction:
    return BookIntakeTransaction(db_service, categories)


def get_query_service(
    session: Session = Depends(get_session),
    categories: CategoryTable = Depends(get_categories),
) -> CatalogQueryService:
    return CatalogQueryService(session, categories)
