"""Book catalog API router."""

from typing import Literal

from fastapi import APIRouter, Depends, Query, status

from src.lending.api.http.deps import (
    get_intake_transaction,
    get_metadata_service,
    get_query_service,
)
from src.lending.core.services import BookMetadata, BookMetadataService
from src.lending.core.services.catalog import (
    BookIntakeTransaction,
    CatalogQueryService,
    CopySearchResult,
    CopyView,
    IntakeResult,
    NewBookInput,
    SearchResult,
    TitleDetail,
    TitleSummary,
)

router = APIRouter(prefix="/books", tags=["books"])


@router.post("", response_model=IntakeResult, status_code=status.HTTP_201_CREATED)
def create_book(
    book: NewBookInput,
    intake: BookIntakeTransaction = Depends(get_intake_transaction),
) -> IntakeResult:
    """Register a donated copy and return its call sign."""
    return intake.intake(book)


@router.get("/create", response_model=BookMetadata)
async def lookup_book_info(
    isbn_query: str = Query(..., min_length=1),
    metadata: BookMetadataService = Depends(get_metadata_service),
) -> BookMetadata:
    """Prefill intake data from the ISBN lookup services."""
    return await metadata.lookup(isbn_query)


@router.get("/info/search", response_model=SearchResult)
def search_book_info(
    query: str = "",
    page: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
    sort: Literal["new", "title", "popular"] = "new",
    category: str | None = None,
    catalog: CatalogQueryService = Depends(get_query_service),
) -> SearchResult:
    """Search titles with per-category counts and pagination."""
    return catalog.search_titles(query, page, limit, sort, category)


@router.get("/info/sorted", response_model=dict[str, list[TitleSummary]])
def sorted_book_info(
    sort: Literal["new", "popular"] = "new",
    limit: int = Query(10, ge=1, le=100),
    catalog: CatalogQueryService = Depends(get_query_service),
) -> dict[str, list[TitleSummary]]:
    """Newest or most lent titles."""
    return {"items": catalog.sorted_titles(sort, limit)}


@router.get("/info/{title_id}", response_model=TitleDetail)
def get_book_info(
    title_id: str,
    catalog: CatalogQueryService = Depends(get_query_service),
) -> TitleDetail:
    """Title with all its copies and their circulation state."""
    return catalog.get_title_detail(title_id)


@router.get("/search", response_model=CopySearchResult)
def search_books(
    query: str = "",
    page: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
    catalog: CatalogQueryService = Depends(get_query_service),
) -> CopySearchResult:
    """Search copies by title, author, ISBN or call sign."""
    return catalog.search_copies(query, page, limit)


@router.get("/{copy_id}", response_model=CopyView)
def get_book(
    copy_id: str,
    catalog: CatalogQueryService = Depends(get_query_service),
) -> CopyView:
    """A single copy with its circulation state."""
    return catalog.get_copy(copy_id)
