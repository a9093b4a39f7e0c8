"""Catalog services: intake, call-sign allocation, circulation and views."""

from .call_sign import CallSign, CallSignAllocator, publication_year_suffix
from .category_table import CategoryTable
from .circulation import (
    NO_DUE_DATE,
    CirculationFacts,
    CirculationState,
    CirculationStateResolver,
    resolve_circulation_state,
)
from .intake import BookIntakeTransaction, IntakeResult, NewBookInput
from .views import (
    CatalogQueryService,
    CopySearchItem,
    CopySearchResult,
    CopyView,
    SearchResult,
    TitleDetail,
    TitleSummary,
)

__all__ = [
    "BookIntakeTransaction",
    "CallSign",
    "CallSignAllocator",
    "CatalogQueryService",
    "CategoryTable",
    "CirculationFacts",
    "CirculationState",
    "CirculationStateResolver",
    "CopySearchItem",
    "CopySearchResult",
    "CopyView",
    "IntakeResult",
    "NO_DUE_DATE",
    "NewBookInput",
    "SearchResult",
    "TitleDetail",
    "TitleSummary",
    "publication_year_suffix",
    "resolve_circulation_state",
]
