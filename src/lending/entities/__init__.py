"""Entities organized by business concept.

Each entity has its own package containing:
- entity.py: Domain model
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .core.user import User, UserRepository, UserTable
from .service.book import Copy, CopyRepository, CopyStatus, CopyTable
from .service.book_info import Title, TitleRepository, TitleTable
from .service.category import CategoryCounterRepository, CategoryCounterTable
from .service.lending import Lending, LendingRepository, LendingTable
from .service.reservation import (
    Reservation,
    ReservationRepository,
    ReservationStatus,
    ReservationTable,
)

__all__ = [
    "User",
    "UserTable",
    "UserRepository",
    "Title",
    "TitleTable",
    "TitleRepository",
    "Copy",
    "CopyStatus",
    "CopyTable",
    "CopyRepository",
    "Lending",
    "LendingTable",
    "LendingRepository",
    "Reservation",
    "ReservationStatus",
    "ReservationTable",
    "ReservationRepository",
    "CategoryCounterTable",
    "CategoryCounterRepository",
]
