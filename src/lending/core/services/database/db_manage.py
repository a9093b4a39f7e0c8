"""Schema creation and reference data seeding."""

from loguru import logger
from sqlmodel import SQLModel

from src.lending.core.services.catalog.category_table import CategoryTable
from src.lending.core.services.database.db_session import DbSessionService


class DbManageService:
    def __init__(self, db_service: DbSessionService, categories: CategoryTable | None = None):
        self._db = db_service
        self._categories = categories or CategoryTable.from_config()

    def create_all(self) -> None:
        """Create all database tables and seed one counter row per category."""
        from src.lending.entities import (  # noqa: F401
            CategoryCounterRepository,
            CategoryCounterTable,
            CopyTable,
            LendingTable,
            ReservationTable,
            TitleTable,
            UserTable,
        )

        SQLModel.metadata.create_all(self._db.engine)
        with self._db.session_scope() as session:
            added = CategoryCounterRepository(session).seed(self._categories.ids())
        logger.info("Database initialized with tables; seeded {} category counters", added)
