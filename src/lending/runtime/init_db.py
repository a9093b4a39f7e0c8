"""Database initialization script."""

from src.lending.core.services.database.db_manage import DbManageService
from src.lending.core.services.database.db_session import DbSessionService


def init_db(db_service: DbSessionService | None = None) -> None:
    """Create all database tables."""
    DbManageService(db_service or DbSessionService()).create_all()


if __name__ == "__main__":
    init_db()
