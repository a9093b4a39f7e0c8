"""Category counter repository."""

from collections.abc import Iterable

from sqlalchemy.dialects import postgresql, sqlite
from sqlmodel import Session, select

from .table import CategoryCounterTable


class CategoryCounterRepository:
    """Data-access layer for the per-category primary number sequence."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def current(self, category_id: int) -> int:
        row = self._session.get(CategoryCounterTable, category_id)
        return row.last_primary_number if row is not None else 0

    def lock(self, category_id: int) -> CategoryCounterTable:
        """Take the write lock on the category's counter row, creating it if missing.

        Holding this lock serializes intakes in the category until the
        caller's transaction ends. On SQLite the insert opens the write
        transaction; on PostgreSQL the row is locked ``FOR UPDATE``.
        """
        self._insert_missing(category_id)
        statement = (
            select(CategoryCounterTable)
            .where(CategoryCounterTable.category_id == category_id)
            .with_for_update()
        )
        return self._session.exec(statement).one()

    def next_primary_number(self, category_id: int) -> int:
        """Advance the category counter inside the caller's transaction.

        The write is a single ``last_primary_number + 1`` UPDATE on the locked
        row, so two concurrent intakes in the same category never read the
        same value.
        """
        row = self.lock(category_id)
        row.last_primary_number = CategoryCounterTable.last_primary_number + 1
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return row.last_primary_number

    def seed(self, category_ids: Iterable[int]) -> int:
        """Create missing counter rows; returns how many were added."""
        existing = set(self._session.exec(select(CategoryCounterTable.category_id)).all())
        added = 0
        for category_id in category_ids:
            if category_id in existing:
                continue
            self._session.add(CategoryCounterTable(category_id=category_id))
            added += 1
        self._session.flush()
        return added

    def _insert_missing(self, category_id: int) -> None:
        """``INSERT ... ON CONFLICT DO NOTHING`` for the counter row."""
        dialect = self._session.get_bind().dialect.name
        insert = postgresql.insert if dialect == "postgresql" else sqlite.insert
        statement = (
            insert(CategoryCounterTable.__table__)
            .values(category_id=category_id, last_primary_number=0)
            .on_conflict_do_nothing(index_elements=["category_id"])
        )
        self._session.connection().execute(statement)
