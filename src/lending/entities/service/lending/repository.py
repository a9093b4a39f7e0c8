"""Lending repository."""

from sqlalchemy import func
from sqlmodel import Session, col, select

from .entity import Lending
from .table import LendingTable


class LendingRepository:
    """Data-access layer for lendings."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, lending: Lending) -> Lending:
        row = LendingTable.model_validate(lending, from_attributes=True)
        self._session.add(row)
        self._session.flush()
        return Lending.model_validate(row, from_attributes=True)

    def count_open(self, copy_id: str) -> int:
        statement = select(func.count()).where(
            LendingTable.copy_id == copy_id,
            col(LendingTable.returned_at).is_(None),
        )
        return self._session.exec(statement).one()

    def latest_open(self, copy_id: str) -> Lending | None:
        """Most recent lending of the copy that has not been returned."""
        statement = (
            select(LendingTable)
            .where(
                LendingTable.copy_id == copy_id,
                col(LendingTable.returned_at).is_(None),
            )
            .order_by(col(LendingTable.created_at).desc())
            .limit(1)
        )
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return Lending.model_validate(row, from_attributes=True)
