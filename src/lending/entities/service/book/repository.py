"""Copy repository."""

from sqlmodel import Session, col, select

from .entity import Copy
from .table import CopyTable


class CopyRepository:
    """Data-access layer for copies."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, copy_id: str) -> Copy | None:
        row = self._session.get(CopyTable, copy_id)
        if row is None:
            return None
        return Copy.model_validate(row, from_attributes=True)

    def create(self, copy: Copy) -> Copy:
        row = CopyTable.model_validate(copy, from_attributes=True)
        self._session.add(row)
        self._session.flush()
        return Copy.model_validate(row, from_attributes=True)

    def list_by_title(self, title_id: str) -> list[Copy]:
        statement = (
            select(CopyTable)
            .where(CopyTable.title_id == title_id)
            .order_by(col(CopyTable.copy_number))
        )
        rows = self._session.exec(statement).all()
        return [Copy.model_validate(row, from_attributes=True) for row in rows]

    def get_by_call_sign(self, call_sign: str) -> Copy | None:
        statement = select(CopyTable).where(CopyTable.call_sign == call_sign)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return Copy.model_validate(row, from_attributes=True)
