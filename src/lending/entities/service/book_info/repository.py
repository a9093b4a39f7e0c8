"""Title repository."""

from sqlmodel import Session, col, select

from .entity import Title
from .table import TitleTable


class TitleRepository:
    """Data-access layer for titles."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, title_id: str) -> Title | None:
        row = self._session.get(TitleTable, title_id)
        if row is None:
            return None
        return Title.model_validate(row, from_attributes=True)

    def create(self, title: Title) -> Title:
        row = TitleTable.model_validate(title, from_attributes=True)
        self._session.add(row)
        self._session.flush()
        return Title.model_validate(row, from_attributes=True)

    def find_by_isbn(self, isbn: str) -> Title | None:
        """Return the earliest catalogued title with this ISBN.

        An empty ISBN never matches.
        """
        if not isbn:
            return None
        statement = (
            select(TitleTable)
            .where(TitleTable.isbn == isbn)
            .order_by(col(TitleTable.created_at), col(TitleTable.id))
            .limit(1)
        )
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return Title.model_validate(row, from_attributes=True)

    def assign_primary_number(self, title_id: str, primary_number: int) -> Title:
        """Record the shelf group of a new title and issue its first copy number."""
        row = self._locked_row(title_id)
        row.primary_number = primary_number
        row.last_copy_number = 1
        self._session.add(row)
        self._session.flush()
        return Title.model_validate(row, from_attributes=True)

    def next_copy_number(self, title_id: str) -> Title:
        """Atomically advance the title's copy counter and return the updated title.

        The increment is issued as ``last_copy_number = last_copy_number + 1`` so
        concurrent intakes of the same title serialize on the row.
        """
        row = self._locked_row(title_id)
        row.last_copy_number = TitleTable.last_copy_number + 1
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Title.model_validate(row, from_attributes=True)

    def _locked_row(self, title_id: str) -> TitleTable:
        statement = select(TitleTable).where(TitleTable.id == title_id).with_for_update()
        row = self._session.exec(statement).one()
        return row
