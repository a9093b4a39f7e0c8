"""User repository."""

from sqlmodel import Session, col, select

from .entity import User
from .table import UserTable


class UserRepository:
    """Data-access layer for users."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, user_id: str) -> User | None:
        row = self._session.get(UserTable, user_id)
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def create(self, user: User) -> User:
        row = UserTable.model_validate(user, from_attributes=True)
        self._session.add(row)
        self._session.flush()
        return User.model_validate(row, from_attributes=True)

    def find_by_nickname(self, nickname: str) -> list[User]:
        """Return users with this nickname, most recently created first."""
        statement = (
            select(UserTable)
            .where(UserTable.nickname == nickname)
            .order_by(col(UserTable.created_at).desc(), col(UserTable.id).desc())
        )
        rows = self._session.exec(statement).all()
        return [User.model_validate(row, from_attributes=True) for row in rows]
