"""User database table model."""

from sqlmodel import Field

from src.lending.entities._base import EntityTable


class UserTable(EntityTable, table=True):
    """Database persistence model for users.

    Nicknames are not unique, several users may share one.
    """

    __tablename__ = "user"

    nickname: str = Field(index=True)
    email: str | None = None
