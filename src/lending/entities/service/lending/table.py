"""Lending database table model."""

from datetime import datetime

from sqlmodel import Field

from src.lending.entities._base import EntityTable


class LendingTable(EntityTable, table=True):
    """Database persistence model for lendings."""

    __tablename__ = "lending"

    copy_id: str = Field(foreign_key="book.id", index=True)
    user_id: str | None = Field(default=None, foreign_key="user.id")
    returned_at: datetime | None = Field(default=None, index=True)
