"""Reservation database table model."""

from sqlmodel import Field

from src.lending.entities._base import EntityTable


class ReservationTable(EntityTable, table=True):
    """Database persistence model for reservations."""

    __tablename__ = "reservation"

    copy_id: str = Field(foreign_key="book.id", index=True)
    user_id: str | None = Field(default=None, foreign_key="user.id")
    status: int = Field(default=0)
