"""Entity: Reservation."""

from enum import IntEnum

from pydantic import Field

from src.lending.entities._base import Entity


class ReservationStatus(IntEnum):
    ACTIVE = 0
    FULFILLED = 1
    CANCELLED = 2


class Reservation(Entity):
    """A pending hold on a copy."""

    copy_id: str = Field(description="Reserved copy")
    user_id: str | None = Field(default=None, description="Prospective borrower")
    status: int = Field(default=ReservationStatus.ACTIVE, description="0 active, nonzero closed")
