"""Entity: Lending."""

from datetime import datetime

from pydantic import Field

from src.lending.entities._base import Entity


class Lending(Entity):
    """A loan of one copy. Open while ``returned_at`` is unset."""

    copy_id: str = Field(description="Lent copy")
    user_id: str | None = Field(default=None, description="Borrower")
    returned_at: datetime | None = Field(default=None, description="Return time, None while open")

    @property
    def is_open(self) -> bool:
        return self.returned_at is None
