"""Copy database table model."""

from sqlmodel import Field

from src.lending.entities._base import EntityTable


class CopyTable(EntityTable, table=True):
    """Database persistence model for copies."""

    __tablename__ = "book"

    title_id: str = Field(foreign_key="book_info.id", index=True)
    call_sign: str = Field(unique=True, index=True)
    donator: str | None = None
    donator_id: str | None = Field(default=None, foreign_key="user.id")
    category_id: int
    copy_number: int
    status: int = Field(default=0)
