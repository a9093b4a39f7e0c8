"""Title database table model."""

from sqlmodel import Field

from src.lending.entities._base import EntityTable


class TitleTable(EntityTable, table=True):
    """Database persistence model for titles."""

    __tablename__ = "book_info"

    isbn: str | None = Field(default=None, index=True)
    title: str
    author: str | None = None
    publisher: str | None = None
    image: str | None = None
    category_id: int = Field(index=True)
    published_at: str | None = None
    primary_number: int | None = None
    last_copy_number: int = Field(default=0)
