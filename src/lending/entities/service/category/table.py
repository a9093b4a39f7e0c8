"""Category counter table model."""

from sqlmodel import Field, SQLModel


class CategoryCounterTable(SQLModel, table=True):
    """Last primary (shelf group) number issued in a category."""

    __tablename__ = "category_counter"

    category_id: int = Field(primary_key=True)
    last_primary_number: int = Field(default=0)
