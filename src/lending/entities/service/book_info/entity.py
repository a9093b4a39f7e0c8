"""Entity: Title."""

from pydantic import Field

from src.lending.entities._base import Entity


class Title(Entity):
    """A catalogued work, independent of how many physical copies exist.

    ``primary_number`` is the shelf group number shared by every copy of the
    title; it is assigned when the first copy is taken in.
    """

    isbn: str | None = Field(default=None, description="ISBN; not unique across titles")
    title: str = Field(description="Title")
    author: str | None = Field(default=None, description="Author")
    publisher: str | None = Field(default=None, description="Publisher")
    image: str | None = Field(default=None, description="Cover image URL")
    category_id: int = Field(description="Shelf category id")
    published_at: str | None = Field(default=None, description="Publication date as given at intake")
    primary_number: int | None = Field(default=None, description="Shelf group number")
    last_copy_number: int = Field(default=0, description="Highest copy number issued so far")
