"""Entity: Copy."""

from enum import IntEnum

from pydantic import Field

from src.lending.entities._base import Entity


class CopyStatus(IntEnum):
    """Copy status codes. Anything other than AVAILABLE keeps a copy off the lending pool."""

    AVAILABLE = 0
    LOST = 1
    DAMAGED = 2
    WITHDRAWN = 3


class Copy(Entity):
    """One physical, shelvable instance of a title."""

    title_id: str = Field(description="Title this copy belongs to")
    call_sign: str = Field(description="Unique shelf label, immutable once assigned")
    donator: str | None = Field(default=None, description="Donator nickname as entered")
    donator_id: str | None = Field(default=None, description="Resolved owner of the donation")
    category_id: int = Field(description="Shelf category id")
    copy_number: int = Field(description="Copy number within the title")
    status: int = Field(default=CopyStatus.AVAILABLE, description="0 available, nonzero otherwise")
