"""User domain entity."""

from pydantic import Field

from src.lending.entities._base import Entity


class User(Entity):
    """User entity representing a library member or donor."""

    nickname: str = Field(description="Display name; also the donator identifier")
    email: str | None = Field(default=None, description="User's email address")
