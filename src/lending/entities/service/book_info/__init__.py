"""Entity package: Title (book info)."""

from .entity import Title
from .repository import TitleRepository
from .table import TitleTable

__all__ = ["Title", "TitleRepository", "TitleTable"]
