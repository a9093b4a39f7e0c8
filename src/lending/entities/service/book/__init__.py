"""Entity package: Copy (a physical book)."""

from .entity import Copy, CopyStatus
from .repository import CopyRepository
from .table import CopyTable

__all__ = ["Copy", "CopyRepository", "CopyStatus", "CopyTable"]
