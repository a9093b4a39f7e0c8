"""Entity package: per-category shelf number counter."""

from .repository import CategoryCounterRepository
from .table import CategoryCounterTable

__all__ = ["CategoryCounterRepository", "CategoryCounterTable"]
