"""Entity package: Lending."""

from .entity import Lending
from .repository import LendingRepository
from .table import LendingTable

__all__ = ["Lending", "LendingRepository", "LendingTable"]
