"""Entity package: Reservation."""

from .entity import Reservation, ReservationStatus
from .repository import ReservationRepository
from .table import ReservationTable

__all__ = ["Reservation", "ReservationRepository", "ReservationStatus", "ReservationTable"]
