"""Reservation repository."""

from sqlalchemy import func
from sqlmodel import Session, select

from .entity import Reservation, ReservationStatus
from .table import ReservationTable


class ReservationRepository:
    """Data-access layer for reservations."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, reservation: Reservation) -> Reservation:
        row = ReservationTable.model_validate(reservation, from_attributes=True)
        self._session.add(row)
        self._session.flush()
        return Reservation.model_validate(row, from_attributes=True)

    def count_active(self, copy_id: str) -> int:
        statement = select(func.count()).where(
            ReservationTable.copy_id == copy_id,
            ReservationTable.status == ReservationStatus.ACTIVE,
        )
        return self._session.exec(statement).one()
