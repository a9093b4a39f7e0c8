"""Circulation state of a copy: lendable, reserved and due date."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from pydantic import BaseModel, Field, field_serializer
from sqlmodel import Session

from src.lending.entities.service.book import Copy, CopyStatus
from src.lending.entities.service.lending import LendingRepository
from src.lending.entities.service.reservation import ReservationRepository
from src.lending.runtime.context import get_config

NO_DUE_DATE = "-"


@dataclass(frozen=True)
class CirculationFacts:
    """Facts read from storage for one copy."""

    open_lendings: int
    copy_status: int
    active_reservations: int
    latest_open_lending_at: datetime | None = None


class CirculationState(BaseModel):
    lendable: bool
    reserved: bool
    due_date: datetime | None = Field(
        default=None, description="Due date of the current loan; '-' when there is none"
    )

    @field_serializer("due_date", when_used="json")
    def _serialize_due_date(self, value: datetime | None) -> str:
        return value.isoformat() if value is not None else NO_DUE_DATE


def resolve_circulation_state(facts: CirculationFacts, loan_period: timedelta) -> CirculationState:
    """Derive the circulation state from already-fetched facts.

    A copy is lendable only when it has no open lending, its own status is
    available and nobody holds an active reservation on it. A due date is
    reported only for an available-status copy that is not lendable and is
    out on an open lending; every other case reports no due date.
    """
    reserved = facts.active_reservations > 0
    available = facts.copy_status == CopyStatus.AVAILABLE
    lendable = facts.open_lendings == 0 and available and not reserved

    due_date = None
    if available and not lendable and facts.latest_open_lending_at is not None:
        due_date = facts.latest_open_lending_at + loan_period

    return CirculationState(lendable=lendable, reserved=reserved, due_date=due_date)


class CirculationStateResolver:
    """Reads a copy's lending and reservation facts and resolves its state.

    All reads go through one session so the three facts come from the same
    transaction.
    """

    def __init__(self, session: Session, loan_period: timedelta | None = None) -> None:
        self._lendings = LendingRepository(session)
        self._reservations = ReservationRepository(session)
        self._loan_period = loan_period or timedelta(days=get_config().catalog.loan_period_days)

    def facts(self, copy: Copy) -> CirculationFacts:
        latest = self._lendings.latest_open(copy.id)
        return CirculationFacts(
            open_lendings=self._lendings.count_open(copy.id),
            copy_status=copy.status,
            active_reservations=self._reservations.count_active(copy.id),
            latest_open_lending_at=latest.created_at if latest is not None else None,
        )

    def resolve(self, copy: Copy) -> CirculationState:
        return resolve_circulation_state(self.facts(copy), self._loan_period)
