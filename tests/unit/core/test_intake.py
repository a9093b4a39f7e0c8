"""Tests for the book intake transaction."""

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import func
from sqlmodel import select

from src.lending.core.exceptions import IntakeFailed, InvalidCategory, UnknownDonator
from src.lending.core.services.catalog import BookIntakeTransaction, NewBookInput
from src.lending.entities import (
    CategoryCounterRepository,
    Copy,
    CopyRepository,
    CopyTable,
    TitleRepository,
    TitleTable,
)


def count(session, table) -> int:
    return session.exec(select(func.count()).select_from(table)).one()


class TestIntakeCallSigns:
    def test_first_copy_of_new_title(self, intake, new_book, donator):
        result = intake.intake(new_book())

        assert result.call_sign == "C1.21.v1.c1"

    def test_second_copy_of_same_isbn(self, intake, new_book, donator, session):
        intake.intake(new_book())
        result = intake.intake(new_book())

        assert result.call_sign == "C1.21.v1.c2"
        assert count(session, TitleTable) == 1
        assert count(session, CopyTable) == 2

    def test_different_isbn_same_category_gets_next_primary_number(self, intake, new_book, donator):
        intake.intake(new_book())
        result = intake.intake(new_book(isbn="9788966262281", title="CSS Secrets", pubdate="2017-01-02"))

        assert result.call_sign == "C2.17.v1.c1"

    def test_copy_records_title_and_donator(self, intake, new_book, donator, session):
        call_sign = intake.intake(new_book()).call_sign

        copy = CopyRepository(session).get_by_call_sign(call_sign)
        title = TitleRepository(session).get(copy.title_id)

        assert copy.donator == donator.nickname
        assert copy.donator_id == donator.id
        assert copy.copy_number == 1
        assert copy.status == 0
        assert copy.category_id == 3
        assert title.isbn == "9791158391409"
        assert title.primary_number == 1
        assert title.last_copy_number == 1
        assert title.published_at == "2021-03-02"

    def test_numeric_string_category_id(self, intake, new_book, donator):
        result = intake.intake(new_book(category_id="4", pubdate="20180101"))

        assert result.call_sign == "N1.18.v1.c1"

    def test_empty_isbn_always_creates_new_title(self, intake, new_book, donator, session):
        first = intake.intake(new_book(isbn=""))
        second = intake.intake(new_book(isbn=""))
        third = intake.intake(new_book(isbn=None))

        assert first.call_sign == "C1.21.v1.c1"
        assert second.call_sign == "C2.21.v1.c1"
        assert third.call_sign == "C3.21.v1.c1"
        assert count(session, TitleTable) == 3

    def test_existing_title_keeps_its_category_and_year(self, intake, new_book, donator):
        intake.intake(new_book())
        result = intake.intake(new_book(category_id=4, pubdate="1999-12-31"))

        assert result.call_sign == "C1.21.v1.c2"

    def test_duplicate_isbn_extends_earliest_title(
        self, intake, new_book, donator, make_title, session
    ):
        earliest = make_title(
            "Older record",
            isbn="9791158391409",
            published_at="2020-01-01",
            primary_number=5,
            last_copy_number=2,
            created_at=datetime.now(UTC) - timedelta(days=30),
        )
        make_title("Newer record", isbn="9791158391409", published_at="2021-01-01", primary_number=6)

        result = intake.intake(new_book())

        assert result.call_sign == "C5.20.v1.c3"
        copy = CopyRepository(session).get_by_call_sign(result.call_sign)
        assert copy.title_id == earliest.id


class TestIntakeFailures:
    def test_invalid_category_writes_nothing(self, intake, new_book, donator, session):
        with pytest.raises(InvalidCategory) as exc_info:
            intake.intake(new_book(category_id=99))

        assert exc_info.value.code == "INVALID_CATEGORY_ID"
        assert count(session, TitleTable) == 0
        assert count(session, CopyTable) == 0
        assert CategoryCounterRepository(session).current(3) == 0

    def test_unknown_donator_rolls_back(self, intake, new_book, session):
        with pytest.raises(UnknownDonator) as exc_info:
            intake.intake(new_book(donator="nobody"))

        assert exc_info.value.code == "UNKNOWN_DONATOR"
        assert count(session, TitleTable) == 0
        assert count(session, CopyTable) == 0

    def test_storage_failure_is_wrapped_and_rolled_back(
        self, intake, new_book, donator, make_title, db_service, session
    ):
        # A copy already holding C1.21.v1.c1 makes the copy insert violate uniqueness
        other = make_title("Placeholder", category_id=3)
        with db_service.session_scope() as setup:
            CopyRepository(setup).create(
                Copy(title_id=other.id, call_sign="C1.21.v1.c1", category_id=3, copy_number=1)
            )

        with pytest.raises(IntakeFailed) as exc_info:
            intake.intake(new_book())

        assert exc_info.value.code == "FAIL_CREATE_BOOK_BY_UNEXPECTED"
        assert exc_info.value.status_code == 500
        assert count(session, TitleTable) == 1
        assert count(session, CopyTable) == 1
        assert CategoryCounterRepository(session).current(3) == 0

    def test_counter_is_reused_after_rollback(self, intake, new_book, donator):
        with pytest.raises(UnknownDonator):
            intake.intake(new_book(donator="nobody"))

        assert intake.intake(new_book()).call_sign == "C1.21.v1.c1"


class TestDonatorResolution:
    def test_ambiguous_nickname_credits_most_recent_user(
        self, intake, new_book, make_user, session, log_messages
    ):
        make_user("twin", created_at=datetime.now(UTC) - timedelta(days=1))
        newest = make_user("twin")

        call_sign = intake.intake(new_book(donator="twin")).call_sign

        copy = CopyRepository(session).get_by_call_sign(call_sign)
        assert copy.donator_id == newest.id
        assert any(
            message.startswith("WARNING|") and "matches 2 users" in message
            for message in log_messages
        )


class TestNewBookInput:
    def test_isbn_defaults_to_empty(self):
        book = NewBookInput(title="Untitled", category_id=1, pubdate="2020", donator="x")

        assert book.isbn == ""
        assert book.author is None

    def test_intake_uses_configured_categories_by_default(self, db_service, new_book, donator):
        result = BookIntakeTransaction(db_service).intake(new_book())

        assert result.call_sign == "C1.21.v1.c1"
