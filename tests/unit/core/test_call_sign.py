"""Tests for call-sign formatting and allocation."""

import pytest

from src.lending.core.exceptions import InvalidCategory
from src.lending.core.services.catalog import (
    CallSign,
    CallSignAllocator,
    publication_year_suffix,
)
from src.lending.entities import CategoryCounterRepository, TitleRepository


class TestPublicationYearSuffix:
    @pytest.mark.parametrize(
        "published_at, expected",
        [
            ("2019-05-01", "19"),
            ("20210302", "21"),
            ("1999", "99"),
            ("201", "1"),
            ("20", ""),
            ("", ""),
            (None, ""),
        ],
    )
    def test_characters_two_to_four(self, published_at, expected):
        assert publication_year_suffix(published_at) == expected


class TestCallSign:
    def test_format(self):
        call_sign = CallSign(prefix="C", primary_number=1, year_suffix="21", copy_number=2)

        assert str(call_sign) == "C1.21.v1.c2"

    def test_short_suffix_keeps_separators(self):
        call_sign = CallSign(prefix="K", primary_number=12, year_suffix="", copy_number=1)

        assert str(call_sign) == "K12..v1.c1"


class TestCallSignAllocator:
    def test_new_title_advances_category_counter(self, db_service, categories, make_title):
        first = make_title("First", category_id=3, published_at="2021-01-01")
        second = make_title("Second", category_id=3, published_at="2019-06-30")

        with db_service.session_scope() as session:
            allocator = CallSignAllocator(session, categories)
            assert str(allocator.allocate(3, True, first)) == "C1.21.v1.c1"
            assert str(allocator.allocate(3, True, second)) == "C2.19.v1.c1"

        with db_service.session_scope() as session:
            assert CategoryCounterRepository(session).current(3) == 2
            assert TitleRepository(session).get(second.id).primary_number == 2

    def test_existing_title_advances_copy_number(self, db_service, categories, make_title):
        title = make_title("Web", category_id=3, published_at="2021-01-01")

        with db_service.session_scope() as session:
            allocator = CallSignAllocator(session, categories)
            allocator.allocate(3, True, title)
            second = allocator.allocate(3, False, title)
            third = allocator.allocate(3, False, title)

        assert str(second) == "C1.21.v1.c2"
        assert str(third) == "C1.21.v1.c3"

    def test_counters_are_per_category(self, db_service, categories, make_title):
        web = make_title("Web", category_id=3, published_at="2020")
        network = make_title("Network", category_id=4, published_at="2018")

        with db_service.session_scope() as session:
            allocator = CallSignAllocator(session, categories)
            assert str(allocator.allocate(3, True, web)) == "C1.20.v1.c1"
            assert str(allocator.allocate(4, True, network)) == "N1.18.v1.c1"

    def test_invalid_category_raises_before_counting(self, db_service, categories, make_title):
        title = make_title("Anything", category_id=3)

        with pytest.raises(InvalidCategory):
            with db_service.session_scope() as session:
                CallSignAllocator(session, categories).allocate(99, True, title)

        with db_service.session_scope() as session:
            assert CategoryCounterRepository(session).current(3) == 0
            assert TitleRepository(session).get(title.id).primary_number is None
