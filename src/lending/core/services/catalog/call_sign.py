"""Call-sign value and allocation.

A call sign reads ``<prefix><primary>.<yy>.v1.c<copy>``: ``C1.21.v1.c2`` is the
second copy of the first title shelved under category prefix ``C``, published
in 2021. Primary numbers are sequential per category, copy numbers per title.
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger
from sqlmodel import Session

from src.lending.core.services.catalog.category_table import CategoryTable
from src.lending.entities.service.book_info import Title, TitleRepository
from src.lending.entities.service.category import CategoryCounterRepository

VOLUME_TAG = "v1"


def publication_year_suffix(published_at: str | None) -> str:
    """Characters [2:4] of the publication date string ("2019-05-01" -> "19").

    Shorter strings truncate silently; the format is fixed.
    """
    return str(published_at or "")[2:4]


@dataclass(frozen=True)
class CallSign:
    prefix: str
    primary_number: int
    year_suffix: str
    copy_number: int

    def __str__(self) -> str:
        return (
            f"{self.prefix}{self.primary_number}.{self.year_suffix}"
            f".{VOLUME_TAG}.c{self.copy_number}"
        )


class CallSignAllocator:
    """Issues call signs against the counters stored in the caller's session.

    Counter increments are written through ``session`` and therefore commit or
    roll back together with the rest of the caller's unit of work.
    """

    def __init__(self, session: Session, categories: CategoryTable) -> None:
        self._categories = categories
        self._counters = CategoryCounterRepository(session)
        self._titles = TitleRepository(session)

    def allocate(self, category_id: int | str, is_new_title: bool, title: Title) -> CallSign:
        """Allocate the next call sign for a copy of ``title``.

        For a new title the category's primary number is advanced and the copy
        number is 1. For an existing title the title keeps its primary number
        and its copy counter is advanced.

        Raises:
            InvalidCategory: if ``category_id`` has no prefix.
        """
        prefix = self._categories.prefix_for(category_id)

        if is_new_title:
            primary_number = self._counters.next_primary_number(
                self._categories.resolve_id(category_id)
            )
            title = self._titles.assign_primary_number(title.id, primary_number)
        else:
            title = self._titles.next_copy_number(title.id)

        call_sign = CallSign(
            prefix=prefix,
            primary_number=title.primary_number,
            year_suffix=publication_year_suffix(title.published_at),
            copy_number=title.last_copy_number,
        )
        logger.debug(
            "Allocated call sign {} for title {} (new title: {})",
            call_sign,
            title.id,
            is_new_title,
        )
        return call_sign
