"""Search and detail views over the catalog."""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Literal

from pydantic import BaseModel
from sqlalchemy import func, or_
from sqlmodel import Session, col, select

from src.lending.core.exceptions import CopyNotFound, InvalidCategory, TitleNotFound
from src.lending.core.services.catalog.category_table import CategoryTable
from src.lending.core.services.catalog.circulation import (
    CirculationState,
    CirculationStateResolver,
)
from src.lending.entities.service.book import Copy, CopyRepository, CopyTable
from src.lending.entities.service.book_info import TitleRepository, TitleTable
from src.lending.entities.service.lending import LendingTable

ALL_CATEGORIES = "ALL"

SearchSort = Literal["new", "title", "popular"]


class CopyView(CirculationState):
    id: str
    title_id: str
    call_sign: str
    donator: str | None
    status: int


class TitleSummary(BaseModel):
    id: str
    title: str
    author: str | None
    publisher: str | None
    isbn: str | None
    image: str | None
    category: str | None
    published_at: str | None
    created_at: datetime
    lending_count: int = 0


class TitleDetail(TitleSummary):
    copies: list[CopyView]


class CopySearchItem(CopyView):
    """A copy listed with its title's catalogue fields."""

    title: str
    author: str | None
    publisher: str | None
    isbn: str | None
    image: str | None
    category: str | None


class CategoryCount(BaseModel):
    name: str
    count: int


class PageMeta(BaseModel):
    total_items: int
    item_count: int
    items_per_page: int
    total_pages: int
    current_page: int


class SearchResult(BaseModel):
    items: list[TitleSummary]
    categories: list[CategoryCount]
    meta: PageMeta


class CopySearchResult(BaseModel):
    items: list[CopySearchItem]
    meta: PageMeta


class CatalogQueryService:
    """Builds list and detail views; every copy carries its circulation state."""

    def __init__(
        self,
        session: Session,
        categories: CategoryTable | None = None,
        loan_period: timedelta | None = None,
    ) -> None:
        self._session = session
        self._categories = categories or CategoryTable.from_config()
        self._titles = TitleRepository(session)
        self._copies = CopyRepository(session)
        self._resolver = CirculationStateResolver(session, loan_period)

    def get_title_detail(self, title_id: str) -> TitleDetail:
        title = self._titles.get(title_id)
        if title is None:
            raise TitleNotFound(f"No book info with id {title_id}")

        copies = [self._copy_view(copy) for copy in self._copies.list_by_title(title_id)]
        return TitleDetail(
            **title.model_dump(include=set(TitleSummary.model_fields) - {"category"}),
            category=self._category_name(title.category_id),
            lending_count=self._lending_count(title_id),
            copies=copies,
        )

    def get_copy(self, copy_id: str) -> CopyView:
        copy = self._copies.get(copy_id)
        if copy is None:
            raise CopyNotFound(f"No book with id {copy_id}")
        return self._copy_view(copy)

    def search_titles(
        self,
        query: str = "",
        page: int = 0,
        limit: int = 10,
        sort: SearchSort | str = "new",
        category: str | None = None,
    ) -> SearchResult:
        """Match titles by title, author or ISBN.

        ``page`` is zero-based; ``meta.current_page`` is one-based. An unknown
        category name does not filter.
        """
        pattern = f"%{query}%"
        matches = or_(
            col(TitleTable.title).like(pattern),
            col(TitleTable.author).like(pattern),
            col(TitleTable.isbn).like(pattern),
        )
        category_id = self._categories.id_for_name(category) if category else None
        filters = [matches]
        if category_id is not None:
            filters.append(TitleTable.category_id == category_id)

        lending_count = self._lending_count_column()
        statement = select(TitleTable, lending_count).where(*filters)
        if sort == "title":
            statement = statement.order_by(col(TitleTable.title))
        elif sort == "popular":
            statement = statement.order_by(lending_count.desc(), col(TitleTable.title))
        else:
            statement = statement.order_by(col(TitleTable.created_at).desc(), col(TitleTable.title))
        rows = self._session.exec(statement.offset(page * limit).limit(limit)).all()

        total_items = self._session.exec(
            select(func.count()).select_from(TitleTable).where(*filters)
        ).one()

        items = [self._summary(row, count) for row, count in rows]
        return SearchResult(
            items=items,
            categories=self._category_counts(matches),
            meta=self._page_meta(total_items, len(items), page, limit),
        )

    def sorted_titles(self, sort: Literal["new", "popular"] = "new", limit: int = 10) -> list[TitleSummary]:
        lending_count = self._lending_count_column()
        statement = select(TitleTable, lending_count)
        if sort == "popular":
            statement = statement.order_by(lending_count.desc(), col(TitleTable.title))
        else:
            statement = statement.order_by(col(TitleTable.created_at).desc(), col(TitleTable.title))
        rows = self._session.exec(statement.limit(limit)).all()
        return [self._summary(row, count) for row, count in rows]

    def search_copies(self, query: str = "", page: int = 0, limit: int = 10) -> CopySearchResult:
        """Page through copies whose title, author, ISBN or call sign matches.

        Newest copies first; each item carries its circulation state.
        """
        pattern = f"%{query}%"
        matches = or_(
            col(TitleTable.title).like(pattern),
            col(TitleTable.author).like(pattern),
            col(TitleTable.isbn).like(pattern),
            col(CopyTable.call_sign).like(pattern),
        )
        joined = col(CopyTable.title_id) == col(TitleTable.id)

        statement = (
            select(CopyTable, TitleTable)
            .join(TitleTable, joined)
            .where(matches)
            .order_by(col(CopyTable.created_at).desc(), col(CopyTable.call_sign))
            .offset(page * limit)
            .limit(limit)
        )
        rows = self._session.exec(statement).all()

        total_items = self._session.exec(
            select(func.count()).select_from(CopyTable).join(TitleTable, joined).where(matches)
        ).one()

        items = [self._copy_search_item(copy_row, title_row) for copy_row, title_row in rows]
        return CopySearchResult(
            items=items,
            meta=self._page_meta(total_items, len(items), page, limit),
        )

    def _copy_view(self, copy: Copy) -> CopyView:
        state = self._resolver.resolve(copy)
        return CopyView(
            id=copy.id,
            title_id=copy.title_id,
            call_sign=copy.call_sign,
            donator=copy.donator,
            status=copy.status,
            lendable=state.lendable,
            reserved=state.reserved,
            due_date=state.due_date,
        )

    def _copy_search_item(self, copy_row: CopyTable, title_row: TitleTable) -> CopySearchItem:
        view = self._copy_view(Copy.model_validate(copy_row, from_attributes=True))
        return CopySearchItem(
            **view.model_dump(),
            title=title_row.title,
            author=title_row.author,
            publisher=title_row.publisher,
            isbn=title_row.isbn,
            image=title_row.image,
            category=self._category_name(title_row.category_id),
        )

    @staticmethod
    def _page_meta(total_items: int, item_count: int, page: int, limit: int) -> PageMeta:
        return PageMeta(
            total_items=total_items,
            item_count=item_count,
            items_per_page=limit,
            total_pages=math.ceil(total_items / limit) if limit else 0,
            current_page=page + 1,
        )

    def _summary(self, row: TitleTable, lending_count: int) -> TitleSummary:
        return TitleSummary(
            id=row.id,
            title=row.title,
            author=row.author,
            publisher=row.publisher,
            isbn=row.isbn,
            image=row.image,
            category=self._category_name(row.category_id),
            published_at=row.published_at,
            created_at=row.created_at,
            lending_count=lending_count or 0,
        )

    def _category_counts(self, matches) -> list[CategoryCount]:
        statement = (
            select(TitleTable.category_id, func.count())
            .where(matches)
            .group_by(TitleTable.category_id)
        )
        per_category = dict(self._session.exec(statement).all())
        counts = [
            CategoryCount(name=self._categories.name_for(category_id), count=per_category.get(category_id, 0))
            for category_id in self._categories.ids()
        ]
        counts.append(CategoryCount(name=ALL_CATEGORIES, count=sum(per_category.values())))
        return sorted(counts, key=lambda entry: entry.name)

    def _category_name(self, category_id: int) -> str | None:
        try:
            return self._categories.name_for(category_id)
        except InvalidCategory:
            return None

    def _lending_count(self, title_id: str) -> int:
        statement = (
            select(func.count(col(LendingTable.id)))
            .join(CopyTable, col(CopyTable.id) == col(LendingTable.copy_id))
            .where(CopyTable.title_id == title_id)
        )
        return self._session.exec(statement).one()

    @staticmethod
    def _lending_count_column():
        return (
            select(func.count(col(LendingTable.id)))
            .join(CopyTable, col(CopyTable.id) == col(LendingTable.copy_id))
            .where(col(CopyTable.title_id) == col(TitleTable.id))
            .correlate(TitleTable)
            .scalar_subquery()
            .label("lending_count")
        )
