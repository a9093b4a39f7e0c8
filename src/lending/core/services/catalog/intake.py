"""Book intake: register a donated copy and give it a call sign."""

from __future__ import annotations

from loguru import logger
from pydantic import BaseModel, Field
from sqlmodel import Session

from src.lending.core.exceptions import CatalogError, IntakeFailed, UnknownDonator
from src.lending.core.services.catalog.call_sign import CallSignAllocator
from src.lending.core.services.catalog.category_table import CategoryTable
from src.lending.core.services.database.db_session import DbSessionService
from src.lending.entities.core.user import User, UserRepository
from src.lending.entities.service.book import Copy, CopyRepository, CopyStatus
from src.lending.entities.service.book_info import Title, TitleRepository
from src.lending.entities.service.category import CategoryCounterRepository
from src.lending.runtime.context import get_config


class NewBookInput(BaseModel):
    """A donated copy as entered at the desk, usually prefilled by an ISBN lookup."""

    isbn: str | None = Field(default="", description="ISBN, empty when unknown")
    title: str = Field(description="Title")
    author: str | None = Field(default=None, description="Author")
    publisher: str | None = Field(default=None, description="Publisher")
    image: str | None = Field(default=None, description="Cover image URL")
    category_id: int | str = Field(description="Shelf category id")
    pubdate: str = Field(description="Publication date, e.g. 2019-05-01 or 20190501")
    donator: str = Field(description="Donator nickname")


class IntakeResult(BaseModel):
    call_sign: str


class BookIntakeTransaction:
    """Runs the whole intake as one unit of work.

    Title lookup, title creation, counter increments and the copy insert share
    a single session; any failure rolls all of them back.
    """

    def __init__(
        self,
        db_service: DbSessionService,
        categories: CategoryTable | None = None,
        isolation_level: str | None = None,
    ) -> None:
        self._db = db_service
        self._categories = categories or CategoryTable.from_config()
        self._isolation_level = isolation_level or get_config().database.isolation_level

    def intake(self, book: NewBookInput) -> IntakeResult:
        """Register ``book`` and return its call sign.

        Raises:
            InvalidCategory: the category id has no prefix.
            UnknownDonator: no user has the donator nickname.
            IntakeFailed: anything else went wrong; nothing was written.
        """
        category_id = self._categories.resolve_id(book.category_id)

        try:
            with self._db.session_scope(isolation_level=self._isolation_level) as session:
                call_sign = self._run(session, book, category_id)
        except CatalogError:
            raise
        except Exception as e:
            raise IntakeFailed(f"Book intake failed: {e}") from e

        logger.info("Registered copy {} donated by {}", call_sign, book.donator)
        return IntakeResult(call_sign=call_sign)

    def _run(self, session: Session, book: NewBookInput, category_id: int) -> str:
        titles = TitleRepository(session)
        copies = CopyRepository(session)
        allocator = CallSignAllocator(session, self._categories)

        # Intakes in this category are serialized from here on; the ISBN
        # lookup below sees titles committed by earlier intakes
        CategoryCounterRepository(session).lock(category_id)

        isbn = book.isbn or ""
        existing = titles.find_by_isbn(isbn)
        donor = self._resolve_donator(UserRepository(session), book.donator)

        if existing is None or existing.primary_number is None:
            title = existing or titles.create(
                Title(
                    isbn=isbn or None,
                    title=book.title,
                    author=book.author,
                    publisher=book.publisher,
                    image=book.image,
                    category_id=category_id,
                    published_at=book.pubdate,
                )
            )
            call_sign = allocator.allocate(title.category_id, True, title)
        else:
            title = existing
            call_sign = allocator.allocate(title.category_id, False, title)

        copies.create(
            Copy(
                title_id=title.id,
                call_sign=str(call_sign),
                donator=book.donator,
                donator_id=donor.id,
                category_id=title.category_id,
                copy_number=call_sign.copy_number,
                status=CopyStatus.AVAILABLE,
            )
        )
        return str(call_sign)

    @staticmethod
    def _resolve_donator(users: UserRepository, nickname: str) -> User:
        """Pick the owner for a donation.

        Nicknames are not unique; when several users share one, the most
        recently created is credited and a warning is logged.
        """
        matches = users.find_by_nickname(nickname)
        if not matches:
            raise UnknownDonator(nickname)
        if len(matches) > 1:
            logger.warning(
                "Nickname {!r} matches {} users; crediting the most recently created ({})",
                nickname,
                len(matches),
                matches[0].id,
            )
        return matches[0]
