"""ISBN metadata lookup against the national library and Naver book APIs.

Both calls are made before any intake transaction starts; a failure raises the
collaborator's own ``LookupFailed`` subclass and is not retried.
"""

from __future__ import annotations

import httpx
from loguru import logger
from pydantic import BaseModel

from src.lending.core.exceptions import AuthorLookupFailed, NationalLibraryLookupFailed
from src.lending.runtime.config.config_data import LookupConfig
from src.lending.runtime.context import get_config


class BookMetadata(BaseModel):
    """Prefill data for the intake form."""

    isbn: str
    title: str
    category: str | None = None
    publisher: str | None = None
    pubdate: str | None = None
    image: str | None = None
    author: str | None = None


class BookMetadataService:
    def __init__(
        self,
        config: LookupConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or get_config().lookup
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._config.timeout, transport=self._transport)

    def cover_image_url(self, isbn: str) -> str:
        return self._config.cover_image_url.format(suffix=isbn[-3:], isbn=isbn)

    async def lookup(self, isbn: str) -> BookMetadata:
        """Title data from the national library, completed with the Naver author."""
        metadata = await self.find_in_national_library(isbn)
        metadata.author = await self.find_author(isbn)
        return metadata

    async def find_in_national_library(self, isbn: str) -> BookMetadata:
        params = {
            "cert_key": self._config.national_library_key,
            "result_style": "json",
            "page_no": 1,
            "page_size": 10,
            "isbn": isbn,
        }
        try:
            async with self._client() as client:
                response = await client.get(self._config.national_library_url, params=params)
                response.raise_for_status()
                doc = response.json()["docs"][0]
            return BookMetadata(
                isbn=isbn,
                title=doc["TITLE"],
                category=doc.get("SUBJECT"),
                publisher=doc.get("PUBLISHER"),
                pubdate=doc.get("PUBLISH_PREDATE"),
                image=self.cover_image_url(isbn),
            )
        except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as e:
            logger.warning("National library lookup failed for {}: {}", isbn, e)
            raise NationalLibraryLookupFailed(isbn, str(e)) from e

    async def find_author(self, isbn: str) -> str:
        headers = {
            "X-Naver-Client-Id": self._config.naver_client_id,
            "X-Naver-Client-Secret": self._config.naver_client_secret,
        }
        try:
            async with self._client() as client:
                response = await client.get(
                    self._config.naver_url, params={"d_isbn": isbn}, headers=headers
                )
                response.raise_for_status()
                return response.json()["items"][0]["author"]
        except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as e:
            logger.warning("Author lookup failed for {}: {}", isbn, e)
            raise AuthorLookupFailed(isbn, str(e)) from e
