"""Tests for the ISBN metadata lookup service."""

import httpx
import pytest

from src.lending.core.exceptions import AuthorLookupFailed, NationalLibraryLookupFailed
from src.lending.core.services import BookMetadataService
from tests.fixtures.lookup import NATIONAL_LIBRARY_HOST, NAVER_HOST, default_lookup_handler

ISBN = "9791158391409"


class TestBookMetadataService:
    @pytest.mark.asyncio
    async def test_lookup_combines_both_sources(self, metadata_service: BookMetadataService):
        metadata = await metadata_service.lookup(ISBN)

        assert metadata.isbn == ISBN
        assert metadata.title == "Modern Web Development"
        assert metadata.category == "Technology"
        assert metadata.publisher == "Hanbit"
        assert metadata.pubdate == "20210302"
        assert metadata.author == "Jane Kim"
        assert metadata.image == (
            "https://image.kyobobook.co.kr/images/book/xlarge/409/x9791158391409.jpg"
        )

    @pytest.mark.asyncio
    async def test_requests_carry_credentials(self, lookup_config):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return default_lookup_handler(request)

        service = BookMetadataService(lookup_config, transport=httpx.MockTransport(handler))
        await service.lookup(ISBN)

        national, naver = seen
        assert national.url.params["cert_key"] == "test-cert-key"
        assert national.url.params["result_style"] == "json"
        assert national.url.params["isbn"] == ISBN
        assert naver.url.params["d_isbn"] == ISBN
        assert naver.headers["X-Naver-Client-Id"] == "test-client-id"
        assert naver.headers["X-Naver-Client-Secret"] == "test-client-secret"

    @pytest.mark.asyncio
    async def test_national_library_error_status(self, lookup_config):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == NATIONAL_LIBRARY_HOST:
                return httpx.Response(500)
            return default_lookup_handler(request)

        service = BookMetadataService(lookup_config, transport=httpx.MockTransport(handler))

        with pytest.raises(NationalLibraryLookupFailed) as exc_info:
            await service.lookup(ISBN)

        assert exc_info.value.code == "ISBN_SEARCH_FAILED"
        assert exc_info.value.isbn == ISBN

    @pytest.mark.asyncio
    async def test_national_library_without_results(self, lookup_config):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == NATIONAL_LIBRARY_HOST:
                return httpx.Response(200, json={"TOTAL_COUNT": "0", "docs": []})
            return default_lookup_handler(request)

        service = BookMetadataService(lookup_config, transport=httpx.MockTransport(handler))

        with pytest.raises(NationalLibraryLookupFailed):
            await service.find_in_national_library(ISBN)

    @pytest.mark.asyncio
    async def test_author_lookup_failure(self, lookup_config):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == NAVER_HOST:
                return httpx.Response(200, json={"total": 0, "items": []})
            return default_lookup_handler(request)

        service = BookMetadataService(lookup_config, transport=httpx.MockTransport(handler))

        with pytest.raises(AuthorLookupFailed) as exc_info:
            await service.lookup(ISBN)

        assert exc_info.value.code == "ISBN_SEARCH_FAILED_IN_NAVER"
        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_transport_error_is_reported(self, lookup_config):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        service = BookMetadataService(lookup_config, transport=httpx.MockTransport(handler))

        with pytest.raises(NationalLibraryLookupFailed, match="connection refused"):
            await service.lookup(ISBN)
