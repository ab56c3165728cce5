"""Tests for StaticDocumentSource."""

from __future__ import annotations

import asyncio

import pytest

from xml_compare.errors import AuthError, FetchError, InvalidUrlError
from xml_compare.protocols import DocumentSource
from xml_compare.sources import StaticDocumentSource

DOC_URL = "https://docs.test/a.xml"
LOGIN_URL = "https://docs.test/login"


class TestProtocol:
    def test_satisfies_document_source(self) -> None:
        assert isinstance(StaticDocumentSource({}), DocumentSource)


class TestFetch:
    def test_returns_document(self) -> None:
        source = StaticDocumentSource({DOC_URL: "<a/>"})
        assert asyncio.run(source.fetch(DOC_URL)) == "<a/>"
        assert source.fetch_calls == [(DOC_URL, None)]

    def test_unknown_url_is_404(self) -> None:
        source = StaticDocumentSource({})
        with pytest.raises(FetchError) as exc_info:
            asyncio.run(source.fetch(DOC_URL))
        assert exc_info.value.status_code == 404
        assert exc_info.value.url == DOC_URL

    def test_invalid_url(self) -> None:
        source = StaticDocumentSource({})
        with pytest.raises(InvalidUrlError):
            asyncio.run(source.fetch("ftp://docs.test/a.xml"))
        assert source.fetch_calls == []


class TestAuthentication:
    @pytest.fixture
    def source(self) -> StaticDocumentSource:
        return StaticDocumentSource(
            {DOC_URL: "<a/>"}, accounts={LOGIN_URL: ("test", "password")}
        )

    def test_login_and_fetch(self, source: StaticDocumentSource) -> None:
        async def scenario() -> str:
            session = await source.authenticate(LOGIN_URL, "test", "password")
            assert session.cookies == ("session=test",)
            return await source.fetch(DOC_URL, session.token)

        assert asyncio.run(scenario()) == "<a/>"
        assert source.auth_calls == [(LOGIN_URL, "test")]

    def test_wrong_password(self, source: StaticDocumentSource) -> None:
        with pytest.raises(AuthError, match="Authentication failed"):
            asyncio.run(source.authenticate(LOGIN_URL, "test", "wrong"))

    def test_fetch_without_token_is_401(self, source: StaticDocumentSource) -> None:
        with pytest.raises(FetchError) as exc_info:
            asyncio.run(source.fetch(DOC_URL))
        assert exc_info.value.status_code == 401

    def test_fetch_with_unknown_token_is_401(
        self, source: StaticDocumentSource
    ) -> None:
        with pytest.raises(FetchError) as exc_info:
            asyncio.run(source.fetch(DOC_URL, "not-a-token"))
        assert exc_info.value.status_code == 401

    def test_session_lands_in_store(self, source: StaticDocumentSource) -> None:
        async def scenario() -> bool:
            session = await source.authenticate(LOGIN_URL, "test", "password")
            return await source.store.get(session.token) == session

        assert asyncio.run(scenario())


class TestDelays:
    def test_delay_is_applied(self) -> None:
        source = StaticDocumentSource({DOC_URL: "<a/>"}, delays={DOC_URL: 0.02})

        async def scenario() -> float:
            loop = asyncio.get_running_loop()
            start = loop.time()
            await source.fetch(DOC_URL)
            return loop.time() - start

        assert asyncio.run(scenario()) >= 0.015
