"""StaticDocumentSource: in-memory DocumentSource with no network access.

Serves documents from a URL -> text mapping and checks logins against a
URL -> (username, password) mapping.  Sessions go through a real
``SessionStore`` so token handling behaves exactly like the HTTP source.
Every call is recorded, which makes the source convenient in tests.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping

from xml_compare.errors import AuthError, FetchError
from xml_compare.sessions import Session, SessionStore
from xml_compare.validation import validate_url

__all__ = ["StaticDocumentSource"]


class StaticDocumentSource:
    """Dictionary-backed document source.

    Args:
        documents: URL -> document text.
        accounts: Login URL -> ``(username, password)``.  When given, every
            fetch requires the token of a live session.
        store: Session store.  Defaults to a fresh ``SessionStore()``.
        delays: Optional URL -> seconds to sleep before answering a fetch,
            for exercising concurrency.

    Example::

        source = StaticDocumentSource({"https://a.example/x.xml": "<x/>"})
        await source.fetch("https://a.example/x.xml")     # "<x/>"
    """

    def __init__(
        self,
        documents: Mapping[str, str],
        accounts: Mapping[str, tuple[str, str]] | None = None,
        store: SessionStore | None = None,
        delays: Mapping[str, float] | None = None,
    ) -> None:
        self._documents = dict(documents)
        self._accounts = dict(accounts or {})
        self._delays = dict(delays or {})
        self.store = store if store is not None else SessionStore()
        self.fetch_calls: list[tuple[str, str | None]] = []
        self.auth_calls: list[tuple[str, str]] = []

    async def fetch(self, url: str, token: str | None = None) -> str:
        validate_url(url)
        self.fetch_calls.append((url, token))
        delay = self._delays.get(url)
        if delay:
            await asyncio.sleep(delay)
        if self._accounts and not await self._authorised(url, token):
            raise FetchError(url, "HTTP 401", status_code=401)
        try:
            return self._documents[url]
        except KeyError:
            raise FetchError(url, "HTTP 404", status_code=404) from None

    async def authenticate(self, url: str, username: str, password: str) -> Session:
        validate_url(url)
        self.auth_calls.append((url, username))
        if self._accounts.get(url) != (username, password):
            raise AuthError(f"login to {url} rejected")
        session = Session.create(url, [f"session={username}"], ttl=self.store.ttl)
        await self.store.insert(session)
        return session

    async def _authorised(self, url: str, token: str | None) -> bool:
        if token is None:
            return False
        session = await self.store.get(token)
        return session is not None and session.url in self._accounts
