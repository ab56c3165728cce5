"""HttpDocumentSource: DocumentSource over ``httpx.AsyncClient``.

Documents are fetched with GET; logins POST the ``username``/``password``
form fields (with the same pair as HTTP Basic credentials) and keep the
``Set-Cookie`` headers of the response in a new ``Session``.  Later fetches
carrying that session's token send the cookies back.

Transport failures (connection errors, timeouts) are retried with jittered
exponential backoff via ``tenacity`` when ``SourceConfig.retry_attempts`` is
greater than 1.  HTTP error statuses are never retried.

Example::

    async with HttpDocumentSource() as source:
        session = await source.authenticate("https://docs.example/login", "u", "p")
        text = await source.fetch("https://docs.example/a.xml", session.token)
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

from xml_compare.config import SourceConfig
from xml_compare.errors import AuthError, FetchError
from xml_compare.sessions import Session, SessionStore
from xml_compare.validation import validate_url

__all__ = ["HttpDocumentSource"]

logger = logging.getLogger(__name__)


class HttpDocumentSource:
    """HTTP document source with cookie-based sessions.

    Args:
        store: Session store shared with whoever else handles logins.
            Defaults to a fresh store sized from ``config``; an owned store is
            swept every ``config.sweep_interval`` seconds while the source is
            entered as an async context manager.  A store passed in is swept
            by its owner.
        config: Timeouts, retry attempts and session settings.  Defaults to
            ``SourceConfig()``.
        client: An existing ``httpx.AsyncClient``.  A client passed in is
            not closed by ``aclose()``; one created here is.
    """

    def __init__(
        self,
        store: SessionStore | None = None,
        config: SourceConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config if config is not None else SourceConfig()
        self._owns_store = store is None
        self.store = (
            store
            if store is not None
            else SessionStore(
                ttl=self._config.session_ttl, max_size=self._config.max_sessions
            )
        )
        self._owns_client = client is None
        self._client = (
            client
            if client is not None
            else httpx.AsyncClient(timeout=self._config.timeout, follow_redirects=True)
        )

        # reraise=True: callers see the final httpx error, not a RetryError.
        _retry = retry(
            retry=retry_if_exception_type(httpx.TransportError),
            wait=wait_random_exponential(multiplier=0.5, max=10),
            stop=stop_after_attempt(self._config.retry_attempts),
            reraise=True,
        )
        self._send = _retry(self._raw_send)

    def __repr__(self) -> str:
        return (
            f"HttpDocumentSource(timeout={self._config.timeout!r}, "
            f"retry_attempts={self._config.retry_attempts!r})"
        )

    async def __aenter__(self) -> HttpDocumentSource:
        if self._owns_store:
            self.store.start_sweeper(self._config.sweep_interval)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the owned client and stop the owned store's sweeper."""
        if self._owns_store:
            await self.store.aclose()
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # DocumentSource Protocol surface
    # ------------------------------------------------------------------

    async def fetch(self, url: str, token: str | None = None) -> str:
        """Return the body of ``url``.

        An unknown or expired ``token`` is not an error: the request is sent
        without cookies and the server decides.

        Raises:
            InvalidUrlError: If ``url`` is not http(s).
            FetchError: On transport failure or a non-2xx status.
        """
        validate_url(url)
        headers: dict[str, str] = {}
        if token is not None:
            session = await self.store.get(token)
            if session is None:
                logger.debug(
                    "No live session for token; fetching %s without cookies", url
                )
            elif session.cookies:
                headers["Cookie"] = session.cookie_header()

        try:
            response = await self._send("GET", url, headers=headers)
        except httpx.HTTPError as exc:
            raise FetchError(url, str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            raise FetchError(
                url, f"HTTP {response.status_code}", status_code=response.status_code
            )
        return response.text

    async def authenticate(self, url: str, username: str, password: str) -> Session:
        """Log in at ``url`` and store the resulting session.

        Raises:
            InvalidUrlError: If ``url`` is not http(s).
            AuthError: On transport failure or a non-2xx status.
        """
        validate_url(url)
        try:
            response = await self._send(
                "POST",
                url,
                data={"username": username, "password": password},
                auth=(username, password),
            )
        except httpx.HTTPError as exc:
            raise AuthError(f"login request to {url} failed: {exc}") from exc

        if not response.is_success:
            raise AuthError(f"login to {url} returned HTTP {response.status_code}")

        session = Session.create(
            url, response.headers.get_list("set-cookie"), ttl=self.store.ttl
        )
        await self.store.insert(session)
        return session

    # ------------------------------------------------------------------
    # Session helpers
    # ------------------------------------------------------------------

    async def get_session(self, token: str) -> Session | None:
        return await self.store.get(token)

    async def logout(self, token: str) -> bool:
        return await self.store.remove(token)

    async def _raw_send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send one request; retried by tenacity via ``_send``."""
        return await self._client.request(method, url, **kwargs)
