"""DocumentSource Protocol: how the batch orchestrator obtains documents.

Any class with conformant ``fetch`` and ``authenticate`` coroutines satisfies
the protocol at runtime; no inheritance is required.

Example::

    from xml_compare.protocols import DocumentSource
    from xml_compare.sessions import Session

    class MySource:
        async def fetch(self, url: str, token: str | None = None) -> str:
            return "<doc/>"

        async def authenticate(self, url: str, username: str, password: str) -> Session:
            return Session.create(url, [], ttl=60.0)

    assert isinstance(MySource(), DocumentSource)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from xml_compare.sessions import Session

__all__ = ["DocumentSource"]


@runtime_checkable
class DocumentSource(Protocol):
    """Structural protocol for document sources.

    ``fetch`` must return the document text or raise ``FetchError``;
    ``authenticate`` must return a ``Session`` whose ``token`` is accepted by
    later ``fetch`` calls, or raise ``AuthError``.
    """

    async def fetch(self, url: str, token: str | None = None) -> str: ...

    async def authenticate(self, url: str, username: str, password: str) -> Session: ...
