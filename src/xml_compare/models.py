"""Request models consumed by the comparator and the batch orchestrator.

Frozen dataclasses mirroring the wire shapes::

    CompareRequest     {xml1, xml2, ignore_paths?, ignore_properties?}
    UrlCompareRequest  {url1, url2, ignore_paths?, ignore_properties?,
                        credentials?: {username, password}, session_id?}
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from xml_compare.algorithm.config import IgnoreRules
from xml_compare.errors import ValidationError

__all__ = ["CompareRequest", "Credentials", "UrlCompareRequest"]


def _require(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValidationError(f"missing required field '{key}'") from None


def _optional_list(data: Mapping[str, Any], key: str) -> tuple[str, ...]:
    value = data.get(key)
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, list | tuple):
        raise ValidationError(f"'{key}' must be a list of strings")
    return tuple(value)


@dataclass(frozen=True, slots=True)
class Credentials:
    """Username/password pair for a document source login.

    The password never appears in ``repr()``.
    """

    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"


@dataclass(frozen=True, slots=True)
class CompareRequest:
    """Two inline XML documents plus ignore rules."""

    xml1: str
    xml2: str
    ignore_paths: tuple[str, ...] = ()
    ignore_properties: tuple[str, ...] = ()

    @property
    def rules(self) -> IgnoreRules:
        return IgnoreRules.from_lists(self.ignore_paths, self.ignore_properties)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CompareRequest:
        return cls(
            xml1=_require(data, "xml1"),
            xml2=_require(data, "xml2"),
            ignore_paths=_optional_list(data, "ignore_paths"),
            ignore_properties=_optional_list(data, "ignore_properties"),
        )


@dataclass(frozen=True, slots=True)
class UrlCompareRequest:
    """Two document URLs plus ignore rules and optional authentication.

    Attributes:
        credentials: Login used against ``url1`` when no ``session_id`` is
            given.
        session_id: Token of an existing session to reuse.
    """

    url1: str
    url2: str
    ignore_paths: tuple[str, ...] = ()
    ignore_properties: tuple[str, ...] = ()
    credentials: Credentials | None = None
    session_id: str | None = None

    @property
    def rules(self) -> IgnoreRules:
        return IgnoreRules.from_lists(self.ignore_paths, self.ignore_properties)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UrlCompareRequest:
        raw_credentials = data.get("credentials", data.get("auth_credentials"))
        credentials = None
        if raw_credentials is not None:
            credentials = Credentials(
                username=_require(raw_credentials, "username"),
                password=_require(raw_credentials, "password"),
            )
        return cls(
            url1=_require(data, "url1"),
            url2=_require(data, "url2"),
            ignore_paths=_optional_list(data, "ignore_paths"),
            ignore_properties=_optional_list(data, "ignore_properties"),
            credentials=credentials,
            session_id=data.get("session_id"),
        )
