"""Exception hierarchy for xml-compare.

Every failure raised by the package derives from ``XmlCompareError`` so that
callers (and the batch orchestrator's item boundary) can catch one type.
"""

from __future__ import annotations

__all__ = [
    "AuthError",
    "FetchError",
    "InvalidUrlError",
    "ParseError",
    "ValidationError",
    "XmlCompareError",
]


class XmlCompareError(Exception):
    """Base class for all xml-compare errors."""


class ParseError(XmlCompareError):
    """Malformed XML input rejected by the flattener."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"XML parsing error: {detail}")
        self.detail = detail


class ValidationError(XmlCompareError, ValueError):
    """Input rejected before any parsing or network work."""


class InvalidUrlError(ValidationError):
    """URL without an ``http://`` or ``https://`` scheme."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Invalid URL: {url}")
        self.url = url


class FetchError(XmlCompareError):
    """A document could not be retrieved from its source.

    Attributes:
        url: The URL that failed.
        status_code: HTTP status of the response, or ``None`` when the
            request never produced one (connection error, timeout).
    """

    def __init__(self, url: str, detail: str, status_code: int | None = None) -> None:
        super().__init__(f"Failed to fetch {url}: {detail}")
        self.url = url
        self.status_code = status_code


class AuthError(XmlCompareError):
    """Login against a document source was refused or failed."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Authentication failed: {detail}")
        self.detail = detail
