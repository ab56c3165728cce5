"""Cheap pre-parse checks for XML payloads and document URLs."""

from __future__ import annotations

from xml_compare.errors import InvalidUrlError, ValidationError

__all__ = ["validate_url", "validate_xml_content"]


def validate_xml_content(xml: str) -> None:
    """Reject empty input and input that cannot be XML at a glance.

    Raises:
        ValidationError: If ``xml`` is blank or does not start with ``<``
            once surrounding whitespace is removed.
    """
    stripped = xml.strip()
    if not stripped:
        raise ValidationError("XML content cannot be empty")
    if not stripped.startswith("<"):
        raise ValidationError("Invalid XML format")


def validate_url(url: str) -> None:
    """Raise ``InvalidUrlError`` unless ``url`` is an http(s) URL."""
    if not url.startswith(("http://", "https://")):
        raise InvalidUrlError(url)
