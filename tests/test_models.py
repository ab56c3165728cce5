"""Tests for request models and their dict constructors."""

from __future__ import annotations

import pytest

from xml_compare.algorithm.config import IgnoreRules
from xml_compare.errors import ValidationError
from xml_compare.models import CompareRequest, Credentials, UrlCompareRequest


class TestCredentials:
    def test_repr_hides_password(self) -> None:
        creds = Credentials(username="test", password="s3cret")
        assert "s3cret" not in repr(creds)
        assert "test" in repr(creds)


class TestCompareRequest:
    def test_from_dict_minimal(self) -> None:
        request = CompareRequest.from_dict({"xml1": "<a/>", "xml2": "<b/>"})
        assert request.xml1 == "<a/>"
        assert request.ignore_paths == ()
        assert request.rules == IgnoreRules()

    def test_from_dict_with_rules(self) -> None:
        request = CompareRequest.from_dict(
            {
                "xml1": "<a/>",
                "xml2": "<a/>",
                "ignore_paths": ["/a/*"],
                "ignore_properties": ["date"],
            }
        )
        assert request.rules == IgnoreRules(
            paths=("/a/*",), properties=frozenset({"date"})
        )

    def test_null_lists_are_empty(self) -> None:
        request = CompareRequest.from_dict(
            {"xml1": "<a/>", "xml2": "<a/>", "ignore_paths": None}
        )
        assert request.ignore_paths == ()

    def test_missing_field(self) -> None:
        with pytest.raises(ValidationError, match="'xml2'"):
            CompareRequest.from_dict({"xml1": "<a/>"})

    def test_string_instead_of_list(self) -> None:
        with pytest.raises(ValidationError, match="list of strings"):
            CompareRequest.from_dict(
                {"xml1": "<a/>", "xml2": "<a/>", "ignore_paths": "/a"}
            )

    def test_invalid_pattern_surfaces_from_rules(self) -> None:
        request = CompareRequest("<a/>", "<a/>", ignore_paths=("/a/*/b",))
        with pytest.raises(ValidationError):
            _ = request.rules


class TestUrlCompareRequest:
    def test_from_dict_with_credentials(self) -> None:
        request = UrlCompareRequest.from_dict(
            {
                "url1": "https://a.test/1.xml",
                "url2": "https://a.test/2.xml",
                "credentials": {"username": "test", "password": "password"},
            }
        )
        assert request.credentials == Credentials("test", "password")
        assert request.session_id is None

    def test_auth_credentials_alias(self) -> None:
        request = UrlCompareRequest.from_dict(
            {
                "url1": "https://a.test/1.xml",
                "url2": "https://a.test/2.xml",
                "auth_credentials": {"username": "u", "password": "p"},
            }
        )
        assert request.credentials == Credentials("u", "p")

    def test_session_id(self) -> None:
        request = UrlCompareRequest.from_dict(
            {"url1": "https://a.test/1", "url2": "https://a.test/2", "session_id": "tok"}
        )
        assert request.session_id == "tok"
        assert request.credentials is None

    def test_incomplete_credentials(self) -> None:
        with pytest.raises(ValidationError, match="'password'"):
            UrlCompareRequest.from_dict(
                {
                    "url1": "https://a.test/1",
                    "url2": "https://a.test/2",
                    "credentials": {"username": "u"},
                }
            )

    def test_missing_url(self) -> None:
        with pytest.raises(ValidationError, match="'url2'"):
            UrlCompareRequest.from_dict({"url1": "https://a.test/1"})
