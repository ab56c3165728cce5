"""End-to-end tests through the package's top-level exports."""

from __future__ import annotations

import asyncio

import httpx
import pytest

import xml_compare
from xml_compare import (
    BatchConfig,
    CompareRequest,
    ComparisonResult,
    Credentials,
    DiffKind,
    SessionStore,
    SourceConfig,
    UrlCompareRequest,
    XmlCompareError,
)
from xml_compare.result import ElementExtra
from xml_compare.sources import HttpDocumentSource

EXPECTED = """\
<?xml version="1.0" encoding="UTF-8"?>
<order id="42" created="2024-01-01T00:00:00Z">
  <customer>ACME</customer>
  <line sku="A-1"><qty>2</qty></line>
  <line sku="B-7"><qty>1</qty></line>
  <audit><by>batch</by></audit>
</order>
"""

ACTUAL = """\
<?xml version="1.0" encoding="UTF-8"?>
<order created="2024-06-30T12:00:00Z" id="42">
  <customer>ACME</customer>
  <line sku="A-1"><qty>2</qty></line>
  <line sku="B-7"><qty>3</qty></line>
  <audit><by>cron</by><at>noon</at></audit>
</order>
"""


class TestEndToEnd:
    def test_raw_comparison(self) -> None:
        result = xml_compare.compare(EXPECTED, ACTUAL)
        kinds = [d.kind for d in result.diffs]
        assert kinds == [
            DiffKind.ATTRIBUTE_DIFFERENT,
            DiffKind.CONTENT_DIFFERENT,
            DiffKind.CONTENT_DIFFERENT,
            DiffKind.ELEMENT_EXTRA,
        ]
        qty = result.diffs[1]
        assert (qty.path, qty.position) == ("/order/line/qty", 1)

    def test_with_ignore_rules(self) -> None:
        result = xml_compare.compare(
            EXPECTED,
            ACTUAL,
            ignore_paths=["/order/audit/"],
            ignore_properties=["created"],
        )
        assert [d.path for d in result.diffs] == ["/order/line/qty", "/order/audit/at"]
        assert isinstance(result.diffs[1], ElementExtra)
        assert result.total_elements == 9
        assert result.matched_elements == 7

    def test_to_dict_shape(self) -> None:
        payload = xml_compare.compare(EXPECTED, ACTUAL).to_dict()
        assert set(payload) == {
            "matched",
            "match_ratio",
            "diffs",
            "total_elements",
            "matched_elements",
        }
        assert payload["diffs"][0]["message"] == "Attribute 'created' differs"

    def test_errors_share_a_base(self) -> None:
        with pytest.raises(XmlCompareError):
            xml_compare.compare("", "<a/>")
        with pytest.raises(XmlCompareError):
            xml_compare.compare("<a>", "<a/>")

    def test_batch_from_dicts(self) -> None:
        payloads = [
            {"xml1": EXPECTED, "xml2": EXPECTED},
            {"xml1": EXPECTED, "xml2": ACTUAL, "ignore_properties": ["created"]},
        ]
        batch = xml_compare.run_batch([CompareRequest.from_dict(p) for p in payloads])
        assert batch.results[0].matched
        assert not batch.results[1].matched
        assert batch.successful == 2


class TestHttpBatch:
    def test_authenticated_batch_over_http(self) -> None:
        pages = {"/expected.xml": EXPECTED, "/actual.xml": ACTUAL}

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/login":
                return httpx.Response(200, headers={"set-cookie": "sid=s1"})
            if request.headers.get("cookie") != "sid=s1":
                return httpx.Response(401)
            body = pages.get(request.url.path)
            return httpx.Response(404) if body is None else httpx.Response(200, text=body)

        async def scenario() -> list[ComparisonResult]:
            store = SessionStore()
            client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
            async with client:
                source = HttpDocumentSource(
                    store=store, config=SourceConfig(timeout=5.0), client=client
                )
                session = await source.authenticate(
                    "https://docs.test/login", "test", "password"
                )
                requests = [
                    UrlCompareRequest(
                        "https://docs.test/expected.xml",
                        "https://docs.test/actual.xml",
                        ignore_paths=("/order/audit/",),
                        ignore_properties=("created",),
                        session_id=session.token,
                    ),
                    UrlCompareRequest(
                        "https://docs.test/login",
                        "https://docs.test/expected.xml",
                        credentials=Credentials("test", "password"),
                    ),
                    UrlCompareRequest(
                        "https://docs.test/expected.xml",
                        "https://docs.test/nope.xml",
                        session_id=session.token,
                    ),
                ]
                batch = await xml_compare.run_url_batch(
                    requests, source=source, config=BatchConfig(max_concurrency=2)
                )
            assert batch.failed == 2
            return batch.results

        results = asyncio.run(scenario())
        assert results[0].match_ratio == pytest.approx(7 / 9)
        assert results[1] == ComparisonResult.placeholder()
        assert results[2] == ComparisonResult.placeholder()
