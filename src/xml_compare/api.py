"""Public API functions for xml-compare.

Each call creates a fresh ``XmlComparator`` (or ``BatchOrchestrator``) so no
state survives between calls.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from xml_compare.algorithm.config import IgnoreRules
from xml_compare.batch import BatchOrchestrator
from xml_compare.comparator import XmlComparator
from xml_compare.config import BatchConfig
from xml_compare.models import CompareRequest, UrlCompareRequest
from xml_compare.protocols import DocumentSource
from xml_compare.result import BatchResult, ComparisonResult

__all__ = [
    "compare",
    "compare_urls",
    "is_equivalent",
    "match_ratio",
    "run_batch",
    "run_url_batch",
]


def compare(
    xml1: str,
    xml2: str,
    ignore_paths: Iterable[str] | None = None,
    ignore_properties: Iterable[str] | None = None,
) -> ComparisonResult:
    """Compare two XML documents and return a ComparisonResult.

    Args:
        xml1:              Expected document.
        xml2:              Actual document.
        ignore_paths:      Path patterns (exact, ``prefix*`` or ``prefix/``)
                           whose elements are not compared.
        ignore_properties: Attribute keys or tag names to leave out.

    Returns:
        A ``ComparisonResult`` with matched, match_ratio, diffs,
        total_elements, matched_elements and computation_time_ms populated.

    Raises:
        ValidationError: If either document is empty or not XML-looking.
        ParseError: If either document is malformed.
    """
    rules = IgnoreRules.from_lists(ignore_paths, ignore_properties)
    return XmlComparator().compare(xml1, xml2, rules)


def is_equivalent(
    xml1: str,
    xml2: str,
    ignore_paths: Iterable[str] | None = None,
    ignore_properties: Iterable[str] | None = None,
) -> bool:
    """Return True if the documents compare without a single diff."""
    return compare(xml1, xml2, ignore_paths, ignore_properties).matched


def match_ratio(
    xml1: str,
    xml2: str,
    ignore_paths: Iterable[str] | None = None,
    ignore_properties: Iterable[str] | None = None,
) -> float:
    """Return matched elements over the larger document's element count."""
    return compare(xml1, xml2, ignore_paths, ignore_properties).match_ratio


def run_batch(requests: Sequence[CompareRequest]) -> BatchResult:
    """Compare inline document pairs; bad items become placeholders."""
    return BatchOrchestrator().run_batch(requests)


async def run_url_batch(
    requests: Sequence[UrlCompareRequest | CompareRequest],
    source: DocumentSource | None = None,
    config: BatchConfig | None = None,
) -> BatchResult:
    """Fetch and compare URL pairs concurrently, results in input order.

    Args:
        requests: URL (or inline) comparison requests.
        source:   Document source.  Defaults to a per-call
                  ``HttpDocumentSource``.
        config:   Concurrency bound and per-item timeout.
    """
    return await BatchOrchestrator(source=source, config=config).run_url_batch(
        requests
    )


async def compare_urls(
    request: UrlCompareRequest,
    source: DocumentSource | None = None,
) -> ComparisonResult:
    """Fetch and compare one URL pair; errors propagate."""
    return await BatchOrchestrator(source=source).compare_urls(request)
