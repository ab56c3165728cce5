"""xml-compare - structural and content comparison of XML documents."""

from __future__ import annotations

import logging

from xml_compare.algorithm import DiffEngine, IgnoreRules
from xml_compare.api import (
    compare,
    compare_urls,
    is_equivalent,
    match_ratio,
    run_batch,
    run_url_batch,
)
from xml_compare.batch import BatchOrchestrator
from xml_compare.comparator import XmlComparator
from xml_compare.config import BatchConfig, SourceConfig
from xml_compare.errors import (
    AuthError,
    FetchError,
    InvalidUrlError,
    ParseError,
    ValidationError,
    XmlCompareError,
)
from xml_compare.models import CompareRequest, Credentials, UrlCompareRequest
from xml_compare.protocols import DocumentSource
from xml_compare.result import BatchResult, ComparisonResult, DiffKind
from xml_compare.sessions import Session, SessionStore
from xml_compare.sources import HttpDocumentSource, StaticDocumentSource

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__: str = "0.1.0"
__all__: list[str] = [
    "AuthError",
    "BatchConfig",
    "BatchOrchestrator",
    "BatchResult",
    "CompareRequest",
    "ComparisonResult",
    "Credentials",
    "DiffEngine",
    "DiffKind",
    "DocumentSource",
    "FetchError",
    "HttpDocumentSource",
    "IgnoreRules",
    "InvalidUrlError",
    "ParseError",
    "Session",
    "SessionStore",
    "SourceConfig",
    "StaticDocumentSource",
    "UrlCompareRequest",
    "ValidationError",
    "XmlCompareError",
    "XmlComparator",
    "compare",
    "compare_urls",
    "is_equivalent",
    "match_ratio",
    "run_batch",
    "run_url_batch",
]
