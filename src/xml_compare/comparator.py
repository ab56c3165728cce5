"""XmlComparator: wires validation + Flattener + DiffEngine into one call.

This is the layer between the raw engine and the public API.  It validates
both payloads, flattens them, runs the engine, and stamps the wall-clock
duration onto the ComparisonResult.

Both documents are parsed fresh on every call; nothing is cached between
comparisons.
"""

from __future__ import annotations

import dataclasses
import logging
import time

from xml_compare.algorithm.config import IgnoreRules
from xml_compare.algorithm.engine import DiffEngine
from xml_compare.models import CompareRequest
from xml_compare.result import ComparisonResult
from xml_compare.tree.builder import Flattener
from xml_compare.validation import validate_xml_content

__all__ = ["XmlComparator"]

logger = logging.getLogger(__name__)


class XmlComparator:
    """Single-comparison orchestrator.

    Example::

        cmp = XmlComparator()
        result = cmp.compare('<a c="C"/>', '<a c="D"/>')
        result.matched                 # False
        result.diffs[0].message        # "Attribute 'c' differs"
    """

    def __init__(self, engine: DiffEngine | None = None) -> None:
        self._engine = engine if engine is not None else DiffEngine()
        self._flattener = Flattener()

    def compare(
        self,
        xml1: str,
        xml2: str,
        rules: IgnoreRules | None = None,
    ) -> ComparisonResult:
        """Compare two XML documents.

        Args:
            xml1:  Expected document.
            xml2:  Actual document.
            rules: Ignore rules.  Defaults to none.

        Returns:
            A ``ComparisonResult`` with ``computation_time_ms`` populated.

        Raises:
            ValidationError: If either payload is empty or obviously not XML.
            ParseError: If either payload is malformed XML.
        """
        t0 = time.perf_counter()

        validate_xml_content(xml1)
        validate_xml_content(xml2)
        doc1 = self._flattener.flatten(xml1)
        doc2 = self._flattener.flatten(xml2)

        result = self._engine.compare(doc1, doc2, rules)

        elapsed_ms = (time.perf_counter() - t0) * 1000.0
        logger.debug(
            "Compared %d/%d elements: %d diffs, ratio %.4f in %.2fms",
            len(doc1),
            len(doc2),
            len(result.diffs),
            result.match_ratio,
            elapsed_ms,
        )
        return dataclasses.replace(result, computation_time_ms=elapsed_ms)

    def compare_request(self, request: CompareRequest) -> ComparisonResult:
        """Compare the documents of an inline ``CompareRequest``."""
        return self.compare(request.xml1, request.xml2, request.rules)
