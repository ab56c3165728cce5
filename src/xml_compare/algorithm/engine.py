"""DiffEngine: classifies the differences between two flattened documents.

Elements are aligned by ``(path, ordinal)``: the n-th element with a given
structural path in the first document is compared with the n-th element
with that path in the second.  No move or reorder detection is attempted.

Counting:
- ``total_elements`` is the element count of the larger document (not the
  size of the union of both).
- an element of the first document counts as matched when it produced no
  diff, including elements skipped by an ignore rule.

Every applicable diff is reported for an element: its content difference and
each differing, missing and extra attribute.
"""

from __future__ import annotations

from xml_compare.algorithm.config import IgnoreRules
from xml_compare.algorithm.matcher import path_is_ignored, property_is_ignored
from xml_compare.result import (
    AttributeDifferent,
    ComparisonResult,
    ContentDifferent,
    Diff,
    ElementExtra,
    ElementMissing,
    StructureDifferent,
)
from xml_compare.tree.nodes import ElementRecord, FlatDocument

__all__ = ["DiffEngine"]


class DiffEngine:
    """Pure comparison over two resident FlatDocuments.

    Example::

        from xml_compare.tree import flatten

        engine = DiffEngine()
        result = engine.compare(flatten("<a>x</a>"), flatten("<a>y</a>"))
        result.diffs[0].kind       # DiffKind.CONTENT_DIFFERENT
        result.match_ratio         # 0.0
    """

    def compare(
        self,
        doc1: FlatDocument,
        doc2: FlatDocument,
        rules: IgnoreRules | None = None,
    ) -> ComparisonResult:
        """Compare ``doc1`` (expected) against ``doc2`` (actual).

        Args:
            doc1:  Flattened first document.
            doc2:  Flattened second document.
            rules: Ignore rules.  Defaults to no rules.

        Returns:
            A ``ComparisonResult``; ``computation_time_ms`` is left at 0.0 for
            the caller to fill in.
        """
        rules = rules if rules is not None else IgnoreRules()
        diffs: list[Diff] = []
        matched_elements = 0
        total_elements = max(len(doc1), len(doc2))

        for element1 in doc1:
            if self._is_skipped(element1, rules):
                matched_elements += 1
                continue

            element2 = doc2.get(element1.path, element1.ordinal)
            if element2 is None:
                diffs.append(
                    ElementMissing(
                        path=element1.path,
                        position=element1.ordinal,
                        element=repr(element1),
                    )
                )
                continue

            element_diffs = self._element_diffs(element1, element2, rules)
            if element_diffs:
                diffs.extend(element_diffs)
            else:
                matched_elements += 1

        for element2 in doc2:
            if (element2.path, element2.ordinal) in doc1:
                continue
            diffs.append(
                ElementExtra(
                    path=element2.path,
                    position=element2.ordinal,
                    element=repr(element2),
                )
            )

        match_ratio = (
            matched_elements / total_elements if total_elements > 0 else 1.0
        )
        return ComparisonResult(
            matched=not diffs,
            match_ratio=match_ratio,
            diffs=diffs,
            total_elements=total_elements,
            matched_elements=matched_elements,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _is_skipped(element: ElementRecord, rules: IgnoreRules) -> bool:
        """True when an ignore rule removes ``element`` from comparison."""
        return path_is_ignored(element.path, rules.paths) or property_is_ignored(
            element.name, rules.properties
        )

    def _element_diffs(
        self,
        element1: ElementRecord,
        element2: ElementRecord,
        rules: IgnoreRules,
    ) -> list[Diff]:
        """All diffs between two aligned elements, content first."""
        path = element1.path
        position = element1.ordinal
        diffs: list[Diff] = []

        content_ignored = property_is_ignored(
            element1.name, rules.properties
        ) or property_is_ignored(element2.name, rules.properties)
        if not content_ignored and element1.content != element2.content:
            diffs.append(
                ContentDifferent(
                    path=path,
                    position=position,
                    expected=element1.content,
                    actual=element2.content,
                )
            )

        for key, value1 in element1.attributes.items():
            if property_is_ignored(key, rules.properties):
                continue
            value2 = element2.attributes.get(key)
            if value2 != value1:
                diffs.append(
                    AttributeDifferent(
                        path=path,
                        position=position,
                        key=key,
                        expected_value=value1,
                        actual_value=value2,
                    )
                )

        for key, value2 in element2.attributes.items():
            if key in element1.attributes or property_is_ignored(
                key, rules.properties
            ):
                continue
            diffs.append(
                AttributeDifferent(
                    path=path,
                    position=position,
                    key=key,
                    expected_value=None,
                    actual_value=value2,
                )
            )

        # Defensive fallback: paths end in the tag name, so parsed input never
        # aligns two differently named elements.
        if not diffs and element1.name != element2.name:
            diffs.append(
                StructureDifferent(
                    path=path,
                    position=position,
                    expected=repr(element1),
                    actual=repr(element2),
                )
            )

        return diffs
