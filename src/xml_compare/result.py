"""Result types for XML comparison output.

This module provides the diff variants, the per-comparison
``ComparisonResult`` and the aggregate ``BatchResult``.

Diffs form a closed union of five frozen dataclasses.  Each variant carries
only the payload relevant to it; consumers dispatch with ``match`` on the
variant class rather than on a kind string.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, ClassVar, TypeAlias, assert_never

__all__ = [
    "AttributeDifferent",
    "BatchResult",
    "ComparisonResult",
    "ContentDifferent",
    "Diff",
    "DiffKind",
    "ElementExtra",
    "ElementMissing",
    "StructureDifferent",
    "diff_to_dict",
]


class DiffKind(StrEnum):
    """Wire names of the five diff variants."""

    ELEMENT_MISSING = "ElementMissing"
    ELEMENT_EXTRA = "ElementExtra"
    ATTRIBUTE_DIFFERENT = "AttributeDifferent"
    CONTENT_DIFFERENT = "ContentDifferent"
    STRUCTURE_DIFFERENT = "StructureDifferent"


@dataclass(frozen=True, slots=True)
class ElementMissing:
    """Element present in the first document only.

    Attributes:
        path:     Structural path of the element.
        position: Ordinal of the element among same-path elements.
        element:  Debug rendering of the first document's element.
    """

    kind: ClassVar[DiffKind] = DiffKind.ELEMENT_MISSING

    path: str
    position: int
    element: str

    @property
    def expected(self) -> str | None:
        return self.element

    @property
    def actual(self) -> str | None:
        return None

    @property
    def message(self) -> str:
        return "Element missing in second XML"


@dataclass(frozen=True, slots=True)
class ElementExtra:
    """Element present in the second document only."""

    kind: ClassVar[DiffKind] = DiffKind.ELEMENT_EXTRA

    path: str
    position: int
    element: str

    @property
    def expected(self) -> str | None:
        return None

    @property
    def actual(self) -> str | None:
        return self.element

    @property
    def message(self) -> str:
        return "Extra element in second XML"


@dataclass(frozen=True, slots=True)
class AttributeDifferent:
    """One attribute that differs, is missing, or is extra.

    ``expected_value`` is None for an attribute only the second document
    has; ``actual_value`` is None for one the second document lacks.
    """

    kind: ClassVar[DiffKind] = DiffKind.ATTRIBUTE_DIFFERENT

    path: str
    position: int
    key: str
    expected_value: str | None
    actual_value: str | None

    @property
    def expected(self) -> str | None:
        if self.expected_value is None:
            return None
        return f"{self.key}={self.expected_value}"

    @property
    def actual(self) -> str | None:
        if self.actual_value is None:
            return None
        return f"{self.key}={self.actual_value}"

    @property
    def message(self) -> str:
        if self.actual_value is None:
            return f"Attribute '{self.key}' missing in second XML"
        if self.expected_value is None:
            return f"Extra attribute '{self.key}' in second XML"
        return f"Attribute '{self.key}' differs"


@dataclass(frozen=True, slots=True)
class ContentDifferent:
    """Text content differs; either side may be absent."""

    kind: ClassVar[DiffKind] = DiffKind.CONTENT_DIFFERENT

    path: str
    position: int
    expected: str | None
    actual: str | None

    @property
    def message(self) -> str:
        return "Content differs"


@dataclass(frozen=True, slots=True)
class StructureDifferent:
    """Fallback for elements that differ in a way no other variant covers."""

    kind: ClassVar[DiffKind] = DiffKind.STRUCTURE_DIFFERENT

    path: str
    position: int
    expected: str | None
    actual: str | None

    @property
    def message(self) -> str:
        return "Element structure differs"


Diff: TypeAlias = (
    ElementMissing
    | ElementExtra
    | AttributeDifferent
    | ContentDifferent
    | StructureDifferent
)


def diff_to_dict(diff: Diff) -> dict[str, Any]:
    """Render a diff in the wire shape ``{path, position, kind, expected, actual, message}``."""
    match diff:
        case ElementMissing() | ElementExtra():
            payload: dict[str, Any] = {}
        case AttributeDifferent(key=key):
            payload = {"key": key}
        case ContentDifferent() | StructureDifferent():
            payload = {}
        case _:
            assert_never(diff)
    return {
        "path": diff.path,
        "position": diff.position,
        "kind": str(diff.kind),
        "expected": diff.expected,
        "actual": diff.actual,
        "message": diff.message,
        **payload,
    }


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    """Result of comparing two XML documents.

    Attributes:
        matched: True iff ``diffs`` is empty.
        match_ratio: ``matched_elements / total_elements`` in [0.0, 1.0];
            1.0 when both documents are empty.
        diffs: Every difference found, in discovery order.
        total_elements: Element count of the larger document.
        matched_elements: Elements of the first document that produced no diff.
        computation_time_ms: Wall-clock duration of the comparison.
    """

    matched: bool
    match_ratio: float
    diffs: list[Diff] = field(default_factory=list)
    total_elements: int = 0
    matched_elements: int = 0
    computation_time_ms: float = 0.0

    @classmethod
    def placeholder(cls) -> ComparisonResult:
        """The zero value substituted for a failed batch item."""
        return cls(matched=False, match_ratio=0.0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "matched": self.matched,
            "match_ratio": self.match_ratio,
            "diffs": [diff_to_dict(d) for d in self.diffs],
            "total_elements": self.total_elements,
            "matched_elements": self.matched_elements,
        }


@dataclass(frozen=True, slots=True)
class BatchResult:
    """Ordered outcome of a batch run.

    Attributes:
        results: One entry per request, in submission order.  Failed items
            hold ``ComparisonResult.placeholder()``.
        total: Number of requests.
        successful: Items that produced a real comparison.
        failed: Items replaced by a placeholder.
        errors: Per-position failure description, ``None`` for successes.
    """

    results: list[ComparisonResult]
    total: int
    successful: int
    failed: int
    errors: list[str | None] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "results": [r.to_dict() for r in self.results],
            "total": self.total,
            "successful": self.successful,
            "failed": self.failed,
        }
