"""ElementRecord and FlatDocument: the flattened XML element model.

A FlatDocument is an arena of ElementRecords in document order plus an index
from structural path to arena positions.  Structural paths carry no sibling
index, so repeated sibling tags share a path; the ``ordinal`` of a record
(its rank among records with the same path) keeps every element addressable.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

__all__ = ["ElementRecord", "FlatDocument"]


@dataclass(slots=True)
class ElementRecord:
    """One XML element, detached from its children.

    Attributes:
        name:       Tag name, including any namespace prefix (``ns:tag``).
        attributes: Attribute key -> value.  Namespace declarations are not
                    attributes.
        content:    Last non-blank text run of the element, trimmed; ``None``
                    when the element holds no text.
        path:       Structural path, e.g. ``"/root/child"``.
        ordinal:    0-based rank among records sharing ``path``, in document
                    order.
    """

    name: str
    attributes: dict[str, str] = field(default_factory=dict)
    content: str | None = None
    path: str = ""
    ordinal: int = 0


@dataclass(slots=True)
class FlatDocument:
    """Arena of ElementRecords addressed by ``(path, ordinal)``.

    Example::

        doc = FlatDocument()
        doc.add(ElementRecord(name="a", path="/a"))
        doc.get("/a")          # ElementRecord(name='a', ...)
        doc.get("/a", 1)       # None
    """

    elements: list[ElementRecord] = field(default_factory=list)
    index: dict[str, list[int]] = field(default_factory=dict)

    def add(self, record: ElementRecord) -> ElementRecord:
        """Append ``record``, assigning its ordinal from the path index."""
        slots = self.index.setdefault(record.path, [])
        record.ordinal = len(slots)
        slots.append(len(self.elements))
        self.elements.append(record)
        return record

    def get(self, path: str, ordinal: int = 0) -> ElementRecord | None:
        """Return the record at ``(path, ordinal)``, or None if absent."""
        slots = self.index.get(path)
        if slots is None or ordinal >= len(slots):
            return None
        return self.elements[slots[ordinal]]

    def __contains__(self, key: object) -> bool:
        if isinstance(key, tuple):
            path, ordinal = key
            return self.get(path, ordinal) is not None
        return key in self.index

    def __iter__(self) -> Iterator[ElementRecord]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def paths(self) -> list[str]:
        """Distinct structural paths in first-seen order."""
        return list(self.index)
