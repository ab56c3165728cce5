"""IgnoreRules: the path patterns and property names a comparison skips.

IgnoreRules is a frozen (immutable) dataclass.  Path patterns come in three
forms, checked by ``xml_compare.algorithm.matcher.path_is_ignored``:

- exact:            ``/root/child``
- wildcard suffix:  ``/root/*``  (``*`` is only legal as the last character)
- prefix:           ``/root/``
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from xml_compare.errors import ValidationError

__all__ = ["IgnoreRules"]


@dataclass(frozen=True, slots=True)
class IgnoreRules:
    """Immutable ignore configuration for one comparison.

    Attributes:
        paths: Path patterns.  Elements whose structural path matches any
            pattern produce no diffs and still count as matched.
        properties: Names matched against attribute keys (the attribute is
            skipped) and against tag names (the whole element is skipped).
    """

    paths: tuple[str, ...] = ()
    properties: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        for pattern in self.paths:
            if not isinstance(pattern, str):
                msg = f"ignore path patterns must be strings, got {pattern!r}"
                raise ValidationError(msg)
            if "*" in pattern[:-1]:
                msg = f"'*' is only supported at the end of a pattern, got {pattern!r}"
                raise ValidationError(msg)
        for name in self.properties:
            if not isinstance(name, str):
                msg = f"ignore property names must be strings, got {name!r}"
                raise ValidationError(msg)

    @classmethod
    def from_lists(
        cls,
        paths: Iterable[str] | None = None,
        properties: Iterable[str] | None = None,
    ) -> IgnoreRules:
        """Build rules from optional request lists (``None`` means empty)."""
        return cls(
            paths=tuple(paths or ()),
            properties=frozenset(properties or ()),
        )

    def __bool__(self) -> bool:
        return bool(self.paths or self.properties)
