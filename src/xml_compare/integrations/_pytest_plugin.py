"""pytest plugin providing the ``assert_xml_equivalent`` fixture.

Registered through the ``pytest11`` entry point in pyproject.toml, so any
project with xml-compare installed gets the fixture without touching its
conftest.py.  Failures list every diff with its path and both sides.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import pytest

from xml_compare import compare


@pytest.fixture(scope="session")
def assert_xml_equivalent() -> Any:
    """Fixture that returns a callable XML equivalence asserter.

    Usage in tests::

        def test_render(assert_xml_equivalent):
            assert_xml_equivalent(render(), "<a c='C'/>", ignore_properties=["date"])

    Returns:
        A callable ``_assert(actual, expected, ignore_paths=None,
        ignore_properties=None, min_ratio=None) -> None``.  Without
        ``min_ratio`` any diff fails the assertion; with it, only a
        ``match_ratio`` below ``min_ratio`` does.
    """

    def _assert(
        actual: str,
        expected: str,
        ignore_paths: Iterable[str] | None = None,
        ignore_properties: Iterable[str] | None = None,
        min_ratio: float | None = None,
    ) -> None:
        result = compare(expected, actual, ignore_paths, ignore_properties)
        failed = (
            not result.matched if min_ratio is None else result.match_ratio < min_ratio
        )
        if failed:
            lines = [
                f"XML documents not equivalent: match_ratio={result.match_ratio:.4f} "
                f"({result.matched_elements}/{result.total_elements} elements)"
            ]
            if min_ratio is not None:
                lines[0] += f" < min_ratio={min_ratio}"
            lines.extend(
                f"  {diff.kind} at {diff.path}[{diff.position}]: {diff.message} "
                f"(expected={diff.expected!r}, actual={diff.actual!r})"
                for diff in result.diffs
            )
            raise AssertionError("\n".join(lines))

    return _assert
