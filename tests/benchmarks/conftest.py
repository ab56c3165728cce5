"""Deterministic document generators for performance benchmarks.

All generators produce fixed, reproducible documents. No random values.
Three tiers: ~100, ~1,000 and ~10,000 elements.
Each tier provides both "similar" (a few scattered edits) and "dissimilar"
(every leaf edited) pair generators.
"""

from __future__ import annotations

import pytest


def generate_document(
    sections: int,
    items: int,
    *,
    edit_every: int = 0,
    value_prefix: str = "value",
) -> str:
    """Generate ``<catalog>`` with ``sections`` x ``items`` leaf records.

    Every ``edit_every``-th item (when > 0) gets a changed value and
    attribute, so a pair built from the same shape differs predictably.
    """
    parts = ['<?xml version="1.0" encoding="UTF-8"?>', "<catalog>"]
    counter = 0
    for s in range(sections):
        parts.append(f'<section id="s{s}">')
        for i in range(items):
            counter += 1
            edited = edit_every > 0 and counter % edit_every == 0
            value = f"{value_prefix}_{s}_{i}" + ("_edited" if edited else "")
            rev = "2" if edited else "1"
            parts.append(
                f'<item sku="sku-{s}-{i}" rev="{rev}">'
                f"<name>{value}</name><qty>{i % 7}</qty>"
                "</item>"
            )
        parts.append("</section>")
    parts.append("</catalog>")
    return "\n".join(parts)


def _similar(sections: int, items: int) -> tuple[str, str]:
    return (
        generate_document(sections, items),
        generate_document(sections, items, edit_every=10),
    )


def _dissimilar(sections: int, items: int) -> tuple[str, str]:
    return (
        generate_document(sections, items),
        generate_document(sections, items, edit_every=1, value_prefix="other"),
    )


# --- Fixtures for each size tier ---


@pytest.fixture
def pair_100_similar() -> tuple[str, str]:
    """~100 elements: 3 sections x 10 items x 3 elements."""
    return _similar(3, 10)


@pytest.fixture
def pair_100_dissimilar() -> tuple[str, str]:
    return _dissimilar(3, 10)


@pytest.fixture
def pair_1k_similar() -> tuple[str, str]:
    """~1,000 elements: 10 sections x 33 items x 3 elements."""
    return _similar(10, 33)


@pytest.fixture
def pair_1k_dissimilar() -> tuple[str, str]:
    return _dissimilar(10, 33)


@pytest.fixture
def pair_10k_similar() -> tuple[str, str]:
    """~10,000 elements: 50 sections x 67 items x 3 elements."""
    return _similar(50, 67)


@pytest.fixture
def pair_10k_dissimilar() -> tuple[str, str]:
    return _dissimilar(50, 67)
