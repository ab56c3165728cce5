"""algorithm subpackage: ignore rules, path matching and the diff engine.

Import from this module (not from sub-modules directly) to stay on the
stable public interface.

Example::

    from xml_compare.algorithm import DiffEngine, IgnoreRules
    from xml_compare.tree import flatten

    rules = IgnoreRules.from_lists(properties=["date"])
    result = DiffEngine().compare(flatten(xml1), flatten(xml2), rules)
"""

from __future__ import annotations

from xml_compare.algorithm.config import IgnoreRules
from xml_compare.algorithm.engine import DiffEngine
from xml_compare.algorithm.matcher import path_is_ignored, property_is_ignored

__all__ = ["DiffEngine", "IgnoreRules", "path_is_ignored", "property_is_ignored"]
