"""Path and property matchers for ignore rules.

Pure functions, no regular expressions.  Path patterns are tried in order
and the first match wins:

1. exact string equality;
2. trailing ``*``: the path starts with the pattern minus the ``*``;
3. trailing ``/``: the path starts with the pattern, or the path plus a
   trailing ``/`` does (so ``/root/`` also covers ``/root`` itself);
4. anything else never matches beyond equality.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable

__all__ = ["path_is_ignored", "path_matches", "property_is_ignored"]


def path_matches(path: str, pattern: str) -> bool:
    """Return True if ``path`` is covered by a single ignore ``pattern``."""
    if pattern == path:
        return True
    if pattern.endswith("*"):
        return path.startswith(pattern[:-1])
    if pattern.endswith("/"):
        return path.startswith(pattern) or f"{path}/".startswith(pattern)
    return False


def path_is_ignored(path: str, patterns: Iterable[str]) -> bool:
    """Return True if any of ``patterns`` covers ``path``.

    Example::

        path_is_ignored("/root/child/grandchild", ["/root/*"])   # True
        path_is_ignored("/root", ["/root/"])                     # True
        path_is_ignored("/other/child", ["/root/*"])             # False
    """
    return any(path_matches(path, pattern) for pattern in patterns)


def property_is_ignored(name: str, properties: Collection[str]) -> bool:
    """Return True if ``name`` (an attribute key or tag name) is ignored."""
    return name in properties
