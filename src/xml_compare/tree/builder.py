"""Flattener: converts XML text into a FlatDocument of ElementRecords.

Uses lxml's pull parser as a streaming tokenizer.  Element start events
open a record and push it on the stack of open elements; end events settle
the record's text content and pop the stack.

Structural paths are built during traversal:
- Root is "/{tag}"
- Each level appends "/{tag}" to the parent path (no sibling index)

Text handling mirrors a trimming event tokenizer: each non-blank text run
that belongs to an element (its leading text and the text following each of
its children) is trimmed, and the last run observed wins.  Runs are never
concatenated.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from lxml import etree

from xml_compare.errors import ParseError
from xml_compare.tree.nodes import ElementRecord, FlatDocument

__all__ = ["Flattener", "flatten"]

logger = logging.getLogger(__name__)

_XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"


def _local_name(clark: str) -> tuple[str | None, str]:
    """Split a Clark-notation name ``{uri}local`` into ``(uri, local)``."""
    if clark.startswith("{"):
        uri, local = clark[1:].split("}", 1)
        return uri, local
    return None, clark


def _element_name(element: Any) -> str:
    _, local = _local_name(element.tag)
    return f"{element.prefix}:{local}" if element.prefix else local


def _attributes(element: Any) -> dict[str, str]:
    """Attribute mapping keyed by prefixed names, as written in the source."""
    if not element.attrib:
        return {}
    prefixes = {uri: prefix for prefix, uri in element.nsmap.items() if prefix}
    prefixes[_XML_NAMESPACE] = "xml"
    attributes: dict[str, str] = {}
    for key, value in element.attrib.items():
        uri, local = _local_name(key)
        prefix = prefixes.get(uri) if uri else None
        attributes[f"{prefix}:{local}" if prefix else local] = value
    return attributes


def _last_text_run(element: Any) -> str | None:
    """Return the last non-blank text run owned by ``element``, trimmed."""
    runs = [element.text, *(child.tail for child in element)]
    for run in reversed(runs):
        if run and run.strip():
            return run.strip()
    return None


@dataclass
class Flattener:
    """Parses XML text into a FlatDocument.

    The parser never resolves external entities or touches the network.
    No recovery is attempted: the first lexical error aborts the parse.

    Example::

        doc = Flattener().flatten('<a c="C"><child>hey</child></a>')
        doc.get("/a").attributes       # {"c": "C"}
        doc.get("/a/child").content    # "hey"
    """

    def flatten(self, text: str) -> FlatDocument:
        """Flatten one XML document.

        Args:
            text: The complete XML document.

        Returns:
            A FlatDocument holding one ElementRecord per element.

        Raises:
            ParseError: If the tokenizer rejects the input, or the input holds
                characters UTF-8 cannot encode (lone surrogates).
        """
        parser = etree.XMLPullParser(
            events=("start", "end"),
            encoding="utf-8",
            resolve_entities=False,
            no_network=True,
            load_dtd=False,
        )
        document = FlatDocument()
        stack: list[ElementRecord] = []
        try:
            parser.feed(text.encode("utf-8"))
            self._consume(parser.read_events(), document, stack)
            parser.close()
            self._consume(parser.read_events(), document, stack)
        except (etree.XMLSyntaxError, UnicodeEncodeError) as exc:
            raise ParseError(str(exc)) from exc

        logger.debug("Flattened document into %d elements", len(document))
        return document

    def _consume(
        self,
        events: Iterable[tuple[str, Any]],
        document: FlatDocument,
        stack: list[ElementRecord],
    ) -> None:
        for event, element in events:
            if event == "start":
                name = _element_name(element)
                parent_path = stack[-1].path if stack else ""
                record = document.add(
                    ElementRecord(
                        name=name,
                        attributes=_attributes(element),
                        path=f"{parent_path}/{name}",
                    )
                )
                stack.append(record)
            else:
                record = stack.pop()
                record.content = _last_text_run(element)
                # Children are no longer needed; tails stay for the parent's text.
                element.clear(keep_tail=True)


_flattener = Flattener()


def flatten(text: str) -> FlatDocument:
    """Flatten ``text`` with a shared stateless Flattener."""
    return _flattener.flatten(text)
