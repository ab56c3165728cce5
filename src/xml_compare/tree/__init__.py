"""Tree subpackage for XML-to-flat-path conversion primitives.

Re-exports the public API for the tree module:
- ElementRecord: one element with its attributes, content, path and ordinal
- FlatDocument: arena of ElementRecords indexed by structural path
- Flattener: parses XML text into a FlatDocument
"""

from xml_compare.tree.builder import Flattener, flatten
from xml_compare.tree.nodes import ElementRecord, FlatDocument

__all__ = ["ElementRecord", "FlatDocument", "Flattener", "flatten"]
