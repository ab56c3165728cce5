"""Sources subpackage: DocumentSource implementations.

- ``HttpDocumentSource``: httpx-based source with cookie sessions.
- ``StaticDocumentSource``: in-memory source for tests and offline runs.

Both satisfy the ``DocumentSource`` Protocol structurally.
"""

from xml_compare.sources.http import HttpDocumentSource
from xml_compare.sources.static import StaticDocumentSource

__all__ = ["HttpDocumentSource", "StaticDocumentSource"]
