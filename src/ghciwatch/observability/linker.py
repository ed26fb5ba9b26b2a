"""GhciwatchEventLinker: isolated event namespace for ghciwatch observability.

All ghciwatch subscribers register here. Separate from any other
pyventus usage in the process.
"""

from __future__ import annotations

from pyventus.events import EventLinker


class GhciwatchEventLinker(EventLinker):
    """Isolated event namespace for ghciwatch observability."""

    pass
