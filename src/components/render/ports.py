"""
Render component ports.

External interfaces for article content.
"""

from __future__ import annotations

from typing import Protocol

from src.domain.blocks import Article
from src.domain.entities import Viewer


class ContentSourcePort(Protocol):
    """
    Port for fetching articles (CMS).

    Implementations are expected to redact premium payloads the viewer
    cannot access before returning; the renderer gates again regardless.

    Implementations:
    - InMemoryContentSource: dict-backed source with server-side redaction
    """

    def get_article(self, slug: str, viewer: Viewer) -> Article | None:
        """
        Fetch an article by slug.

        Returns None if no such article. Raises on transport/backend failure.
        """
        ...
