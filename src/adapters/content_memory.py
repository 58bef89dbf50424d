"""
In-memory content source.

Satisfies ContentSourcePort. Articles are held in their parsed form and
premium payloads are redacted per viewer before they are returned, the
way the CMS integration is expected to behave.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from src.components.render import ContentSourcePort, redact_article
from src.domain.blocks import Article, parse_article
from src.domain.entities import Viewer

logger = logging.getLogger(__name__)


class InMemoryContentSource:
    def __init__(self, articles: Iterable[Article] = ()) -> None:
        self._articles: dict[str, Article] = {a.slug: a for a in articles}
        self._fail = False

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> InMemoryContentSource:
        return cls(parse_article(record) for record in records)

    @classmethod
    def from_json_file(cls, path: Path) -> InMemoryContentSource:
        """Load a JSON list of article records. A missing file yields an empty source."""
        if not path.exists():
            logger.info("No article file at %s; starting empty", path)
            return cls()
        with open(path) as f:
            records = json.load(f)
        return cls.from_records(records)

    def get_article(self, slug: str, viewer: Viewer) -> Article | None:
        if self._fail:
            raise ConnectionError("content source unavailable")
        article = self._articles.get(slug)
        if article is None:
            return None
        return redact_article(article, viewer)

    def slugs(self) -> list[str]:
        return sorted(self._articles)

    # --- Testing Helpers ---

    def add(self, article: Article) -> None:
        self._articles[article.slug] = article

    def set_failure(self, fail: bool) -> None:
        self._fail = fail


def _verify_protocol_compliance() -> None:
    source: ContentSourcePort = InMemoryContentSource()
    _ = source.get_article("", Viewer())


_verify_protocol_compliance()
