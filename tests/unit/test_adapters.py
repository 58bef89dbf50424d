"""
Tests for the in-memory adapters.

Each adapter satisfies its component port and supports the failure
modes the components fall back from.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from src.adapters.content_memory import InMemoryContentSource
from src.adapters.identity_stub import StubIdentityAdapter
from src.adapters.preference_memory import InMemoryPreferenceStore
from src.adapters.surface_memory import InMemorySurface
from src.components.themes import DEFAULT_CATALOG, application_for
from src.domain.blocks import PremiumBlock
from src.domain.entities import Viewer


class TestStubIdentityAdapter:
    def test_known_and_unknown_tokens(self) -> None:
        adapter = StubIdentityAdapter()
        viewer = adapter.add_session("tok", "u-1", role="editor", tier="tier2")

        assert adapter.lookup("tok") == viewer
        assert adapter.lookup("other") is None
        assert adapter.lookup(None) is None

    def test_failure(self) -> None:
        adapter = StubIdentityAdapter()
        adapter.set_failure(True)
        with pytest.raises(ConnectionError):
            adapter.lookup("tok")

        adapter.clear()
        assert adapter.lookup("tok") is None


class TestInMemoryPreferenceStore:
    @pytest.mark.asyncio
    async def test_set_get_clear(self) -> None:
        store = InMemoryPreferenceStore()
        await store.set_theme_name("u", "apollo")
        assert await store.get_theme_name("u") == "apollo"

        await store.clear("u")
        assert await store.get_theme_name("u") is None
        assert store.writes == [("u", "apollo"), ("u", None)]

    @pytest.mark.asyncio
    async def test_failures(self) -> None:
        store = InMemoryPreferenceStore()
        store.set_failure(reads=True, writes=True)
        with pytest.raises(ConnectionError):
            await store.get_theme_name("u")
        with pytest.raises(ConnectionError):
            await store.set_theme_name("u", "apollo")


class TestInMemorySurface:
    def test_apply_replaces_state(self) -> None:
        surface = InMemorySurface()
        assert surface.style_block() == ""
        assert surface.body_classes() == []

        apollo = DEFAULT_CATALOG.get("apollo")
        assert apollo is not None
        surface.apply(application_for(apollo, DEFAULT_CATALOG))
        assert surface.style_block().startswith(":root{--bg-primary:#000000;")
        assert surface.body_classes() == [
            "theme-apollo",
            "crt-effect",
            "mission-control",
            "scan-lines",
        ]

        surface.apply(application_for(DEFAULT_CATALOG.default, DEFAULT_CATALOG))
        assert surface.body_classes() == []
        assert surface.history == ["apollo", "default"]


class TestInMemoryContentSource:
    @pytest.fixture
    def source(self, project_root: Path) -> InMemoryContentSource:
        return InMemoryContentSource.from_json_file(project_root / "content" / "articles.json")

    def test_loads_sample_articles(self, source: InMemoryContentSource) -> None:
        assert source.slugs() == ["artemis-ii-crew-update", "starship-flight-recap"]

    def test_redacts_for_viewer(self, source: InMemoryContentSource) -> None:
        article = source.get_article("artemis-ii-crew-update", Viewer(tier="free"))
        assert article is not None
        premium = [b for b in article.blocks if isinstance(b, PremiumBlock)]
        assert len(premium) == 2
        assert all(b.payload is None for b in premium)

    def test_keeps_payload_for_entitled_viewer(self, source: InMemoryContentSource) -> None:
        article = source.get_article("artemis-ii-crew-update", Viewer(tier="tier1"))
        assert article is not None
        premium = [b for b in article.blocks if isinstance(b, PremiumBlock)]
        assert premium[0].payload is not None
        assert premium[1].payload is None

    def test_missing_article(self, source: InMemoryContentSource) -> None:
        assert source.get_article("nope", Viewer()) is None

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        source = InMemoryContentSource.from_json_file(tmp_path / "missing.json")
        assert source.slugs() == []

    def test_from_records(self, tmp_path: Path) -> None:
        path = tmp_path / "a.json"
        path.write_text(json.dumps([{"slug": "x", "blocks": [{"type": "divider"}]}]))
        source = InMemoryContentSource.from_json_file(path)
        article = source.get_article("x", Viewer())
        assert article is not None
        assert len(article.blocks) == 1

    def test_failure(self) -> None:
        source = InMemoryContentSource()
        source.set_failure(True)
        with pytest.raises(ConnectionError):
            source.get_article("x", Viewer())
