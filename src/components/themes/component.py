"""
Theme component - tier-gated theme catalog and per-viewer theme session.

A fixed catalog where every theme carries a required tier, and a session
object that owns the viewer's current theme.

Invariants:
- Exactly one default theme, and it requires no tier
- Exactly one theme is active at a time; switching replaces the whole set
- set_theme/reset_theme apply locally first (last write wins), then persist
- Preference reads are bounded by a timeout and every failure falls back
  to the default theme
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from types import MappingProxyType
from typing import Any

from src.components.access import can_access_tier, check_tier, coerce_viewer
from src.components.tiers import requirement_reason
from src.domain.entities import Theme, Viewer
from src.rules.models import Rules

from ._impl import CORE_VARIABLES, builtin_themes
from .models import (
    CatalogError,
    Denied,
    PreferenceOutcome,
    ThemeApplication,
    ThemeConfig,
    ThemeListing,
    ThemeStatus,
)
from .ports import PreferenceStorePort, RenderingSurfacePort

logger = logging.getLogger(__name__)


# --- Catalog ---


class ThemeCatalog:
    """
    Read-only list of themes.

    Validated on construction; treated as immutable for its lifetime.
    """

    def __init__(self, themes: Iterable[Theme], default_name: str = "default") -> None:
        self._themes = tuple(themes)
        self._by_name = MappingProxyType({t.name: t for t in self._themes})

        if len(self._by_name) != len(self._themes):
            raise CatalogError("theme names must be unique")
        if default_name not in self._by_name:
            raise CatalogError(f"default theme '{default_name}' is missing")

        default = self._by_name[default_name]
        if default.required_tier != "free":
            raise CatalogError("default theme must not require a tier")

        for theme in self._themes:
            missing = set(CORE_VARIABLES) - set(theme.css_variables)
            if missing:
                raise CatalogError(f"theme '{theme.name}' missing variables {sorted(missing)}")

        self._default = default

    @property
    def default(self) -> Theme:
        return self._default

    def list_themes(self) -> tuple[Theme, ...]:
        return self._themes

    def get(self, name: Any) -> Theme | None:
        if not isinstance(name, str):
            return None
        return self._by_name.get(name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._by_name

    def __len__(self) -> int:
        return len(self._themes)


def build_catalog(config: ThemeConfig | None = None) -> ThemeCatalog:
    """Shipped catalog with premium themes gated at config.premium_tier."""
    config = config or ThemeConfig()
    return ThemeCatalog(builtin_themes(config.premium_tier), default_name=config.default_name)


DEFAULT_CATALOG = build_catalog()


def list_themes(catalog: ThemeCatalog | None = None) -> tuple[Theme, ...]:
    return (catalog or DEFAULT_CATALOG).list_themes()


def list_themes_for(viewer: Any, catalog: ThemeCatalog | None = None) -> list[ThemeListing]:
    """Catalog entries with a locked flag for this viewer (theme selector)."""
    catalog = catalog or DEFAULT_CATALOG
    listings = []
    for theme in catalog.list_themes():
        decision = check_tier(viewer, theme.required_tier)
        listings.append(
            ThemeListing(
                theme=theme,
                locked=not decision.allowed,
                reason=None if decision.allowed else decision.reason,
            )
        )
    return listings


def application_for(theme: Theme, catalog: ThemeCatalog) -> ThemeApplication:
    """The full surface state for a theme; the default theme adds no body class."""
    return ThemeApplication(
        theme_name=theme.name,
        css_variables=MappingProxyType(dict(theme.css_variables)),
        effect_flags=theme.effect_flags,
        body_class=None if theme.name == catalog.default.name else theme.body_class,
    )


# --- Session ---


class ThemeSession:
    """
    Current theme for one viewer (or one anonymous visitor).

    Created on page load, mutated only through set_theme/reset_theme,
    dropped when the viewer's session ends.
    """

    def __init__(
        self,
        viewer: Any,
        catalog: ThemeCatalog | None = None,
        store: PreferenceStorePort | None = None,
        surface: RenderingSurfacePort | None = None,
        timeout_seconds: float = 2.0,
    ) -> None:
        self.viewer: Viewer = coerce_viewer(viewer)
        self.catalog = catalog or DEFAULT_CATALOG
        self._store = store
        self._surface = surface
        self._timeout = timeout_seconds
        self._status = ThemeStatus.LOADING
        self._current: Theme | None = None
        # Bumped by every local apply; stale loads check it before applying
        self._generation = 0

    @property
    def status(self) -> ThemeStatus:
        return self._status

    @property
    def current(self) -> Theme | None:
        return self._current

    def _apply(self, theme: Theme, status: ThemeStatus) -> None:
        if self._surface is not None:
            self._surface.apply(application_for(theme, self.catalog))
        self._current = theme
        self._status = status
        self._generation += 1

    async def _load_preference(self) -> PreferenceOutcome:
        default = self.catalog.default
        store, user_id = self._store, self.viewer.user_id
        if store is None or user_id is None:
            return PreferenceOutcome(theme=default, status=ThemeStatus.READY)

        try:
            name = await asyncio.wait_for(store.get_theme_name(user_id), timeout=self._timeout)
        except Exception as e:
            logger.warning(
                "Theme preference fetch failed for viewer %s (%s); using default",
                self.viewer.user_id,
                type(e).__name__,
            )
            return PreferenceOutcome(theme=default, status=ThemeStatus.ERROR, source="store_error")

        if name is None:
            return PreferenceOutcome(theme=default, status=ThemeStatus.READY)

        theme = self.catalog.get(name)
        if theme is None:
            logger.warning("Stored theme %r is not in the catalog; using default", name)
            return PreferenceOutcome(theme=default, status=ThemeStatus.READY)

        if not can_access_tier(self.viewer, theme.required_tier):
            logger.info(
                "Viewer %s no longer entitled to theme %r; using default",
                self.viewer.user_id,
                name,
            )
            return PreferenceOutcome(theme=default, status=ThemeStatus.READY)

        return PreferenceOutcome(theme=theme, status=ThemeStatus.READY, source="preference")

    async def resolve_initial_theme(self) -> Theme:
        """
        Load and apply the viewer's starting theme.

        Uses the stored preference when it exists and the viewer is still
        entitled to it; otherwise the default. Never raises for store
        failures. If set_theme/reset_theme ran while loading, their theme
        is kept.
        """
        generation = self._generation
        outcome = await self._load_preference()

        if self._generation == generation:
            self._apply(outcome.theme, outcome.status)
            logger.debug(
                "Theme session for %s resolved to %r (%s)",
                self.viewer.user_id or "anonymous",
                outcome.theme.name,
                outcome.source,
            )

        return self._current or outcome.theme

    async def set_theme(self, theme_name: Any) -> Theme | Denied:
        """
        Switch to a named theme if the viewer is entitled to it.

        Unknown or locked themes return Denied and leave the applied
        theme untouched. Allowed themes apply immediately, then persist;
        a persistence failure is logged and the applied theme stays.
        """
        theme = self.catalog.get(theme_name)
        if theme is None:
            return Denied(theme_name=str(theme_name), reason="Unknown theme")

        if not can_access_tier(self.viewer, theme.required_tier):
            return Denied(
                theme_name=theme.name,
                reason=requirement_reason(theme.required_tier),
                required_tier=theme.required_tier,
            )

        self._apply(theme, ThemeStatus.READY)
        await self._persist(theme.name)
        return theme

    async def reset_theme(self) -> Theme:
        """Apply the default theme and clear the stored preference. Always succeeds."""
        default = self.catalog.default
        self._apply(default, ThemeStatus.READY)
        await self._clear()
        return default

    async def _persist(self, theme_name: str) -> None:
        store, user_id = self._store, self.viewer.user_id
        if store is None or user_id is None:
            return
        try:
            await asyncio.wait_for(store.set_theme_name(user_id, theme_name), timeout=self._timeout)
        except Exception as e:
            logger.warning(
                "Failed to persist theme %r for viewer %s (%s)",
                theme_name,
                self.viewer.user_id,
                type(e).__name__,
            )

    async def _clear(self) -> None:
        store, user_id = self._store, self.viewer.user_id
        if store is None or user_id is None:
            return
        try:
            await asyncio.wait_for(store.clear(user_id), timeout=self._timeout)
        except Exception as e:
            logger.warning(
                "Failed to clear theme preference for viewer %s (%s)",
                self.viewer.user_id,
                type(e).__name__,
            )


async def resolve_initial_theme(
    viewer: Any,
    catalog: ThemeCatalog | None = None,
    store: PreferenceStorePort | None = None,
    surface: RenderingSurfacePort | None = None,
    timeout_seconds: float = 2.0,
) -> Theme:
    """One-shot resolution without keeping the session around."""
    session = ThemeSession(viewer, catalog, store, surface, timeout_seconds)
    return await session.resolve_initial_theme()


# --- Configuration Loader ---


def load_config_from_rules(rules: Rules) -> ThemeConfig:
    return ThemeConfig(
        default_name=rules.themes.default,
        premium_tier=rules.themes.premium_tier,
        preference_timeout_seconds=rules.themes.preference_timeout_seconds,
    )
