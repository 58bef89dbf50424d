"""
Theme component ports.

External interfaces for preference persistence and the rendering surface.
"""

from __future__ import annotations

from typing import Protocol

from .models import ThemeApplication


class PreferenceStorePort(Protocol):
    """
    Port for the per-viewer theme preference.

    All operations are idempotent and may raise on network/storage
    failure; the session treats any failure as "no preference".

    Implementations:
    - InMemoryPreferenceStore: dict-backed (dev/tests)
    - SQLitePreferenceStore: theme_preferences table
    """

    async def get_theme_name(self, viewer_id: str) -> str | None:
        """Stored theme name for the viewer, or None."""
        ...

    async def set_theme_name(self, viewer_id: str, theme_name: str) -> None:
        """Store the viewer's theme name."""
        ...

    async def clear(self, viewer_id: str) -> None:
        """Remove the viewer's stored preference."""
        ...


class RenderingSurfacePort(Protocol):
    """
    Port for the surface that displays the active theme.

    apply() replaces the whole active set in one step.
    """

    def apply(self, application: ThemeApplication) -> None:
        ...
