"""
Theme component.

Public API for the tier-gated theme catalog and per-viewer theme sessions.
"""

from ._impl import CORE_VARIABLES, builtin_themes
from .component import (
    DEFAULT_CATALOG,
    ThemeCatalog,
    ThemeSession,
    application_for,
    build_catalog,
    list_themes,
    list_themes_for,
    load_config_from_rules,
    resolve_initial_theme,
)
from .models import (
    CatalogError,
    Denied,
    ThemeApplication,
    ThemeConfig,
    ThemeListing,
    ThemeStatus,
)
from .ports import PreferenceStorePort, RenderingSurfacePort

__all__ = [
    # Functions
    "application_for",
    "build_catalog",
    "builtin_themes",
    "list_themes",
    "list_themes_for",
    "load_config_from_rules",
    "resolve_initial_theme",
    # Classes
    "ThemeCatalog",
    "ThemeSession",
    # Models
    "CatalogError",
    "CORE_VARIABLES",
    "DEFAULT_CATALOG",
    "Denied",
    "ThemeApplication",
    "ThemeConfig",
    "ThemeListing",
    "ThemeStatus",
    # Ports
    "PreferenceStorePort",
    "RenderingSurfacePort",
]
