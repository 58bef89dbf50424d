"""
Theme component models.

Session status, results of theme operations and configuration.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from src.domain.entities import MembershipTier, Theme


class ThemeStatus(str, Enum):
    """Theme session lifecycle: loading -> ready | error."""

    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class Denied:
    """
    A set_theme request that was refused.

    The applied theme is unchanged. required_tier is set when an upgrade
    would allow it, None when the theme does not exist.
    """

    theme_name: str
    reason: str
    required_tier: MembershipTier | None = None


@dataclass(frozen=True)
class ThemeApplication:
    """What the rendering surface shows for one active theme."""

    theme_name: str
    css_variables: Mapping[str, str]
    effect_flags: frozenset[str]
    body_class: str | None


@dataclass(frozen=True)
class ThemeListing:
    """A catalog entry as seen by one viewer."""

    theme: Theme
    locked: bool
    reason: str | None = None


@dataclass(frozen=True)
class ThemeConfig:
    """Theme configuration from rules."""

    default_name: str = "default"
    premium_tier: MembershipTier = "tier1"
    preference_timeout_seconds: float = 2.0


# --- Error Types ---


class CatalogError(ValueError):
    """The theme catalog violates its invariants."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid theme catalog: {reason}")


@dataclass(frozen=True)
class PreferenceOutcome:
    """Result of reading the persisted preference (internal to the session)."""

    theme: Theme
    status: ThemeStatus
    source: str = field(default="default")
