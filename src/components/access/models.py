"""
Access component models.

Feature table, role capability table and access decisions.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from src.domain.entities import MembershipTier, Role

# --- Feature Table ---

DEFAULT_FEATURES: dict[str, MembershipTier] = {
    # Free tools stay open to everyone, including paid viewers
    "space_fact_generator": "free",
    "mission_generator": "free",
    "planet_generator": "free",
    "quiz_generator": "free",
    "word_generator": "free",
    "color_palette": "free",
    "delta_v_calculator": "free",
    "distance_calculator": "free",
    "astrophysics_playground": "free",
    "newsletter": "free",
    "comments": "free",
    # Supporter
    "premium_themes": "tier1",
    "no_ads": "tier1",
    "profile_customization": "tier1",
    "custom_art_upload": "tier1",
    "proxihub_basic": "tier1",
    "mission_control_basic": "tier1",
    "exclusive_articles": "tier1",
    # Pro
    "proxihub_advanced": "tier2",
    "mission_control_advanced": "tier2",
    # Enterprise
    "comment_boosting": "tier3",
    "work_in_progress": "tier3",
    "special_badge": "tier3",
    "priority_comments": "tier3",
}


class FeatureTable(Mapping[str, MembershipTier]):
    """
    Immutable feature -> required tier mapping.

    Lookups are case-sensitive exact matches. Built once at boot.
    """

    def __init__(self, entries: Mapping[str, MembershipTier] | None = None) -> None:
        source = DEFAULT_FEATURES if entries is None else entries
        self._entries: Mapping[str, MembershipTier] = MappingProxyType(dict(source))

    def __getitem__(self, feature: str) -> MembershipTier:
        return self._entries[feature]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"FeatureTable({dict(self._entries)!r})"


DEFAULT_FEATURE_TABLE = FeatureTable()


# --- Role Capabilities ---

WILDCARD = "*"

DEFAULT_ROLE_CAPABILITIES: dict[Role, frozenset[str]] = {
    "admin": frozenset([WILDCARD]),
    "editor": frozenset(["articles:edit", "articles:publish", "comments:moderate"]),
    "author": frozenset(["articles:write"]),
    "user": frozenset(),
}


# --- Decisions ---


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of an access check, with a viewer-facing reason."""

    allowed: bool
    required_tier: MembershipTier | None = None
    reason: str | None = None


@dataclass(frozen=True)
class FeatureAccess:
    """One row of a viewer's feature report."""

    feature: str
    required_tier: MembershipTier
    allowed: bool
