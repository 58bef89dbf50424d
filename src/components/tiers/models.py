"""
Tier component models.

Canonical membership tier ordering and display metadata.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from src.domain.entities import MembershipTier, PlanName


class TierComparison(str, Enum):
    """Result of comparing two tiers."""

    LT = "lt"
    EQ = "eq"
    GT = "gt"


# Lowest first. Position in this tuple is the tier's rank.
TIER_ORDER: tuple[MembershipTier, ...] = ("free", "tier1", "tier2", "tier3")

TIER_RANK: dict[MembershipTier, int] = {tier: rank for rank, tier in enumerate(TIER_ORDER)}

LOWEST_TIER: MembershipTier = TIER_ORDER[0]


@dataclass(frozen=True)
class TierInfo:
    """Public-facing description of a tier."""

    tier: MembershipTier
    plan: PlanName
    name: str
    description: str


DEFAULT_TIER_INFO: dict[MembershipTier, TierInfo] = {
    "free": TierInfo("free", "free", "Free Account", "Basic features and community access"),
    "tier1": TierInfo("tier1", "supporter", "Supporter", "Enhanced features and exclusive content"),
    "tier2": TierInfo(
        "tier2", "pro", "Pro", "Advanced features with Proxihub and Mission Control"
    ),
    "tier3": TierInfo("tier3", "enterprise", "Enterprise", "Ultimate space enthusiast experience"),
}
