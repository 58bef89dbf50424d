"""
Tier component - membership tier ordering.

Pure functions over the fixed order free < tier1 < tier2 < tier3.

Invariants:
- Comparison is total over recognized tiers
- Unrecognized tier values are read as "free" (fail closed), never raised
"""

from __future__ import annotations

from typing import Any

from src.domain.entities import MembershipTier
from src.rules.models import Rules

from .models import (
    DEFAULT_TIER_INFO,
    LOWEST_TIER,
    TIER_RANK,
    TierComparison,
    TierInfo,
)


def is_tier(value: Any) -> bool:
    """Check whether value is one of the canonical tier ids."""
    return isinstance(value, str) and value in TIER_RANK


def normalize_tier(value: Any) -> MembershipTier:
    """
    Read a tier value from untrusted input.

    Missing, corrupt or unknown values become the lowest tier so they can
    never grant access.
    """
    if is_tier(value):
        return value  # type: ignore[no-any-return]
    return LOWEST_TIER


def compare_tiers(a: Any, b: Any) -> TierComparison:
    """Compare two tiers; unrecognized values compare as "free"."""
    rank_a = TIER_RANK[normalize_tier(a)]
    rank_b = TIER_RANK[normalize_tier(b)]
    if rank_a < rank_b:
        return TierComparison.LT
    if rank_a > rank_b:
        return TierComparison.GT
    return TierComparison.EQ


def meets(user_tier: Any, required_tier: MembershipTier) -> bool:
    """True if user_tier is at or above required_tier."""
    return compare_tiers(user_tier, required_tier) is not TierComparison.LT


def is_paid_tier(tier: Any) -> bool:
    return normalize_tier(tier) != LOWEST_TIER


# --- Display helpers ---


def tier_info(tier: Any, table: dict[MembershipTier, TierInfo] | None = None) -> TierInfo:
    table = table or DEFAULT_TIER_INFO
    return table[normalize_tier(tier)]


def tier_display_name(tier: Any, table: dict[MembershipTier, TierInfo] | None = None) -> str:
    return tier_info(tier, table).name


def tier_description(tier: Any, table: dict[MembershipTier, TierInfo] | None = None) -> str:
    return tier_info(tier, table).description


def plan_name_for_tier(tier: Any, table: dict[MembershipTier, TierInfo] | None = None) -> str:
    """Map a stored tier id to its public plan name (tier1 -> supporter)."""
    return tier_info(tier, table).plan


def tier_from_plan_name(
    plan: Any, table: dict[MembershipTier, TierInfo] | None = None
) -> MembershipTier:
    """Map a public plan name back to the stored tier id; unknown plans are free."""
    table = table or DEFAULT_TIER_INFO
    if is_tier(plan):
        return plan  # type: ignore[no-any-return]
    for info in table.values():
        if info.plan == plan:
            return info.tier
    return LOWEST_TIER


def requirement_reason(
    required_tier: Any, table: dict[MembershipTier, TierInfo] | None = None
) -> str:
    """Human-readable denial reason, e.g. "Requires Pro (tier2)"."""
    tier = normalize_tier(required_tier)
    return f"Requires {tier_display_name(tier, table)} ({tier})"


# --- Configuration Loader ---


def load_tier_info_from_rules(rules: Rules) -> dict[MembershipTier, TierInfo]:
    """Build the display table from rules.yaml."""
    return {
        tier: TierInfo(
            tier=tier,
            plan=display.plan,  # type: ignore[arg-type]
            name=display.name,
            description=display.description,
        )
        for tier, display in rules.tiers.display.items()
    }
