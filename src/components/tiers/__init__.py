"""
Tier component.

Public API for membership tier ordering and tier display metadata.
"""

from .component import (
    compare_tiers,
    is_paid_tier,
    is_tier,
    load_tier_info_from_rules,
    meets,
    normalize_tier,
    plan_name_for_tier,
    requirement_reason,
    tier_description,
    tier_display_name,
    tier_from_plan_name,
    tier_info,
)
from .models import (
    DEFAULT_TIER_INFO,
    LOWEST_TIER,
    TIER_ORDER,
    TIER_RANK,
    TierComparison,
    TierInfo,
)

__all__ = [
    # Functions
    "compare_tiers",
    "is_paid_tier",
    "is_tier",
    "load_tier_info_from_rules",
    "meets",
    "normalize_tier",
    "plan_name_for_tier",
    "requirement_reason",
    "tier_description",
    "tier_display_name",
    "tier_from_plan_name",
    "tier_info",
    # Models
    "DEFAULT_TIER_INFO",
    "LOWEST_TIER",
    "TIER_ORDER",
    "TIER_RANK",
    "TierComparison",
    "TierInfo",
]
