"""
Access component.

Public API for tier/feature gating and viewer resolution.
"""

from .component import (
    can_access_feature,
    can_access_tier,
    can_use_tooling,
    check_feature,
    check_tier,
    coerce_viewer,
    feature_report,
    load_feature_table_from_rules,
    load_role_capabilities_from_rules,
    required_tier_for,
    resolve_viewer,
)
from .models import (
    DEFAULT_FEATURE_TABLE,
    DEFAULT_FEATURES,
    DEFAULT_ROLE_CAPABILITIES,
    AccessDecision,
    FeatureAccess,
    FeatureTable,
)
from .ports import IdentityPort

__all__ = [
    # Functions
    "can_access_feature",
    "can_access_tier",
    "can_use_tooling",
    "check_feature",
    "check_tier",
    "coerce_viewer",
    "feature_report",
    "load_feature_table_from_rules",
    "load_role_capabilities_from_rules",
    "required_tier_for",
    "resolve_viewer",
    # Models
    "AccessDecision",
    "DEFAULT_FEATURE_TABLE",
    "DEFAULT_FEATURES",
    "DEFAULT_ROLE_CAPABILITIES",
    "FeatureAccess",
    "FeatureTable",
    # Ports
    "IdentityPort",
]
