"""
Access component - tier and feature gating.

Single decision point for every "can this viewer see/use X" question.

Invariants:
- Pure and deterministic; never raises
- Unknown features are denied (default-deny), never thrown
- Malformed viewers are read as the anonymous viewer (role=user, tier=free)
- Role and tier are orthogonal: roles never unlock tier-gated content
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from src.components.tiers import is_tier, meets, normalize_tier, requirement_reason
from src.domain.entities import ANONYMOUS_VIEWER, ROLES, MembershipTier, Role, Viewer
from src.rules.models import Rules

from .models import (
    DEFAULT_FEATURE_TABLE,
    DEFAULT_ROLE_CAPABILITIES,
    WILDCARD,
    AccessDecision,
    FeatureAccess,
    FeatureTable,
)
from .ports import IdentityPort

logger = logging.getLogger(__name__)


# --- Viewer Normalization ---


def coerce_viewer(raw: Any) -> Viewer:
    """
    Build a Viewer from whatever the identity layer handed us.

    Accepts a Viewer, a mapping or None. Unknown roles become "user" and
    unknown tiers become "free".
    """
    if isinstance(raw, Viewer):
        return raw
    if not isinstance(raw, Mapping):
        return ANONYMOUS_VIEWER

    role = raw.get("role")
    tier = raw.get("tier", raw.get("membershipTier", raw.get("membership_tier")))
    user_id = raw.get("user_id", raw.get("id"))

    return Viewer(
        user_id=str(user_id) if user_id is not None else None,
        role=role if role in ROLES else "user",
        tier=normalize_tier(tier),
    )


# --- Tier Checks ---


def can_access_tier(viewer: Any, required_tier: Any) -> bool:
    """True if the viewer's tier is at or above required_tier."""
    if not is_tier(required_tier):
        # An unrecognized requirement is unreachable
        return False
    return meets(coerce_viewer(viewer).tier, required_tier)


def check_tier(viewer: Any, required_tier: Any) -> AccessDecision:
    if can_access_tier(viewer, required_tier):
        return AccessDecision(allowed=True, required_tier=normalize_tier(required_tier))
    if not is_tier(required_tier):
        return AccessDecision(allowed=False, reason="Not available")
    return AccessDecision(
        allowed=False,
        required_tier=required_tier,
        reason=requirement_reason(required_tier),
    )


# --- Feature Checks ---


def required_tier_for(
    feature: str, table: Mapping[str, MembershipTier] | None = None
) -> MembershipTier | None:
    """Required tier for a feature, or None if the feature is not in the table."""
    table = DEFAULT_FEATURE_TABLE if table is None else table
    if not isinstance(feature, str):
        return None
    return table.get(feature)


def can_access_feature(
    viewer: Any,
    feature: str,
    table: Mapping[str, MembershipTier] | None = None,
) -> bool:
    """
    Check if the viewer may use a named feature.

    Features missing from the table are denied for everyone and logged
    as a configuration gap.
    """
    required = required_tier_for(feature, table)
    if required is None:
        logger.warning("Unknown feature %r requested; denying", feature)
        return False
    return can_access_tier(viewer, required)


def check_feature(
    viewer: Any,
    feature: str,
    table: Mapping[str, MembershipTier] | None = None,
) -> AccessDecision:
    required = required_tier_for(feature, table)
    if required is None:
        logger.warning("Unknown feature %r requested; denying", feature)
        return AccessDecision(allowed=False, reason="Not available")
    return check_tier(viewer, required)


def feature_report(
    viewer: Any, table: Mapping[str, MembershipTier] | None = None
) -> list[FeatureAccess]:
    """Every feature in the table with the viewer's allow flag, sorted by name."""
    table = DEFAULT_FEATURE_TABLE if table is None else table
    return [
        FeatureAccess(feature=name, required_tier=required, allowed=can_access_tier(viewer, required))
        for name, required in sorted(table.items())
    ]


# --- Role Checks ---


def can_use_tooling(
    viewer: Any,
    capability: str,
    roles: Mapping[Role, frozenset[str]] | None = None,
) -> bool:
    """
    Check an operational capability (authoring, moderation, admin).

    Supports "*" and scoped wildcards ("articles:*").
    """
    roles = DEFAULT_ROLE_CAPABILITIES if roles is None else roles
    allowed = roles.get(coerce_viewer(viewer).role, frozenset())
    if WILDCARD in allowed or capability in allowed:
        return True
    if ":" in capability:
        scope = capability.split(":")[0]
        if f"{scope}:*" in allowed:
            return True
    return False


# --- Identity ---


def resolve_viewer(identity: IdentityPort | None, session_token: str | None) -> Viewer:
    """
    Look up the viewer for a session token.

    Missing tokens, unknown sessions and lookup failures all produce the
    anonymous viewer so public content still renders.
    """
    if identity is None or not session_token:
        return ANONYMOUS_VIEWER
    try:
        found = identity.lookup(session_token)
    except Exception:
        logger.warning("Viewer lookup failed; treating as anonymous", exc_info=True)
        return ANONYMOUS_VIEWER
    return coerce_viewer(found)


# --- Configuration Loader ---


def load_feature_table_from_rules(rules: Rules) -> FeatureTable:
    return FeatureTable(rules.features)


def load_role_capabilities_from_rules(rules: Rules) -> dict[Role, frozenset[str]]:
    return {role: frozenset(caps) for role, caps in rules.roles.items()}
