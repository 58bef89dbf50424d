"""Feature entitlements for the current viewer."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.api.deps import get_feature_table, get_viewer
from src.components.access import FeatureTable, check_feature, feature_report
from src.components.tiers import plan_name_for_tier, tier_display_name
from src.domain.entities import Viewer

router = APIRouter()


class ViewerResponse(BaseModel):
    authenticated: bool
    role: str
    tier: str
    tier_name: str
    plan: str


class FeatureResponse(BaseModel):
    feature: str
    allowed: bool
    required_tier: str | None
    reason: str | None = None


class FeatureReportResponse(BaseModel):
    tier: str
    features: list[FeatureResponse]


@router.get("/me", response_model=ViewerResponse)
def get_me(viewer: Viewer = Depends(get_viewer)) -> ViewerResponse:
    return ViewerResponse(
        authenticated=viewer.is_authenticated,
        role=viewer.role,
        tier=viewer.tier,
        tier_name=tier_display_name(viewer.tier),
        plan=plan_name_for_tier(viewer.tier),
    )


@router.get("/features", response_model=FeatureReportResponse)
def list_features(
    viewer: Viewer = Depends(get_viewer),
    table: FeatureTable = Depends(get_feature_table),
) -> FeatureReportResponse:
    """Every known feature with the viewer's allow flag."""
    return FeatureReportResponse(
        tier=viewer.tier,
        features=[
            FeatureResponse(
                feature=entry.feature,
                allowed=entry.allowed,
                required_tier=entry.required_tier,
            )
            for entry in feature_report(viewer, table)
        ],
    )


@router.get("/features/{feature}", response_model=FeatureResponse)
def get_feature(
    feature: str,
    viewer: Viewer = Depends(get_viewer),
    table: FeatureTable = Depends(get_feature_table),
) -> FeatureResponse:
    """Single feature decision. Unknown features are denied, not 404."""
    decision = check_feature(viewer, feature, table)
    return FeatureResponse(
        feature=feature,
        allowed=decision.allowed,
        required_tier=decision.required_tier,
        reason=decision.reason,
    )
