from typing import Literal

from pydantic import BaseModel, Field, model_validator

TierName = Literal["free", "tier1", "tier2", "tier3"]
RoleName = Literal["user", "author", "editor", "admin"]


class ProjectRules(BaseModel):
    slug: str
    rules_version: str

class TierDisplay(BaseModel):
    plan: str
    name: str
    description: str

class TierRules(BaseModel):
    order: list[TierName]
    display: dict[TierName, TierDisplay]

    @model_validator(mode="after")
    def _check_order(self) -> "TierRules":
        if self.order != ["free", "tier1", "tier2", "tier3"]:
            raise ValueError("tiers.order must be exactly [free, tier1, tier2, tier3]")
        missing = set(self.order) - set(self.display)
        if missing:
            raise ValueError(f"tiers.display missing entries for: {sorted(missing)}")
        return self

class ThemeRules(BaseModel):
    default: str = "default"
    premium_tier: TierName = "tier1"
    preference_timeout_seconds: float = Field(default=2.0, gt=0)

class LockedPlaceholderRules(BaseModel):
    title: str
    description: str
    cta_text: str
    cta_url: str

class EmbedProvider(BaseModel):
    provider: str
    match: str

class RenderRules(BaseModel):
    locked_placeholder: LockedPlaceholderRules
    embed_allowlist: list[EmbedProvider] = Field(default_factory=list)

class Rules(BaseModel):
    project: ProjectRules
    tiers: TierRules
    features: dict[str, TierName]
    roles: dict[RoleName, list[str]]
    themes: ThemeRules
    render: RenderRules
