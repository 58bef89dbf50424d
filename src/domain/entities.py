from collections.abc import Mapping
from types import MappingProxyType
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

# --- Enums / Literals ---
MembershipTier = Literal["free", "tier1", "tier2", "tier3"]
Role = Literal["user", "author", "editor", "admin"]
PlanName = Literal["free", "supporter", "pro", "enterprise"]

TIERS: tuple[MembershipTier, ...] = ("free", "tier1", "tier2", "tier3")
ROLES: tuple[Role, ...] = ("user", "author", "editor", "admin")

# --- Viewer ---

class Viewer(BaseModel):
    """
    The person looking at a page.

    Role and tier are independent axes: role grants operational tooling,
    tier grants paid content and features.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str | None = None
    role: Role = "user"
    tier: MembershipTier = "free"

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None


ANONYMOUS_VIEWER = Viewer()

# --- Themes ---

class Theme(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    display_name: str
    description: str = ""
    css_variables: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    required_tier: MembershipTier = "free"

    @field_validator("css_variables", mode="after")
    @classmethod
    def _freeze_variables(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        # Catalog themes are shared process-wide
        return MappingProxyType(dict(value))

    @field_serializer("css_variables")
    def _serialize_variables(self, value: Mapping[str, str]) -> dict[str, str]:
        return dict(value)

    @property
    def effect_flags(self) -> frozenset[str]:
        """Visual effects switched on by this theme (variables set to "1")."""
        return frozenset(
            key.removeprefix("--") for key, value in self.css_variables.items() if value == "1"
        )

    @property
    def body_class(self) -> str:
        return f"theme-{self.name}"
