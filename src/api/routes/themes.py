"""Theme catalog and per-viewer theme selection."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from src.api.deps import get_catalog, get_theme_session, get_viewer
from src.components.themes import (
    Denied,
    ThemeCatalog,
    ThemeSession,
    application_for,
    list_themes_for,
)
from src.domain.entities import Theme, Viewer

router = APIRouter()


# --- Schemas ---


class ThemeResponse(BaseModel):
    name: str
    display_name: str
    description: str
    required_tier: str
    css_variables: dict[str, str]
    locked: bool = False
    reason: str | None = None


class ThemeListResponse(BaseModel):
    default: str
    themes: list[ThemeResponse]


class AppliedThemeResponse(BaseModel):
    """The theme a page should apply, with its surface state."""

    theme: ThemeResponse
    status: str
    body_class: str | None
    effect_flags: list[str]


class SetThemeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    theme_name: str = Field(alias="themeName")


def _theme_response(theme: Theme, locked: bool = False, reason: str | None = None) -> ThemeResponse:
    return ThemeResponse(
        name=theme.name,
        display_name=theme.display_name,
        description=theme.description,
        required_tier=theme.required_tier,
        css_variables=dict(theme.css_variables),
        locked=locked,
        reason=reason,
    )


def _applied(session: ThemeSession, theme: Theme) -> AppliedThemeResponse:
    application = application_for(theme, session.catalog)
    return AppliedThemeResponse(
        theme=_theme_response(theme),
        status=session.status.value,
        body_class=application.body_class,
        effect_flags=sorted(application.effect_flags),
    )


# --- Endpoints ---


@router.get("", response_model=ThemeListResponse)
def list_themes(
    viewer: Viewer = Depends(get_viewer),
    catalog: ThemeCatalog = Depends(get_catalog),
) -> ThemeListResponse:
    """List every theme; premium themes the viewer cannot use are marked locked."""
    return ThemeListResponse(
        default=catalog.default.name,
        themes=[
            _theme_response(entry.theme, entry.locked, entry.reason)
            for entry in list_themes_for(viewer, catalog)
        ],
    )


@router.get("/current", response_model=AppliedThemeResponse)
async def current_theme(
    session: ThemeSession = Depends(get_theme_session),
) -> AppliedThemeResponse:
    """Resolve the viewer's starting theme (stored preference or default)."""
    theme = await session.resolve_initial_theme()
    return _applied(session, theme)


@router.post("/set", response_model=AppliedThemeResponse)
async def set_theme(
    body: SetThemeRequest,
    session: ThemeSession = Depends(get_theme_session),
) -> AppliedThemeResponse:
    """
    Switch the viewer's theme.

    403 with the upgrade reason when the viewer's tier is too low,
    404 when the theme does not exist.
    """
    result = await session.set_theme(body.theme_name)
    if isinstance(result, Denied):
        detail: dict[str, Any] = {"theme": result.theme_name, "reason": result.reason}
        if result.required_tier is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
        detail["required_tier"] = result.required_tier
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
    return _applied(session, result)


@router.post("/reset", response_model=AppliedThemeResponse)
async def reset_theme(
    session: ThemeSession = Depends(get_theme_session),
) -> AppliedThemeResponse:
    theme = await session.reset_theme()
    return _applied(session, theme)
