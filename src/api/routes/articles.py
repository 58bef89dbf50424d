"""Gated article rendering."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from src.api.deps import get_content_source, get_render_config, get_viewer
from src.components.render import (
    ContentSourcePort,
    ContentUnavailableError,
    RenderConfig,
    RenderedArticle,
    load_and_render,
    to_html,
)
from src.domain.entities import Viewer

logger = logging.getLogger(__name__)

router = APIRouter()


class ArticleResponse(BaseModel):
    slug: str
    title: str
    summary: str
    author: str
    tags: list[str]
    locked_count: int
    nodes: list[dict[str, Any]]


def _render_or_raise(
    source: ContentSourcePort, slug: str, viewer: Viewer, config: RenderConfig
) -> RenderedArticle:
    try:
        rendered = load_and_render(source, slug, viewer, config)
    except ContentUnavailableError as e:
        logger.warning("Article %r unavailable: %s", e.slug, e.reason)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Content temporarily unavailable",
        ) from e
    if rendered is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Article not found")
    return rendered


@router.get("/{slug}", response_model=ArticleResponse)
def get_article(
    slug: str,
    viewer: Viewer = Depends(get_viewer),
    source: ContentSourcePort = Depends(get_content_source),
    config: RenderConfig = Depends(get_render_config),
) -> ArticleResponse:
    """
    Render an article for the current viewer.

    Premium sections the viewer cannot see come back as locked nodes with
    upgrade copy; their content never leaves the server.
    """
    rendered = _render_or_raise(source, slug, viewer, config)
    return ArticleResponse(**rendered.to_dict())


@router.get("/{slug}/html", response_class=HTMLResponse)
def get_article_html(
    slug: str,
    viewer: Viewer = Depends(get_viewer),
    source: ContentSourcePort = Depends(get_content_source),
    config: RenderConfig = Depends(get_render_config),
) -> HTMLResponse:
    rendered = _render_or_raise(source, slug, viewer, config)
    return HTMLResponse(to_html(rendered.nodes))
