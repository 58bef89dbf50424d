"""
Render component.

Public API for gated article rendering and server-side redaction.
"""

from .component import (
    load_and_render,
    load_config_from_rules,
    redact_article,
    render_article,
    render_block,
    to_html,
)
from .models import (
    ContentUnavailableError,
    EmbedRule,
    EmptyNode,
    LockedNode,
    LockedPlaceholder,
    RenderConfig,
    RenderedArticle,
    RenderedNode,
    RenderNode,
)
from .ports import ContentSourcePort

__all__ = [
    # Functions
    "load_and_render",
    "load_config_from_rules",
    "redact_article",
    "render_article",
    "render_block",
    "to_html",
    # Models
    "ContentUnavailableError",
    "EmbedRule",
    "EmptyNode",
    "LockedNode",
    "LockedPlaceholder",
    "RenderConfig",
    "RenderedArticle",
    "RenderedNode",
    "RenderNode",
    # Ports
    "ContentSourcePort",
]
