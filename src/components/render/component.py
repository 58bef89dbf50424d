"""
Render component - gated article rendering.

Walks an article's blocks in document order and produces one output node
per block. Premium blocks are checked against the access component and
replaced by a fixed placeholder when the viewer is not entitled.

Invariants:
- Output length equals input length, order preserved
- Nothing from a denied premium payload is emitted or logged
- Premium inside premium is treated as unauthorized
- One failing block never aborts the article
- No caching: every call re-evaluates every block
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from src.components.access import can_access_tier, check_tier, coerce_viewer
from src.components.tiers import is_tier
from src.domain.blocks import Article, ContentBlock, PremiumBlock, UnknownBlock
from src.domain.entities import Viewer
from src.rules.models import Rules

from ._impl import HTML_EMITTERS, locked_html
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

logger = logging.getLogger(__name__)


# --- Block Rendering ---


def _locked(
    block: PremiumBlock, viewer: Viewer, key: str, config: RenderConfig, reason: str | None = None
) -> LockedNode:
    """Build the placeholder from wrapper metadata and config only."""
    placeholder = config.placeholder
    required = block.required_tier if is_tier(block.required_tier) else None
    if reason is None:
        reason = check_tier(viewer, block.required_tier).reason or "Not available"
    return LockedNode(
        key=key,
        required_tier=required,
        title=block.title or placeholder.title,
        description=block.description or placeholder.description,
        cta_text=placeholder.cta_text,
        cta_url=placeholder.cta_url,
        reason=reason,
    )


def _render_premium(
    block: PremiumBlock, viewer: Viewer, key: str, config: RenderConfig
) -> RenderNode:
    if not can_access_tier(viewer, block.required_tier):
        return _locked(block, viewer, key, config)

    payload = block.payload
    if payload is None:
        # Source redacted it even though the viewer is entitled now
        return _locked(block, viewer, key, config, reason="Content unavailable")
    if isinstance(payload, PremiumBlock):
        logger.warning("Nested premium block at %s; rendering as locked", key)
        return _locked(block, viewer, key, config, reason="Not available")

    return _render(payload, viewer, f"{key}.0", config)


def _render(block: Any, viewer: Viewer, key: str, config: RenderConfig) -> RenderNode:
    if isinstance(block, PremiumBlock):
        return _render_premium(block, viewer, key, config)

    if isinstance(block, UnknownBlock):
        logger.warning("Unknown block type %r at %s; skipping", block.block_type, key)
        return EmptyNode(key=key, reason="unknown_block_type")

    emitter = HTML_EMITTERS.get(type(block))
    if emitter is None:
        logger.warning("Unrenderable block %s at %s; skipping", type(block).__name__, key)
        return EmptyNode(key=key, reason="unknown_block_type")

    return RenderedNode(key=key, block_type=block.type, html=emitter(block, config))


def render_block(
    block: ContentBlock,
    viewer: Any,
    key: str = "0",
    config: RenderConfig | None = None,
) -> RenderNode:
    """
    Render a single block for a viewer.

    Non-premium blocks render without an access check. Premium blocks
    render their payload (keyed "<key>.0") or a LockedNode.
    """
    config = config or RenderConfig()
    viewer = coerce_viewer(viewer)
    try:
        return _render(block, viewer, key, config)
    except Exception as e:
        # Exception text can echo block content, so only the type is logged
        logger.warning("Failed to render block %s (%s); skipping", key, type(e).__name__)
        return EmptyNode(key=key, reason="render_failed")


def _block_key(block: Any, index: int) -> str:
    """Position-based key, unique per article; the block id is appended when present."""
    block_id = getattr(block, "id", None)
    return f"{index}:{block_id}" if block_id else str(index)


def render_article(
    article: Article,
    viewer: Any,
    config: RenderConfig | None = None,
) -> RenderedArticle:
    """
    Render every block of an article in document order.

    Returns exactly len(article.blocks) nodes; locked and skipped blocks
    count as one node each. An empty article renders to no nodes.
    """
    config = config or RenderConfig()
    viewer = coerce_viewer(viewer)
    nodes = tuple(
        render_block(block, viewer, _block_key(block, index), config)
        for index, block in enumerate(article.blocks)
    )
    return RenderedArticle(
        slug=article.slug,
        title=article.title,
        summary=article.summary,
        author=article.author,
        tags=article.tags,
        nodes=nodes,
    )


def to_html(nodes: tuple[RenderNode, ...] | list[RenderNode]) -> str:
    """Join rendered nodes into an HTML fragment."""
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, RenderedNode):
            parts.append(node.html)
        elif isinstance(node, LockedNode):
            parts.append(locked_html(node))
    return "\n".join(part for part in parts if part)


# --- Redaction ---


def _redact_block(block: ContentBlock, viewer: Viewer) -> ContentBlock:
    if not isinstance(block, PremiumBlock) or block.payload is None:
        return block
    if isinstance(block.payload, PremiumBlock) or not can_access_tier(viewer, block.required_tier):
        return replace(block, payload=None)
    return block


def redact_article(article: Article, viewer: Any) -> Article:
    """
    Strip premium payloads the viewer cannot access.

    Used by content sources before an article leaves the server.
    """
    viewer = coerce_viewer(viewer)
    return replace(article, blocks=tuple(_redact_block(b, viewer) for b in article.blocks))


# --- Source Integration ---


def load_and_render(
    source: ContentSourcePort,
    slug: str,
    viewer: Any,
    config: RenderConfig | None = None,
) -> RenderedArticle | None:
    """
    Fetch an article and render it for the viewer.

    Returns None if the article does not exist. Source failures raise
    ContentUnavailableError for the page to handle.
    """
    viewer = coerce_viewer(viewer)
    try:
        article = source.get_article(slug, viewer)
    except Exception as e:
        logger.warning("Content source failed for %r", slug, exc_info=True)
        raise ContentUnavailableError(slug, type(e).__name__) from e

    if article is None:
        return None
    return render_article(redact_article(article, viewer), viewer, config)


# --- Configuration Loader ---


def load_config_from_rules(rules: Rules) -> RenderConfig:
    placeholder = rules.render.locked_placeholder
    return RenderConfig(
        placeholder=LockedPlaceholder(
            title=placeholder.title,
            description=placeholder.description,
            cta_text=placeholder.cta_text,
            cta_url=placeholder.cta_url,
        ),
        embed_allowlist=tuple(
            EmbedRule(provider=e.provider, match=e.match) for e in rules.render.embed_allowlist
        ),
    )
