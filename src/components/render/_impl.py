"""
HTML emitters for self-contained blocks.

One function per block variant. All text is escaped; URLs are limited to
http(s); embeds must match the provider allowlist.
"""

from __future__ import annotations

import html
import re
from collections.abc import Callable
from typing import Any
from urllib.parse import urlparse

from src.domain.blocks import (
    CalloutBlock,
    CodeBlock,
    DividerBlock,
    EmbedBlock,
    HeadingBlock,
    ImageBlock,
    ListBlock,
    ParagraphBlock,
    QuoteBlock,
)

from .models import EmbedRule, LockedNode, RenderConfig

_ALLOWED_SCHEMES = ("http", "https")
_CALLOUT_TONES = frozenset(["info", "warning", "success", "danger"])


def _esc(text: str) -> str:
    return html.escape(text, quote=True)


def is_safe_url(url: str) -> bool:
    """Only absolute http(s) URLs are emitted."""
    if not url:
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in _ALLOWED_SCHEMES and bool(parsed.netloc)


def match_embed_provider(url: str, allowlist: tuple[EmbedRule, ...]) -> str | None:
    for rule in allowlist:
        if re.match(rule.match, url):
            return rule.provider
    return None


# --- Emitters ---


def _paragraph(block: ParagraphBlock, config: RenderConfig) -> str:
    return f"<p>{_esc(block.text)}</p>"


def _heading(block: HeadingBlock, config: RenderConfig) -> str:
    level = min(max(block.level, 1), 6)
    return f"<h{level}>{_esc(block.text)}</h{level}>"


def _image(block: ImageBlock, config: RenderConfig) -> str:
    if not is_safe_url(block.url):
        return ""
    img = f'<img src="{_esc(block.url)}" alt="{_esc(block.alt)}" loading="lazy">'
    if block.caption:
        return f"<figure>{img}<figcaption>{_esc(block.caption)}</figcaption></figure>"
    return f"<figure>{img}</figure>"


def _quote(block: QuoteBlock, config: RenderConfig) -> str:
    cite = f"<cite>{_esc(block.cite)}</cite>" if block.cite else ""
    return f"<blockquote><p>{_esc(block.text)}</p>{cite}</blockquote>"


def _code(block: CodeBlock, config: RenderConfig) -> str:
    lang = f' class="language-{_esc(block.language)}"' if block.language else ""
    return f"<pre><code{lang}>{_esc(block.code)}</code></pre>"


def _list(block: ListBlock, config: RenderConfig) -> str:
    tag = "ol" if block.ordered else "ul"
    items = "".join(f"<li>{_esc(item)}</li>" for item in block.items)
    return f"<{tag}>{items}</{tag}>"


def _embed(block: EmbedBlock, config: RenderConfig) -> str:
    if not is_safe_url(block.url):
        return ""
    provider = match_embed_provider(block.url, config.embed_allowlist)
    if provider is None:
        # Not allowlisted: plain link only
        url = _esc(block.url)
        return f'<p><a href="{url}" rel="noopener noreferrer">{url}</a></p>'
    return (
        f'<div class="embed embed-{_esc(provider)}">'
        f'<iframe src="{_esc(block.url)}" loading="lazy" allowfullscreen></iframe>'
        f"</div>"
    )


def _callout(block: CalloutBlock, config: RenderConfig) -> str:
    tone = block.tone if block.tone in _CALLOUT_TONES else "info"
    title = f"<strong>{_esc(block.title)}</strong>" if block.title else ""
    return f'<aside class="callout callout-{tone}">{title}<p>{_esc(block.text)}</p></aside>'


def _divider(block: DividerBlock, config: RenderConfig) -> str:
    return "<hr>"


HTML_EMITTERS: dict[type, Callable[[Any, RenderConfig], str]] = {
    ParagraphBlock: _paragraph,
    HeadingBlock: _heading,
    ImageBlock: _image,
    QuoteBlock: _quote,
    CodeBlock: _code,
    ListBlock: _list,
    EmbedBlock: _embed,
    CalloutBlock: _callout,
    DividerBlock: _divider,
}


def locked_html(node: LockedNode) -> str:
    tier = f' data-required-tier="{_esc(node.required_tier)}"' if node.required_tier else ""
    return (
        f'<div class="locked-block"{tier}>'
        f"<h4>{_esc(node.title)}</h4>"
        f"<p>{_esc(node.description)}</p>"
        f'<p class="locked-reason">{_esc(node.reason)}</p>'
        f'<a href="{_esc(node.cta_url)}">{_esc(node.cta_text)}</a>'
        f"</div>"
    )
