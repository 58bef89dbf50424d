"""
Article content blocks.

A closed set of block variants. Anything the parser does not recognize
becomes an UnknownBlock so a single bad block never breaks an article.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal, Union

from src.domain.entities import MembershipTier

BlockType = Literal[
    "paragraph",
    "heading",
    "image",
    "quote",
    "code",
    "list",
    "embed",
    "callout",
    "divider",
    "premium",
]


@dataclass(frozen=True)
class ParagraphBlock:
    type: ClassVar[BlockType] = "paragraph"
    text: str
    id: str | None = None


@dataclass(frozen=True)
class HeadingBlock:
    type: ClassVar[BlockType] = "heading"
    text: str
    level: int = 2
    id: str | None = None


@dataclass(frozen=True)
class ImageBlock:
    type: ClassVar[BlockType] = "image"
    url: str
    alt: str = ""
    caption: str = ""
    id: str | None = None


@dataclass(frozen=True)
class QuoteBlock:
    type: ClassVar[BlockType] = "quote"
    text: str
    cite: str = ""
    id: str | None = None


@dataclass(frozen=True)
class CodeBlock:
    type: ClassVar[BlockType] = "code"
    code: str
    language: str = ""
    id: str | None = None


@dataclass(frozen=True)
class ListBlock:
    type: ClassVar[BlockType] = "list"
    items: tuple[str, ...] = ()
    ordered: bool = False
    id: str | None = None


@dataclass(frozen=True)
class EmbedBlock:
    type: ClassVar[BlockType] = "embed"
    url: str
    provider: str = ""
    id: str | None = None


@dataclass(frozen=True)
class CalloutBlock:
    type: ClassVar[BlockType] = "callout"
    text: str
    title: str = ""
    tone: str = "info"
    id: str | None = None


@dataclass(frozen=True)
class DividerBlock:
    type: ClassVar[BlockType] = "divider"
    id: str | None = None


@dataclass(frozen=True)
class PremiumBlock:
    """
    Wraps exactly one block behind a tier threshold.

    payload is None when the content source already redacted it.
    """

    type: ClassVar[BlockType] = "premium"
    payload: ContentBlock | None = None
    required_tier: MembershipTier = "tier1"
    title: str = ""
    description: str = ""
    id: str | None = None


@dataclass(frozen=True)
class UnknownBlock:
    """A block whose type is outside the closed set (or could not be parsed)."""

    block_type: str
    id: str | None = None


ContentBlock = Union[
    ParagraphBlock,
    HeadingBlock,
    ImageBlock,
    QuoteBlock,
    CodeBlock,
    ListBlock,
    EmbedBlock,
    CalloutBlock,
    DividerBlock,
    PremiumBlock,
    UnknownBlock,
]


# --- Article ---


@dataclass(frozen=True)
class Article:
    """Ordered blocks plus tier-independent metadata. Block order is significant."""

    slug: str
    title: str
    blocks: tuple[ContentBlock, ...] = ()
    id: str | None = None
    summary: str = ""
    author: str = ""
    tags: tuple[str, ...] = field(default_factory=tuple)


# --- Parsing ---


def _str(data: Mapping[str, Any], key: str, default: str = "") -> str:
    value = data.get(key, default)
    if value is None:
        return default
    if not isinstance(value, (str, int, float)):
        raise ValueError(f"Field '{key}' must be text")
    return str(value)


def _block_id(data: Mapping[str, Any]) -> str | None:
    value = data.get("id")
    return None if value is None else str(value)


def _parse_list_items(data: Mapping[str, Any]) -> tuple[str, ...]:
    items = data.get("items", [])
    if not isinstance(items, (list, tuple)):
        raise ValueError("Field 'items' must be a list")
    return tuple(str(item) for item in items)


def _parse_premium(data: Mapping[str, Any]) -> PremiumBlock:
    raw_payload = data.get("payload", data.get("content"))
    payload = None if raw_payload is None else parse_block(raw_payload)
    required = data.get("required_tier", data.get("requiredTier", "tier1"))
    return PremiumBlock(
        payload=payload,
        # Kept verbatim; unknown thresholds are denied at render time
        required_tier=required,
        title=_str(data, "title"),
        description=_str(data, "description"),
        id=_block_id(data),
    )


def parse_block(data: Any) -> ContentBlock:
    """
    Build a block variant from its JSON form ({"type": ..., ...}).

    Never raises: unknown or malformed blocks come back as UnknownBlock.
    """
    if not isinstance(data, Mapping):
        return UnknownBlock(block_type="<invalid>")

    block_type = data.get("type")
    block_id = _block_id(data)

    try:
        if block_type == "paragraph":
            return ParagraphBlock(text=_str(data, "text"), id=block_id)
        if block_type == "heading":
            level = int(data.get("level", 2))
            return HeadingBlock(text=_str(data, "text"), level=min(max(level, 1), 6), id=block_id)
        if block_type == "image":
            return ImageBlock(
                url=_str(data, "url"),
                alt=_str(data, "alt"),
                caption=_str(data, "caption"),
                id=block_id,
            )
        if block_type == "quote":
            return QuoteBlock(text=_str(data, "text"), cite=_str(data, "cite"), id=block_id)
        if block_type == "code":
            return CodeBlock(code=_str(data, "code"), language=_str(data, "language"), id=block_id)
        if block_type == "list":
            return ListBlock(
                items=_parse_list_items(data), ordered=bool(data.get("ordered")), id=block_id
            )
        if block_type == "embed":
            return EmbedBlock(url=_str(data, "url"), provider=_str(data, "provider"), id=block_id)
        if block_type == "callout":
            return CalloutBlock(
                text=_str(data, "text"),
                title=_str(data, "title"),
                tone=_str(data, "tone", "info"),
                id=block_id,
            )
        if block_type == "divider":
            return DividerBlock(id=block_id)
        if block_type == "premium":
            return _parse_premium(data)
    except (TypeError, ValueError):
        return UnknownBlock(block_type=str(block_type), id=block_id)

    return UnknownBlock(block_type=str(block_type), id=block_id)


def parse_article(data: Mapping[str, Any]) -> Article:
    """Build an Article from its JSON form; blocks keep their input order."""
    raw_blocks = data.get("blocks", data.get("content", [])) or []
    tags = data.get("tags") or []
    return Article(
        slug=str(data["slug"]),
        title=str(data.get("title", "")),
        blocks=tuple(parse_block(raw) for raw in raw_blocks),
        id=None if data.get("id") is None else str(data["id"]),
        summary=str(data.get("summary", "") or ""),
        author=str(data.get("author", "") or ""),
        tags=tuple(str(tag) for tag in tags),
    )


# --- Serialization ---


def block_to_dict(block: ContentBlock) -> dict[str, Any]:
    """JSON form of a block, the inverse of parse_block for known variants."""
    if isinstance(block, UnknownBlock):
        out: dict[str, Any] = {"type": block.block_type}
    elif isinstance(block, PremiumBlock):
        out = {
            "type": "premium",
            "required_tier": block.required_tier,
            "title": block.title,
            "description": block.description,
            "payload": None if block.payload is None else block_to_dict(block.payload),
        }
    else:
        out = {"type": block.type}
        for name, value in vars(block).items():
            if name == "id":
                continue
            out[name] = list(value) if isinstance(value, tuple) else value
    if block.id is not None:
        out["id"] = block.id
    return out
