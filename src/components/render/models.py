"""
Render component models.

Output nodes for rendered articles and renderer configuration.

Invariants:
- A LockedNode never carries data from the premium payload it replaces
- One output node per input block
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Literal

from src.domain.entities import MembershipTier

NodeKind = Literal["rendered", "locked", "empty"]


# --- Output Nodes ---


@dataclass(frozen=True)
class RenderedNode:
    """A block rendered in full."""

    key: str
    block_type: str
    html: str
    kind: NodeKind = "rendered"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class LockedNode:
    """Placeholder shown in place of a premium block the viewer cannot see."""

    key: str
    required_tier: MembershipTier | None
    title: str
    description: str
    cta_text: str
    cta_url: str
    reason: str
    kind: NodeKind = "locked"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class EmptyNode:
    """A block that renders to nothing (unknown type or failed block)."""

    key: str
    reason: str
    kind: NodeKind = "empty"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


RenderNode = RenderedNode | LockedNode | EmptyNode


@dataclass(frozen=True)
class RenderedArticle:
    """Output of render_article."""

    slug: str
    title: str
    summary: str
    author: str
    tags: tuple[str, ...]
    nodes: tuple[RenderNode, ...]

    @property
    def locked_count(self) -> int:
        return sum(1 for node in self.nodes if isinstance(node, LockedNode))

    def to_dict(self) -> dict[str, Any]:
        return {
            "slug": self.slug,
            "title": self.title,
            "summary": self.summary,
            "author": self.author,
            "tags": list(self.tags),
            "locked_count": self.locked_count,
            "nodes": [node.to_dict() for node in self.nodes],
        }


# --- Configuration ---


@dataclass(frozen=True)
class LockedPlaceholder:
    """Fixed copy for locked premium blocks."""

    title: str = "Premium Content"
    description: str = "This section is available to members."
    cta_text: str = "View Pricing Plans"
    cta_url: str = "/pricing"


@dataclass(frozen=True)
class EmbedRule:
    provider: str
    match: str


@dataclass(frozen=True)
class RenderConfig:
    """Renderer configuration from rules."""

    placeholder: LockedPlaceholder = field(default_factory=LockedPlaceholder)
    embed_allowlist: tuple[EmbedRule, ...] = (
        EmbedRule("youtube", r"^https://(www\.)?(youtube\.com|youtu\.be)/"),
        EmbedRule("vimeo", r"^https://(player\.)?vimeo\.com/"),
        EmbedRule("twitter", r"^https://(www\.)?(twitter\.com|x\.com)/"),
    )


# --- Error Types ---


class ContentUnavailableError(Exception):
    """The content source could not be reached or failed."""

    def __init__(self, slug: str, reason: str) -> None:
        self.slug = slug
        self.reason = reason
        super().__init__(f"Content '{slug}' unavailable: {reason}")
