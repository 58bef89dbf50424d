"""
In-memory rendering surface.

Records the active theme application. Server-rendered pages read it to
emit the CSS variables and body classes.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.components.themes import ThemeApplication


@dataclass
class InMemorySurface:
    """Holds exactly one active ThemeApplication."""

    active: ThemeApplication | None = None
    history: list[str] = field(default_factory=list)

    def apply(self, application: ThemeApplication) -> None:
        # Single reference swap: never two themes' flags at once
        self.active = application
        self.history.append(application.theme_name)

    def style_block(self) -> str:
        """A :root rule with the active CSS variables."""
        if self.active is None:
            return ""
        body = "".join(f"{name}:{value};" for name, value in self.active.css_variables.items())
        return f":root{{{body}}}"

    def body_classes(self) -> list[str]:
        if self.active is None:
            return []
        classes = [self.active.body_class] if self.active.body_class else []
        return classes + sorted(self.active.effect_flags)
