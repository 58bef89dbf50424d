"""
Built-in theme catalog data.

Every theme defines the same core palette keys. Extra keys set to "1"
switch on theme-specific visual effects.
"""

from __future__ import annotations

from typing import Any

from src.domain.entities import MembershipTier, Theme

CORE_VARIABLES: tuple[str, ...] = (
    "--bg-primary",
    "--bg-secondary",
    "--bg-tertiary",
    "--text-primary",
    "--text-secondary",
    "--text-muted",
    "--accent-primary",
    "--accent-secondary",
    "--border-primary",
    "--border-secondary",
    "--font-family",
    "--font-weight",
)

_THEME_DATA: list[dict[str, Any]] = [
    {
        "id": 1,
        "name": "default",
        "display_name": "Default",
        "description": "The standard StemSpaceHub theme with modern dark design",
        "palette": (
            "#0D0D17", "#14141E", "#1E1E2D", "#FFFFFF", "#E5E7EB", "#9CA3AF",
            "#8B5CF6", "#7C3AED", "#374151", "#4B5563",
            "Inter, system-ui, sans-serif", "normal",
        ),
        "effects": (),
        "premium": False,
    },
    {
        "id": 2,
        "name": "apollo",
        "display_name": "Apollo-Era Analog Mode",
        "description": (
            "1960s-1970s NASA mission control aesthetic with green CRT monitors and retro tech"
        ),
        "palette": (
            "#000000", "#001100", "#002200", "#00FF00", "#00CC00", "#008800",
            "#00FF00", "#00CC00", "#004400", "#006600",
            "Courier, monospace", "bold",
        ),
        "effects": ("scan-lines", "crt-effect", "mission-control"),
        "premium": True,
    },
    {
        "id": 3,
        "name": "cyberpunk",
        "display_name": "Cyberpunk Space",
        "description": "1980s-1990s futurism with neon grids and synthwave aesthetics",
        "palette": (
            "#0A0A0F", "#1A1A2E", "#16213E", "#FF00FF", "#00FFFF", "#FF69B4",
            "#FF00FF", "#00FFFF", "#FF1493", "#00CED1",
            "Orbitron, monospace", "bold",
        ),
        "effects": ("neon-glow", "glitch-effect", "grid-overlay"),
        "premium": True,
    },
    {
        "id": 4,
        "name": "space-odyssey",
        "display_name": "2001: A Space Odyssey",
        "description": "Stanley Kubrick minimalist aesthetic with HAL 9000 red accents",
        "palette": (
            "#FFFFFF", "#F8F9FA", "#E9ECEF", "#000000", "#212529", "#6C757D",
            "#DC3545", "#C82333", "#DEE2E6", "#CED4DA",
            "Eurostile, Arial, sans-serif", "normal",
        ),
        "effects": ("minimal", "hal-9000"),
        "premium": True,
    },
    {
        "id": 5,
        "name": "alien-computer",
        "display_name": "Alien Computer Interface",
        "description": (
            "Inspired by the Alien movie series computer systems with biomechanical aesthetics"
        ),
        "palette": (
            "#1A0F1A", "#2D1B2D", "#3D273D", "#E6E6FA", "#D8BFD8", "#9370DB",
            "#FF69B4", "#DA70D6", "#4B0082", "#8A2BE2",
            "Consolas, monospace", "normal",
        ),
        "effects": ("biomechanical", "alien-glow", "organic-curves"),
        "premium": True,
    },
    {
        "id": 6,
        "name": "mars-colony",
        "display_name": "Mars Colony",
        "description": "Near-future sci-fi with dusty red/white color scheme inspired by The Martian",
        "palette": (
            "#8B4513", "#CD853F", "#DEB887", "#FFFFFF", "#F5F5DC", "#D2B48C",
            "#DC143C", "#B22222", "#A0522D", "#CD853F",
            "Helvetica, Arial, sans-serif", "bold",
        ),
        "effects": ("dust-texture", "mars-atmosphere"),
        "premium": True,
    },
    {
        "id": 7,
        "name": "blade-runner",
        "display_name": "Blade Runner",
        "description": "Neo-noir cyberpunk aesthetic with rain effects and neon reflections",
        "palette": (
            "#0A0A0A", "#1A1A1A", "#2A2A2A", "#FFD700", "#FFA500", "#808080",
            "#FFD700", "#FFA500", "#333333", "#444444",
            "Courier New, monospace", "normal",
        ),
        "effects": ("rain-effect", "neon-reflection", "neo-noir"),
        "premium": True,
    },
    {
        "id": 8,
        "name": "interstellar",
        "display_name": "Interstellar",
        "description": "Space exploration theme with wormhole effects and cosmic colors",
        "palette": (
            "#000033", "#000066", "#000099", "#FFFFFF", "#E6E6FA", "#B0C4DE",
            "#00FFFF", "#4169E1", "#191970", "#483D8B",
            "Arial, sans-serif", "normal",
        ),
        "effects": ("wormhole-effect", "cosmic-particles", "space-time"),
        "premium": True,
    },
]


def builtin_themes(premium_tier: MembershipTier = "tier1") -> list[Theme]:
    """Build the shipped themes; premium ones require premium_tier."""
    themes = []
    for data in _THEME_DATA:
        css_variables = dict(zip(CORE_VARIABLES, data["palette"], strict=True))
        css_variables.update({f"--{effect}": "1" for effect in data["effects"]})
        themes.append(
            Theme(
                id=data["id"],
                name=data["name"],
                display_name=data["display_name"],
                description=data["description"],
                css_variables=css_variables,
                required_tier=premium_tier if data["premium"] else "free",
            )
        )
    return themes
