"""
Rules loading and validation tests.

Verifies that the shipped rules.yaml loads, and that malformed rules
files fail at boot with a clear error.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from src.components.access import (
    DEFAULT_FEATURES,
    DEFAULT_ROLE_CAPABILITIES,
    can_use_tooling,
    load_feature_table_from_rules,
    load_role_capabilities_from_rules,
)
from src.components.render import LockedPlaceholder
from src.components.render import load_config_from_rules as load_render_config
from src.components.themes import load_config_from_rules as load_theme_config
from src.components.tiers import DEFAULT_TIER_INFO, load_tier_info_from_rules, tier_description
from src.rules.loader import load_rules
from src.rules.models import Rules


def write_rules(tmp_path: Path, data: dict[str, Any]) -> Path:
    path = tmp_path / "rules.yaml"
    path.write_text(yaml.safe_dump(data))
    return path


@pytest.fixture
def raw_rules(project_root: Path) -> dict[str, Any]:
    with open(project_root / "rules.yaml") as f:
        return yaml.safe_load(f)


class TestShippedRules:
    """The rules.yaml at the project root."""

    def test_loads(self, rules: Rules) -> None:
        assert rules.project.slug == "stemspacehub-access"
        assert rules.tiers.order == ["free", "tier1", "tier2", "tier3"]

    def test_feature_table_matches_builtin_defaults(self, rules: Rules) -> None:
        assert dict(load_feature_table_from_rules(rules)) == DEFAULT_FEATURES

    def test_tier_display_matches_builtin_defaults(self, rules: Rules) -> None:
        assert load_tier_info_from_rules(rules) == DEFAULT_TIER_INFO

    def test_tier_descriptions(self, rules: Rules) -> None:
        table = load_tier_info_from_rules(rules)
        assert tier_description("tier2", table) == (
            "Advanced features with Proxihub and Mission Control"
        )
        assert tier_description("bogus", table) == "Basic features and community access"

    def test_role_capabilities(self, rules: Rules) -> None:
        roles = load_role_capabilities_from_rules(rules)
        assert roles == DEFAULT_ROLE_CAPABILITIES
        assert can_use_tooling({"role": "editor"}, "articles:publish", roles)
        assert not can_use_tooling({"role": "author"}, "comments:moderate", roles)

    def test_placeholder_copy(self, rules: Rules) -> None:
        config = load_render_config(rules)
        assert config.placeholder == LockedPlaceholder()
        assert {rule.provider for rule in config.embed_allowlist} == {
            "youtube",
            "vimeo",
            "twitter",
        }

    def test_theme_config(self, rules: Rules) -> None:
        config = load_theme_config(rules)
        assert config.default_name == "default"
        assert config.premium_tier == "tier1"
        assert config.preference_timeout_seconds == 2.0


class TestInvalidRules:
    """Malformed files fail fast."""

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_rules(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yaml"
        path.write_text("tiers: [unclosed")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_rules(path)

    def test_reordered_tiers_rejected(self, tmp_path: Path, raw_rules: dict[str, Any]) -> None:
        raw_rules["tiers"]["order"] = ["tier1", "free", "tier2", "tier3"]
        with pytest.raises(ValueError, match="validation failed"):
            load_rules(write_rules(tmp_path, raw_rules))

    def test_missing_display_entry_rejected(
        self, tmp_path: Path, raw_rules: dict[str, Any]
    ) -> None:
        del raw_rules["tiers"]["display"]["tier3"]
        with pytest.raises(ValueError, match="validation failed"):
            load_rules(write_rules(tmp_path, raw_rules))

    def test_unknown_feature_tier_rejected(
        self, tmp_path: Path, raw_rules: dict[str, Any]
    ) -> None:
        raw_rules["features"]["mission_generator"] = "platinum"
        with pytest.raises(ValueError, match="validation failed"):
            load_rules(write_rules(tmp_path, raw_rules))

    def test_non_positive_timeout_rejected(
        self, tmp_path: Path, raw_rules: dict[str, Any]
    ) -> None:
        raw_rules["themes"]["preference_timeout_seconds"] = 0
        with pytest.raises(ValueError, match="validation failed"):
            load_rules(write_rules(tmp_path, raw_rules))
