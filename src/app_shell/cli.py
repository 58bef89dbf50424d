import argparse
import asyncio
import logging
import sqlite3
import sys
from pathlib import Path

from src.adapters.content_memory import InMemoryContentSource
from src.adapters.sqlite.repos import SQLitePreferenceStore
from src.components.access import feature_report, load_feature_table_from_rules
from src.components.render import (
    ContentUnavailableError,
    load_and_render,
    to_html,
)
from src.components.render import load_config_from_rules as load_render_config
from src.components.themes import (
    CatalogError,
    Denied,
    ThemeCatalog,
    ThemeSession,
    build_catalog,
    list_themes_for,
)
from src.components.themes import load_config_from_rules as load_theme_config
from src.components.tiers import TIER_ORDER
from src.domain.entities import Viewer
from src.rules.loader import DEFAULT_RULES_PATH, load_rules
from src.rules.models import Rules

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")

DB_PATH = "data/preferences.db"
CONTENT_PATH = "content/articles.json"


def get_rules(path: str) -> Rules:
    try:
        return load_rules(Path(path))
    except (FileNotFoundError, ValueError) as e:
        logger.error("%s", e)
        sys.exit(1)


def get_catalog(rules: Rules) -> ThemeCatalog:
    try:
        return build_catalog(load_theme_config(rules))
    except CatalogError as e:
        logger.error("%s", e)
        sys.exit(1)


def handle_check(rules: Rules, args: argparse.Namespace) -> None:
    catalog = get_catalog(rules)
    print(f"Rules OK: {len(rules.features)} features, {len(catalog)} themes.")


def handle_features(rules: Rules, args: argparse.Namespace) -> None:
    viewer = Viewer(tier=args.tier)
    for entry in feature_report(viewer, load_feature_table_from_rules(rules)):
        mark = "yes" if entry.allowed else "no"
        print(f"{entry.feature:<28} {entry.required_tier:<6} {mark}")


def handle_themes(rules: Rules, args: argparse.Namespace) -> None:
    catalog = get_catalog(rules)
    for entry in list_themes_for(Viewer(tier=args.tier), catalog):
        suffix = f"  [locked: {entry.reason}]" if entry.locked else ""
        print(f"{entry.theme.name:<16} {entry.theme.display_name}{suffix}")


def handle_set_theme(rules: Rules, args: argparse.Namespace) -> None:
    config = load_theme_config(rules)
    catalog = get_catalog(rules)
    try:
        Path(args.db).parent.mkdir(parents=True, exist_ok=True)
        store = SQLitePreferenceStore(args.db)
    except (OSError, sqlite3.Error) as e:
        logger.error("Preference store %s unavailable: %s", args.db, e)
        sys.exit(1)

    session = ThemeSession(
        Viewer(user_id=args.user, tier=args.tier),
        catalog=catalog,
        store=store,
        timeout_seconds=config.preference_timeout_seconds,
    )
    result = asyncio.run(session.set_theme(args.theme))
    if isinstance(result, Denied):
        logger.error("Theme %s denied: %s", result.theme_name, result.reason)
        sys.exit(1)
    print(f"{args.user}: theme set to {result.name}")


def handle_render(rules: Rules, args: argparse.Namespace) -> None:
    source = InMemoryContentSource.from_json_file(Path(args.content))
    try:
        rendered = load_and_render(
            source, args.slug, Viewer(tier=args.tier), load_render_config(rules)
        )
    except ContentUnavailableError as e:
        logger.error("%s", e)
        sys.exit(2)

    if rendered is None:
        logger.error("Article %s not found.", args.slug)
        sys.exit(1)
    print(to_html(rendered.nodes))


def main() -> None:
    parser = argparse.ArgumentParser(description="StemSpaceHub access tools")
    parser.add_argument("--rules", default=str(DEFAULT_RULES_PATH), help="Path to rules.yaml")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # check
    subparsers.add_parser("check", help="Validate rules and the theme catalog")

    # features
    features_parser = subparsers.add_parser("features", help="Feature table for a tier")
    features_parser.add_argument("--tier", choices=TIER_ORDER, default="free")

    # themes
    themes_parser = subparsers.add_parser("themes", help="Theme catalog for a tier")
    themes_parser.add_argument("--tier", choices=TIER_ORDER, default="free")

    # set-theme
    set_parser = subparsers.add_parser("set-theme", help="Store a viewer's theme preference")
    set_parser.add_argument("user", help="Viewer id")
    set_parser.add_argument("theme", help="Theme name")
    set_parser.add_argument("--tier", choices=TIER_ORDER, default="free")
    set_parser.add_argument("--db", default=DB_PATH)

    # render
    render_parser = subparsers.add_parser("render", help="Render an article as HTML")
    render_parser.add_argument("slug")
    render_parser.add_argument("--tier", choices=TIER_ORDER, default="free")
    render_parser.add_argument("--content", default=CONTENT_PATH)

    args = parser.parse_args()
    rules = get_rules(args.rules)

    handlers = {
        "check": handle_check,
        "features": handle_features,
        "themes": handle_themes,
        "set-theme": handle_set_theme,
        "render": handle_render,
    }
    handlers[args.command](rules, args)


if __name__ == "__main__":
    main()
