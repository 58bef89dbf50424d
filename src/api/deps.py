import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.adapters.content_memory import InMemoryContentSource
from src.adapters.identity_stub import StubIdentityAdapter
from src.adapters.sqlite.repos import SQLitePreferenceStore
from src.components.access import (
    FeatureTable,
    IdentityPort,
    load_feature_table_from_rules,
    resolve_viewer,
)
from src.components.render import RenderConfig
from src.components.render import load_config_from_rules as load_render_config
from src.components.themes import (
    PreferenceStorePort,
    ThemeCatalog,
    ThemeSession,
    build_catalog,
)
from src.components.themes import load_config_from_rules as load_theme_config
from src.domain.entities import Viewer
from src.rules.loader import DEFAULT_RULES_PATH, load_rules
from src.rules.models import Rules

SESSION_COOKIE = "session"


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("SPACEHUB_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "preferences.db")
        self.rules_path = Path(os.environ.get("SPACEHUB_RULES_PATH", str(DEFAULT_RULES_PATH)))
        default_content = self.base_dir / "content" / "articles.json"
        self.content_path = Path(os.environ.get("SPACEHUB_CONTENT_PATH", str(default_content)))
        self.host = os.environ.get("SPACEHUB_HOST", "127.0.0.1")
        self.port = int(os.environ.get("SPACEHUB_PORT", "8000"))


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return load_rules(settings.rules_path)


def get_feature_table(rules: Rules = Depends(get_rules)) -> FeatureTable:
    return load_feature_table_from_rules(rules)


def get_render_config(rules: Rules = Depends(get_rules)) -> RenderConfig:
    return load_render_config(rules)


def get_catalog(rules: Rules = Depends(get_rules)) -> ThemeCatalog:
    return build_catalog(load_theme_config(rules))


# --- Adapters ---

# Identity singleton; a deployment swaps in the real session lookup here
_identity_instance: StubIdentityAdapter | None = None


def get_identity() -> IdentityPort:
    global _identity_instance
    if _identity_instance is None:
        _identity_instance = StubIdentityAdapter()
    return _identity_instance


@lru_cache
def _preference_store_for(db_path: str) -> SQLitePreferenceStore:
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    return SQLitePreferenceStore(db_path)


def get_preference_store(settings: Settings = Depends(get_settings)) -> PreferenceStorePort:
    return _preference_store_for(settings.db_path)


@lru_cache
def _content_source_for(path: str) -> InMemoryContentSource:
    return InMemoryContentSource.from_json_file(Path(path))


def get_content_source(settings: Settings = Depends(get_settings)) -> InMemoryContentSource:
    return _content_source_for(str(settings.content_path))


# --- Viewer ---
bearer_scheme = HTTPBearer(auto_error=False)


def get_viewer(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    identity: IdentityPort = Depends(get_identity),
) -> Viewer:
    """
    Resolve the viewer from the Authorization header or the session cookie.

    Never rejects: missing or unknown sessions are the anonymous viewer.
    """
    token = credentials.credentials if credentials else request.cookies.get(SESSION_COOKIE)
    return resolve_viewer(identity, token)


# --- Theme Session ---
def get_theme_session(
    viewer: Viewer = Depends(get_viewer),
    catalog: ThemeCatalog = Depends(get_catalog),
    store: PreferenceStorePort = Depends(get_preference_store),
    rules: Rules = Depends(get_rules),
) -> ThemeSession:
    """One session per request, bound to the resolved viewer."""
    return ThemeSession(
        viewer,
        catalog=catalog,
        store=store,
        timeout_seconds=rules.themes.preference_timeout_seconds,
    )
