"""Integration tests for the themes, articles and access API routes."""

import shutil

import pytest
from fastapi.testclient import TestClient

from src.adapters.content_memory import InMemoryContentSource
from src.adapters.identity_stub import StubIdentityAdapter
from src.api.deps import Settings, get_content_source, get_identity, get_settings
from src.api.main import app

SECRET = "Flight controllers told us the abort drills ran eleven minutes longer than planned."


@pytest.fixture
def content_path(tmp_path, project_root):
    path = tmp_path / "articles.json"
    shutil.copy(project_root / "content" / "articles.json", path)
    return path


@pytest.fixture
def identity():
    adapter = StubIdentityAdapter()
    adapter.add_session("tok-free", "u-free", tier="free")
    adapter.add_session("tok-t1", "u-t1", tier="tier1")
    adapter.add_session("tok-t2", "u-t2", tier="tier2")
    adapter.add_session("tok-t3", "u-t3", tier="tier3")
    adapter.add_session("tok-admin", "u-admin", role="admin", tier="free")
    return adapter


@pytest.fixture
def client(tmp_path, content_path, identity):
    def _settings():
        s = Settings()
        s.data_dir = tmp_path / "data"
        s.db_path = str(s.data_dir / "preferences.db")
        s.content_path = content_path
        return s

    app.dependency_overrides[get_settings] = _settings
    app.dependency_overrides[get_identity] = lambda: identity
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


# --- Themes ---


class TestThemeRoutes:
    def test_anonymous_listing(self, client):
        response = client.get("/api/themes")
        assert response.status_code == 200
        data = response.json()
        assert data["default"] == "default"
        assert len(data["themes"]) == 8
        locked = [t["name"] for t in data["themes"] if t["locked"]]
        assert len(locked) == 7
        assert "default" not in locked

    def test_paid_listing_unlocked(self, client):
        data = client.get("/api/themes", headers=auth("tok-t1")).json()
        assert not any(t["locked"] for t in data["themes"])

    def test_current_defaults(self, client):
        data = client.get("/api/themes/current").json()
        assert data["theme"]["name"] == "default"
        assert data["body_class"] is None
        assert data["effect_flags"] == []
        assert data["status"] == "ready"

    def test_set_then_current_persists(self, client):
        response = client.post(
            "/api/themes/set", json={"themeName": "apollo"}, headers=auth("tok-t2")
        )
        assert response.status_code == 200
        data = response.json()
        assert data["theme"]["name"] == "apollo"
        assert data["body_class"] == "theme-apollo"
        assert "crt-effect" in data["effect_flags"]

        current = client.get("/api/themes/current", headers=auth("tok-t2")).json()
        assert current["theme"]["name"] == "apollo"

        # Other viewers are unaffected
        other = client.get("/api/themes/current", headers=auth("tok-t3")).json()
        assert other["theme"]["name"] == "default"

    def test_free_viewer_gets_upgrade_reason(self, client):
        response = client.post(
            "/api/themes/set", json={"themeName": "apollo"}, headers=auth("tok-free")
        )
        assert response.status_code == 403
        detail = response.json()["detail"]
        assert detail["required_tier"] == "tier1"
        assert detail["reason"] == "Requires Supporter (tier1)"

    def test_admin_role_does_not_unlock_themes(self, client):
        response = client.post(
            "/api/themes/set", json={"themeName": "apollo"}, headers=auth("tok-admin")
        )
        assert response.status_code == 403

    def test_unknown_theme_404(self, client):
        response = client.post(
            "/api/themes/set", json={"themeName": "vaporwave"}, headers=auth("tok-t3")
        )
        assert response.status_code == 404

    def test_missing_body_field_422(self, client):
        response = client.post("/api/themes/set", json={}, headers=auth("tok-t3"))
        assert response.status_code == 422

    def test_reset(self, client):
        client.post("/api/themes/set", json={"themeName": "interstellar"}, headers=auth("tok-t3"))

        response = client.post("/api/themes/reset", headers=auth("tok-t3"))
        assert response.status_code == 200
        assert response.json()["theme"]["name"] == "default"

        current = client.get("/api/themes/current", headers=auth("tok-t3")).json()
        assert current["theme"]["name"] == "default"

    def test_session_cookie(self, client):
        client.cookies.set("session", "tok-t1")
        response = client.post("/api/themes/set", json={"themeName": "cyberpunk"})
        assert response.status_code == 200


# --- Articles ---


class TestArticleRoutes:
    def test_free_viewer_sees_locked_nodes(self, client):
        response = client.get("/api/articles/artemis-ii-crew-update")
        assert response.status_code == 200
        data = response.json()

        kinds = [node["kind"] for node in data["nodes"]]
        assert kinds == [
            "rendered",
            "rendered",
            "rendered",
            "locked",
            "rendered",
            "locked",
            "rendered",
        ]
        assert data["locked_count"] == 2
        assert data["nodes"][3]["required_tier"] == "tier1"
        assert data["nodes"][3]["cta_url"] == "/pricing"
        assert data["nodes"][5]["title"] == "Pro Analysis"
        assert SECRET not in response.text

    def test_supporter_sees_tier1_only(self, client):
        data = client.get("/api/articles/artemis-ii-crew-update", headers=auth("tok-t1")).json()
        assert data["locked_count"] == 1
        assert data["nodes"][3]["kind"] == "rendered"
        assert data["nodes"][3]["key"] == "3:b4.0"
        assert data["nodes"][5]["kind"] == "locked"

    def test_pro_sees_everything(self, client):
        response = client.get("/api/articles/artemis-ii-crew-update", headers=auth("tok-t2"))
        data = response.json()
        assert data["locked_count"] == 0
        assert SECRET in response.text

    def test_html_fragment(self, client):
        response = client.get("/api/articles/artemis-ii-crew-update/html")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "Premium Content" in response.text
        assert "View Pricing Plans" in response.text
        assert "eleven minutes" not in response.text

    def test_missing_article_404(self, client):
        response = client.get("/api/articles/no-such-article")
        assert response.status_code == 404

    def test_source_failure_503(self, client):
        source = InMemoryContentSource()
        source.set_failure(True)
        app.dependency_overrides[get_content_source] = lambda: source

        response = client.get("/api/articles/artemis-ii-crew-update")

        assert response.status_code == 503
        assert response.json()["detail"] == "Content temporarily unavailable"


# --- Access ---


class TestAccessRoutes:
    def test_me_anonymous(self, client):
        data = client.get("/api/access/me").json()
        assert data == {
            "authenticated": False,
            "role": "user",
            "tier": "free",
            "tier_name": "Free Account",
            "plan": "free",
        }

    def test_me_pro(self, client):
        data = client.get("/api/access/me", headers=auth("tok-t2")).json()
        assert data["tier_name"] == "Pro"
        assert data["plan"] == "pro"

    def test_feature_report_free(self, client):
        data = client.get("/api/access/features").json()
        allowed = {f["feature"]: f["allowed"] for f in data["features"]}
        assert allowed["space_fact_generator"] is True
        assert allowed["premium_themes"] is False
        assert allowed["priority_comments"] is False

    def test_feature_report_tier3_all_allowed(self, client):
        data = client.get("/api/access/features", headers=auth("tok-t3")).json()
        assert all(f["allowed"] for f in data["features"])

    def test_single_feature(self, client):
        data = client.get("/api/access/features/proxihub_advanced", headers=auth("tok-t1")).json()
        assert data["allowed"] is False
        assert data["required_tier"] == "tier2"
        assert data["reason"] == "Requires Pro (tier2)"

    def test_unknown_feature_denied(self, client):
        response = client.get("/api/access/features/warp_drive", headers=auth("tok-t3"))
        assert response.status_code == 200
        data = response.json()
        assert data["allowed"] is False
        assert data["reason"] == "Not available"

    def test_identity_failure_is_anonymous(self, client, identity):
        identity.set_failure(True)
        data = client.get("/api/access/me", headers=auth("tok-t3")).json()
        assert data["tier"] == "free"
        assert data["authenticated"] is False
