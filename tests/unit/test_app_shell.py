"""Startup validation and CLI tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
import yaml

from src.app_shell import cli
from src.app_shell.config import validate_ops_rules
from src.components.themes import CatalogError
from src.rules.models import Rules


def test_validate_creates_data_dir(rules: Rules, tmp_path: Path) -> None:
    data_dir = tmp_path / "nested" / "data"
    validate_ops_rules(rules, data_dir)
    assert data_dir.is_dir()


def test_validate_rejects_premium_default(rules: Rules, tmp_path: Path) -> None:
    broken = rules.model_copy(
        update={"themes": rules.themes.model_copy(update={"default": "apollo"})}
    )
    with pytest.raises(CatalogError):
        validate_ops_rules(broken, tmp_path)


def run_cli(monkeypatch: pytest.MonkeyPatch, *args: str) -> None:
    monkeypatch.setattr(sys, "argv", ["spacehub", *args])
    cli.main()


def test_cli_check(monkeypatch, capsys) -> None:
    run_cli(monkeypatch, "check")
    assert "Rules OK: 24 features, 8 themes." in capsys.readouterr().out


def test_cli_features(monkeypatch, capsys) -> None:
    run_cli(monkeypatch, "features", "--tier", "tier1")
    out = capsys.readouterr().out
    assert "premium_themes" in out
    lines = {line.split()[0]: line.split()[-1] for line in out.splitlines() if line.strip()}
    assert lines["premium_themes"] == "yes"
    assert lines["proxihub_advanced"] == "no"


def test_cli_themes_locked_for_free(monkeypatch, capsys) -> None:
    run_cli(monkeypatch, "themes")
    out = capsys.readouterr().out
    assert "apollo" in out
    assert "locked: Requires Supporter (tier1)" in out


def test_cli_render(monkeypatch, capsys, project_root: Path) -> None:
    content = str(project_root / "content" / "articles.json")
    run_cli(monkeypatch, "render", "starship-flight-recap", "--content", content)
    out = capsys.readouterr().out
    assert "<blockquote>" in out
    assert "MECO" not in out
    assert "Premium Content" in out


def test_cli_render_missing(monkeypatch, project_root: Path) -> None:
    content = str(project_root / "content" / "articles.json")
    with pytest.raises(SystemExit) as exc:
        run_cli(monkeypatch, "render", "nope", "--content", content)
    assert exc.value.code == 1


def test_cli_set_theme(monkeypatch, capsys, tmp_path: Path) -> None:
    db = str(tmp_path / "prefs.db")
    run_cli(monkeypatch, "set-theme", "u-1", "apollo", "--tier", "tier2", "--db", db)
    assert "u-1: theme set to apollo" in capsys.readouterr().out


def test_cli_bad_rules(monkeypatch, tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        run_cli(monkeypatch, "--rules", str(tmp_path / "missing.yaml"), "check")


def test_cli_set_theme_denied(monkeypatch, tmp_path: Path) -> None:
    db = str(tmp_path / "prefs.db")
    with pytest.raises(SystemExit) as exc:
        run_cli(monkeypatch, "set-theme", "u-1", "apollo", "--db", db)
    assert exc.value.code == 1


def rules_with_default(project_root: Path, tmp_path: Path, default: str) -> str:
    with open(project_root / "rules.yaml") as f:
        data = yaml.safe_load(f)
    data["themes"]["default"] = default
    path = tmp_path / "rules.yaml"
    path.write_text(yaml.safe_dump(data))
    return str(path)


@pytest.mark.parametrize("command", ["check", "themes"])
def test_cli_invalid_catalog_exits(
    monkeypatch, caplog, project_root: Path, tmp_path: Path, command: str
) -> None:
    rules_path = rules_with_default(project_root, tmp_path, "solarized")
    with pytest.raises(SystemExit) as exc:
        run_cli(monkeypatch, "--rules", rules_path, command)
    assert exc.value.code == 1
    assert "Invalid theme catalog" in caplog.text


def test_cli_set_theme_unusable_db(monkeypatch, caplog, tmp_path: Path) -> None:
    # A directory cannot be opened as a database file
    db_dir = tmp_path / "prefs.db"
    db_dir.mkdir()
    with pytest.raises(SystemExit) as exc:
        run_cli(monkeypatch, "set-theme", "u-1", "default", "--db", str(db_dir))
    assert exc.value.code == 1
    assert "Preference store" in caplog.text
