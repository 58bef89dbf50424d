from pathlib import Path

import pytest

from src.rules.loader import load_rules
from src.rules.models import Rules


@pytest.fixture
def project_root() -> Path:
    return Path(__file__).resolve().parent.parent


@pytest.fixture
def rules(project_root: Path) -> Rules:
    """The real rules.yaml from the project root."""
    rules_path = project_root / "rules.yaml"
    if not rules_path.exists():
        raise FileNotFoundError(f"Rules not found at {rules_path}")
    return load_rules(rules_path)


@pytest.fixture
def test_data_dir(tmp_path: Path) -> Path:
    return tmp_path
