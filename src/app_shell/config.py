import logging
from pathlib import Path

from src.components.themes import build_catalog
from src.components.themes import load_config_from_rules as load_theme_config
from src.rules.models import Rules

logger = logging.getLogger(__name__)


def validate_ops_rules(rules: Rules, data_dir: Path) -> None:
    """
    Validate operational requirements before startup.

    Raises CatalogError if the configured theme catalog is invalid and
    OSError if the data directory cannot be created.
    """
    # 1. Theme catalog must satisfy its invariants with the configured default
    catalog = build_catalog(load_theme_config(rules))

    # 2. Data dir holds the preference database
    data_dir.mkdir(parents=True, exist_ok=True)

    logger.info(
        "Configuration validated: %d features, %d themes, data dir %s",
        len(rules.features),
        len(catalog),
        data_dir,
    )
