"""
Centralized settings and path configuration for the curtain pricing tool.
"""
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional


DATA_DIR_ENV = 'CURTAIN_PRICING_DATA_DIR'
LOG_LEVEL_ENV = 'CURTAIN_PRICING_LOG_LEVEL'


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    # Walk up from this file to find the project root
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists() or (parent / 'data' / 'fabrics.csv').exists():
            return parent
    # Fallback to 3 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Project paths
    project_root: Path
    data_dir: Path

    # Collaborator files
    fabrics_csv: Path
    shop_settings_json: Path
    customers_csv: Path
    orders_csv: Path
    order_items_csv: Path

    log_level: str = 'INFO'

    @classmethod
    def load(cls, project_root: Optional[Path] = None, data_dir: Optional[Path] = None) -> 'Settings':
        """Load settings from the project structure and environment."""
        root = project_root or get_project_root()

        env_dir = os.environ.get(DATA_DIR_ENV)
        data = data_dir or (Path(env_dir) if env_dir else root / 'data')

        return cls(
            project_root=root,
            data_dir=data,
            fabrics_csv=data / 'fabrics.csv',
            shop_settings_json=data / 'shop_settings.json',
            customers_csv=data / 'customers.csv',
            orders_csv=data / 'orders.csv',
            order_items_csv=data / 'order_items.csv',
            log_level=os.environ.get(LOG_LEVEL_ENV, 'INFO').upper(),
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
