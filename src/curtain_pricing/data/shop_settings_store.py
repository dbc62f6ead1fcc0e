"""
Shop settings lookup backed by a small JSON file.
"""
import json
import logging
import math
from dataclasses import asdict
from pathlib import Path

from ..engine.models import ShopSettings

logger = logging.getLogger(__name__)


class ShopSettingsStore:
    """Reads and writes stitching price and hem allowance."""

    def __init__(self, settings_path: Path):
        self.settings_path = Path(settings_path)

    def get(self) -> ShopSettings:
        """Current shop settings, defaults when the file does not exist yet."""
        if not self.settings_path.exists():
            logger.warning("No shop settings at %s, using defaults", self.settings_path)
            return ShopSettings()

        with open(self.settings_path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        return ShopSettings(
            stitching_price=float(data.get('stitching_price', 0) or 0),
            extra_hem_cm=float(data.get('extra_hem_cm', 0) or 0),
        )

    def update(self, settings: ShopSettings) -> ShopSettings:
        """
        Persist new shop settings.

        Raises:
            ValueError: a value is negative or not a number
        """
        values = {}
        for name, value in asdict(settings).items():
            try:
                number = float(value)
            except (TypeError, ValueError):
                raise ValueError(f"Invalid {name}: {value!r}")
            if isinstance(value, bool) or not math.isfinite(number) or number < 0:
                raise ValueError(f"Invalid {name}: {value!r}")
            values[name] = number

        self.settings_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.settings_path, 'w', encoding='utf-8') as f:
            json.dump(values, f, indent=2)

        logger.info("Shop settings updated: %s", values)
        return ShopSettings(**values)
