"""
Fabric Catalog - CSV-backed fabric lookup and price maintenance.

Loads fabrics.csv (id, name, design_code, price_per_meter) with pandas
and hands out Fabric values. Price edits rewrite the CSV; fabrics already
handed out are not affected.
"""
import logging
import math
from pathlib import Path
from typing import Optional

import pandas as pd

from ..engine.models import Fabric

logger = logging.getLogger(__name__)


class FabricCatalog:
    """Fabric catalog lookup keyed by fabric id."""

    COLUMNS = ['id', 'name', 'design_code', 'price_per_meter']

    def __init__(self, catalog_path: Path):
        """Load the catalog CSV."""
        self.catalog_path = Path(catalog_path)

        if not self.catalog_path.exists():
            raise FileNotFoundError(
                f"fabrics.csv not found at {self.catalog_path}. "
                "Create it with columns: " + ", ".join(self.COLUMNS)
            )

        self.reload()

    def reload(self):
        """Reload the catalog from disk."""
        df = pd.read_csv(self.catalog_path, dtype={'name': str, 'design_code': str})
        missing = [c for c in self.COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"{self.catalog_path} is missing columns: {', '.join(missing)}")

        df = df[self.COLUMNS].dropna(subset=['id']).copy()
        df['id'] = df['id'].astype(int)
        df['name'] = df['name'].fillna('').str.strip()
        df['design_code'] = df['design_code'].fillna('').str.strip()
        df['price_per_meter'] = pd.to_numeric(df['price_per_meter'], errors='coerce')

        # Rows without a usable price are not sellable
        unpriced = df['price_per_meter'].isna() | (df['price_per_meter'] < 0)
        if unpriced.any():
            logger.warning("Skipped %d fabric(s) without a valid price: %s",
                           int(unpriced.sum()), ", ".join(str(i) for i in df.loc[unpriced, 'id']))
            df = df[~unpriced]

        # Duplicate ids keep the first row
        duplicates = int(df['id'].duplicated().sum())
        if duplicates:
            logger.warning("Dropped %d duplicate fabric id(s) from %s", duplicates, self.catalog_path)
        self.catalog = df.drop_duplicates('id').set_index('id', drop=False).rename_axis(None)
        logger.info("Loaded %d fabrics from %s", len(self.catalog), self.catalog_path)

    def _to_fabric(self, row) -> Fabric:
        return Fabric(
            id=int(row['id']),
            name=row['name'],
            design_code=row['design_code'],
            price_per_meter=float(row['price_per_meter']),
        )

    def get(self, fabric_id) -> Optional[Fabric]:
        """Look up a fabric by id. Returns None when it is not in the catalog."""
        try:
            key = int(fabric_id)
        except (TypeError, ValueError):
            return None
        if key not in self.catalog.index:
            return None
        return self._to_fabric(self.catalog.loc[key])

    def list_fabrics(self, search: Optional[str] = None) -> list[Fabric]:
        """List fabrics, optionally filtered by name or design code."""
        df = self.catalog
        if search:
            mask = (
                df['name'].str.contains(search, case=False, na=False, regex=False) |
                df['design_code'].str.contains(search, case=False, na=False, regex=False)
            )
            df = df[mask]
        return [self._to_fabric(row) for _, row in df.iterrows()]

    def fabric_names(self) -> list[str]:
        """Unique fabric names in catalog order."""
        return list(self.catalog['name'].unique())

    def design_codes_for(self, name: str) -> list[Fabric]:
        """All fabrics (design variants) sharing a fabric name."""
        df = self.catalog[self.catalog['name'] == name]
        return [self._to_fabric(row) for _, row in df.iterrows()]

    def update_price(self, fabric_id, new_price) -> Fabric:
        """
        Set a fabric's price per meter and persist the catalog.

        Raises:
            ValueError: unknown fabric or a negative / non-numeric price
        """
        fabric = self.get(fabric_id)
        if fabric is None:
            raise ValueError(f"Fabric '{fabric_id}' not found")

        try:
            price = float(new_price)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid price: {new_price!r}")
        if isinstance(new_price, bool) or not math.isfinite(price) or price < 0:
            raise ValueError(f"Invalid price: {new_price!r}")

        self.catalog.loc[fabric.id, 'price_per_meter'] = price
        self.catalog.to_csv(self.catalog_path, columns=self.COLUMNS, index=False)
        logger.info("Updated price for fabric %s (%s): %.2f -> %.2f",
                    fabric.id, fabric.design_code, fabric.price_per_meter, price)
        return self.get(fabric.id)
