#!/usr/bin/env python
"""
Export all saved orders to a spreadsheet.

Usage:
    python scripts/export_orders.py orders_export.xlsx
"""
import sys
from pathlib import Path

from curtain_pricing.config.logging_config import configure_logging
from curtain_pricing.config.settings import get_settings
from curtain_pricing.data.order_store import OrderStore


def main():
    if len(sys.argv) != 2:
        print("Usage: python scripts/export_orders.py <output.xlsx|output.csv>")
        sys.exit(2)

    configure_logging()
    settings = get_settings()
    store = OrderStore(
        customers_csv=settings.customers_csv,
        orders_csv=settings.orders_csv,
        order_items_csv=settings.order_items_csv,
    )

    try:
        path = store.export(Path(sys.argv[1]))
    except ValueError as e:
        print(f"❌ Error: {e}")
        sys.exit(1)

    print(f"✅ Orders exported to {path}")


if __name__ == "__main__":
    main()
