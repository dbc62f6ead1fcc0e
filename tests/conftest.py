import json

import pytest

from curtain_pricing.data.fabric_catalog import FabricCatalog
from curtain_pricing.data.order_store import OrderStore
from curtain_pricing.data.shop_settings_store import ShopSettingsStore
from curtain_pricing.services.order_service import OrderService


FABRICS_CSV = """id,name,design_code,price_per_meter
1,Velvet,VL-101,10.00
2,Velvet,VL-102,19.75
3,Linen,LN-201,12.00
4,Sheer Voile,SV-301,7.25
"""


@pytest.fixture
def data_dir(tmp_path):
    (tmp_path / "fabrics.csv").write_text(FABRICS_CSV, encoding="utf-8")
    (tmp_path / "shop_settings.json").write_text(
        json.dumps({"stitching_price": 5.0, "extra_hem_cm": 10.0}), encoding="utf-8"
    )
    return tmp_path


@pytest.fixture
def catalog(data_dir):
    return FabricCatalog(data_dir / "fabrics.csv")


@pytest.fixture
def settings_store(data_dir):
    return ShopSettingsStore(data_dir / "shop_settings.json")


@pytest.fixture
def order_store(data_dir):
    return OrderStore(
        customers_csv=data_dir / "customers.csv",
        orders_csv=data_dir / "orders.csv",
        order_items_csv=data_dir / "order_items.csv",
    )


@pytest.fixture
def service(catalog, settings_store, order_store):
    return OrderService(catalog=catalog, settings_store=settings_store, order_store=order_store)
