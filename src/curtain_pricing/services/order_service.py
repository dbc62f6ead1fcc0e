"""
Order Service - Connects the fabric catalog, shop settings and order store
to the pricing engine.

The engine itself never reads or writes data; this service looks up the
current fabric and settings, passes them in explicitly, and hands validated
orders to the order store.
"""
import logging
from dataclasses import dataclass, replace
from typing import Optional

from ..config.logging_config import log_error
from ..config.settings import Settings, get_settings
from ..data.fabric_catalog import FabricCatalog
from ..data.order_store import OrderStore
from ..data.shop_settings_store import ShopSettingsStore
from ..engine import (
    DraftOrder,
    EmptyOrder,
    LineItem,
    LineItemRequest,
    MissingCustomerName,
    SubmissionError,
    compute_line_item,
    display_total,
    total_cost,
    validate_for_submission,
)

logger = logging.getLogger(__name__)


@dataclass
class Quote:
    """Totals and submission readiness of a draft order."""
    total_cost: float
    display_total: float
    item_count: int
    ready: bool
    problems: list[str]


class OrderService:
    """Service for pricing line items and submitting orders."""

    def __init__(
        self,
        catalog: FabricCatalog,
        settings_store: ShopSettingsStore,
        order_store: OrderStore,
    ):
        self.catalog = catalog
        self.settings_store = settings_store
        self.order_store = order_store

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> 'OrderService':
        """Build the service from the configured data files."""
        settings = settings or get_settings()
        return cls(
            catalog=FabricCatalog(settings.fabrics_csv),
            settings_store=ShopSettingsStore(settings.shop_settings_json),
            order_store=OrderStore(
                customers_csv=settings.customers_csv,
                orders_csv=settings.orders_csv,
                order_items_csv=settings.order_items_csv,
            ),
        )

    def price_item(self, request: LineItemRequest) -> LineItem:
        """
        Price a draft line item against the current catalog and settings.

        Raises:
            ValidationError: unknown fabric or an invalid request field
            InvalidInput: unrecognized length unit
        """
        fabric = self.catalog.get(request.fabric_id)
        if fabric is not None:
            # The catalog id is an int; accept "12" from forms.
            request = replace(request, fabric_id=fabric.id)
        return compute_line_item(request, fabric, self.settings_store.get())

    def quote(self, order: DraftOrder) -> Quote:
        """Totals plus any reasons the order cannot be submitted yet."""
        problems = []
        try:
            validate_for_submission(order)
        except MissingCustomerName as e:
            problems.append(str(e))
            if not order.items:
                problems.append(str(EmptyOrder()))
        except SubmissionError as e:
            problems.append(str(e))
        return Quote(
            total_cost=total_cost(order),
            display_total=display_total(order),
            item_count=len(order.items),
            ready=not problems,
            problems=problems,
        )

    def submit(self, order: DraftOrder, order_date: Optional[str] = None) -> int:
        """
        Validate a draft order and persist it.

        Returns:
            The generated order id

        Raises:
            MissingCustomerName: customer name is blank
            EmptyOrder: the order has no items
        """
        validate_for_submission(order)
        try:
            order_id = self.order_store.add_order(order.customer, order.items, order_date=order_date)
        except (OSError, ValueError) as e:
            log_error(logger, "Failed to save order", e)
            raise
        logger.info("Submitted order %d (%d items, total %.2f)",
                    order_id, len(order.items), display_total(order))
        return order_id
