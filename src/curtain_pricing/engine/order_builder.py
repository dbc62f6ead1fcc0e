"""
Order aggregation and submission checks for draft orders.

Draft orders are immutable values: add_item and remove_item return a new
DraftOrder and leave the input untouched. The order total is never stored;
it is re-summed from the items on every call.
"""
from dataclasses import replace

from .errors import EmptyOrder, IndexOutOfRange, MissingCustomerName
from .models import DraftOrder, LineItem
from .pricing_engine import round_half_up


def add_item(order: DraftOrder, item: LineItem) -> DraftOrder:
    """Return a copy of order with item appended."""
    return replace(order, items=order.items + (item,))


def remove_item(order: DraftOrder, index: int) -> DraftOrder:
    """
    Return a copy of order without the item at index.

    Negative indices are rejected rather than counted from the end.
    """
    size = len(order.items)
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < size:
        raise IndexOutOfRange(index, size)
    return replace(order, items=order.items[:index] + order.items[index + 1:])


def total_cost(order: DraftOrder) -> float:
    """Exact sum of the item costs."""
    return sum((item.cost for item in order.items), 0.0)


def display_total(order: DraftOrder) -> float:
    """Order total rounded to cents for presentation."""
    return round_half_up(total_cost(order))


def validate_for_submission(order: DraftOrder) -> None:
    """
    Check that an order can be handed to the order store.

    Raises:
        MissingCustomerName: customer name is empty or whitespace
        EmptyOrder: the order has no items
    """
    if not (order.customer.name or "").strip():
        raise MissingCustomerName()
    if not order.items:
        raise EmptyOrder()
