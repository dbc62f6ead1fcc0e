"""Engine subpackage - core pricing logic and order aggregation."""
from .errors import (
    PricingError,
    InvalidInput,
    ValidationError,
    IndexOutOfRange,
    SubmissionError,
    MissingCustomerName,
    EmptyOrder,
)
from .models import (
    LengthUnit,
    ItemType,
    Fabric,
    ShopSettings,
    LineItemRequest,
    LineItem,
    Customer,
    DraftOrder,
)
from .units import to_centimeters
from .pricing_engine import compute_line_item, round_half_up
from .order_builder import (
    add_item,
    remove_item,
    total_cost,
    display_total,
    validate_for_submission,
)

__all__ = [
    'PricingError', 'InvalidInput', 'ValidationError', 'IndexOutOfRange',
    'SubmissionError', 'MissingCustomerName', 'EmptyOrder',
    'LengthUnit', 'ItemType', 'Fabric', 'ShopSettings', 'LineItemRequest',
    'LineItem', 'Customer', 'DraftOrder',
    'to_centimeters', 'compute_line_item', 'round_half_up',
    'add_item', 'remove_item', 'total_cost', 'display_total',
    'validate_for_submission',
]
