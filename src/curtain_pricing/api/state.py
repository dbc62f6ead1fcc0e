"""Shared service instance for the API routes."""
from functools import lru_cache

from ..services.order_service import OrderService


@lru_cache(maxsize=1)
def get_service() -> OrderService:
    """Build the order service from the configured data files once."""
    return OrderService.from_settings()
