"""
Quote API - FastAPI surface over the pricing engine.

Exposes the pure pricing computations (price a draft line item, total and
check a draft order) and a read-only view of the fabric catalog and shop
settings the prices are computed from.
"""
import logging
from dataclasses import asdict
from typing import Optional, Union

from fastapi import Depends, FastAPI, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .. import __version__
from ..config.logging_config import configure_logging
from ..engine import (
    Customer,
    DraftOrder,
    InvalidInput,
    ItemType,
    LineItem,
    LineItemRequest,
    ValidationError,
)
from ..services.order_service import OrderService
from .state import get_service

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Curtain Pricing API",
    description="Line-item and order pricing for the curtain shop",
    version=__version__,
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


class LineItemIn(BaseModel):
    """A draft line item as typed into the calculator form."""
    fabric_id: int
    item_type: str = "curtain"
    length: Union[float, str]
    unit: str = "cm"
    quantity: Union[int, str] = 1


class LineItemOut(BaseModel):
    """A finalized line item, as returned by /line-items/price."""
    fabric_id: int
    fabric_name: str
    design_code: str
    item_type: ItemType
    length_cm: float = Field(ge=0)
    quantity: int = Field(gt=0)
    fabric_used_m: float = Field(ge=0)
    cost: float = Field(ge=0)


class CustomerIn(BaseModel):
    name: str = ""
    phone: str = ""
    address: str = ""


class QuoteRequest(BaseModel):
    customer: CustomerIn = Field(default_factory=CustomerIn)
    items: list[LineItemOut] = Field(default_factory=list)


def _error_detail(e: Exception, field: Optional[str] = None) -> dict:
    return {"field": field, "message": str(e)}


@app.get("/")
async def root():
    return {"status": "online", "message": "Curtain Pricing API Active"}


@app.get("/fabrics")
async def list_fabrics(search: Optional[str] = None, service: OrderService = Depends(get_service)):
    return jsonable_encoder(service.catalog.list_fabrics(search=search))


@app.get("/fabrics/{fabric_id}")
async def get_fabric(fabric_id: int, service: OrderService = Depends(get_service)):
    fabric = service.catalog.get(fabric_id)
    if fabric is None:
        raise HTTPException(status_code=404, detail=f"Fabric '{fabric_id}' not found")
    return jsonable_encoder(fabric)


@app.get("/settings")
async def get_shop_settings(service: OrderService = Depends(get_service)):
    return asdict(service.settings_store.get())


@app.post("/line-items/price", response_model=LineItemOut)
async def price_line_item(req: LineItemIn, service: OrderService = Depends(get_service)):
    request = LineItemRequest(
        fabric_id=req.fabric_id,
        item_type=req.item_type,
        length=req.length,
        unit=req.unit,
        quantity=req.quantity,
    )
    try:
        item = service.price_item(request)
    except (ValidationError, InvalidInput) as e:
        raise HTTPException(status_code=422, detail=_error_detail(e, e.field))
    return LineItemOut(**asdict(item))


@app.post("/orders/quote")
async def quote_order(req: QuoteRequest, service: OrderService = Depends(get_service)):
    order = DraftOrder(
        customer=Customer(**req.customer.model_dump()),
        items=tuple(LineItem(**item.model_dump()) for item in req.items),
    )
    return asdict(service.quote(order))
