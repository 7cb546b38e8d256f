from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional
from pydantic import BaseModel, field_serializer


class InventoryPayload(BaseModel):
    """Create/update body. Numeric fields accept anything and are coerced by the service."""
    name: Optional[str] = None
    description: Optional[str] = None
    quantity: Any = None
    unit_price: Any = None
    category: Optional[str] = None
    supplier: Optional[str] = None
    min_stock_level: Any = None
    location: Optional[str] = None
    sku: Optional[str] = None


class InventoryItem(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    quantity: int = 0
    unit_price: Decimal = Decimal("0.00")
    category: Optional[str] = None
    supplier: Optional[str] = None
    min_stock_level: int = 0
    location: Optional[str] = None
    sku: str
    user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @field_serializer("unit_price")
    def serialize_unit_price(self, value: Decimal) -> str:
        # Same rendering Postgres gives DECIMAL(10,2)
        return f"{value:.2f}"


class InventoryList(BaseModel):
    items: List[InventoryItem]


class InventoryMessage(BaseModel):
    message: str
    item: InventoryItem
