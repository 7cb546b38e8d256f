"""
Owner-scoped inventory operations.

Every query binds ``owner_id`` in its WHERE clause. A row owned by another
account is never loaded, so "missing" and "not yours" look identical.
"""
import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Any, List, Mapping

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stockkeeper.core.exceptions import Conflict, NotFound, ValidationFailed
from stockkeeper.models.inventory import Inventory
from stockkeeper.schemas.inventory import InventoryItem

logger = logging.getLogger(__name__)

_INT_PREFIX = re.compile(r"\s*([-+]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")
_CENT = Decimal("0.01")

# Column limits: INTEGER and NUMERIC(10,2)
INT_MIN, INT_MAX = -(2 ** 31), 2 ** 31 - 1
PRICE_LIMIT = Decimal("100000000")


def parse_int(value: Any) -> int:
    """Leading integer of value, or 0 when there is none ("12abc" -> 12)."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value and abs(value) != float("inf") else 0
    match = _INT_PREFIX.match(str(value))
    return int(match.group(1)) if match else 0


def parse_price(value: Any) -> Decimal:
    """Leading decimal number of value rounded to cents, or 0.00."""
    if isinstance(value, bool) or value is None:
        return Decimal("0.00")
    match = _FLOAT_PREFIX.match(str(value))
    if not match:
        return Decimal("0.00")
    try:
        return Decimal(match.group(1)).quantize(_CENT)
    except InvalidOperation:
        return Decimal("0.00")


def _clean_fields(fields: Mapping[str, Any]) -> dict:
    """Validate required fields and coerce the rest into column values."""
    name = fields.get("name")
    sku = fields.get("sku")
    if not name or not str(name).strip():
        raise ValidationFailed("Item name is required")
    if not sku or not str(sku).strip():
        raise ValidationFailed("SKU is required")

    quantity = parse_int(fields.get("quantity"))
    unit_price = parse_price(fields.get("unit_price"))
    min_stock_level = parse_int(fields.get("min_stock_level"))
    if not INT_MIN <= quantity <= INT_MAX:
        raise ValidationFailed("Quantity is out of range")
    if not INT_MIN <= min_stock_level <= INT_MAX:
        raise ValidationFailed("Minimum stock level is out of range")
    if abs(unit_price) >= PRICE_LIMIT:
        raise ValidationFailed("Unit price is out of range")

    return {
        "name": name,
        "description": fields.get("description") or "",
        "quantity": quantity,
        "unit_price": unit_price,
        "category": fields.get("category"),
        "supplier": fields.get("supplier") or "",
        "min_stock_level": min_stock_level,
        "location": fields.get("location") or "",
        "sku": sku,
    }


def _is_sku_violation(error: IntegrityError) -> bool:
    return "sku" in str(error.orig).lower()


def _owned(db: Session, owner_id: int, item_id: int):
    return db.query(Inventory).filter(Inventory.id == item_id, Inventory.user_id == owner_id)


def list_items(db: Session, owner_id: int) -> List[InventoryItem]:
    """All items of one owner, newest first."""
    rows = (
        db.query(Inventory)
        .filter(Inventory.user_id == owner_id)
        .order_by(Inventory.created_at.desc(), Inventory.id.desc())
        .all()
    )
    return [InventoryItem.model_validate(row) for row in rows]


def list_low_stock(db: Session, owner_id: int) -> List[InventoryItem]:
    """Owned items at or below their minimum stock level, lowest quantity first."""
    rows = (
        db.query(Inventory)
        .filter(
            Inventory.user_id == owner_id,
            Inventory.quantity <= Inventory.min_stock_level,
        )
        .order_by(Inventory.quantity.asc(), Inventory.id.asc())
        .all()
    )
    return [InventoryItem.model_validate(row) for row in rows]


def create_item(db: Session, owner_id: int, fields: Mapping[str, Any]) -> InventoryItem:
    values = _clean_fields(fields)
    item = Inventory(user_id=owner_id, **values)
    db.add(item)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if _is_sku_violation(e):
            raise Conflict("SKU already exists")
        raise
    db.refresh(item)

    logger.info(f"Created inventory item id={item.id} owner={owner_id}")
    return InventoryItem.model_validate(item)


def update_item(db: Session, owner_id: int, item_id: int, fields: Mapping[str, Any]) -> InventoryItem:
    """Replace every editable field of an owned item."""
    values = _clean_fields(fields)
    item = _owned(db, owner_id, item_id).first()
    if not item:
        raise NotFound("Inventory item not found")

    for column, value in values.items():
        setattr(item, column, value)
    item.updated_at = func.now()
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if _is_sku_violation(e):
            raise Conflict("SKU already exists")
        raise
    db.refresh(item)

    logger.info(f"Updated inventory item id={item.id} owner={owner_id}")
    return InventoryItem.model_validate(item)


def delete_item(db: Session, owner_id: int, item_id: int) -> InventoryItem:
    """Delete an owned item and return its state before deletion."""
    item = _owned(db, owner_id, item_id).first()
    if not item:
        raise NotFound("Inventory item not found")

    snapshot = InventoryItem.model_validate(item)
    db.delete(item)
    db.commit()

    logger.info(f"Deleted inventory item id={item_id} owner={owner_id}")
    return snapshot
