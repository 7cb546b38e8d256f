"""Inventory CRUD for the authenticated account. Every call is scoped to the token's user id."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from stockkeeper.api.deps import get_db, get_current_identity
from stockkeeper.core.exceptions import BusinessError, Conflict, NotFound, ValidationFailed
from stockkeeper.core.security import TokenIdentity
from stockkeeper.schemas.inventory import InventoryList, InventoryMessage, InventoryPayload
from stockkeeper.services import inventory_service

router = APIRouter()


@router.get("", response_model=InventoryList)
def list_inventory(
    db: Session = Depends(get_db),
    identity: TokenIdentity = Depends(get_current_identity),
):
    """All of the caller's items, newest first."""
    try:
        items = inventory_service.list_items(db, identity.user_id)
    except Exception as e:
        raise BusinessError.server_error(e)
    return InventoryList(items=items)


@router.get("/low-stock", response_model=InventoryList)
def low_stock(
    db: Session = Depends(get_db),
    identity: TokenIdentity = Depends(get_current_identity),
):
    """Items at or below their minimum stock level."""
    try:
        items = inventory_service.list_low_stock(db, identity.user_id)
    except Exception as e:
        raise BusinessError.server_error(e)
    return InventoryList(items=items)


@router.post("", response_model=InventoryMessage, status_code=status.HTTP_201_CREATED)
def create_inventory_item(
    data: InventoryPayload,
    db: Session = Depends(get_db),
    identity: TokenIdentity = Depends(get_current_identity),
):
    try:
        item = inventory_service.create_item(db, identity.user_id, data.model_dump())
    except (ValidationFailed, Conflict) as e:
        # Duplicate SKU is reported as 400 like any other bad input
        raise BusinessError.bad_request(e.message)
    except Exception as e:
        raise BusinessError.server_error(e)
    return InventoryMessage(message="Inventory item created successfully", item=item)


@router.put("/{item_id}", response_model=InventoryMessage)
def update_inventory_item(
    item_id: int,
    data: InventoryPayload,
    db: Session = Depends(get_db),
    identity: TokenIdentity = Depends(get_current_identity),
):
    try:
        item = inventory_service.update_item(db, identity.user_id, item_id, data.model_dump())
    except NotFound as e:
        raise BusinessError.not_found(e.message, reason=f"update item {item_id} by user {identity.user_id}")
    except (ValidationFailed, Conflict) as e:
        raise BusinessError.bad_request(e.message)
    except Exception as e:
        raise BusinessError.server_error(e)
    return InventoryMessage(message="Inventory item updated successfully", item=item)


@router.delete("/{item_id}", response_model=InventoryMessage)
def delete_inventory_item(
    item_id: int,
    db: Session = Depends(get_db),
    identity: TokenIdentity = Depends(get_current_identity),
):
    try:
        item = inventory_service.delete_item(db, identity.user_id, item_id)
    except NotFound as e:
        raise BusinessError.not_found(e.message, reason=f"delete item {item_id} by user {identity.user_id}")
    except Exception as e:
        raise BusinessError.server_error(e)
    return InventoryMessage(message="Inventory item deleted successfully", item=item)
