import logging
from fastapi import APIRouter, Depends, HTTPException, status, Query

from stockroom.api.deps import get_store
from stockroom.api.endpoints.auth import get_current_user, require_admin
from stockroom.core.responses import paginate, paginated_response, success_response
from stockroom.repositories.store import Store
from stockroom.schemas.inventory import (
    InventoryCreate,
    InventoryItemInDB,
    InventoryItemWithProduct,
    InventoryUpdate,
    StockUpdate,
    TransactionType,
)
from stockroom.schemas.user import UserInDB
from stockroom.services.stock import get_inventory_value, get_low_stock_items, index_products, product_summary

logger = logging.getLogger(__name__)

router = APIRouter()


def _with_product(item: InventoryItemInDB, store: Store) -> InventoryItemWithProduct:
    product = store.products.find_by_id(item.product_id)
    return InventoryItemWithProduct(**item.model_dump(), product=product_summary(product))


def _get_item_or_404(inventory_id: str, store: Store) -> InventoryItemInDB:
    item = store.inventory.find_by_id(inventory_id)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Inventory item not found")
    return item


@router.get("")
def get_inventory(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    low_stock: bool = Query(False, alias="lowStock"),
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(get_current_user)
):
    """Get inventory items with product details, optionally only the low-stock ones."""
    items = store.inventory.get_all()
    if low_stock:
        items = get_low_stock_items(items, index_products(store.products.get_all()))

    page_items = [_with_product(item, store) for item in paginate(items, page, limit)]
    return paginated_response(page_items, page, limit, len(items))


@router.get("/low-stock")
def get_low_stock_inventory(
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(get_current_user)
):
    """Get inventory items at or below their minimum stock level."""
    products = index_products(store.products.get_all())
    items = get_low_stock_items(store.inventory.get_all(), products)
    return success_response([_with_product(item, store) for item in items])


@router.get("/value")
def get_total_inventory_value(
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(get_current_user)
):
    """Get the total cost value of stock on hand."""
    products = index_products(store.products.get_all())
    return success_response({"totalValue": get_inventory_value(store.inventory.get_all(), products)})


@router.get("/{inventory_id}")
def get_inventory_item(
    inventory_id: str,
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(get_current_user)
):
    item = _get_item_or_404(inventory_id, store)
    return success_response(_with_product(item, store))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_inventory_item(
    payload: InventoryCreate,
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(require_admin)
):
    """Create the inventory item for a product (admin only)."""
    if not store.products.find_by_id(payload.product_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Product not found")

    if store.inventory.find_by_product_id(payload.product_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inventory item already exists for this product"
        )

    item = store.inventory.add(payload.model_dump())

    # Opening stock is recorded in the ledger like any other movement
    if item.quantity > 0:
        store.inventory.add_transaction({
            "inventory_id": item.id,
            "type": TransactionType.IN,
            "quantity": item.quantity,
            "reason": "Initial stock",
            "user_id": current_user.id,
        })

    logger.info(f"Inventory item {item.id} created for product {item.product_id} by {current_user.email}")
    return success_response(item, "Inventory item created successfully", status.HTTP_201_CREATED)


@router.put("/{inventory_id}")
def update_inventory_item(
    inventory_id: str,
    payload: InventoryUpdate,
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(require_admin)
):
    """Update location or stock thresholds (admin only). A null threshold falls back to the product's."""
    updates = payload.model_dump(exclude_unset=True)
    if updates.get("location") is None:
        updates.pop("location", None)

    updated = store.inventory.update(inventory_id, updates)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Inventory item not found")
    return success_response(updated, "Inventory item updated successfully")


@router.put("/{inventory_id}/stock")
def update_stock(
    inventory_id: str,
    payload: StockUpdate,
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(require_admin)
):
    """Set the stock level of an item and record the movement in the ledger (admin only)."""
    updated = store.inventory.update_quantity(inventory_id, payload.quantity, payload.reason, current_user.id)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Inventory item not found")
    return success_response(updated, "Stock updated successfully")


@router.delete("/{inventory_id}")
def delete_inventory_item(
    inventory_id: str,
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(require_admin)
):
    """Delete an inventory item (admin only). Its ledger entries are kept."""
    if store.inventory.delete(inventory_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Inventory item not found")

    logger.info(f"Inventory item {inventory_id} deleted by {current_user.email}")
    return success_response(None, "Inventory item deleted successfully")


@router.get("/{inventory_id}/transactions")
def get_inventory_transactions(
    inventory_id: str,
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(get_current_user)
):
    """Get the ledger entries of one inventory item."""
    _get_item_or_404(inventory_id, store)
    return success_response(store.inventory.get_transactions(inventory_id))
