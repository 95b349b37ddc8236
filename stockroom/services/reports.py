import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pandas as pd

from stockroom.repositories.store import Store
from stockroom.schemas.inventory import TransactionInDB
from stockroom.services.stock import (
    effective_max_stock,
    effective_min_stock,
    get_inventory_value,
    get_low_stock_items,
    index_products,
    item_value,
    stock_status,
)

logger = logging.getLogger(__name__)

RECENT_TRANSACTIONS_LIMIT = 10


def _stock_frame(store: Store) -> pd.DataFrame:
    """One row per inventory item joined to its product, with the item value."""
    products = pd.DataFrame(
        [
            {"product_id": p.id, "category_id": p.category_id, "supplier_id": p.supplier_id, "cost": p.cost}
            for p in store.products.get_all()
        ],
        columns=["product_id", "category_id", "supplier_id", "cost"],
    )
    inventory = pd.DataFrame(
        [{"product_id": i.product_id, "quantity": i.quantity} for i in store.inventory.get_all()],
        columns=["product_id", "quantity"],
    )
    frame = inventory.merge(products, on="product_id", how="inner")
    frame["value"] = frame["quantity"] * frame["cost"]
    return frame


def _distribution(products: pd.DataFrame, stock: pd.DataFrame, key: str) -> Dict[str, Dict[str, float]]:
    counts = products.groupby(key).size() if not products.empty else pd.Series(dtype="int64")
    values = stock.groupby(key)["value"].sum() if not stock.empty else pd.Series(dtype="float64")
    return {
        "counts": {k: int(v) for k, v in counts.items()},
        "values": {k: float(v) for k, v in values.items()},
    }


def _newest_first(transactions: List[TransactionInDB]) -> List[TransactionInDB]:
    return sorted(transactions, key=lambda t: t.created_at, reverse=True)


def dashboard(store: Store) -> Dict[str, Any]:
    """Headline numbers plus category and supplier breakdowns."""
    products = store.products.get_all()
    inventory = store.inventory.get_all()
    categories = store.categories.get_all()
    suppliers = store.suppliers.get_all()
    product_index = index_products(products)

    product_frame = pd.DataFrame(
        [{"category_id": p.category_id, "supplier_id": p.supplier_id} for p in products],
        columns=["category_id", "supplier_id"],
    )
    stock = _stock_frame(store)
    by_category = _distribution(product_frame, stock, "category_id")
    by_supplier = _distribution(product_frame, stock, "supplier_id")

    category_distribution = [
        {
            "id": category.id,
            "name": category.name,
            "color": category.color,
            "productCount": by_category["counts"].get(category.id, 0),
            "inventoryValue": by_category["values"].get(category.id, 0.0),
        }
        for category in categories
    ]
    supplier_distribution = [
        {
            "id": supplier.id,
            "name": supplier.name,
            "productCount": by_supplier["counts"].get(supplier.id, 0),
            "inventoryValue": by_supplier["values"].get(supplier.id, 0.0),
        }
        for supplier in suppliers
    ]

    recent = _newest_first(store.inventory.get_transactions())[:RECENT_TRANSACTIONS_LIMIT]

    return {
        "summary": {
            "totalProducts": len(products),
            "totalInventoryItems": len(inventory),
            "totalCategories": len(categories),
            "totalSuppliers": len(suppliers),
            "lowStockCount": len(get_low_stock_items(inventory, product_index)),
            "totalValue": get_inventory_value(inventory, product_index),
        },
        "categoryDistribution": category_distribution,
        "supplierDistribution": supplier_distribution,
        "recentTransactions": recent,
    }


def inventory_summary(store: Store) -> Dict[str, Any]:
    """Per-item stock status; items whose product no longer exists are left out."""
    product_index = index_products(store.products.get_all())

    items = []
    for item in store.inventory.get_all():
        product = product_index.get(item.product_id)
        if product is None:
            continue
        items.append({
            "id": item.id,
            "productId": item.product_id,
            "productName": product.name,
            "sku": product.sku,
            "quantity": item.quantity,
            "minStock": effective_min_stock(item, product),
            "maxStock": effective_max_stock(item, product),
            "stockStatus": stock_status(item, product),
            "location": item.location,
            "lastUpdated": item.last_updated,
            "value": item_value(item, product),
        })

    statuses = pd.Series([entry["stockStatus"] for entry in items], dtype="object").value_counts()
    return {
        "summary": {
            "totalItems": len(items),
            "lowStockCount": int(statuses.get("low", 0)),
            "highStockCount": int(statuses.get("high", 0)),
            "normalStockCount": int(statuses.get("normal", 0)),
        },
        "items": items,
    }


def _urgency(stock_deficit: int) -> str:
    if stock_deficit > 5:
        return "high"
    if stock_deficit > 2:
        return "medium"
    return "low"


def low_stock_report(store: Store) -> Dict[str, Any]:
    """Low-stock items with how much to reorder to get back to the maximum."""
    product_index = index_products(store.products.get_all())

    items = []
    for item in get_low_stock_items(store.inventory.get_all(), product_index):
        product = product_index.get(item.product_id)
        if product is None:
            continue
        min_stock = effective_min_stock(item, product)
        max_stock = effective_max_stock(item, product)
        stock_deficit = min_stock - item.quantity
        items.append({
            "id": item.id,
            "productId": item.product_id,
            "productName": product.name,
            "sku": product.sku,
            "currentStock": item.quantity,
            "minStock": min_stock,
            "maxStock": max_stock,
            "stockDeficit": stock_deficit,
            "reorderAmount": max(stock_deficit, max_stock - item.quantity),
            "location": item.location,
            "lastUpdated": item.last_updated,
            "urgency": _urgency(stock_deficit),
        })

    return {
        "totalLowStockItems": len(items),
        "highUrgency": sum(1 for i in items if i["urgency"] == "high"),
        "mediumUrgency": sum(1 for i in items if i["urgency"] == "medium"),
        "lowUrgency": sum(1 for i in items if i["urgency"] == "low"),
        "items": items,
    }


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def transactions_report(store: Store, start_date: Optional[datetime] = None,
                        end_date: Optional[datetime] = None,
                        transaction_type: Optional[str] = None) -> Dict[str, Any]:
    """Ledger entries in a date range, newest first, with in/out totals."""
    transactions = store.inventory.get_transactions()

    start_date, end_date = _as_utc(start_date), _as_utc(end_date)
    if start_date:
        transactions = [t for t in transactions if t.created_at >= start_date]
    if end_date:
        transactions = [t for t in transactions if t.created_at <= end_date]
    if transaction_type:
        transactions = [t for t in transactions if t.type.value == transaction_type]

    frame = pd.DataFrame(
        [{"type": t.type.value, "quantity": t.quantity} for t in transactions],
        columns=["type", "quantity"],
    )
    totals = frame.groupby("type")["quantity"].sum() if not frame.empty else pd.Series(dtype="int64")
    total_in = int(totals.get("in", 0))
    total_out = int(totals.get("out", 0))

    return {
        "summary": {
            "totalTransactions": len(transactions),
            "totalIn": total_in,
            "totalOut": total_out,
            "netChange": total_in - total_out,
        },
        "transactions": _newest_first(transactions),
    }
