from typing import Dict, Iterable, List, Optional

from stockroom.schemas.inventory import InventoryItemInDB, ProductSummary
from stockroom.schemas.product import ProductInDB

ProductIndex = Dict[str, ProductInDB]


def index_products(products: Iterable[ProductInDB]) -> ProductIndex:
    return {product.id: product for product in products}


def effective_min_stock(item: InventoryItemInDB, product: Optional[ProductInDB]) -> Optional[int]:
    """The item's own minimum when set, otherwise the product's."""
    if item.min_stock is not None:
        return item.min_stock
    return product.min_stock if product else None


def effective_max_stock(item: InventoryItemInDB, product: Optional[ProductInDB]) -> Optional[int]:
    if item.max_stock is not None:
        return item.max_stock
    return product.max_stock if product else None


def is_low_stock(item: InventoryItemInDB, product: Optional[ProductInDB]) -> bool:
    threshold = effective_min_stock(item, product)
    return threshold is not None and item.quantity <= threshold


def stock_status(item: InventoryItemInDB, product: Optional[ProductInDB]) -> str:
    """Classify an item as "low", "high" or "normal"."""
    if is_low_stock(item, product):
        return "low"
    ceiling = effective_max_stock(item, product)
    if ceiling and item.quantity >= ceiling:
        return "high"
    return "normal"


def get_low_stock_items(items: Iterable[InventoryItemInDB], products: ProductIndex) -> List[InventoryItemInDB]:
    return [item for item in items if is_low_stock(item, products.get(item.product_id))]


def item_value(item: InventoryItemInDB, product: Optional[ProductInDB]) -> float:
    return item.quantity * product.cost if product else 0.0


def get_inventory_value(items: Iterable[InventoryItemInDB], products: ProductIndex) -> float:
    """Sum of quantity * cost; items whose product is gone count as zero."""
    return sum(item_value(item, products.get(item.product_id)) for item in items)


def product_summary(product: Optional[ProductInDB]) -> Optional[ProductSummary]:
    if product is None:
        return None
    return ProductSummary(
        id=product.id,
        name=product.name,
        sku=product.sku,
        price=product.price,
        cost=product.cost,
        min_stock=product.min_stock,
        max_stock=product.max_stock,
    )
