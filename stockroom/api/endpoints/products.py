import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query

from stockroom.api.deps import get_store
from stockroom.api.endpoints.auth import get_current_user, require_admin
from stockroom.core.responses import paginate, paginated_response, success_response
from stockroom.repositories.store import Store
from stockroom.schemas.common import RecordStatus
from stockroom.schemas.product import (
    CategorySummary,
    ProductCreate,
    ProductInDB,
    ProductUpdate,
    ProductWithRelations,
    SupplierSummary,
)
from stockroom.schemas.user import UserInDB

logger = logging.getLogger(__name__)

router = APIRouter()


def _with_relations(product: ProductInDB, store: Store) -> ProductWithRelations:
    """Attach category and supplier summaries to a product."""
    category = store.categories.find_by_id(product.category_id)
    supplier = store.suppliers.find_by_id(product.supplier_id)
    return ProductWithRelations(
        **product.model_dump(),
        category=CategorySummary(id=category.id, name=category.name, color=category.color) if category else None,
        supplier=SupplierSummary(id=supplier.id, name=supplier.name) if supplier else None,
    )


def _get_product_or_404(product_id: str, store: Store) -> ProductInDB:
    product = store.products.find_by_id(product_id)
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return product


def _check_references(store: Store, category_id: Optional[str], supplier_id: Optional[str]):
    if category_id and not store.categories.find_by_id(category_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category not found")
    if supplier_id and not store.suppliers.find_by_id(supplier_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Supplier not found")


@router.get("")
def get_products(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = None,
    category: Optional[str] = None,
    supplier: Optional[str] = None,
    status_filter: Optional[RecordStatus] = Query(None, alias="status"),
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(get_current_user)
):
    """Get products, optionally filtered by search text, category, supplier or status."""
    products = store.products.search(search) if search else store.products.get_all()

    if category:
        products = [p for p in products if p.category_id == category]
    if supplier:
        products = [p for p in products if p.supplier_id == supplier]
    if status_filter:
        products = [p for p in products if p.status == status_filter]

    page_items = [_with_relations(p, store) for p in paginate(products, page, limit)]
    return paginated_response(page_items, page, limit, len(products))


@router.get("/{product_id}")
def get_product(
    product_id: str,
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(get_current_user)
):
    """Get a specific product by ID with its category and supplier."""
    product = _get_product_or_404(product_id, store)
    return success_response(_with_relations(product, store))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_product(
    product: ProductCreate,
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(require_admin)
):
    """Create a new product (admin only)."""
    if store.products.find_by_sku(product.sku):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="SKU already exists")

    _check_references(store, product.category_id, product.supplier_id)

    db_product = store.products.add(product.model_dump())
    logger.info(f"Product {db_product.sku} created by {current_user.email}")
    return success_response(db_product, "Product created successfully", status.HTTP_201_CREATED)


@router.put("/{product_id}")
def update_product(
    product_id: str,
    product_update: ProductUpdate,
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(require_admin)
):
    """Update a product (admin only)."""
    db_product = _get_product_or_404(product_id, store)

    update_data = product_update.model_dump(exclude_unset=True, exclude_none=True)

    # Check if SKU is being changed to one that is taken
    new_sku = update_data.get("sku")
    if new_sku and new_sku != db_product.sku and store.products.find_by_sku(new_sku):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="SKU already exists")

    _check_references(store, update_data.get("category_id"), update_data.get("supplier_id"))

    updated = store.products.update(product_id, update_data)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return success_response(updated, "Product updated successfully")


@router.delete("/{product_id}")
def delete_product(
    product_id: str,
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(require_admin)
):
    """Delete a product (admin only). Its inventory item stays and is valued at zero."""
    if store.products.delete(product_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")

    logger.info(f"Product {product_id} deleted by {current_user.email}")
    return success_response(None, "Product deleted successfully")
