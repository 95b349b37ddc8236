import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query

from stockroom.api.deps import get_store
from stockroom.api.endpoints.auth import get_current_user, require_admin
from stockroom.core.responses import paginate, paginated_response, success_response
from stockroom.repositories.store import Store
from stockroom.schemas.common import RecordStatus
from stockroom.schemas.supplier import SupplierCreate, SupplierUpdate
from stockroom.schemas.user import UserInDB

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
def get_suppliers(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = None,
    status_filter: Optional[RecordStatus] = Query(None, alias="status"),
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(get_current_user)
):
    """Get suppliers, optionally searched by name, contact person or email."""
    suppliers = store.suppliers.search(search) if search else store.suppliers.get_all()
    if status_filter:
        suppliers = [s for s in suppliers if s.status == status_filter]

    return paginated_response(paginate(suppliers, page, limit), page, limit, len(suppliers))


@router.get("/{supplier_id}")
def get_supplier(
    supplier_id: str,
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(get_current_user)
):
    supplier = store.suppliers.find_by_id(supplier_id)
    if not supplier:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Supplier not found")
    return success_response(supplier)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_supplier(
    supplier: SupplierCreate,
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(require_admin)
):
    new_supplier = store.suppliers.add(supplier.model_dump())
    logger.info(f"Supplier {new_supplier.name} created by {current_user.email}")
    return success_response(new_supplier, "Supplier created successfully", status.HTTP_201_CREATED)


@router.put("/{supplier_id}")
def update_supplier(
    supplier_id: str,
    supplier_update: SupplierUpdate,
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(require_admin)
):
    updated = store.suppliers.update(
        supplier_id, supplier_update.model_dump(exclude_unset=True, exclude_none=True)
    )
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Supplier not found")
    return success_response(updated, "Supplier updated successfully")


@router.delete("/{supplier_id}")
def delete_supplier(
    supplier_id: str,
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(require_admin)
):
    """Delete a supplier (admin only); refused while products still use it."""
    if not store.suppliers.find_by_id(supplier_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Supplier not found")

    if store.products.get_by_supplier(supplier_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete supplier with associated products"
        )

    store.suppliers.delete(supplier_id)
    logger.info(f"Supplier {supplier_id} deleted by {current_user.email}")
    return success_response(None, "Supplier deleted successfully")
