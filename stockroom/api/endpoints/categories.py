import logging
from fastapi import APIRouter, Depends, HTTPException, status

from stockroom.api.deps import get_store
from stockroom.api.endpoints.auth import get_current_user, require_admin
from stockroom.core.responses import success_response
from stockroom.repositories.store import Store
from stockroom.schemas.category import CategoryCreate, CategoryUpdate
from stockroom.schemas.user import UserInDB

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
def get_categories(
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(get_current_user)
):
    return success_response(store.categories.get_all())


@router.get("/{category_id}")
def get_category(
    category_id: str,
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(get_current_user)
):
    category = store.categories.find_by_id(category_id)
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return success_response(category)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_category(
    category: CategoryCreate,
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(require_admin)
):
    new_category = store.categories.add(category.model_dump())
    logger.info(f"Category {new_category.name} created by {current_user.email}")
    return success_response(new_category, "Category created successfully", status.HTTP_201_CREATED)


@router.put("/{category_id}")
def update_category(
    category_id: str,
    category_update: CategoryUpdate,
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(require_admin)
):
    updated = store.categories.update(
        category_id, category_update.model_dump(exclude_unset=True, exclude_none=True)
    )
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return success_response(updated, "Category updated successfully")


@router.delete("/{category_id}")
def delete_category(
    category_id: str,
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(require_admin)
):
    """Delete a category (admin only); refused while products still use it."""
    if not store.categories.find_by_id(category_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")

    if store.products.get_by_category(category_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete category with associated products"
        )

    store.categories.delete(category_id)
    logger.info(f"Category {category_id} deleted by {current_user.email}")
    return success_response(None, "Category deleted successfully")
