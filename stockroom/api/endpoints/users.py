import logging
from fastapi import APIRouter, Depends, HTTPException, status

from stockroom.api.deps import get_store
from stockroom.api.endpoints.auth import require_admin
from stockroom.core.responses import success_response
from stockroom.repositories.store import Store
from stockroom.schemas.user import UserInDB, UserPublic, UserUpdate

logger = logging.getLogger(__name__)

# Every route here is admin only
router = APIRouter(dependencies=[Depends(require_admin)])


def _get_user_or_404(user_id: str, store: Store) -> UserInDB:
    user = store.users.find_by_id(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.get("")
def get_users(store: Store = Depends(get_store)):
    return success_response([UserPublic.from_user(user) for user in store.users.get_all()])


@router.get("/{user_id}")
def get_user(user_id: str, store: Store = Depends(get_store)):
    return success_response(UserPublic.from_user(_get_user_or_404(user_id, store)))


@router.put("/{user_id}")
def update_user(
    user_id: str,
    user_update: UserUpdate,
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(require_admin)
):
    """Update a user's name, email or role."""
    user = _get_user_or_404(user_id, store)
    update_data = user_update.model_dump(exclude_unset=True, exclude_none=True)

    new_email = update_data.get("email")
    if new_email and new_email.lower() != user.email:
        existing = store.users.find_by_email(new_email)
        if existing and existing.id != user_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")

    updated = store.users.update(user_id, update_data)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    if "role" in update_data:
        logger.info(f"User {user_id} role set to {updated.role.value} by {current_user.email}")
    return success_response(UserPublic.from_user(updated), "User updated successfully")


@router.delete("/{user_id}")
def delete_user(
    user_id: str,
    store: Store = Depends(get_store),
    current_user: UserInDB = Depends(require_admin)
):
    user = _get_user_or_404(user_id, store)
    if user.id == current_user.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot delete your own account")

    store.users.delete(user_id)
    logger.info(f"User {user_id} deleted by {current_user.email}")
    return success_response(None, "User deleted successfully")
