import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from stockroom.api.deps import get_settings, get_store
from stockroom.core.config import Settings
from stockroom.core.responses import success_response
from stockroom.core.security import create_access_token, decode_access_token, hash_password, verify_password
from stockroom.repositories.store import Store
from stockroom.schemas.user import LoginRequest, SignupRequest, UserInDB, UserPublic, UserRole

logger = logging.getLogger(__name__)

router = APIRouter()

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> UserInDB:
    """Resolve the bearer token to a stored user, or fail with 401."""
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Access denied. No token provided.")

    user_id = decode_access_token(credentials.credentials, settings)
    if not user_id:
        raise _unauthorized("Invalid token.")

    user = store.users.find_by_id(user_id)
    if user is None:
        raise _unauthorized("Invalid token. User not found.")
    return user


def check_user_role(allowed_roles: List[UserRole]):
    """Build a dependency that only lets users with one of ``allowed_roles`` through."""
    def role_checker(current_user: UserInDB = Depends(get_current_user)) -> UserInDB:
        if current_user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access denied. Admin privileges required.",
            )
        return current_user
    return role_checker


require_admin = check_user_role([UserRole.ADMIN])


@router.post("/signup")
def signup(
    payload: SignupRequest,
    store: Store = Depends(get_store),
):
    """Register a new regular user."""
    if store.users.find_by_email(payload.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")

    user = store.users.add({
        "first_name": payload.first_name,
        "last_name": payload.last_name,
        "name": f"{payload.first_name} {payload.last_name}",
        "email": payload.email,
        "password": hash_password(payload.password),
        "role": UserRole.USER,
    })
    logger.info(f"New user registered: {user.email}")

    return success_response({"user": UserPublic.from_user(user)}, "Account created successfully")


@router.post("/login")
def login(
    payload: LoginRequest,
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Exchange email and password for a bearer token."""
    user = store.users.find_by_email(payload.email)
    if user is None or not verify_password(payload.password, user.password):
        logger.info(f"Failed login attempt for {payload.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    token = create_access_token(user.id, settings)
    logger.info(f"User logged in: {user.email}")

    return success_response({"user": UserPublic.from_user(user), "token": token}, "Login successful")


@router.get("/me")
def read_current_user(current_user: UserInDB = Depends(get_current_user)):
    return success_response({"user": UserPublic.from_user(current_user)})


@router.post("/logout")
def logout(current_user: UserInDB = Depends(get_current_user)):
    # Tokens are stateless; the client discards its copy
    return success_response(None, "Logout successful")
