"""
User management routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from tripjournal.db.session import get_db
from tripjournal.schemas.user import UserResponse, UserUpdate, ImmichSettingsUpdate
from tripjournal.models.user import User
from tripjournal.core.security import get_password_hash
from tripjournal.core.utils import empty_to_none
from tripjournal.api.dependencies import get_current_user

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return current_user


@router.put("/me", response_model=UserResponse)
async def update_current_user(
    user_data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update email, password or timezone."""
    changes = user_data.model_dump(exclude_unset=True)

    if changes.get("email") and changes["email"] != current_user.email:
        taken = db.query(User).filter(User.email == changes["email"], User.id != current_user.id).first()
        if taken:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email already exists"
            )
        current_user.email = changes["email"]

    if changes.get("password"):
        current_user.hashed_password = get_password_hash(changes["password"])

    if "timezone" in changes:
        current_user.timezone = changes["timezone"]

    db.commit()
    db.refresh(current_user)
    return current_user


@router.put("/me/immich", response_model=UserResponse)
async def update_immich_settings(
    settings_data: ImmichSettingsUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Set or clear the Immich connection (send empty values to clear)."""
    api_url = empty_to_none(settings_data.immich_api_url)
    api_key = empty_to_none(settings_data.immich_api_key)
    if bool(api_url) != bool(api_key):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Both Immich URL and API key are required"
        )

    current_user.immich_api_url = api_url.rstrip("/") if api_url else None
    current_user.immich_api_key = api_key
    db.commit()
    db.refresh(current_user)
    return current_user


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get user by ID."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user
