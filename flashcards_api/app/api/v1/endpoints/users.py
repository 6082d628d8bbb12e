"""
User endpoints for API v1.

Registration, lookup, filtering by username and deletion.  Deleting a
user also deletes every deck (and card) the user owns.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from flashcards_api.app.api.deps import get_user_service
from flashcards_api.app.core.errors import ConflictError, NotFoundError, ValidationFailure
from flashcards_api.app.schemas.user import UserCreate, UserRead
from flashcards_api.app.services.user_service import UserService

router = APIRouter()


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(
    user: UserCreate,
    service: UserService = Depends(get_user_service),
) -> UserRead:
    """Register a new user.

    Returns HTTP 400 for a blank username and HTTP 409 if the username
    is already taken.
    """
    try:
        return service.create_user(user)
    except ValidationFailure as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e


@router.get("", response_model=List[UserRead])
def list_users(
    username: Optional[str] = Query(None, description="Substring the username must contain"),
    service: UserService = Depends(get_user_service),
) -> List[UserRead]:
    """List all users, optionally filtered by a username substring."""
    return service.list_users(username)


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: str, service: UserService = Depends(get_user_service)) -> UserRead:
    try:
        return service.get_user(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: str, service: UserService = Depends(get_user_service)) -> None:
    """Delete a user together with all of their decks and cards."""
    try:
        service.delete_user(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return None
