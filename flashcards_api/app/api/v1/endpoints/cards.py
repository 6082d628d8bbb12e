"""
Card endpoints for API v1.

Cards are created inside an existing deck, fetched, partially updated
and deleted.  Listing happens through the owning deck.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from flashcards_api.app.api.deps import get_card_service
from flashcards_api.app.core.errors import NotFoundError, ReferentialViolation, ValidationFailure
from flashcards_api.app.schemas.card import CardCreate, CardPatch, CardRead
from flashcards_api.app.services.card_service import CardService

router = APIRouter()


@router.post("", response_model=CardRead, status_code=status.HTTP_201_CREATED)
def create_card(
    card: CardCreate,
    service: CardService = Depends(get_card_service),
) -> CardRead:
    """Create a card in an existing deck.

    Returns HTTP 400 when a field is blank or the deck does not exist.
    """
    try:
        return service.create_card(card)
    except (ValidationFailure, ReferentialViolation) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e


@router.get("/{card_id}", response_model=CardRead)
def get_card(card_id: str, service: CardService = Depends(get_card_service)) -> CardRead:
    try:
        return service.get_card(card_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e


@router.patch("/{card_id}", response_model=CardRead)
def update_card(
    card_id: str,
    patch: CardPatch,
    service: CardService = Depends(get_card_service),
) -> CardRead:
    """Partially update a card's front and/or back."""
    try:
        return service.update_card(card_id, patch)
    except ValidationFailure as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e


@router.delete("/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_card(card_id: str, service: CardService = Depends(get_card_service)) -> None:
    try:
        service.delete_card(card_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return None
