"""
Deck endpoints for API v1.

Decks are created (optionally with an initial batch of cards), listed,
fetched, partially updated and deleted.  Every deck in a response is
hydrated with its cards.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from flashcards_api.app.api.deps import get_deck_service
from flashcards_api.app.core.errors import NotFoundError, ReferentialViolation, ValidationFailure
from flashcards_api.app.schemas.deck import DeckCreate, DeckPatch, DeckRead
from flashcards_api.app.services.deck_service import DeckService

router = APIRouter()


@router.post("", response_model=DeckRead, status_code=status.HTTP_201_CREATED)
def create_deck(
    deck: DeckCreate,
    service: DeckService = Depends(get_deck_service),
) -> DeckRead:
    """Create a deck and its cards in one transaction.

    Returns HTTP 400 when the name or userId is blank, when any card
    has a blank front or back, or when the user does not exist.  In
    all of these cases nothing from the request is stored.
    """
    try:
        return service.create_deck(deck)
    except (ValidationFailure, ReferentialViolation) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e


@router.get("", response_model=List[DeckRead])
def list_decks(
    name: Optional[str] = Query(None, description="Substring the deck name must contain"),
    service: DeckService = Depends(get_deck_service),
) -> List[DeckRead]:
    """List decks with their cards, optionally filtered by name."""
    return service.list_decks(name)


@router.get("/{deck_id}", response_model=DeckRead)
def get_deck(deck_id: str, service: DeckService = Depends(get_deck_service)) -> DeckRead:
    try:
        return service.get_deck(deck_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e


@router.patch("/{deck_id}", response_model=DeckRead)
def update_deck(
    deck_id: str,
    patch: DeckPatch,
    service: DeckService = Depends(get_deck_service),
) -> DeckRead:
    """Partially update a deck's name and/or description.

    Fields absent from the body are left unchanged.  An empty body
    yields HTTP 400; an unknown deck yields HTTP 404.
    """
    try:
        return service.update_deck(deck_id, patch)
    except ValidationFailure as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e


@router.delete("/{deck_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_deck(deck_id: str, service: DeckService = Depends(get_deck_service)) -> None:
    """Delete a deck; its cards are removed by the cascade."""
    try:
        service.delete_deck(deck_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return None
