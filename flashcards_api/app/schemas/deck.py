"""
Pydantic models for deck data.

A deck is always returned hydrated, i.e. together with the full list
of its cards.  ``DeckCreate`` may carry an initial batch of cards which
is stored atomically with the deck.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .card import CardDraft, CardRead


class DeckCreate(BaseModel):
    """Schema for creating a deck, optionally with cards."""

    name: str = Field(..., examples=["Spanish"])
    description: Optional[str] = Field(None, examples=["Basic vocabulary"])
    user_id: str = Field(..., alias="userId", examples=["0"])
    cards: Optional[List[CardDraft]] = None

    model_config = {"populate_by_name": True}


class DeckPatch(BaseModel):
    """Schema for partially updating a deck.

    Same presence semantics as ``CardPatch``: ``{"description": ""}``
    clears the description while ``{}`` is rejected.
    """

    name: Optional[str] = None
    description: Optional[str] = None


class DeckRead(BaseModel):
    """Schema for reading a deck together with its cards."""

    id: str
    name: str
    description: str = ""
    user_id: str = Field(..., alias="userId")
    cards: List[CardRead] = Field(default_factory=list)

    model_config = {"populate_by_name": True}
