"""
Pydantic models for card data.

Cards are exchanged with camelCase keys (``deckId``) on the wire while
the Python attributes stay snake_case; ``populate_by_name`` allows both
spellings when constructing models in code.
"""

from typing import Optional

from pydantic import BaseModel, Field


class CardDraft(BaseModel):
    """Front and back of a card created together with its deck."""

    front: str = Field(..., examples=["hola"])
    back: str = Field(..., examples=["hello"])


class CardCreate(CardDraft):
    """Schema for creating a card in an existing deck."""

    deck_id: str = Field(..., alias="deckId")

    model_config = {"populate_by_name": True}


class CardPatch(BaseModel):
    """Schema for partially updating a card.

    Only the fields present in the request body are written; an empty
    string is a value and overwrites, an absent field is left alone.
    """

    front: Optional[str] = None
    back: Optional[str] = None


class CardRead(BaseModel):
    """Schema for reading a card from the API."""

    id: str
    front: str
    back: str
    deck_id: str = Field(..., alias="deckId")

    model_config = {"populate_by_name": True}
