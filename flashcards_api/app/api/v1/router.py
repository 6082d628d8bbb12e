"""
Top-level router for version 1 of the API.

This router aggregates the entity routers under their resource
prefixes.  When new resources are introduced, include their routers
here.
"""

from fastapi import APIRouter

from .endpoints import cards, decks, users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(decks.router, prefix="/decks", tags=["decks"])
router.include_router(cards.router, prefix="/cards", tags=["cards"])
