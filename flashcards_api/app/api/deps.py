"""
FastAPI dependency providers for the services.

``create_app`` stores one instance of each service on ``app.state``;
these providers hand them to the endpoints so routes never reach for
module level state.
"""

from fastapi import Request

from ..services import CardService, DeckService, UserService


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_deck_service(request: Request) -> DeckService:
    return request.app.state.deck_service


def get_card_service(request: Request) -> CardService:
    return request.app.state.card_service
