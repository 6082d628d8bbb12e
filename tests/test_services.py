"""Tests for the service layer, without HTTP in between."""

import pytest

from flashcards_api.app.core.db import Database
from flashcards_api.app.core.errors import (
    ConflictError,
    NotFoundError,
    ReferentialViolation,
    StorageError,
    ValidationFailure,
)
from flashcards_api.app.schemas.card import CardCreate, CardPatch
from flashcards_api.app.schemas.deck import DeckCreate, DeckPatch
from flashcards_api.app.schemas.user import UserCreate
from flashcards_api.app.services import CardService, DeckService, UserService
from flashcards_api.app.services import deck_service as deck_service_module
from flashcards_api.app.services.base import build_update, like_pattern


@pytest.fixture
def users(database: Database) -> UserService:
    return UserService(database)


@pytest.fixture
def decks(database: Database) -> DeckService:
    return DeckService(database)


@pytest.fixture
def cards(database: Database) -> CardService:
    return CardService(database)


def _deck(user_id: str = "0", **kwargs) -> DeckCreate:
    data = {"name": "Spanish", "userId": user_id, "cards": []}
    data.update(kwargs)
    return DeckCreate(**data)


class TestUserService:
    def test_duplicate_username_conflicts(self, users: UserService) -> None:
        users.create_user(UserCreate(username="alice"))

        with pytest.raises(ConflictError):
            users.create_user(UserCreate(username="alice"))

        assert [u.username for u in users.list_users("alice")] == ["alice"]

    def test_blank_username(self, users: UserService) -> None:
        with pytest.raises(ValidationFailure):
            users.create_user(UserCreate(username=""))

    def test_get_missing_user(self, users: UserService) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            users.get_user("missing")

        assert exc_info.value.message == "user not found"


class TestDeckService:
    def test_failed_card_insert_rolls_back_deck(
        self, decks: DeckService, raw, monkeypatch
    ) -> None:
        """A storage failure on the second card leaves neither deck nor first card."""
        ids = iter(["deck-1", "card-1", "card-1"])
        monkeypatch.setattr(deck_service_module, "new_id", lambda: next(ids))

        with pytest.raises(StorageError):
            decks.create_deck(
                _deck(cards=[{"front": "a", "back": "b"}, {"front": "c", "back": "d"}])
            )

        assert raw("SELECT id FROM decks") == []
        assert raw("SELECT id FROM cards") == []

    def test_unknown_user(self, decks: DeckService) -> None:
        with pytest.raises(ReferentialViolation):
            decks.create_deck(_deck(user_id="missing"))

    def test_update_requires_a_field(self, decks: DeckService) -> None:
        deck = decks.create_deck(_deck())

        with pytest.raises(ValidationFailure):
            decks.update_deck(deck.id, DeckPatch())

    def test_update_distinguishes_absent_from_empty(self, decks: DeckService) -> None:
        deck = decks.create_deck(_deck(description="words"))

        renamed = decks.update_deck(deck.id, DeckPatch(name="Español"))
        cleared = decks.update_deck(deck.id, DeckPatch(description=""))

        assert (renamed.name, renamed.description) == ("Español", "words")
        assert (cleared.name, cleared.description) == ("Español", "")

    def test_update_missing_deck(self, decks: DeckService) -> None:
        with pytest.raises(NotFoundError):
            decks.update_deck("missing", DeckPatch(name="x"))

    def test_list_filters_by_name(self, decks: DeckService) -> None:
        decks.create_deck(_deck(name="Spanish"))
        decks.create_deck(_deck(name="German"))

        assert [d.name for d in decks.list_decks("man")] == ["German"]
        assert len(decks.list_decks()) == 2

    def test_delete_missing_deck(self, decks: DeckService) -> None:
        with pytest.raises(NotFoundError):
            decks.delete_deck("missing")


class TestCardService:
    def test_create_and_patch(self, decks: DeckService, cards: CardService) -> None:
        deck = decks.create_deck(_deck())
        card = cards.create_card(CardCreate(deckId=deck.id, front="hola", back="hello"))

        updated = cards.update_card(card.id, CardPatch(back="hi"))

        assert (updated.front, updated.back, updated.deck_id) == ("hola", "hi", deck.id)

    def test_unknown_deck(self, cards: CardService) -> None:
        with pytest.raises(ReferentialViolation):
            cards.create_card(CardCreate(deck_id="missing", front="a", back="b"))

    def test_delete_missing_card(self, cards: CardService) -> None:
        with pytest.raises(NotFoundError):
            cards.delete_card("missing")


class TestSqlHelpers:
    def test_build_update_uses_allow_list_only(self) -> None:
        sql, params = build_update(
            "decks",
            {"name": "name", "description": "description"},
            {"description": "", "user_id; DROP TABLE decks": "x"},
            "deck-1",
        )

        assert sql == "UPDATE decks SET description = ? WHERE id = ?"
        assert params == ("", "deck-1")

    def test_build_update_without_known_fields(self) -> None:
        with pytest.raises(ValidationFailure):
            build_update("cards", {"front": "front"}, {"other": "x"}, "card-1")

    @pytest.mark.parametrize(
        "term, pattern",
        [
            ("abc", "%abc%"),
            ("50%", "%50\\%%"),
            ("a_b", "%a\\_b%"),
            ("back\\slash", "%back\\\\slash%"),
        ],
    )
    def test_like_pattern_escapes_wildcards(self, term: str, pattern: str) -> None:
        assert like_pattern(term) == pattern
