"""
Service layer for cards.

Cards always belong to an existing deck.  They are created one at a
time here (batches are created with their deck by ``DeckService``),
patched field by field and deleted individually.
"""

import logging
import sqlite3

from ..core.errors import NotFoundError, ReferentialViolation, ValidationFailure
from ..core.ids import new_id
from ..schemas.card import CardCreate, CardPatch, CardRead
from .base import BaseService, build_update, is_blank, patch_changes

logger = logging.getLogger(__name__)

CARD_COLUMNS = {"front": "front", "back": "back"}


class CardService(BaseService):
    """Repository operations for the ``cards`` table."""

    def create_card(self, data: CardCreate) -> CardRead:
        """Insert a card into an existing deck.

        Raises ``ValidationFailure`` if any field is blank and
        ``ReferentialViolation`` if the deck does not exist.
        """
        if is_blank(data.deck_id) or is_blank(data.front) or is_blank(data.back):
            raise ValidationFailure("deckId, front and back required")
        card_id = new_id()
        conn = self.db.connect()
        try:
            deck = conn.execute(
                "SELECT id FROM decks WHERE id = ?", (data.deck_id,)
            ).fetchone()
            if deck is None:
                raise ReferentialViolation("deck does not exist")
            conn.execute(
                "INSERT INTO cards (id, deck_id, front, back) VALUES (?, ?, ?, ?)",
                (card_id, data.deck_id, data.front, data.back),
            )
            conn.commit()
        except sqlite3.IntegrityError as exc:
            conn.rollback()
            if "FOREIGN KEY" in str(exc):
                raise ReferentialViolation("deck does not exist") from exc
            raise self.storage_error(exc) from exc
        except sqlite3.Error as exc:
            conn.rollback()
            raise self.storage_error(exc) from exc
        finally:
            conn.close()
        logger.info("Created card %s in deck %s", card_id, data.deck_id)
        return CardRead(id=card_id, front=data.front, back=data.back, deck_id=data.deck_id)

    def get_card(self, card_id: str) -> CardRead:
        conn = self.db.connect()
        try:
            row = conn.execute(
                "SELECT id, front, back, deck_id FROM cards WHERE id = ?", (card_id,)
            ).fetchone()
        except sqlite3.Error as exc:
            raise self.storage_error(exc) from exc
        finally:
            conn.close()
        if row is None:
            raise NotFoundError("card")
        return CardRead(id=row["id"], front=row["front"], back=row["back"], deck_id=row["deck_id"])

    def update_card(self, card_id: str, patch: CardPatch) -> CardRead:
        """Apply the supplied fields of ``patch`` and return the stored card."""
        changes = patch_changes(patch)
        sql, params = build_update("cards", CARD_COLUMNS, changes, card_id)
        conn = self.db.connect()
        try:
            affected = conn.execute(sql, params).rowcount
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise self.storage_error(exc) from exc
        finally:
            conn.close()
        if not affected:
            raise NotFoundError("card")
        logger.info("Updated card %s: %s", card_id, sorted(changes))
        return self.get_card(card_id)

    def delete_card(self, card_id: str) -> None:
        conn = self.db.connect()
        try:
            affected = conn.execute("DELETE FROM cards WHERE id = ?", (card_id,)).rowcount
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise self.storage_error(exc) from exc
        finally:
            conn.close()
        if not affected:
            raise NotFoundError("card")
        logger.info("Deleted card %s", card_id)
