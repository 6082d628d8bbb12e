"""
Service layer for decks.

Decks are always returned hydrated with their cards.  Creating a deck
may include an initial batch of cards; the deck row and all card rows
are written in one transaction so either everything from the call is
visible afterwards or nothing is.

Listing decks fetches each deck's cards with a separate query.  The
extra round trips are accepted; there is no pagination.
"""

import logging
import sqlite3
from typing import List, Optional

from ..core.errors import NotFoundError, ReferentialViolation, ValidationFailure
from ..core.ids import new_id
from ..schemas.card import CardRead
from ..schemas.deck import DeckCreate, DeckPatch, DeckRead
from .base import BaseService, build_update, is_blank, like_pattern, patch_changes

logger = logging.getLogger(__name__)

# Patchable deck fields and the columns they are stored in.
DECK_COLUMNS = {"name": "name", "description": "description"}


class DeckService(BaseService):
    """Repository operations for the ``decks`` aggregate."""

    def create_deck(self, data: DeckCreate) -> DeckRead:
        """Create a deck and its initial cards atomically.

        All input is validated before the first write.  Raises
        ``ValidationFailure`` for a blank name or userId or for any card
        with a blank front/back, and ``ReferentialViolation`` when the
        user does not exist.  Any storage failure while inserting rolls
        back the deck together with every card inserted so far.
        """
        if is_blank(data.name) or is_blank(data.user_id):
            raise ValidationFailure("name and userId required")
        cards = data.cards or []
        for card in cards:
            if is_blank(card.front) or is_blank(card.back):
                raise ValidationFailure("card front/back required")

        deck_id = new_id()
        conn = self.db.connect()
        try:
            user = conn.execute(
                "SELECT id FROM users WHERE id = ?", (data.user_id,)
            ).fetchone()
            if user is None:
                raise ReferentialViolation("user does not exist")
            conn.execute(
                "INSERT INTO decks (id, name, description, user_id) VALUES (?, ?, ?, ?)",
                (deck_id, data.name, data.description, data.user_id),
            )
            for card in cards:
                conn.execute(
                    "INSERT INTO cards (id, deck_id, front, back) VALUES (?, ?, ?, ?)",
                    (new_id(), deck_id, card.front, card.back),
                )
            conn.commit()
            logger.info("Created deck %s with %d cards", deck_id, len(cards))
            return self._fetch_deck(conn, deck_id)
        except sqlite3.IntegrityError as exc:
            conn.rollback()
            if "FOREIGN KEY" in str(exc):
                # The user vanished between the existence check and the insert.
                raise ReferentialViolation("user does not exist") from exc
            raise self.storage_error(exc) from exc
        except sqlite3.Error as exc:
            conn.rollback()
            raise self.storage_error(exc) from exc
        finally:
            conn.close()

    def list_decks(self, name: Optional[str] = None) -> List[DeckRead]:
        """Return every deck (or those whose name contains ``name``), hydrated."""
        conn = self.db.connect()
        try:
            if name:
                rows = conn.execute(
                    "SELECT id FROM decks WHERE name LIKE ? ESCAPE '\\' ORDER BY rowid",
                    (like_pattern(name),),
                ).fetchall()
            else:
                rows = conn.execute("SELECT id FROM decks ORDER BY rowid").fetchall()
            decks = []
            for row in rows:
                deck = self._fetch_deck(conn, row["id"])
                # Deleted by a concurrent request after the id scan.
                if deck is not None:
                    decks.append(deck)
            return decks
        except sqlite3.Error as exc:
            raise self.storage_error(exc) from exc
        finally:
            conn.close()

    def get_deck(self, deck_id: str) -> DeckRead:
        conn = self.db.connect()
        try:
            deck = self._fetch_deck(conn, deck_id)
        except sqlite3.Error as exc:
            raise self.storage_error(exc) from exc
        finally:
            conn.close()
        if deck is None:
            raise NotFoundError("deck")
        return deck

    def update_deck(self, deck_id: str, patch: DeckPatch) -> DeckRead:
        """Apply the supplied fields of ``patch`` and return the hydrated deck.

        Raises ``ValidationFailure`` when the patch names no known field
        and ``NotFoundError`` when the deck does not exist.
        """
        changes = patch_changes(patch)
        sql, params = build_update("decks", DECK_COLUMNS, changes, deck_id)
        conn = self.db.connect()
        try:
            affected = conn.execute(sql, params).rowcount
            conn.commit()
            if not affected:
                raise NotFoundError("deck")
            logger.info("Updated deck %s: %s", deck_id, sorted(changes))
            deck = self._fetch_deck(conn, deck_id)
        except sqlite3.Error as exc:
            conn.rollback()
            raise self.storage_error(exc) from exc
        finally:
            conn.close()
        if deck is None:
            raise NotFoundError("deck")
        return deck

    def delete_deck(self, deck_id: str) -> None:
        """Delete a deck; its cards go with it through ``ON DELETE CASCADE``."""
        conn = self.db.connect()
        try:
            affected = conn.execute("DELETE FROM decks WHERE id = ?", (deck_id,)).rowcount
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise self.storage_error(exc) from exc
        finally:
            conn.close()
        if not affected:
            raise NotFoundError("deck")
        logger.info("Deleted deck %s", deck_id)

    @staticmethod
    def _fetch_deck(conn: sqlite3.Connection, deck_id: str) -> Optional[DeckRead]:
        """Load a deck row and its cards, or ``None`` if the deck is absent."""
        row = conn.execute(
            "SELECT id, name, description, user_id FROM decks WHERE id = ?",
            (deck_id,),
        ).fetchone()
        if row is None:
            return None
        card_rows = conn.execute(
            "SELECT id, front, back, deck_id FROM cards WHERE deck_id = ? ORDER BY rowid",
            (deck_id,),
        ).fetchall()
        return DeckRead(
            id=row["id"],
            name=row["name"],
            description=row["description"] or "",
            user_id=row["user_id"],
            cards=[
                CardRead(id=c["id"], front=c["front"], back=c["back"], deck_id=c["deck_id"])
                for c in card_rows
            ],
        )
