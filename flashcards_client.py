"""Flashcards API client.

This module defines a small client wrapper around the Flashcards REST
API.  It uses the ``requests`` library internally and exposes one
method per route:

* users: :meth:`create_user`, :meth:`list_users`, :meth:`get_user`,
  :meth:`delete_user`
* decks: :meth:`create_deck`, :meth:`list_decks`, :meth:`get_deck`,
  :meth:`update_deck`, :meth:`delete_deck`
* cards: :meth:`create_card`, :meth:`get_card`, :meth:`update_card`,
  :meth:`delete_card`

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is ``None`` (or ``False``/``[]`` for
deletes and listings) and ``error`` is a dictionary with the keys
``status_code`` and ``message``, where ``message`` is taken from the
server's ``{"error": ...}`` body.

Any object with a ``requests``-compatible ``request`` method can be
passed as ``session``, e.g. a pre-configured ``requests.Session`` or a
test client.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class FlashcardsAPI:
    """Client for interacting with the Flashcards API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[Any] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:8080``.
            session: Optional session.  If not supplied a
                ``requests.Session`` is created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/decks``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request (for POST/PATCH).
        Returns:
            A tuple ``(data, error)`` as described in the module docstring.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

        if response.status_code >= 400:
            try:
                body = response.json()
                message = body.get("error") if isinstance(body, dict) else None
            except ValueError:
                message = None
            message = message or response.text or f"HTTP {response.status_code}"
            logger.error("API request failed (%s): %s", response.status_code, message)
            return None, {"status_code": response.status_code, "message": message}

        if response.content:
            return response.json(), None
        return None, None

    def _delete(self, path: str) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("DELETE", path)
        return error is None, error

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def create_user(self, username: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("POST", "/users", json_body={"username": username})

    def list_users(self, username: Optional[str] = None) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """List users, optionally filtered by a username substring."""
        params = {"username": username} if username else None
        data, error = self._request("GET", "/users", params=params)
        if error:
            return [], error
        return data or [], None

    def get_user(self, user_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/users/{user_id}")

    def delete_user(self, user_id: str) -> Tuple[bool, Optional[Error]]:
        return self._delete(f"/users/{user_id}")

    # ------------------------------------------------------------------
    # Decks
    # ------------------------------------------------------------------
    def create_deck(
        self,
        name: str,
        user_id: str,
        *,
        description: Optional[str] = None,
        cards: Optional[List[Dict[str, str]]] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a deck, optionally with ``cards`` given as ``{"front", "back"}`` dicts."""
        payload: Dict[str, Any] = {"name": name, "userId": user_id}
        if description is not None:
            payload["description"] = description
        if cards:
            payload["cards"] = cards
        return self._request("POST", "/decks", json_body=payload)

    def list_decks(self, name: Optional[str] = None) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        params = {"name": name} if name else None
        data, error = self._request("GET", "/decks", params=params)
        if error:
            return [], error
        return data or [], None

    def get_deck(self, deck_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/decks/{deck_id}")

    def update_deck(self, deck_id: str, **fields: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Patch a deck.  Only the keyword arguments given (``name``, ``description``) are sent."""
        return self._request("PATCH", f"/decks/{deck_id}", json_body=fields)

    def delete_deck(self, deck_id: str) -> Tuple[bool, Optional[Error]]:
        return self._delete(f"/decks/{deck_id}")

    # ------------------------------------------------------------------
    # Cards
    # ------------------------------------------------------------------
    def create_card(self, deck_id: str, front: str, back: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request(
            "POST", "/cards", json_body={"deckId": deck_id, "front": front, "back": back}
        )

    def get_card(self, card_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/cards/{card_id}")

    def update_card(self, card_id: str, **fields: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Patch a card.  Only the keyword arguments given (``front``, ``back``) are sent."""
        return self._request("PATCH", f"/cards/{card_id}", json_body=fields)

    def delete_card(self, card_id: str) -> Tuple[bool, Optional[Error]]:
        return self._delete(f"/cards/{card_id}")
