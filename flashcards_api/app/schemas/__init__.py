"""
Pydantic schema definitions for API payloads.

Each entity (users, decks, cards) defines its own request and response
models.  Schemas are separated from the SQL in ``services`` to decouple
the API representation from persistence.
"""
