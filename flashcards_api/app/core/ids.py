"""Identifier generation for new rows."""

import uuid


def new_id() -> str:
    """Return a fresh random UUID4 string; no coordination between workers needed."""
    return str(uuid.uuid4())
