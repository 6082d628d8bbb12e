"""
Top-level package for the Flashcards API.

All functionality lives in submodules under ``app``; import the ASGI
application as ``flashcards_api.app.main:app``.
"""

__all__ = []
