"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules: ``core`` (configuration, database, logging, errors),
``schemas`` (pydantic payloads), ``services`` (SQL repositories) and
``api`` (versioned routers).
"""

from .main import app, create_app  # noqa: F401
