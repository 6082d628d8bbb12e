"""Pytest configuration and fixtures."""

import sqlite3
from collections.abc import Generator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from flashcards_api.app.core.config import Settings
from flashcards_api.app.core.db import Database
from flashcards_api.app.main import create_app


@pytest.fixture
def db_path(tmp_path) -> str:
    """Path of a fresh SQLite file for each test."""
    return str(tmp_path / "test.db")


@pytest.fixture
def database(db_path: str) -> Database:
    """An initialised database used by service level tests."""
    db = Database(db_path)
    db.init_db()
    return db


@pytest.fixture
def app(db_path: str) -> FastAPI:
    return create_app(Settings(database_url=db_path))


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, Any, None]:
    """Create a test client; entering it runs the startup migrations."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def test_user(client: TestClient) -> dict:
    response = client.post("/users", json={"username": "alice"})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def test_deck(client: TestClient, test_user: dict) -> dict:
    response = client.post(
        "/decks",
        json={
            "name": "Spanish",
            "description": "Basic vocabulary",
            "userId": test_user["id"],
            "cards": [
                {"front": "hola", "back": "hello"},
                {"front": "adiós", "back": "goodbye"},
            ],
        },
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def raw(db_path: str):
    """Run a raw query against the test DB and return the rows as dicts."""

    def _run(sql: str, params=()) -> list[dict]:
        conn = sqlite3.connect(db_path)
        conn.row_factory = sqlite3.Row
        try:
            rows = [dict(r) for r in conn.execute(sql, params).fetchall()]
            conn.commit()
            return rows
        finally:
            conn.close()

    return _run
