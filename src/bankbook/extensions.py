"""Database wiring for the Flask application."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from flask import Flask, current_app
from sqlalchemy.engine import Engine
from sqlmodel import Session

from .config import BaseConfig
from .infra import database

_EXTENSION_KEY = "bankbook"


def init_db(app: Flask) -> None:
    """Create the engine for ``app`` and make sure the schema exists."""

    config: BaseConfig = app.config["BANKBOOK_CONFIG"]
    engine = database.create_db_engine(config)
    database.init_database(engine)

    state = app.extensions.setdefault(_EXTENSION_KEY, {})
    state["engine"] = engine


def get_engine(app: Flask | None = None) -> Engine:
    """Return the engine initialized for the current (or given) app."""

    target = app or current_app
    state = target.extensions.get(_EXTENSION_KEY, {})
    engine = state.get("engine")
    if engine is None:  # pragma: no cover - exercised in integration tests
        raise RuntimeError("Database engine not initialized")
    return engine


@contextmanager
def session_scope() -> Iterator[Session]:
    """Transaction boundary for one top-level operation inside a request."""

    with database.session_scope(get_engine()) as session:
        yield session
