"""Pytest configuration and shared fixtures for Bankbook tests.

This module provides database fixtures, test data factories, and a Flask
app/client pair for exercising services, repositories and routes without
touching the real app database.
"""

from __future__ import annotations

from datetime import datetime

import pytest

from bankbook import create_app
from bankbook.config import TestingConfig
from bankbook.infra.database import create_db_engine, create_session_factory, init_database
from bankbook.models import Account, Address, Transaction, User
from bankbook.services.users import hash_password

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def config(tmp_path, monkeypatch: pytest.MonkeyPatch) -> TestingConfig:
    """Testing configuration pointing at a throwaway SQLite file."""

    monkeypatch.setenv("BANKBOOK_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("BANKBOOK_DATABASE_URL", f"sqlite:///{tmp_path / 'bankbook-test.db'}")
    return TestingConfig()


@pytest.fixture
def db_engine(config):
    """Create an isolated SQLite database (foreign keys on) for each test.

    Yields:
        Engine: SQLModel engine with every table created
    """
    engine = create_db_engine(config)
    init_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    """Session factory matching what the services expect.

    Each call returns a context manager that commits on success and rolls
    back on error.
    """
    return create_session_factory(db_engine)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def user_factory(session_factory):
    """Factory for creating persisted users.

    Returns:
        Callable: Function that creates and persists User instances
    """

    counter = {"n": 0}

    def _create_user(
        username: str | None = None,
        password: str = "s3cret-pass",
        name: str = "Test User",
        address: dict[str, str] | None = None,
    ) -> User:
        counter["n"] += 1
        username = username or f"user{counter['n']}"
        with session_factory() as session:
            user = User(
                username=username,
                password_hash=hash_password(password),
                name=name,
                accounts=[],
                address=Address(**address) if address else None,
            )
            session.add(user)
            session.flush()
        return user

    return _create_user


@pytest.fixture
def account_factory(session_factory):
    """Factory for creating accounts owned by one or more users.

    Returns:
        Callable: Function that creates and persists Account instances
    """

    def _create_account(*owners: User, account_name: str = "Test Account") -> Account:
        with session_factory() as session:
            account = Account(account_name=account_name, transactions=[])
            for owner in owners:
                account.users.append(session.get(User, owner.user_id))
            session.add(account)
            session.flush()
        return account

    return _create_account


@pytest.fixture
def transaction_factory(session_factory):
    """Factory for creating ledger rows directly, bypassing the recorder.

    Returns:
        Callable: Function that creates and persists Transaction instances
    """

    def _create_transaction(
        account: Account,
        amount_cents: int,
        type: str = "D",
        transaction_date: datetime | None = None,
    ) -> Transaction:
        with session_factory() as session:
            transaction = Transaction(
                account_id=account.account_id,
                amount_cents=amount_cents,
                type=type,
                transaction_date=transaction_date or datetime.now(),
            )
            session.add(transaction)
            session.flush()
        return transaction

    return _create_transaction


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture
def app(tmp_path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("BANKBOOK_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("BANKBOOK_DATABASE_URL", f"sqlite:///{tmp_path / 'bankbook-app.db'}")
    application = create_app("testing")
    application.config.update(TESTING=True, SECRET_KEY="test-secret")
    return application


@pytest.fixture
def client(app):
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def app_session_factory(app):
    """Session factory bound to the Flask app's own database."""

    from bankbook.extensions import get_engine

    return create_session_factory(get_engine(app))
