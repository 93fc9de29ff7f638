"""Account management: creation for a user, renaming and removal."""

from __future__ import annotations

from typing import Optional

from ..errors import AccountNotFound, UserNotFound, ValidationError
from ..infra.database import SessionFactory
from ..infra.repositories import SQLModelAccountRepository, SQLModelUserRepository
from ..logging_config import get_logger
from ..models import Account

logger = get_logger(__name__)

ACCOUNT_NAME_PREFIX = "Account #"
ACCOUNT_NAME_MAX_LENGTH = 128


def account_display_name(owned_count: int) -> str:
    """Return the label for a user's next account given how many they own."""

    return f"{ACCOUNT_NAME_PREFIX}{owned_count + 1}"


def find_account(account_id: int, *, session_factory: SessionFactory) -> Optional[Account]:
    """Retrieve an account with owners and ledger loaded, or ``None``."""

    with session_factory() as session:
        return SQLModelAccountRepository(session).get_by_id(account_id)


def get_account(account_id: int, *, session_factory: SessionFactory) -> Account:
    account = find_account(account_id, session_factory=session_factory)
    if account is None:
        raise AccountNotFound(account_id)
    return account


def create_account_for_user(user_id: int, *, session_factory: SessionFactory) -> Account:
    """Open a new account owned by ``user_id``.

    The label counts the user's current accounts; two concurrent calls may
    read the same count and produce the same label.
    """

    with session_factory() as session:
        user = SQLModelUserRepository(session).get_by_id(user_id)
        if user is None:
            raise UserNotFound(user_id)

        accounts = SQLModelAccountRepository(session)
        account = Account(
            account_name=account_display_name(accounts.count_for_user(user_id)),
            transactions=[],
        )
        accounts.save(account)
        accounts.add_owner(account, user)

    logger.info(
        "Created account",
        extra={"user_id": user_id, "account_id": account.account_id, "account_name": account.account_name},
    )
    return account


def rename_account(
    account_id: int, account_name: str, *, session_factory: SessionFactory
) -> Account:
    name = (account_name or "").strip()
    if not name:
        raise ValidationError("account_name", "Account name is required.")
    if len(name) > ACCOUNT_NAME_MAX_LENGTH:
        raise ValidationError(
            "account_name", f"Account name must be {ACCOUNT_NAME_MAX_LENGTH} characters or fewer."
        )

    with session_factory() as session:
        repo = SQLModelAccountRepository(session)
        account = repo.get_by_id(account_id)
        if account is None:
            raise AccountNotFound(account_id)
        account.account_name = name
        repo.save(account)

    logger.info("Renamed account", extra={"account_id": account_id, "account_name": name})
    return account


def delete_account(account_id: int, *, session_factory: SessionFactory) -> None:
    """Delete an account together with its memberships and ledger."""

    with session_factory() as session:
        repo = SQLModelAccountRepository(session)
        account = repo.get_by_id(account_id)
        if account is None:
            raise AccountNotFound(account_id)
        repo.delete(account)
    logger.info("Deleted account", extra={"account_id": account_id})


__all__ = [
    "account_display_name",
    "create_account_for_user",
    "delete_account",
    "find_account",
    "get_account",
    "rename_account",
]
