"""Ledger services: balance folding and transaction recording."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Callable, Iterable, Optional, Protocol, Sequence

from ..errors import AccountNotFound, TransactionNotFound, ValidationError
from ..infra.database import SessionFactory
from ..infra.repositories import SQLModelAccountRepository, SQLModelTransactionRepository
from ..logging_config import get_logger
from ..models import DEPOSIT, TRANSACTION_TYPES, WITHDRAWAL, Account, Transaction, User
from ..money import AmountInput, from_cents, to_cents

logger = get_logger(__name__)

Clock = Callable[[], datetime]


class LedgerEntry(Protocol):
    """Anything carrying a type code and an amount in cents."""

    type: str
    amount_cents: int


@dataclass(frozen=True, slots=True)
class AccountLedger:
    """An account with its owners, newest-first ledger and derived balance."""

    account: Account
    owners: Sequence[User]
    transactions: Sequence[Transaction]
    balance: Decimal


def calculate_balance(transactions: Iterable[LedgerEntry]) -> Decimal:
    """Fold a ledger into ``sum(deposits) - sum(withdrawals)``.

    Entries with any other type code are ignored. The fold runs on integer
    cents, so the result is exact and independent of ordering.
    """

    cents = 0
    for entry in transactions:
        if entry.type == DEPOSIT:
            cents += entry.amount_cents
        elif entry.type == WITHDRAWAL:
            cents -= entry.amount_cents
    return from_cents(cents)


def normalize_type(txn_type: str) -> str:
    """Return the canonical type code or raise ``ValidationError``."""

    code = (txn_type or "").strip().upper()
    if code not in TRANSACTION_TYPES:
        raise ValidationError("type", "Type must be D (deposit) or W (withdrawal).")
    return code


def account_balance(account_id: int, *, session_factory: SessionFactory) -> Decimal:
    """Return the balance of ``account_id`` computed from its stored ledger."""

    with session_factory() as session:
        if SQLModelAccountRepository(session).get_by_id(account_id) is None:
            raise AccountNotFound(account_id)
        transactions = SQLModelTransactionRepository(session).filter_by_account(account_id)
        return calculate_balance(transactions)


def create_transaction(
    account_id: int,
    amount: AmountInput,
    txn_type: str,
    *,
    session_factory: SessionFactory,
    clock: Clock = datetime.now,
) -> Transaction:
    """Append a deposit or withdrawal to an account's ledger.

    The transaction is linked to the account and flushed inside one session
    scope, so the account's loaded ledger and the store agree on return.
    """

    code = normalize_type(txn_type)
    amount_cents = to_cents(amount)
    if amount_cents <= 0:
        raise ValidationError("amount", "Amount must be greater than zero.")

    with session_factory() as session:
        account = SQLModelAccountRepository(session).get_by_id(account_id)
        if account is None:
            raise AccountNotFound(account_id)

        transaction = Transaction(
            amount_cents=amount_cents,
            type=code,
            transaction_date=clock(),
        )
        account.transactions.append(transaction)
        SQLModelTransactionRepository(session).add(transaction)

    logger.info(
        "Recorded transaction",
        extra={
            "account_id": account_id,
            "transaction_id": transaction.transaction_id,
            "type": code,
            "amount_cents": amount_cents,
        },
    )
    return transaction


def find_transaction(
    transaction_id: int, *, session_factory: SessionFactory
) -> Optional[Transaction]:
    with session_factory() as session:
        return SQLModelTransactionRepository(session).get_by_id(transaction_id)


def get_transaction(transaction_id: int, *, session_factory: SessionFactory) -> Transaction:
    transaction = find_transaction(transaction_id, session_factory=session_factory)
    if transaction is None:
        raise TransactionNotFound(transaction_id)
    return transaction


def list_transactions_for_account(
    account_id: int, *, session_factory: SessionFactory
) -> list[Transaction]:
    """Return the ledger for ``account_id``, newest first."""

    with session_factory() as session:
        return SQLModelTransactionRepository(session).filter_by_account_newest_first(account_id)


def delete_transaction(transaction_id: int, *, session_factory: SessionFactory) -> None:
    with session_factory() as session:
        repo = SQLModelTransactionRepository(session)
        transaction = repo.get_by_id(transaction_id)
        if transaction is None:
            raise TransactionNotFound(transaction_id)
        repo.delete(transaction)
    logger.info("Deleted transaction", extra={"transaction_id": transaction_id})


def load_account_ledger(account_id: int, *, session_factory: SessionFactory) -> AccountLedger:
    """Gather everything the account page renders in one read."""

    with session_factory() as session:
        account = SQLModelAccountRepository(session).get_by_id(account_id)
        if account is None:
            raise AccountNotFound(account_id)
        transactions = SQLModelTransactionRepository(session).filter_by_account_newest_first(
            account_id
        )
        return AccountLedger(
            account=account,
            owners=list(account.users),
            transactions=transactions,
            balance=calculate_balance(transactions),
        )


__all__ = [
    "AccountLedger",
    "account_balance",
    "calculate_balance",
    "create_transaction",
    "delete_transaction",
    "find_transaction",
    "get_transaction",
    "list_transactions_for_account",
    "load_account_ledger",
    "normalize_type",
]
