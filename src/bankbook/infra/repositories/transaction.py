"""SQLModel implementation of the Transaction repository."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlmodel import Session, select

from ...models.transaction import Transaction


@dataclass
class SQLModelTransactionRepository:
    """Ledger persistence bound to one session."""

    session: Session

    def get_by_id(self, transaction_id: int) -> Optional[Transaction]:
        return self.session.get(Transaction, transaction_id)

    def filter_by_account(self, account_id: int) -> list[Transaction]:
        """Get all transactions for an account in storage order."""
        statement = select(Transaction).where(Transaction.account_id == account_id)
        return list(self.session.exec(statement).all())

    def filter_by_account_newest_first(self, account_id: int) -> list[Transaction]:
        """Get an account's ledger ordered by date, newest first."""
        statement = (
            select(Transaction)
            .where(Transaction.account_id == account_id)
            .order_by(
                Transaction.transaction_date.desc(),  # type: ignore[attr-defined]
                Transaction.transaction_id.desc(),  # type: ignore[union-attr]
            )
        )
        return list(self.session.exec(statement).all())

    def add(self, transaction: Transaction) -> Transaction:
        self.session.add(transaction)
        self.session.flush()
        return transaction

    def delete(self, transaction: Transaction) -> None:
        self.session.delete(transaction)
        self.session.flush()
