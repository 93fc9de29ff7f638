"""SQLModel implementation of the Account repository."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from ...models.account import Account
from ...models.link import UserAccountLink
from ...models.user import User


@dataclass
class SQLModelAccountRepository:
    """Account persistence bound to one session."""

    session: Session

    def get_by_id(self, account_id: int) -> Optional[Account]:
        """Retrieve an account with owners and ledger loaded."""
        statement = (
            select(Account)
            .where(Account.account_id == account_id)
            .options(selectinload(Account.users), selectinload(Account.transactions))
        )
        return self.session.exec(statement).first()

    def count_for_user(self, user_id: int) -> int:
        """Count the accounts ``user_id`` currently owns."""
        statement = (
            select(func.count())
            .select_from(UserAccountLink)
            .where(UserAccountLink.user_id == user_id)
        )
        return int(self.session.exec(statement).one() or 0)

    def list_for_user(self, user_id: int) -> list[Account]:
        statement = (
            select(Account)
            .join(UserAccountLink, UserAccountLink.account_id == Account.account_id)
            .where(UserAccountLink.user_id == user_id)
            .options(selectinload(Account.transactions))
            .order_by(Account.account_id)  # type: ignore[arg-type]
        )
        return list(self.session.exec(statement).all())

    def add_owner(self, account: Account, user: User) -> None:
        """Record ``user`` as an owner of ``account`` (one membership row)."""
        account.users.append(user)
        self.session.add(account)
        self.session.flush()

    def save(self, account: Account) -> Account:
        self.session.add(account)
        self.session.flush()
        return account

    def delete(self, account: Account) -> None:
        self.session.delete(account)
        self.session.flush()
