"""SQLModel definitions for ledger transactions."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy import CheckConstraint
from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

from ..money import from_cents

if TYPE_CHECKING:  # pragma: no cover - import guard for circular dependency
    from .account import Account

DEPOSIT = "D"
WITHDRAWAL = "W"
TRANSACTION_TYPES = {DEPOSIT: "Deposit", WITHDRAWAL: "Withdrawal"}


class Transaction(SQLModel, table=True):
    """A single deposit or withdrawal recorded against an account."""

    __tablename__: ClassVar[str] = "transactions"
    __table_args__: ClassVar[tuple] = (
        CheckConstraint("type IN ('D', 'W')", name="ck_transactions_type"),
    )

    transaction_id: Optional[int] = Field(default=None, primary_key=True)
    amount_cents: int = Field(nullable=False, description="Unsigned amount in minor units")
    type: str = Field(nullable=False, min_length=1, max_length=1)
    transaction_date: datetime = Field(nullable=False, index=True)

    account_id: Optional[int] = Field(default=None, foreign_key="accounts.account_id", index=True)
    account: Optional["Account"] = Relationship(
        back_populates="transactions",
        sa_relationship=relationship("Account", back_populates="transactions"),
    )

    @property
    def amount(self) -> Decimal:
        return from_cents(self.amount_cents)

    @property
    def type_label(self) -> str:
        return TRANSACTION_TYPES.get(self.type, self.type)
