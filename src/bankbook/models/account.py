"""Account model holding a ledger of transactions."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover
    from .transaction import Transaction
    from .user import User


class Account(SQLModel, table=True):
    __tablename__: ClassVar[str] = "accounts"

    account_id: Optional[int] = Field(default=None, primary_key=True)
    account_name: str = Field(nullable=False, max_length=128)

    users: list["User"] = Relationship(
        back_populates="accounts",
        sa_relationship=relationship(
            "User",
            secondary="user_account",
            back_populates="accounts",
            order_by="User.user_id",
        ),
    )
    transactions: list["Transaction"] = Relationship(
        back_populates="account",
        sa_relationship=relationship(
            "Transaction",
            back_populates="account",
            order_by="Transaction.transaction_date",
            cascade="all, delete-orphan",
        ),
    )
