"""User model for account owners."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover
    from .account import Account
    from .address import Address


class User(SQLModel, table=True):
    """Registered user owning zero or more accounts.

    Equality is by ``user_id`` only; unsaved users are equal only to themselves.
    """

    __tablename__: ClassVar[str] = "users"

    user_id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(nullable=False, unique=True, index=True, max_length=64)
    password_hash: str = Field(nullable=False, max_length=255)
    name: str = Field(default="", nullable=False, max_length=128)
    created_date: date = Field(default_factory=date.today, nullable=False)

    accounts: list["Account"] = Relationship(
        back_populates="users",
        sa_relationship=relationship(
            "Account",
            secondary="user_account",
            back_populates="users",
            order_by="Account.account_id",
        ),
    )
    address: Optional["Address"] = Relationship(
        back_populates="user",
        sa_relationship=relationship(
            "Address",
            back_populates="user",
            uselist=False,
            cascade="all, delete-orphan",
        ),
    )

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, User):
            return NotImplemented
        if self.user_id is None or other.user_id is None:
            return False
        return self.user_id == other.user_id

    def __hash__(self) -> int:
        return hash((User.__name__, self.user_id))

    def __repr__(self) -> str:
        # Credentials and relationships stay out of logs.
        return (
            f"User(user_id={self.user_id!r}, username={self.username!r}, "
            f"name={self.name!r}, created_date={self.created_date!r})"
        )
