"""Association table for shared account ownership."""

from __future__ import annotations

from typing import ClassVar

from sqlmodel import Field, SQLModel


class UserAccountLink(SQLModel, table=True):
    """Membership row linking one user to one account."""

    __tablename__: ClassVar[str] = "user_account"

    user_id: int = Field(foreign_key="users.user_id", primary_key=True)
    account_id: int = Field(foreign_key="accounts.account_id", primary_key=True)
