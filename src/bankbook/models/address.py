"""Postal address stored one-to-one with its user."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover
    from .user import User

ADDRESS_FIELDS = ("address_line1", "address_line2", "city", "region", "country", "zip_code")


class Address(SQLModel, table=True):
    """Address keyed by the owning user's id."""

    __tablename__: ClassVar[str] = "users_address"

    user_id: Optional[int] = Field(default=None, primary_key=True, foreign_key="users.user_id")
    address_line1: str = Field(default="", max_length=200)
    address_line2: str = Field(default="", max_length=200)
    city: str = Field(default="", max_length=100)
    region: str = Field(default="", max_length=100)
    country: str = Field(default="", max_length=100)
    zip_code: str = Field(default="", max_length=20)

    user: Optional["User"] = Relationship(
        back_populates="address",
        sa_relationship=relationship("User", back_populates="address"),
    )
