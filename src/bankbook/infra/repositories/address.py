"""SQLModel implementation of the Address repository."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlmodel import Session

from ...models.address import Address


@dataclass
class SQLModelAddressRepository:
    """Address persistence bound to one session; addresses share the user's id."""

    session: Session

    def get_by_user_id(self, user_id: int) -> Optional[Address]:
        return self.session.get(Address, user_id)

    def save(self, address: Address) -> Address:
        self.session.add(address)
        self.session.flush()
        return address

    def delete(self, address: Address) -> None:
        self.session.delete(address)
        self.session.flush()
