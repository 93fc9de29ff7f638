"""SQLModel implementation of the User repository."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from ...models.user import User


@dataclass
class SQLModelUserRepository:
    """User persistence bound to one session."""

    session: Session

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Retrieve a user with its accounts and address loaded."""
        statement = (
            select(User)
            .where(User.user_id == user_id)
            .options(selectinload(User.accounts), selectinload(User.address))
        )
        return self.session.exec(statement).first()

    def get_by_username(self, username: str) -> Optional[User]:
        statement = select(User).where(User.username == username)
        return self.session.exec(statement).first()

    def list_all(self) -> list[User]:
        """List all users ordered by id."""
        statement = (
            select(User)
            .options(selectinload(User.accounts), selectinload(User.address))
            .order_by(User.user_id)  # type: ignore[arg-type]
        )
        return list(self.session.exec(statement).all())

    def save(self, user: User) -> User:
        self.session.add(user)
        self.session.flush()
        return user

    def delete(self, user: User) -> None:
        self.session.delete(user)
        self.session.flush()
