"""User directory services: registration, lookup, profile updates and removal."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping, Optional, Sequence

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError

from ..errors import UserNotFound, ValidationError
from ..infra.database import SessionFactory
from ..infra.repositories import SQLModelAccountRepository, SQLModelUserRepository
from ..logging_config import get_logger
from ..models import Account, Address, User
from ..models.address import ADDRESS_FIELDS
from .ledger import calculate_balance

logger = get_logger(__name__)

_hasher = PasswordHasher()
USERNAME_MAX_LENGTH = 64
NAME_MAX_LENGTH = 128


def _clean_username(username: str) -> str:
    username = (username or "").strip()
    if not username:
        raise ValidationError("username", "Username is required.")
    if len(username) > USERNAME_MAX_LENGTH:
        raise ValidationError(
            "username", f"Username must be {USERNAME_MAX_LENGTH} characters or fewer."
        )
    return username


def _clean_name(name: str) -> str:
    name = (name or "").strip()
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError("name", f"Name must be {NAME_MAX_LENGTH} characters or fewer.")
    return name


def _address_values(fields: Optional[Mapping[str, str]]) -> dict[str, str]:
    """Pick the known address columns out of ``fields``, stripped."""

    if not fields:
        return {}
    return {key: (fields.get(key) or "").strip() for key in ADDRESS_FIELDS if key in fields}


def hash_password(password: str) -> str:
    if not password:
        raise ValidationError("password", "Password is required.")
    return _hasher.hash(password)


def verify_password(user: User, password: str) -> bool:
    """Return True when ``password`` matches the stored hash.

    Not part of the public service surface; there is no login flow, so this
    only checks what ``register_user`` and ``update_user`` stored.
    """

    try:
        return _hasher.verify(user.password_hash, password)
    except (VerifyMismatchError, InvalidHash, VerificationError):
        return False


def register_user(
    *,
    username: str,
    password: str,
    name: str = "",
    address_fields: Optional[Mapping[str, str]] = None,
    session_factory: SessionFactory,
) -> User:
    """Create a new user with a hashed password.

    An address row is created alongside the user when any address value is
    supplied.
    """

    username = _clean_username(username)
    name = _clean_name(name)
    password_hash = hash_password(password)
    address_values = _address_values(address_fields)

    with session_factory() as session:
        repo = SQLModelUserRepository(session)
        if repo.get_by_username(username) is not None:
            raise ValidationError("username", "Username already exists.")

        address = Address(**address_values) if any(address_values.values()) else None
        user = User(
            username=username,
            password_hash=password_hash,
            name=name,
            accounts=[],
            address=address,
        )
        repo.save(user)

    logger.info("Registered user", extra={"user_id": user.user_id, "username": username})
    return user


def list_users(*, session_factory: SessionFactory) -> list[User]:
    """Return all users ordered by id with accounts and address loaded."""

    with session_factory() as session:
        return SQLModelUserRepository(session).list_all()


def find_user(user_id: int, *, session_factory: SessionFactory) -> Optional[User]:
    with session_factory() as session:
        return SQLModelUserRepository(session).get_by_id(user_id)


def get_user(user_id: int, *, session_factory: SessionFactory) -> User:
    user = find_user(user_id, session_factory=session_factory)
    if user is None:
        raise UserNotFound(user_id)
    return user


def update_user(
    user_id: int,
    *,
    username: str,
    name: str = "",
    password: Optional[str] = None,
    address_fields: Optional[Mapping[str, str]] = None,
    session_factory: SessionFactory,
) -> User:
    """Overwrite a user's profile and save its address.

    The password is re-hashed only when a new one is given. Saving creates
    the address row the first time a user without one is submitted.
    """

    username = _clean_username(username)
    name = _clean_name(name)
    password_hash = hash_password(password) if password else None
    address_values = _address_values(address_fields)

    with session_factory() as session:
        repo = SQLModelUserRepository(session)
        user = repo.get_by_id(user_id)
        if user is None:
            raise UserNotFound(user_id)

        clash = repo.get_by_username(username)
        if clash is not None and clash != user:
            raise ValidationError("username", "Username already exists.")

        user.username = username
        user.name = name
        if password_hash is not None:
            user.password_hash = password_hash

        if address_fields is not None:
            address = user.address or Address(user_id=user.user_id)
            for key, value in address_values.items():
                setattr(address, key, value)
            user.address = address
        repo.save(user)

    logger.info("Updated user", extra={"user_id": user_id})
    return user


def delete_user(user_id: int, *, session_factory: SessionFactory) -> None:
    """Delete a user and its address; shared accounts stay with other owners."""

    with session_factory() as session:
        repo = SQLModelUserRepository(session)
        user = repo.get_by_id(user_id)
        if user is None:
            raise UserNotFound(user_id)
        repo.delete(user)
    logger.info("Deleted user", extra={"user_id": user_id})


def address_for_display(user: User) -> Address:
    """Return the user's address, or a blank one for rendering only.

    The blank address is keyed to the user's id but never attached to the
    user or a session, so viewing a user never writes an address row.
    """

    if user.address is not None:
        return user.address
    return Address(user_id=user.user_id)


@dataclass(frozen=True, slots=True)
class AccountSummary:
    account: Account
    balance: Decimal


@dataclass(frozen=True, slots=True)
class UserProfile:
    """A user with the address to render and each owned account's balance."""

    user: User
    address: Address
    accounts: Sequence[AccountSummary]


def load_user_profile(user_id: int, *, session_factory: SessionFactory) -> UserProfile:
    """Gather everything the user page renders in one read."""

    with session_factory() as session:
        user = SQLModelUserRepository(session).get_by_id(user_id)
        if user is None:
            raise UserNotFound(user_id)
        accounts = SQLModelAccountRepository(session).list_for_user(user_id)
        summaries = [
            AccountSummary(account=account, balance=calculate_balance(account.transactions))
            for account in accounts
        ]
    return UserProfile(user=user, address=address_for_display(user), accounts=summaries)


__all__ = [
    "AccountSummary",
    "UserProfile",
    "address_for_display",
    "delete_user",
    "find_user",
    "get_user",
    "hash_password",
    "list_users",
    "load_user_profile",
    "register_user",
    "update_user",
]
