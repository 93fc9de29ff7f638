"""Address services; an address shares its owning user's id."""

from __future__ import annotations

from typing import Mapping, Optional

from ..errors import AddressNotFound, UserNotFound
from ..infra.database import SessionFactory
from ..infra.repositories import SQLModelAddressRepository, SQLModelUserRepository
from ..logging_config import get_logger
from ..models import Address
from ..models.address import ADDRESS_FIELDS

logger = get_logger(__name__)


def find_address(user_id: int, *, session_factory: SessionFactory) -> Optional[Address]:
    with session_factory() as session:
        return SQLModelAddressRepository(session).get_by_user_id(user_id)


def create_address_for_user(user_id: int, *, session_factory: SessionFactory) -> Address:
    """Persist an empty address for ``user_id``, or return the existing one."""

    with session_factory() as session:
        user = SQLModelUserRepository(session).get_by_id(user_id)
        if user is None:
            raise UserNotFound(user_id)
        if user.address is not None:
            return user.address
        address = Address(user_id=user_id)
        user.address = address
        SQLModelAddressRepository(session).save(address)

    logger.info("Created address", extra={"user_id": user_id})
    return address


def save_address(
    user_id: int, fields: Mapping[str, str], *, session_factory: SessionFactory
) -> Address:
    """Create or overwrite the address of ``user_id`` with ``fields``."""

    with session_factory() as session:
        user = SQLModelUserRepository(session).get_by_id(user_id)
        if user is None:
            raise UserNotFound(user_id)
        address = user.address or Address(user_id=user_id)
        for key in ADDRESS_FIELDS:
            if key in fields:
                setattr(address, key, (fields.get(key) or "").strip())
        user.address = address
        SQLModelAddressRepository(session).save(address)

    logger.info("Saved address", extra={"user_id": user_id})
    return address


def delete_address(user_id: int, *, session_factory: SessionFactory) -> None:
    with session_factory() as session:
        repo = SQLModelAddressRepository(session)
        address = repo.get_by_user_id(user_id)
        if address is None:
            raise AddressNotFound(user_id)
        repo.delete(address)
    logger.info("Deleted address", extra={"user_id": user_id})


__all__ = ["create_address_for_user", "delete_address", "find_address", "save_address"]
