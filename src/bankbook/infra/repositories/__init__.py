"""Concrete repository implementations using SQLModel."""

from .account import SQLModelAccountRepository
from .address import SQLModelAddressRepository
from .transaction import SQLModelTransactionRepository
from .user import SQLModelUserRepository

__all__ = [
    "SQLModelAccountRepository",
    "SQLModelAddressRepository",
    "SQLModelTransactionRepository",
    "SQLModelUserRepository",
]
