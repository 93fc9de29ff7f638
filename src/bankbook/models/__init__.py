"""SQLModel table exports."""

from .account import Account
from .address import Address
from .link import UserAccountLink
from .transaction import DEPOSIT, TRANSACTION_TYPES, WITHDRAWAL, Transaction
from .user import User

__all__ = [
    "Account",
    "Address",
    "DEPOSIT",
    "TRANSACTION_TYPES",
    "Transaction",
    "User",
    "UserAccountLink",
    "WITHDRAWAL",
]
