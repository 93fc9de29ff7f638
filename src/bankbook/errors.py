"""Domain error taxonomy shared by services and blueprints."""

from __future__ import annotations

from typing import Any


class BankbookError(Exception):
    """Base class for errors raised by bankbook services."""


class NotFoundError(BankbookError):
    """A referenced record does not exist in the store."""

    entity = "Record"

    def __init__(self, entity_id: Any):
        self.entity_id = entity_id
        super().__init__(f"{self.entity} {entity_id} was not found")


class UserNotFound(NotFoundError):
    entity = "User"


class AccountNotFound(NotFoundError):
    entity = "Account"


class TransactionNotFound(NotFoundError):
    entity = "Transaction"


class AddressNotFound(NotFoundError):
    entity = "Address"


class ValidationError(BankbookError):
    """Input rejected before it reaches the store."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


__all__ = [
    "AccountNotFound",
    "AddressNotFound",
    "BankbookError",
    "NotFoundError",
    "TransactionNotFound",
    "UserNotFound",
    "ValidationError",
]
