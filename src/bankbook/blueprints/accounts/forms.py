"""Account and transaction form helpers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from ...errors import ValidationError
from ...models import TRANSACTION_TYPES
from ...money import parse_amount


@dataclass(slots=True)
class AccountForm:
    """Rename form for an account."""

    account_name: str = ""
    errors: dict[str, list[str]] = field(default_factory=dict, init=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> AccountForm:
        return cls(account_name=(data.get("account_name") or "").strip())

    def validate(self) -> bool:
        self.errors.clear()
        if not self.account_name:
            self.errors.setdefault("account_name", []).append("Account name is required.")
        elif len(self.account_name) > 128:
            self.errors.setdefault("account_name", []).append(
                "Account name must be 128 characters or fewer."
            )
        return not self.errors


@dataclass(slots=True)
class TransactionForm:
    """Deposit/withdrawal input; ``amount`` becomes a ``Decimal`` once valid."""

    amount: Decimal | str | None = None
    type: str = ""
    errors: dict[str, list[str]] = field(default_factory=dict, init=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TransactionForm:
        return cls(
            amount=data.get("amount"),
            type=(data.get("type") or "").strip().upper(),
        )

    def validate(self) -> bool:
        self.errors.clear()

        if self.amount is None or (isinstance(self.amount, str) and not self.amount.strip()):
            self.errors.setdefault("amount", []).append("Amount is required.")
        else:
            try:
                parsed = parse_amount(self.amount)
            except ValidationError as exc:
                self.errors.setdefault("amount", []).append(exc.message)
            else:
                if parsed <= 0:
                    self.errors.setdefault("amount", []).append(
                        "Amount must be greater than zero."
                    )
                else:
                    self.amount = parsed

        if self.type not in TRANSACTION_TYPES:
            self.errors.setdefault("type", []).append("Choose deposit or withdrawal.")

        return not self.errors

    def first_error(self) -> str | None:
        for messages in self.errors.values():
            if messages:
                return messages[0]
        return None
