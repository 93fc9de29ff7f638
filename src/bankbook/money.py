"""Fixed-point money helpers.

Amounts are persisted as integer cents and surfaced as ``Decimal`` values
quantized to two places. Binary floats never take part in ledger arithmetic;
a float input is converted through its ``repr`` so ``0.1`` means ten cents.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, DecimalException
from typing import Union

from .errors import ValidationError

CENT = Decimal("0.01")
# Largest cent value a signed 64-bit INTEGER column can hold.
MAX_CENTS = 2**63 - 1

AmountInput = Union[Decimal, int, float, str]


def parse_amount(value: AmountInput, *, field: str = "amount") -> Decimal:
    """Coerce user or caller input into a cent-quantized ``Decimal``."""

    if isinstance(value, bool):
        raise ValidationError(field, "Enter a valid number for the amount.")
    if isinstance(value, float):
        value = repr(value)
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if value.startswith("$"):
            value = value[1:].strip()
        if not value:
            raise ValidationError(field, "Amount is required.")
    try:
        parsed = Decimal(value)
        if not parsed.is_finite():
            raise ValidationError(field, "Enter a valid number for the amount.")
        if abs(parsed) * 100 > MAX_CENTS:
            raise ValidationError(field, "Amount is too large.")
        quantized = parsed.quantize(CENT, rounding=ROUND_HALF_UP)
    except (DecimalException, TypeError, ValueError) as exc:
        raise ValidationError(field, "Enter a valid number for the amount.") from exc
    if abs(quantized) * 100 > MAX_CENTS:
        # Rounding can carry a value just under the limit over it.
        raise ValidationError(field, "Amount is too large.")
    return quantized


def to_cents(value: AmountInput, *, field: str = "amount") -> int:
    """Return the integer minor-unit representation of ``value``."""

    return int(parse_amount(value, field=field) * 100)


def from_cents(cents: int) -> Decimal:
    """Return a two-place ``Decimal`` for an integer cent amount."""

    return (Decimal(int(cents)) / 100).quantize(CENT)


def format_currency(value: Decimal | int, *, absolute: bool = False) -> str:
    """Render an amount such as ``$ 1,234.50`` or ``-$ 12.00``."""

    amount = value if isinstance(value, Decimal) else Decimal(value)
    display_value = abs(amount) if absolute else amount
    prefix = "-" if display_value < 0 else ""
    return f"{prefix}$ {abs(display_value):,.2f}"


__all__ = ["CENT", "MAX_CENTS", "format_currency", "from_cents", "parse_amount", "to_cents"]
