"""Service module exports."""

from . import accounts, addresses, ledger, users

__all__ = ["accounts", "addresses", "ledger", "users"]
