"""Blueprint exports."""

from . import accounts, users

__all__ = ["accounts", "users"]
