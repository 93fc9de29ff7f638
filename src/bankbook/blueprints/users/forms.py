"""User registration and profile form helpers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ...models import Address, User
from ...models.address import ADDRESS_FIELDS

_PROFILE_FIELDS = ("username", "password", "name")


@dataclass(slots=True)
class UserForm:
    """Represents registration/profile input prior to validation."""

    username: str = ""
    password: str = ""
    name: str = ""
    address: dict[str, str] = field(default_factory=dict)
    errors: dict[str, list[str]] = field(default_factory=dict, init=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> UserForm:
        """Create a form populated from request data."""

        form = cls()
        form.load(data)
        return form

    @classmethod
    def from_user(cls, user: User, address: Address | None = None) -> UserForm:
        """Pre-fill a form from a stored user; the password is never echoed."""

        form = cls(username=user.username, name=user.name)
        if address is not None:
            form.address = {key: getattr(address, key) or "" for key in ADDRESS_FIELDS}
        return form

    def load(self, data: Mapping[str, Any]) -> None:
        """Bind incoming mapping data to the form state."""

        raw = {key: _as_str(data.get(key)) for key in _PROFILE_FIELDS}
        self.username = raw["username"].strip()
        self.password = raw["password"]
        self.name = raw["name"].strip()
        self.address = {
            key: _as_str(data.get(key)).strip() for key in ADDRESS_FIELDS if key in data
        }

    def validate(self, *, require_password: bool = True) -> bool:
        """Validate the bound data; registration requires a password."""

        self.errors.clear()

        if not self.username:
            self._add_error("username", "Username is required.")
        elif len(self.username) > 64:
            self._add_error("username", "Username must be 64 characters or fewer.")

        if require_password and not self.password:
            self._add_error("password", "Password is required.")

        if len(self.name) > 128:
            self._add_error("name", "Name must be 128 characters or fewer.")

        if len(self.address.get("zip_code", "")) > 20:
            self._add_error("zip_code", "Zip code must be 20 characters or fewer.")

        return not self.errors

    def _add_error(self, field: str, message: str) -> None:
        self.errors.setdefault(field, []).append(message)


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)
