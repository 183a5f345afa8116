"""The authenticated caller, as resolved by the authentication boundary."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from orderhub.domain.exceptions import InvalidArgumentError


class Role(Enum):
    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True)
class Principal:
    user_id: str
    role: Role = Role.USER

    def __post_init__(self) -> None:
        if not self.user_id or not self.user_id.strip():
            raise InvalidArgumentError("Principal user ID is required")

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @staticmethod
    def of(user_id: str, role: str | Role = Role.USER) -> Principal:
        if isinstance(role, str):
            try:
                role = Role(role.lower())
            except ValueError as exc:
                raise InvalidArgumentError(f"Unknown role: {role!r}") from exc
        return Principal(user_id=user_id, role=role)
