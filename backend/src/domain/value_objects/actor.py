"""
Actor Value Object
Identity of the user performing an operation, as supplied by the session layer
"""
from dataclasses import dataclass

from ..enums import UserRole


@dataclass(frozen=True)
class Actor:
    """Acting user (id + role)"""

    user_id: int
    role: UserRole

    def __post_init__(self):
        if isinstance(self.user_id, bool) or not isinstance(self.user_id, int):
            raise TypeError("Actor user_id must be an integer")
        object.__setattr__(self, "role", UserRole(self.role))

    @property
    def is_freelancer(self) -> bool:
        return self.role == UserRole.FREELANCER

    @property
    def is_business(self) -> bool:
        return self.role == UserRole.BUSINESS

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __str__(self) -> str:
        return f"{self.role.value}:{self.user_id}"
