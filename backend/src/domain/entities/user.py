"""
User Domain Entity
Immutable marketplace account (freelancer, business or admin)
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..enums import UserRole
from ..value_objects import SkillSet, Portfolio


@dataclass(frozen=True)
class User:
    """User domain entity - immutable"""

    id: Optional[int]
    role: UserRole
    display_name: str

    # Profile
    bio: Optional[str] = None
    skills: SkillSet = field(default_factory=SkillSet)

    # Freelancer only
    hourly_rate: Optional[int] = None
    portfolio: Portfolio = field(default_factory=Portfolio)

    # Business only
    company: Optional[str] = None

    # Timestamps
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate user data"""
        object.__setattr__(self, "role", UserRole(self.role))
        object.__setattr__(self, "skills", SkillSet.of(self.skills))

        if not self.display_name or len(self.display_name.strip()) < 2:
            raise ValueError("Display name must be at least 2 characters")

        if self.hourly_rate is not None:
            if self.role != UserRole.FREELANCER:
                raise ValueError("Only freelancers can have an hourly rate")
            if isinstance(self.hourly_rate, bool) or not isinstance(self.hourly_rate, int) or self.hourly_rate <= 0:
                raise ValueError("Hourly rate must be a positive integer")

        if not self.portfolio.is_empty() and self.role != UserRole.FREELANCER:
            raise ValueError("Only freelancers can have a portfolio")

        if self.company is not None and self.role != UserRole.BUSINESS:
            raise ValueError("Only businesses can have a company")

    def is_freelancer(self) -> bool:
        return self.role == UserRole.FREELANCER

    def is_business(self) -> bool:
        return self.role == UserRole.BUSINESS

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __str__(self) -> str:
        return f"User({self.id}, {self.role.value}, {self.display_name})"
