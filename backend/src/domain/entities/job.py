"""
Job Domain Entity
Immutable job posting owned by a business
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..enums import JobStatus
from ..value_objects import SkillSet


@dataclass(frozen=True)
class Job:
    """Job posting domain entity - immutable"""

    id: Optional[int]
    title: str
    description: str
    budget: int
    business_id: int

    skills: SkillSet = field(default_factory=SkillSet)
    status: JobStatus = JobStatus.OPEN

    # Timestamps
    created_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate job data"""
        object.__setattr__(self, "status", JobStatus(self.status))
        object.__setattr__(self, "skills", SkillSet.of(self.skills))

        if not self.title or not self.title.strip():
            raise ValueError("Job title cannot be empty")
        if not self.description or not self.description.strip():
            raise ValueError("Job description cannot be empty")
        if isinstance(self.budget, bool) or not isinstance(self.budget, int):
            raise ValueError("Budget must be an integer")
        if self.budget <= 0:
            raise ValueError("Budget must be positive")

    def is_open(self) -> bool:
        return self.status == JobStatus.OPEN

    def is_owned_by(self, business_id: int) -> bool:
        return self.business_id == business_id

    def __str__(self) -> str:
        return f"Job({self.id}, {self.title!r}, status={self.status.value})"
