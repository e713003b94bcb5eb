"""
Domain Enums
Business enumerations for the marketplace
"""
from enum import Enum
from typing import Dict, FrozenSet


class UserRole(str, Enum):
    """Marketplace account roles"""
    FREELANCER = "freelancer"
    BUSINESS = "business"
    ADMIN = "admin"


class JobStatus(str, Enum):
    """Job posting status"""
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CLOSED = "closed"


# Owner-driven job transitions; completed and closed are terminal
JOB_STATUS_TRANSITIONS: Dict[JobStatus, FrozenSet[JobStatus]] = {
    JobStatus.OPEN: frozenset({JobStatus.IN_PROGRESS, JobStatus.CLOSED}),
    JobStatus.IN_PROGRESS: frozenset({JobStatus.COMPLETED, JobStatus.CLOSED}),
    JobStatus.COMPLETED: frozenset(),
    JobStatus.CLOSED: frozenset(),
}


def can_transition_job(current: JobStatus, requested: JobStatus) -> bool:
    """Check whether a job owner may move a job from current to requested"""
    return requested in JOB_STATUS_TRANSITIONS.get(current, frozenset())


class MatchSource(str, Enum):
    """Where a match score came from"""
    ORACLE = "oracle"
    FALLBACK = "fallback"
