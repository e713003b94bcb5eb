"""
Proposal Domain Entity
A freelancer's candidacy for a job, or a business's offer to a freelancer
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..value_objects import ProposalStatus, is_terminal, is_withdrawable


@dataclass(frozen=True)
class Proposal:
    """Proposal domain entity - immutable"""

    id: Optional[int]
    job_id: int
    freelancer_id: int
    cover_letter: str
    proposed_rate: int
    status: ProposalStatus

    # Timestamps
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate proposal data"""
        object.__setattr__(self, "status", ProposalStatus.parse(self.status))

        if not self.cover_letter or not self.cover_letter.strip():
            raise ValueError("Cover letter cannot be empty")
        if isinstance(self.proposed_rate, bool) or not isinstance(self.proposed_rate, int):
            raise ValueError("Proposed rate must be an integer")
        if self.proposed_rate <= 0:
            raise ValueError("Proposed rate must be positive")

    def is_offer(self) -> bool:
        """Business-initiated job request still waiting on the freelancer"""
        return self.status == ProposalStatus.PENDING_FREELANCER

    def is_terminal(self) -> bool:
        return is_terminal(self.status)

    def is_withdrawable(self) -> bool:
        return is_withdrawable(self.status)

    def __str__(self) -> str:
        return f"Proposal({self.id}, job={self.job_id}, status={self.status.value})"
