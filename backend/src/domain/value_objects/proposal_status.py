"""
Proposal Status
Closed status set and the role-gated transition table
"""
from enum import Enum
from typing import Dict, FrozenSet, Tuple, Union

from ..enums import UserRole


class ProposalStatus(str, Enum):
    """Proposal lifecycle status"""
    APPLIED = "applied"
    PENDING_FREELANCER = "pending_freelancer"
    UNDER_REVIEW = "under_review"
    WAITLIST = "waitlist"
    APPROVED = "approved"
    REJECTED = "rejected"

    @classmethod
    def parse(cls, value: Union[str, "ProposalStatus"]) -> "ProposalStatus":
        """Coerce a raw status string, raising ValueError on unknown values"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown proposal status: {value!r}")


INITIAL_STATUSES: FrozenSet[ProposalStatus] = frozenset({
    ProposalStatus.APPLIED,
    ProposalStatus.PENDING_FREELANCER,
})

TERMINAL_STATUSES: FrozenSet[ProposalStatus] = frozenset({
    ProposalStatus.APPROVED,
    ProposalStatus.REJECTED,
})

WITHDRAWABLE_STATUSES: FrozenSet[ProposalStatus] = frozenset({
    ProposalStatus.APPLIED,
    ProposalStatus.PENDING_FREELANCER,
    ProposalStatus.UNDER_REVIEW,
    ProposalStatus.WAITLIST,
})

_DECISIONS = frozenset({ProposalStatus.APPROVED, ProposalStatus.REJECTED})
_BUSINESS_FROM_INITIAL = frozenset({
    ProposalStatus.UNDER_REVIEW,
    ProposalStatus.WAITLIST,
    ProposalStatus.APPROVED,
    ProposalStatus.REJECTED,
})

# (current status, actor role) -> statuses that actor may set next.
# Missing keys mean no transition is legal.
PROPOSAL_TRANSITIONS: Dict[Tuple[ProposalStatus, UserRole], FrozenSet[ProposalStatus]] = {
    (ProposalStatus.APPLIED, UserRole.BUSINESS): _BUSINESS_FROM_INITIAL,
    (ProposalStatus.PENDING_FREELANCER, UserRole.BUSINESS): _BUSINESS_FROM_INITIAL,
    (ProposalStatus.APPLIED, UserRole.FREELANCER): _DECISIONS,
    (ProposalStatus.PENDING_FREELANCER, UserRole.FREELANCER): _DECISIONS,
    (ProposalStatus.UNDER_REVIEW, UserRole.BUSINESS): _DECISIONS,
    (ProposalStatus.WAITLIST, UserRole.BUSINESS): _DECISIONS,
}


def allowed_transitions(current: ProposalStatus, role: UserRole) -> FrozenSet[ProposalStatus]:
    """Statuses the given role may move a proposal to from its current status"""
    return PROPOSAL_TRANSITIONS.get((current, role), frozenset())


def is_terminal(status: ProposalStatus) -> bool:
    return status in TERMINAL_STATUSES


def is_withdrawable(status: ProposalStatus) -> bool:
    return status in WITHDRAWABLE_STATUSES
