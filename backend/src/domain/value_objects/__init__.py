"""Value Objects - Immutable objects defined by their attributes"""

from .actor import Actor
from .skill_set import SkillSet
from .match_score import MatchScore
from .portfolio import Portfolio, PortfolioProject, Education, WorkExperience, Certification
from .proposal_status import (
    ProposalStatus,
    INITIAL_STATUSES,
    TERMINAL_STATUSES,
    WITHDRAWABLE_STATUSES,
    PROPOSAL_TRANSITIONS,
    allowed_transitions,
    is_terminal,
    is_withdrawable,
)
__all__ = [
    "Actor",
    "SkillSet",
    "MatchScore",
    "Portfolio",
    "PortfolioProject",
    "Education",
    "WorkExperience",
    "Certification",
    "ProposalStatus",
    "INITIAL_STATUSES",
    "TERMINAL_STATUSES",
    "WITHDRAWABLE_STATUSES",
    "PROPOSAL_TRANSITIONS",
    "allowed_transitions",
    "is_terminal",
    "is_withdrawable",
]
