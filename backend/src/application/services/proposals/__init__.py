"""
Proposal Lifecycle Package
"""
from .interfaces import IProposalLifecycleService, ProposalView
from .locks import ProposalLockRegistry
from .impl import ProposalLifecycleService

__all__ = [
    "IProposalLifecycleService",
    "ProposalView",
    "ProposalLockRegistry",
    "ProposalLifecycleService",
]
