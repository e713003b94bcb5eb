"""
Proposal Lifecycle Service Interface
Creation, status transitions, withdrawal and role-scoped listings of proposals
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Union

from domain.entities import Proposal
from domain.value_objects import Actor, ProposalStatus


@dataclass(frozen=True)
class ProposalView:
    """Proposal enriched with the job and counterpart details a listing shows"""

    proposal: Proposal
    job_title: Optional[str] = None
    job_description: Optional[str] = None
    job_budget: Optional[int] = None
    freelancer_name: Optional[str] = None
    business_name: Optional[str] = None


class IProposalLifecycleService(ABC):
    """Proposal lifecycle service interface"""

    @abstractmethod
    async def create_application(
        self,
        job_id: int,
        freelancer_id: int,
        cover_letter: str,
        proposed_rate: int
    ) -> Proposal:
        """
        Freelancer applies to an open job

        Returns:
            New proposal in status 'applied'

        Raises:
            ResourceNotFoundException: job or freelancer missing
            ValidationException: job not open, user not a freelancer, bad rate
        """
        pass

    @abstractmethod
    async def create_offer(
        self,
        job_id: int,
        freelancer_id: int,
        business_id: int
    ) -> Proposal:
        """
        Business sends a job request to a freelancer

        Returns:
            New proposal in status 'pending_freelancer', rate = job budget

        Raises:
            ResourceNotFoundException: job or freelancer missing
            AuthorizationException: business does not own the job
            ValidationException: job not open, user not a freelancer
        """
        pass

    @abstractmethod
    async def update_proposal_status(
        self,
        proposal_id: int,
        requested_status: Union[ProposalStatus, str],
        acting_user: Actor
    ) -> Proposal:
        """
        Apply a role-gated status transition

        Raises:
            ResourceNotFoundException: proposal or its job missing
            AuthorizationException: actor is neither the freelancer nor the job owner
            ProposalFinalizedException: proposal already approved/rejected
            IllegalTransitionException: transition not legal for the actor's role
        """
        pass

    @abstractmethod
    async def withdraw(self, proposal_id: int, freelancer_id: int) -> None:
        """
        Freelancer withdraws (deletes) a proposal that is not yet decided

        Raises:
            ResourceNotFoundException: proposal missing
            ValidationException: not the proposal's freelancer, or status is final
        """
        pass

    @abstractmethod
    async def get_proposal(self, proposal_id: int, actor: Actor) -> Proposal:
        """Get a proposal visible to the actor"""
        pass

    @abstractmethod
    async def list_proposals_for_job(self, job_id: int, actor: Actor) -> List[Proposal]:
        """List proposals for a job (job owner or admin)"""
        pass

    @abstractmethod
    async def list_proposals_for_business(self, actor: Actor) -> List[ProposalView]:
        """List proposals on all of a business's jobs with freelancer names"""
        pass

    @abstractmethod
    async def list_job_requests(self, actor: Actor) -> List[ProposalView]:
        """List a freelancer's proposals and offers with job and business details"""
        pass
