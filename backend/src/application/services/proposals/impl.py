"""
Proposal Lifecycle Service Implementation
Single authority for creating proposals and applying status transitions
"""
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, List, Optional, Union

from loguru import logger

from domain.entities import Job, Proposal
from domain.enums import UserRole
from domain.value_objects import (
    Actor,
    ProposalStatus,
    allowed_transitions,
    WITHDRAWABLE_STATUSES,
)
from core.exceptions import (
    AuthorizationException,
    IllegalTransitionException,
    ProposalFinalizedException,
    ResourceNotFoundException,
    ValidationException,
)
from application.repositories.interfaces import IUnitOfWork
from .interfaces import IProposalLifecycleService, ProposalView
from .locks import ProposalLockRegistry


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProposalLifecycleService(IProposalLifecycleService):
    """Proposal lifecycle service implementation"""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        locks: Optional[ProposalLockRegistry] = None,
        offer_cover_letter: str = "Job offer from business",
        clock: Callable[[], datetime] = utcnow,
    ):
        """
        Initialize proposal lifecycle service

        Args:
            uow_factory: Opens a new unit of work (one transaction) per call
            locks: Shared per-proposal lock registry; must be the same instance
                for every service handling the same proposals
            offer_cover_letter: Placeholder cover letter for business offers
            clock: Source of timestamps
        """
        self.uow_factory = uow_factory
        self.locks = locks or ProposalLockRegistry()
        self.offer_cover_letter = offer_cover_letter
        self.clock = clock

    async def create_application(
        self,
        job_id: int,
        freelancer_id: int,
        cover_letter: str,
        proposed_rate: int
    ) -> Proposal:
        """Freelancer applies to an open job"""
        if not cover_letter or not cover_letter.strip():
            raise ValidationException("cover_letter", "Cover letter cannot be empty")
        if isinstance(proposed_rate, bool) or not isinstance(proposed_rate, int) or proposed_rate <= 0:
            raise ValidationException("proposed_rate", "Proposed rate must be a positive integer")

        async with self.uow_factory() as uow:
            job = await self._get_job(uow, job_id)
            self._require_open(job)
            await self._require_freelancer(uow, freelancer_id)

            now = self.clock()
            proposal = await uow.proposals.create(Proposal(
                id=None,
                job_id=job.id,
                freelancer_id=freelancer_id,
                cover_letter=cover_letter.strip(),
                proposed_rate=proposed_rate,
                status=ProposalStatus.APPLIED,
                created_at=now,
                updated_at=now,
            ))

        logger.info(f"Freelancer {freelancer_id} applied to job {job_id}: proposal {proposal.id}")
        return proposal

    async def create_offer(
        self,
        job_id: int,
        freelancer_id: int,
        business_id: int
    ) -> Proposal:
        """Business sends a job request to a freelancer"""
        async with self.uow_factory() as uow:
            job = await self._get_job(uow, job_id)
            if not job.is_owned_by(business_id):
                logger.warning(f"Business {business_id} tried to send an offer for job {job_id} it does not own")
                raise AuthorizationException(f"Business {business_id} does not own job {job_id}")
            self._require_open(job)
            await self._require_freelancer(uow, freelancer_id)

            now = self.clock()
            proposal = await uow.proposals.create(Proposal(
                id=None,
                job_id=job.id,
                freelancer_id=freelancer_id,
                cover_letter=self.offer_cover_letter,
                proposed_rate=job.budget,
                status=ProposalStatus.PENDING_FREELANCER,
                created_at=now,
                updated_at=now,
            ))

        logger.info(f"Business {business_id} offered job {job_id} to freelancer {freelancer_id}: proposal {proposal.id}")
        return proposal

    async def update_proposal_status(
        self,
        proposal_id: int,
        requested_status: Union[ProposalStatus, str],
        acting_user: Actor
    ) -> Proposal:
        """Apply a role-gated status transition"""
        try:
            requested = ProposalStatus.parse(requested_status)
        except ValueError as e:
            raise ValidationException("status", str(e))

        # The in-process lock and the row lock both cover read, check and commit
        async with self.locks.hold(proposal_id):
            async with self.uow_factory() as uow:
                proposal = await uow.proposals.get_for_update(proposal_id)
                if proposal is None:
                    raise ResourceNotFoundException("Proposal", proposal_id)
                job = await self._get_job(uow, proposal.job_id)

                role = self._resolve_role(proposal, job, acting_user)

                if proposal.is_terminal():
                    logger.warning(
                        f"Rejected update of finalized proposal {proposal_id} "
                        f"({proposal.status.value}) by {acting_user}"
                    )
                    raise ProposalFinalizedException(proposal_id, proposal.status.value)

                if requested not in allowed_transitions(proposal.status, role):
                    logger.warning(
                        f"Illegal transition {proposal.status.value} -> {requested.value} "
                        f"on proposal {proposal_id} by {acting_user}"
                    )
                    raise IllegalTransitionException(proposal.status.value, requested.value, role.value)

                updated = await uow.proposals.update(
                    replace(proposal, status=requested, updated_at=self.clock())
                )

        logger.info(
            f"Proposal {proposal_id}: {proposal.status.value} -> {requested.value} by {acting_user}"
        )
        return updated

    async def withdraw(self, proposal_id: int, freelancer_id: int) -> None:
        """Freelancer withdraws a proposal that is not yet decided"""
        async with self.locks.hold(proposal_id):
            async with self.uow_factory() as uow:
                proposal = await uow.proposals.get_for_update(proposal_id)
                if proposal is None:
                    raise ResourceNotFoundException("Proposal", proposal_id)

                if proposal.freelancer_id != freelancer_id:
                    raise ValidationException(
                        "freelancer_id",
                        f"Proposal {proposal_id} does not belong to freelancer {freelancer_id}"
                    )
                if proposal.status not in WITHDRAWABLE_STATUSES:
                    raise ValidationException(
                        "status",
                        f"Cannot withdraw proposal in status '{proposal.status.value}'"
                    )

                await uow.proposals.delete(proposal_id)

        logger.info(f"Freelancer {freelancer_id} withdrew proposal {proposal_id}")

    async def get_proposal(self, proposal_id: int, actor: Actor) -> Proposal:
        """Get a proposal visible to the actor"""
        async with self.uow_factory() as uow:
            proposal = await uow.proposals.get_by_id(proposal_id)
            if proposal is None:
                raise ResourceNotFoundException("Proposal", proposal_id)
            if actor.is_admin:
                return proposal
            job = await self._get_job(uow, proposal.job_id)
            self._resolve_role(proposal, job, actor)
            return proposal

    async def list_proposals_for_job(self, job_id: int, actor: Actor) -> List[Proposal]:
        """List proposals for a job (job owner or admin)"""
        async with self.uow_factory() as uow:
            job = await self._get_job(uow, job_id)
            if not (actor.is_admin or (actor.is_business and job.is_owned_by(actor.user_id))):
                raise AuthorizationException(f"{actor} cannot view proposals for job {job_id}")
            return await uow.proposals.list_by_job(job_id)

    async def list_proposals_for_business(self, actor: Actor) -> List[ProposalView]:
        """List proposals on all of a business's jobs with freelancer names"""
        if not actor.is_business:
            raise AuthorizationException("Only businesses can view their proposals")

        views: List[ProposalView] = []
        async with self.uow_factory() as uow:
            jobs = await uow.jobs.list_jobs(business_id=actor.user_id)
            for job in jobs:
                for proposal in await uow.proposals.list_by_job(job.id):
                    freelancer = await uow.users.get_by_id(proposal.freelancer_id)
                    views.append(ProposalView(
                        proposal=proposal,
                        job_title=job.title,
                        job_description=job.description,
                        job_budget=job.budget,
                        freelancer_name=freelancer.display_name if freelancer else None,
                    ))

        logger.debug(f"Found {len(views)} proposals for business {actor.user_id}")
        return views

    async def list_job_requests(self, actor: Actor) -> List[ProposalView]:
        """List a freelancer's proposals and offers with job and business details"""
        if not actor.is_freelancer:
            raise AuthorizationException("Only freelancers can view their job requests")

        views: List[ProposalView] = []
        async with self.uow_factory() as uow:
            for proposal in await uow.proposals.list_by_freelancer(actor.user_id):
                job = await uow.jobs.get_by_id(proposal.job_id)
                business = await uow.users.get_by_id(job.business_id) if job else None
                views.append(ProposalView(
                    proposal=proposal,
                    job_title=job.title if job else None,
                    job_description=job.description if job else None,
                    job_budget=job.budget if job else None,
                    business_name=business.display_name if business else None,
                ))

        logger.debug(f"Found {len(views)} job requests for freelancer {actor.user_id}")
        return views

    @staticmethod
    async def _get_job(uow: IUnitOfWork, job_id: int) -> Job:
        job = await uow.jobs.get_by_id(job_id)
        if job is None:
            raise ResourceNotFoundException("Job", job_id)
        return job

    @staticmethod
    def _require_open(job: Job) -> None:
        if not job.is_open():
            raise ValidationException("job_id", f"Job {job.id} is not open ({job.status.value})")

    @staticmethod
    async def _require_freelancer(uow: IUnitOfWork, freelancer_id: int) -> None:
        user = await uow.users.get_by_id(freelancer_id)
        if user is None:
            raise ResourceNotFoundException("User", freelancer_id)
        if not user.is_freelancer():
            raise ValidationException("freelancer_id", f"User {freelancer_id} is not a freelancer")

    @staticmethod
    def _resolve_role(proposal: Proposal, job: Job, actor: Actor) -> UserRole:
        """Role the actor plays on this proposal, or AuthorizationException"""
        if actor.is_freelancer and actor.user_id == proposal.freelancer_id:
            return UserRole.FREELANCER
        if actor.is_business and job.is_owned_by(actor.user_id):
            return UserRole.BUSINESS
        logger.warning(f"{actor} is not a party to proposal {proposal.id}")
        raise AuthorizationException(f"{actor} is not a party to proposal {proposal.id}")
