"""
Job Service Implementation
"""
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional, Union

from loguru import logger

from domain.entities import Job
from domain.enums import JobStatus, UserRole, can_transition_job
from domain.value_objects import Actor, SkillSet
from core.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from application.repositories.interfaces import IUnitOfWork
from application.services.ai_match import IAIMatchService, RankedCandidate
from .interfaces import IJobService


class JobService(IJobService):
    """Job service implementation"""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        match_service: IAIMatchService,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.uow_factory = uow_factory
        self.match_service = match_service
        self.clock = clock

    async def create_job(
        self,
        actor: Actor,
        title: str,
        description: str,
        budget: int,
        skills: Iterable[str]
    ) -> Job:
        if not actor.is_business:
            raise AuthorizationException("Only businesses can post jobs")

        try:
            job = Job(
                id=None,
                title=(title or "").strip(),
                description=(description or "").strip(),
                budget=budget,
                business_id=actor.user_id,
                skills=SkillSet.of(skills),
                status=JobStatus.OPEN,
                created_at=self.clock(),
            )
        except (ValueError, TypeError) as e:
            raise ValidationException("job", str(e))

        async with self.uow_factory() as uow:
            created = await uow.jobs.create(job)

        logger.info(f"Business {actor.user_id} posted job {created.id}: {created.title!r}")
        return created

    async def get_job(self, job_id: int) -> Job:
        async with self.uow_factory() as uow:
            job = await uow.jobs.get_by_id(job_id)
        if job is None:
            raise ResourceNotFoundException("Job", job_id)
        return job

    async def list_jobs(self, status: Optional[Union[JobStatus, str]] = None) -> List[Job]:
        status = self._parse_status(status) if status is not None else None
        async with self.uow_factory() as uow:
            return await uow.jobs.list_jobs(status=status)

    async def list_active_jobs(self, actor: Actor) -> List[Job]:
        if not actor.is_business:
            raise AuthorizationException("Only businesses can view their jobs")
        async with self.uow_factory() as uow:
            return await uow.jobs.list_jobs(status=JobStatus.OPEN, business_id=actor.user_id)

    async def update_job_status(
        self,
        job_id: int,
        actor: Actor,
        status: Union[JobStatus, str]
    ) -> Job:
        requested = self._parse_status(status)

        async with self.uow_factory() as uow:
            job = await uow.jobs.get_by_id(job_id)
            if job is None:
                raise ResourceNotFoundException("Job", job_id)
            if not (actor.is_business and job.is_owned_by(actor.user_id)):
                raise AuthorizationException(f"{actor} does not own job {job_id}")
            if not can_transition_job(job.status, requested):
                raise ValidationException(
                    "status",
                    f"Cannot move job from '{job.status.value}' to '{requested.value}'"
                )
            updated = await uow.jobs.update(replace(job, status=requested))

        logger.info(f"Job {job_id}: {job.status.value} -> {requested.value}")
        return updated

    async def recommend_freelancers(
        self,
        job_id: int,
        actor: Actor,
        limit: Optional[int] = None
    ) -> List[RankedCandidate]:
        async with self.uow_factory() as uow:
            job = await uow.jobs.get_by_id(job_id)
            if job is None:
                raise ResourceNotFoundException("Job", job_id)
            if not (actor.is_admin or (actor.is_business and job.is_owned_by(actor.user_id))):
                raise AuthorizationException(f"{actor} cannot view recommendations for job {job_id}")
            freelancers = await uow.users.list_by_role(UserRole.FREELANCER)

        # Scoring runs outside the transaction; it is read-only and may be slow
        return await self.match_service.rank_candidates(job, freelancers, limit)

    @staticmethod
    def _parse_status(status: Union[JobStatus, str]) -> JobStatus:
        try:
            return JobStatus(status)
        except ValueError:
            raise ValidationException("status", f"Unknown job status: {status!r}")
