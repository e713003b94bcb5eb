"""
Job Repository Implementation
SQLAlchemy-based job repository
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from domain.entities import Job
from domain.enums import JobStatus
from domain.value_objects import SkillSet
from application.repositories.interfaces import IJobRepository
from infrastructure.persistence.models.job import JobModel
from core.exceptions import RepositoryException


class SQLAlchemyJobRepository(IJobRepository):
    """SQLAlchemy implementation of job repository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, job_id: int) -> Optional[Job]:
        """Get job by ID"""
        try:
            model = await self.session.get(JobModel, job_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to get job by ID {job_id}: {str(e)}")
            raise RepositoryException(f"Failed to get job: {str(e)}")
        return self._to_entity(model) if model else None

    async def list_jobs(
        self,
        status: Optional[JobStatus] = None,
        business_id: Optional[int] = None
    ) -> List[Job]:
        """List jobs with optional filters"""
        query = select(JobModel)
        if status is not None:
            query = query.where(JobModel.status == JobStatus(status).value)
        if business_id is not None:
            query = query.where(JobModel.business_id == business_id)

        try:
            result = await self.session.execute(query.order_by(JobModel.id))
            models = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list jobs (status={status}, business={business_id}): {str(e)}")
            raise RepositoryException(f"Failed to list jobs: {str(e)}")
        return [self._to_entity(m) for m in models]

    async def create(self, job: Job) -> Job:
        """Create new job"""
        try:
            model = JobModel(
                title=job.title,
                description=job.description,
                budget=job.budget,
                skills=job.skills.to_list(),
                business_id=job.business_id,
                status=job.status.value,
            )
            if job.created_at is not None:
                model.created_at = job.created_at
            self.session.add(model)
            await self.session.flush()
            await self.session.refresh(model)
        except SQLAlchemyError as e:
            logger.error(f"Failed to create job {job.title!r}: {str(e)}")
            raise RepositoryException(f"Failed to create job: {str(e)}")
        return self._to_entity(model)

    async def update(self, job: Job) -> Job:
        """Update existing job (owner and creation time are immutable)"""
        try:
            model = await self.session.get(JobModel, job.id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load job {job.id} for update: {str(e)}")
            raise RepositoryException(f"Failed to update job: {str(e)}")
        if not model:
            raise RepositoryException(f"Job not found: {job.id}")

        model.title = job.title
        model.description = job.description
        model.budget = job.budget
        model.skills = job.skills.to_list()
        model.status = job.status.value

        try:
            await self.session.flush()
            await self.session.refresh(model)
        except SQLAlchemyError as e:
            logger.error(f"Failed to update job {job.id}: {str(e)}")
            raise RepositoryException(f"Failed to update job: {str(e)}")
        return self._to_entity(model)

    def _to_entity(self, model: JobModel) -> Job:
        """Convert ORM model to Job entity"""
        return Job(
            id=model.id,
            title=model.title,
            description=model.description,
            budget=model.budget,
            business_id=model.business_id,
            skills=SkillSet.of(model.skills or []),
            status=JobStatus(model.status),
            created_at=model.created_at,
        )
