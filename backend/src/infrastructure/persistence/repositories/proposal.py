"""
Proposal Repository Implementation
SQLAlchemy-based proposal repository with row locking for status changes
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from domain.entities import Proposal
from domain.value_objects import ProposalStatus
from application.repositories.interfaces import IProposalRepository
from infrastructure.persistence.models.proposal import ProposalModel
from core.exceptions import RepositoryException


class SQLAlchemyProposalRepository(IProposalRepository):
    """SQLAlchemy implementation of proposal repository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, proposal_id: int) -> Optional[Proposal]:
        """Get proposal by ID"""
        try:
            model = await self.session.get(ProposalModel, proposal_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to get proposal by ID {proposal_id}: {str(e)}")
            raise RepositoryException(f"Failed to get proposal: {str(e)}")
        return self._to_entity(model) if model else None

    async def get_for_update(self, proposal_id: int) -> Optional[Proposal]:
        """Get proposal by ID with SELECT ... FOR UPDATE"""
        try:
            result = await self.session.execute(
                select(ProposalModel)
                .where(ProposalModel.id == proposal_id)
                .with_for_update()
                .execution_options(populate_existing=True)
            )
            model = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Failed to lock proposal {proposal_id}: {str(e)}")
            raise RepositoryException(f"Failed to lock proposal: {str(e)}")
        return self._to_entity(model) if model else None

    async def list_by_job(self, job_id: int) -> List[Proposal]:
        """List proposals for a job"""
        return await self._list(ProposalModel.job_id == job_id, f"job {job_id}")

    async def list_by_freelancer(self, freelancer_id: int) -> List[Proposal]:
        """List proposals naming a freelancer"""
        return await self._list(ProposalModel.freelancer_id == freelancer_id, f"freelancer {freelancer_id}")

    async def create(self, proposal: Proposal) -> Proposal:
        """Create new proposal"""
        try:
            model = ProposalModel(
                job_id=proposal.job_id,
                freelancer_id=proposal.freelancer_id,
                cover_letter=proposal.cover_letter,
                proposed_rate=proposal.proposed_rate,
                status=proposal.status.value,
            )
            if proposal.created_at is not None:
                model.created_at = proposal.created_at
            if proposal.updated_at is not None:
                model.updated_at = proposal.updated_at
            self.session.add(model)
            await self.session.flush()
            await self.session.refresh(model)
        except SQLAlchemyError as e:
            logger.error(f"Failed to create proposal for job {proposal.job_id}: {str(e)}")
            raise RepositoryException(f"Failed to create proposal: {str(e)}")
        return self._to_entity(model)

    async def update(self, proposal: Proposal) -> Proposal:
        """Update mutable proposal fields (status, cover letter, rate, updated_at)"""
        try:
            model = await self.session.get(ProposalModel, proposal.id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load proposal {proposal.id} for update: {str(e)}")
            raise RepositoryException(f"Failed to update proposal: {str(e)}")
        if not model:
            raise RepositoryException(f"Proposal not found: {proposal.id}")

        model.status = proposal.status.value
        model.cover_letter = proposal.cover_letter
        model.proposed_rate = proposal.proposed_rate
        if proposal.updated_at is not None:
            model.updated_at = proposal.updated_at

        try:
            await self.session.flush()
            await self.session.refresh(model)
        except SQLAlchemyError as e:
            logger.error(f"Failed to update proposal {proposal.id}: {str(e)}")
            raise RepositoryException(f"Failed to update proposal: {str(e)}")
        return self._to_entity(model)

    async def delete(self, proposal_id: int) -> bool:
        try:
            model = await self.session.get(ProposalModel, proposal_id)
            if model:
                await self.session.delete(model)
                await self.session.flush()
                return True
            return False
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete proposal {proposal_id}: {str(e)}")
            raise RepositoryException(f"Failed to delete proposal: {str(e)}")

    async def _list(self, condition, label: str) -> List[Proposal]:
        try:
            result = await self.session.execute(
                select(ProposalModel).where(condition).order_by(ProposalModel.id)
            )
            models = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list proposals for {label}: {str(e)}")
            raise RepositoryException(f"Failed to list proposals: {str(e)}")
        return [self._to_entity(m) for m in models]

    def _to_entity(self, model: ProposalModel) -> Proposal:
        """Convert ORM model to Proposal entity"""
        return Proposal(
            id=model.id,
            job_id=model.job_id,
            freelancer_id=model.freelancer_id,
            cover_letter=model.cover_letter,
            proposed_rate=model.proposed_rate,
            status=ProposalStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
