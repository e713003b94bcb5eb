"""
Repository Interfaces (Abstract Base Classes)
Define contracts for data access without implementation details
"""
from abc import ABC, abstractmethod
from typing import Optional, List

from domain.entities import User, Job, Proposal
from domain.enums import JobStatus, UserRole


class IUserRepository(ABC):
    """User repository interface"""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def list_by_role(self, role: UserRole) -> List[User]:
        """List users with the given role, ordered by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create new user, returning it with its assigned ID"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass


class IJobRepository(ABC):
    """Job repository interface"""

    @abstractmethod
    async def get_by_id(self, job_id: int) -> Optional[Job]:
        """Get job by ID"""
        pass

    @abstractmethod
    async def list_jobs(
        self,
        status: Optional[JobStatus] = None,
        business_id: Optional[int] = None
    ) -> List[Job]:
        """List jobs, optionally filtered by status and/or owner, ordered by ID"""
        pass

    @abstractmethod
    async def create(self, job: Job) -> Job:
        """Create new job, returning it with its assigned ID"""
        pass

    @abstractmethod
    async def update(self, job: Job) -> Job:
        """Update existing job"""
        pass


class IProposalRepository(ABC):
    """Proposal repository interface"""

    @abstractmethod
    async def get_by_id(self, proposal_id: int) -> Optional[Proposal]:
        """Get proposal by ID"""
        pass

    @abstractmethod
    async def get_for_update(self, proposal_id: int) -> Optional[Proposal]:
        """
        Get proposal by ID and hold an exclusive row lock until the
        surrounding unit of work ends
        """
        pass

    @abstractmethod
    async def list_by_job(self, job_id: int) -> List[Proposal]:
        """List proposals for a job, ordered by ID"""
        pass

    @abstractmethod
    async def list_by_freelancer(self, freelancer_id: int) -> List[Proposal]:
        """List proposals naming a freelancer, ordered by ID"""
        pass

    @abstractmethod
    async def create(self, proposal: Proposal) -> Proposal:
        """Create new proposal, returning it with its assigned ID"""
        pass

    @abstractmethod
    async def update(self, proposal: Proposal) -> Proposal:
        """Update existing proposal"""
        pass

    @abstractmethod
    async def delete(self, proposal_id: int) -> bool:
        """Delete proposal, returning False if it did not exist"""
        pass


class IUnitOfWork(ABC):
    """
    Transaction boundary over the marketplace repositories

    Usage:
        async with uow_factory() as uow:
            job = await uow.jobs.get_by_id(job_id)
            ...
    Commits when the block exits cleanly, rolls back on any exception.
    """

    users: IUserRepository
    jobs: IJobRepository
    proposals: IProposalRepository

    @abstractmethod
    async def __aenter__(self) -> "IUnitOfWork":
        pass

    @abstractmethod
    async def __aexit__(self, exc_type, exc, tb) -> None:
        pass
