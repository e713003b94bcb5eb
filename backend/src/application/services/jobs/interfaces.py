"""
Job Service Interface
Posting, browsing and closing jobs; freelancer recommendations per job
"""
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Union

from domain.entities import Job
from domain.enums import JobStatus
from domain.value_objects import Actor
from application.services.ai_match import RankedCandidate


class IJobService(ABC):
    """Job service interface"""

    @abstractmethod
    async def create_job(
        self,
        actor: Actor,
        title: str,
        description: str,
        budget: int,
        skills: Iterable[str]
    ) -> Job:
        """
        Post a new open job (business actors only)

        Raises:
            AuthorizationException: actor is not a business
            ValidationException: empty title/description, budget <= 0
        """
        pass

    @abstractmethod
    async def get_job(self, job_id: int) -> Job:
        """Get job by ID, ResourceNotFoundException if missing"""
        pass

    @abstractmethod
    async def list_jobs(self, status: Optional[Union[JobStatus, str]] = None) -> List[Job]:
        """List all jobs, optionally filtered by status"""
        pass

    @abstractmethod
    async def list_active_jobs(self, actor: Actor) -> List[Job]:
        """List the acting business's open jobs"""
        pass

    @abstractmethod
    async def update_job_status(
        self,
        job_id: int,
        actor: Actor,
        status: Union[JobStatus, str]
    ) -> Job:
        """
        Move a job through open -> in_progress -> completed, or close it

        Raises:
            AuthorizationException: actor does not own the job
            ValidationException: transition not allowed
        """
        pass

    @abstractmethod
    async def recommend_freelancers(
        self,
        job_id: int,
        actor: Actor,
        limit: Optional[int] = None
    ) -> List[RankedCandidate]:
        """Rank the freelancer pool for a job (job owner or admin)"""
        pass
