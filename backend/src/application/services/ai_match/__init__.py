"""
AI Match Service Interface
Scores and ranks freelancers against a job with an oracle and a skill-overlap fallback
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from domain.entities import Job, User
from domain.enums import MatchSource
from domain.value_objects import MatchScore


@dataclass(frozen=True)
class MatchRequest:
    """Structured oracle input"""
    job_description: str
    job_skills: Tuple[str, ...]
    freelancer_bio: str
    freelancer_skills: Tuple[str, ...]

    @classmethod
    def for_pair(cls, job: Job, freelancer: User) -> "MatchRequest":
        return cls(
            job_description=job.description,
            job_skills=tuple(job.skills),
            freelancer_bio=freelancer.bio or "",
            freelancer_skills=tuple(freelancer.skills),
        )


@dataclass(frozen=True)
class MatchResult:
    """Score plus a human-readable explanation"""
    score: MatchScore
    explanation: str
    source: MatchSource = MatchSource.ORACLE


@dataclass(frozen=True)
class RankedCandidate:
    """One entry of a ranking"""
    freelancer: User
    score: int
    explanation: str
    source: MatchSource = MatchSource.ORACLE


class IMatchOracle(ABC):
    """External text-generation oracle that scores a job/freelancer pair"""

    @abstractmethod
    async def score(self, request: MatchRequest) -> MatchResult:
        """
        Ask the oracle for a score

        Raises:
            OracleException: transport failure, bad status or malformed reply
        """
        pass


class IAIMatchService(ABC):
    """AI match service interface"""

    @abstractmethod
    async def score_match(self, job: Job, freelancer: User) -> MatchResult:
        """
        Calculate match score between a job and a freelancer

        Never raises: oracle failures degrade to the skill-overlap score.
        """
        pass

    @abstractmethod
    async def rank_candidates(
        self,
        job: Job,
        freelancers: Sequence[User],
        limit: Optional[int] = None
    ) -> List[RankedCandidate]:
        """
        Score every candidate and return the best ones

        Returns:
            Candidates sorted by score descending (input order on ties),
            at most `limit` long; empty when limit <= 0
        """
        pass
